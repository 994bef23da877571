"""Type definitions for secret argument lists."""

from dataclasses import dataclass, field
from typing import Any

# Constants
DEFAULT_MASK = "****"
PLACEHOLDER = "%s"


# Utility functions
def contains_quote_trigger(value: str) -> bool:
    """Return whether a string holds whitespace or a double quote.

    These are the characters that force quoting in the display form, so a
    mask containing them would blur the word boundaries of a rendered command.
    """
    return any(char.isspace() or char == '"' for char in value)


# Type aliases
Argv = list[str]
Secrets = tuple[str, ...]
EnvMap = dict[str, str]
Errors = list[str]


@dataclass
class RuntimeContext:
    """Runtime context for resolving secret sources."""

    env: EnvMap
    home: str
    extra: dict[str, Any] = field(default_factory=dict)
