"""Secret argument lists - command lines that run with secrets and display without them."""

__version__ = "0.1.0"

from .arguments import TemplatedArgument
from .command import Builder, InvalidMaskError, SecretArgumentList, quote_if_needed
from .template_parser import FormatError
from .types import DEFAULT_MASK

__all__ = [
    "TemplatedArgument",
    "SecretArgumentList",
    "Builder",
    "FormatError",
    "InvalidMaskError",
    "quote_if_needed",
    "DEFAULT_MASK",
]
