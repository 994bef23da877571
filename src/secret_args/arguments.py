"""Templated arguments: one command-line token with embedded secrets."""

from __future__ import annotations

from dataclasses import dataclass, field

from .template_parser import FormatError, Segment, apply_template, count_placeholders, parse_template
from .types import Secrets


@dataclass(frozen=True)
class TemplatedArgument:
    """A single positional argument built from a template and its secrets.

    The template is checked against the secrets when the argument is created,
    so rendering never fails later. Secret values are left out of ``repr()``.
    """

    template: str
    secrets: Secrets = field(default=(), repr=False)
    _segments: tuple[Segment, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if isinstance(self.secrets, str):
            raise FormatError("Secrets must be a sequence of strings, not a single string")
        secrets = tuple(self.secrets)
        for secret in secrets:
            if not isinstance(secret, str):
                raise FormatError(f"Secret values must be strings, got {type(secret).__name__}")
        segments = tuple(parse_template(self.template))
        apply_template(segments, secrets)

        object.__setattr__(self, "secrets", secrets)
        object.__setattr__(self, "_segments", segments)

    @property
    def placeholder_count(self) -> int:
        """Return how many secrets the template consumes."""
        return count_placeholders(self._segments)

    def render_raw(self) -> str:
        """Render the argument with its real secret values."""
        return apply_template(self._segments, self.secrets)

    def render_masked(self, mask: str) -> str:
        """Render the argument with every secret replaced by ``mask``."""
        assert mask is not None
        return apply_template(self._segments, [mask] * len(self.secrets))
