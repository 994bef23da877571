"""Secret argument lists for building and displaying commands.

A :class:`SecretArgumentList` keeps the real secret values needed to run a
command next to the rules for displaying it safely::

    cmd = SecretArgumentList.builder() \\
        .add("passwd") \\
        .add("%s", "P@ssw0rd") \\
        .build()

    subprocess.run(cmd.to_raw_arguments())       # runs ["passwd", "P@ssw0rd"]
    logger.info("invoking", command=str(cmd))    # logs "passwd ****"

Instances are immutable. :meth:`SecretArgumentList.mask` and
:meth:`SecretArgumentList.alt` return new instances that share the same
argument tuple.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import List, Optional

from .arguments import TemplatedArgument
from .types import DEFAULT_MASK, PLACEHOLDER, Argv, contains_quote_trigger


class InvalidMaskError(ValueError):
    """Exception raised when a mask text cannot be used."""
    pass


def quote_if_needed(s: str) -> str:
    """Wrap a string in double quotes if it holds whitespace or a double quote.

    Double quotes inside the string are escaped with a backslash. The result
    is meant for reading, not for feeding back to a shell.
    """
    if not contains_quote_trigger(s):
        return s
    return '"' + s.replace('"', '\\"') + '"'


@dataclass(frozen=True)
class SecretArgumentList:
    """An immutable command line whose arguments may contain secrets."""

    arguments: tuple[TemplatedArgument, ...] = ()
    mask_text: str = DEFAULT_MASK
    alternate_text: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "arguments", tuple(self.arguments))
        if self.mask_text is None or contains_quote_trigger(self.mask_text):
            raise InvalidMaskError(
                f"Mask text must be a string without whitespace or double quotes, got {self.mask_text!r}"
            )

    @staticmethod
    def builder() -> Builder:
        """Return a new builder."""
        return Builder()

    def alt(self, text: Optional[str]) -> SecretArgumentList:
        """Return a copy whose display string is replaced by ``text``.

        ``None`` removes the replacement::

            cmd.alt("changing password").to_display_string()  # "changing password"
            cmd.alt(None).to_display_string()                 # "passwd ****"
        """
        return replace(self, alternate_text=text)

    def mask(self, text: str) -> SecretArgumentList:
        """Return a copy that displays secrets as ``text``.

        Raises:
            InvalidMaskError: If ``text`` is None or holds whitespace or a double quote
        """
        return replace(self, mask_text=text)

    def to_raw_arguments(self) -> Argv:
        """Return the arguments with their real secret values.

        Each call returns a new list, one entry per argv slot. Joining the
        entries with spaces does not give a usable command string since nothing
        is quoted; use :meth:`to_raw_display_string` for that.
        """
        return [argument.render_raw() for argument in self.arguments]

    def to_masked_arguments(self) -> Argv:
        """Return the arguments with secrets masked, unquoted.

        The alternate text is not consulted here.
        """
        return [argument.render_masked(self.mask_text) for argument in self.arguments]

    def to_raw_display_string(self) -> str:
        """Return the command with real secret values, quoted for reading.

        For example ``execute --username "john smith" command.sh``. The quoting
        is for display only and there is no matching parser.
        """
        return ' '.join(quote_if_needed(arg) for arg in self.to_raw_arguments())

    def to_display_string(self) -> str:
        """Return the command with every secret masked."""
        if self.alternate_text is not None:
            return self.alternate_text
        return ' '.join(
            quote_if_needed(argument.render_masked(self.mask_text)) for argument in self.arguments
        )

    def __str__(self) -> str:
        return self.to_display_string()

    def __repr__(self) -> str:
        return f"SecretArgumentList({self.to_display_string()!r})"

    def __len__(self) -> int:
        return len(self.arguments)


class Builder:
    """Builder collecting templated arguments for a SecretArgumentList."""

    def __init__(self):
        self._arguments: List[TemplatedArgument] = []

    def add(self, template: str, *secrets: str) -> Builder:
        """Append an argument.

        Secrets go where the template has a ``%s`` placeholder; write ``%%``
        for a literal percent sign::

            builder.add("openssl").add("-pass").add("pass:%s", "P@ssw0rd")

        Raises:
            FormatError: If the template does not fit the secrets
        """
        self._arguments.append(TemplatedArgument(template, secrets))
        return self

    def add_secret(self, value: str) -> Builder:
        """Shorthand for ``add("%s", value)``."""
        return self.add(PLACEHOLDER, value)

    def add_literal(self, text: str) -> Builder:
        """Append an argument taken as-is, with no placeholders."""
        return self.add(text.replace('%', '%%'))

    def build(self) -> SecretArgumentList:
        """Create a SecretArgumentList from the arguments added so far."""
        return SecretArgumentList(tuple(self._arguments))
