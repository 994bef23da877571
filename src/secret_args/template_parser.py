"""Template parser for templated command-line arguments.

A template is an argument string with embedded placeholders that are filled,
left to right, by secret values. The placeholder syntax is the familiar
printf one, restricted to what makes sense for string values:

- ``%s`` and ``%S`` (upper-cased) consume the next value
- ``%2$s`` references the second value without advancing the sequence
- ``%<s`` reuses the value of the previous placeholder
- ``%-8s``, ``%8s`` and ``%.3s`` pad and truncate the value
- ``%%`` is a literal percent sign and ``%n`` a newline

Applying a template never fails because of surplus values; they are ignored.
A placeholder without a value, or a conversion that cannot format a string
(``%d``, ``%f``, ...), raises :class:`FormatError`.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, Union


class SegmentType(Enum):
    """Segment types for parsed templates."""
    LITERAL = "LITERAL"
    PLACEHOLDER = "PLACEHOLDER"


@dataclass(frozen=True)
class Segment:
    """A piece of a parsed template.

    For literals ``value`` is the text to emit. For placeholders it is the
    placeholder as written in the template, kept for error messages.
    """
    type: SegmentType
    value: str
    position: int
    index: Optional[int] = None
    relative: bool = False
    left_justify: bool = False
    width: Optional[int] = None
    precision: Optional[int] = None
    upper: bool = False

    def render(self, value: str) -> str:
        """Render a value through this placeholder."""
        if self.type is SegmentType.LITERAL:
            return self.value
        if self.precision is not None:
            value = value[:self.precision]
        if self.upper:
            value = value.upper()
        if self.width is not None:
            value = value.ljust(self.width) if self.left_justify else value.rjust(self.width)
        return value


class FormatError(ValueError):
    """Exception raised when a template cannot be applied to its values."""

    def __init__(self, message: str, position: Optional[int] = None):
        super().__init__(message)
        self.position = position


class TemplateLexer:
    """Lexer splitting a template into literal and placeholder segments."""

    # Conversions a printf-style formatter knows but that cannot take a string
    NON_STRING_CONVERSIONS = frozenset("bBhHcCdoxXeEfgGaAtT")

    def __init__(self, template: str):
        self.template = template
        self.position = 0
        self.segments: List[Segment] = []

    def tokenize(self) -> List[Segment]:
        """Tokenize the template into a list of segments."""
        self.segments = []
        self.position = 0
        literal = ''
        literal_start = 0

        while self.position < len(self.template):
            char = self.template[self.position]
            if char != '%':
                if not literal:
                    literal_start = self.position
                literal += char
                self.position += 1
                continue

            start = self.position
            text = self._read_escape()
            if text is not None:
                if not literal:
                    literal_start = start
                literal += text
                continue

            if literal:
                self.segments.append(Segment(SegmentType.LITERAL, literal, literal_start))
                literal = ''
            self._read_placeholder()

        if literal:
            self.segments.append(Segment(SegmentType.LITERAL, literal, literal_start))
        return self.segments

    def _current(self) -> str:
        """Return the character at the current position, or '' at the end."""
        return self.template[self.position] if self.position < len(self.template) else ''

    def _read_digits(self) -> Optional[int]:
        """Read a run of decimal digits."""
        start = self.position
        while self._current().isdigit():
            self.position += 1
        if start == self.position:
            return None
        return int(self.template[start:self.position])

    def _read_escape(self) -> Optional[str]:
        """Read ``%%`` or ``%n`` and return the text they stand for."""
        following = self.template[self.position + 1:self.position + 2]
        if following == '%':
            self.position += 2
            return '%'
        if following == 'n':
            self.position += 2
            return '\n'
        return None

    def _read_index(self, start: int) -> Optional[int]:
        """Read an explicit ``n$`` argument index, if present."""
        mark = self.position
        index = self._read_digits()
        if index is None or self._current() != '$':
            self.position = mark
            return None
        self.position += 1  # Skip '$'
        if index < 1:
            raise FormatError(f"Argument index must be 1 or greater at position {start}", start)
        return index

    def _read_placeholder(self):
        """Read a placeholder starting at the current '%'."""
        start = self.position
        self.position += 1  # Skip '%'

        index = self._read_index(start)

        relative = False
        if self._current() == '<':
            if index is not None:
                raise FormatError(f"Placeholder at position {start} cannot have both an index and '<'", start)
            relative = True
            self.position += 1

        left_justify = False
        if self._current() == '-':
            left_justify = True
            self.position += 1

        if self._current() == '0':
            raise FormatError(f"Zero padding cannot be applied to a string at position {start}", start)
        width = self._read_digits()

        precision = None
        if self._current() == '.':
            self.position += 1
            precision = self._read_digits()
            if precision is None:
                raise FormatError(f"Missing precision after '.' at position {start}", start)

        conversion = self._current()
        if not conversion:
            raise FormatError(f"Incomplete placeholder at position {start}", start)
        self.position += 1
        written = self.template[start:self.position]

        if conversion in self.NON_STRING_CONVERSIONS:
            raise FormatError(
                f"Placeholder '{written}' at position {start} cannot format a string value", start
            )
        if conversion not in ('s', 'S'):
            raise FormatError(f"Unknown conversion '{written}' at position {start}", start)
        if left_justify and width is None:
            raise FormatError(f"Placeholder '{written}' at position {start} needs a width to justify", start)

        self.segments.append(Segment(
            type=SegmentType.PLACEHOLDER,
            value=written,
            position=start,
            index=index,
            relative=relative,
            left_justify=left_justify,
            width=width,
            precision=precision,
            upper=conversion == 'S',
        ))


def parse_template(template: str) -> List[Segment]:
    """Parse a template string into segments."""
    return TemplateLexer(template).tokenize()


def count_placeholders(template: Union[str, Sequence[Segment]]) -> int:
    """Return how many values a template needs to be applied."""
    segments = parse_template(template) if isinstance(template, str) else template
    ordinary = 0
    highest = 0
    for segment in segments:
        if segment.type is not SegmentType.PLACEHOLDER or segment.relative:
            continue
        if segment.index is None:
            ordinary += 1
        else:
            highest = max(highest, segment.index)
    return max(ordinary, highest)


def apply_template(template: Union[str, Sequence[Segment]], values: Sequence[str]) -> str:
    """Apply values to a template.

    Ordinary placeholders consume values in order; indexed placeholders pick
    a value by position and ``%<s`` repeats the previous one. Values left
    over at the end are ignored.
    """
    segments = parse_template(template) if isinstance(template, str) else template
    parts = []
    ordinary = 0
    previous = None

    for segment in segments:
        if segment.type is SegmentType.LITERAL:
            parts.append(segment.value)
            continue

        if segment.relative:
            if previous is None:
                raise FormatError(
                    f"Placeholder '{segment.value}' at position {segment.position} has no previous value to reuse",
                    segment.position,
                )
            slot = previous
        elif segment.index is not None:
            slot = segment.index - 1
        else:
            slot = ordinary
            ordinary += 1

        if slot >= len(values):
            raise FormatError(
                f"Missing value for placeholder '{segment.value}' at position {segment.position}",
                segment.position,
            )
        previous = slot
        parts.append(segment.render(values[slot]))

    return ''.join(parts)
