"""Tests for the template parser module."""

import pytest

from secret_args.template_parser import (
    FormatError,
    SegmentType,
    TemplateLexer,
    apply_template,
    count_placeholders,
    parse_template,
)


class TestTemplateLexer:
    """Tests for the template lexer."""

    def test_tokenize_literal_only(self):
        """Test that a template without placeholders is a single literal."""
        segments = TemplateLexer("openssl").tokenize()

        assert len(segments) == 1
        assert segments[0].type == SegmentType.LITERAL
        assert segments[0].value == "openssl"

    def test_tokenize_empty(self):
        """Test that an empty template has no segments."""
        assert TemplateLexer("").tokenize() == []

    def test_tokenize_mixed(self):
        """Test tokenizing literals around placeholders."""
        segments = TemplateLexer("pass:%s:%S!").tokenize()

        assert [s.type for s in segments] == [
            SegmentType.LITERAL,
            SegmentType.PLACEHOLDER,
            SegmentType.LITERAL,
            SegmentType.PLACEHOLDER,
            SegmentType.LITERAL,
        ]
        assert segments[0].value == "pass:"
        assert segments[1].value == "%s"
        assert segments[1].position == 5
        assert segments[3].upper is True

    def test_tokenize_escapes(self):
        """Test that %% and %n are literal text."""
        segments = TemplateLexer("100%%%nnext").tokenize()

        assert len(segments) == 1
        assert segments[0].value == "100%\nnext"

    def test_tokenize_modifiers(self):
        """Test reading index, justification, width and precision."""
        segments = TemplateLexer("%2$-8.3s").tokenize()

        assert len(segments) == 1
        segment = segments[0]
        assert segment.index == 2
        assert segment.left_justify is True
        assert segment.width == 8
        assert segment.precision == 3

    def test_width_is_not_an_index(self):
        """Test that digits without '$' are a width."""
        segment = TemplateLexer("%12s").tokenize()[0]

        assert segment.index is None
        assert segment.width == 12


class TestTemplateErrors:
    """Tests for malformed templates."""

    @pytest.mark.parametrize("template", ["%d", "%x", "%f", "%b", "id=%5d"])
    def test_non_string_conversion(self, template):
        """Test that numeric and other conversions cannot take secrets."""
        with pytest.raises(FormatError, match="cannot format a string value"):
            parse_template(template)

    @pytest.mark.parametrize("template", ["%q", "%#s"])
    def test_unknown_conversion(self, template):
        """Test that unknown conversions are rejected."""
        with pytest.raises(FormatError, match="Unknown conversion"):
            parse_template(template)

    def test_dangling_percent(self):
        """Test that a trailing '%' is rejected."""
        with pytest.raises(FormatError, match="Incomplete placeholder") as exc_info:
            parse_template("50%")
        assert exc_info.value.position == 2

    def test_justify_without_width(self):
        """Test that '-' needs a width."""
        with pytest.raises(FormatError, match="needs a width"):
            parse_template("%-s")

    def test_zero_padding(self):
        """Test that zero padding is rejected for strings."""
        with pytest.raises(FormatError, match="Zero padding"):
            parse_template("%05s")

    def test_zero_index(self):
        """Test that argument indexes start at 1."""
        with pytest.raises(FormatError, match="1 or greater"):
            parse_template("%0$s")

    def test_missing_precision(self):
        """Test that '.' must be followed by digits."""
        with pytest.raises(FormatError, match="Missing precision"):
            parse_template("%.s")

    def test_format_error_is_value_error(self):
        """Test that FormatError can be caught as ValueError."""
        with pytest.raises(ValueError):
            parse_template("%d")


class TestApplyTemplate:
    """Tests for applying values to templates."""

    def test_apply_in_order(self):
        """Test that placeholders consume values left to right."""
        assert apply_template("%s:%s", ["john", "secret"]) == "john:secret"

    def test_apply_without_placeholders(self):
        """Test that a literal template ignores values."""
        assert apply_template("openssl", []) == "openssl"
        assert apply_template("openssl", ["unused"]) == "openssl"

    def test_excess_values_ignored(self):
        """Test that surplus values are silently ignored."""
        assert apply_template("%s:%s", ["alpha", "bravo", "charlie"]) == "alpha:bravo"

    def test_missing_value(self):
        """Test that a placeholder without a value fails."""
        with pytest.raises(FormatError, match="Missing value for placeholder '%s'"):
            apply_template("%s", [])
        with pytest.raises(FormatError, match="at position 2"):
            apply_template("%s%s", [""])

    def test_indexed_placeholders(self):
        """Test explicit indexes do not advance the ordinary sequence."""
        assert apply_template("%2$s-%1$s", ["a", "b"]) == "b-a"
        assert apply_template("%s %1$s %s", ["a", "b"]) == "a a b"

    def test_relative_placeholder(self):
        """Test that %<s repeats the value of the previous placeholder."""
        assert apply_template("%s-%<s", ["a"]) == "a-a"
        assert apply_template("%2$s %<S %s", ["a", "b"]) == "b B a"

    def test_relative_placeholder_without_previous(self):
        """Test that %<s needs an earlier placeholder."""
        with pytest.raises(FormatError, match="no previous value"):
            apply_template("%<s", ["a"])

    def test_relative_placeholder_with_index(self):
        """Test that %<s cannot be combined with an index."""
        with pytest.raises(FormatError, match="both an index"):
            parse_template("%1$<s")

    def test_indexed_placeholder_out_of_range(self):
        """Test that an index beyond the values fails."""
        with pytest.raises(FormatError):
            apply_template("%3$s", ["a", "b"])

    def test_width_and_precision(self):
        """Test padding and truncation."""
        assert apply_template("[%5s]", ["ab"]) == "[   ab]"
        assert apply_template("[%-5s]", ["ab"]) == "[ab   ]"
        assert apply_template("[%.2s]", ["abcdef"]) == "[ab]"
        assert apply_template("[%4.2s]", ["abcdef"]) == "[  ab]"

    def test_upper_case(self):
        """Test that %S upper-cases the value."""
        assert apply_template("%S", ["token"]) == "TOKEN"

    def test_escapes(self):
        """Test that escapes do not consume values."""
        assert apply_template("%s%%", ["50"]) == "50%"
        assert apply_template("%%s", []) == "%s"

    def test_apply_parsed_segments(self):
        """Test applying pre-parsed segments."""
        segments = parse_template("user=%s")
        assert apply_template(segments, ["john"]) == "user=john"
        assert apply_template(segments, ["jane"]) == "user=jane"


def test_count_placeholders():
    """Test counting the values a template needs."""
    assert count_placeholders("openssl") == 0
    assert count_placeholders("%s:%s") == 2
    assert count_placeholders("%%s") == 0
    assert count_placeholders("%3$s") == 3
    assert count_placeholders("%s %1$s") == 1
    assert count_placeholders("%s-%<s") == 1
