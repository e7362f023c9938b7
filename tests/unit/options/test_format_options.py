#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/options/test_format_options.py
"""Unit tests for dapper.options.base."""

import dataclasses

import pytest

from dapper.options import FormatOptions
from dapper.exceptions import InvalidOptionsError, ValidationError
from dapper.formatters import MarkdownFormatter, YamlFormatter
from dapper.options.base import parse_bullet_style, parse_prose_wrap, resolve_format_options


@pytest.mark.unit
class TestFormatOptionsDefaults:
    """Tests for the default option values."""

    def test_defaults(self):
        """Test the documented defaults."""
        options = FormatOptions()
        assert options.print_width == 80
        assert options.tab_width == 2
        assert options.prose_wrap == "preserve"
        assert options.ul_style == "dash"
        assert options.bullet == "-"

    def test_frozen(self):
        """Test that options cannot be mutated."""
        options = FormatOptions()
        with pytest.raises(dataclasses.FrozenInstanceError):
            options.print_width = 100  # type: ignore[misc]

    def test_value_equality_and_hash(self):
        """Test that equal options compare and hash equal."""
        assert FormatOptions(print_width=100) == FormatOptions(print_width=100)
        assert hash(FormatOptions(tab_width=4)) == hash(FormatOptions(tab_width=4))

    def test_field_names(self):
        """Test the ordered field list."""
        assert FormatOptions.field_names() == ["print_width", "tab_width", "prose_wrap", "ul_style"]


@pytest.mark.unit
class TestFormatOptionsValidation:
    """Tests for option validation."""

    @pytest.mark.parametrize("width", [0, -5, True, "80", 1.5])
    def test_invalid_print_width(self, width):
        """Test that non-positive or non-integer widths are rejected."""
        with pytest.raises(ValueError, match="print_width"):
            FormatOptions(print_width=width)

    @pytest.mark.parametrize("width", [0, -1, False])
    def test_invalid_tab_width(self, width):
        """Test that invalid tab widths are rejected."""
        with pytest.raises(ValueError, match="tab_width"):
            FormatOptions(tab_width=width)

    def test_invalid_prose_wrap(self):
        """Test that unknown wrap modes are rejected."""
        with pytest.raises(ValueError, match="prose_wrap"):
            FormatOptions(prose_wrap="sometimes")  # type: ignore[arg-type]

    def test_invalid_ul_style(self):
        """Test that unknown bullet styles are rejected."""
        with pytest.raises(ValueError, match="ul_style"):
            FormatOptions(ul_style="circle")  # type: ignore[arg-type]


@pytest.mark.unit
class TestCreateUpdated:
    """Tests for cloning with updated fields."""

    def test_returns_new_instance(self):
        """Test that the original instance is untouched."""
        original = FormatOptions()
        updated = original.create_updated(prose_wrap="always", ul_style="plus")
        assert original.prose_wrap == "preserve"
        assert updated.prose_wrap == "always"
        assert updated.bullet == "+"

    def test_validates_updated_values(self):
        """Test that updated values go through validation."""
        with pytest.raises(ValueError):
            FormatOptions().create_updated(print_width=0)


@pytest.mark.unit
class TestOptionValueParsing:
    """Tests for the loose value coercion helpers."""

    @pytest.mark.parametrize(
        "value,expected",
        [("dash", "dash"), ("-", "dash"), ("Star", "asterisk"), ("*", "asterisk"), (" plus ", "plus"), ("+", "plus")],
    )
    def test_parse_bullet_style(self, value, expected):
        """Test bullet style names and glyphs."""
        assert parse_bullet_style(value) == expected

    def test_parse_bullet_style_invalid(self):
        """Test that unknown bullet styles raise ValueError."""
        with pytest.raises(ValueError):
            parse_bullet_style("circle")

    @pytest.mark.parametrize("value,expected", [("ALWAYS", "always"), ("never", "never"), (" Preserve", "preserve")])
    def test_parse_prose_wrap(self, value, expected):
        """Test case-insensitive wrap modes."""
        assert parse_prose_wrap(value) == expected

    def test_parse_prose_wrap_invalid(self):
        """Test that unknown wrap modes raise ValueError."""
        with pytest.raises(ValueError):
            parse_prose_wrap("auto")


@pytest.mark.unit
class TestResolveFormatOptions:
    """Tests for the options check done by formatters."""

    def test_none_gives_defaults(self):
        """Test that None means default options."""
        assert resolve_format_options(None, "MarkdownFormatter") == FormatOptions()

    def test_instance_returned(self):
        """Test that a FormatOptions instance is used as is."""
        options = FormatOptions(tab_width=4)
        assert resolve_format_options(options, "YamlFormatter") is options

    def test_wrong_type(self):
        """Test that other objects are rejected with details."""
        with pytest.raises(InvalidOptionsError) as exc_info:
            resolve_format_options({"tab_width": 4}, "YamlFormatter")

        error = exc_info.value
        assert isinstance(error, ValidationError)
        assert error.formatter_name == "YamlFormatter"
        assert error.expected_type is FormatOptions
        assert error.received_type is dict
        assert error.parameter_name == "options"
        assert "expected options of type 'FormatOptions' but received 'dict'" in str(error)

    @pytest.mark.parametrize("formatter_class", [MarkdownFormatter, YamlFormatter])
    def test_formatters_check_options(self, formatter_class):
        """Test that both formatters validate their options argument."""
        with pytest.raises(InvalidOptionsError):
            formatter_class("always")
