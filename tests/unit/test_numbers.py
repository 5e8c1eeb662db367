"""
Unit tests for quantity number formatting and parsing.
"""

import pytest

from grocery_measure.numbers import (
    format_number,
    parse_number,
    parse_quantity_range,
    replace_unicode_fractions,
)


class TestFormatNumber:
    """Test fraction-aware number rendering."""

    @pytest.mark.parametrize("value,expected", [
        (0.125, "⅛"),
        (0.25, "¼"),
        (0.375, "⅜"),
        (0.5, "½"),
        (0.625, "⅝"),
        (0.75, "¾"),
        (0.875, "⅞"),
    ])
    def test_eighths_have_no_leading_zero(self, value, expected):
        """Test each eighth maps to its glyph alone."""
        assert format_number(value) == expected

    def test_whole_number_with_half(self):
        """Test mixed numbers keep the whole part."""
        assert format_number(2.5) == "2½"
        assert format_number(1.25) == "1¼"

    def test_integers_print_plain(self):
        """Test integers render without decimals."""
        assert format_number(3) == "3"
        assert format_number(3.0) == "3"
        assert format_number(2.0004) == "2"

    def test_none_is_empty(self):
        """Test a missing value renders as empty string."""
        assert format_number(None) == ""

    def test_thirds(self):
        """Test thirds use their own glyphs."""
        assert format_number(1 / 3) == "⅓"
        assert format_number(2 / 3) == "⅔"
        assert format_number(1.333) == "1⅓"
        assert format_number(2.667) == "2⅔"

    def test_snaps_to_nearest_eighth(self):
        """Test near-eighths round to the eighth glyph."""
        assert format_number(0.49) == "½"
        assert format_number(3.13) == "3⅛"

    def test_decimal_fallback(self):
        """Test values far from any eighth print as trimmed decimals."""
        assert format_number(1.05) == "1.05"
        assert format_number(0.02) == "0.02"

    def test_thousandths_round_half_up(self):
        """Test a value halfway between thousandths rounds up, not to even."""
        assert format_number(0.3125) == "⅜"
        assert format_number(0.0625) == "⅛"

    def test_non_finite_is_empty(self):
        """Test infinity and NaN render as empty string instead of raising."""
        assert format_number(float("inf")) == ""
        assert format_number(float("-inf")) == ""
        assert format_number(float("nan")) == ""


class TestParseNumber:
    """Test parsing single quantity expressions."""

    def test_plain_numbers(self):
        assert parse_number("2") == 2.0
        assert parse_number("0.5") == 0.5
        assert parse_number(".5") == 0.5

    def test_fraction(self):
        """Test a slash token is divided."""
        assert parse_number("1/2") == 0.5
        assert parse_number("3 / 4") == 0.75

    def test_mixed_number(self):
        """Test whole plus fraction are summed."""
        assert parse_number("1 1/2") == 1.5

    def test_unicode_glyphs(self):
        assert parse_number("½") == 0.5
        assert parse_number("1½") == 1.5

    def test_malformed_returns_none(self):
        """Test unparseable text never raises."""
        assert parse_number("abc") is None
        assert parse_number("") is None
        assert parse_number(None) is None
        assert parse_number("1/0") is None
        assert parse_number("4abc") is None

    def test_overflowing_digits_return_none(self):
        """Test digit strings too long for a float are rejected."""
        huge = "9" * 400
        assert parse_number(huge) is None
        assert parse_number(f"{huge}/2") is None
        assert parse_number(f"1/{huge}") is None
        assert parse_number(f"{huge} 1/2") is None


class TestParseQuantityRange:
    """Test turning quantity text into bounds."""

    def test_single_value(self):
        assert parse_quantity_range("2") == (2.0, 2.0)

    def test_hyphen_range(self):
        assert parse_quantity_range("4-5") == (4.0, 5.0)

    def test_to_range(self):
        assert parse_quantity_range("1 to 2") == (1.0, 2.0)
        assert parse_quantity_range("1 TO 2") == (1.0, 2.0)

    def test_range_with_fractions(self):
        assert parse_quantity_range("1/2-1") == (0.5, 1.0)
        assert parse_quantity_range("1 1/2 - 2") == (1.5, 2.0)

    def test_reversed_range_is_ordered(self):
        assert parse_quantity_range("5-4") == (4.0, 5.0)

    def test_fallback_to_default(self):
        """Test unreadable text degrades to the default quantity."""
        assert parse_quantity_range("a few") == (1.0, 1.0)
        assert parse_quantity_range("") == (1.0, 1.0)
        assert parse_quantity_range(None, default=2.0) == (2.0, 2.0)


class TestReplaceUnicodeFractions:
    def test_attached_whole_number(self):
        assert replace_unicode_fractions("1½ cups") == "1 1/2 cups"

    def test_bare_glyph(self):
        assert replace_unicode_fractions("¾ cup") == "3/4 cup"
