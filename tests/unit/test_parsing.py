"""
Unit tests for ingredient line parsing and legacy name repair.
"""

from grocery_measure.parsing import (
    ParsedLine,
    clean_ingredient_name,
    format_parsed_line,
    parse_embedded_quantity,
    parse_ingredient_line,
)


class TestParseIngredientLine:
    """Test splitting raw lines into quantity, unit and name."""

    def test_fraction_with_unit(self):
        parsed = parse_ingredient_line("1/2 cup diced onion")
        assert parsed.quantity == "1/2"
        assert parsed.unit == "cup"
        assert parsed.name == "diced onion"

    def test_range_with_unit(self):
        parsed = parse_ingredient_line("4-5 cloves garlic")
        assert parsed.quantity == "4-5"
        assert parsed.unit == "cloves"
        assert parsed.name == "garlic"

    def test_no_unit(self):
        """Test a count without a unit keeps the word as the name."""
        parsed = parse_ingredient_line("2 eggs")
        assert parsed.quantity == "2"
        assert parsed.unit is None
        assert parsed.name == "eggs"

    def test_no_quantity_defaults_to_one(self):
        parsed = parse_ingredient_line("salt to taste")
        assert parsed.name == "salt to taste"
        assert parsed.quantity == "1"
        assert parsed.unit is None

    def test_to_range_is_not_a_unit(self):
        parsed = parse_ingredient_line("1 to 2 cups flour")
        assert parsed.quantity == "1 to 2"
        assert parsed.unit == "cups"
        assert parsed.name == "flour"

    def test_unicode_fraction(self):
        parsed = parse_ingredient_line("1½ cups milk")
        assert parsed.quantity == "1 1/2"
        assert parsed.unit == "cups"
        assert parsed.name == "milk"

    def test_whitespace_is_trimmed(self):
        parsed = parse_ingredient_line("  pinch of salt  ")
        assert parsed.name == "pinch of salt"

    def test_to_dict_omits_missing_unit(self):
        assert parse_ingredient_line("salt to taste").to_dict() == {
            "name": "salt to taste",
            "quantity": "1",
        }


class TestFormatParsedLine:
    def test_round_trip_to_display(self):
        """Test the parsed line renders with a fraction glyph."""
        parsed = parse_ingredient_line("1/2 cup diced onion")
        assert format_parsed_line(parsed) == "½ cup diced onion"

    def test_range_display(self):
        assert format_parsed_line(ParsedLine(name="garlic", quantity="4-5", unit="cloves")) == \
            "4 to 5 cloves garlic"


class TestParseEmbeddedQuantity:
    """Test repairing legacy "Name - quantity" strings."""

    def test_range_with_unit(self):
        embedded = parse_embedded_quantity("chuck roast - 4-5 lbs")
        assert embedded.name == "Chuck Roast"
        assert (embedded.quantity_min, embedded.quantity_max) == (4.0, 5.0)
        assert embedded.unit == "lbs"

    def test_to_range(self):
        embedded = parse_embedded_quantity("Potatoes - 2 to 3 lbs")
        assert (embedded.quantity_min, embedded.quantity_max) == (2.0, 3.0)

    def test_fraction(self):
        embedded = parse_embedded_quantity("flour - 1/2 cup")
        assert embedded.quantity_min == 0.5
        assert embedded.unit == "cup"

    def test_single_without_unit(self):
        embedded = parse_embedded_quantity("EGGS - 3")
        assert embedded.name == "Eggs"
        assert embedded.quantity_min == 3.0
        assert embedded.unit is None

    def test_no_dash(self):
        embedded = parse_embedded_quantity("olive oil")
        assert embedded.name == "Olive Oil"
        assert not embedded.has_quantity

    def test_unreadable_quantity(self):
        embedded = parse_embedded_quantity("Basil - a handful")
        assert embedded.name == "Basil"
        assert not embedded.has_quantity

    def test_overflowing_range_is_unreadable(self):
        embedded = parse_embedded_quantity("Rice - " + "9" * 400 + "-5 lbs")
        assert embedded.name == "Rice"
        assert not embedded.has_quantity


class TestCleanIngredientName:
    def test_strips_notes_and_preparation(self):
        assert clean_ingredient_name("yellow onion (about 1 lb), diced") == "Yellow Onion"

    def test_trailing_dash(self):
        assert clean_ingredient_name("garlic -") == "Garlic"
