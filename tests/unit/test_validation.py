"""
Unit tests for quantity edit validation.
"""

import pytest
from pydantic import ValidationError

from grocery_measure.validation import QuantityValidation, validate_quantity


class TestValidRanges:
    """Test accepted quantity text."""

    def test_hyphen_range(self):
        result = validate_quantity("4-5")
        assert result.is_valid
        assert result.min == 4
        assert result.max == 5

    def test_to_range(self):
        result = validate_quantity("4 to 5")
        assert result.is_valid
        assert (result.min, result.max) == (4, 5)

    def test_to_range_any_case(self):
        result = validate_quantity("4 TO 5")
        assert result.is_valid

    def test_single_value(self):
        result = validate_quantity(" 3 ")
        assert result.is_valid
        assert result.min == result.max == 3

    def test_fractions_accepted(self):
        """Test fractions and mixed numbers are read as values."""
        assert validate_quantity("1/2").min == 0.5
        assert validate_quantity("1 1/2").max == 1.5
        assert validate_quantity("1/2-1").is_valid


class TestInvalidQuantities:
    """Test rejected quantity text and its messages."""

    def test_empty(self):
        result = validate_quantity("   ")
        assert not result.is_valid
        assert result.error == "Quantity is required"

    def test_none(self):
        assert validate_quantity(None).error == "Quantity is required"

    def test_reversed_range(self):
        result = validate_quantity("5-4")
        assert not result.is_valid
        assert result.error.startswith("First number must be less than second")
        assert result.min is None

    def test_equal_range(self):
        result = validate_quantity("4 to 4")
        assert result.error == 'First number must be less than second (e.g., "4 to 5")'

    def test_negative_number(self):
        assert not validate_quantity("-1").is_valid

    def test_zero(self):
        result = validate_quantity("0")
        assert result.error == "Quantity must be a positive number"

    def test_zero_in_range(self):
        result = validate_quantity("0-2")
        assert result.error == "Quantities must be positive numbers"

    def test_not_a_number(self):
        result = validate_quantity("abc")
        assert not result.is_valid
        assert result.error == 'Enter a number (e.g., "4") or range (e.g., "4-5" or "4 to 5")'

    def test_overflowing_number_rejected(self):
        """Test a digit string too long for a float is not a valid quantity."""
        result = validate_quantity("9" * 400)
        assert not result.is_valid
        assert result.error == 'Enter a number (e.g., "4") or range (e.g., "4-5" or "4 to 5")'

    def test_too_many_parts(self):
        result = validate_quantity("1-2-3")
        assert result.error == 'Range format should be "4-5"'

    def test_non_numeric_range(self):
        result = validate_quantity("a-b")
        assert result.error == 'Range values must be numbers (e.g., "4-5")'

    def test_non_numeric_to_range(self):
        result = validate_quantity("a to b")
        assert result.error == 'Range values must be numbers (e.g., "4 to 5")'


class TestQuantityValidationModel:
    """Test the result model's own consistency checks."""

    def test_valid_requires_bounds(self):
        with pytest.raises(ValidationError):
            QuantityValidation(is_valid=True)

    def test_invalid_requires_message(self):
        with pytest.raises(ValidationError):
            QuantityValidation(is_valid=False)
