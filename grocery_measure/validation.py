"""
Validation of user-edited quantity text.

Runs on the edit path before anything is written back. Failures are
returned as a QuantityValidation with a message meant for the user;
nothing here raises.
"""

import logging
from typing import Optional

from pydantic import BaseModel, model_validator

from .numbers import parse_number

logger = logging.getLogger(__name__)


QUANTITY_REQUIRED = "Quantity is required"
POSITIVE_RANGE = "Quantities must be positive numbers"
POSITIVE_SINGLE = "Quantity must be a positive number"
NOT_A_NUMBER = 'Enter a number (e.g., "4") or range (e.g., "4-5" or "4 to 5")'


class QuantityValidation(BaseModel):
    """
    Outcome of validating quantity text.

    Valid results carry min/max bounds (equal for a single value);
    invalid results carry an error message and no bounds.
    """
    is_valid: bool
    error: str = ""
    min: Optional[float] = None
    max: Optional[float] = None

    @model_validator(mode='after')
    def validate_bounds(self) -> 'QuantityValidation':
        """Valid results need bounds, invalid ones need a message."""
        if self.is_valid:
            if self.min is None or self.max is None:
                raise ValueError("valid quantity requires min and max")
        elif not self.error:
            raise ValueError("invalid quantity requires an error message")
        return self

    @classmethod
    def ok(cls, quantity_min: float, quantity_max: float) -> 'QuantityValidation':
        return cls(is_valid=True, min=quantity_min, max=quantity_max)

    @classmethod
    def fail(cls, error: str) -> 'QuantityValidation':
        return cls(is_valid=False, error=error)


def _validate_range(parts, example: str) -> QuantityValidation:
    if len(parts) != 2:
        return QuantityValidation.fail(f'Range format should be "{example}"')

    low, high = parse_number(parts[0]), parse_number(parts[1])
    if low is None or high is None:
        return QuantityValidation.fail(f'Range values must be numbers (e.g., "{example}")')

    if low <= 0 or high <= 0:
        return QuantityValidation.fail(POSITIVE_RANGE)

    if low >= high:
        return QuantityValidation.fail(f'First number must be less than second (e.g., "{example}")')

    return QuantityValidation.ok(low, high)


def validate_quantity(text: Optional[str]) -> QuantityValidation:
    """
    Validate quantity text typed by the user.

    Accepts a single positive number ("4", "1/2", "1 1/2"), a hyphen
    range ("4-5") or a "to" range ("4 to 5"). Ranges must be strictly
    increasing.

    Args:
        text: Raw text from the edit field

    Returns:
        QuantityValidation with bounds, or with the first error found
    """
    trimmed = (text or "").strip()
    if not trimmed:
        return QuantityValidation.fail(QUANTITY_REQUIRED)

    if "-" in trimmed:
        result = _validate_range([p.strip() for p in trimmed.split("-")], "4-5")
    elif " to " in trimmed.lower():
        result = _validate_range([p.strip() for p in trimmed.lower().split(" to ")], "4 to 5")
    else:
        value = parse_number(trimmed)
        if value is None:
            result = QuantityValidation.fail(NOT_A_NUMBER)
        elif value <= 0:
            result = QuantityValidation.fail(POSITIVE_SINGLE)
        else:
            result = QuantityValidation.ok(value, value)

    if not result.is_valid:
        logger.debug(f"Rejected quantity '{text}': {result.error}")
    return result
