"""
Unit conversion between US customary and metric measurements.

Only the fixed factor tables below are used; there is no density-based
conversion between volume and weight. Metric and imperial renditions are
computed once when an ingredient is ingested and stored alongside the
original quantity.
"""

import logging
from typing import Dict, Optional, Tuple

from .data.models import Quantity

logger = logging.getLogger(__name__)


# Milliliters per unit
VOLUME_TO_ML = {
    "tsp": 4.92892,
    "tbsp": 14.7868,
    "fl oz": 29.5735,
    "cup": 236.588,
    "pint": 473.176,
    "quart": 946.353,
    "gallon": 3785.41,
    "ml": 1.0,
    "l": 1000.0,
}

# Grams per unit
WEIGHT_TO_G = {
    "oz": 28.3495,
    "lb": 453.592,
    "g": 1.0,
    "kg": 1000.0,
}

# Spellings seen in recipes -> canonical table key
UNIT_ALIASES = {
    "teaspoon": "tsp", "teaspoons": "tsp", "tsp": "tsp", "tsps": "tsp", "t": "tsp",
    "tablespoon": "tbsp", "tablespoons": "tbsp", "tbsp": "tbsp", "tbsps": "tbsp",
    "tbs": "tbsp", "tbl": "tbsp", "T": "tbsp",
    "fluid ounce": "fl oz", "fluid ounces": "fl oz", "fl oz": "fl oz", "fl. oz": "fl oz",
    "cup": "cup", "cups": "cup", "c": "cup",
    "pint": "pint", "pints": "pint", "pt": "pint",
    "quart": "quart", "quarts": "quart", "qt": "quart", "qts": "quart",
    "gallon": "gallon", "gallons": "gallon", "gal": "gallon",
    "milliliter": "ml", "milliliters": "ml", "millilitre": "ml", "ml": "ml",
    "liter": "l", "liters": "l", "litre": "l", "litres": "l", "l": "l",
    "ounce": "oz", "ounces": "oz", "oz": "oz",
    "pound": "lb", "pounds": "lb", "lb": "lb", "lbs": "lb",
    "gram": "g", "grams": "g", "g": "g", "gr": "g",
    "kilogram": "kg", "kilograms": "kg", "kg": "kg", "kgs": "kg",
}

# Largest to smallest, used to pick a readable common unit
VOLUME_HIERARCHY = ["gallon", "quart", "pint", "cup", "fl oz", "tbsp", "tsp"]
WEIGHT_HIERARCHY = ["lb", "oz"]
METRIC_UNITS = {"ml", "l", "g", "kg"}

VOLUME = "volume"
WEIGHT = "weight"


def normalize_unit(unit: Optional[str]) -> Optional[str]:
    """Return the canonical table key for a unit spelling, or None."""
    if not unit:
        return None
    stripped = unit.strip().rstrip(".")
    # "T" is tablespoon, "t" is teaspoon
    if stripped in UNIT_ALIASES:
        return UNIT_ALIASES[stripped]
    return UNIT_ALIASES.get(stripped.lower())


def unit_kind(unit: Optional[str]) -> Optional[str]:
    """Return "volume", "weight", or None for units outside the tables."""
    canonical = normalize_unit(unit)
    if canonical in VOLUME_TO_ML:
        return VOLUME
    if canonical in WEIGHT_TO_G:
        return WEIGHT
    return None


def can_convert_units(unit_a: Optional[str], unit_b: Optional[str]) -> bool:
    kind = unit_kind(unit_a)
    return kind is not None and kind == unit_kind(unit_b)


def _factor(canonical: str) -> float:
    return VOLUME_TO_ML.get(canonical) or WEIGHT_TO_G[canonical]


def convert_unit(value: float, from_unit: str, to_unit: str) -> Optional[float]:
    """
    Convert a value between two units of the same kind.

    Returns:
        Converted value, or None when the units cannot be converted
    """
    if not can_convert_units(from_unit, to_unit):
        return None
    source = normalize_unit(from_unit)
    target = normalize_unit(to_unit)
    return value * _factor(source) / _factor(target)


def best_common_unit(unit_a: str, unit_b: str) -> Optional[str]:
    """
    Pick the unit two convertible quantities should be summed in.

    The larger unit wins ("cup" + "tbsp" -> "cup"). Mixed metric and US
    units of the same kind settle on the metric base unit.
    """
    if not can_convert_units(unit_a, unit_b):
        return None
    a, b = normalize_unit(unit_a), normalize_unit(unit_b)
    if a == b:
        return a

    if a in METRIC_UNITS or b in METRIC_UNITS:
        return "ml" if unit_kind(a) == VOLUME else "g"

    hierarchy = VOLUME_HIERARCHY if unit_kind(a) == VOLUME else WEIGHT_HIERARCHY
    return a if hierarchy.index(a) < hierarchy.index(b) else b


def _round_metric(value: float, unit: str) -> float:
    if unit in ("l", "kg"):
        return round(value, 2)
    return round(value) if value >= 10 else round(value, 1)


def _metric_unit(base_amount: float, kind: str) -> Tuple[str, float]:
    if kind == VOLUME:
        return ("l", 1000.0) if base_amount >= 1000 else ("ml", 1.0)
    return ("kg", 1000.0) if base_amount >= 1000 else ("g", 1.0)


def _display_metric_unit(unit: str) -> str:
    return "L" if unit == "l" else unit


def _imperial_volume_unit(cups: float) -> Tuple[str, float]:
    """Return (unit, ml per unit) for a volume measured in cups."""
    if cups >= 4:
        return "qt", VOLUME_TO_ML["quart"]
    if cups >= 1:
        return "cup", VOLUME_TO_ML["cup"]
    if cups >= 0.0625:
        return "tbsp", VOLUME_TO_ML["tbsp"]
    return "tsp", VOLUME_TO_ML["tsp"]


def _imperial_weight_unit(ounces: float) -> Tuple[str, float]:
    if ounces >= 16:
        return "lb", WEIGHT_TO_G["lb"]
    return "oz", WEIGHT_TO_G["oz"]


def _pluralize(unit: str, value: float) -> str:
    if unit in ("cup", "lb") and value > 1:
        return unit + "s"
    return unit


def to_metric(quantity_min: float, quantity_max: float, unit: Optional[str]) -> Optional[Quantity]:
    """Metric rendition of a quantity, or None for units outside the tables."""
    kind = unit_kind(unit)
    if kind is None:
        return None

    factor = _factor(normalize_unit(unit))
    low, high = quantity_min * factor, quantity_max * factor
    target, per_unit = _metric_unit(high, kind)
    return Quantity(
        quantity_min=_round_metric(low / per_unit, target),
        quantity_max=_round_metric(high / per_unit, target),
        unit=_display_metric_unit(target),
    )


def to_imperial(quantity_min: float, quantity_max: float, unit: Optional[str]) -> Optional[Quantity]:
    """US customary rendition of a quantity, or None for units outside the tables."""
    kind = unit_kind(unit)
    if kind is None:
        return None

    factor = _factor(normalize_unit(unit))
    low, high = quantity_min * factor, quantity_max * factor
    if kind == VOLUME:
        target, per_unit = _imperial_volume_unit(high / VOLUME_TO_ML["cup"])
    else:
        target, per_unit = _imperial_weight_unit(high / WEIGHT_TO_G["oz"])

    converted_min = round(low / per_unit, 3)
    converted_max = round(high / per_unit, 3)
    return Quantity(
        quantity_min=converted_min,
        quantity_max=converted_max,
        unit=_pluralize(target, converted_max),
    )


def convert_measurement(
    quantity_min: Optional[float],
    quantity_max: Optional[float],
    unit: Optional[str],
) -> Dict[str, Optional[Quantity]]:
    """
    Compute the metric and imperial renditions of an original quantity.

    Args:
        quantity_min: Lower bound in the original unit
        quantity_max: Upper bound in the original unit
        unit: Original unit (any spelling in UNIT_ALIASES)

    Returns:
        {"metric": Quantity or None, "imperial": Quantity or None}.
        Both are None for unitless counts and units such as "cloves".
    """
    if quantity_min is None and quantity_max is None:
        return {"metric": None, "imperial": None}

    low = quantity_min if quantity_min is not None else quantity_max
    high = quantity_max if quantity_max is not None else quantity_min

    metric = to_metric(low, high, unit)
    imperial = to_imperial(low, high, unit)
    if metric is None:
        logger.debug(f"No conversion for unit '{unit}'")
    return {"metric": metric, "imperial": imperial}
