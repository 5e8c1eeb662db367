"""
Measurement formatting.

Picks the original, metric or imperial quantity for the user's unit
preference and renders it as display text ("½ cup", "4 to 5 cloves").
"""

import logging
from typing import Optional, Tuple, Union

from .data.models import GroceryItem, UnitPreference
from .numbers import format_number

logger = logging.getLogger(__name__)

Number = Optional[float]


def resolve_unit_preference(value: Optional[Union[str, UnitPreference]]) -> UnitPreference:
    """Unrecognized or missing preferences display the original quantity."""
    return UnitPreference.resolve(value)


def select_measurement(
    original_min: Number, original_max: Number, original_unit: Optional[str],
    metric_min: Number, metric_max: Number, metric_unit: Optional[str],
    imperial_min: Number, imperial_max: Number, imperial_unit: Optional[str],
    preference: Union[str, UnitPreference] = UnitPreference.ORIGINAL,
) -> Tuple[Number, Number, Optional[str]]:
    """
    Choose the (min, max, unit) triple to show for a preference.

    Falls back to the original triple when the preferred one is empty
    and original data exists.
    """
    preference = resolve_unit_preference(preference)

    if preference == UnitPreference.METRIC:
        selected = (metric_min, metric_max, metric_unit)
    elif preference == UnitPreference.IMPERIAL:
        selected = (imperial_min, imperial_max, imperial_unit)
    else:
        selected = (original_min, original_max, original_unit)

    if not selected[0] and not selected[1] and original_min:
        return original_min, original_max, original_unit
    return selected


def format_measurement(
    original_min: Number, original_max: Number, original_unit: Optional[str],
    metric_min: Number, metric_max: Number, metric_unit: Optional[str],
    imperial_min: Number, imperial_max: Number, imperial_unit: Optional[str],
    preference: Union[str, UnitPreference] = UnitPreference.ORIGINAL,
) -> str:
    """
    Render a stored measurement for display.

    Args:
        original_min/original_max/original_unit: Quantity as written in the recipe
        metric_min/metric_max/metric_unit: Metric rendition (may be empty)
        imperial_min/imperial_max/imperial_unit: US customary rendition (may be empty)
        preference: "original", "metric" or "imperial"

    Returns:
        "2 cups", "4 to 5 cloves", "½" or "" when there is nothing to show.
        Ranges always read low to high. A range whose bounds are not both
        positive, or that render identically, shows only the larger value.
    """
    quantity_min, quantity_max, unit = select_measurement(
        original_min, original_max, original_unit,
        metric_min, metric_max, metric_unit,
        imperial_min, imperial_max, imperial_unit,
        preference,
    )

    if not quantity_min and not quantity_max:
        return ""

    unit_text = unit or ""

    if quantity_min == quantity_max:
        return f"{format_number(quantity_min)} {unit_text}".strip()

    low = quantity_min or 0
    high = quantity_max or 0

    if low > 0 and high > 0 and low != high:
        if low > high:
            low, high = high, low
        low_text, high_text = format_number(low), format_number(high)
        if low_text != high_text:
            return f"{low_text} to {high_text} {unit_text}".strip()

    larger = max(low, high)
    logger.debug(f"Degenerate range {quantity_min}..{quantity_max}, showing {larger}")
    return f"{format_number(larger)} {unit_text}".strip()


def format_item_measurement(
    item: GroceryItem,
    preference: Union[str, UnitPreference] = UnitPreference.ORIGINAL,
) -> str:
    """Format a GroceryItem's stored measurement."""
    columns = item.measurement.to_columns()
    return format_measurement(
        columns["original_quantity_min"], columns["original_quantity_max"], columns["original_unit"],
        columns["metric_quantity_min"], columns["metric_quantity_max"], columns["metric_unit"],
        columns["imperial_quantity_min"], columns["imperial_quantity_max"], columns["imperial_unit"],
        preference,
    )


def format_item_line(
    item: GroceryItem,
    preference: Union[str, UnitPreference] = UnitPreference.ORIGINAL,
) -> str:
    """Full display line for an item, e.g. "2 cups Flour"."""
    return f"{format_item_measurement(item, preference)} {item.sort_name}".strip()
