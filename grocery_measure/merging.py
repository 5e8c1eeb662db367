"""
Merging two saved grocery lists into one.

Unlike display condensation, merging produces new stored items whose
quantities are summed. Ranges add bound by bound, so a single value
counts as the range [x, x] ("10-15" + "5" = "15-20"). Quantities in
different but convertible units are summed in a common unit; quantities
whose units cannot be converted stay as separate entries.
"""

import logging
from dataclasses import replace
from typing import Dict, List, Optional, Tuple

from .conversions import best_common_unit, can_convert_units, convert_unit
from .data.models import GroceryItem, Quantity
from .ingest import build_measurement

logger = logging.getLogger(__name__)


def _bounds(quantity: Quantity) -> Tuple[float, float]:
    low = quantity.quantity_min if quantity.quantity_min is not None else quantity.quantity_max
    high = quantity.quantity_max if quantity.quantity_max is not None else quantity.quantity_min
    return low or 0.0, high or 0.0


def _same_unit(unit_a: Optional[str], unit_b: Optional[str]) -> bool:
    return (unit_a or "").strip().lower() == (unit_b or "").strip().lower()


def combine_quantities(first: Quantity, second: Quantity) -> Optional[Quantity]:
    """
    Sum two quantities.

    Returns:
        The summed Quantity, or None when the units are incompatible
    """
    first_min, first_max = _bounds(first)
    second_min, second_max = _bounds(second)

    if _same_unit(first.unit, second.unit):
        unit = first.unit or None
    elif can_convert_units(first.unit, second.unit):
        unit = best_common_unit(first.unit, second.unit)
        first_min, first_max = (convert_unit(v, first.unit, unit) for v in (first_min, first_max))
        second_min, second_max = (convert_unit(v, second.unit, unit) for v in (second_min, second_max))
    else:
        return None

    return Quantity(
        quantity_min=round(first_min + second_min, 3),
        quantity_max=round(first_max + second_max, 3),
        unit=unit,
    )


def _merge_pair(existing: GroceryItem, incoming: GroceryItem) -> Optional[GroceryItem]:
    combined = combine_quantities(existing.measurement.original, incoming.measurement.original)
    if combined is None:
        return None

    return replace(
        existing,
        checked=existing.checked and incoming.checked,
        recipe_id=existing.recipe_id if existing.recipe_id == incoming.recipe_id else None,
        measurement=build_measurement(combined.quantity_min, combined.quantity_max, combined.unit),
    )


def merge_items(list_a: List[GroceryItem], list_b: List[GroceryItem]) -> List[GroceryItem]:
    """
    Merge two grocery lists, summing matching items.

    Args:
        list_a: Items of the first list
        list_b: Items of the second list

    Returns:
        New list sorted by name. Items match on sort_name (case-insensitive);
        same-named items with unconvertible units are kept apart.
    """
    entries: Dict[str, List[GroceryItem]] = {}

    for item in list(list_a) + list(list_b):
        candidates = entries.setdefault(item.sort_name.lower(), [])
        for index, existing in enumerate(candidates):
            merged = _merge_pair(existing, item)
            if merged is not None:
                candidates[index] = merged
                break
        else:
            if candidates:
                logger.debug(
                    f"Keeping '{item.sort_name}' separate: unit '{item.measurement.original.unit}' "
                    "does not convert"
                )
            candidates.append(item)

    merged_items = [item for candidates in entries.values() for item in candidates]
    merged_items.sort(key=lambda item: item.sort_name.casefold())
    logger.info(f"Merged {len(list_a)} + {len(list_b)} items into {len(merged_items)}")
    return merged_items
