"""
Condensing and ordering of grocery list items for display.

Items that share a name across recipes are shown as one
CondensedIngredient whose quantities sit side by side ("4 lbs + 2 lbs").
Nothing here is persisted; the view is rebuilt from the stored items on
every render.
"""

import logging
import re
from typing import Dict, List, Optional, Union

from .categories import aisle_index, category_display_name
from .data.models import CondensedIngredient, GroceryItem, UnitPreference
from .measurement import format_item_measurement

logger = logging.getLogger(__name__)

DisplayItem = Union[GroceryItem, CondensedIngredient]

SORT_BY_AISLE = "aisle"
SORT_BY_RECIPE = "recipe"
SORT_BY_ALL = "all"

ALL_ITEMS_SECTION = "All Items"
UNKNOWN_RECIPE = "Other Items"


def condensed_id(sort_name: str) -> str:
    """Stable id for a condensed group: "Yellow Onion" -> "condensed-yellow-onion"."""
    return "condensed-" + re.sub(r"\s+", "-", sort_name.strip().lower())


def condense(
    items: List[GroceryItem],
    preference: Union[str, UnitPreference] = UnitPreference.ORIGINAL,
) -> List[DisplayItem]:
    """
    Merge items with the same name (case-insensitive) into one entry.

    Args:
        items: Grocery items in display order
        preference: Unit preference used to format each constituent quantity

    Returns:
        Items in first-seen group order. Single items are returned
        unchanged; groups of two or more become a CondensedIngredient
        that keeps every original item and its formatted quantity.
    """
    groups: Dict[str, List[GroceryItem]] = {}
    for item in items:
        groups.setdefault(item.sort_name.lower(), []).append(item)

    condensed: List[DisplayItem] = []
    for group in groups.values():
        if len(group) == 1:
            condensed.append(group[0])
            continue

        first = group[0]
        condensed.append(CondensedIngredient(
            id=condensed_id(first.sort_name),
            sort_name=first.sort_name,
            category=first.category,
            checked=all(item.checked for item in group),
            original_items=list(group),
            quantities=[format_item_measurement(item, preference) for item in group],
        ))

    return condensed


def _name_key(item: GroceryItem) -> str:
    return item.sort_name.casefold()


def sort_grocery_items(items: List[GroceryItem], sort_by: str = SORT_BY_AISLE) -> List[GroceryItem]:
    """
    Order items for display: unchecked first, checked after.

    Unchecked items sort by aisle then name ("aisle") or by recipe then
    name ("recipe"). Checked items keep their stored order at the end.
    """
    unchecked = [item for item in items if not item.checked]
    checked = [item for item in items if item.checked]

    if sort_by == SORT_BY_RECIPE:
        unchecked.sort(key=lambda item: (item.recipe_id or "", _name_key(item)))
    else:
        unchecked.sort(key=lambda item: (aisle_index(item.category), _name_key(item)))

    return unchecked + checked


def group_for_display(
    items: List[GroceryItem],
    sort_by: str = SORT_BY_AISLE,
    preference: Union[str, UnitPreference] = UnitPreference.ORIGINAL,
    recipe_names: Optional[Dict[str, str]] = None,
) -> Dict[str, List[DisplayItem]]:
    """
    Build the sections of a grocery list view.

    Args:
        items: Stored grocery items
        sort_by: "aisle", "recipe" or "all"
        preference: Unit preference for condensed quantities
        recipe_names: recipe_id -> recipe title, for recipe section headings

    Returns:
        Ordered mapping of section title to items. Every section lists
        unchecked entries before checked ones. Only aisle sections
        condense duplicates.
    """
    ordered = sort_grocery_items(items, sort_by)

    if sort_by == SORT_BY_ALL:
        return {ALL_ITEMS_SECTION: ordered} if ordered else {}

    sections: Dict[str, List[GroceryItem]] = {}
    for item in ordered:
        if sort_by == SORT_BY_RECIPE:
            title = (recipe_names or {}).get(item.recipe_id or "", UNKNOWN_RECIPE)
        else:
            title = category_display_name(item.category)
        sections.setdefault(title, []).append(item)

    grouped: Dict[str, List[DisplayItem]] = {}
    for title, section_items in sections.items():
        unchecked = [item for item in section_items if not item.checked]
        checked = [item for item in section_items if item.checked]
        if sort_by == SORT_BY_RECIPE:
            grouped[title] = unchecked + checked
        else:
            grouped[title] = condense(unchecked, preference) + condense(checked, preference)

    return grouped
