"""
Turning raw recipe ingredient lines into grocery items.

Each line is parsed, its quantity bounded, its name cleaned for grouping
and classified, and its metric/imperial renditions computed once here so
rendering never converts.
"""

import logging
import uuid
from typing import List, Optional

from .categories import categorize
from .conversions import convert_measurement
from .data.models import GroceryItem, MeasurementTriple, Quantity
from .numbers import parse_quantity_range
from .parsing import clean_ingredient_name, parse_embedded_quantity, parse_ingredient_line

logger = logging.getLogger(__name__)


def build_measurement(
    quantity_min: Optional[float],
    quantity_max: Optional[float],
    unit: Optional[str],
) -> MeasurementTriple:
    """Original quantity plus its converted renditions."""
    converted = convert_measurement(quantity_min, quantity_max, unit)
    return MeasurementTriple(
        original=Quantity(quantity_min=quantity_min, quantity_max=quantity_max, unit=unit),
        metric=converted["metric"],
        imperial=converted["imperial"],
    )


def build_grocery_item(raw: str, recipe_id: Optional[str] = None, item_id: Optional[str] = None) -> GroceryItem:
    """
    Build a GroceryItem from one raw ingredient line.

    Args:
        raw: e.g. "2 cups all-purpose flour, sifted"
        recipe_id: Owning recipe
        item_id: Explicit id, otherwise a new uuid

    Returns:
        Unchecked GroceryItem with category and measurement filled in
    """
    parsed = parse_ingredient_line(raw)
    quantity_min, quantity_max = parse_quantity_range(parsed.quantity)
    unit = parsed.unit

    # Older extractors wrote "Chuck Roast - 4-5 lbs" as the name
    embedded = parse_embedded_quantity(parsed.name)
    name = embedded.name
    if embedded.has_quantity:
        quantity_min, quantity_max = embedded.quantity_min, embedded.quantity_max
        unit = embedded.unit or unit

    sort_name = clean_ingredient_name(name)

    item = GroceryItem(
        id=item_id or str(uuid.uuid4()),
        sort_name=sort_name,
        category=categorize(sort_name),
        checked=False,
        recipe_id=recipe_id,
        measurement=build_measurement(quantity_min, quantity_max, unit),
        name=(raw or "").strip(),
    )
    logger.debug(f"Ingested '{raw}' as {sort_name} ({item.category.value})")
    return item


def items_from_recipe(recipe_id: str, lines: List[str]) -> List[GroceryItem]:
    """Build grocery items for every non-blank line of a recipe."""
    return [build_grocery_item(line, recipe_id) for line in lines if line and line.strip()]
