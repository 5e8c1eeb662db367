"""
Ingredient quantity parsing, unit formatting and grocery list condensing.

Public API is re-exported here for convenience.
"""

from .categories import categorize, category_display_name, category_image
from .condenser import condense, group_for_display, sort_grocery_items
from .data.models import (
    Category,
    CondensedIngredient,
    GroceryItem,
    MeasurementTriple,
    Quantity,
    UnitPreference,
)
from .ingest import build_grocery_item, items_from_recipe
from .measurement import format_item_line, format_measurement, resolve_unit_preference
from .merging import merge_items
from .numbers import format_number, parse_number, parse_quantity_range
from .parsing import parse_embedded_quantity, parse_ingredient_line
from .service import GroceryListService
from .validation import QuantityValidation, validate_quantity

__version__ = "0.1.0"

__all__ = [
    "Category",
    "CondensedIngredient",
    "GroceryItem",
    "GroceryListService",
    "MeasurementTriple",
    "Quantity",
    "QuantityValidation",
    "UnitPreference",
    "build_grocery_item",
    "categorize",
    "category_display_name",
    "category_image",
    "condense",
    "format_item_line",
    "format_measurement",
    "format_number",
    "group_for_display",
    "items_from_recipe",
    "merge_items",
    "parse_embedded_quantity",
    "parse_ingredient_line",
    "parse_number",
    "parse_quantity_range",
    "resolve_unit_preference",
    "sort_grocery_items",
    "validate_quantity",
]
