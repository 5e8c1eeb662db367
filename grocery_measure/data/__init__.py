"""Data models and storage for grocery lists."""

from .models import (
    Category,
    CondensedIngredient,
    GroceryItem,
    MeasurementTriple,
    Quantity,
    UnitPreference,
)
from .store import GroceryStore, InMemoryGroceryStore, SQLiteGroceryStore

__all__ = [
    "Category",
    "CondensedIngredient",
    "GroceryItem",
    "MeasurementTriple",
    "Quantity",
    "UnitPreference",
    "GroceryStore",
    "InMemoryGroceryStore",
    "SQLiteGroceryStore",
]
