"""
Data models for the grocery measurement engine.

These models define the entities shared by every component:
- Quantity: a single value or range with an optional unit
- MeasurementTriple: original quantity plus precomputed metric/imperial
- GroceryItem: one persisted line of a grocery list
- CondensedIngredient: display-only merge of same-named items
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Union


class UnitPreference(str, Enum):
    """Which measurement system to display."""
    ORIGINAL = "original"
    METRIC = "metric"
    IMPERIAL = "imperial"

    @classmethod
    def resolve(cls, value: Optional[Union[str, "UnitPreference"]]) -> "UnitPreference":
        """Map a stored or user-supplied value to a preference, defaulting to original."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.ORIGINAL


class Category(str, Enum):
    """Grocery aisle categories."""
    PRODUCE = "produce"
    BAKERY = "bakery"
    OILS_VINEGARS = "oils-vinegars"
    DAIRY_EGGS_FRIDGE = "dairy-eggs-fridge"
    HERBS_SPICES = "herbs-spices"
    MEAT_SEAFOOD = "meat-seafood"
    FROZEN = "frozen"
    FLOURS_SUGARS = "flours-sugars"
    PANTRY = "pantry"
    PASTAS_GRAINS_LEGUMES = "pastas-grains-legumes"
    UNCATEGORIZED = "uncategorized"

    @classmethod
    def resolve(cls, value: Optional[Union[str, "Category"]]) -> "Category":
        """Map a stored tag (including legacy tags) to a category."""
        if isinstance(value, cls):
            return value
        if not value:
            return cls.UNCATEGORIZED
        tag = str(value).strip().lower()
        tag = LEGACY_CATEGORY_TAGS.get(tag, tag)
        try:
            return cls(tag)
        except ValueError:
            return cls.UNCATEGORIZED


# Tags written by older versions of the app
LEGACY_CATEGORY_TAGS = {
    "dairy-eggs": Category.DAIRY_EGGS_FRIDGE.value,
    "spices": Category.HERBS_SPICES.value,
    "other": Category.UNCATEGORIZED.value,
}


@dataclass(frozen=True)
class Quantity:
    """A parsed quantity. min == max means a single value."""
    quantity_min: Optional[float] = None
    quantity_max: Optional[float] = None
    unit: Optional[str] = None
    name: Optional[str] = None  # Free text, e.g. "to taste"

    @classmethod
    def single(cls, value: float, unit: Optional[str] = None) -> "Quantity":
        return cls(quantity_min=value, quantity_max=value, unit=unit)

    @property
    def is_range(self) -> bool:
        return (
            self.quantity_min is not None
            and self.quantity_max is not None
            and self.quantity_min != self.quantity_max
        )

    @property
    def is_empty(self) -> bool:
        return not self.quantity_min and not self.quantity_max

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "min": self.quantity_min,
            "max": self.quantity_max,
            "unit": self.unit,
            "name": self.name,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Quantity":
        """Create from dictionary."""
        return cls(
            quantity_min=data.get("min"),
            quantity_max=data.get("max"),
            unit=data.get("unit"),
            name=data.get("name"),
        )


@dataclass(frozen=True)
class MeasurementTriple:
    """Original quantity plus the metric and imperial renditions computed at ingestion."""
    original: Quantity = field(default_factory=Quantity)
    metric: Optional[Quantity] = None
    imperial: Optional[Quantity] = None

    def for_preference(self, preference: Union[str, UnitPreference]) -> Optional[Quantity]:
        preference = UnitPreference.resolve(preference)
        if preference == UnitPreference.METRIC:
            return self.metric
        if preference == UnitPreference.IMPERIAL:
            return self.imperial
        return self.original

    def to_columns(self) -> Dict[str, Any]:
        """Flatten into the storage columns (original_quantity_min, ...)."""
        columns = {}
        for prefix in ("original", "metric", "imperial"):
            quantity = getattr(self, prefix) or Quantity()
            columns[f"{prefix}_quantity_min"] = quantity.quantity_min
            columns[f"{prefix}_quantity_max"] = quantity.quantity_max
            columns[f"{prefix}_unit"] = quantity.unit
        return columns

    @classmethod
    def from_columns(cls, row: Dict[str, Any]) -> "MeasurementTriple":
        """Build from flat storage columns; absent metric/imperial stay None."""
        members = {}
        for prefix in ("original", "metric", "imperial"):
            quantity = Quantity(
                quantity_min=row.get(f"{prefix}_quantity_min"),
                quantity_max=row.get(f"{prefix}_quantity_max"),
                unit=row.get(f"{prefix}_unit"),
            )
            if prefix != "original" and quantity.quantity_min is None and quantity.quantity_max is None:
                members[prefix] = None
            else:
                members[prefix] = quantity
        return cls(**members)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "original": self.original.to_dict(),
            "metric": self.metric.to_dict() if self.metric else None,
            "imperial": self.imperial.to_dict() if self.imperial else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MeasurementTriple":
        return cls(
            original=Quantity.from_dict(data.get("original") or {}),
            metric=Quantity.from_dict(data["metric"]) if data.get("metric") else None,
            imperial=Quantity.from_dict(data["imperial"]) if data.get("imperial") else None,
        )


@dataclass
class GroceryItem:
    """Single persisted item on a grocery list."""
    id: str
    sort_name: str  # Normalized name used for grouping, e.g. "Yellow Onion"
    category: Category = Category.UNCATEGORIZED
    checked: bool = False
    recipe_id: Optional[str] = None
    measurement: MeasurementTriple = field(default_factory=MeasurementTriple)
    name: Optional[str] = None  # Raw source line, e.g. "1 yellow onion, diced"

    is_condensed = False

    def __post_init__(self):
        self.category = Category.resolve(self.category)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "sort_name": self.sort_name,
            "category": self.category.value,
            "checked": self.checked,
            "recipe_id": self.recipe_id,
            "measurement": self.measurement.to_dict(),
            "name": self.name,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GroceryItem":
        """Create from dictionary."""
        return cls(
            id=data["id"],
            sort_name=data["sort_name"],
            category=data.get("category"),
            checked=bool(data.get("checked", False)),
            recipe_id=data.get("recipe_id"),
            measurement=MeasurementTriple.from_dict(data.get("measurement") or {}),
            name=data.get("name"),
        )

    def to_row(self) -> Dict[str, Any]:
        """Flatten into a storage row."""
        row = {
            "id": self.id,
            "sort_name": self.sort_name,
            "name": self.name,
            "category": self.category.value,
            "checked": self.checked,
            "recipe_id": self.recipe_id,
        }
        row.update(self.measurement.to_columns())
        return row

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "GroceryItem":
        """Create from a flat storage row."""
        return cls(
            id=row["id"],
            sort_name=row["sort_name"],
            category=row.get("category"),
            checked=bool(row.get("checked")),
            recipe_id=row.get("recipe_id"),
            measurement=MeasurementTriple.from_columns(row),
            name=row.get("name"),
        )


@dataclass
class CondensedIngredient:
    """
    Several same-named items shown as one line.

    Derived on every render and never persisted. Quantities are kept
    side by side rather than summed, since source units may differ.
    """
    id: str  # "condensed-yellow-onion"
    sort_name: str
    category: Category
    checked: bool
    original_items: List[GroceryItem] = field(default_factory=list)
    quantities: List[str] = field(default_factory=list)

    is_condensed = True

    @property
    def quantity_display(self) -> str:
        """Quantities joined the way the list shows them ("2 cups + 1 tbsp")."""
        return " + ".join(q for q in self.quantities if q)

    @property
    def item_ids(self) -> List[str]:
        return [item.id for item in self.original_items]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "sort_name": self.sort_name,
            "category": self.category.value,
            "checked": self.checked,
            "is_condensed": True,
            "original_items": [item.to_dict() for item in self.original_items],
            "quantities": list(self.quantities),
        }
