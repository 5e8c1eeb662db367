"""
Keyword-based grocery aisle classification.

A coarse heuristic: the cleaned, lower-cased name is tested against each
keyword group in order and the first group with a substring hit wins.
Misses land in the pantry.
"""

import logging
import re
from typing import Dict, List, Optional, Tuple, Union

from .data.models import Category

logger = logging.getLogger(__name__)


# Checked in this order; first hit wins. "pepper" is in both the produce
# and spice groups, so it classifies as produce.
CATEGORY_KEYWORDS: Tuple[Tuple[Category, Tuple[str, ...]], ...] = (
    (Category.PRODUCE, (
        "onion", "garlic", "tomato", "pepper", "lettuce", "carrot", "celery",
        "potato", "apple", "banana", "lemon", "lime", "mushroom", "spinach",
        "broccoli", "cauliflower", "cucumber", "avocado", "bell pepper",
        "jalapeño", "cilantro", "parsley", "basil", "rosemary", "thyme",
        "oregano", "sage",
    )),
    (Category.MEAT_SEAFOOD, (
        "chicken", "beef", "pork", "fish", "salmon", "shrimp", "ground",
        "steak", "lamb", "pepperoni", "bacon", "ham", "turkey", "duck",
        "sausage", "chuck roast", "roast", "brisket", "ribs", "tenderloin",
        "sirloin", "filet", "cod", "tuna", "crab", "lobster", "scallop",
    )),
    (Category.DAIRY_EGGS_FRIDGE, (
        "milk", "cheese", "butter", "cream", "yogurt", "egg", "cream cheese",
        "sour cream", "cottage cheese", "mozzarella", "cheddar", "parmesan",
        "provolone", "swiss", "goat cheese", "ricotta", "mascarpone",
        "heavy cream",
    )),
    (Category.HERBS_SPICES, (
        "salt", "pepper", "spice", "cumin", "paprika", "chili powder",
        "garlic powder", "onion powder", "cinnamon", "nutmeg", "ginger",
        "turmeric", "cardamom", "cloves", "bay leaves", "vanilla", "extract",
        "seasoning",
    )),
)

DEFAULT_CATEGORY = Category.PANTRY

# Aisle walking order for sorted lists
AISLE_ORDER: List[Category] = [
    Category.PRODUCE,
    Category.MEAT_SEAFOOD,
    Category.DAIRY_EGGS_FRIDGE,
    Category.HERBS_SPICES,
    Category.FLOURS_SUGARS,
    Category.OILS_VINEGARS,
    Category.PASTAS_GRAINS_LEGUMES,
    Category.PANTRY,
    Category.FROZEN,
    Category.BAKERY,
    Category.UNCATEGORIZED,
]

CATEGORY_DISPLAY_NAMES: Dict[Category, str] = {
    Category.PRODUCE: "Produce",
    Category.MEAT_SEAFOOD: "Meat & Seafood",
    Category.DAIRY_EGGS_FRIDGE: "Dairy, Eggs & Fridge",
    Category.BAKERY: "Bakery",
    Category.FROZEN: "Frozen",
    Category.PANTRY: "Pantry",
    Category.HERBS_SPICES: "Herbs & Spices",
    Category.FLOURS_SUGARS: "Flours & Sugars",
    Category.OILS_VINEGARS: "Oils & Vinegars",
    Category.PASTAS_GRAINS_LEGUMES: "Pastas, Grains & Legumes",
    Category.UNCATEGORIZED: "Uncategorized",
}

CATEGORY_IMAGES: Dict[Category, str] = {
    Category.PRODUCE: "/produce.png",
    Category.BAKERY: "/bakery.png",
    Category.OILS_VINEGARS: "/oils-vinegars.png",
    Category.DAIRY_EGGS_FRIDGE: "/Dairy-eggs-fridge.png",
    Category.HERBS_SPICES: "/herbs-spices.png",
    Category.MEAT_SEAFOOD: "/meat-seafood.png",
    Category.FROZEN: "/frozen.png",
    Category.FLOURS_SUGARS: "/flours-sugars.png",
    Category.PANTRY: "/pantry.png",
    Category.PASTAS_GRAINS_LEGUMES: "/pastas-grains-legumes.png",
    Category.UNCATEGORIZED: "/uncategorized.png",
}

_UNIT_WORDS = (
    r"cups?|tbsp|tsp|tablespoons?|teaspoons?|lbs?|pounds?|oz|ounces?|g|grams?|kg|"
    r"kilograms?|ml|l|liters?|gallons?|quarts?|pints?|cloves?|pieces?|slices?|"
    r"cans?|packages?|bags?|boxes?"
)

# Leading quantity text left over in legacy names ("2 lbs ground beef")
_LEADING_QUANTITY_PATTERNS = [
    re.compile(rf"^\d+(\.\d+)?\s*(to\s+\d+(\.\d+)?)?\s*({_UNIT_WORDS})\s+", re.IGNORECASE),
    re.compile(rf"^\d+(\.\d+)?\s*-\s*\d+(\.\d+)?\s*({_UNIT_WORDS})\s+", re.IGNORECASE),
    re.compile(rf"^\d+(\.\d+)?\s*/\s*\d+(\.\d+)?\s*({_UNIT_WORDS})\s+", re.IGNORECASE),
    re.compile(r"^\d+(\.\d+)?\s*"),
]


def _clean_for_matching(name: str) -> str:
    clean = name.lower()
    if " - " in clean:
        clean = clean.split(" - ", 1)[0].strip()
    for pattern in _LEADING_QUANTITY_PATTERNS:
        clean = pattern.sub("", clean)
    return clean.strip()


def categorize(name: Optional[str]) -> Category:
    """
    Assign an aisle category from an ingredient name.

    Args:
        name: Ingredient name, e.g. "Yellow Onion" or legacy "Chuck Roast - 4-5 lbs"

    Returns:
        The first matching Category, or Category.PANTRY
    """
    if not name:
        return DEFAULT_CATEGORY

    clean = _clean_for_matching(name)
    for category, keywords in CATEGORY_KEYWORDS:
        for keyword in keywords:
            if keyword in clean:
                return category

    logger.debug(f"No category keyword in '{name}', defaulting to {DEFAULT_CATEGORY.value}")
    return DEFAULT_CATEGORY


def category_image(category: Optional[Union[str, Category]]) -> str:
    """Image path for a category's aisle icon. Legacy tags map to their current images."""
    return CATEGORY_IMAGES[Category.resolve(category)]


def category_display_name(category: Optional[Union[str, Category]]) -> str:
    """Human-readable aisle name. Legacy tags map to their current names."""
    return CATEGORY_DISPLAY_NAMES[Category.resolve(category)]


def aisle_index(category: Optional[Union[str, Category]]) -> int:
    """Position of a category in AISLE_ORDER."""
    return AISLE_ORDER.index(Category.resolve(category))
