"""
Ingredient line parsing.

Two entry points:
- parse_ingredient_line: "1/2 cup diced onion" -> quantity "1/2", unit "cup", name "diced onion"
- parse_embedded_quantity: repairs legacy names such as "Chuck Roast - 4-5 lbs"
  where the quantity was stored inside the name.

Neither raises on malformed input; unreadable quantities fall back to "1".
"""

import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, Optional

from .measurement import format_measurement
from .numbers import parse_number, parse_quantity_range, replace_unicode_fractions

logger = logging.getLogger(__name__)


DEFAULT_QUANTITY = "1"

INGREDIENT_LINE_RE = re.compile(r"^([\d\s\/\-.]+)\s*([a-zA-Z]*)\s+(.+)$")
# "1 to 2 cups flour": keep "to" out of the unit slot
TO_RANGE_LINE_RE = re.compile(
    r"^(\d[\d\s\/.]*?)\s+to\s+(\d[\d\s\/.]*?)\s*([a-zA-Z]*)\s+(.+)$",
    re.IGNORECASE,
)

EMBEDDED_RANGE_RE = re.compile(
    r"^(\d+(?:\.\d+)?)\s*(?:-|to)\s*(\d+(?:\.\d+)?)\s*([a-zA-Z]+)?",
    re.IGNORECASE,
)
EMBEDDED_SINGLE_RE = re.compile(r"^(\d+(?:\.\d+)?(?:\s*/\s*\d+)?)\s*([a-zA-Z]+)?")


@dataclass
class ParsedLine:
    """Result of parsing one raw ingredient line."""
    name: str
    quantity: str = DEFAULT_QUANTITY  # Literal text, e.g. "1/2" or "4-5"
    unit: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        result = {"name": self.name, "quantity": self.quantity}
        if self.unit:
            result["unit"] = self.unit
        return result


@dataclass
class EmbeddedQuantity:
    """A legacy "Name - quantity unit" string split into its parts."""
    name: str
    quantity_min: Optional[float] = None
    quantity_max: Optional[float] = None
    unit: Optional[str] = None

    @property
    def has_quantity(self) -> bool:
        return self.quantity_min is not None


def capitalize_words(text: str) -> str:
    """"yellow ONION" -> "Yellow Onion"."""
    return " ".join(word[:1].upper() + word[1:].lower() for word in text.split())


def parse_ingredient_line(raw: str) -> ParsedLine:
    """
    Split a raw ingredient line into quantity text, unit and name.

    Args:
        raw: Line such as "1/2 cup diced onion", "4-5 cloves garlic" or "salt to taste"

    Returns:
        ParsedLine. Lines without a leading quantity keep the whole
        trimmed text as the name with quantity "1".

    Examples:
        >>> parse_ingredient_line("1/2 cup diced onion")
        ParsedLine(name='diced onion', quantity='1/2', unit='cup')
        >>> parse_ingredient_line("salt to taste")
        ParsedLine(name='salt to taste', quantity='1', unit=None)
    """
    text = replace_unicode_fractions(raw or "").strip()

    match = TO_RANGE_LINE_RE.match(text)
    if match:
        low, high, unit, name = match.groups()
        return ParsedLine(
            name=name.strip(),
            quantity=f"{low.strip()} to {high.strip()}",
            unit=unit or None,
        )

    match = INGREDIENT_LINE_RE.match(text)
    if match:
        quantity, unit, name = match.groups()
        return ParsedLine(name=name.strip(), quantity=quantity.strip(), unit=unit or None)

    logger.debug(f"No leading quantity in '{raw}', defaulting to {DEFAULT_QUANTITY}")
    return ParsedLine(name=(raw or "").strip(), quantity=DEFAULT_QUANTITY)


def parse_embedded_quantity(sort_name: str) -> EmbeddedQuantity:
    """
    Repair a legacy name that carries its quantity after " - ".

    Args:
        sort_name: e.g. "chuck roast - 4-5 lbs", "Garlic - 3 cloves", "flour - 1/2 cup"

    Returns:
        EmbeddedQuantity with the capitalized name and, when one was found,
        the quantity bounds and unit. Names without " - " come back
        capitalized with no quantity.
    """
    name_part, separator, quantity_part = (sort_name or "").partition(" - ")
    name = capitalize_words(name_part)
    if not separator:
        return EmbeddedQuantity(name=name)

    quantity_part = quantity_part.strip()

    match = EMBEDDED_RANGE_RE.match(quantity_part)
    bounds = (parse_number(match.group(1)), parse_number(match.group(2))) if match else (None, None)
    if None not in bounds:
        low, high = bounds
        if low > high:
            low, high = high, low
        return EmbeddedQuantity(name=name, quantity_min=low, quantity_max=high, unit=match.group(3))

    match = EMBEDDED_SINGLE_RE.match(quantity_part)
    if match:
        value = parse_number(match.group(1))
        if value is not None:
            return EmbeddedQuantity(name=name, quantity_min=value, quantity_max=value, unit=match.group(2))

    logger.debug(f"Unreadable embedded quantity '{quantity_part}' in '{sort_name}'")
    return EmbeddedQuantity(name=name)


def clean_ingredient_name(text: str) -> str:
    """
    Derive a grouping name from a parsed ingredient name.

    Drops parenthesised notes, anything after a comma and trailing dashes:
    "yellow onion (about 1 lb), diced" -> "Yellow Onion".
    """
    clean = re.sub(r"\([^)]*\)", "", text or "")
    clean = clean.split(",", 1)[0]
    clean = re.sub(r"\s*-+\s*$", "", clean)
    clean = capitalize_words(clean)
    return clean or capitalize_words(text or "")


def format_parsed_line(parsed: ParsedLine) -> str:
    """Render a parsed line back to text with fraction glyphs ("½ cup diced onion")."""
    low, high = parse_quantity_range(parsed.quantity)
    measure = format_measurement(low, high, parsed.unit, None, None, None, None, None, None)
    return f"{measure} {parsed.name}".strip()
