"""
Number formatting and parsing for ingredient quantities.

Quantities are stored as floats and rendered with unicode fraction glyphs
the way recipe cards print them ("½ cup", "2¼ lbs"). Parsing goes the other
way: "1/2", "1 1/2", "1½", "4-5" and "4 to 5" all turn back into numbers.
"""

import logging
import math
import re
from typing import Optional, Tuple

logger = logging.getLogger(__name__)


# Eighths keyed by their exact float value
FRACTION_GLYPHS = {
    0.125: "⅛",
    0.25: "¼",
    0.375: "⅜",
    0.5: "½",
    0.625: "⅝",
    0.75: "¾",
    0.875: "⅞",
}

# Glyph -> ASCII fraction, for parsing text copied from recipe sites
UNICODE_FRACTIONS = {
    "½": "1/2",
    "⅓": "1/3",
    "⅔": "2/3",
    "¼": "1/4",
    "¾": "3/4",
    "⅕": "1/5",
    "⅖": "2/5",
    "⅗": "3/5",
    "⅘": "4/5",
    "⅙": "1/6",
    "⅚": "5/6",
    "⅛": "1/8",
    "⅜": "3/8",
    "⅝": "5/8",
    "⅞": "7/8",
}

THIRD_TOLERANCE = 0.01

_NUMBER_RE = re.compile(r"^\d+(?:\.\d+)?$|^\.\d+$")
_FRACTION_RE = re.compile(r"^(\d+(?:\.\d+)?)\s*/\s*(\d+(?:\.\d+)?)$")
_GLYPH_RE = re.compile(r"(\d*)\s*([" + "".join(UNICODE_FRACTIONS) + r"])")


def _with_whole(whole: int, glyph: str) -> str:
    return f"{whole}{glyph}" if whole > 0 else glyph


def format_number(num: Optional[float]) -> str:
    """
    Render a quantity with fraction glyphs where a cook would expect them.

    Args:
        num: Quantity to render, or None

    Returns:
        "3" for whole numbers, "2½" / "⅓" for recognised fractions,
        otherwise a decimal with trailing zeros stripped ("1.05").
        None renders as an empty string.

    Examples:
        >>> format_number(0.5)
        '½'
        >>> format_number(2.5)
        '2½'
        >>> format_number(1.05)
        '1.05'
    """
    if num is None:
        return ""
    if not math.isfinite(num):
        logger.debug(f"Cannot format non-finite quantity {num}")
        return ""

    # Half up, not Python's half-to-even
    rounded = math.floor(num * 1000 + 0.5) / 1000
    if rounded == int(rounded):
        return str(int(rounded))

    whole = math.floor(rounded)
    fraction = rounded - whole

    # Thirds never land on an eighth, check them first
    if abs(fraction - 1 / 3) < THIRD_TOLERANCE or abs(fraction - 0.333) < THIRD_TOLERANCE:
        return _with_whole(whole, "⅓")
    if abs(fraction - 2 / 3) < THIRD_TOLERANCE or abs(fraction - 0.667) < THIRD_TOLERANCE:
        return _with_whole(whole, "⅔")

    exact = FRACTION_GLYPHS.get(round(fraction, 3))
    if exact:
        return _with_whole(whole, exact)

    # Nearest eighth, rounding halves up
    nearest_eighth = math.floor(fraction * 8 + 0.5) / 8
    glyph = FRACTION_GLYPHS.get(nearest_eighth)
    if glyph:
        return _with_whole(whole, glyph)

    return f"{rounded:.3f}".rstrip("0").rstrip(".")


def replace_unicode_fractions(text: str) -> str:
    """Rewrite fraction glyphs as ASCII fractions ("1½ cups" -> "1 1/2 cups")."""
    def _replace(match: re.Match) -> str:
        whole, glyph = match.group(1), match.group(2)
        ascii_fraction = UNICODE_FRACTIONS[glyph]
        return f"{whole} {ascii_fraction}" if whole else ascii_fraction

    return _GLYPH_RE.sub(_replace, text)


def _finite(value: float, token: str) -> Optional[float]:
    if not math.isfinite(value):
        logger.debug(f"Quantity token '{token[:20]}...' is out of range")
        return None
    return value


def _parse_token(token: str) -> Optional[float]:
    if _NUMBER_RE.match(token):
        return _finite(float(token), token)

    match = _FRACTION_RE.match(token)
    if match:
        numerator = _finite(float(match.group(1)), token)
        denominator = _finite(float(match.group(2)), token)
        if numerator is None or denominator is None:
            return None
        if denominator == 0:
            logger.debug(f"Zero denominator in quantity token '{token}'")
            return None
        return numerator / denominator

    return None


def parse_number(text: Optional[str]) -> Optional[float]:
    """
    Parse a single quantity expression into a float.

    Understands plain numbers ("2", "0.5"), fractions ("1/2"), mixed
    numbers ("1 1/2") and fraction glyphs ("1½").

    Args:
        text: Quantity text

    Returns:
        The value, or None when the text is not a number. Never raises.
    """
    if text is None:
        return None

    cleaned = replace_unicode_fractions(text).strip()
    if not cleaned:
        return None

    # Keep "1 / 2" together so it is not read as a mixed number
    cleaned = re.sub(r"\s*/\s*", "/", cleaned)
    tokens = cleaned.split()

    if len(tokens) == 1:
        return _parse_token(tokens[0])

    if len(tokens) == 2 and "/" not in tokens[0] and "/" in tokens[1]:
        whole = _parse_token(tokens[0])
        fraction = _parse_token(tokens[1])
        if whole is None or fraction is None:
            return None
        return whole + fraction

    return None


def parse_quantity_range(text: Optional[str], default: float = 1.0) -> Tuple[float, float]:
    """
    Turn quantity text into (min, max) bounds.

    Handles single values, "X-Y" ranges and "X to Y" ranges. Bounds are
    always returned low to high. Text that cannot be read falls back to
    (default, default) so every ingredient keeps a usable quantity.

    Args:
        text: Quantity text such as "2", "1/2", "4-5", "1 to 2"
        default: Value used when parsing fails

    Returns:
        Tuple of (min, max)
    """
    if not text or not text.strip():
        return default, default

    cleaned = replace_unicode_fractions(text).strip()
    parts = re.split(r"\s*-\s*|\s+to\s+", cleaned, flags=re.IGNORECASE)
    parts = [p for p in parts if p.strip()]

    values = [parse_number(p) for p in parts[:2]]
    if not values or any(v is None for v in values):
        logger.debug(f"Could not parse quantity '{text}', using {default}")
        return default, default

    low, high = values[0], values[-1]
    if low > high:
        low, high = high, low
    return low, high
