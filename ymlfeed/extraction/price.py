"""
Price Normalization

Reduces a free-form price string ("1 234,50 ₽", "$19.99") to a plain
decimal token. Applies to scraped and tabular prices alike.
"""

import re
from typing import Any

_WHITESPACE_RE = re.compile(r'\s+')
_NUMBER_RE = re.compile(r'(\d+(?:\.\d+)?)')


def normalize_price(value: Any) -> str:
    """
    Normalize a price value to its first decimal token.

    Args:
        value: Raw price (string or number)

    Returns:
        Decimal string such as "1234.50", or empty string
    """
    if not value:
        return ""

    text = _WHITESPACE_RE.sub('', str(value)).replace(',', '.')
    match = _NUMBER_RE.search(text)
    return match.group(1) if match else ""


def is_usable_price(price: str) -> bool:
    """A normalized price is usable when non-empty and not "0"."""
    return bool(price) and price != "0"


def is_positive_price(price: Any) -> bool:
    """True if the price parses as a number greater than zero."""
    try:
        return float(price) > 0
    except (TypeError, ValueError):
        return False
