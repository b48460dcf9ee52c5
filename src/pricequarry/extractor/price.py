"""
Price and currency normalization for free-form price text.

Handles currency symbols and ISO codes as well as the mixed thousands/decimal
separator conventions found across retailers ("$1,234.56", "1.234,56 €",
"12,99", "AED 1,200").
"""

from __future__ import annotations

import math
import re
from typing import Optional

from ..models import ParsedPrice

# Symbol detection runs before any code lookup, in this order.
CURRENCY_SYMBOLS = (
    ("€", "EUR"),
    ("£", "GBP"),
    ("$", "USD"),
)

GULF_CURRENCY_CODES = ("AED", "SAR", "QAR", "KWD", "BHD", "OMR")

_GULF_PATTERNS = tuple((code, re.compile(rf"\b{code}\b", re.IGNORECASE)) for code in GULF_CURRENCY_CODES)
_BARE_CODE = re.compile(r"\b([A-Z]{3})\b")
_WHITESPACE = re.compile(r"\s+")
_NON_NUMERIC = re.compile(r"[^\d.,]")
_LEADING_NUMBER = re.compile(r"\d+(?:\.\d*)?|\.\d+")


def normalize_currency(text: Optional[str]) -> Optional[str]:
    """Detect a currency code in ``text``.

    Symbols win over codes; Gulf-region codes are matched as whole words in any
    case, then any bare three-letter uppercase token is accepted.
    """
    t = (text or "").strip()
    if not t:
        return None

    for symbol, code in CURRENCY_SYMBOLS:
        if symbol in t:
            return code

    for code, pattern in _GULF_PATTERNS:
        if pattern.search(t):
            return code

    match = _BARE_CODE.search(t)
    return match.group(1) if match else None


def _resolve_separators(num: str) -> str:
    if "," in num and "." in num:
        if num.rfind(",") < num.rfind("."):
            return num.replace(",", "")
        return num.replace(".", "").replace(",", ".", 1)

    if "," in num:
        parts = num.split(",")
        if len(parts[-1]) == 2:
            return "".join(parts[:-1]) + "." + parts[-1]
        return num.replace(",", "")

    return num


def _to_float(num: str) -> Optional[float]:
    # Leading-prefix parse: "1.234.567" reads as 1.234, matching how browsers parse floats.
    match = _LEADING_NUMBER.match(num)
    if not match:
        return None
    value = float(match.group(0))
    if not math.isfinite(value):
        return None
    return value


def parse_price(text: Optional[str]) -> ParsedPrice:
    """Parse ``text`` into a numeric price, the cleaned raw text and a currency code.

    Args:
        text: Arbitrary price text, possibly with symbols, codes and separators

    Returns:
        ParsedPrice; ``price`` is None when no number could be read, in which
        case ``raw`` still carries the original text.
    """
    if not text:
        return ParsedPrice(price=None, raw=None, currency=None)

    raw = _WHITESPACE.sub(" ", text).strip()
    if not raw:
        return ParsedPrice(price=None, raw=None, currency=None)

    currency = normalize_currency(raw)
    num = _resolve_separators(_NON_NUMERIC.sub("", raw))

    return ParsedPrice(price=_to_float(num), raw=raw, currency=currency)
