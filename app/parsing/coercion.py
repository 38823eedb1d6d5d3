"""
app/parsing/coercion.py

Currency and calendar-date coercion for free-form cell text.
"""

from __future__ import annotations

import re
from datetime import datetime
from decimal import Decimal, InvalidOperation

CURRENCY_SYMBOLS: tuple[str, ...] = ("$", "€", "£", "¥")

# Tried in order; the first format that parses wins.
DATE_FORMATS: tuple[str, ...] = (
    "%Y-%m-%d",
    "%m/%d/%Y",
    "%d/%m/%Y",
    "%Y/%m/%d",
    "%b %d, %Y",
    "%B %d, %Y",
    "%b %d %Y",
    "%B %d %Y",
    "%d %b %Y",
    "%d %B %Y",
    "%Y-%m-%d %H:%M:%S",
    "%m/%d/%Y %H:%M:%S",
)


_DECIMAL_LITERAL = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)$")

DATE_LIKE_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"^\d{4}-\d{1,2}-\d{1,2}"),
    re.compile(r"^\d{1,2}/\d{1,2}/\d{4}"),
    re.compile(r"^\d{1,2}-\d{1,2}-\d{4}"),
    re.compile(r"^[A-Za-z]{3,9}\s+\d{1,2},?\s+\d{4}"),
)

CURRENCY_LIKE_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"^\$\d+\.?\d*"),
    re.compile(r"^\d+\.\d{2}$"),
    re.compile(r"^\(\d+\.?\d*\)$"),
)


class CurrencyFormatError(ValueError):
    """
    Raised when a cell cannot be read as a currency amount.
    """

    def __init__(self, raw_value: str) -> None:
        super().__init__(f"invalid currency format: {raw_value}")
        self.raw_value = raw_value


class DateFormatError(ValueError):
    """
    Raised when a cell matches none of the supported date formats.
    """

    def __init__(self, raw_value: str) -> None:
        super().__init__(f"unable to parse date: {raw_value}")
        self.raw_value = raw_value


def parse_currency(value: str) -> Decimal:
    """
    Parse a currency cell such as ``$1,234.56`` or ``(50.00)``.

    Symbols, thousands separators and spaces are stripped; parentheses mark a
    negative amount. An empty string after stripping yields zero.
    """

    cleaned = value.strip()
    for symbol in CURRENCY_SYMBOLS:
        cleaned = cleaned.replace(symbol, "")
    cleaned = cleaned.replace(",", "").replace(" ", "")

    if cleaned.startswith("(") and cleaned.endswith(")"):
        cleaned = "-" + cleaned.strip("()")

    if not cleaned:
        return Decimal("0.0")

    if not _DECIMAL_LITERAL.match(cleaned):
        raise CurrencyFormatError(value)
    try:
        return Decimal(cleaned)
    except InvalidOperation as exc:
        raise CurrencyFormatError(value) from exc


def parse_date(value: str) -> str:
    """
    Normalize a date cell to ISO ``YYYY-MM-DD``.
    """

    compact = value.strip()
    if not compact:
        raise DateFormatError(value)

    for fmt in DATE_FORMATS:
        try:
            parsed = datetime.strptime(compact, fmt)
        except ValueError:
            continue
        return parsed.date().isoformat()

    raise DateFormatError(value)


def looks_like_date(value: str) -> bool:
    return any(pattern.match(value) for pattern in DATE_LIKE_PATTERNS)


def looks_like_currency(value: str) -> bool:
    return any(pattern.match(value) for pattern in CURRENCY_LIKE_PATTERNS)


def looks_like_number(value: str) -> bool:
    try:
        float(value.replace(",", ""))
    except ValueError:
        return False
    return True
