"""
Lightweight domain validation helpers.

Pure checks with no I/O.  Every helper raises a typed ValidationError so
that callers can reject bad input before a transaction is opened.
"""

from __future__ import annotations

import re
from datetime import date

from stock_kernel.exceptions import (
    InvalidDateFormatError,
    InvalidLimitError,
    InvalidProductFieldError,
    InvalidQuantityError,
)

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def require_positive_quantity(quantity: int) -> None:
    """Movement quantities must be integers > 0."""
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
        raise InvalidQuantityError(quantity)


def require_non_negative_stock(stock: int) -> None:
    """Stock levels (initial or target) must be integers >= 0."""
    if isinstance(stock, bool) or not isinstance(stock, int) or stock < 0:
        raise InvalidQuantityError(stock, reason="stock must not be negative")


def require_positive_limit(limit: int) -> None:
    if isinstance(limit, bool) or not isinstance(limit, int) or limit <= 0:
        raise InvalidLimitError(limit)


def require_text(value: str | None, field_name: str) -> str:
    """Return the stripped value; empty or missing text is rejected."""
    if value is None or not str(value).strip():
        raise InvalidProductFieldError(field_name)
    return str(value).strip()


def parse_calendar_date(value: str) -> date:
    """
    Parse a YYYY-MM-DD string into a date.

    Both the shape and the calendar are checked: "2024-02-30" is rejected.
    """
    if not isinstance(value, str) or not _ISO_DATE.match(value):
        raise InvalidDateFormatError(str(value))
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise InvalidDateFormatError(value) from None
