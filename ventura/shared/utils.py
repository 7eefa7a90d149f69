from __future__ import annotations

import datetime as dt
from decimal import Decimal, InvalidOperation
from typing import Any


def utcnow() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


def to_decimal(value: Any, default: Decimal = Decimal("0")) -> Decimal:
    """Lenient decimal coercion: None, blanks and garbage fall back to `default`."""
    if value is None:
        return default
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        # Go through str() so 0.1 stays 0.1 instead of its binary expansion.
        value = str(value)
    try:
        out = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return default
    if not out.is_finite():
        return default
    return out
