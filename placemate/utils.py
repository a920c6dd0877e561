"""Utility functions for the application."""

from __future__ import annotations

import datetime
import math
import time
from typing import Any

from .errors import ValidationError


def now_ms() -> int:
    """Return the current time as epoch milliseconds."""
    return int(time.time() * 1000)


def to_epoch_ms(value: Any, field: str = "date") -> int:
    """Coerce an epoch-ms number, ISO 8601 string or datetime to epoch ms.

    Raises:
        ValidationError: If the value cannot be interpreted as a point in time.
    """
    if isinstance(value, bool) or value is None or value == "":
        raise ValidationError(f"{field} is required.", code="INVALID_DATE")
    if isinstance(value, (int, float)):
        if not math.isfinite(value):
            raise ValidationError(f"{field} is not a valid date.", code="INVALID_DATE")
        return int(value)
    if isinstance(value, datetime.datetime):
        dt = value
    elif isinstance(value, datetime.date):
        dt = datetime.datetime.combine(value, datetime.time())
    elif isinstance(value, str):
        if value.isdigit():
            return int(value)
        try:
            dt = datetime.datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError as e:
            raise ValidationError(
                f"{field} is not a valid date.", code="INVALID_DATE"
            ) from e
    else:
        raise ValidationError(f"{field} is not a valid date.", code="INVALID_DATE")

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=datetime.timezone.utc)
    return int(dt.timestamp() * 1000)


def unique(values: list[str]) -> list[str]:
    """Drop duplicates and blanks, keeping first-seen order."""
    seen: set[str] = set()
    result = []
    for value in values:
        if value and value not in seen:
            seen.add(value)
            result.append(value)
    return result
