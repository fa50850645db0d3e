"""Shared utility functions for services."""
import math
from datetime import date, datetime
from typing import Optional


def parse_number(value) -> Optional[float]:
    """Parse a form or stored value into a float.

    Handles ints, floats and numeric strings like '12', '12.50', ' 1,000 '.
    Returns None for empty, non-numeric or non-finite values.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        cleaned = value.replace(",", "").strip()
        if not cleaned:
            return None
        try:
            number = float(cleaned)
        except ValueError:
            return None
    else:
        return None
    if not math.isfinite(number):
        return None
    return number


def parse_date(value) -> Optional[date]:
    """Parse an ISO 'YYYY-MM-DD' value (or a date/datetime) into a date.

    Returns None for empty values; raises ValueError for malformed strings.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    if not text:
        return None
    # Accept full ISO timestamps by keeping the date part
    return date.fromisoformat(text[:10])
