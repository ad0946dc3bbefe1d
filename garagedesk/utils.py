"""Shared utilities used across the engine and store backends."""

import re
from datetime import datetime, time

from garagedesk.errors import ValidationError

_TIME_FORMATS = ("%H:%M", "%H:%M:%S")


def normalize_phone(value: str) -> str:
    """Normalize a phone number by stripping everything except digits and a leading +.

    Examples:
        >>> normalize_phone("98765 43210")
        '9876543210'
        >>> normalize_phone("+91 (987) 654-3210")
        '+919876543210'
    """
    value = value.strip()
    if value.startswith("+"):
        return "+" + re.sub(r"[^\d]", "", value[1:])
    return re.sub(r"[^\d]", "", value)


def parse_time(value: str) -> time:
    """Parse ``HH:MM`` or ``HH:MM:SS`` into a ``datetime.time``.

    Raises:
        ValidationError: If the value is not a 24h clock time.
    """
    cleaned = value.strip()
    for fmt in _TIME_FORMATS:
        try:
            return datetime.strptime(cleaned, fmt).time()
        except ValueError:
            continue
    raise ValidationError(f"Invalid time {value!r}, expected HH:MM")


def normalize_time(value: str) -> str:
    """Normalize a clock time to ``HH:MM``, dropping seconds.

    Examples:
        >>> normalize_time("09:00:00")
        '09:00'
        >>> normalize_time("9:30")
        '09:30'
    """
    return parse_time(value).strftime("%H:%M")
