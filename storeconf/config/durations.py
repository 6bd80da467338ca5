"""
Duration Parsing

Converts human-readable TTL and interval strings such as "14d" or "30m"
into timedelta values, and provides unit constructors for defaults.

Author: storeconf Project
License: MIT
"""

import re
from datetime import timedelta
from typing import Any, Optional

from .exceptions import InvalidDurationError


_DURATION_RE = re.compile(r"^\s*(\d+)\s*(ms|d|h|m|s)\s*$", re.IGNORECASE)

_UNITS = {
    "d": "days",
    "h": "hours",
    "m": "minutes",
    "s": "seconds",
    "ms": "milliseconds",
}


def days(n: int) -> timedelta:
    return timedelta(days=n)


def minutes(n: int) -> timedelta:
    return timedelta(minutes=n)


def seconds(n: int) -> timedelta:
    return timedelta(seconds=n)


def parse_duration(value: Any, setting: str = "duration") -> timedelta:
    """
    Parse a single-unit duration string.

    Accepted units are d, h, m, s and ms, e.g. "14d" or "0s". A value that
    is already a timedelta is returned unchanged.

    Args:
        value: Raw setting value
        setting: Setting name, used in error messages

    Returns:
        Parsed timedelta

    Raises:
        InvalidDurationError: If the value is not a valid duration
    """
    if isinstance(value, timedelta):
        return value
    if not isinstance(value, str):
        raise InvalidDurationError(setting, value)

    match = _DURATION_RE.match(value)
    if not match:
        raise InvalidDurationError(setting, value)

    amount, unit = match.groups()
    return _build(setting, value, **{_UNITS[unit.lower()]: int(amount)})


def _build(setting: str, value: Any, **units: int) -> timedelta:
    # timedelta caps out at 999999999 days
    try:
        return timedelta(**units)
    except OverflowError:
        raise InvalidDurationError(setting, value)


def _as_count(value: Any, setting: str) -> int:
    # bool is an int subclass; "true" is never a meaningful count
    if isinstance(value, bool):
        raise InvalidDurationError(setting, value)
    if isinstance(value, float) and not value.is_integer():
        raise InvalidDurationError(setting, value)
    try:
        count = int(value)
    except (TypeError, ValueError, OverflowError):
        raise InvalidDurationError(setting, value)
    if count < 0:
        raise InvalidDurationError(setting, value)
    return count


def maybe_parse_duration(value: Any, setting: str = "duration") -> Optional[timedelta]:
    """Parse `value` if it is set, otherwise return None."""
    if value is None:
        return None
    return parse_duration(value, setting)


def maybe_minutes(value: Any, setting: str = "duration") -> Optional[timedelta]:
    """Interpret `value` as a whole number of minutes, if set."""
    if value is None:
        return None
    if isinstance(value, timedelta):
        return value
    return _build(setting, value, minutes=_as_count(value, setting))


def maybe_days(value: Any, setting: str = "duration") -> Optional[timedelta]:
    """Interpret `value` as a whole number of days, if set."""
    if value is None:
        return None
    if isinstance(value, timedelta):
        return value
    return _build(setting, value, days=_as_count(value, setting))


def format_duration(value: timedelta) -> str:
    """Render a timedelta in the same single-unit notation it was parsed from."""
    total_ms = int(value / timedelta(milliseconds=1))
    for unit, size in (("d", 86_400_000), ("h", 3_600_000), ("m", 60_000), ("s", 1000)):
        if total_ms % size == 0:
            return f"{total_ms // size}{unit}"
    return f"{total_ms}ms"
