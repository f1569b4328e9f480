"""Numeric and date coercion for vendor CSV cells."""

from __future__ import annotations

import math
import re
from datetime import datetime, timedelta, timezone, tzinfo
from typing import Optional

from dateutil import parser as date_parser
from dateutil import tz

from exceptions import DateParseError

# Leading decimal literal, the same prefix a permissive float parser accepts
_NUMERIC_PREFIX = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
# Missing date components are filled from here so results never depend on today
_PARSE_DEFAULT = datetime(1970, 1, 1)


def parse_number(value: Optional[str]) -> Optional[float]:
    """Parse the leading numeric part of a cell.

    Returns None for empty cells, cells without a numeric prefix, and
    values that overflow to infinity. Trailing text such as units or a
    percent sign is ignored ("45%" -> 45.0).
    """
    if value is None or value == "":
        return None
    match = _NUMERIC_PREFIX.match(value)
    if match is None:
        return None
    number = float(match.group(1))
    if not math.isfinite(number):
        return None
    return number


def resolve_timezone(name: str) -> tzinfo:
    """Look up a timezone by name ("UTC", "local", or an IANA zone)."""
    if name.upper() == "UTC":
        return timezone.utc
    if name.lower() == "local":
        return tz.tzlocal()
    zone = tz.gettz(name)
    if zone is None:
        raise ValueError(f"Unknown timezone: {name}")
    return zone


def parse_timestamp(text: str, default_tz: tzinfo = timezone.utc, dayfirst: bool = False) -> int:
    """Parse a date or date-time string into epoch milliseconds.

    Naive values are interpreted in ``default_tz``.

    Raises:
        DateParseError: If the string is not a recognizable date
    """
    if text is None or not text.strip():
        raise DateParseError("Empty date value", value=text)
    try:
        parsed = date_parser.parse(text, default=_PARSE_DEFAULT, dayfirst=dayfirst)
    except (ValueError, OverflowError) as e:
        raise DateParseError(f"Unrecognized date {text!r}: {e}", value=text) from e

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=default_tz)
    return (parsed - _EPOCH) // timedelta(milliseconds=1)


__all__ = ["parse_number", "parse_timestamp", "resolve_timezone"]
