# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""DateTime and rounding utilities for StudyHub.

Analytics work on calendar days, never timestamps: every grouping key is a
``yyyy-MM-dd`` string and every range is a pair of inclusive dates. The
helpers here keep that formatting in one place.

Design Decisions:
-----------------
1. "Today" is the UTC calendar date unless a caller injects one
2. Timestamps (report generation time) are timezone-aware UTC
3. Rounding is half-up, matching what users see on the dashboard
"""

from datetime import date, datetime, timezone
from decimal import ROUND_HALF_UP, Decimal

ISO_DATE_FORMAT = "%Y-%m-%d"


def utc_now() -> datetime:
    """Get current UTC time as timezone-aware datetime.

    Returns:
        Timezone-aware datetime representing current UTC time.
    """
    return datetime.now(timezone.utc)


def utc_today() -> date:
    """Get the current UTC calendar date."""
    return utc_now().date()


def ensure_utc(dt: datetime | None) -> datetime | None:
    """Ensure a datetime is timezone-aware UTC.

    Args:
        dt: A datetime object (naive or aware) or None.

    Returns:
        Timezone-aware UTC datetime or None.

    Note:
        - If dt is naive, assumes UTC and adds tzinfo
        - If dt is aware, converts to UTC
    """
    if dt is None:
        return None

    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)

    return dt.astimezone(timezone.utc)


def format_iso(dt: datetime | None) -> str | None:
    """Format a datetime as ISO 8601 string.

    Args:
        dt: Datetime to format.

    Returns:
        ISO 8601 formatted string or None.
    """
    if dt is None:
        return None

    dt_utc = ensure_utc(dt)
    return dt_utc.isoformat()


def format_date(value: date) -> str:
    """Format a calendar date as ``yyyy-MM-dd``."""
    return value.strftime(ISO_DATE_FORMAT)


def parse_date(value: str | date | datetime) -> date:
    """Parse a ``yyyy-MM-dd`` string (or pass through a date).

    Datetimes are truncated to their calendar date; strings may carry a
    time component, which is ignored.

    Args:
        value: Date string, date or datetime.

    Returns:
        The calendar date.

    Raises:
        ValueError: If the string is not an ISO date.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return datetime.strptime(value[:10], ISO_DATE_FORMAT).date()


def format_day_label(value: str | date) -> str:
    """Format a day as a short ``M/d`` chart label.

    Example:
        >>> format_day_label("2023-01-02")
        '1/2'
    """
    day = parse_date(value)
    return f"{day.month}/{day.day}"


def round_half_up(value: float, digits: int = 0) -> float | int:
    """Round half away from zero.

    Python's round() uses banker's rounding (round(22.5) == 22); the
    dashboard figures round .5 up.

    Args:
        value: Number to round.
        digits: Decimal places to keep.

    Returns:
        An int when digits is 0, otherwise a float.
    """
    quantum = Decimal(1).scaleb(-digits)
    rounded = Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP)
    if digits == 0:
        return int(rounded)
    return float(rounded)
