# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Period selection and calendar date ranges.

A period is the lookback window a user picks on the dashboard. Every period
resolves to an N-day window ending today, both ends inclusive:

    week    -> today - 6  .. today   (7 days)
    month   -> today - 29 .. today   (30 days)
    3months -> today - 89 .. today   (90 days)

An unrecognised selector falls back to the month window.
"""

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum

from studyhub.utils.datetime import format_date, parse_date, utc_today

logger = logging.getLogger(__name__)


class Period(str, Enum):
    """Dashboard lookback periods."""

    WEEK = "week"
    MONTH = "month"
    THREE_MONTHS = "3months"

    @property
    def days(self) -> int:
        """Length of the window in days."""
        return PERIOD_DAYS[self]


PERIOD_DAYS: dict[Period, int] = {
    Period.WEEK: 7,
    Period.MONTH: 30,
    Period.THREE_MONTHS: 90,
}


@dataclass(frozen=True)
class DateRange:
    """Inclusive range of calendar days.

    Attributes:
        start: First day in the range.
        end: Last day in the range (start <= end).
    """

    start: date
    end: date

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise ValueError(f"Range start {self.start} is after end {self.end}")

    @property
    def day_count(self) -> int:
        """Number of calendar days in the range, both ends included."""
        return (self.end - self.start).days + 1

    def days(self) -> Iterator[date]:
        """Iterate every day in the range in ascending order."""
        for offset in range(self.day_count):
            yield self.start + timedelta(days=offset)

    def contains(self, value: str | date) -> bool:
        """Check whether a day falls inside the range."""
        return self.start <= parse_date(value) <= self.end

    def to_dict(self) -> dict[str, str]:
        """Convert to ``yyyy-MM-dd`` strings."""
        return {"start": format_date(self.start), "end": format_date(self.end)}


def fixed_range(days: int, today: date | None = None) -> DateRange:
    """Build an N-day inclusive window ending today.

    Args:
        days: Window length in days (at least 1).
        today: Anchor day; defaults to the current UTC date.

    Returns:
        DateRange covering exactly ``days`` days.
    """
    if days < 1:
        raise ValueError(f"Window must cover at least one day, got {days}")
    end = today or utc_today()
    return DateRange(start=end - timedelta(days=days - 1), end=end)


def parse_period(
    value: Period | str | None,
    default: Period = Period.MONTH,
) -> Period:
    """Read a period selector, falling back to a default.

    Args:
        value: Period enum member, its string value, or None.
        default: Period used when value is missing or unrecognised.

    Returns:
        The selected Period.
    """
    if value is None or value == "":
        return default
    try:
        return Period(value)
    except ValueError:
        logger.debug("Unknown period %r, using %s", value, default.value)
        return default


def resolve_range(period: Period | str | None, today: date | None = None) -> DateRange:
    """Resolve a period selector to its date range.

    Unknown selectors resolve to the month window.

    Args:
        period: Period enum member or its string value.
        today: Anchor day; defaults to the current UTC date.

    Returns:
        DateRange ending today.

    Example:
        >>> resolve_range("week", date(2023, 1, 7))
        DateRange(start=datetime.date(2023, 1, 1), end=datetime.date(2023, 1, 7))
    """
    return fixed_range(parse_period(period).days, today)
