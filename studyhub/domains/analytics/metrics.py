# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Derived metrics over grouped study totals.

This module computes the summary cards shown on the analytics pages:
- Total and average study time (hours/minutes decomposition)
- Days studied and study rate over the selected range
- Most studied subject and day
- Self-evaluation averages

Every division is guarded: empty input yields zeros, a sentinel or None,
never an exception.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from studyhub.domains.analytics.periods import DateRange
from studyhub.models.study import SelfEvaluation
from studyhub.utils.datetime import format_day_label, round_half_up

DEFAULT_NO_DATA_LABEL = "none"


@dataclass(frozen=True)
class DurationBreakdown:
    """Minutes split into whole hours and remaining minutes."""

    hours: int
    minutes: int
    total_minutes: int

    def to_dict(self) -> dict[str, int]:
        """Convert to dictionary."""
        return {
            "hours": self.hours,
            "minutes": self.minutes,
            "total_minutes": self.total_minutes,
        }


@dataclass(frozen=True)
class MostStudiedSubject:
    """Subject with the most accumulated minutes."""

    name: str
    minutes: int

    @property
    def hours(self) -> int:
        return self.minutes // 60

    @property
    def remaining_minutes(self) -> int:
        return self.minutes % 60

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "name": self.name,
            "minutes": self.minutes,
            "hours": self.hours,
            "remaining_minutes": self.remaining_minutes,
        }


@dataclass(frozen=True)
class MostStudiedDay:
    """Day with the most accumulated minutes.

    ``date`` is None for the sentinel returned when nothing was studied.
    """

    date: str | None
    minutes: int

    @property
    def formatted_date(self) -> str | None:
        return format_day_label(self.date) if self.date else None

    @property
    def hours(self) -> int:
        return self.minutes // 60

    @property
    def remaining_minutes(self) -> int:
        return self.minutes % 60

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "date": self.date,
            "formatted_date": self.formatted_date,
            "minutes": self.minutes,
            "hours": self.hours,
            "remaining_minutes": self.remaining_minutes,
        }


@dataclass(frozen=True)
class EvaluationAverages:
    """Mean self-evaluation levels, each within 1..5."""

    satisfaction: float
    achievement: float
    focus: float

    def to_dict(self) -> dict[str, float]:
        """Convert to dictionary."""
        return {
            "satisfaction": self.satisfaction,
            "achievement": self.achievement,
            "focus": self.focus,
        }


@dataclass(frozen=True)
class Summary:
    """Summary statistics for a date range.

    Attributes:
        total_study_time: Sum of all minutes.
        average_study_time: Mean minutes per day with activity.
        days_studied: Distinct days with at least one entry.
        total_days: Calendar days in the range.
        study_rate: Percentage of days in the range with activity.
        most_studied_subject: Subject extremum (sentinel when empty).
        most_studied_day: Day extremum (sentinel when empty).
    """

    total_study_time: DurationBreakdown
    average_study_time: DurationBreakdown
    days_studied: int
    total_days: int
    study_rate: int
    most_studied_subject: MostStudiedSubject
    most_studied_day: MostStudiedDay

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "total_study_time": self.total_study_time.to_dict(),
            "average_study_time": self.average_study_time.to_dict(),
            "days_studied": self.days_studied,
            "total_days": self.total_days,
            "study_rate": self.study_rate,
            "most_studied_subject": self.most_studied_subject.to_dict(),
            "most_studied_day": self.most_studied_day.to_dict(),
        }


def duration_breakdown(total_minutes: int) -> DurationBreakdown:
    """Split minutes into whole hours and remaining minutes.

    Example:
        >>> duration_breakdown(90)
        DurationBreakdown(hours=1, minutes=30, total_minutes=90)
    """
    return DurationBreakdown(
        hours=total_minutes // 60,
        minutes=total_minutes % 60,
        total_minutes=total_minutes,
    )


def _max_by_minutes(totals: Mapping[str, int]) -> tuple[str, int] | None:
    """Pick the key with the most minutes; ties go to the smallest key.

    Returns None when nothing has a positive total.
    """
    if not totals:
        return None
    best = min(totals.items(), key=lambda item: (-item[1], item[0]))
    if best[1] <= 0:
        return None
    return best


def most_studied_subject(
    subject_totals: Mapping[str, int] | None,
    no_data_label: str = DEFAULT_NO_DATA_LABEL,
) -> MostStudiedSubject:
    """Find the subject with the most minutes.

    Ties resolve to the lexicographically smallest name so the answer does
    not depend on row order.

    Args:
        subject_totals: Minutes per subject name.
        no_data_label: Name reported when there are no subjects.

    Returns:
        MostStudiedSubject, or a zero-minute sentinel named no_data_label
        when no subject has any minutes.
    """
    best = _max_by_minutes(subject_totals or {})
    if best is None:
        return MostStudiedSubject(name=no_data_label, minutes=0)
    return MostStudiedSubject(name=best[0], minutes=best[1])


def most_studied_day(daily_totals: Mapping[str, int] | None) -> MostStudiedDay:
    """Find the day with the most minutes (ties go to the earliest day)."""
    best = _max_by_minutes(daily_totals or {})
    if best is None:
        return MostStudiedDay(date=None, minutes=0)
    return MostStudiedDay(date=best[0], minutes=best[1])


def evaluation_averages(
    evaluations: Iterable[SelfEvaluation] | None,
    date_range: DateRange | None = None,
) -> EvaluationAverages | None:
    """Average satisfaction, achievement and focus levels.

    Args:
        evaluations: Self-evaluations to average.
        date_range: When given, evaluations dated outside it are ignored.

    Returns:
        EvaluationAverages, or None when no evaluation qualifies.
    """
    selected = [
        evaluation
        for evaluation in evaluations or ()
        if date_range is None or date_range.contains(evaluation.evaluation_date)
    ]
    if not selected:
        return None

    count = len(selected)
    return EvaluationAverages(
        satisfaction=sum(e.satisfaction_level for e in selected) / count,
        achievement=sum(e.achievement_level for e in selected) / count,
        focus=sum(e.focus_level for e in selected) / count,
    )


def compute_summary(
    daily_totals: Mapping[str, int] | None,
    subject_totals: Mapping[str, int] | None,
    date_range: DateRange,
    no_data_label: str = DEFAULT_NO_DATA_LABEL,
) -> Summary:
    """Compute the summary statistics for a range.

    Args:
        daily_totals: Minutes per day, only days with entries present.
        subject_totals: Minutes per subject name.
        date_range: The resolved range the totals were fetched for.
        no_data_label: Most-studied subject name when nothing was studied.

    Returns:
        Summary for the range.

    Example:
        >>> summary = compute_summary({"2023-01-01": 90}, {"math": 60, "english": 30}, rng)
        >>> summary.total_study_time.to_dict()
        {'hours': 1, 'minutes': 30, 'total_minutes': 90}
    """
    daily_totals = daily_totals or {}

    total_minutes = sum(daily_totals.values())
    days_studied = len(daily_totals)
    total_days = date_range.day_count

    average_minutes = round_half_up(total_minutes / days_studied) if days_studied > 0 else 0
    study_rate = round_half_up(100 * days_studied / total_days) if total_days > 0 else 0

    return Summary(
        total_study_time=duration_breakdown(total_minutes),
        average_study_time=duration_breakdown(average_minutes),
        days_studied=days_studied,
        total_days=total_days,
        study_rate=study_rate,
        most_studied_subject=most_studied_subject(subject_totals, no_data_label),
        most_studied_day=most_studied_day(daily_totals),
    )
