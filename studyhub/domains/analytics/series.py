# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Chart-ready series and rankings.

The daily series is gap-filled: every day of the range appears exactly once,
zero-activity days included. The evaluation trend is not: days without an
evaluation are simply absent.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from studyhub.domains.analytics.periods import DateRange
from studyhub.domains.analytics.reducers import StudentTotal
from studyhub.models.study import SelfEvaluation
from studyhub.utils.datetime import format_date, format_day_label, round_half_up


def minutes_to_hours(minutes: int) -> float:
    """Convert minutes to hours with one decimal place."""
    return round_half_up(minutes / 60, 1)


@dataclass(frozen=True)
class DailyPoint:
    """Study minutes for one calendar day."""

    date: str
    minutes: int

    @property
    def formatted_date(self) -> str:
        return format_day_label(self.date)

    @property
    def hours(self) -> float:
        return minutes_to_hours(self.minutes)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "date": self.date,
            "formatted_date": self.formatted_date,
            "minutes": self.minutes,
            "hours": self.hours,
        }


@dataclass(frozen=True)
class EvaluationPoint:
    """One self-evaluation on the trend chart."""

    date: str
    satisfaction: int
    achievement: int
    focus: int

    @property
    def formatted_date(self) -> str:
        return format_day_label(self.date)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "date": self.date,
            "formatted_date": self.formatted_date,
            "satisfaction": self.satisfaction,
            "achievement": self.achievement,
            "focus": self.focus,
        }


@dataclass(frozen=True)
class RankedSubject:
    """Subject row of the per-subject bar chart."""

    name: str
    minutes: int

    @property
    def hours(self) -> float:
        return minutes_to_hours(self.minutes)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {"name": self.name, "minutes": self.minutes, "hours": self.hours}


@dataclass(frozen=True)
class RankedStudent:
    """Student row of the admin leaderboard."""

    id: str
    name: str
    total_minutes: int

    @property
    def hours(self) -> float:
        return minutes_to_hours(self.total_minutes)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "total_minutes": self.total_minutes,
            "hours": self.hours,
        }


def build_daily_series(
    daily_totals: Mapping[str, int] | None,
    date_range: DateRange,
) -> list[DailyPoint]:
    """Build the gap-filled daily study series.

    Args:
        daily_totals: Minutes per ``yyyy-MM-dd`` day (days with entries only).
        date_range: Range to cover.

    Returns:
        One DailyPoint per day of the range, ascending. Totals for days
        outside the range are ignored.
    """
    daily_totals = daily_totals or {}
    points = []
    for day in date_range.days():
        key = format_date(day)
        points.append(DailyPoint(date=key, minutes=daily_totals.get(key, 0)))
    return points


def build_evaluation_trend(
    evaluations: Iterable[SelfEvaluation] | None,
) -> list[EvaluationPoint]:
    """Build the self-evaluation trend, oldest first."""
    points = [
        EvaluationPoint(
            date=format_date(evaluation.evaluation_date),
            satisfaction=evaluation.satisfaction_level,
            achievement=evaluation.achievement_level,
            focus=evaluation.focus_level,
        )
        for evaluation in evaluations or ()
    ]
    points.sort(key=lambda point: point.date)
    return points


def build_subject_ranking(subject_totals: Mapping[str, int] | None) -> list[RankedSubject]:
    """Rank subjects by minutes, most studied first (ties by name)."""
    ranked = sorted((subject_totals or {}).items(), key=lambda item: (-item[1], item[0]))
    return [RankedSubject(name=name, minutes=minutes) for name, minutes in ranked]


def build_student_ranking(
    student_totals: Mapping[str, StudentTotal] | None,
    limit: int | None = None,
) -> list[RankedStudent]:
    """Rank students by minutes, most studied first.

    Args:
        student_totals: Totals per student id.
        limit: Keep only the top N students.

    Returns:
        RankedStudent list; ties are ordered by name, then id.
    """
    ranked = sorted(
        (
            RankedStudent(id=student_id, name=total.name, total_minutes=total.total_minutes)
            for student_id, total in (student_totals or {}).items()
        ),
        key=lambda student: (-student.total_minutes, student.name, student.id),
    )
    if limit is not None:
        return ranked[:limit]
    return ranked
