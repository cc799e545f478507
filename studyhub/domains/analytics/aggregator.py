# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Analytics aggregation pipeline.

This module chains the aggregation stages for each analytics view:
- Student self-view: summary, daily series, evaluation trend and averages,
  subject ranking and the current study log page
- Admin single-student view: the same aggregates over the admin window
- Admin overall view: totals across all students plus a leaderboard

Stages run in one direction (rows -> grouped totals -> derived metrics ->
series) and never mutate each other's output. The aggregator is synchronous
and stateless; rows are fetched beforehand by AnalyticsService.

Usage:
    from studyhub.domains.analytics import AnalyticsAggregator

    aggregator = AnalyticsAggregator()
    stats = aggregator.student_stats(
        period=Period.WEEK,
        date_range=resolve_range(Period.WEEK, today),
        study_time_entries=entries,
        self_evaluations=evaluations,
        study_logs=logs,
        pagination=build_pagination(1, 10, total),
    )
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from studyhub.core.config.settings import AnalyticsSettings
from studyhub.domains.analytics.metrics import (
    EvaluationAverages,
    Summary,
    compute_summary,
    evaluation_averages,
)
from studyhub.domains.analytics.pagination import PaginationInfo
from studyhub.domains.analytics.periods import DateRange, Period
from studyhub.domains.analytics.reducers import (
    group_by_day,
    group_by_student,
    group_by_subject,
    group_logs_by_day,
)
from studyhub.domains.analytics.series import (
    DailyPoint,
    EvaluationPoint,
    RankedStudent,
    RankedSubject,
    build_daily_series,
    build_evaluation_trend,
    build_student_ranking,
    build_subject_ranking,
)
from studyhub.models.study import (
    SelfEvaluation,
    StudentProfile,
    StudyLogEntry,
    StudyTimeEntry,
)
from studyhub.utils.datetime import format_date, format_day_label

logger = logging.getLogger(__name__)


def _study_log_dict(entry: StudyLogEntry) -> dict[str, Any]:
    return {
        "id": entry.id,
        "subject_id": entry.subject_id,
        "subject_name": entry.subject_name,
        "content": entry.content,
        "study_date": format_date(entry.study_date),
    }


def _student_dict(student: StudentProfile | None) -> dict[str, Any] | None:
    if student is None:
        return None
    return student.model_dump()


@dataclass
class StudentAnalytics:
    """Aggregates for one student over a range.

    Shared by the student self-view and the admin single-student view.
    """

    date_range: DateRange
    summary: Summary
    subject_totals: dict[str, int]
    daily_totals: dict[str, int]
    daily_series: list[DailyPoint]
    subject_ranking: list[RankedSubject]
    evaluation_averages: EvaluationAverages | None
    evaluation_trend: list[EvaluationPoint]
    student: StudentProfile | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for API response."""
        return {
            "student": _student_dict(self.student),
            "date_range": self.date_range.to_dict(),
            "summary": self.summary.to_dict(),
            "subject_totals": dict(sorted(self.subject_totals.items())),
            "daily_totals": dict(sorted(self.daily_totals.items())),
            "daily_series": [point.to_dict() for point in self.daily_series],
            "subject_ranking": [subject.to_dict() for subject in self.subject_ranking],
            "evaluation_averages": (
                self.evaluation_averages.to_dict() if self.evaluation_averages else None
            ),
            "evaluation_trend": [point.to_dict() for point in self.evaluation_trend],
        }


@dataclass
class StudentLearningStats:
    """Student self-view: analytics plus the paged study log listing."""

    period: Period
    analytics: StudentAnalytics
    pagination: PaginationInfo
    study_logs: list[StudyLogEntry] = field(default_factory=list)

    @property
    def date_range(self) -> DateRange:
        return self.analytics.date_range

    @property
    def summary(self) -> Summary:
        return self.analytics.summary

    @property
    def study_logs_by_day(self) -> dict[str, list[StudyLogEntry]]:
        """Current log page grouped by day, newest day first."""
        return group_logs_by_day(self.study_logs)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for API response."""
        return {
            "period": self.period.value,
            **self.analytics.to_dict(),
            "study_logs": [_study_log_dict(entry) for entry in self.study_logs],
            "study_logs_by_day": [
                {
                    "date": day,
                    "formatted_date": format_day_label(day),
                    "logs": [_study_log_dict(entry) for entry in entries],
                }
                for day, entries in self.study_logs_by_day.items()
            ],
            "pagination": self.pagination.to_dict(),
        }


@dataclass
class OverallLearningStats:
    """Admin overall view across all students."""

    date_range: DateRange
    summary: Summary
    subject_totals: dict[str, int]
    daily_totals: dict[str, int]
    daily_series: list[DailyPoint]
    subject_ranking: list[RankedSubject]
    student_rankings: list[RankedStudent]
    students_studied: int

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for API response."""
        return {
            "date_range": self.date_range.to_dict(),
            "summary": self.summary.to_dict(),
            "subject_totals": dict(sorted(self.subject_totals.items())),
            "daily_totals": dict(sorted(self.daily_totals.items())),
            "daily_series": [point.to_dict() for point in self.daily_series],
            "subject_ranking": [subject.to_dict() for subject in self.subject_ranking],
            "student_rankings": [student.to_dict() for student in self.student_rankings],
            "students_studied": self.students_studied,
        }


class AnalyticsAggregator:
    """Chains the aggregation stages for each analytics view.

    Attributes:
        settings: Labels and limits used while aggregating.
    """

    def __init__(self, settings: AnalyticsSettings | None = None) -> None:
        """Initialize the aggregator.

        Args:
            settings: Analytics settings; defaults are used when omitted.
        """
        self.settings = settings or AnalyticsSettings()

    def student_analytics(
        self,
        date_range: DateRange,
        study_time_entries: Sequence[StudyTimeEntry] | None,
        self_evaluations: Sequence[SelfEvaluation] | None,
        student: StudentProfile | None = None,
    ) -> StudentAnalytics:
        """Aggregate one student's study time and evaluations.

        Args:
            date_range: Resolved range the rows were fetched for.
            study_time_entries: The student's study-time entries.
            self_evaluations: The student's self-evaluations.
            student: Profile to attach to the result.

        Returns:
            StudentAnalytics for the range.
        """
        # Only rows dated inside the range are aggregated
        entries = [
            entry for entry in study_time_entries or () if date_range.contains(entry.study_date)
        ]
        subject_totals = group_by_subject(entries, self.settings.unknown_subject_label)
        daily_totals = group_by_day(entries)
        in_range_evaluations = [
            evaluation
            for evaluation in self_evaluations or ()
            if date_range.contains(evaluation.evaluation_date)
        ]

        summary = compute_summary(
            daily_totals,
            subject_totals,
            date_range,
            self.settings.no_data_label,
        )

        logger.debug(
            "Aggregated student analytics: range=%s..%s, days_studied=%d, total_minutes=%d",
            date_range.start,
            date_range.end,
            summary.days_studied,
            summary.total_study_time.total_minutes,
        )

        return StudentAnalytics(
            date_range=date_range,
            summary=summary,
            subject_totals=subject_totals,
            daily_totals=daily_totals,
            daily_series=build_daily_series(daily_totals, date_range),
            subject_ranking=build_subject_ranking(subject_totals),
            evaluation_averages=evaluation_averages(in_range_evaluations),
            evaluation_trend=build_evaluation_trend(in_range_evaluations),
            student=student,
        )

    def student_stats(
        self,
        period: Period,
        date_range: DateRange,
        study_time_entries: Sequence[StudyTimeEntry] | None,
        self_evaluations: Sequence[SelfEvaluation] | None,
        study_logs: Sequence[StudyLogEntry] | None,
        pagination: PaginationInfo,
        student: StudentProfile | None = None,
    ) -> StudentLearningStats:
        """Aggregate the student self-view.

        Args:
            period: Selected period.
            date_range: Range resolved from the period.
            study_time_entries: The student's study-time entries.
            self_evaluations: The student's self-evaluations.
            study_logs: The current page of study logs.
            pagination: Page position and total log count.
            student: The student's profile.

        Returns:
            StudentLearningStats ready for rendering or export.
        """
        analytics = self.student_analytics(
            date_range,
            study_time_entries,
            self_evaluations,
            student=student,
        )
        return StudentLearningStats(
            period=period,
            analytics=analytics,
            pagination=pagination,
            study_logs=list(study_logs or ()),
        )

    def overall_stats(
        self,
        date_range: DateRange,
        study_time_entries: Sequence[StudyTimeEntry] | None,
    ) -> OverallLearningStats:
        """Aggregate the admin overall view across all students.

        Args:
            date_range: Admin window.
            study_time_entries: Entries of every student in the window.

        Returns:
            OverallLearningStats with the top-N leaderboard.
        """
        entries = [
            entry for entry in study_time_entries or () if date_range.contains(entry.study_date)
        ]
        subject_totals = group_by_subject(entries, self.settings.unknown_subject_label)
        daily_totals = group_by_day(entries)
        student_totals = group_by_student(entries, self.settings.unknown_student_label)

        summary = compute_summary(
            daily_totals,
            subject_totals,
            date_range,
            self.settings.no_data_label,
        )

        logger.debug(
            "Aggregated overall analytics: range=%s..%s, students=%d, total_minutes=%d",
            date_range.start,
            date_range.end,
            len(student_totals),
            summary.total_study_time.total_minutes,
        )

        return OverallLearningStats(
            date_range=date_range,
            summary=summary,
            subject_totals=subject_totals,
            daily_totals=daily_totals,
            daily_series=build_daily_series(daily_totals, date_range),
            subject_ranking=build_subject_ranking(subject_totals),
            student_rankings=build_student_ranking(
                student_totals,
                limit=self.settings.top_students_limit,
            ),
            students_studied=len(student_totals),
        )
