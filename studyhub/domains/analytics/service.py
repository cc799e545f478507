# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Analytics service module.

This module provides the service that fetches rows for an analytics view
and hands them to the aggregator:
- Student self-view with paged study logs
- Downloadable learning report
- Admin single-student view
- Admin overall view

Independent queries of a view run concurrently. A failing query aborts the
view with AnalyticsUnavailableError, whose message can be shown to the user
together with a retry action; the aggregator is not invoked in that case.

Usage:
    from studyhub.domains.analytics import AnalyticsService

    service = AnalyticsService(source=data_source)

    stats = await service.get_student_stats(student_id, period="week", page=2)
    report = await service.generate_report(student_id, period="month")
    overall = await service.get_overall_stats()
"""

import asyncio
import logging
from collections.abc import Awaitable
from datetime import date, datetime
from typing import Any

from studyhub.core.config.settings import AnalyticsSettings
from studyhub.domains.analytics.aggregator import (
    AnalyticsAggregator,
    OverallLearningStats,
    StudentAnalytics,
    StudentLearningStats,
)
from studyhub.domains.analytics.exceptions import (
    AnalyticsUnavailableError,
    StudentNotFoundError,
)
from studyhub.domains.analytics.pagination import PageRequest, build_pagination, page_bounds
from studyhub.domains.analytics.periods import (
    Period,
    fixed_range,
    parse_period,
    resolve_range,
)
from studyhub.domains.analytics.report import LearningReport, build_report
from studyhub.domains.analytics.sources import StudyDataSource
from studyhub.models.study import (
    SelfEvaluation,
    StudentProfile,
    StudyLogEntry,
    StudyTimeEntry,
)

logger = logging.getLogger(__name__)

STATS_UNAVAILABLE_MESSAGE = "Could not load learning statistics. Please try again."
STUDENTS_UNAVAILABLE_MESSAGE = "Could not load the student list. Please try again."


class AnalyticsService:
    """Service for fetching and aggregating analytics views.

    Attributes:
        _source: Data source the rows are read from.
        settings: Analytics settings (defaults, labels, limits).
        aggregator: Aggregation pipeline.
    """

    def __init__(
        self,
        source: StudyDataSource,
        settings: AnalyticsSettings | None = None,
    ) -> None:
        """Initialize the analytics service.

        Args:
            source: Data source for study rows.
            settings: Analytics settings; defaults are used when omitted.
        """
        self._source = source
        self.settings = settings or AnalyticsSettings()
        self.aggregator = AnalyticsAggregator(self.settings)

    async def get_student_stats(
        self,
        student_id: str,
        period: Period | str | None = None,
        page: int = 1,
        page_size: int | None = None,
        today: date | None = None,
    ) -> StudentLearningStats:
        """Get the student self-view.

        Args:
            student_id: Student identifier.
            period: Lookback period; missing or unknown values use the
                configured default period.
            page: 1-based study log page.
            page_size: Study logs per page; capped at max_page_size.
            today: Anchor day for the range (defaults to the UTC date).

        Returns:
            StudentLearningStats for the period.

        Raises:
            pydantic.ValidationError: If page or page_size is below 1.
            AnalyticsUnavailableError: If any query fails.
        """
        selected = parse_period(period, Period(self.settings.default_period))
        if page_size is None:
            page_size = self.settings.default_page_size
        request = PageRequest(
            page=page,
            page_size=min(page_size, self.settings.max_page_size),
        )
        date_range = resolve_range(selected, today)
        start, end = page_bounds(request.page, request.page_size)

        logger.debug(
            "Loading student stats: student=%s, period=%s, page=%d, page_size=%d",
            student_id,
            selected.value,
            request.page,
            request.page_size,
        )

        time_rows, evaluation_rows, (log_rows, log_count), student_row = await self._gather(
            {"student_id": student_id, "period": selected.value},
            self._source.fetch_study_time_entries(date_range, student_id),
            self._source.fetch_self_evaluations(date_range, student_id),
            self._source.fetch_study_logs(date_range, student_id, start, end),
            self._source.fetch_student(student_id),
        )

        stats = self.aggregator.student_stats(
            period=selected,
            date_range=date_range,
            study_time_entries=[StudyTimeEntry.from_row(row) for row in time_rows or ()],
            self_evaluations=[SelfEvaluation.from_row(row) for row in evaluation_rows or ()],
            study_logs=[StudyLogEntry.from_row(row) for row in log_rows or ()],
            pagination=build_pagination(request.page, request.page_size, log_count),
            student=StudentProfile.from_row(student_row) if student_row else None,
        )

        logger.info(
            "Student stats computed: student=%s, period=%s, days_studied=%d",
            student_id,
            selected.value,
            stats.summary.days_studied,
        )

        return stats

    async def generate_report(
        self,
        student_id: str,
        period: Period | str | None = None,
        today: date | None = None,
        generated_at: datetime | None = None,
    ) -> LearningReport:
        """Build the downloadable report for a student's self-view.

        The report covers the first study log page at the default page size.

        Args:
            student_id: Student identifier.
            period: Lookback period.
            today: Anchor day for the range.
            generated_at: Generation timestamp; defaults to now (UTC).

        Returns:
            LearningReport ready for serialization.
        """
        stats = await self.get_student_stats(student_id, period=period, today=today)
        report = build_report(stats, generated_at=generated_at, report_type=self.settings.report_type)

        logger.info(
            "Learning report generated: student=%s, period=%s",
            student_id,
            stats.period.value,
        )

        return report

    async def get_student_analytics(
        self,
        student_id: str,
        today: date | None = None,
    ) -> StudentAnalytics:
        """Get the admin view of a single student over the admin window.

        Args:
            student_id: Student identifier.
            today: Anchor day for the window.

        Returns:
            StudentAnalytics with the student's profile attached.

        Raises:
            StudentNotFoundError: If the student does not exist.
            AnalyticsUnavailableError: If any query fails.
        """
        date_range = fixed_range(self.settings.admin_window_days, today)

        student_row, time_rows, evaluation_rows = await self._gather(
            {"student_id": student_id, "view": "admin_student"},
            self._source.fetch_student(student_id),
            self._source.fetch_study_time_entries(date_range, student_id),
            self._source.fetch_self_evaluations(date_range, student_id),
        )

        if not student_row:
            raise StudentNotFoundError(student_id)

        return self.aggregator.student_analytics(
            date_range,
            [StudyTimeEntry.from_row(row) for row in time_rows or ()],
            [SelfEvaluation.from_row(row) for row in evaluation_rows or ()],
            student=StudentProfile.from_row(student_row),
        )

    async def get_overall_stats(self, today: date | None = None) -> OverallLearningStats:
        """Get the admin overall view across all students.

        Args:
            today: Anchor day for the window.

        Returns:
            OverallLearningStats for the admin window.

        Raises:
            AnalyticsUnavailableError: If the query fails.
        """
        date_range = fixed_range(self.settings.admin_window_days, today)

        (time_rows,) = await self._gather(
            {"view": "admin_overall"},
            self._source.fetch_study_time_entries(date_range, None),
        )

        stats = self.aggregator.overall_stats(
            date_range,
            [StudyTimeEntry.from_row(row) for row in time_rows or ()],
        )

        logger.info(
            "Overall stats computed: range=%s..%s, students=%d",
            date_range.start,
            date_range.end,
            stats.students_studied,
        )

        return stats

    async def list_students(self) -> list[StudentProfile]:
        """List every student profile for the admin student picker.

        Raises:
            AnalyticsUnavailableError: If the query fails.
        """
        try:
            rows = await self._source.fetch_students()
        except Exception as e:
            logger.error("Student list query failed: error=%s", str(e), exc_info=True)
            raise AnalyticsUnavailableError(STUDENTS_UNAVAILABLE_MESSAGE) from e

        return [StudentProfile.from_row(row) for row in rows or ()]

    async def _gather(
        self,
        context: dict[str, Any],
        *queries: Awaitable[Any],
    ) -> list[Any]:
        """Run independent queries concurrently.

        Args:
            context: Request details logged and attached on failure.
            *queries: Awaitables returning rows.

        Returns:
            Query results in argument order.

        Raises:
            AnalyticsUnavailableError: If any query fails.
        """
        try:
            return await asyncio.gather(*queries)
        except Exception as e:
            logger.error(
                "Analytics query failed: context=%s, error=%s",
                context,
                str(e),
                exc_info=True,
            )
            raise AnalyticsUnavailableError(STATS_UNAVAILABLE_MESSAGE, context) from e
