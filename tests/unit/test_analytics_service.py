# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for analytics service."""

from datetime import date, datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
from pydantic import ValidationError

from studyhub.core.config.settings import AnalyticsSettings
from studyhub.domains.analytics.exceptions import (
    AnalyticsError,
    AnalyticsUnavailableError,
    StudentNotFoundError,
)
from studyhub.domains.analytics.periods import DateRange
from studyhub.domains.analytics.service import (
    STATS_UNAVAILABLE_MESSAGE,
    STUDENTS_UNAVAILABLE_MESSAGE,
    AnalyticsService,
)


@pytest.fixture
def mock_source(sample_time_rows, sample_evaluation_rows, sample_student_row):
    """Create mock study data source."""
    source = MagicMock()
    source.fetch_study_time_entries = AsyncMock(return_value=sample_time_rows)
    source.fetch_self_evaluations = AsyncMock(return_value=sample_evaluation_rows)
    source.fetch_study_logs = AsyncMock(
        return_value=(
            [
                {
                    "id": "l-1",
                    "student_id": sample_student_row["id"],
                    "subject_id": "s-math",
                    "content": "Fractions review",
                    "study_date": "2023-01-03",
                    "subjects": {"name": "Math"},
                }
            ],
            1,
        )
    )
    source.fetch_student = AsyncMock(return_value=sample_student_row)
    source.fetch_students = AsyncMock(return_value=[sample_student_row])
    return source


@pytest.fixture
def service(mock_source) -> AnalyticsService:
    """Create analytics service with mock source."""
    return AnalyticsService(source=mock_source)


class TestGetStudentStats:
    """Tests for AnalyticsService.get_student_stats."""

    @pytest.mark.asyncio
    async def test_aggregates_rows(self, service, mock_source, sample_student_id, today) -> None:
        """Test the self-view built from fetched rows."""
        stats = await service.get_student_stats(sample_student_id, period="week", today=today)

        assert stats.summary.total_study_time.total_minutes == 135
        assert stats.summary.days_studied == 2
        assert stats.summary.study_rate == 29
        assert stats.analytics.subject_totals == {"Math": 105, "English": 30}
        assert stats.analytics.student is not None
        assert stats.analytics.student.full_name == "Kim Minji"
        assert stats.study_logs[0].subject_name == "Math"
        assert stats.pagination.total_pages == 1

    @pytest.mark.asyncio
    async def test_queries_use_resolved_range(
        self, service, mock_source, sample_student_id, today
    ) -> None:
        """Test that every query receives the resolved range."""
        await service.get_student_stats(sample_student_id, period="week", page=2, today=today)

        expected = DateRange(start=date(2023, 1, 1), end=date(2023, 1, 7))
        mock_source.fetch_study_time_entries.assert_awaited_once_with(expected, sample_student_id)
        mock_source.fetch_self_evaluations.assert_awaited_once_with(expected, sample_student_id)
        mock_source.fetch_study_logs.assert_awaited_once_with(
            expected, sample_student_id, 10, 19
        )

    @pytest.mark.asyncio
    async def test_default_period(self, service, sample_student_id, today) -> None:
        """Test that the configured default period is used."""
        stats = await service.get_student_stats(sample_student_id, today=today)

        assert stats.period.value == "month"
        assert stats.summary.total_days == 30

    @pytest.mark.asyncio
    async def test_page_size_capped(self, mock_source, sample_student_id, today) -> None:
        """Test that oversized pages are capped at max_page_size."""
        service = AnalyticsService(
            source=mock_source,
            settings=AnalyticsSettings(max_page_size=20),
        )

        stats = await service.get_student_stats(sample_student_id, page_size=500, today=today)

        assert stats.pagination.page_size == 20
        args = mock_source.fetch_study_logs.await_args.args
        assert args[2:] == (0, 19)

    @pytest.mark.asyncio
    async def test_invalid_page(self, service, sample_student_id, today) -> None:
        """Test that page zero is rejected."""
        with pytest.raises(ValidationError):
            await service.get_student_stats(sample_student_id, page=0, today=today)

    @pytest.mark.asyncio
    async def test_unknown_period_uses_default(self, service, sample_student_id, today) -> None:
        """Test that an unknown period falls back to the configured default."""
        stats = await service.get_student_stats(sample_student_id, period="year", today=today)

        assert stats.period.value == "month"
        assert stats.date_range == DateRange(start=date(2022, 12, 9), end=today)

    @pytest.mark.asyncio
    async def test_unknown_period_uses_configured_default(
        self, mock_source, sample_student_id, today
    ) -> None:
        """Test that the fallback follows default_period."""
        service = AnalyticsService(
            source=mock_source,
            settings=AnalyticsSettings(default_period="week"),
        )

        stats = await service.get_student_stats(sample_student_id, period="year", today=today)

        assert stats.period.value == "week"
        assert stats.summary.total_days == 7

    @pytest.mark.asyncio
    async def test_zero_page_size_rejected(self, service, sample_student_id, today) -> None:
        """Test that a page size of zero is rejected, not replaced."""
        with pytest.raises(ValidationError):
            await service.get_student_stats(sample_student_id, page_size=0, today=today)

    @pytest.mark.asyncio
    async def test_query_failure(self, service, mock_source, sample_student_id, today) -> None:
        """Test that a failing query raises a retryable error."""
        mock_source.fetch_self_evaluations.side_effect = ConnectionError("timeout")

        with pytest.raises(AnalyticsUnavailableError) as exc_info:
            await service.get_student_stats(sample_student_id, today=today)

        assert exc_info.value.message == STATS_UNAVAILABLE_MESSAGE
        assert exc_info.value.retryable is True
        assert exc_info.value.details["student_id"] == sample_student_id
        assert isinstance(exc_info.value.__cause__, ConnectionError)

    @pytest.mark.asyncio
    async def test_empty_rows(self, service, mock_source, sample_student_id, today) -> None:
        """Test that missing rows give an empty view."""
        mock_source.fetch_study_time_entries.return_value = None
        mock_source.fetch_self_evaluations.return_value = []
        mock_source.fetch_study_logs.return_value = ([], None)
        mock_source.fetch_student.return_value = None

        stats = await service.get_student_stats(sample_student_id, period="week", today=today)

        assert stats.summary.total_study_time.total_minutes == 0
        assert stats.analytics.evaluation_averages is None
        assert stats.analytics.student is None
        assert stats.pagination.total_items == 0


class TestGenerateReport:
    """Tests for AnalyticsService.generate_report."""

    @pytest.mark.asyncio
    async def test_report(self, service, sample_student_id, today) -> None:
        """Test that the report wraps the self-view."""
        generated_at = datetime(2023, 1, 7, 12, 0, tzinfo=timezone.utc)

        report = await service.generate_report(
            sample_student_id,
            period="week",
            today=today,
            generated_at=generated_at,
        )
        payload = report.to_dict()

        assert report.filename == "learning_report_2023-01-07.json"
        assert payload["report_type"] == "Learning Statistics Report"
        assert payload["summary"]["study_rate"] == 29
        assert payload["study_logs"][0]["content"] == "Fractions review"


class TestGetStudentAnalytics:
    """Tests for AnalyticsService.get_student_analytics."""

    @pytest.mark.asyncio
    async def test_admin_window(self, service, mock_source, sample_student_id, today) -> None:
        """Test that the admin view covers the fixed window."""
        result = await service.get_student_analytics(sample_student_id, today=today)

        expected = DateRange(start=date(2022, 12, 9), end=today)
        mock_source.fetch_study_time_entries.assert_awaited_once_with(expected, sample_student_id)
        assert result.summary.total_days == 30
        assert result.student is not None
        assert result.student.school == "Seoul High"
        assert result.evaluation_averages is not None
        assert result.evaluation_averages.satisfaction == 3

    @pytest.mark.asyncio
    async def test_student_not_found(self, service, mock_source, today) -> None:
        """Test that an unknown student raises."""
        mock_source.fetch_student.return_value = None

        with pytest.raises(StudentNotFoundError) as exc_info:
            await service.get_student_analytics("missing", today=today)

        assert exc_info.value.student_id == "missing"
        assert isinstance(exc_info.value, AnalyticsError)


class TestGetOverallStats:
    """Tests for AnalyticsService.get_overall_stats."""

    @pytest.mark.asyncio
    async def test_all_students(self, service, mock_source, today) -> None:
        """Test that the overall view queries every student."""
        mock_source.fetch_study_time_entries.return_value = [
            {
                "id": "t-1",
                "student_id": "a",
                "duration_minutes": 60,
                "study_date": "2023-01-05",
                "subjects": {"name": "Math"},
                "profiles": {"full_name": "Alice"},
            },
            {
                "id": "t-2",
                "student_id": "b",
                "duration_minutes": 90,
                "study_date": "2023-01-06",
                "subjects": None,
                "profiles": None,
            },
        ]

        stats = await service.get_overall_stats(today=today)

        date_range = mock_source.fetch_study_time_entries.await_args.args[0]
        assert date_range.day_count == 30
        assert mock_source.fetch_study_time_entries.await_args.args[1] is None
        assert [student.name for student in stats.student_rankings] == ["Unknown", "Alice"]
        assert stats.subject_totals == {"Math": 60, "Unknown": 90}

    @pytest.mark.asyncio
    async def test_query_failure(self, service, mock_source, today) -> None:
        """Test that a failing query raises a retryable error."""
        mock_source.fetch_study_time_entries.side_effect = RuntimeError("boom")

        with pytest.raises(AnalyticsUnavailableError):
            await service.get_overall_stats(today=today)


class TestListStudents:
    """Tests for AnalyticsService.list_students."""

    @pytest.mark.asyncio
    async def test_profiles(self, service, sample_student_id) -> None:
        """Test that rows become profiles."""
        students = await service.list_students()

        assert [student.id for student in students] == [sample_student_id]

    @pytest.mark.asyncio
    async def test_failure(self, service, mock_source) -> None:
        """Test that a failing query raises a retryable error."""
        mock_source.fetch_students.side_effect = ConnectionError("down")

        with pytest.raises(AnalyticsUnavailableError, match="student list"):
            await service.list_students()

        assert STUDENTS_UNAVAILABLE_MESSAGE.startswith("Could not load")
