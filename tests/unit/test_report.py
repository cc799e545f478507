# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for learning report export."""

import json
from datetime import date, datetime, timezone

import pytest

from studyhub.domains.analytics.aggregator import AnalyticsAggregator, StudentLearningStats
from studyhub.domains.analytics.pagination import build_pagination
from studyhub.domains.analytics.periods import Period, resolve_range
from studyhub.domains.analytics.report import build_report


@pytest.fixture
def stats(today: date, make_entry) -> StudentLearningStats:
    """Provide aggregated self-view stats for a week."""
    return AnalyticsAggregator().student_stats(
        period=Period.WEEK,
        date_range=resolve_range(Period.WEEK, today),
        study_time_entries=[make_entry("2023-01-01", 90, "수학")],
        self_evaluations=[],
        study_logs=[],
        pagination=build_pagination(1, 10, 0),
    )


class TestLearningReport:
    """Tests for LearningReport."""

    def test_stamps_generation_time(self, stats) -> None:
        """Test that the report carries its timestamp and type."""
        generated_at = datetime(2023, 1, 7, 8, 30, tzinfo=timezone.utc)

        payload = build_report(stats, generated_at=generated_at).to_dict()

        assert payload["generated_at"] == "2023-01-07T08:30:00+00:00"
        assert payload["report_type"] == "Learning Statistics Report"
        assert payload["summary"]["total_study_time"]["total_minutes"] == 90
        assert payload["period"] == "week"

    def test_filename(self, stats) -> None:
        """Test the download file name."""
        report = build_report(stats, generated_at=datetime(2023, 1, 7, 23, 0, tzinfo=timezone.utc))

        assert report.filename == "learning_report_2023-01-07.json"

    def test_to_json(self, stats) -> None:
        """Test that the JSON document is indented and keeps unicode."""
        report = build_report(
            stats,
            generated_at=datetime(2023, 1, 7, tzinfo=timezone.utc),
            report_type="Weekly",
        )

        document = report.to_json()

        assert "수학" in document
        assert document.startswith("{\n  ")
        assert json.loads(document)["report_type"] == "Weekly"

    def test_defaults_to_now(self, stats) -> None:
        """Test that the generation time defaults to an aware UTC now."""
        report = build_report(stats)

        assert report.generated_at.tzinfo is not None
