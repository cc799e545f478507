# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Analytics domain services.

This module provides learning analytics over study activity:
- Date ranges resolved from a period selector
- Grouping reducers (per subject, per day, per student)
- Derived metrics (totals, averages, study rate, extrema)
- Chart-ready series, rankings and study log pagination
- JSON report export

The aggregation stages are pure and synchronous. AnalyticsService fetches
rows from a StudyDataSource and feeds them to the AnalyticsAggregator.

Usage:
    from studyhub.domains.analytics import AnalyticsService

    service = AnalyticsService(source=data_source)
    stats = await service.get_student_stats(student_id, period="week")
    print(stats.summary.study_rate)

    # Pure stages
    from studyhub.domains.analytics import group_by_day, resolve_range

    date_range = resolve_range("week")
    totals = group_by_day(entries)
"""

from studyhub.domains.analytics.aggregator import (
    AnalyticsAggregator,
    OverallLearningStats,
    StudentAnalytics,
    StudentLearningStats,
)
from studyhub.domains.analytics.exceptions import (
    AnalyticsError,
    AnalyticsUnavailableError,
    StudentNotFoundError,
)
from studyhub.domains.analytics.metrics import (
    DurationBreakdown,
    EvaluationAverages,
    MostStudiedDay,
    MostStudiedSubject,
    Summary,
    compute_summary,
    duration_breakdown,
    evaluation_averages,
    most_studied_day,
    most_studied_subject,
)
from studyhub.domains.analytics.pagination import (
    Page,
    PageRequest,
    PaginationInfo,
    build_pagination,
    page_bounds,
    paginate_logs,
)
from studyhub.domains.analytics.periods import (
    DateRange,
    Period,
    fixed_range,
    parse_period,
    resolve_range,
)
from studyhub.domains.analytics.reducers import (
    StudentTotal,
    group_by_day,
    group_by_student,
    group_by_subject,
    group_logs_by_day,
)
from studyhub.domains.analytics.report import LearningReport, build_report
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
from studyhub.domains.analytics.service import AnalyticsService
from studyhub.domains.analytics.sources import StudyDataSource

__all__ = [
    # Periods
    "Period",
    "DateRange",
    "resolve_range",
    "fixed_range",
    "parse_period",
    # Reducers
    "StudentTotal",
    "group_by_subject",
    "group_by_day",
    "group_by_student",
    "group_logs_by_day",
    # Metrics
    "DurationBreakdown",
    "MostStudiedSubject",
    "MostStudiedDay",
    "EvaluationAverages",
    "Summary",
    "duration_breakdown",
    "most_studied_subject",
    "most_studied_day",
    "evaluation_averages",
    "compute_summary",
    # Series
    "DailyPoint",
    "EvaluationPoint",
    "RankedSubject",
    "RankedStudent",
    "build_daily_series",
    "build_evaluation_trend",
    "build_subject_ranking",
    "build_student_ranking",
    # Pagination
    "PageRequest",
    "PaginationInfo",
    "Page",
    "page_bounds",
    "build_pagination",
    "paginate_logs",
    # Aggregation
    "AnalyticsAggregator",
    "StudentAnalytics",
    "StudentLearningStats",
    "OverallLearningStats",
    # Report
    "LearningReport",
    "build_report",
    # Service
    "AnalyticsService",
    "StudyDataSource",
    # Errors
    "AnalyticsError",
    "AnalyticsUnavailableError",
    "StudentNotFoundError",
]
