# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Pytest configuration and shared fixtures.

This module provides fixtures used across the unit tests:
- A fixed "today" so date ranges are deterministic
- Row factories shaped like the datastore's tables
- Model factories for the pure aggregation stages
"""

from collections.abc import Callable, Generator
from datetime import date
from typing import Any

import pytest

from studyhub.core.config.settings import clear_settings_cache
from studyhub.models.study import SelfEvaluation, StudyTimeEntry


# =============================================================================
# Marker Configuration
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "slow: mark test as slow running"
    )


# =============================================================================
# Settings Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None, None, None]:
    """Clear the cached settings around every test."""
    clear_settings_cache()
    yield
    clear_settings_cache()


# =============================================================================
# Helper Fixtures
# =============================================================================


@pytest.fixture
def sample_student_id() -> str:
    """Provide a sample student ID for testing."""
    return "550e8400-e29b-41d4-a716-446655440001"


@pytest.fixture
def today() -> date:
    """Provide a fixed anchor day for date ranges."""
    return date(2023, 1, 7)


@pytest.fixture
def make_entry() -> Callable[..., StudyTimeEntry]:
    """Provide a factory for study-time entries."""
    counter = {"next": 0}

    def _make(
        study_date: str,
        minutes: int,
        subject: str | None = "Math",
        student_id: str = "student-1",
        student_name: str | None = None,
    ) -> StudyTimeEntry:
        counter["next"] += 1
        return StudyTimeEntry(
            id=f"entry-{counter['next']}",
            student_id=student_id,
            subject_name=subject,
            student_name=student_name,
            duration_minutes=minutes,
            study_date=date.fromisoformat(study_date),
        )

    return _make


@pytest.fixture
def make_evaluation() -> Callable[..., SelfEvaluation]:
    """Provide a factory for self-evaluations."""
    counter = {"next": 0}

    def _make(
        evaluation_date: str,
        satisfaction: int,
        achievement: int,
        focus: int,
        student_id: str = "student-1",
    ) -> SelfEvaluation:
        counter["next"] += 1
        return SelfEvaluation(
            id=f"evaluation-{counter['next']}",
            student_id=student_id,
            evaluation_date=date.fromisoformat(evaluation_date),
            satisfaction_level=satisfaction,
            achievement_level=achievement,
            focus_level=focus,
        )

    return _make


@pytest.fixture
def sample_time_rows(sample_student_id: str) -> list[dict[str, Any]]:
    """Provide study_time_logs rows with the subject join."""
    return [
        {
            "id": "t-1",
            "student_id": sample_student_id,
            "subject_id": "s-math",
            "duration_minutes": 60,
            "study_date": "2023-01-01",
            "subjects": {"name": "Math"},
        },
        {
            "id": "t-2",
            "student_id": sample_student_id,
            "subject_id": "s-english",
            "duration_minutes": 30,
            "study_date": "2023-01-01",
            "subjects": {"name": "English"},
        },
        {
            "id": "t-3",
            "student_id": sample_student_id,
            "subject_id": "s-math",
            "duration_minutes": 45,
            "study_date": "2023-01-03",
            "subjects": {"name": "Math"},
        },
    ]


@pytest.fixture
def sample_evaluation_rows(sample_student_id: str) -> list[dict[str, Any]]:
    """Provide self_evaluations rows."""
    return [
        {
            "id": "e-1",
            "student_id": sample_student_id,
            "evaluation_date": "2023-01-01",
            "satisfaction_level": 4,
            "achievement_level": 3,
            "focus_level": 5,
        },
        {
            "id": "e-2",
            "student_id": sample_student_id,
            "evaluation_date": "2023-01-02",
            "satisfaction_level": 2,
            "achievement_level": 5,
            "focus_level": 3,
        },
    ]


@pytest.fixture
def sample_student_row(sample_student_id: str) -> dict[str, Any]:
    """Provide a profiles row."""
    return {
        "id": sample_student_id,
        "full_name": "Kim Minji",
        "username": "minji",
        "school": "Seoul High",
        "grade": 2,
        "class_number": 3,
        "student_number": 14,
    }
