# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Data models for study activity.

This module defines Pydantic models for:
- Rows the analytics aggregator consumes (study time, study logs,
  self-evaluations, student profiles)
- Write-path requests whose validation the aggregator relies on
  (non-negative durations, levels between 1 and 5)

Rows come from the datastore as dictionaries with joined relations nested
under the related table name, e.g. ``{"subjects": {"name": "Math"}}``.
The ``from_row`` constructors flatten those joins.
"""

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

MAX_STUDY_LOG_LENGTH = 5000
MIN_LEVEL = 1
MAX_LEVEL = 5


def _optional_str(value: Any) -> str | None:
    """Stringify identifiers (UUIDs come back as objects from some drivers)."""
    return str(value) if value is not None else None


def _joined(row: dict[str, Any], relation: str, column: str) -> Any:
    """Read a column from a joined relation, tolerating a missing join."""
    related = row.get(relation)
    if isinstance(related, dict):
        return related.get(column)
    return None


class StudentProfile(BaseModel):
    """Student profile as stored in the profiles table."""

    model_config = ConfigDict(frozen=True)

    id: str
    full_name: str | None = None
    username: str | None = None
    school: str | None = None
    grade: int | None = None
    class_number: int | None = None
    student_number: int | None = None

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "StudentProfile":
        """Build a profile from a profiles row."""
        return cls.model_validate({**row, "id": str(row["id"])})


class StudyTimeEntry(BaseModel):
    """A timed study session.

    Attributes:
        id: Row identifier.
        student_id: Owning student.
        subject_id: Subject studied.
        subject_name: Joined subject name, None when the join is missing.
        student_name: Joined profile name (admin overall view only).
        duration_minutes: Session length; 0 while a timer is still running.
        study_date: Calendar day the session is attributed to.
        start_time: When the timer started.
        end_time: When the timer stopped.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    student_id: str
    subject_id: str | None = None
    subject_name: str | None = None
    student_name: str | None = None
    duration_minutes: int = Field(default=0, ge=0)
    study_date: date
    start_time: datetime | None = None
    end_time: datetime | None = None

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "StudyTimeEntry":
        """Build an entry from a study_time_logs row with joins."""
        return cls(
            id=str(row["id"]),
            student_id=str(row["student_id"]),
            subject_id=_optional_str(row.get("subject_id")),
            subject_name=row.get("subject_name") or _joined(row, "subjects", "name"),
            student_name=row.get("student_name") or _joined(row, "profiles", "full_name"),
            duration_minutes=row.get("duration_minutes") or 0,
            study_date=row["study_date"],
            start_time=row.get("start_time"),
            end_time=row.get("end_time"),
        )


class StudyLogEntry(BaseModel):
    """A free-text study journal entry (one per student, subject and day)."""

    model_config = ConfigDict(frozen=True)

    id: str
    student_id: str
    subject_id: str | None = None
    subject_name: str | None = None
    content: str
    study_date: date

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "StudyLogEntry":
        """Build an entry from a study_logs row with the subject join."""
        return cls(
            id=str(row["id"]),
            student_id=str(row["student_id"]),
            subject_id=_optional_str(row.get("subject_id")),
            subject_name=row.get("subject_name") or _joined(row, "subjects", "name"),
            content=row.get("content") or "",
            study_date=row["study_date"],
        )


class SelfEvaluation(BaseModel):
    """A daily self-evaluation (one per student and day)."""

    model_config = ConfigDict(frozen=True)

    id: str
    student_id: str
    evaluation_date: date
    satisfaction_level: int = Field(ge=MIN_LEVEL, le=MAX_LEVEL)
    achievement_level: int = Field(ge=MIN_LEVEL, le=MAX_LEVEL)
    focus_level: int = Field(ge=MIN_LEVEL, le=MAX_LEVEL)
    reflection: str | None = None
    goals_for_tomorrow: str | None = None

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "SelfEvaluation":
        """Build an evaluation from a self_evaluations row."""
        return cls.model_validate({**row, "id": str(row["id"]), "student_id": str(row["student_id"])})


# ============================================================================
# Write-path requests
# ============================================================================


class StudyLogCreate(BaseModel):
    """Request to add (or replace today's) study log for a subject."""

    subject_id: str = Field(min_length=1)
    content: str = Field(max_length=MAX_STUDY_LOG_LENGTH)

    @field_validator("content")
    @classmethod
    def content_not_blank(cls, value: str) -> str:
        """Reject whitespace-only content."""
        if not value.strip():
            raise ValueError("Study log content must not be blank")
        return value


class StudyTimeStop(BaseModel):
    """Request to close a running study-time log."""

    log_id: str = Field(min_length=1)
    duration_minutes: int = Field(gt=0)


class SelfEvaluationCreate(BaseModel):
    """Request to add (or replace today's) self-evaluation."""

    satisfaction_level: int = Field(ge=MIN_LEVEL, le=MAX_LEVEL)
    achievement_level: int = Field(ge=MIN_LEVEL, le=MAX_LEVEL)
    focus_level: int = Field(ge=MIN_LEVEL, le=MAX_LEVEL)
    reflection: str | None = None
    goals_for_tomorrow: str | None = None
