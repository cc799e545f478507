# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Pydantic models shared across StudyHub domains."""

from studyhub.models.study import (
    MAX_STUDY_LOG_LENGTH,
    SelfEvaluation,
    SelfEvaluationCreate,
    StudentProfile,
    StudyLogCreate,
    StudyLogEntry,
    StudyTimeEntry,
    StudyTimeStop,
)

__all__ = [
    "MAX_STUDY_LOG_LENGTH",
    # Rows
    "StudentProfile",
    "StudyTimeEntry",
    "StudyLogEntry",
    "SelfEvaluation",
    # Requests
    "StudyLogCreate",
    "StudyTimeStop",
    "SelfEvaluationCreate",
]
