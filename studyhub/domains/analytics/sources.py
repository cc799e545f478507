# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Data source interface for analytics rows.

The persistence layer is an external collaborator. AnalyticsService only
needs the queries below, each returning rows shaped like the datastore's
tables (joined relations nested under the related table name).
"""

from typing import Any, Protocol

from studyhub.domains.analytics.periods import DateRange

Row = dict[str, Any]


class StudyDataSource(Protocol):
    """Queries the analytics views need from the datastore."""

    async def fetch_study_time_entries(
        self,
        date_range: DateRange,
        student_id: str | None = None,
    ) -> list[Row]:
        """Study-time rows in the range, for one student or all students.

        Rows carry ``subjects.name`` and, when student_id is None,
        ``profiles.full_name``.
        """
        ...

    async def fetch_self_evaluations(
        self,
        date_range: DateRange,
        student_id: str,
    ) -> list[Row]:
        """Self-evaluation rows of a student in the range."""
        ...

    async def fetch_study_logs(
        self,
        date_range: DateRange,
        student_id: str,
        start: int,
        end: int,
    ) -> tuple[list[Row], int]:
        """One page of study log rows, newest first, plus the total count.

        ``start`` and ``end`` are inclusive row offsets.
        """
        ...

    async def fetch_student(self, student_id: str) -> Row | None:
        """Profile row of a student, None when it does not exist."""
        ...

    async def fetch_students(self) -> list[Row]:
        """Profile rows of every student, ordered by name."""
        ...
