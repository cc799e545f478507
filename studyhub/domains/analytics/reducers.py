# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Grouping reducers for study-time entries.

Each reducer folds study-time entries into keyed minute totals. Folds are
pure: ``None`` or empty input gives an empty dict, row order never changes
the totals, and durations are summed as stored (the write path already
rejected negative values). The current study log page is grouped by day
for display.
"""

from collections import defaultdict
from collections.abc import Iterable
from dataclasses import dataclass

from studyhub.models.study import StudyLogEntry, StudyTimeEntry
from studyhub.utils.datetime import format_date

DEFAULT_UNKNOWN_LABEL = "Unknown"


@dataclass
class StudentTotal:
    """Accumulated study time for one student."""

    name: str
    total_minutes: int = 0


def group_by_subject(
    entries: Iterable[StudyTimeEntry] | None,
    unknown_label: str = DEFAULT_UNKNOWN_LABEL,
) -> dict[str, int]:
    """Sum minutes per subject name.

    Args:
        entries: Study-time entries.
        unknown_label: Bucket for entries without a subject name.

    Returns:
        Mapping of subject name to total minutes.
    """
    totals: defaultdict[str, int] = defaultdict(int)
    for entry in entries or ():
        totals[entry.subject_name or unknown_label] += entry.duration_minutes
    return dict(totals)


def group_by_day(entries: Iterable[StudyTimeEntry] | None) -> dict[str, int]:
    """Sum minutes per calendar day.

    Only days with at least one entry appear; zero-activity days are added
    later by the series builder.

    Returns:
        Mapping of ``yyyy-MM-dd`` to total minutes.
    """
    totals: defaultdict[str, int] = defaultdict(int)
    for entry in entries or ():
        totals[format_date(entry.study_date)] += entry.duration_minutes
    return dict(totals)


def group_by_student(
    entries: Iterable[StudyTimeEntry] | None,
    unknown_label: str = DEFAULT_UNKNOWN_LABEL,
) -> dict[str, StudentTotal]:
    """Sum minutes per student, carrying the joined display name.

    The name comes from any row of the student that has one, so the result
    does not depend on which row happens to arrive first.

    Args:
        entries: Study-time entries across students.
        unknown_label: Name for students whose profile join is missing.

    Returns:
        Mapping of student id to StudentTotal.
    """
    totals: dict[str, StudentTotal] = {}
    for entry in entries or ():
        total = totals.get(entry.student_id)
        if total is None:
            total = StudentTotal(name=entry.student_name or unknown_label)
            totals[entry.student_id] = total
        elif entry.student_name and total.name == unknown_label:
            total.name = entry.student_name
        total.total_minutes += entry.duration_minutes
    return totals


def group_logs_by_day(entries: Iterable[StudyLogEntry] | None) -> dict[str, list[StudyLogEntry]]:
    """Group a page of study logs by calendar day, newest day first.

    Logs keep their incoming order within a day.

    Returns:
        Mapping of ``yyyy-MM-dd`` to the logs of that day.
    """
    grouped: defaultdict[str, list[StudyLogEntry]] = defaultdict(list)
    for entry in entries or ():
        grouped[format_date(entry.study_date)].append(entry)
    return {day: grouped[day] for day in sorted(grouped, reverse=True)}
