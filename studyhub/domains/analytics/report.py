# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Downloadable learning report.

A report is the student self-view payload stamped with its generation time
and a report type label, serialized as a JSON document.
"""

import json
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from studyhub.domains.analytics.aggregator import StudentLearningStats
from studyhub.utils.datetime import format_date, format_iso, utc_now

DEFAULT_REPORT_TYPE = "Learning Statistics Report"


@dataclass
class LearningReport:
    """Exported learning statistics report.

    Attributes:
        stats: The student self-view the report wraps.
        generated_at: When the report was generated (UTC).
        report_type: Report label.
    """

    stats: StudentLearningStats
    generated_at: datetime
    report_type: str = DEFAULT_REPORT_TYPE

    @property
    def filename(self) -> str:
        """Download file name, dated by generation day."""
        return f"learning_report_{format_date(self.generated_at.date())}.json"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            **self.stats.to_dict(),
            "generated_at": format_iso(self.generated_at),
            "report_type": self.report_type,
        }

    def to_json(self) -> str:
        """Serialize the report as an indented JSON document."""
        return json.dumps(self.to_dict(), indent=2, ensure_ascii=False)


def build_report(
    stats: StudentLearningStats,
    generated_at: datetime | None = None,
    report_type: str = DEFAULT_REPORT_TYPE,
) -> LearningReport:
    """Wrap student stats into a report.

    Args:
        stats: Aggregated student self-view.
        generated_at: Generation time; defaults to now (UTC).
        report_type: Report label.

    Returns:
        LearningReport ready for serialization.
    """
    return LearningReport(
        stats=stats,
        generated_at=generated_at or utc_now(),
        report_type=report_type,
    )
