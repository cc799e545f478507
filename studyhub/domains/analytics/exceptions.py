# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Custom exceptions for the analytics domain.

The aggregation functions themselves never raise; these errors belong to
the service layer that fetches rows before aggregating:
- AnalyticsError: Base exception for analytics errors
- AnalyticsUnavailableError: Upstream fetch failed, the user may retry
- StudentNotFoundError: Admin view requested for an unknown student
"""

from typing import Any


class AnalyticsError(Exception):
    """Base exception for all analytics errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary with additional error context.
    """

    retryable = False

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        """Initialize analytics error.

        Args:
            message: Human-readable error description.
            details: Optional dictionary with additional error context.
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation with details if available."""
        if self.details:
            return f"{self.message} - Details: {self.details}"
        return self.message


class AnalyticsUnavailableError(AnalyticsError):
    """Raised when the rows needed for a view could not be fetched.

    The message is safe to show to the user next to a retry action.
    """

    retryable = True


class StudentNotFoundError(AnalyticsError):
    """Raised when an admin view targets a student that does not exist."""

    def __init__(self, student_id: str):
        """Initialize with the missing student's identifier."""
        self.student_id = student_id
        super().__init__("Student not found", {"student_id": student_id})
