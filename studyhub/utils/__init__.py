# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Utility functions and helpers for StudyHub.

This package contains cross-cutting utilities:
- logging: Structured logging with structlog
- datetime: Calendar-date formatting and rounding
"""

from studyhub.utils.datetime import (
    ensure_utc,
    format_date,
    format_day_label,
    format_iso,
    parse_date,
    round_half_up,
    utc_now,
    utc_today,
)
from studyhub.utils.logging import bind_context, clear_context, get_logger, setup_logging

__all__ = [
    # Logging
    "setup_logging",
    "get_logger",
    "bind_context",
    "clear_context",
    # Datetime
    "utc_now",
    "utc_today",
    "ensure_utc",
    "format_iso",
    "format_date",
    "parse_date",
    "format_day_label",
    "round_half_up",
]
