# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Study activity tracking.

Provides the study-time timer whose stopped duration feeds the
study-time entries aggregated by the analytics domain.
"""

from studyhub.domains.study.timer import StudyTimer, TimerState, TimerStateError

__all__ = [
    "StudyTimer",
    "TimerState",
    "TimerStateError",
]
