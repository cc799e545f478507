# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Study-time timer.

The timer is an explicit state machine:

    idle -> running -> paused -> running -> ... -> stopped

Elapsed time is derived from recorded timestamps (start, pause, resume),
never accumulated from periodic ticks, so it cannot drift. Stopping yields
the session length in whole minutes, rounded up, ready for StudyTimeStop.

Example:
    >>> timer = StudyTimer()
    >>> timer.start("math", now=t0)
    >>> timer.pause(now=t0 + timedelta(minutes=10))
    >>> timer.resume(now=t0 + timedelta(minutes=15))
    >>> timer.stop(now=t0 + timedelta(minutes=20))
    15
"""

import logging
import math
from datetime import datetime, timedelta
from enum import Enum

from studyhub.utils.datetime import ensure_utc, utc_now

logger = logging.getLogger(__name__)


class TimerState(str, Enum):
    """Study timer states."""

    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    STOPPED = "stopped"


class TimerStateError(Exception):
    """Raised when a timer action is not allowed in the current state."""

    def __init__(self, action: str, state: TimerState):
        self.action = action
        self.state = state
        super().__init__(f"Cannot {action} a timer that is {state.value}")


class StudyTimer:
    """Tracks one study session for a subject.

    Attributes:
        state: Current timer state.
        subject_id: Subject being studied, set on start.
        log_id: Identifier of the study-time row opened for this session.
    """

    def __init__(self) -> None:
        self._clear()

    def _clear(self) -> None:
        self.state = TimerState.IDLE
        self.subject_id: str | None = None
        self.log_id: str | None = None
        self._started_at: datetime | None = None
        self._segment_started_at: datetime | None = None
        self._stopped_at: datetime | None = None
        self._banked = timedelta()

    def start(self, subject_id: str, now: datetime | None = None, log_id: str | None = None) -> None:
        """Start a new session.

        Args:
            subject_id: Subject to record time for.
            now: Start time; defaults to the current UTC time.
            log_id: Study-time row opened for this session.

        Raises:
            ValueError: If no subject is given.
            TimerStateError: If the timer is not idle.
        """
        if self.state is not TimerState.IDLE:
            raise TimerStateError("start", self.state)
        if not subject_id:
            raise ValueError("Choose a subject before starting the timer")

        now = ensure_utc(now) or utc_now()
        self.subject_id = subject_id
        self.log_id = log_id
        self._started_at = now
        self._segment_started_at = now
        self.state = TimerState.RUNNING

        logger.debug("Study timer started: subject=%s", subject_id)

    def pause(self, now: datetime | None = None) -> None:
        """Pause a running session."""
        if self.state is not TimerState.RUNNING:
            raise TimerStateError("pause", self.state)

        now = ensure_utc(now) or utc_now()
        self._banked += now - self._segment_started_at
        self._segment_started_at = None
        self.state = TimerState.PAUSED

    def resume(self, now: datetime | None = None) -> None:
        """Resume a paused session."""
        if self.state is not TimerState.PAUSED:
            raise TimerStateError("resume", self.state)

        self._segment_started_at = ensure_utc(now) or utc_now()
        self.state = TimerState.RUNNING

    def stop(self, now: datetime | None = None) -> int:
        """Stop the session.

        Args:
            now: Stop time; defaults to the current UTC time.

        Returns:
            Session length in whole minutes, rounded up.

        Raises:
            TimerStateError: If the timer is idle or already stopped.
        """
        if self.state not in (TimerState.RUNNING, TimerState.PAUSED):
            raise TimerStateError("stop", self.state)

        now = ensure_utc(now) or utc_now()
        if self.state is TimerState.RUNNING:
            self._banked += now - self._segment_started_at
            self._segment_started_at = None
        self._stopped_at = now
        self.state = TimerState.STOPPED

        minutes = self.duration_minutes
        logger.debug("Study timer stopped: subject=%s, minutes=%d", self.subject_id, minutes)
        return minutes

    def elapsed(self, now: datetime | None = None) -> timedelta:
        """Active study time so far, excluding paused intervals."""
        if self.state is TimerState.RUNNING:
            now = ensure_utc(now) or utc_now()
            return self._banked + (now - self._segment_started_at)
        return self._banked

    @property
    def started_at(self) -> datetime | None:
        return self._started_at

    @property
    def stopped_at(self) -> datetime | None:
        return self._stopped_at

    @property
    def duration_minutes(self) -> int:
        """Banked study time in whole minutes, rounded up."""
        return math.ceil(self._banked.total_seconds() / 60)

    def format_elapsed(self, now: datetime | None = None) -> str:
        """Elapsed time as ``HH:MM:SS``."""
        total_seconds = int(self.elapsed(now).total_seconds())
        hours, remainder = divmod(total_seconds, 3600)
        minutes, seconds = divmod(remainder, 60)
        return f"{hours:02d}:{minutes:02d}:{seconds:02d}"

    def reset(self) -> None:
        """Return a stopped timer to idle for the next session."""
        if self.state is not TimerState.STOPPED:
            raise TimerStateError("reset", self.state)
        self._clear()
