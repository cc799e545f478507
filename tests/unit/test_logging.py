# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for logging configuration."""

import logging

import structlog

from studyhub.core.config.settings import Settings
from studyhub.utils.logging import bind_context, clear_context, get_logger, setup_logging


class TestSetupLogging:
    """Tests for setup_logging function."""

    def test_sets_package_level(self) -> None:
        """Test that the package logger follows the configured level."""
        setup_logging(Settings(log_level="WARNING"))

        assert logging.getLogger("studyhub").level == logging.WARNING

    def test_quiets_asyncio(self) -> None:
        """Test that asyncio debug chatter is suppressed."""
        setup_logging(Settings(log_level="DEBUG"))

        assert logging.getLogger("asyncio").level == logging.WARNING
        assert logging.getLogger("studyhub").level == logging.DEBUG

    def test_get_logger(self) -> None:
        """Test that a structlog logger is returned."""
        setup_logging(Settings())

        logger = get_logger(__name__)

        assert logger is not None

    def test_context_binding(self) -> None:
        """Test binding and clearing context variables."""
        clear_context()
        bind_context(student_id="s-1")

        assert structlog.contextvars.get_contextvars() == {"student_id": "s-1"}

        clear_context()

        assert structlog.contextvars.get_contextvars() == {}
