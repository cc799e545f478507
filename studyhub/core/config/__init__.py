# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Configuration package for StudyHub.

Settings are Pydantic-based and loaded from environment variables.

Example:
    >>> from studyhub.core.config import get_settings
    >>> settings = get_settings()
    >>> print(settings.environment)
    'development'
"""

from studyhub.core.config.settings import (
    AnalyticsSettings,
    Settings,
    clear_settings_cache,
    get_settings,
)

__all__ = [
    "Settings",
    "AnalyticsSettings",
    "get_settings",
    "clear_settings_cache",
]
