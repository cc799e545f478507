# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Domain services layer for StudyHub.

Domains:
    analytics: Learning analytics aggregation, reports and the fetch service.
    study: Study-time tracking helpers (timer state machine).
"""
