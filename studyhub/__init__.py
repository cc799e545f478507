"""StudyHub learning analytics.

Aggregation engine behind the school learning-management app: turns study-time
sessions, study logs and daily self-evaluations into per-period summaries,
chart-ready series, rankings and downloadable reports.

Copyright (C) 2025 Global Digital Labs (gdlabs.io)
SPDX-License-Identifier: LGPL-3.0-or-later
"""

__version__ = "1.0.0"
