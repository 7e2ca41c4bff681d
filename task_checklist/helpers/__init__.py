# File: helpers/__init__.py
"""Helper functions around the engines.

Submodules:
    - record_helpers: Raw task/holiday records -> engine types (voluptuous)
    - badge_helpers: "New task" badge window
    - report_helpers: Per-date status counts

Usage:
    from . import record_helpers
    from .report_helpers import count_statuses
"""

from . import badge_helpers, record_helpers, report_helpers

__all__ = [
    "badge_helpers",
    "record_helpers",
    "report_helpers",
]
