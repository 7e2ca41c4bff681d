"""Manager modules for the task checklist.

Managers orchestrate batches and coordinate between engines and helpers.
They hold per-batch state (timezone, holiday calendar, loaded tasks).
"""

from .checklist_manager import CONFIG_SCHEMA, ChecklistManager

__all__ = [
    "CONFIG_SCHEMA",
    "ChecklistManager",
]
