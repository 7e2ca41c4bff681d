# File: utils/__init__.py
"""Pure Python utilities for the task checklist engine.

Submodules:
    - dt_utils: Business-timezone conversions and lenient date/time parsing

Usage:
    from . import dt_utils
    from .dt_utils import to_local, local_midnight
"""

from . import dt_utils

__all__ = ["dt_utils"]
