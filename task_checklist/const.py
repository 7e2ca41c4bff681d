# File: const.py
"""Constants for the task checklist engine.

This file centralizes frequency tags, legacy aliases, status values, defaults
and safety limits so that every caller shares one conversion table.
"""

import logging

# ------------------------------------------------------------------------------------------------
# General
# ------------------------------------------------------------------------------------------------

# Logger
LOGGER = logging.getLogger(__package__)

# ------------------------------------------------------------------------------------------------
# Time zone
# ------------------------------------------------------------------------------------------------
# End of day (23:59) and the "anytime" sentinel live in utils/dt_utils.py.
DEFAULT_BUSINESS_TIME_ZONE = "Australia/Sydney"

# ------------------------------------------------------------------------------------------------
# Weekdays / months (Python convention: Monday == 0)
# ------------------------------------------------------------------------------------------------
MONDAY_WEEKDAY_INDEX = 0
SATURDAY_WEEKDAY_INDEX = 5
SUNDAY_WEEKDAY_INDEX = 6

WEEKDAY_NAMES = {
    "monday": 0,
    "tuesday": 1,
    "wednesday": 2,
    "thursday": 3,
    "friday": 4,
    "saturday": 5,
}

MONTH_ABBREVIATIONS = {
    "jan": 1,
    "feb": 2,
    "mar": 3,
    "apr": 4,
    "may": 5,
    "jun": 6,
    "jul": 7,
    "aug": 8,
    "sep": 9,
    "oct": 10,
    "nov": 11,
    "dec": 12,
}

# ------------------------------------------------------------------------------------------------
# Frequency tags (storage strings)
# ------------------------------------------------------------------------------------------------
FREQUENCY_ONCE_OFF = "once_off"
FREQUENCY_EVERY_DAY = "every_day"
FREQUENCY_ONCE_WEEKLY = "once_weekly"
FREQUENCY_ONCE_MONTHLY = "once_monthly"
FREQUENCY_START_OF_EVERY_MONTH = "start_of_every_month"
FREQUENCY_END_OF_EVERY_MONTH = "end_of_every_month"

# Month-restricted tags are built as "<prefix><mon>", e.g. "start_of_month_jan".
FREQUENCY_START_OF_MONTH_PREFIX = "start_of_month_"
FREQUENCY_END_OF_MONTH_PREFIX = "end_of_month_"

# Legacy tags still found in older task records, mapped once at the boundary.
LEGACY_FREQUENCY_ALIASES = {
    "weekly": FREQUENCY_ONCE_WEEKLY,
    "once_off_sticky": FREQUENCY_ONCE_OFF,
    "start_every_month": FREQUENCY_START_OF_EVERY_MONTH,
    "start_of_month": FREQUENCY_START_OF_EVERY_MONTH,
    "every_month": FREQUENCY_ONCE_MONTHLY,
    "monthly": FREQUENCY_ONCE_MONTHLY,
    "certain_months": FREQUENCY_ONCE_MONTHLY,
    "end_every_month": FREQUENCY_END_OF_EVERY_MONTH,
}

# ------------------------------------------------------------------------------------------------
# Occurrence status values
# ------------------------------------------------------------------------------------------------
STATUS_NOT_DUE_YET = "not_due_yet"
STATUS_DUE_TODAY = "due_today"
STATUS_OVERDUE = "overdue"
STATUS_MISSED = "missed"
STATUS_COMPLETED = "completed"

# Persisted statuses written by older jobs, mapped onto the five lifecycle states.
LEGACY_STATUS_ALIASES = {
    "done": STATUS_COMPLETED,
    "pending": STATUS_NOT_DUE_YET,
    "in_progress": STATUS_DUE_TODAY,
}

# ------------------------------------------------------------------------------------------------
# Task record fields
# ------------------------------------------------------------------------------------------------
FIELD_TASK_ID = "id"
FIELD_TASK_TITLE = "title"
FIELD_TASK_FREQUENCIES = "frequencies"
FIELD_TASK_DUE_TIME = "due_time"
FIELD_TASK_DUE_DATE = "due_date"
FIELD_TASK_CREATED_AT = "created_at"
FIELD_TASK_PUBLISH_DELAY = "publish_delay"
FIELD_TASK_START_DATE = "start_date"
FIELD_TASK_END_DATE = "end_date"
FIELD_TASK_ACTIVE = "active"
FIELD_TASK_PUBLISH_STATUS = "publish_status"

PUBLISH_STATUS_ACTIVE = "active"

FIELD_HOLIDAY_DATE = "date"
FIELD_HOLIDAY_NAME = "name"
FIELD_HOLIDAY_REGION = "region"

# ------------------------------------------------------------------------------------------------
# Engine configuration keys / defaults
# ------------------------------------------------------------------------------------------------
CONF_TIME_ZONE = "time_zone"
CONF_NEW_TASK_BADGE_HOURS = "new_task_badge_hours"

DEFAULT_NEW_TASK_BADGE_HOURS = 12

# ------------------------------------------------------------------------------------------------
# Report counts keys
# ------------------------------------------------------------------------------------------------
COUNT_TOTAL = "total"
COUNT_NEW = "new"

# ------------------------------------------------------------------------------------------------
# Safety limits
# ------------------------------------------------------------------------------------------------
MAX_DATE_CALCULATION_ITERATIONS = 100
MAX_OCCURRENCE_RANGE_DAYS = 3660
