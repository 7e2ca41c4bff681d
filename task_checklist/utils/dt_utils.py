# File: utils/dt_utils.py
"""Date and time utilities for the task checklist engine.

Pure Python date/time functions. All calendar-date decisions in the engines go
through these conversions: UTC instants are never compared against calendar
dates directly.

Uses standard library: datetime, zoneinfo, plus dateutil.

Functions:
    - set_default_timezone / get_default_timezone / resolve_timezone
    - dt_now_utc: Current instant in UTC
    - local_now: Today's business date and the current aware instant
    - as_utc / as_local: Timezone conversion
    - to_local: UTC instant -> (business date, time of day)
    - local_midnight: Business date -> UTC instant of its local midnight
    - combine_local: Business date + time of day -> aware instant
    - end_of_local_day: Business date -> 23:59 local instant
    - dt_parse_date / dt_parse_time / dt_parse / dt_to_utc: Lenient parsing
    - dt_date_range: Inclusive list of dates
"""

from __future__ import annotations

from datetime import UTC, date, datetime, time, timedelta
import logging
from typing import TYPE_CHECKING
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dateutil import parser as dateutil_parser

if TYPE_CHECKING:
    from datetime import tzinfo

# Module-level logger
_LOGGER = logging.getLogger(__name__)

# ==============================================================================
# Constants (local copies to avoid circular imports)
# These mirror const.py values but are defined locally for purity.
# ==============================================================================

DEFAULT_TIME_ZONE_NAME = "Australia/Sydney"

# Business timezone - can be overridden by caller
DEFAULT_TIME_ZONE: ZoneInfo = ZoneInfo(DEFAULT_TIME_ZONE_NAME)

END_OF_DAY = time(23, 59)

TIME_ANYTIME = "anytime"


# ==============================================================================
# Timezone Configuration
# ==============================================================================


def set_default_timezone(tz: ZoneInfo) -> None:
    """Set the default business timezone for all dt_utils functions.

    Args:
        tz: ZoneInfo object representing the business region
    """
    global DEFAULT_TIME_ZONE  # noqa: PLW0603
    DEFAULT_TIME_ZONE = tz


def get_default_timezone() -> ZoneInfo:
    """Get the current default business timezone."""
    return DEFAULT_TIME_ZONE


def resolve_timezone(name: str | None) -> ZoneInfo:
    """Look up an IANA zone by name, falling back to the default zone.

    Args:
        name: IANA zone name such as "Australia/Brisbane", or None

    Returns:
        The matching ZoneInfo, or DEFAULT_TIME_ZONE if the name is empty or unknown.
    """
    if not name:
        return DEFAULT_TIME_ZONE
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        _LOGGER.warning(
            "Unknown time zone '%s', using %s", name, DEFAULT_TIME_ZONE.key
        )
        return DEFAULT_TIME_ZONE


# ==============================================================================
# Current Date/Time Functions
# ==============================================================================


def dt_now_utc() -> datetime:
    """Return the current datetime in UTC (timezone-aware)."""
    return datetime.now(UTC)


def local_now(tz: ZoneInfo | None = None) -> tuple[date, datetime]:
    """Return today's business date and the current instant in business time.

    This is the only clock read in the package. Engines never call it; callers
    read the clock once and thread the value through.

    Args:
        tz: Optional timezone override. Uses DEFAULT_TIME_ZONE if not provided.

    Returns:
        (business date, timezone-aware current datetime)
    """
    now = dt_now_utc().astimezone(tz or DEFAULT_TIME_ZONE)
    return now.date(), now


# ==============================================================================
# Timezone Conversion
# ==============================================================================


def as_utc(dt_obj: datetime) -> datetime:
    """Convert a datetime to UTC timezone.

    Naive datetimes are treated as UTC instants (storage format).
    """
    if dt_obj.tzinfo is None:
        return dt_obj.replace(tzinfo=UTC)
    return dt_obj.astimezone(UTC)


def as_local(dt_obj: datetime, tz: ZoneInfo | None = None) -> datetime:
    """Convert a datetime to the business timezone.

    Args:
        dt_obj: Datetime object; naive values are assumed to be UTC
        tz: Optional timezone override. Uses DEFAULT_TIME_ZONE if not provided.

    Returns:
        Datetime in the business timezone
    """
    tz_info = tz or DEFAULT_TIME_ZONE
    if dt_obj.tzinfo is None:
        # Assume it's in UTC if naive
        dt_obj = dt_obj.replace(tzinfo=UTC)
    return dt_obj.astimezone(tz_info)


def to_local(utc_instant: datetime, tz: ZoneInfo | None = None) -> tuple[date, time]:
    """Split an instant into its business calendar date and time of day.

    Example:
        2024-01-07T14:30:00+00:00 in Australia/Brisbane -> (2024-01-08, 00:30)
    """
    local_dt = as_local(utc_instant, tz)
    return local_dt.date(), local_dt.time().replace(tzinfo=None)


def combine_local(
    day: date, time_of_day: time | None, tz: ZoneInfo | None = None
) -> datetime:
    """Combine a business date and time of day into an aware instant.

    ``None`` means "anytime" and resolves to the end of the business day.
    zoneinfo resolves gaps and folds at DST transitions using fold=0.
    """
    tz_info = tz or DEFAULT_TIME_ZONE
    return datetime.combine(day, time_of_day or END_OF_DAY, tzinfo=tz_info)


def local_midnight(day: date, tz: ZoneInfo | None = None) -> datetime:
    """Return the UTC instant at which ``day`` starts in the business timezone."""
    return as_utc(combine_local(day, time.min, tz))


def end_of_local_day(day: date, tz: ZoneInfo | None = None) -> datetime:
    """Return 23:59 on ``day`` in the business timezone."""
    return combine_local(day, END_OF_DAY, tz)


# ==============================================================================
# Date/Time Parsing
# ==============================================================================


def dt_parse_date(date_input: str | date | None) -> date | None:
    """Safely parse a date value into a `datetime.date`.

    Accepts:
    - date objects (datetimes are reduced to their date part)
    - "2025-04-07" (ISO format)
    - "2025-04-07T00:00:00" (ISO datetime; the date part is used as written)
    - "07/04/2025" (Australian day-first format)

    Returns:
        datetime.date or None if parsing fails.
    """
    if isinstance(date_input, datetime):
        return date_input.date()
    if isinstance(date_input, date):
        return date_input
    if not date_input or not isinstance(date_input, str):
        return None

    text = date_input.strip()

    # Try ISO format first (most common)
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        pass

    for fmt in ("%d/%m/%Y", "%Y/%m/%d"):
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue

    _LOGGER.debug("Unparseable date value: %r", date_input)
    return None


def dt_parse_time(time_input: str | time | None) -> time | None:
    """Parse a due time-of-day string.

    Accepts "HH:MM" and "HH:MM:SS". Returns None for "anytime", empty values
    and malformed strings, which callers treat as end of day.

    Example:
        "17:00:00" -> datetime.time(17, 0)
    """
    if isinstance(time_input, time):
        return time_input.replace(tzinfo=None)
    if not time_input or not isinstance(time_input, str):
        return None

    text = time_input.strip().lower()
    if not text or text == TIME_ANYTIME:
        return None

    parts = text.split(":")
    if len(parts) not in (2, 3):
        _LOGGER.debug("Malformed due time %r, using end of day", time_input)
        return None
    try:
        hour, minute = int(parts[0]), int(parts[1])
        second = int(parts[2]) if len(parts) == 3 else 0
        return time(hour, minute, second)
    except ValueError:
        _LOGGER.debug("Malformed due time %r, using end of day", time_input)
        return None


def dt_parse(
    dt_input: str | date | datetime | None,
    default_tzinfo: tzinfo | None = None,
) -> datetime | None:
    """Normalize a string, date or datetime into an aware datetime.

    Args:
        dt_input: Value to normalize, or None
        default_tzinfo: Timezone applied to naive values (defaults to UTC,
                        the storage format of timestamps)

    Returns:
        Timezone-aware datetime, or None if the input could not be parsed.
    """
    if not dt_input:
        return None

    tz_info = default_tzinfo or UTC
    result: datetime | None = None

    if isinstance(dt_input, datetime):
        result = dt_input
    elif isinstance(dt_input, date):
        result = datetime.combine(dt_input, time.min)
    elif isinstance(dt_input, str):
        try:
            result = datetime.fromisoformat(dt_input.strip())
        except ValueError:
            try:
                # Postgres-style timestamps ("2024-01-01 09:00:00.123+00")
                result = dateutil_parser.isoparse(dt_input.strip())
            except (ValueError, OverflowError):
                _LOGGER.debug("Unparseable datetime value: %r", dt_input)
                return None
    else:
        return None

    if result.tzinfo is None:
        result = result.replace(tzinfo=tz_info)
    return result


def dt_to_utc(dt_input: str | datetime | None) -> datetime | None:
    """Parse a timestamp and convert it to UTC.

    Example:
        "2025-04-07T14:30:00+10:00" -> datetime(2025, 4, 7, 4, 30, tzinfo=UTC)
    """
    result = dt_parse(dt_input)
    return as_utc(result) if result else None


# ==============================================================================
# Ranges
# ==============================================================================


def dt_date_range(start: date, end: date) -> list[date]:
    """Return every date from ``start`` to ``end`` inclusive (empty if reversed)."""
    if end < start:
        return []
    return [start + timedelta(days=offset) for offset in range((end - start).days + 1)]
