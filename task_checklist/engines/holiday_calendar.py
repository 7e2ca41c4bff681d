"""Holiday Calendar - public holidays and weekend/holiday date shifting.

A HolidayCalendar is loaded once per evaluation batch and shared read-only by
every evaluation in that batch. It never raises for missing data: an empty
calendar simply observes no holidays.

ARCHITECTURE: Pure logic, no I/O. Loading rows from the holiday store is the
caller's job (see helpers/record_helpers.py).
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from datetime import date, timedelta
from types import MappingProxyType

from .. import const


@dataclass(frozen=True, slots=True)
class HolidayEntry:
    """A public holiday observed by the business region."""

    date: date
    name: str
    region: str | None = None


class HolidayCalendar:
    """Read-only set of public holidays with business-day helpers.

    Weekday rules:
    - Sunday is never a business day.
    - Saturday is a business day unless ``skip_weekends`` is requested.
    """

    __slots__ = ("_by_date",)

    def __init__(self, entries: Iterable[HolidayEntry] = ()) -> None:
        """Index holidays by date.

        Duplicate dates keep the first name seen; they do not change any outcome.
        """
        by_date: dict[date, HolidayEntry] = {}
        for entry in entries:
            by_date.setdefault(entry.date, entry)
        self._by_date = MappingProxyType(by_date)

    @classmethod
    def empty(cls) -> HolidayCalendar:
        """Calendar observing no holidays."""
        return cls(())

    # =========================================================================
    # Queries
    # =========================================================================

    def __len__(self) -> int:
        return len(self._by_date)

    def __contains__(self, day: object) -> bool:
        return day in self._by_date

    def __iter__(self) -> Iterator[HolidayEntry]:
        return iter(sorted(self._by_date.values(), key=lambda entry: entry.date))

    def is_holiday(self, day: date) -> bool:
        """Return True if ``day`` is a public holiday."""
        return day in self._by_date

    def holiday_name(self, day: date) -> str | None:
        """Return the display name of the holiday on ``day``, if any."""
        entry = self._by_date.get(day)
        return entry.name if entry else None

    def holidays_between(self, start: date, end: date) -> list[HolidayEntry]:
        """Return holidays from ``start`` to ``end`` inclusive, in date order."""
        return [entry for entry in self if start <= entry.date <= end]

    def is_skipped(
        self, day: date, *, skip_weekends: bool = False, skip_holidays: bool = True
    ) -> bool:
        """Return True if ``day`` must be skipped when shifting.

        Sunday is always skipped; Saturday only with ``skip_weekends``.
        """
        weekday = day.weekday()
        if weekday == const.SUNDAY_WEEKDAY_INDEX:
            return True
        if skip_weekends and weekday == const.SATURDAY_WEEKDAY_INDEX:
            return True
        return skip_holidays and self.is_holiday(day)

    def is_business_day(self, day: date) -> bool:
        """Monday to Saturday, excluding public holidays."""
        return not self.is_skipped(day)

    def business_days_between(self, start: date, end: date) -> int:
        """Count business days from ``start`` to ``end`` inclusive."""
        count = 0
        current = start
        while current <= end:
            if self.is_business_day(current):
                count += 1
            current += timedelta(days=1)
        return count

    # =========================================================================
    # Shifting
    # =========================================================================

    def shift_forward_skip(
        self, day: date, skip_weekends: bool = False, skip_holidays: bool = True
    ) -> date:
        """Advance one day at a time until ``day`` is not a skipped day.

        Returns ``day`` itself when it is already eligible. If no eligible day is
        found within MAX_DATE_CALCULATION_ITERATIONS the original date is
        returned unchanged.
        """
        return self._shift(day, 1, skip_weekends, skip_holidays)

    def shift_backward_skip(
        self, day: date, skip_weekends: bool = False, skip_holidays: bool = True
    ) -> date:
        """Mirror of shift_forward_skip moving towards earlier dates."""
        return self._shift(day, -1, skip_weekends, skip_holidays)

    def next_business_day(self, day: date) -> date:
        """First business day strictly after ``day``."""
        return self.shift_forward_skip(day + timedelta(days=1))

    def previous_business_day(self, day: date) -> date:
        """Last business day strictly before ``day``."""
        return self.shift_backward_skip(day - timedelta(days=1))

    def _shift(
        self, day: date, step: int, skip_weekends: bool, skip_holidays: bool
    ) -> date:
        current = day
        iteration = 0
        while self.is_skipped(
            current, skip_weekends=skip_weekends, skip_holidays=skip_holidays
        ):
            if iteration >= const.MAX_DATE_CALCULATION_ITERATIONS:
                const.LOGGER.debug(
                    "HolidayCalendar: no eligible day within %s days of %s",
                    const.MAX_DATE_CALCULATION_ITERATIONS,
                    day,
                )
                return day
            current += timedelta(days=step)
            iteration += 1
        return current
