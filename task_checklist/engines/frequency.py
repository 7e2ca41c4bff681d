"""Frequency rules - the closed set of recurrence patterns a task can carry.

Storage keeps frequencies as strings ("every_day", "start_of_month_mar", ...).
parse_frequency() is the single conversion point from those strings (including
legacy aliases) to FrequencyRule values; unknown strings are returned to the
caller as dropped rather than raising.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum

from .. import const


class FrequencyTag(StrEnum):
    """Recurrence pattern variants."""

    EVERY_DAY = "every_day"
    ONCE_WEEKLY = "once_weekly"
    SPECIFIC_WEEKDAY = "specific_weekday"
    ONCE_MONTHLY = "once_monthly"
    START_OF_EVERY_MONTH = "start_of_every_month"
    START_OF_MONTH = "start_of_month"
    END_OF_EVERY_MONTH = "end_of_every_month"
    END_OF_MONTH = "end_of_month"
    ONCE_OFF = "once_off"


_MONTH_NAMES_BY_NUMBER = {
    number: abbr for abbr, number in const.MONTH_ABBREVIATIONS.items()
}
_WEEKDAY_NAMES_BY_INDEX = {index: name for name, index in const.WEEKDAY_NAMES.items()}


@dataclass(frozen=True, slots=True)
class FrequencyRule:
    """One recurrence pattern.

    Attributes:
        tag: Variant of the rule
        weekday: 0=Monday .. 5=Saturday (no Sunday), SPECIFIC_WEEKDAY only
        month: 1-12, START_OF_MONTH / END_OF_MONTH only
    """

    tag: FrequencyTag
    weekday: int | None = None
    month: int | None = None

    def __post_init__(self) -> None:
        if self.tag is FrequencyTag.SPECIFIC_WEEKDAY:
            if self.weekday not in _WEEKDAY_NAMES_BY_INDEX:
                raise ValueError(
                    "SPECIFIC_WEEKDAY needs weekday 0-5 (Monday-Saturday), "
                    f"got {self.weekday}"
                )
        elif self.weekday is not None:
            raise ValueError(f"{self.tag} does not take a weekday")

        if self.tag in (FrequencyTag.START_OF_MONTH, FrequencyTag.END_OF_MONTH):
            if self.month is None or not 1 <= self.month <= 12:
                raise ValueError(f"{self.tag} needs month 1-12, got {self.month}")
        elif self.month is not None:
            raise ValueError(f"{self.tag} does not take a month")

    # Convenience constructors -------------------------------------------------

    @classmethod
    def every_day(cls) -> FrequencyRule:
        return cls(FrequencyTag.EVERY_DAY)

    @classmethod
    def once_weekly(cls) -> FrequencyRule:
        return cls(FrequencyTag.ONCE_WEEKLY)

    @classmethod
    def specific_weekday(cls, weekday: int) -> FrequencyRule:
        return cls(FrequencyTag.SPECIFIC_WEEKDAY, weekday=weekday)

    @classmethod
    def once_monthly(cls) -> FrequencyRule:
        return cls(FrequencyTag.ONCE_MONTHLY)

    @classmethod
    def start_of_every_month(cls) -> FrequencyRule:
        return cls(FrequencyTag.START_OF_EVERY_MONTH)

    @classmethod
    def start_of_month(cls, month: int) -> FrequencyRule:
        return cls(FrequencyTag.START_OF_MONTH, month=month)

    @classmethod
    def end_of_every_month(cls) -> FrequencyRule:
        return cls(FrequencyTag.END_OF_EVERY_MONTH)

    @classmethod
    def end_of_month(cls, month: int) -> FrequencyRule:
        return cls(FrequencyTag.END_OF_MONTH, month=month)

    @classmethod
    def once_off(cls) -> FrequencyRule:
        return cls(FrequencyTag.ONCE_OFF)

    def to_tag(self) -> str:
        """Render the canonical storage string for this rule."""
        if self.weekday is not None:
            return _WEEKDAY_NAMES_BY_INDEX[self.weekday]
        if self.month is not None:
            prefix = (
                const.FREQUENCY_START_OF_MONTH_PREFIX
                if self.tag is FrequencyTag.START_OF_MONTH
                else const.FREQUENCY_END_OF_MONTH_PREFIX
            )
            return f"{prefix}{_MONTH_NAMES_BY_NUMBER[self.month]}"
        return self.tag.value


# Storage string -> rule, built once. Month/weekday variants are expanded here so
# lookups never have to parse suffixes at call sites.
FREQUENCY_TAG_MAP: dict[str, FrequencyRule] = {
    const.FREQUENCY_ONCE_OFF: FrequencyRule.once_off(),
    const.FREQUENCY_EVERY_DAY: FrequencyRule.every_day(),
    const.FREQUENCY_ONCE_WEEKLY: FrequencyRule.once_weekly(),
    const.FREQUENCY_ONCE_MONTHLY: FrequencyRule.once_monthly(),
    const.FREQUENCY_START_OF_EVERY_MONTH: FrequencyRule.start_of_every_month(),
    const.FREQUENCY_END_OF_EVERY_MONTH: FrequencyRule.end_of_every_month(),
    **{
        name: FrequencyRule.specific_weekday(index)
        for name, index in const.WEEKDAY_NAMES.items()
    },
    **{
        f"{const.FREQUENCY_START_OF_MONTH_PREFIX}{abbr}": FrequencyRule.start_of_month(month)
        for abbr, month in const.MONTH_ABBREVIATIONS.items()
    },
    **{
        f"{const.FREQUENCY_END_OF_MONTH_PREFIX}{abbr}": FrequencyRule.end_of_month(month)
        for abbr, month in const.MONTH_ABBREVIATIONS.items()
    },
}


def normalize_frequency_tag(tag: str) -> str:
    """Lower-case, trim, and resolve legacy aliases to the canonical tag."""
    key = tag.strip().lower().replace("-", "_").replace(" ", "_")
    return const.LEGACY_FREQUENCY_ALIASES.get(key, key)


def parse_frequency(tag: str | None) -> FrequencyRule | None:
    """Convert one storage string into a FrequencyRule.

    Returns:
        The rule, or None if the tag is not recognized.
    """
    if not tag or not isinstance(tag, str):
        return None
    return FREQUENCY_TAG_MAP.get(normalize_frequency_tag(tag))


def parse_frequencies(
    tags: Iterable[str] | str | None,
) -> tuple[tuple[FrequencyRule, ...], list[str]]:
    """Convert a task's frequency strings into a de-duplicated rule tuple.

    Args:
        tags: List of storage strings, a single string, or None

    Returns:
        (rules in first-seen order without duplicates, unrecognized strings)
    """
    if tags is None:
        return (), []
    if isinstance(tags, str):
        tags = [tags]

    rules: list[FrequencyRule] = []
    dropped: list[str] = []
    for raw in tags:
        rule = parse_frequency(raw)
        if rule is None:
            dropped.append(str(raw))
        elif rule not in rules:
            rules.append(rule)
    return tuple(rules), dropped
