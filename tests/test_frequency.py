"""Tests for frequency rules and the storage string conversion."""

from __future__ import annotations

import pytest

from task_checklist.engines.frequency import (
    FREQUENCY_TAG_MAP,
    FrequencyRule,
    FrequencyTag,
    normalize_frequency_tag,
    parse_frequencies,
    parse_frequency,
)


class TestFrequencyRule:
    """Test rule construction and validation."""

    def test_specific_weekday_requires_weekday(self) -> None:
        with pytest.raises(ValueError):
            FrequencyRule(FrequencyTag.SPECIFIC_WEEKDAY)

    def test_weekday_out_of_range(self) -> None:
        with pytest.raises(ValueError):
            FrequencyRule.specific_weekday(7)

    def test_sunday_rejected(self) -> None:
        """Sunday has no storage tag, so a Sunday rule cannot be built."""
        with pytest.raises(ValueError):
            FrequencyRule.specific_weekday(6)

    def test_every_weekday_rule_round_trips(self) -> None:
        for weekday in range(6):
            rule = FrequencyRule.specific_weekday(weekday)
            assert parse_frequency(rule.to_tag()) == rule

    def test_month_required_for_month_restricted_rules(self) -> None:
        with pytest.raises(ValueError):
            FrequencyRule(FrequencyTag.START_OF_MONTH)
        with pytest.raises(ValueError):
            FrequencyRule.end_of_month(13)

    def test_unrestricted_rules_reject_extra_fields(self) -> None:
        with pytest.raises(ValueError):
            FrequencyRule(FrequencyTag.EVERY_DAY, month=3)

    def test_rules_are_hashable_values(self) -> None:
        """Equal rules collapse in a set."""
        assert len({FrequencyRule.every_day(), FrequencyRule.every_day()}) == 1

    def test_to_tag(self) -> None:
        assert FrequencyRule.start_of_month(3).to_tag() == "start_of_month_mar"
        assert FrequencyRule.end_of_month(12).to_tag() == "end_of_month_dec"
        assert FrequencyRule.specific_weekday(4).to_tag() == "friday"
        assert FrequencyRule.once_weekly().to_tag() == "once_weekly"

    def test_every_storage_tag_renders_back_to_itself(self) -> None:
        for tag, rule in FREQUENCY_TAG_MAP.items():
            assert rule.to_tag() == tag


class TestParseFrequency:
    """Test the single string -> rule conversion point."""

    def test_tag_table_covers_all_storage_strings(self) -> None:
        """6 plain tags, Monday-Saturday, and 12 months for start and end."""
        assert len(FREQUENCY_TAG_MAP) == 36

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("every_day", FrequencyRule.every_day()),
            ("Every Day", FrequencyRule.every_day()),
            ("  ONCE_WEEKLY ", FrequencyRule.once_weekly()),
            ("start-of-month-MAR", FrequencyRule.start_of_month(3)),
            ("end_of_month_feb", FrequencyRule.end_of_month(2)),
            ("saturday", FrequencyRule.specific_weekday(5)),
        ],
    )
    def test_canonical_tags(self, raw: str, expected: FrequencyRule) -> None:
        assert parse_frequency(raw) == expected

    @pytest.mark.parametrize(
        ("legacy", "expected"),
        [
            ("weekly", FrequencyRule.once_weekly()),
            ("once_off_sticky", FrequencyRule.once_off()),
            ("start_every_month", FrequencyRule.start_of_every_month()),
            ("start_of_month", FrequencyRule.start_of_every_month()),
            ("every_month", FrequencyRule.once_monthly()),
            ("monthly", FrequencyRule.once_monthly()),
            ("certain_months", FrequencyRule.once_monthly()),
            ("end_every_month", FrequencyRule.end_of_every_month()),
        ],
    )
    def test_legacy_aliases(self, legacy: str, expected: FrequencyRule) -> None:
        assert parse_frequency(legacy) == expected

    @pytest.mark.parametrize("raw", [None, "", "sunday", "fortnightly", "start_of_month_xyz"])
    def test_unknown_tags(self, raw: str | None) -> None:
        assert parse_frequency(raw) is None

    def test_normalize_resolves_alias(self) -> None:
        assert normalize_frequency_tag(" Weekly ") == "once_weekly"


class TestParseFrequencies:
    """Test conversion of a task's full tag list."""

    def test_dedupes_in_first_seen_order_and_reports_dropped(self) -> None:
        rules, dropped = parse_frequencies(
            ["every_day", "weekly", "every_day", "once_weekly", "fortnightly"]
        )

        assert rules == (FrequencyRule.every_day(), FrequencyRule.once_weekly())
        assert dropped == ["fortnightly"]

    def test_single_string(self) -> None:
        rules, dropped = parse_frequencies("end_of_every_month")

        assert rules == (FrequencyRule.end_of_every_month(),)
        assert dropped == []

    def test_none_is_empty(self) -> None:
        assert parse_frequencies(None) == ((), [])
