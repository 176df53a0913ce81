"""Tests for calendar rules, presets and holiday sources."""

from datetime import date

import pytest

from src.availability.holiday_source import (
    CountryHolidayCalendar,
    FixedHolidayCalendar,
    HolidayCalendar,
    NoHolidayCalendar,
)
from src.availability.results import RangeResult, ReasonCode, describe
from src.availability.rules import CalendarRules, StayPreset
from src.config import RulesConfig
from tests.conftest import d, make_rules


class TestStayPreset:
    def test_minimum_days(self):
        assert StayPreset.SHORT.min_total_days == 4
        assert StayPreset.LONG.min_total_days == 6

    def test_label(self):
        assert StayPreset.SHORT.label == "3 nights / 4 days"
        assert StayPreset.LONG.label == "5 nights / 6 days"

    def test_lookup_by_value(self):
        assert StayPreset("long") is StayPreset.LONG


class TestCalendarRules:
    def test_sunday_disallowed_by_default(self, rules):
        assert rules.is_disallowed_start(d("2025-03-16"))
        assert not rules.is_disallowed_start(d("2025-03-17"))

    def test_override_beats_holiday(self):
        rules = make_rules(holidays=[d("2025-07-17")], overrides=[d("2025-07-17")])
        assert not rules.is_holiday(d("2025-07-17"))
        assert not rules.is_disallowed_start(d("2025-07-17"))

    def test_override_does_not_lift_weekday_rule(self):
        # 2025-03-16 is a Sunday
        rules = make_rules(overrides=[d("2025-03-16")])
        assert rules.is_disallowed_start(d("2025-03-16"))

    def test_from_config(self):
        config = RulesConfig()
        rules = CalendarRules.from_config(config, holiday_calendar=NoHolidayCalendar())
        assert rules.min_lead_days == config.min_lead_days
        assert rules.max_total_days == config.max_total_days
        assert rules.holiday_overrides == config.holiday_overrides


class TestHolidaySources:
    def test_protocol(self):
        assert isinstance(FixedHolidayCalendar(), HolidayCalendar)
        assert isinstance(NoHolidayCalendar(), HolidayCalendar)

    def test_fixed_calendar(self):
        calendar = FixedHolidayCalendar([date(2025, 5, 5)])
        assert calendar.is_holiday(date(2025, 5, 5))
        assert not calendar.is_holiday(date(2025, 5, 6))

    def test_korean_public_holidays(self):
        calendar = CountryHolidayCalendar("KR")
        assert calendar.is_holiday(date(2025, 1, 1))
        assert calendar.is_holiday(date(2025, 3, 1))
        assert not calendar.is_holiday(date(2025, 3, 12))

    def test_unknown_country(self):
        with pytest.raises(NotImplementedError):
            CountryHolidayCalendar("XX")


class TestResults:
    def test_every_reason_has_a_message(self):
        for reason in ReasonCode:
            assert describe(reason)

    def test_rejected_uses_default_message(self):
        result = RangeResult.rejected(ReasonCode.DATE_ALREADY_RESERVED)
        assert not result.passed
        assert result.message == "This date is already reserved."

    def test_accepted_without_range(self):
        result = RangeResult.accepted()
        assert result.passed and result.range is None and result.reason is None
