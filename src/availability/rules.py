"""Static booking policy: stay presets, lead time, cap, and start-day rules."""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Optional

from src.availability.holiday_source import (
    CountryHolidayCalendar,
    HolidayCalendar,
    NoHolidayCalendar,
)
from src.config import RulesConfig

SUNDAY = 6


class StayPreset(str, Enum):
    """Minimum-stay options offered before the customer picks dates."""

    SHORT = "short"
    LONG = "long"

    @property
    def min_total_days(self) -> int:
        return _PRESET_MIN_DAYS[self]

    @property
    def nights(self) -> int:
        return self.min_total_days - 1

    @property
    def label(self) -> str:
        return f"{self.nights} nights / {self.min_total_days} days"


_PRESET_MIN_DAYS: dict[StayPreset, int] = {
    StayPreset.SHORT: 4,
    StayPreset.LONG: 6,
}


@dataclass(frozen=True)
class CalendarRules:
    """Policy consulted by the validator and the repair step."""

    min_lead_days: int = 4
    max_total_days: int = 10
    disallowed_weekdays: frozenset[int] = frozenset({SUNDAY})
    holiday_calendar: HolidayCalendar = field(default_factory=NoHolidayCalendar)
    holiday_overrides: frozenset[date] = frozenset()
    strict_interior: bool = False

    @classmethod
    def from_config(
        cls,
        config: RulesConfig,
        holiday_calendar: Optional[HolidayCalendar] = None,
    ) -> "CalendarRules":
        """Build rules from the env-backed config section."""
        return cls(
            min_lead_days=config.min_lead_days,
            max_total_days=config.max_total_days,
            disallowed_weekdays=config.disallowed_weekdays,
            holiday_calendar=holiday_calendar or CountryHolidayCalendar(config.holiday_country),
            holiday_overrides=config.holiday_overrides,
            strict_interior=config.strict_interior,
        )

    def is_holiday(self, day: date) -> bool:
        """Holiday per the source, unless explicitly allowed by an override."""
        if day in self.holiday_overrides:
            return False
        return self.holiday_calendar.is_holiday(day)

    def is_disallowed_start(self, day: date) -> bool:
        return day.weekday() in self.disallowed_weekdays or self.is_holiday(day)
