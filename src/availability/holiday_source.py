"""
Pluggable public-holiday sources.

The engine only asks one question, ``is_holiday(day)``, so the regional
holiday calendar can be swapped per deployment and mocked in tests.
"""

import logging
from datetime import date
from typing import Iterable, Protocol, runtime_checkable

import holidays

logger = logging.getLogger(__name__)


@runtime_checkable
class HolidayCalendar(Protocol):
    """Anything that can tell whether a day is a public holiday."""

    def is_holiday(self, day: date) -> bool:
        ...


class CountryHolidayCalendar:
    """Public holidays for one country from the ``holidays`` package."""

    def __init__(self, country: str = "KR") -> None:
        self.country = country
        self._calendar = holidays.country_holidays(country)
        logger.debug("Holiday calendar loaded for country %s", country)

    def is_holiday(self, day: date) -> bool:
        return day in self._calendar


class FixedHolidayCalendar:
    """A calendar with an explicit set of holiday dates."""

    def __init__(self, days: Iterable[date] = ()) -> None:
        self.days = frozenset(days)

    def is_holiday(self, day: date) -> bool:
        return day in self.days


class NoHolidayCalendar:
    """A calendar with no holidays at all."""

    def is_holiday(self, day: date) -> bool:
        return False
