"""Shared test fixtures and helpers."""

from datetime import date
from typing import Iterable, Optional

import pytest

from src.availability.blocked_dates import BlockedDateSet, build_blocked_dates
from src.availability.holiday_source import FixedHolidayCalendar, NoHolidayCalendar
from src.availability.rules import CalendarRules
from src.booking.session import BookingSession
from src.booking.state_machine import BookingStateMachine
from src.schemas.booking_schema import BufferPolicy, ReservedInterval
from src.tools.memory_store import InMemoryScheduleStore

ITEM_ID = 1001
SIZE = "M"
TODAY = date(2025, 3, 1)


def d(value: str) -> date:
    """Shorthand for an ISO calendar day."""
    return date.fromisoformat(value)


def make_interval(start: str, end: str) -> ReservedInterval:
    return ReservedInterval(start=start, end=end)


def make_blocked(
    intervals: Iterable[tuple[str, str]] = (),
    lead: int = 3,
    trail: int = 3,
) -> BlockedDateSet:
    """Blocked set for ``(start, end)`` ISO pairs under the given buffer."""
    return build_blocked_dates(
        [make_interval(s, e) for s, e in intervals],
        BufferPolicy(lead_buffer_days=lead, trail_buffer_days=trail),
    )


def make_rules(
    holidays: Iterable[date] = (),
    overrides: Iterable[date] = (),
    disallowed_weekdays: Optional[frozenset[int]] = None,
    **kwargs,
) -> CalendarRules:
    """CalendarRules with a fixed holiday list instead of a country calendar."""
    calendar = FixedHolidayCalendar(holidays) if holidays else NoHolidayCalendar()
    if disallowed_weekdays is not None:
        kwargs["disallowed_weekdays"] = disallowed_weekdays
    return CalendarRules(
        holiday_calendar=calendar,
        holiday_overrides=frozenset(overrides),
        **kwargs,
    )


@pytest.fixture
def rules():
    return make_rules()


@pytest.fixture
def state_machine():
    return BookingStateMachine()


@pytest.fixture
def store():
    store = InMemoryScheduleStore()
    store.add_reservations(ITEM_ID, SIZE, [make_interval("2025-03-10", "2025-03-11")])
    return store


@pytest.fixture
def events():
    """Collects everything the session reports to the host."""
    return {"blocked": [], "results": []}


@pytest.fixture
def session(rules, store, events):
    return BookingSession(
        rules,
        store,
        buffer=BufferPolicy(),
        today=lambda: TODAY,
        on_blocked_set_ready=events["blocked"].append,
        on_validation_result=events["results"].append,
        session_id="BS-test",
    )
