"""
Start-date and full-range validation against the calendar rules.

Checks run in a fixed order and the first failure wins, so the customer is
always told about exactly one constraint:

Start date:  lead time -> disallowed weekday / holiday -> already reserved
Full range:  minimum stay -> maximum stay -> blocked end (handed to repair)
"""

import logging
from datetime import date, timedelta
from typing import Optional

from src.availability.blocked_dates import BlockedDateSet
from src.availability.repair import repair
from src.availability.results import RangeResult, ReasonCode, rejection
from src.availability.rules import CalendarRules, StayPreset
from src.schemas.booking_schema import DateRange
from src.utils import DateLike, to_calendar_date

logger = logging.getLogger(__name__)


def earliest_start(today: date, rules: CalendarRules) -> date:
    """First day that satisfies the lead time."""
    return today + timedelta(days=rules.min_lead_days)


def validate_start(
    day: DateLike,
    rules: CalendarRules,
    blocked: BlockedDateSet,
    today: DateLike,
) -> RangeResult:
    """Check a candidate start date. An accepted result carries no range."""
    day = to_calendar_date(day)
    today = to_calendar_date(today)

    if day < earliest_start(today, rules):
        logger.debug("Start %s rejected: lead time (today %s)", day, today)
        return rejection(ReasonCode.LEAD_TIME_VIOLATION, rules)
    if rules.is_disallowed_start(day):
        logger.debug("Start %s rejected: disallowed weekday or holiday", day)
        return rejection(ReasonCode.DISALLOWED_START_DAY, rules)
    if day in blocked:
        logger.debug("Start %s rejected: already reserved", day)
        return rejection(ReasonCode.DATE_ALREADY_RESERVED, rules)
    return RangeResult.accepted()


def validate_range(
    date_range: DateRange,
    rules: CalendarRules,
    blocked: BlockedDateSet,
    preset: Optional[StayPreset] = None,
) -> RangeResult:
    """
    Check a complete range and return the canonical range when it is usable.

    Start-day constraints are not re-checked here; see ``validate_start``.
    A blocked end or interior day passes control to ``repair``.
    """
    length = date_range.length
    if preset is not None and length < preset.min_total_days:
        return rejection(ReasonCode.BELOW_MINIMUM_STAY, rules, preset)
    if length > rules.max_total_days:
        return rejection(ReasonCode.ABOVE_MAXIMUM_STAY, rules, preset)

    after_start = date_range.start + timedelta(days=1)
    if after_start > date_range.end or not blocked.any_within(after_start, date_range.end):
        return RangeResult.accepted(date_range)

    result = repair(date_range.start, date_range.end, preset, rules, blocked)
    if not result.passed or not rules.strict_interior:
        return result

    repaired = result.range
    if blocked.any_within(after_start, repaired.end - timedelta(days=1)):
        logger.debug("Range %s spans a reservation", repaired.format_period())
        return rejection(ReasonCode.DATE_ALREADY_RESERVED, rules, preset)
    return result
