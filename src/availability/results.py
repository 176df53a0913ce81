"""Classified outcomes of every availability check.

Business-rule failures are values, never exceptions: each check returns a
RangeResult carrying either the canonical range or a ReasonCode with the
one message the customer needs to fix that specific constraint.
"""

import calendar
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from src.availability.rules import CalendarRules, StayPreset
from src.schemas.booking_schema import DateRange


class ReasonCode(str, Enum):
    """Why a date or range was rejected."""

    LEAD_TIME_VIOLATION = "lead_time_violation"
    DISALLOWED_START_DAY = "disallowed_start_day"
    DATE_ALREADY_RESERVED = "date_already_reserved"
    BELOW_MINIMUM_STAY = "below_minimum_stay"
    ABOVE_MAXIMUM_STAY = "above_maximum_stay"
    NO_VALID_RANGE_WITHIN_CAP = "no_valid_range_within_cap"
    RANGE_INCOMPLETE = "range_incomplete"
    # Collaborator-surfaced
    FETCH_FAILED = "fetch_failed"
    BOOKING_CONFLICT = "booking_conflict"
    BOOKING_FAILED = "booking_failed"


def describe(
    reason: ReasonCode,
    *,
    min_lead_days: int = 0,
    max_total_days: int = 0,
    disallowed_weekdays: frozenset[int] = frozenset(),
    preset_label: str = "",
) -> str:
    """Customer-facing message for a reason code."""
    if reason == ReasonCode.LEAD_TIME_VIOLATION:
        return f"The rental can start at the earliest {min_lead_days} days from today."
    if reason == ReasonCode.DISALLOWED_START_DAY:
        names = ", ".join(calendar.day_name[d] for d in sorted(disallowed_weekdays))
        if names:
            return f"A rental cannot start on a {names} or a public holiday."
        return "A rental cannot start on a public holiday."
    if reason == ReasonCode.DATE_ALREADY_RESERVED:
        return "This date is already reserved."
    if reason == ReasonCode.BELOW_MINIMUM_STAY:
        return f"The minimum rental period for this option is {preset_label}."
    if reason == ReasonCode.ABOVE_MAXIMUM_STAY:
        return f"A rental can last at most {max_total_days} days."
    if reason == ReasonCode.NO_VALID_RANGE_WITHIN_CAP:
        return (
            f"No free return date fits within {max_total_days} days. "
            "Please pick a later start date or a shorter option."
        )
    if reason == ReasonCode.RANGE_INCOMPLETE:
        return "Please select both a start and an end date."
    if reason == ReasonCode.FETCH_FAILED:
        return "Availability for this item could not be loaded. Please try again."
    if reason == ReasonCode.BOOKING_CONFLICT:
        return "These dates were just booked by someone else. Please choose new dates."
    return "The booking could not be completed. Please try again."


@dataclass(frozen=True)
class RangeResult:
    """Outcome of a start-date, range, or repair check."""

    passed: bool
    range: Optional[DateRange] = None
    reason: Optional[ReasonCode] = None
    message: str = ""

    @classmethod
    def accepted(cls, date_range: Optional[DateRange] = None) -> "RangeResult":
        return cls(passed=True, range=date_range)

    @classmethod
    def rejected(cls, reason: ReasonCode, message: str = "") -> "RangeResult":
        return cls(passed=False, reason=reason, message=message or describe(reason))


def rejection(
    reason: ReasonCode,
    rules: CalendarRules,
    preset: Optional[StayPreset] = None,
) -> RangeResult:
    """Build a rejected result whose message carries the rule values."""
    return RangeResult.rejected(
        reason,
        describe(
            reason,
            min_lead_days=rules.min_lead_days,
            max_total_days=rules.max_total_days,
            disallowed_weekdays=rules.disallowed_weekdays,
            preset_label=preset.label if preset else "",
        ),
    )
