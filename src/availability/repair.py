"""
Forward-shift repair for an end date that lands on a blocked day.

A single blocked day next to an otherwise valid window usually comes from
the trailing buffer of a neighbouring reservation, so instead of rejecting
the range the end is pushed forward to the next free day, as long as the
stay stays within the maximum length.
"""

import logging
from datetime import date, timedelta
from typing import Optional

from src.availability.blocked_dates import BlockedDateSet
from src.availability.results import RangeResult, ReasonCode, rejection
from src.availability.rules import CalendarRules, StayPreset
from src.schemas.booking_schema import DateRange
from src.utils import CalendarInputError

logger = logging.getLogger(__name__)


def auto_end(start: date, preset: StayPreset) -> date:
    """End date implied by choosing ``preset`` and starting on ``start``."""
    return start + timedelta(days=preset.min_total_days - 1)


def repair(
    start: date,
    proposed_end: date,
    preset: Optional[StayPreset],
    rules: CalendarRules,
    blocked: BlockedDateSet,
) -> RangeResult:
    """
    Shift ``proposed_end`` forward until it is no longer blocked.

    Returns:
        An accepted result with the shifted range, or a rejection with
        NO_VALID_RANGE_WITHIN_CAP if no free day exists on or before the
        last end the cap allows.

    Raises:
        CalendarInputError: If ``proposed_end`` is before ``start``.
    """
    if proposed_end < start:
        raise CalendarInputError(f"End {proposed_end} is before start {start}")

    last_allowed = start + timedelta(days=rules.max_total_days - 1)
    end = None
    if proposed_end <= last_allowed:
        end = blocked.first_free_on_or_after(proposed_end, limit=last_allowed)
    if end is None:
        logger.debug(
            "Repair from %s found no free end by %s", proposed_end, last_allowed,
        )
        return rejection(ReasonCode.NO_VALID_RANGE_WITHIN_CAP, rules, preset)

    if end != proposed_end:
        logger.debug("Repaired end %s -> %s", proposed_end, end)
    return RangeResult.accepted(DateRange(start=start, end=end))
