"""
Blocked-date model for a single item/size.

Every reserved interval is expanded by the logistics buffer on both sides
and the resulting days are unioned into one set. Downstream checks are
point lookups, so overlapping intervals are never merged explicitly.
"""

import logging
from datetime import date, timedelta
from typing import Iterable, Iterator, Optional

from src.schemas.booking_schema import BufferPolicy, ReservedInterval
from src.utils import iter_days

logger = logging.getLogger(__name__)


class BlockedDateSet:
    """Immutable, sorted set of days on which no booking may start or end."""

    __slots__ = ("_days", "_sorted")

    def __init__(self, days: Iterable[date] = ()) -> None:
        self._days: frozenset[date] = frozenset(days)
        self._sorted: tuple[date, ...] = tuple(sorted(self._days))

    def __contains__(self, day: object) -> bool:
        return day in self._days

    def __iter__(self) -> Iterator[date]:
        return iter(self._sorted)

    def __len__(self) -> int:
        return len(self._days)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, BlockedDateSet):
            return self._days == other._days
        if isinstance(other, (set, frozenset)):
            return self._days == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._days)

    def __repr__(self) -> str:
        if not self._sorted:
            return "BlockedDateSet()"
        return f"BlockedDateSet({len(self)} days, {self._sorted[0]}..{self._sorted[-1]})"

    def any_within(self, start: date, end: date) -> bool:
        """True if any day in ``[start, end]`` is blocked."""
        return any(day in self._days for day in iter_days(start, end))

    def first_free_on_or_after(self, day: date, limit: Optional[date] = None) -> Optional[date]:
        """First unblocked day at or after ``day``, or None past ``limit``."""
        current = day
        while current in self._days:
            current += timedelta(days=1)
            if limit is not None and current > limit:
                return None
        return current


def build_blocked_dates(
    intervals: Iterable[ReservedInterval], buffer: BufferPolicy
) -> BlockedDateSet:
    """Expand reservations by the buffer policy into a BlockedDateSet."""
    days: set[date] = set()
    count = 0
    for interval in intervals:
        count += 1
        lead_start = interval.start - timedelta(days=buffer.lead_buffer_days)
        trail_end = interval.end + timedelta(days=buffer.trail_buffer_days)
        days.update(iter_days(lead_start, trail_end))

    blocked = BlockedDateSet(days)
    logger.debug(
        "Built blocked set: %d intervals -> %d days (buffer %d/%d)",
        count, len(blocked), buffer.lead_buffer_days, buffer.trail_buffer_days,
    )
    return blocked
