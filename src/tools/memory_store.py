"""
In-memory rental schedule.

Stands in for the schedule API in tests and in the console demo. Holds
reservations per item/size and refuses overlapping bookings the way the
real backend does.
"""

import logging
import uuid
from typing import Iterable, Optional

from src.schemas.booking_schema import DateRange, ReservedInterval
from src.tools.schedule_api import BookingConflictError, FetchFailedError

logger = logging.getLogger(__name__)


class InMemoryScheduleStore:
    """Reservation store keyed by (item_id, size_label)."""

    def __init__(self) -> None:
        self._reservations: dict[tuple[int, str], list[ReservedInterval]] = {}
        self._bookings: dict[str, tuple[int, str, DateRange]] = {}
        self.fail_fetches = False

    def add_reservations(
        self, item_id: int, size_label: str, intervals: Iterable[ReservedInterval]
    ) -> None:
        """Seed already-confirmed reservations."""
        self._reservations.setdefault((item_id, size_label), []).extend(intervals)

    async def fetch_unavailable_ranges(
        self, item_id: int, size_label: str
    ) -> list[ReservedInterval]:
        if self.fail_fetches:
            raise FetchFailedError("Schedule store unavailable")
        return list(self._reservations.get((item_id, size_label), []))

    async def create_booking(
        self, item_id: int, size_label: str, date_range: DateRange
    ) -> str:
        existing = self._reservations.setdefault((item_id, size_label), [])
        for interval in existing:
            if interval.start <= date_range.end and date_range.start <= interval.end:
                raise BookingConflictError(
                    f"{date_range.format_period()} overlaps {interval.start}..{interval.end}"
                )

        booking_id = f"RS-{uuid.uuid4().hex[:8].upper()}"
        existing.append(ReservedInterval(start=date_range.start, end=date_range.end))
        self._bookings[booking_id] = (item_id, size_label, date_range)
        logger.info(
            "Booking created: %s for %s/%s %s",
            booking_id, item_id, size_label, date_range.format_period(),
        )
        return booking_id

    def get_booking(self, booking_id: str) -> Optional[tuple[int, str, DateRange]]:
        return self._bookings.get(booking_id)

    def reset(self) -> None:
        """Clear all reservations. Used by test fixtures for isolation."""
        self._reservations.clear()
        self._bookings.clear()
        self.fail_fetches = False
