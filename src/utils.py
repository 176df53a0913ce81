"""Shared calendar-day utilities used across the booking engine."""

from datetime import date, datetime, timedelta
from typing import Iterator, Union

DateLike = Union[date, datetime, str]

PERIOD_SEPARATOR = " ~ "


class CalendarInputError(ValueError):
    """Raised for malformed calendar input. Indicates a programmer error."""


def to_calendar_date(value: DateLike) -> date:
    """Normalize a value to a timezone-naive calendar day.

    Examples:
        >>> to_calendar_date("2025-03-05")
        datetime.date(2025, 3, 5)
        >>> to_calendar_date(datetime(2025, 3, 5, 18, 30))
        datetime.date(2025, 3, 5)
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip()[:10])
        except ValueError:
            raise CalendarInputError(f"Not an ISO calendar date: {value!r}") from None
    raise CalendarInputError(
        f"Expected a date, datetime or ISO string, got {type(value).__name__}"
    )


def days_inclusive(start: date, end: date) -> int:
    """Number of calendar days in ``[start, end]``."""
    return (end - start).days + 1


def iter_days(start: date, end: date) -> Iterator[date]:
    """Yield every day from ``start`` to ``end`` inclusive."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def format_display_date(value: date) -> str:
    """Format a day the way the rental pages display it: ``2025.03.05``."""
    return f"{value.year}.{value.month:02d}.{value.day:02d}"


def parse_rental_period(value: str) -> tuple[date, date]:
    """Split a ``"YYYY-MM-DD ~ YYYY-MM-DD"`` rental period string.

    Examples:
        >>> parse_rental_period("2025-06-01 ~ 2025-06-07")
        (datetime.date(2025, 6, 1), datetime.date(2025, 6, 7))
    """
    parts = [p.strip() for p in value.split("~")]
    if len(parts) != 2:
        raise CalendarInputError(f"Rental period must look like 'start ~ end': {value!r}")
    return to_calendar_date(parts[0]), to_calendar_date(parts[1])
