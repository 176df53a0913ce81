"""Date range, reservation and booking request data models."""

from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from src.utils import (
    PERIOD_SEPARATOR,
    days_inclusive,
    format_display_date,
    parse_rental_period,
    to_calendar_date,
)


class _DaySpan(BaseModel):
    """Inclusive ``[start, end]`` span of calendar days."""

    model_config = ConfigDict(frozen=True)

    start: date
    end: date

    @field_validator("start", "end", mode="before")
    @classmethod
    def _normalize_day(cls, value):
        return to_calendar_date(value)

    @model_validator(mode="after")
    def _check_order(self):
        if self.start > self.end:
            raise ValueError(f"start {self.start} is after end {self.end}")
        return self

    @property
    def length(self) -> int:
        """Length in days, both ends counted."""
        return days_inclusive(self.start, self.end)


class DateRange(_DaySpan):
    """A candidate or canonical booking range."""

    def format_period(self) -> str:
        """Display string handed to the product page, e.g. ``2025.03.05 ~ 2025.03.10``."""
        return (
            f"{format_display_date(self.start)}{PERIOD_SEPARATOR}"
            f"{format_display_date(self.end)}"
        )


class ReservedInterval(_DaySpan):
    """An already-confirmed booking for one item/size."""

    @classmethod
    def from_pair(cls, pair: list[str]) -> "ReservedInterval":
        """Build from the schedule API's ``["YYYY-MM-DD", "YYYY-MM-DD"]`` pair."""
        if len(pair) != 2:
            raise ValueError(f"Reserved interval needs exactly two dates, got {pair!r}")
        return cls(start=pair[0], end=pair[1])

    @classmethod
    def from_rental_period(cls, period: str) -> "ReservedInterval":
        """Build from an admin listing period like ``"2025-06-01 ~ 2025-06-07"``."""
        start, end = parse_rental_period(period)
        return cls(start=start, end=end)


class BufferPolicy(BaseModel):
    """Days blocked before and after every reservation for logistics."""

    model_config = ConfigDict(frozen=True)

    lead_buffer_days: int = Field(default=3, ge=0)
    trail_buffer_days: int = Field(default=3, ge=0)


class BookingRequest(BaseModel):
    """Body of the booking-create call sent to the schedule API."""

    model_config = ConfigDict(populate_by_name=True)

    product_id: int = Field(alias="productId")
    size_label: str = Field(alias="sizeLabel")
    start_date: date = Field(alias="startDate")
    end_date: date = Field(alias="endDate")

    @classmethod
    def for_range(cls, item_id: int, size_label: str, date_range: DateRange) -> "BookingRequest":
        return cls(
            product_id=item_id,
            size_label=size_label,
            start_date=date_range.start,
            end_date=date_range.end,
        )


class BookingResponse(BaseModel):
    """Booking creation result returned to the UI host."""

    success: bool
    booking_id: Optional[str] = None
    reason: Optional[str] = None
    message: str = ""
    period: str = ""
