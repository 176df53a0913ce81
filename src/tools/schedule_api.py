"""
Rental schedule API client.

Two calls cross the engine boundary: fetching the reserved intervals of one
item/size, and persisting a confirmed range. Failures are raised as
ScheduleApiError subclasses; the booking session turns them into
classified results.
"""

import logging
from typing import Optional, Protocol

import httpx
from pydantic import ValidationError

from src.config import ScheduleApiConfig, settings
from src.schemas.booking_schema import BookingRequest, DateRange, ReservedInterval

logger = logging.getLogger(__name__)

UNAVAILABLE_DATES_PATH = "/rental-schedule/unavailable-dates"
CREATE_BOOKING_PATH = "/rental-schedule"


class ScheduleApiError(Exception):
    """Base class for schedule collaborator failures."""


class FetchFailedError(ScheduleApiError):
    """Reserved intervals could not be fetched or parsed."""


class BookingConflictError(ScheduleApiError):
    """The range was taken by someone else before it could be persisted."""


class ScheduleClient(Protocol):
    """Collaborator the booking session talks to."""

    async def fetch_unavailable_ranges(
        self, item_id: int, size_label: str
    ) -> list[ReservedInterval]:
        ...

    async def create_booking(
        self, item_id: int, size_label: str, date_range: DateRange
    ) -> str:
        ...


def parse_unavailable_ranges(payload: object) -> list[ReservedInterval]:
    """Parse ``[["YYYY-MM-DD", "YYYY-MM-DD"], ...]`` into intervals."""
    if not isinstance(payload, list):
        raise FetchFailedError(f"Expected a list of date pairs, got {type(payload).__name__}")
    try:
        return [ReservedInterval.from_pair(pair) for pair in payload]
    except (TypeError, ValueError, ValidationError) as exc:
        raise FetchFailedError(f"Malformed reserved interval: {exc}") from exc


class HttpScheduleClient:
    """Async HTTP client for the rental schedule endpoints."""

    def __init__(
        self,
        config: ScheduleApiConfig = settings.schedule_api,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.config = config
        self._client = client

    def _headers(self) -> dict[str, str]:
        if self.config.token:
            return {"Authorization": f"Bearer {self.config.token}"}
        return {}

    async def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        if self._client is not None:
            return await self._client.request(method, path, headers=self._headers(), **kwargs)
        async with httpx.AsyncClient(
            base_url=self.config.base_url, timeout=self.config.timeout_sec
        ) as client:
            return await client.request(method, path, headers=self._headers(), **kwargs)

    async def fetch_unavailable_ranges(
        self, item_id: int, size_label: str
    ) -> list[ReservedInterval]:
        """GET the confirmed reservation intervals of one item/size."""
        params = {"productId": item_id, "sizeLabel": size_label}
        try:
            resp = await self._request("GET", UNAVAILABLE_DATES_PATH, params=params)
            resp.raise_for_status()
            payload = resp.json()
        except httpx.HTTPError as exc:
            logger.error("Unavailable dates fetch failed for %s/%s: %s", item_id, size_label, exc)
            raise FetchFailedError(str(exc)) from exc
        except ValueError as exc:
            raise FetchFailedError(f"Response is not JSON: {exc}") from exc

        intervals = parse_unavailable_ranges(payload)
        logger.info("Fetched %d reserved intervals for %s/%s", len(intervals), item_id, size_label)
        return intervals

    async def create_booking(
        self, item_id: int, size_label: str, date_range: DateRange
    ) -> str:
        """POST a confirmed range and return the new booking id."""
        body = BookingRequest.for_range(item_id, size_label, date_range)
        try:
            resp = await self._request(
                "POST", CREATE_BOOKING_PATH, json=body.model_dump(mode="json", by_alias=True)
            )
        except httpx.HTTPError as exc:
            logger.error("Booking create failed for %s/%s: %s", item_id, size_label, exc)
            raise ScheduleApiError(str(exc)) from exc

        if resp.status_code == httpx.codes.CONFLICT:
            logger.warning(
                "Booking conflict for %s/%s on %s", item_id, size_label, date_range.format_period()
            )
            raise BookingConflictError(resp.text or "Range already booked")
        if resp.status_code >= 400:
            logger.error("Booking create -> %s: %s", resp.status_code, resp.text)
            raise ScheduleApiError(f"Booking create returned HTTP {resp.status_code}")

        try:
            booking_id = resp.json()["id"]
        except (ValueError, KeyError, TypeError) as exc:
            raise ScheduleApiError(f"Booking create response has no id: {exc}") from exc
        logger.info("Booking %s created for %s/%s", booking_id, item_id, size_label)
        return str(booking_id)
