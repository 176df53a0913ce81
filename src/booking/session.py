"""
Booking session: the per-interaction orchestrator behind the date picker.

Holds the current selection (preset, start, end) for one item/size, runs
every candidate change through the validator and repair step, and hands
the canonical range to the schedule collaborator once confirmed. A session
is created when the picker opens and simply dropped when it closes.

Usage:
    session = BookingSession(rules, store)
    await session.open(item_id=42, size_label="M")
    session.choose_preset(StayPreset.SHORT)
    session.pick_start(date(2025, 3, 5))
    session.adjust_end(+1)
    if session.confirm().passed:
        response = await session.submit()
"""

import uuid
from datetime import date, timedelta
from typing import Callable, Optional

from src.availability.blocked_dates import BlockedDateSet, build_blocked_dates
from src.availability.month_view import DayCell, build_month
from src.availability.repair import auto_end
from src.availability.results import RangeResult, ReasonCode, rejection
from src.availability.rules import CalendarRules, StayPreset
from src.availability.validator import validate_range, validate_start
from src.booking.state_machine import (
    BookingStateMachine,
    InvalidTransitionError,
    SessionState,
    SessionTrigger,
)
from src.config import settings
from src.logging_context import bind_session_id, get_session_logger
from src.schemas.booking_schema import BookingResponse, BufferPolicy, DateRange
from src.tools.schedule_api import BookingConflictError, ScheduleApiError, ScheduleClient
from src.utils import DateLike, to_calendar_date

logger = get_session_logger(__name__)

BlockedSetListener = Callable[[BlockedDateSet], None]
ResultListener = Callable[[RangeResult], None]


def default_buffer() -> BufferPolicy:
    return BufferPolicy(
        lead_buffer_days=settings.buffer.lead_buffer_days,
        trail_buffer_days=settings.buffer.trail_buffer_days,
    )


class BookingSession:
    """Selection state and rule orchestration for one item/size."""

    def __init__(
        self,
        rules: CalendarRules,
        schedule: ScheduleClient,
        buffer: Optional[BufferPolicy] = None,
        today: Callable[[], date] = date.today,
        on_blocked_set_ready: Optional[BlockedSetListener] = None,
        on_validation_result: Optional[ResultListener] = None,
        session_id: Optional[str] = None,
    ) -> None:
        self.rules = rules
        self.schedule = schedule
        self.buffer = buffer or default_buffer()
        self._today = today
        self._on_blocked_set_ready = on_blocked_set_ready
        self._on_validation_result = on_validation_result
        self.session_id = session_id or f"BS-{uuid.uuid4().hex[:6]}"

        self._sm = BookingStateMachine()
        self.item_id: Optional[int] = None
        self.size_label: Optional[str] = None
        self.blocked = BlockedDateSet()
        self.preset: Optional[StayPreset] = None
        self.start: Optional[date] = None
        self.end: Optional[date] = None
        self.booking_id: Optional[str] = None

    # ------------------------------------------------------------------ #
    # State
    # ------------------------------------------------------------------ #

    @property
    def state(self) -> SessionState:
        return self._sm.current_state

    @property
    def state_machine(self) -> BookingStateMachine:
        return self._sm

    @property
    def selection(self) -> Optional[DateRange]:
        """The current canonical range, if one has been produced."""
        if self.start is None or self.end is None:
            return None
        return DateRange(start=self.start, end=self.end)

    def today(self) -> date:
        return to_calendar_date(self._today())

    def _emit(self, result: RangeResult) -> RangeResult:
        if not result.passed:
            logger.info("Rejected: %s", result.reason.value if result.reason else "-")
        if self._on_validation_result is not None:
            self._on_validation_result(result)
        return result

    def _clear_range(self) -> None:
        self.start = None
        self.end = None

    # ------------------------------------------------------------------ #
    # Item/size
    # ------------------------------------------------------------------ #

    async def open(self, item_id: int, size_label: str) -> RangeResult:
        """
        Load reserved intervals for an item/size and build the blocked set.

        A fetch failure leaves the session state untouched and returns a
        FETCH_FAILED result; the caller decides whether to retry.
        """
        bind_session_id(self.session_id)
        if not self._sm.can(SessionTrigger.BLOCKED_SET_READY):
            raise InvalidTransitionError(
                f"Cannot open an item from state '{self.state.value}'"
            )
        try:
            intervals = await self.schedule.fetch_unavailable_ranges(item_id, size_label)
        except ScheduleApiError as exc:
            logger.warning("Reservation fetch failed: %s", exc)
            return self._emit(RangeResult.rejected(ReasonCode.FETCH_FAILED))

        self.blocked = build_blocked_dates(intervals, self.buffer)
        self.item_id = item_id
        self.size_label = size_label
        self.preset = None
        self._clear_range()
        self._sm.transition(SessionTrigger.BLOCKED_SET_READY)
        logger.info(
            "Opened %s/%s with %d blocked days", item_id, size_label, len(self.blocked),
        )
        if self._on_blocked_set_ready is not None:
            self._on_blocked_set_ready(self.blocked)
        return RangeResult.accepted()

    async def refresh(self) -> RangeResult:
        """Re-fetch the reserved intervals of the open item, keeping the selection."""
        bind_session_id(self.session_id)
        if self.item_id is None or self._sm.is_terminal():
            raise InvalidTransitionError(f"Nothing to refresh in state '{self.state.value}'")
        try:
            intervals = await self.schedule.fetch_unavailable_ranges(self.item_id, self.size_label)
        except ScheduleApiError as exc:
            logger.warning("Reservation refresh failed: %s", exc)
            return self._emit(RangeResult.rejected(ReasonCode.FETCH_FAILED))

        self.blocked = build_blocked_dates(intervals, self.buffer)
        logger.info("Refreshed: %d blocked days", len(self.blocked))
        if self._on_blocked_set_ready is not None:
            self._on_blocked_set_ready(self.blocked)
        return RangeResult.accepted()

    # ------------------------------------------------------------------ #
    # Preset
    # ------------------------------------------------------------------ #

    def choose_preset(self, preset: StayPreset) -> SessionState:
        """Select a stay preset. Any previously chosen range is discarded."""
        bind_session_id(self.session_id)
        if self.state == SessionState.PRESET_CHOSEN:
            self._sm.transition(SessionTrigger.PRESET_RESET)
        elif not self._sm.can(SessionTrigger.PRESET_SELECTED):
            raise InvalidTransitionError(
                f"Cannot choose a preset in state '{self.state.value}'"
            )
        self.preset = preset
        self._clear_range()
        return self._sm.transition(SessionTrigger.PRESET_SELECTED)

    def clear_preset(self) -> SessionState:
        bind_session_id(self.session_id)
        if not self._sm.can(SessionTrigger.PRESET_RESET):
            raise InvalidTransitionError(
                f"Cannot clear the preset in state '{self.state.value}'"
            )
        self.preset = None
        self._clear_range()
        return self._sm.transition(SessionTrigger.PRESET_RESET)

    # ------------------------------------------------------------------ #
    # Date edits
    # ------------------------------------------------------------------ #

    def _require_editable(self) -> None:
        bind_session_id(self.session_id)
        if not self._sm.can(SessionTrigger.RANGE_EDITED):
            raise InvalidTransitionError(
                f"Dates cannot be edited in state '{self.state.value}'; choose a preset first"
            )

    def _accept(self, result: RangeResult) -> RangeResult:
        self.start = result.range.start
        self.end = result.range.end
        self._sm.transition(SessionTrigger.RANGE_EDITED)
        logger.debug("Selection %s", result.range.format_period())
        return self._emit(result)

    def pick_start(self, day: DateLike) -> RangeResult:
        """Pick a start date; the end is derived from the preset and repaired."""
        self._require_editable()
        day = to_calendar_date(day)

        start_check = validate_start(day, self.rules, self.blocked, self.today())
        if not start_check.passed:
            return self._emit(start_check)

        proposed = DateRange(start=day, end=auto_end(day, self.preset))
        result = validate_range(proposed, self.rules, self.blocked, self.preset)
        if not result.passed:
            return self._emit(result)
        return self._accept(result)

    def pick_end(self, day: DateLike) -> RangeResult:
        """Manually move the end date. An end before the start restarts the selection."""
        self._require_editable()
        day = to_calendar_date(day)
        if self.start is None or day < self.start:
            return self.pick_start(day)

        start_check = validate_start(self.start, self.rules, self.blocked, self.today())
        if not start_check.passed:
            return self._emit(start_check)

        proposed = DateRange(start=self.start, end=day)
        result = validate_range(proposed, self.rules, self.blocked, self.preset)
        if not result.passed:
            return self._emit(result)
        return self._accept(result)

    def click_day(self, day: DateLike) -> RangeResult:
        """
        Handle a click on a calendar day.

        With a preset chosen the end is always derived, so every click starts
        a new selection. The end is then moved with ``pick_end`` or
        ``adjust_end``.
        """
        return self.pick_start(day)

    def adjust_end(self, delta: int) -> RangeResult:
        """Step the end date by ``delta`` days (the '-' and '+' buttons)."""
        self._require_editable()
        if self.start is None or self.end is None:
            return self._emit(rejection(ReasonCode.RANGE_INCOMPLETE, self.rules, self.preset))
        new_end = self.end + timedelta(days=delta)
        if new_end < self.start:
            return self._emit(rejection(ReasonCode.BELOW_MINIMUM_STAY, self.rules, self.preset))
        return self.pick_end(new_end)

    # ------------------------------------------------------------------ #
    # Confirmation and hand-off
    # ------------------------------------------------------------------ #

    def confirm(self) -> RangeResult:
        """Re-validate the selection against the latest snapshot and lock it in."""
        bind_session_id(self.session_id)
        if not self._sm.can(SessionTrigger.CONFIRMED):
            raise InvalidTransitionError(f"Cannot confirm from state '{self.state.value}'")

        selection = self.selection
        if selection is None:
            return self._emit(rejection(ReasonCode.RANGE_INCOMPLETE, self.rules, self.preset))

        start_check = validate_start(selection.start, self.rules, self.blocked, self.today())
        if not start_check.passed:
            return self._emit(start_check)
        result = validate_range(selection, self.rules, self.blocked, self.preset)
        if not result.passed:
            return self._emit(result)
        if result.range != selection:
            return self._emit(rejection(ReasonCode.DATE_ALREADY_RESERVED, self.rules, self.preset))

        self._sm.transition(SessionTrigger.CONFIRMED)
        logger.info("Confirmed %s", selection.format_period())
        return self._emit(result)

    async def submit(self) -> BookingResponse:
        """Persist the confirmed range through the schedule collaborator."""
        bind_session_id(self.session_id)
        if not self._sm.is_terminal():
            raise InvalidTransitionError("Only a confirmed range can be submitted")

        selection = self.selection
        try:
            booking_id = await self.schedule.create_booking(
                self.item_id, self.size_label, selection
            )
        except BookingConflictError as exc:
            logger.warning("Booking conflict: %s", exc)
            result = self._emit(RangeResult.rejected(ReasonCode.BOOKING_CONFLICT))
            return BookingResponse(
                success=False, reason=result.reason.value, message=result.message,
                period=selection.format_period(),
            )
        except ScheduleApiError as exc:
            logger.error("Booking failed: %s", exc)
            result = self._emit(RangeResult.rejected(ReasonCode.BOOKING_FAILED))
            return BookingResponse(
                success=False, reason=result.reason.value, message=result.message,
                period=selection.format_period(),
            )

        self.booking_id = booking_id
        return BookingResponse(
            success=True,
            booking_id=booking_id,
            message=f"Rental booked for {selection.format_period()}.",
            period=selection.format_period(),
        )

    # ------------------------------------------------------------------ #
    # Calendar widget support
    # ------------------------------------------------------------------ #

    def month(self, year: int, month: int) -> list[list[Optional[DayCell]]]:
        """Render state for one month of the picker."""
        return build_month(
            year,
            month,
            rules=self.rules,
            blocked=self.blocked,
            today=self.today(),
            selection=self.selection,
        )
