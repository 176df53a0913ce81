"""
Finite state machine for one customer's date-picker interaction.

Defines the four booking session states and explicit transitions with
triggers. Every UI event maps to a trigger; anything without a matching
transition is a programming error in the host, not a business rejection.

Usage:
    sm = BookingStateMachine()
    sm.transition(SessionTrigger.BLOCKED_SET_READY)
    assert sm.current_state == SessionState.RANGE_UNSET
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

logger = logging.getLogger(__name__)


class SessionState(str, Enum):
    """All possible states of a booking session."""
    IDLE = "idle"
    RANGE_UNSET = "range_unset"
    PRESET_CHOSEN = "preset_chosen"
    RANGE_CONFIRMED = "range_confirmed"


class SessionTrigger(str, Enum):
    """Events that cause state transitions."""
    BLOCKED_SET_READY = "blocked_set_ready"
    PRESET_SELECTED = "preset_selected"
    PRESET_RESET = "preset_reset"
    RANGE_EDITED = "range_edited"
    CONFIRMED = "confirmed"


@dataclass
class Transition:
    """A single valid state transition."""
    from_state: SessionState
    to_state: SessionState
    trigger: SessionTrigger


@dataclass
class StateEntry:
    """Recorded history entry for a state visit."""
    state: SessionState
    entered_at: datetime
    trigger: Optional[SessionTrigger] = None


class InvalidTransitionError(Exception):
    """Raised when a transition is not valid from the current state."""


class BookingStateMachine:
    """
    Deterministic state machine controlling the booking session.

    RANGE_CONFIRMED is terminal: once a range is handed to persistence the
    session is done, and a stale snapshot means starting a new session.
    """

    TRANSITIONS: list[Transition] = [
        # --- Item/size known, blocked dates computed ---
        Transition(SessionState.IDLE, SessionState.RANGE_UNSET,
                   SessionTrigger.BLOCKED_SET_READY),
        Transition(SessionState.RANGE_UNSET, SessionState.RANGE_UNSET,
                   SessionTrigger.BLOCKED_SET_READY),
        Transition(SessionState.PRESET_CHOSEN, SessionState.RANGE_UNSET,
                   SessionTrigger.BLOCKED_SET_READY),

        # --- Preset selection ---
        Transition(SessionState.RANGE_UNSET, SessionState.PRESET_CHOSEN,
                   SessionTrigger.PRESET_SELECTED),
        Transition(SessionState.RANGE_UNSET, SessionState.RANGE_UNSET,
                   SessionTrigger.PRESET_RESET),
        Transition(SessionState.PRESET_CHOSEN, SessionState.RANGE_UNSET,
                   SessionTrigger.PRESET_RESET),

        # --- Date edits ---
        Transition(SessionState.PRESET_CHOSEN, SessionState.PRESET_CHOSEN,
                   SessionTrigger.RANGE_EDITED),

        # --- Terminal ---
        Transition(SessionState.PRESET_CHOSEN, SessionState.RANGE_CONFIRMED,
                   SessionTrigger.CONFIRMED),
    ]

    def __init__(self) -> None:
        self._current_state = SessionState.IDLE
        self._history: list[StateEntry] = [
            StateEntry(state=SessionState.IDLE, entered_at=datetime.now(timezone.utc))
        ]

    @property
    def current_state(self) -> SessionState:
        return self._current_state

    def can(self, trigger: SessionTrigger) -> bool:
        """Check whether ``trigger`` is valid from the current state."""
        return trigger in self.get_valid_triggers()

    def transition(self, trigger: SessionTrigger) -> SessionState:
        """
        Execute a state transition.

        Args:
            trigger: The event triggering the transition.

        Returns:
            The new session state.

        Raises:
            InvalidTransitionError: If no valid transition exists.
        """
        for t in self.TRANSITIONS:
            if t.from_state == self._current_state and t.trigger == trigger:
                old_state = self._current_state
                self._current_state = t.to_state

                self._history.append(StateEntry(
                    state=self._current_state,
                    entered_at=datetime.now(timezone.utc),
                    trigger=trigger,
                ))

                logger.debug(
                    "State transition: %s -> %s (trigger: %s)",
                    old_state.value, self._current_state.value, trigger.value,
                )
                return self._current_state

        valid = [t.value for t in self.get_valid_triggers()]
        raise InvalidTransitionError(
            f"No valid transition from '{self._current_state.value}' "
            f"with trigger '{trigger.value}'. Valid triggers: {valid}"
        )

    def get_valid_triggers(self) -> list[SessionTrigger]:
        """Return all triggers valid from the current state."""
        return [t.trigger for t in self.TRANSITIONS if t.from_state == self._current_state]

    def get_history(self) -> list[StateEntry]:
        """Return the full state transition history."""
        return list(self._history)

    def get_state_trace(self) -> list[str]:
        """Return ordered list of state names visited."""
        return [entry.state.value for entry in self._history]

    def is_terminal(self) -> bool:
        """Check if the session has handed off a confirmed range."""
        return self._current_state == SessionState.RANGE_CONFIRMED
