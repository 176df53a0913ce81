from src.booking.session import BookingSession
from src.booking.state_machine import (
    BookingStateMachine,
    InvalidTransitionError,
    SessionState,
    SessionTrigger,
)

__all__ = [
    "BookingSession",
    "BookingStateMachine",
    "SessionState",
    "SessionTrigger",
    "InvalidTransitionError",
]
