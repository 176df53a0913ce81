"""Session correlation IDs for log records.

Every record emitted while a booking session is handling an event carries
that session's id, so one customer's date-picker interaction can be
followed from the reservation fetch through validation to the booking call.

Usage:
    from src.logging_context import bind_session_id, get_session_logger

    logger = get_session_logger(__name__)
    bind_session_id("BS-3f2a91")
    logger.info("Blocked dates built")
    # 2025-03-01 10:00:00 [src.booking.session] INFO [BS-3f2a91]: Blocked dates built
"""

import logging
from contextvars import ContextVar

NO_SESSION_ID = "-"
LOG_FORMAT = "%(asctime)s [%(name)s] %(levelname)s [%(session_id)s]: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_session_id: ContextVar[str] = ContextVar("session_id", default=NO_SESSION_ID)


def bind_session_id(session_id: str) -> None:
    """Tag records logged from the current context with ``session_id``."""
    _session_id.set(session_id)


class SessionIdFilter(logging.Filter):
    """Injects session_id into every log record."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "session_id"):
            record.session_id = _session_id.get()  # type: ignore[attr-defined]
        return True


def get_session_logger(name: str) -> logging.Logger:
    """Return a module logger that always carries the session id."""
    logger = logging.getLogger(name)
    if not any(isinstance(f, SessionIdFilter) for f in logger.filters):
        logger.addFilter(SessionIdFilter())
    return logger


def configure_logging(level: str = "INFO") -> None:
    """Install the root handler once, with session ids in the format.

    The filter sits on the handler as well, so records from plain
    ``logging.getLogger`` loggers format cleanly too.
    """
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    for handler in root.handlers:
        if any(isinstance(f, SessionIdFilter) for f in handler.filters):
            return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    handler.addFilter(SessionIdFilter())
    root.addHandler(handler)
