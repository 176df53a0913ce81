"""
Centralized configuration with environment variable overrides.

All booking rules, logistics buffers, and schedule API settings are
configurable here. Nothing is hardcoded in the availability engine.
"""

import logging
import os
from dataclasses import dataclass, field
from datetime import date

from dotenv import load_dotenv

from src.logging_context import configure_logging

load_dotenv()

logger = logging.getLogger(__name__)


def _safe_int(env_var: str, default: str) -> int:
    """Parse an integer from an env var with a clear error on bad values."""
    raw = os.getenv(env_var, default)
    try:
        return int(raw)
    except (ValueError, TypeError):
        raise ValueError(
            f"Invalid integer for {env_var}: {raw!r}"
        ) from None


def _safe_float(env_var: str, default: str) -> float:
    """Parse a float from an env var with a clear error on bad values."""
    raw = os.getenv(env_var, default)
    try:
        return float(raw)
    except (ValueError, TypeError):
        raise ValueError(
            f"Invalid float for {env_var}: {raw!r}"
        ) from None


def _safe_bool(env_var: str, default: str) -> bool:
    raw = os.getenv(env_var, default).strip().lower()
    if raw in ("1", "true", "yes", "on"):
        return True
    if raw in ("0", "false", "no", "off", ""):
        return False
    raise ValueError(f"Invalid boolean for {env_var}: {raw!r}")


def _safe_int_set(env_var: str, default: str) -> frozenset[int]:
    """Parse a comma-separated list of integers, e.g. ``"5,6"``."""
    raw = os.getenv(env_var, default)
    try:
        return frozenset(int(part) for part in raw.split(",") if part.strip())
    except ValueError:
        raise ValueError(
            f"Invalid integer list for {env_var}: {raw!r}"
        ) from None


def _safe_date_set(env_var: str, default: str) -> frozenset[date]:
    """Parse a comma-separated list of ISO dates, e.g. ``"2025-07-17"``."""
    raw = os.getenv(env_var, default)
    try:
        return frozenset(
            date.fromisoformat(part.strip()) for part in raw.split(",") if part.strip()
        )
    except ValueError:
        raise ValueError(
            f"Invalid ISO date list for {env_var}: {raw!r}"
        ) from None


@dataclass(frozen=True)
class RulesConfig:
    """Calendar policy: lead time, stay cap, and start-day restrictions."""

    min_lead_days: int = _safe_int("MIN_LEAD_DAYS", "4")
    max_total_days: int = _safe_int("MAX_TOTAL_DAYS", "10")
    # Python weekday numbers, 0=Monday ... 6=Sunday
    disallowed_weekdays: frozenset[int] = _safe_int_set("DISALLOWED_WEEKDAYS", "6")
    holiday_country: str = os.getenv("HOLIDAY_COUNTRY", "KR")
    # Holidays that are staffed and therefore allowed as a start day
    holiday_overrides: frozenset[date] = _safe_date_set("HOLIDAY_OVERRIDES", "2025-07-17")
    strict_interior: bool = _safe_bool("STRICT_INTERIOR", "false")


@dataclass(frozen=True)
class BufferConfig:
    """Shipping and cleaning turnaround around every reservation."""

    lead_buffer_days: int = _safe_int("LEAD_BUFFER_DAYS", "3")
    trail_buffer_days: int = _safe_int("TRAIL_BUFFER_DAYS", "3")


@dataclass(frozen=True)
class ScheduleApiConfig:
    """Rental schedule REST API settings."""

    base_url: str = os.getenv("SCHEDULE_API_URL", "http://localhost:3000")
    timeout_sec: float = _safe_float("SCHEDULE_API_TIMEOUT", "10.0")
    token: str = os.getenv("SCHEDULE_API_TOKEN", "")


@dataclass(frozen=True)
class AppConfig:
    """Root configuration aggregating all sub-configs."""

    rules: RulesConfig = field(default_factory=RulesConfig)
    buffer: BufferConfig = field(default_factory=BufferConfig)
    schedule_api: ScheduleApiConfig = field(default_factory=ScheduleApiConfig)
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    service_name: str = os.getenv("SERVICE_NAME", "rental-calendar")


def _validate_config(config: AppConfig) -> None:
    """Validate configuration values are within acceptable ranges."""
    if config.rules.min_lead_days < 0:
        raise ValueError(
            f"MIN_LEAD_DAYS must be >= 0, got {config.rules.min_lead_days}"
        )
    if config.rules.max_total_days < 1:
        raise ValueError(
            f"MAX_TOTAL_DAYS must be >= 1, got {config.rules.max_total_days}"
        )
    bad_weekdays = sorted(d for d in config.rules.disallowed_weekdays if not 0 <= d <= 6)
    if bad_weekdays:
        raise ValueError(
            f"DISALLOWED_WEEKDAYS must be between 0 and 6, got {bad_weekdays}"
        )
    if not config.rules.holiday_country:
        raise ValueError("HOLIDAY_COUNTRY must not be empty")

    for name, value in [
        ("LEAD_BUFFER_DAYS", config.buffer.lead_buffer_days),
        ("TRAIL_BUFFER_DAYS", config.buffer.trail_buffer_days),
    ]:
        if value < 0:
            raise ValueError(f"{name} must be >= 0, got {value}")

    if config.schedule_api.timeout_sec <= 0:
        raise ValueError(
            f"SCHEDULE_API_TIMEOUT must be > 0, got {config.schedule_api.timeout_sec}"
        )


def load_config() -> AppConfig:
    """Load and validate application configuration."""
    config = AppConfig()
    _validate_config(config)
    configure_logging(config.log_level)
    logger.info("Configuration loaded for '%s'", config.service_name)
    return config


# Singleton instance
settings = load_config()
