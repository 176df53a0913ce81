from src.availability.blocked_dates import BlockedDateSet, build_blocked_dates
from src.availability.repair import repair
from src.availability.results import RangeResult, ReasonCode
from src.availability.rules import CalendarRules, StayPreset
from src.availability.validator import validate_range, validate_start

__all__ = [
    "BlockedDateSet",
    "build_blocked_dates",
    "CalendarRules",
    "StayPreset",
    "RangeResult",
    "ReasonCode",
    "validate_start",
    "validate_range",
    "repair",
]
