"""
Rental calendar entry point.

Runs the offline date-picker console against an in-memory schedule, or
checks that the configured schedule API answers for one item/size.

Usage:
    Console mode:  python main.py console [--scenario booking]
    API check:     python main.py check 1001 M
"""

import asyncio
import logging
import sys

from src.config import settings

logger = logging.getLogger(__name__)


async def _check_schedule_api(item_id: int, size_label: str) -> int:
    """Fetch reserved intervals once and print the resulting blocked days."""
    from src.availability.blocked_dates import build_blocked_dates
    from src.booking.session import default_buffer
    from src.tools.schedule_api import HttpScheduleClient, ScheduleApiError

    client = HttpScheduleClient(settings.schedule_api)
    try:
        intervals = await client.fetch_unavailable_ranges(item_id, size_label)
    except ScheduleApiError as exc:
        logger.error("Schedule API check failed: %s", exc)
        return 1

    blocked = build_blocked_dates(intervals, default_buffer())
    print(f"{len(intervals)} reservations, {len(blocked)} blocked days")
    for day in blocked:
        print(f"  {day.isoformat()}")
    return 0


def _run_check_mode(args: list[str]) -> int:
    if len(args) != 2:
        print("Usage: python main.py check <item_id> <size_label>")
        return 2
    return asyncio.run(_check_schedule_api(int(args[0]), args[1]))


def _run_console_mode(args: list[str]) -> int:
    """Start the offline console demo (no backend required)."""
    from console_demo import main as console_main

    console_main(args)
    return 0


if __name__ == "__main__":
    if len(sys.argv) > 1 and sys.argv[1] == "check":
        sys.exit(_run_check_mode(sys.argv[2:]))
    sys.exit(_run_console_mode(sys.argv[2:] if len(sys.argv) > 1 and sys.argv[1] == "console" else sys.argv[1:]))
