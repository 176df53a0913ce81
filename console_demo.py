"""
Offline console demo: runs a date-picker session without any backend.

Drives the real booking session, validator, repair step and month grid
against an in-memory schedule. No network calls. Designed for walking
through the booking rules interactively or with pre-scripted scenarios.

Usage:
    python console_demo.py
    python console_demo.py --scenario rules
    python console_demo.py --scenario cap
"""

import argparse
import asyncio
from datetime import date
from typing import Optional

from src.availability.results import RangeResult
from src.availability.rules import CalendarRules, StayPreset
from src.booking.session import BookingSession
from src.config import settings
from src.schemas.booking_schema import ReservedInterval
from src.tools.memory_store import InMemoryScheduleStore
from src.utils import CalendarInputError

BLUE = "\033[94m"
GREEN = "\033[92m"
YELLOW = "\033[93m"
RED = "\033[91m"
DIM = "\033[2m"
RESET = "\033[0m"
BOLD = "\033[1m"

DEMO_ITEM_ID = 1001
DEMO_SIZE = "M"
DEMO_TODAY = date(2025, 3, 1)
# Admin listing format, as periods are entered in the back office
DEMO_RESERVATIONS = ["2025-03-10 ~ 2025-03-11", "2025-03-24 ~ 2025-03-26"]


class ConsoleSession:
    """Plays a booking session in the terminal."""

    # Pre-scripted scenarios for --scenario flag
    SCENARIOS: dict[str, list[str]] = {
        "booking": [
            "preset short",
            "start 2025-03-17",
            "confirm",
        ],
        "rules": [
            "preset short",
            "start 2025-03-03",
            "start 2025-03-16",
            "start 2025-03-12",
            "start 2025-03-17",
            "end 2025-03-19",
            "end 2025-03-20",
            "adjust -1",
            "adjust +1",
            "confirm",
        ],
        "cap": [
            "preset long",
            "start 2025-03-02",
            "start 2025-03-05",
            "start 2025-03-15",
            "confirm",
        ],
    }

    def __init__(self, today: date = DEMO_TODAY) -> None:
        self.today = today
        self.store = InMemoryScheduleStore()
        self.store.add_reservations(DEMO_ITEM_ID, DEMO_SIZE, [
            ReservedInterval.from_rental_period(period) for period in DEMO_RESERVATIONS
        ])
        self.rules = CalendarRules.from_config(settings.rules)
        self.session = BookingSession(
            self.rules,
            self.store,
            today=lambda: today,
            on_validation_result=self._show_result,
        )

    def system_log(self, text: str) -> None:
        print(f"{DIM}  >> {text}{RESET}")

    def _show_result(self, result: RangeResult) -> None:
        if result.passed and result.range is not None:
            print(f"{GREEN}  OK  {result.range.format_period()} "
                  f"({result.range.length} days){RESET}")
        elif not result.passed:
            print(f"{RED}  NO  {result.message}{RESET}")

    def print_month(self, year: int, month: int) -> None:
        print(f"\n{BOLD}  {year} / {month:02d}{RESET}")
        print("  Su Mo Tu We Th Fr Sa")
        for week in self.session.month(year, month):
            cells = []
            for cell in week:
                if cell is None:
                    cells.append("  ")
                    continue
                text = f"{cell.day.day:2d}"
                if cell.is_start or cell.is_end:
                    text = f"{BOLD}{YELLOW}{text}{RESET}"
                elif cell.between:
                    text = f"{YELLOW}{text}{RESET}"
                elif not cell.selectable:
                    text = f"{DIM}{text}{RESET}"
                elif cell.highlighted_red:
                    text = f"{RED}{text}{RESET}"
                cells.append(text)
            print("  " + " ".join(cells))

    async def open(self) -> bool:
        result = await self.session.open(DEMO_ITEM_ID, DEMO_SIZE)
        if not result.passed:
            return False
        self.system_log(f"Blocked days: {len(self.session.blocked)}")
        self.system_log(f"State: {self.session.state.value}")
        return True

    async def handle(self, command: str) -> None:
        parts = command.split()
        if not parts:
            return
        verb, args = parts[0].lower(), parts[1:]
        try:
            if verb == "preset" and args:
                self.session.choose_preset(StayPreset(args[0].lower()))
                self.system_log(f"Preset: {self.session.preset.label}")
            elif verb == "start" and args:
                self.session.pick_start(args[0])
            elif verb == "end" and args:
                self.session.pick_end(args[0])
            elif verb == "click" and args:
                self.session.click_day(args[0])
            elif verb == "adjust" and args:
                self.session.adjust_end(int(args[0]))
            elif verb == "month" and args:
                year, month = (int(p) for p in args[0].split("-"))
                self.print_month(year, month)
            elif verb == "confirm":
                if self.session.confirm().passed:
                    response = await self.session.submit()
                    colour = GREEN if response.success else RED
                    print(f"{colour}  {response.message}{RESET}")
            else:
                print(f"{YELLOW}  Commands: preset short|long, start/end/click YYYY-MM-DD, "
                      f"adjust +1|-1, month YYYY-MM, confirm, quit{RESET}")
        except (ValueError, CalendarInputError) as exc:
            print(f"{RED}  Invalid input: {exc}{RESET}")
        self.system_log(f"State: {self.session.state.value}")

    def _banner(self, title: str) -> None:
        print()
        print(f"{BOLD}{'=' * 60}{RESET}")
        print(f"{BOLD}  RENTAL CALENDAR - {title}{RESET}")
        print(f"{BOLD}  Item {DEMO_ITEM_ID} / size {DEMO_SIZE}, today {self.today}{RESET}")
        print(f"{BOLD}{'=' * 60}{RESET}")

    def _footer(self) -> None:
        print(f"\n{BOLD}{'=' * 60}{RESET}")
        print(f"{DIM}  State trace: {' -> '.join(self.session.state_machine.get_state_trace())}{RESET}")
        print(f"{BOLD}{'=' * 60}{RESET}")

    async def run_scenario(self, scenario: str) -> None:
        """Auto-play a pre-scripted scenario for demo purposes."""
        steps = self.SCENARIOS.get(scenario)
        if not steps:
            print(f"{RED}Unknown scenario: {scenario}{RESET}")
            return

        self._banner(f"Scenario: {scenario}")
        if not await self.open():
            return
        self.print_month(self.today.year, self.today.month)

        for step in steps:
            if self.session.state_machine.is_terminal():
                break
            print(f"\n{BLUE}[Customer] {RESET}{step}")
            await self.handle(step)
        self._footer()

    async def run(self) -> None:
        self._banner("Console Demo (type 'quit' to exit)")
        if not await self.open():
            return
        self.print_month(self.today.year, self.today.month)

        while not self.session.state_machine.is_terminal():
            command = input(f"\n{BLUE}[Customer] {RESET}").strip()
            if command.lower() in ("quit", "exit", "q"):
                print(f"\n{DIM}Session ended.{RESET}")
                return
            await self.handle(command)
        self._footer()


def main(argv: Optional[list[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Offline booking calendar demo")
    parser.add_argument(
        "--scenario",
        choices=sorted(ConsoleSession.SCENARIOS),
        default=None,
        help="Auto-play a pre-scripted scenario instead of interactive mode",
    )
    parser.add_argument(
        "--today",
        type=date.fromisoformat,
        default=DEMO_TODAY,
        help="Pretend today is this ISO date",
    )
    args = parser.parse_args(argv)

    session = ConsoleSession(today=args.today)
    if args.scenario:
        asyncio.run(session.run_scenario(args.scenario))
    else:
        asyncio.run(session.run())


if __name__ == "__main__":
    main()
