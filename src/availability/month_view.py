"""Month grid for the date-picker widget.

Weeks run Sunday to Saturday. Each cell tells the widget how to render and
whether the day can be clicked, so no rule logic lives in the UI layer.
"""

import calendar
from dataclasses import dataclass
from datetime import date
from typing import Optional

from src.availability.blocked_dates import BlockedDateSet
from src.availability.rules import CalendarRules
from src.availability.validator import earliest_start
from src.schemas.booking_schema import DateRange

_SUNDAY_FIRST = calendar.Calendar(firstweekday=calendar.SUNDAY)


@dataclass(frozen=True)
class DayCell:
    """Render state of one day in the picker."""

    day: date
    reserved: bool = False
    past: bool = False
    holiday: bool = False
    disallowed_weekday: bool = False
    is_today: bool = False
    is_start: bool = False
    is_end: bool = False
    between: bool = False

    @property
    def selectable(self) -> bool:
        return not (self.reserved or self.past)

    @property
    def highlighted_red(self) -> bool:
        return self.holiday or self.disallowed_weekday


def build_month(
    year: int,
    month: int,
    *,
    rules: CalendarRules,
    blocked: BlockedDateSet,
    today: date,
    selection: Optional[DateRange] = None,
) -> list[list[Optional[DayCell]]]:
    """Weeks of the month; padding days outside the month are None."""
    min_day = earliest_start(today, rules)
    start = selection.start if selection else None
    end = selection.end if selection else None

    weeks: list[list[Optional[DayCell]]] = []
    for week in _SUNDAY_FIRST.monthdayscalendar(year, month):
        row: list[Optional[DayCell]] = []
        for day_number in week:
            if day_number == 0:
                row.append(None)
                continue
            day = date(year, month, day_number)
            row.append(DayCell(
                day=day,
                reserved=day in blocked,
                past=day < min_day,
                holiday=rules.is_holiday(day),
                disallowed_weekday=day.weekday() in rules.disallowed_weekdays,
                is_today=day == today,
                is_start=day == start,
                is_end=day == end,
                between=start is not None and end is not None and start < day < end,
            ))
        weeks.append(row)
    return weeks
