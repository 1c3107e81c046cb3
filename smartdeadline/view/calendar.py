from __future__ import annotations

import calendar as _calendar
import datetime as _dt
from collections.abc import Iterable
from dataclasses import dataclass, field

WEEKDAY_HEADER = ("Su", "Mo", "Tu", "We", "Th", "Fr", "Sa")


@dataclass(frozen=True, slots=True)
class DayCell:
    day: int
    today: bool = False
    due: bool = False


@dataclass(frozen=True, slots=True)
class MonthView:
    label: str
    leading_blanks: int
    days: list[DayCell] = field(default_factory=list)


def render_month(today: _dt.date, due_dates: Iterable[_dt.date | None] = ()) -> MonthView:
    """Build a Sunday-first month grid for the month containing `today`."""
    first_weekday, total = _calendar.monthrange(today.year, today.month)
    # monthrange counts Monday as 0
    leading = (first_weekday + 1) % 7
    due_days = {
        d.day for d in due_dates if d is not None and (d.year, d.month) == (today.year, today.month)
    }
    days = [
        DayCell(day=d, today=d == today.day, due=d in due_days) for d in range(1, total + 1)
    ]
    label = f"{_calendar.month_name[today.month]} {today.year}"
    return MonthView(label=label, leading_blanks=leading, days=days)


def _cell(cell: DayCell) -> str:
    text = f"{cell.day:>2}"
    if cell.today:
        return f"[{text}]"
    if cell.due:
        return f"*{text} "
    return f" {text} "


def format_month(view: MonthView) -> str:
    lines = [view.label.center(28).rstrip(), "".join(f" {h} " for h in WEEKDAY_HEADER)]
    cells = ["    "] * view.leading_blanks + [_cell(c) for c in view.days]
    for i in range(0, len(cells), 7):
        lines.append("".join(cells[i : i + 7]).rstrip())
    return "\n".join(lines)


__all__ = ["DayCell", "MonthView", "format_month", "render_month"]
