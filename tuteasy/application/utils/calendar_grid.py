from __future__ import annotations

from collections.abc import Iterable
from datetime import date, datetime, timedelta

from tuteasy.domain.entities.calendar import CalendarCell, CalendarMonth

GRID_SIZE = 42  # 6 full weeks, so the grid never reflows height

MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

DAY_NAMES = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")


def as_day(value: date | datetime) -> date:
    """Strip any time component so comparisons are by calendar day."""
    if isinstance(value, datetime):
        return value.date()
    return value


def grid_start(year: int, month: int) -> date:
    """The Sunday on or before the first of the month."""
    first = date(year, month, 1)
    days_since_sunday = (first.weekday() + 1) % 7
    return first - timedelta(days=days_since_sunday)


def is_day_disabled(day: date, today: date, min_date: date, max_date: date | None = None) -> bool:
    return day < today or day < min_date or (max_date is not None and day > max_date)


def build_grid(
    year: int,
    month: int,
    available_dates: Iterable[date | datetime],
    min_date: date | datetime | None = None,
    max_date: date | datetime | None = None,
    selected_date: date | datetime | None = None,
    today: date | None = None,
) -> list[CalendarCell]:
    """Build the 42-cell month grid. Does not mutate ``available_dates``."""
    today = today or date.today()
    minimum = as_day(min_date) if min_date is not None else today
    maximum = as_day(max_date) if max_date is not None else None
    selected = as_day(selected_date) if selected_date is not None else None
    available = {as_day(d) for d in available_dates}

    start = grid_start(year, month)
    cells: list[CalendarCell] = []
    for offset in range(GRID_SIZE):
        day = start + timedelta(days=offset)
        cells.append(
            CalendarCell(
                date=day,
                in_current_month=day.month == month and day.year == year,
                is_today=day == today,
                is_available=day in available,
                is_selected=selected is not None and day == selected,
                is_disabled=is_day_disabled(day, today, minimum, maximum),
            )
        )
    return cells


def month_title(month: CalendarMonth) -> str:
    return f"{MONTH_NAMES[month.month - 1]} {month.year}"


def find_cell(cells: list[CalendarCell], day: date | datetime) -> CalendarCell | None:
    target = as_day(day)
    for cell in cells:
        if cell.date == target:
            return cell
    return None
