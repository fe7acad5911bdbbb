from __future__ import annotations

from datetime import date

from tuteasy.application.utils.calendar_grid import MONTH_NAMES
from tuteasy.application.utils.time_slots import format_time, parse_time

MINUTES_PER_DAY = 24 * 60

WEEKDAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


def add_minutes(time: str, minutes: int) -> str:
    """Minute-of-day arithmetic; wraps past midnight and ignores DST."""
    hour, minute = parse_time(time)
    total = (hour * 60 + minute + minutes) % MINUTES_PER_DAY
    return f"{total // 60:02d}:{total % 60:02d}"


def format_date(day: date) -> str:
    """``date(2024, 12, 15)`` -> ``"Sunday, 15 December 2024"``."""
    return f"{WEEKDAY_NAMES[day.weekday()]}, {day.day} {MONTH_NAMES[day.month - 1]} {day.year}"


def format_duration(minutes: int) -> str:
    if minutes < 60:
        return f"{minutes} mins"
    hours, remaining = divmod(minutes, 60)
    if remaining == 0:
        return f"{hours} {'hour' if hours == 1 else 'hours'}"
    return f"{hours}h {remaining}m"


def format_price(amount: float, currency_symbol: str = "£") -> str:
    return f"{currency_symbol}{amount:.2f}"


def format_time_range(start: str, end: str) -> str:
    return f"{format_time(start)} - {format_time(end)}"
