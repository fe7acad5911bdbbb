from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class CalendarCell:
    date: date
    in_current_month: bool
    is_today: bool
    is_available: bool
    is_selected: bool
    is_disabled: bool

    @property
    def is_selectable(self) -> bool:
        # Disabled wins over available.
        return self.is_available and not self.is_disabled

    @property
    def title(self) -> str:
        if self.is_available:
            return f"Available on {self.date.strftime('%d/%m/%Y')}"
        if self.is_disabled:
            return "Date not available"
        return "No slots available"


# a 42-cell grid must fit between date.min and date.max
MIN_YEAR = 2
MAX_YEAR = 9998


@dataclass(frozen=True)
class CalendarMonth:
    year: int
    month: int  # 1-12

    def __post_init__(self) -> None:
        if not 1 <= self.month <= 12:
            raise ValueError(f"month must be in 1..12, got {self.month}")
        if not MIN_YEAR <= self.year <= MAX_YEAR:
            raise ValueError(f"year must be in {MIN_YEAR}..{MAX_YEAR}, got {self.year}")

    @staticmethod
    def of(day: date) -> "CalendarMonth":
        return CalendarMonth(year=day.year, month=day.month)

    def next(self) -> "CalendarMonth":
        if self.month == 12:
            return CalendarMonth(year=self.year + 1, month=1)
        return CalendarMonth(year=self.year, month=self.month + 1)

    def previous(self) -> "CalendarMonth":
        if self.month == 1:
            return CalendarMonth(year=self.year - 1, month=12)
        return CalendarMonth(year=self.year, month=self.month - 1)

    def first_day(self) -> date:
        return date(self.year, self.month, 1)

    def key(self) -> str:
        """Month as ``YYYY-MM``, the format the availability API expects."""
        return f"{self.year:04d}-{self.month:02d}"
