from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date
from enum import Enum


class DraftStatus(str, Enum):
    EMPTY = "empty"
    DATE_ONLY = "date_only"
    TIME_SET = "time_set"


@dataclass(frozen=True)
class BookingDraft:
    tutor_id: str
    selected_date: date | None = None
    selected_time: str | None = None

    @property
    def status(self) -> DraftStatus:
        if self.selected_date is None:
            return DraftStatus.EMPTY
        if self.selected_time is None:
            return DraftStatus.DATE_ONLY
        return DraftStatus.TIME_SET

    @property
    def is_complete(self) -> bool:
        return self.status is DraftStatus.TIME_SET

    def with_date(self, day: date) -> "BookingDraft":
        """A time never carries over to a different date."""
        if self.selected_date == day:
            return self
        return replace(self, selected_date=day, selected_time=None)

    def with_time(self, time: str) -> "BookingDraft":
        if self.selected_date is None:
            raise ValueError("Cannot select a time before a date")
        return replace(self, selected_time=time)

    def cleared(self) -> "BookingDraft":
        return BookingDraft(tutor_id=self.tutor_id)


@dataclass(frozen=True)
class BookingDetails:
    tutor_id: str
    tutor_name: str
    date: date
    time: str
    duration: int
    price: float
    end_time: str
    subject: str | None = None
