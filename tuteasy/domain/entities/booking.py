from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum


class BookingStatus(str, Enum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    CANCELLED = "CANCELLED"


@dataclass(frozen=True)
class BookingRequest:
    tutor_id: str
    date: date
    time: str  # HH:MM
    duration: int  # minutes
    subject: str | None = None
    notes: str | None = None

    def to_payload(self) -> dict[str, object]:
        payload: dict[str, object] = {
            "tutorId": self.tutor_id,
            "date": self.date.isoformat(),
            "time": self.time,
            "duration": self.duration,
        }
        if self.subject:
            payload["subject"] = self.subject
        if self.notes:
            payload["notes"] = self.notes
        return payload


@dataclass(frozen=True)
class Booking:
    id: str
    tutor_id: str
    student_id: str
    date: date
    time: str
    duration: int
    status: BookingStatus
    price: float
    created_at: datetime
    subject: str | None = None
    notes: str | None = None
