from __future__ import annotations

from datetime import date, datetime
from typing import Any

from tuteasy.application.exceptions import NetworkError
from tuteasy.application.utils.time_slots import parse_time
from tuteasy.domain.entities.booking import Booking, BookingStatus
from tuteasy.domain.entities.time_slot import TimeSlot
from tuteasy.domain.entities.tutor import TutorDetails


def parse_day(value: str) -> date:
    """Accepts ``YYYY-MM-DD`` or a full ISO timestamp; keeps only the calendar day."""
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError as e:
        raise NetworkError(f"Invalid date in response: {value!r}") from e


def parse_timestamp(value: str | None) -> datetime:
    if not value:
        return datetime.now()
    try:
        return datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError as e:
        raise NetworkError(f"Invalid timestamp in response: {value!r}") from e


def parse_time_slot(data: dict[str, Any]) -> TimeSlot:
    hour, minute = parse_time(str(data["time"]))
    price = data.get("price")
    return TimeSlot(
        time=f"{hour:02d}:{minute:02d}",
        available=bool(data.get("available", True)),
        price=float(price) if price is not None else None,
    )


def parse_tutor(data: dict[str, Any]) -> TutorDetails:
    try:
        return TutorDetails(
            id=str(data["id"]),
            name=str(data["name"]),
            subject=str(data.get("subject") or ""),
            hourly_rate=float(data["hourlyRate"]),
            rating=float(data["rating"]) if data.get("rating") is not None else None,
            experience=int(data["experience"]) if data.get("experience") is not None else None,
            avatar=data.get("avatar"),
            bio=data.get("bio"),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise NetworkError("Invalid tutor details in response") from e


def parse_booking(data: dict[str, Any]) -> Booking:
    try:
        return Booking(
            id=str(data["id"]),
            tutor_id=str(data["tutorId"]),
            student_id=str(data.get("studentId") or ""),
            date=parse_day(data["date"]),
            time=str(data["time"]),
            duration=int(data["duration"]),
            status=BookingStatus(data.get("status", BookingStatus.PENDING.value)),
            price=float(data.get("price") or 0),
            created_at=parse_timestamp(data.get("createdAt")),
            subject=data.get("subject"),
            notes=data.get("notes"),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise NetworkError("Invalid booking in response") from e
