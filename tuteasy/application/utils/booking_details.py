from __future__ import annotations

from tuteasy.application.exceptions import PreconditionViolation
from tuteasy.application.utils.formatting import add_minutes
from tuteasy.domain.entities.booking_draft import BookingDetails, BookingDraft
from tuteasy.domain.entities.tutor import TutorDetails

DEFAULT_DURATION_MINUTES = 60


def compute_price(hourly_rate: float, duration_minutes: int, slot_price: float | None = None) -> float:
    """Slot-specific price wins over the tutor's hourly rate."""
    if slot_price is not None:
        return float(slot_price)
    return round(hourly_rate * (duration_minutes / 60), 2)


def derive_details(
    draft: BookingDraft,
    tutor: TutorDetails,
    duration_minutes: int = DEFAULT_DURATION_MINUTES,
    slot_price: float | None = None,
    subject: str | None = None,
) -> BookingDetails:
    if not draft.is_complete or draft.selected_date is None or draft.selected_time is None:
        raise PreconditionViolation(f"Booking details need a date and a time (draft is {draft.status.value})")
    if duration_minutes <= 0:
        raise ValueError("duration_minutes must be positive")

    return BookingDetails(
        tutor_id=draft.tutor_id,
        tutor_name=tutor.name,
        date=draft.selected_date,
        time=draft.selected_time,
        duration=duration_minutes,
        price=compute_price(tutor.hourly_rate, duration_minutes, slot_price),
        end_time=add_minutes(draft.selected_time, duration_minutes),
        subject=subject if subject is not None else tutor.subject,
    )
