from __future__ import annotations

import logging
from datetime import date, datetime

from tuteasy.application.exceptions import ConflictError, NetworkError
from tuteasy.application.ports.booking_store import BookingStorePort
from tuteasy.domain.entities.booking import Booking, BookingRequest, BookingStatus

SLOT_TAKEN_MESSAGE = "This time slot is no longer available. Please choose another time."


class MockBookingStore(BookingStorePort):
    def __init__(
        self,
        hourly_rates: dict[str, float] | None = None,
        student_id: str = "student-1",
        default_hourly_rate: float = 45.0,
    ) -> None:
        self._bookings: dict[str, Booking] = {}
        self._hourly_rates = dict(hourly_rates or {})
        self._student_id = student_id
        self._default_hourly_rate = default_hourly_rate
        self._logger = logging.getLogger(__name__)

    def is_booked(self, tutor_id: str, day: date, time: str) -> bool:
        return any(
            b.tutor_id == tutor_id and b.date == day and b.time == time and b.status is not BookingStatus.CANCELLED
            for b in self._bookings.values()
        )

    async def create_booking(self, request: BookingRequest) -> Booking:
        if self.is_booked(request.tutor_id, request.date, request.time):
            raise ConflictError(SLOT_TAKEN_MESSAGE)

        booking_id = f"mock_booking_{len(self._bookings) + 1}"
        rate = self._hourly_rates.get(request.tutor_id, self._default_hourly_rate)
        booking = Booking(
            id=booking_id,
            tutor_id=request.tutor_id,
            student_id=self._student_id,
            date=request.date,
            time=request.time,
            duration=request.duration,
            status=BookingStatus.PENDING,
            price=round(rate * request.duration / 60, 2),
            created_at=datetime.now(),
            subject=request.subject,
            notes=request.notes,
        )
        self._bookings[booking_id] = booking
        self._logger.info(
            "Mock booking created",
            extra={"booking_id": booking_id, "tutor_id": request.tutor_id, "date": request.date.isoformat()},
        )
        return booking

    async def get_user_bookings(self) -> list[Booking]:
        return [b for b in self._bookings.values() if b.student_id == self._student_id]

    async def cancel_booking(self, booking_id: str) -> None:
        booking = self._bookings.get(booking_id)
        if booking is None:
            raise NetworkError("Booking not found")
        self._bookings[booking_id] = Booking(
            id=booking.id,
            tutor_id=booking.tutor_id,
            student_id=booking.student_id,
            date=booking.date,
            time=booking.time,
            duration=booking.duration,
            status=BookingStatus.CANCELLED,
            price=booking.price,
            created_at=booking.created_at,
            subject=booking.subject,
            notes=booking.notes,
        )
        self._logger.info("Mock booking cancelled", extra={"booking_id": booking_id})
