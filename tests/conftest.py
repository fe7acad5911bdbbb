"""
Shared fakes and fixtures. Collaborators here let tests control when a
response arrives.
"""

from __future__ import annotations

import asyncio
from datetime import date, datetime

import pytest

from tuteasy.application.exceptions import ConflictError, NetworkError
from tuteasy.application.ports.availability import AvailabilityProviderPort
from tuteasy.application.ports.booking_store import BookingStorePort
from tuteasy.application.use_cases.booking_flow import BookingFlowUseCase
from tuteasy.application.use_cases.confirm_booking import ConfirmBookingUseCase
from tuteasy.application.use_cases.user_bookings import UserBookingsUseCase
from tuteasy.domain.entities.booking import Booking, BookingRequest, BookingStatus
from tuteasy.domain.entities.calendar import CalendarMonth
from tuteasy.domain.entities.time_slot import TimeSlot
from tuteasy.domain.entities.tutor import TutorDetails

TUTOR = TutorDetails(id="tutor-1", name="Ada Lovelace", subject="Mathematics", hourly_rate=40.0)


class GatedAvailability(AvailabilityProviderPort):
    """Slot fetches block until the test releases the gate for that date."""

    def __init__(self, dates: list[date], slots: dict[date, list[TimeSlot]]) -> None:
        self._dates = dates
        self._slots = slots
        self.gates: dict[date, asyncio.Event] = {}
        self.failures: dict[date, str] = {}
        self.slot_calls: list[date] = []

    def gate(self, day: date) -> asyncio.Event:
        return self.gates.setdefault(day, asyncio.Event())

    async def get_available_dates(self, tutor_id: str, month: CalendarMonth | None = None) -> list[date]:
        return list(self._dates)

    async def get_available_time_slots(self, tutor_id: str, day: date) -> list[TimeSlot]:
        self.slot_calls.append(day)
        if day in self.gates:
            await self.gates[day].wait()
        if day in self.failures:
            raise NetworkError(self.failures[day])
        return list(self._slots.get(day, []))

    async def get_tutor_details(self, tutor_id: str) -> TutorDetails:
        return TUTOR


class ScriptedBookingStore(BookingStorePort):
    def __init__(self) -> None:
        self.requests: list[BookingRequest] = []
        self.conflict_message: str | None = None
        self.network_message: str | None = None
        self.gate: asyncio.Event | None = None
        self.bookings: list[Booking] = []
        self.list_calls = 0

    async def create_booking(self, request: BookingRequest) -> Booking:
        self.requests.append(request)
        if self.gate is not None:
            await self.gate.wait()
        if self.conflict_message:
            raise ConflictError(self.conflict_message)
        if self.network_message:
            raise NetworkError(self.network_message)
        booking = Booking(
            id=f"b{len(self.bookings) + 1}",
            tutor_id=request.tutor_id,
            student_id="s1",
            date=request.date,
            time=request.time,
            duration=request.duration,
            status=BookingStatus.PENDING,
            price=40.0,
            created_at=datetime(2024, 12, 10, 9, 0),
            subject=request.subject,
        )
        self.bookings.append(booking)
        return booking

    async def get_user_bookings(self) -> list[Booking]:
        self.list_calls += 1
        return list(self.bookings)

    async def cancel_booking(self, booking_id: str) -> None:
        self.bookings = [b for b in self.bookings if b.id != booking_id]


TODAY = date(2024, 12, 10)
DAY_A = date(2024, 12, 16)  # Monday
DAY_B = date(2024, 12, 17)
DAY_C = date(2024, 12, 21)  # Saturday

SLOTS = {
    DAY_A: [TimeSlot("09:00"), TimeSlot("10:00"), TimeSlot("14:00", price=55.0), TimeSlot("17:00", available=False)],
    DAY_B: [TimeSlot("11:00"), TimeSlot("15:00"), TimeSlot("18:30")],
    DAY_C: [],
}


@pytest.fixture
def availability() -> GatedAvailability:
    return GatedAvailability(dates=[DAY_A, DAY_B, DAY_C], slots=SLOTS)


@pytest.fixture
def store() -> ScriptedBookingStore:
    return ScriptedBookingStore()


@pytest.fixture
def user_bookings(store) -> UserBookingsUseCase:
    return UserBookingsUseCase(store=store)


@pytest.fixture
def flow(availability, store, user_bookings) -> BookingFlowUseCase:
    return BookingFlowUseCase(
        tutor_id=TUTOR.id,
        availability=availability,
        confirm_booking=ConfirmBookingUseCase(store=store, user_bookings=user_bookings),
        clock=lambda: TODAY,
    )
