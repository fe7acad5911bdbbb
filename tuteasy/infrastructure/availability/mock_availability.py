from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from datetime import date, timedelta

from tuteasy.application.exceptions import NetworkError
from tuteasy.application.ports.availability import AvailabilityProviderPort
from tuteasy.domain.entities.calendar import CalendarMonth
from tuteasy.domain.entities.time_slot import TimeSlot
from tuteasy.domain.entities.tutor import TutorDetails
from tuteasy.infrastructure.bookings.mock_booking_store import MockBookingStore

DEMO_TUTOR = TutorDetails(
    id="tutor-123",
    name="Dr. Sarah Johnson",
    subject="Mathematics",
    hourly_rate=45.0,
    rating=4.9,
    experience=8,
    avatar="/api/placeholder/64/64",
)

WEEKDAY_TIMES = ("09:00", "10:00", "11:00", "14:00", "15:00", "16:00", "17:00")
SATURDAY_TIMES = ("10:00", "11:00", "12:00", "14:00", "15:00")


class MockAvailabilityProvider(AvailabilityProviderPort):
    """Demo schedule: the next 30 days except Sundays and every third day."""

    def __init__(
        self,
        tutors: list[TutorDetails] | None = None,
        booking_store: MockBookingStore | None = None,
        delay_seconds: float = 0.0,
        horizon_days: int = 30,
        clock: Callable[[], date] = date.today,
    ) -> None:
        self._tutors = {t.id: t for t in (tutors or [DEMO_TUTOR])}
        self._booking_store = booking_store
        self._delay_seconds = delay_seconds
        self._horizon_days = horizon_days
        self._clock = clock
        self._logger = logging.getLogger(__name__)

    async def get_available_dates(self, tutor_id: str, month: CalendarMonth | None = None) -> list[date]:
        self._require_tutor(tutor_id)
        today = self._clock()
        dates: list[date] = []
        for i in range(1, self._horizon_days + 1):
            day = today + timedelta(days=i)
            if day.weekday() == 6 or i % 3 == 0:
                continue
            if month is not None and (day.year, day.month) != (month.year, month.month):
                continue
            dates.append(day)
        return dates

    async def get_available_time_slots(self, tutor_id: str, day: date) -> list[TimeSlot]:
        self._require_tutor(tutor_id)
        if self._delay_seconds:
            await asyncio.sleep(self._delay_seconds)

        weekday = day.weekday()
        if weekday <= 4:
            times = WEEKDAY_TIMES
        elif weekday == 5:
            times = SATURDAY_TIMES
        else:
            times = ()

        return [
            TimeSlot(time=t, available=not self._is_booked(tutor_id, day, t))
            for t in times
        ]

    async def get_tutor_details(self, tutor_id: str) -> TutorDetails:
        return self._require_tutor(tutor_id)

    def _require_tutor(self, tutor_id: str) -> TutorDetails:
        tutor = self._tutors.get(tutor_id)
        if tutor is None:
            self._logger.warning("Unknown tutor requested", extra={"tutor_id": tutor_id})
            raise NetworkError("Tutor not found")
        return tutor

    def _is_booked(self, tutor_id: str, day: date, time: str) -> bool:
        if self._booking_store is None:
            return False
        return self._booking_store.is_booked(tutor_id, day, time)
