from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date

from tuteasy.domain.entities.calendar import CalendarMonth
from tuteasy.domain.entities.time_slot import TimeSlot
from tuteasy.domain.entities.tutor import TutorDetails


class AvailabilityProviderPort(ABC):
    @abstractmethod
    async def get_available_dates(self, tutor_id: str, month: CalendarMonth | None = None) -> list[date]:
        """Calendar days with at least one open slot."""
        raise NotImplementedError

    @abstractmethod
    async def get_available_time_slots(self, tutor_id: str, day: date) -> list[TimeSlot]:
        """Slots offered by the tutor on a given day."""
        raise NotImplementedError

    @abstractmethod
    async def get_tutor_details(self, tutor_id: str) -> TutorDetails:
        raise NotImplementedError
