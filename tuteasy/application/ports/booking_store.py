from __future__ import annotations

from abc import ABC, abstractmethod

from tuteasy.domain.entities.booking import Booking, BookingRequest


class BookingStorePort(ABC):
    @abstractmethod
    async def create_booking(self, request: BookingRequest) -> Booking:
        """Persist a booking. Raises ConflictError if the slot is taken."""
        raise NotImplementedError

    @abstractmethod
    async def get_user_bookings(self) -> list[Booking]:
        raise NotImplementedError

    @abstractmethod
    async def cancel_booking(self, booking_id: str) -> None:
        raise NotImplementedError
