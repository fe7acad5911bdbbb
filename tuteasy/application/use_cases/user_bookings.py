from __future__ import annotations

import logging

from tuteasy.application.ports.booking_store import BookingStorePort
from tuteasy.domain.entities.booking import Booking


class UserBookingsUseCase:
    """Cached list of the current user's bookings."""

    def __init__(self, store: BookingStorePort) -> None:
        self._store = store
        self._cached: list[Booking] | None = None
        self._logger = logging.getLogger(__name__)

    @property
    def is_stale(self) -> bool:
        return self._cached is None

    async def list_bookings(self, refresh: bool = False) -> list[Booking]:
        if self._cached is None or refresh:
            self._cached = await self._store.get_user_bookings()
        return list(self._cached)

    def invalidate(self) -> None:
        self._cached = None

    async def cancel(self, booking_id: str) -> None:
        await self._store.cancel_booking(booking_id)
        self._logger.info("Booking cancelled", extra={"booking_id": booking_id})
        self.invalidate()
