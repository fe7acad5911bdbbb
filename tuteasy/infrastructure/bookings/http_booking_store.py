from __future__ import annotations

import logging

from tuteasy.application.exceptions import NetworkError
from tuteasy.application.ports.booking_store import BookingStorePort
from tuteasy.domain.entities.booking import Booking, BookingRequest
from tuteasy.infrastructure.api.api_client import TutEasyApiClient
from tuteasy.infrastructure.api.payloads import parse_booking


class HttpBookingStore(BookingStorePort):
    def __init__(self, client: TutEasyApiClient) -> None:
        self._client = client
        self._logger = logging.getLogger(__name__)

    async def create_booking(self, request: BookingRequest) -> Booking:
        data = await self._client.post("/bookings", request.to_payload())
        if not isinstance(data, dict):
            raise NetworkError("No booking returned from server")
        booking = parse_booking(data)
        self._logger.info("Booking stored", extra={"booking_id": booking.id})
        return booking

    async def get_user_bookings(self) -> list[Booking]:
        data = await self._client.get("/bookings")
        return [parse_booking(item) for item in data or []]

    async def cancel_booking(self, booking_id: str) -> None:
        await self._client.delete(f"/bookings/{booking_id}")
