from __future__ import annotations

import logging
from datetime import date

from tuteasy.application.exceptions import NetworkError
from tuteasy.application.ports.availability import AvailabilityProviderPort
from tuteasy.domain.entities.calendar import CalendarMonth
from tuteasy.domain.entities.time_slot import TimeSlot
from tuteasy.domain.entities.tutor import TutorDetails
from tuteasy.infrastructure.api.api_client import TutEasyApiClient
from tuteasy.infrastructure.api.payloads import parse_day, parse_time_slot, parse_tutor


class HttpAvailabilityProvider(AvailabilityProviderPort):
    def __init__(self, client: TutEasyApiClient) -> None:
        self._client = client
        self._logger = logging.getLogger(__name__)

    async def get_available_dates(self, tutor_id: str, month: CalendarMonth | None = None) -> list[date]:
        params = {"month": month.key()} if month else None
        data = await self._client.get(f"/tutors/{tutor_id}/availability/dates", params=params)
        return [parse_day(value) for value in data or []]

    async def get_available_time_slots(self, tutor_id: str, day: date) -> list[TimeSlot]:
        data = await self._client.get(
            f"/tutors/{tutor_id}/availability/slots",
            params={"date": day.isoformat()},
        )
        slots: list[TimeSlot] = []
        for item in data or []:
            try:
                slots.append(parse_time_slot(item))
            except (KeyError, TypeError, ValueError):
                self._logger.warning("Skipping malformed slot", extra={"tutor_id": tutor_id, "slot": item})
        return slots

    async def get_tutor_details(self, tutor_id: str) -> TutorDetails:
        data = await self._client.get(f"/tutors/{tutor_id}")
        if not isinstance(data, dict):
            raise NetworkError("Tutor not found")
        return parse_tutor(data)
