"""
Tests for the REST adapters against a mocked transport.
"""

from __future__ import annotations

import asyncio
import json
from datetime import date

import httpx
import pytest

from tuteasy.application.exceptions import ConflictError, NetworkError
from tuteasy.domain.entities.booking import BookingRequest, BookingStatus
from tuteasy.domain.entities.calendar import CalendarMonth
from tuteasy.infrastructure.api.api_client import TutEasyApiClient
from tuteasy.infrastructure.auth.static_auth import StaticAuthContext
from tuteasy.infrastructure.availability.http_availability import HttpAvailabilityProvider
from tuteasy.infrastructure.bookings.http_booking_store import HttpBookingStore

BOOKING_JSON = {
    "id": "bk_1",
    "tutorId": "t1",
    "studentId": "s1",
    "date": "2024-12-16T00:00:00.000Z",
    "time": "10:00",
    "duration": 60,
    "status": "PENDING",
    "price": 45,
    "subject": "Mathematics",
    "createdAt": "2024-12-10T09:00:00.000Z",
}


def _client(handler, token: str | None = "tok") -> TutEasyApiClient:
    return TutEasyApiClient(
        base_url="http://api.test/api",
        auth=StaticAuthContext(token),
        transport=httpx.MockTransport(handler),
    )


def test_available_dates_unwrap_envelope_and_strip_time():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["month"] = request.url.params.get("month")
        seen["auth"] = request.headers.get("Authorization")
        return httpx.Response(200, json={"success": True, "data": ["2024-12-16T00:00:00.000Z", "2024-12-17"]})

    provider = HttpAvailabilityProvider(_client(handler))
    dates = asyncio.run(provider.get_available_dates("t1", CalendarMonth(2024, 12)))
    assert dates == [date(2024, 12, 16), date(2024, 12, 17)]
    assert seen == {"path": "/api/tutors/t1/availability/dates", "month": "2024-12", "auth": "Bearer tok"}


def test_time_slots_skip_malformed_entries():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.params["date"] == "2024-12-16"
        data = [
            {"time": "09:00", "available": True},
            {"available": True},
            {"time": "09:00:00", "available": True},
            {"time": "9:30", "available": True},
            {"time": "10:00", "available": False, "price": 50},
        ]
        return httpx.Response(200, json={"success": True, "data": data})

    slots = asyncio.run(HttpAvailabilityProvider(_client(handler)).get_available_time_slots("t1", date(2024, 12, 16)))
    assert [(s.time, s.available, s.price) for s in slots] == [
        ("09:00", True, None),
        ("09:30", True, None),
        ("10:00", False, 50.0),
    ]


def test_tutor_details_parsed():
    def handler(request: httpx.Request) -> httpx.Response:
        data = {"id": "t1", "name": "Dr. Sarah Johnson", "subject": "Mathematics", "hourlyRate": 45, "rating": 4.9, "experience": 8}
        return httpx.Response(200, json={"success": True, "data": data})

    tutor = asyncio.run(HttpAvailabilityProvider(_client(handler)).get_tutor_details("t1"))
    assert tutor.name == "Dr. Sarah Johnson"
    assert tutor.hourly_rate == 45.0
    assert tutor.experience == 8


def test_create_booking_posts_date_only_payload():
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["method"] = request.method
        captured["body"] = json.loads(request.content)
        return httpx.Response(201, json={"success": True, "data": BOOKING_JSON})

    store = HttpBookingStore(_client(handler))
    booking = asyncio.run(
        store.create_booking(BookingRequest(tutor_id="t1", date=date(2024, 12, 16), time="10:00", duration=60, subject="Mathematics"))
    )
    assert captured["method"] == "POST"
    assert captured["body"] == {"tutorId": "t1", "date": "2024-12-16", "time": "10:00", "duration": 60, "subject": "Mathematics"}
    assert booking.id == "bk_1"
    assert booking.date == date(2024, 12, 16)
    assert booking.status is BookingStatus.PENDING


def test_conflict_message_is_passed_through():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(409, json={"success": False, "error": "Time slot already booked"})

    store = HttpBookingStore(_client(handler))
    with pytest.raises(ConflictError) as exc:
        asyncio.run(store.create_booking(BookingRequest(tutor_id="t1", date=date(2024, 12, 16), time="10:00", duration=60)))
    assert exc.value.message == "Time slot already booked"


def test_server_error_becomes_network_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, json={"success": False, "error": "Database down"})

    with pytest.raises(NetworkError) as exc:
        asyncio.run(HttpBookingStore(_client(handler)).get_user_bookings())
    assert exc.value.message == "Database down"


def test_unreachable_server_becomes_network_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(NetworkError):
        asyncio.run(HttpAvailabilityProvider(_client(handler)).get_available_dates("t1"))


def test_cancel_booking_and_missing_token():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["path"] = request.url.path
        seen["auth"] = request.headers.get("Authorization")
        return httpx.Response(204)

    asyncio.run(HttpBookingStore(_client(handler, token=None)).cancel_booking("bk_1"))
    assert seen == {"method": "DELETE", "path": "/api/bookings/bk_1", "auth": None}
