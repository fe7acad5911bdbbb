"""
End-to-end tests of the booking HTTP surface with mock collaborators.
"""

from __future__ import annotations

from datetime import date

import pytest
from fastapi.testclient import TestClient

from tuteasy.application.use_cases.user_bookings import UserBookingsUseCase
from tuteasy.domain.entities.calendar import MAX_YEAR, CalendarMonth
from tuteasy.infrastructure.availability.mock_availability import DEMO_TUTOR, MockAvailabilityProvider
from tuteasy.infrastructure.bookings.mock_booking_store import SLOT_TAKEN_MESSAGE, MockBookingStore
from tuteasy.infrastructure.store.memory_session_store import MemoryFlowSessionStore
from tuteasy.main import app
from tuteasy.wiring.dependencies import (
    build_flow_factory,
    get_flow_factory,
    get_flow_session_store,
    get_user_bookings_use_case,
)

TODAY = date(2024, 12, 10)
FIRST_OPEN_DAY = "2024-12-11"  # Wednesday


@pytest.fixture
def client():
    store = MockBookingStore(hourly_rates={DEMO_TUTOR.id: DEMO_TUTOR.hourly_rate})
    availability = MockAvailabilityProvider(booking_store=store, clock=lambda: TODAY)
    user_bookings = UserBookingsUseCase(store=store)
    sessions = MemoryFlowSessionStore()
    factory = build_flow_factory(availability, store, user_bookings, clock=lambda: TODAY)

    app.dependency_overrides[get_flow_factory] = lambda: factory
    app.dependency_overrides[get_flow_session_store] = lambda: sessions
    app.dependency_overrides[get_user_bookings_use_case] = lambda: user_bookings
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def _start(client: TestClient) -> str:
    response = client.post("/v1/booking-sessions", json={"tutor_id": DEMO_TUTOR.id})
    assert response.status_code == 201
    return response.json()["session_id"]


def _pick(client: TestClient, sid: str, day: str = FIRST_OPEN_DAY, time: str = "10:00") -> None:
    assert client.post(f"/v1/booking-sessions/{sid}/date", json={"date": day}).status_code == 200
    assert client.post(f"/v1/booking-sessions/{sid}/time", json={"time": time}).status_code == 200


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_create_session_returns_tutor_and_steps(client):
    response = client.post("/v1/booking-sessions", json={"tutor_id": DEMO_TUTOR.id})
    body = response.json()
    assert body["tutor"]["name"] == "Dr. Sarah Johnson"
    assert body["status"] == "empty"
    assert [s["state"] for s in body["steps"]] == ["current", "pending", "pending"]
    assert body["slots"] is None


def test_unknown_tutor_is_bad_gateway(client):
    response = client.post("/v1/booking-sessions", json={"tutor_id": "nobody"})
    assert response.status_code == 502
    assert response.json()["detail"] == "Tutor not found"


def test_unknown_session_is_404(client):
    assert client.get("/v1/booking-sessions/missing").status_code == 404


def test_calendar_and_navigation(client):
    sid = _start(client)
    calendar = client.get(f"/v1/booking-sessions/{sid}/calendar").json()
    assert calendar["title"] == "December 2024"
    assert calendar["day_names"][0] == "Sun"
    assert len(calendar["cells"]) == 42
    selectable = [c["date"] for c in calendar["cells"] if c["is_selectable"]]
    assert selectable[:3] == ["2024-12-11", "2024-12-12", "2024-12-14"]

    after = client.post(f"/v1/booking-sessions/{sid}/calendar/next").json()
    assert after["title"] == "January 2025"
    back = client.post(f"/v1/booking-sessions/{sid}/calendar/previous").json()
    assert back["title"] == "December 2024"

    explicit = client.get(f"/v1/booking-sessions/{sid}/calendar", params={"year": 2025, "month": 2})
    assert explicit.json()["title"] == "February 2025"
    assert client.get(f"/v1/booking-sessions/{sid}/calendar", params={"year": 2025}).status_code == 400


def test_select_date_returns_grouped_slots(client):
    sid = _start(client)
    body = client.post(f"/v1/booking-sessions/{sid}/date", json={"date": FIRST_OPEN_DAY}).json()
    assert body["status"] == "date_only"
    slots = body["slots"]
    assert slots["mode"] == "slots"
    assert slots["date_label"] == "Wednesday, 11 December 2024"
    groups = {g["name"]: [s["label"] for s in g["slots"]] for g in slots["groups"]}
    assert groups == {
        "Morning": ["9:00 AM", "10:00 AM", "11:00 AM"],
        "Afternoon": ["2:00 PM", "3:00 PM", "4:00 PM"],
        "Evening": ["5:00 PM"],
    }


def test_unavailable_date_and_time_are_rejected(client):
    sid = _start(client)
    assert client.post(f"/v1/booking-sessions/{sid}/date", json={"date": "2024-12-13"}).status_code == 400
    assert client.post(f"/v1/booking-sessions/{sid}/time", json={"time": "10:00"}).status_code == 409
    client.post(f"/v1/booking-sessions/{sid}/date", json={"date": FIRST_OPEN_DAY})
    assert client.post(f"/v1/booking-sessions/{sid}/time", json={"time": "12:00"}).status_code == 400
    assert client.post(f"/v1/booking-sessions/{sid}/time", json={"time": "25:00"}).status_code == 422


def test_confirmation_shows_details_and_can_be_cancelled(client):
    sid = _start(client)
    _pick(client, sid)
    details = client.post(f"/v1/booking-sessions/{sid}/confirmation").json()
    assert details["tutor_name"] == "Dr. Sarah Johnson"
    assert details["end_time"] == "11:00"
    assert details["time_label"] == "10:00 AM - 11:00 AM"
    assert details["duration_label"] == "1 hour"
    assert details["price_label"] == "£45.00"

    body = client.delete(f"/v1/booking-sessions/{sid}/confirmation").json()
    assert body["confirmation_open"] is False
    assert body["status"] == "time_set"
    assert body["selected_time"] == "10:00"


def test_submit_without_review_is_refused(client):
    sid = _start(client)
    _pick(client, sid)
    assert client.post(f"/v1/booking-sessions/{sid}/submit").status_code == 409


def test_submit_creates_booking_and_refreshes_list(client):
    sid = _start(client)
    assert client.get("/v1/bookings").json() == []
    _pick(client, sid)
    client.post(f"/v1/booking-sessions/{sid}/confirmation")
    response = client.post(f"/v1/booking-sessions/{sid}/submit")
    assert response.status_code == 201
    booking = response.json()
    assert booking["date"] == FIRST_OPEN_DAY
    assert booking["status"] == "PENDING"
    assert booking["price"] == 45.0

    assert [b["id"] for b in client.get("/v1/bookings").json()] == [booking["id"]]
    assert client.get(f"/v1/booking-sessions/{sid}").json()["status"] == "empty"


def test_conflict_keeps_selection(client):
    first, second = _start(client), _start(client)
    _pick(client, first)
    _pick(client, second)

    client.post(f"/v1/booking-sessions/{first}/confirmation")
    assert client.post(f"/v1/booking-sessions/{first}/submit").status_code == 201

    client.post(f"/v1/booking-sessions/{second}/confirmation")
    response = client.post(f"/v1/booking-sessions/{second}/submit")
    assert response.status_code == 409
    assert response.json()["detail"] == SLOT_TAKEN_MESSAGE

    session = client.get(f"/v1/booking-sessions/{second}").json()
    assert session["selected_date"] == FIRST_OPEN_DAY
    assert session["selected_time"] == "10:00"
    assert session["error"] == SLOT_TAKEN_MESSAGE


def test_cancel_booking(client):
    sid = _start(client)
    _pick(client, sid)
    client.post(f"/v1/booking-sessions/{sid}/confirmation")
    booking_id = client.post(f"/v1/booking-sessions/{sid}/submit").json()["id"]

    assert client.delete(f"/v1/bookings/{booking_id}").status_code == 204
    bookings = client.get("/v1/bookings").json()
    assert bookings[0]["status"] == "CANCELLED"
    assert client.delete("/v1/bookings/unknown").status_code == 502


def test_calendar_year_outside_grid_range(client):
    sid = _start(client)
    for year in (1, 9999):
        response = client.get(f"/v1/booking-sessions/{sid}/calendar", params={"year": year, "month": 1})
        assert response.status_code == 422

    sessions = app.dependency_overrides[get_flow_session_store]()
    sessions.get(sid).show_month(CalendarMonth(MAX_YEAR, 12))
    response = client.post(f"/v1/booking-sessions/{sid}/calendar/next")
    assert response.status_code == 400
    assert client.get(f"/v1/booking-sessions/{sid}/calendar").json()["title"] == f"December {MAX_YEAR}"


def test_retry_keeps_selected_time(client):
    sid = _start(client)
    _pick(client, sid)
    body = client.post(f"/v1/booking-sessions/{sid}/slots/retry").json()
    assert body["selected_date"] == FIRST_OPEN_DAY
    assert body["selected_time"] == "10:00"
    assert body["slots"]["mode"] == "slots"


def test_new_time_must_be_reviewed_before_submit(client):
    sid = _start(client)
    _pick(client, sid)
    client.post(f"/v1/booking-sessions/{sid}/confirmation")
    body = client.post(f"/v1/booking-sessions/{sid}/time", json={"time": "11:00"}).json()
    assert body["confirmation_open"] is False
    assert client.post(f"/v1/booking-sessions/{sid}/submit").status_code == 409
    assert client.get("/v1/bookings").json() == []
