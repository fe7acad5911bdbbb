from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status

from tuteasy.api.v1.presenters import present_booking, present_calendar, present_details, present_session
from tuteasy.api.v1.schemas import (
    BookingDetailsSchema,
    BookingSchema,
    CalendarSchema,
    CreateSessionRequestSchema,
    SelectDateRequestSchema,
    SelectTimeRequestSchema,
    SessionSchema,
)
from tuteasy.application.exceptions import (
    ConflictError,
    NetworkError,
    PreconditionViolation,
    SubmissionInProgressError,
)
from tuteasy.application.ports.flow_session_store import FlowSessionStorePort
from tuteasy.application.use_cases.booking_flow import BookingFlowUseCase
from tuteasy.core.config import settings
from tuteasy.domain.entities.calendar import MAX_YEAR, MIN_YEAR, CalendarMonth
from tuteasy.wiring.dependencies import FlowFactory, get_flow_factory, get_flow_session_store

router = APIRouter(prefix="/v1/booking-sessions")
logger = logging.getLogger(__name__)


def _get_flow(session_id: str, sessions: FlowSessionStorePort) -> BookingFlowUseCase:
    flow = sessions.get(session_id)
    if flow is None:
        raise HTTPException(status_code=404, detail="Booking session not found")
    return flow


@router.post("", response_model=SessionSchema, status_code=status.HTTP_201_CREATED)
async def create_session(
    req: CreateSessionRequestSchema,
    factory: FlowFactory = Depends(get_flow_factory),
    sessions: FlowSessionStorePort = Depends(get_flow_session_store),
):
    try:
        flow = await factory(req.tutor_id, req.duration_minutes, req.subject, req.notes)
    except NetworkError as e:
        raise HTTPException(status_code=502, detail=e.message)
    session_id = sessions.create(flow)
    logger.info("Booking session created", extra={"session_id": session_id, "tutor_id": req.tutor_id})
    return present_session(session_id, flow)


@router.get("/{session_id}", response_model=SessionSchema)
def get_session(session_id: str, sessions: FlowSessionStorePort = Depends(get_flow_session_store)):
    return present_session(session_id, _get_flow(session_id, sessions))


@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
def close_session(session_id: str, sessions: FlowSessionStorePort = Depends(get_flow_session_store)):
    flow = _get_flow(session_id, sessions)
    if flow.is_submitting:
        raise HTTPException(status_code=409, detail="A booking is being submitted")
    sessions.discard(session_id)


@router.get("/{session_id}/calendar", response_model=CalendarSchema)
def get_calendar(
    session_id: str,
    year: int | None = Query(None, ge=MIN_YEAR, le=MAX_YEAR),
    month: int | None = Query(None, ge=1, le=12),
    sessions: FlowSessionStorePort = Depends(get_flow_session_store),
):
    flow = _get_flow(session_id, sessions)
    if (year is None) != (month is None):
        raise HTTPException(status_code=400, detail="year and month must be given together")
    shown = CalendarMonth(year=year, month=month) if year is not None and month is not None else flow.month
    return present_calendar(shown, flow.calendar(shown))


@router.post("/{session_id}/calendar/next", response_model=CalendarSchema)
def next_month(session_id: str, sessions: FlowSessionStorePort = Depends(get_flow_session_store)):
    flow = _get_flow(session_id, sessions)
    try:
        shown = flow.next_month()
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return present_calendar(shown, flow.calendar())


@router.post("/{session_id}/calendar/previous", response_model=CalendarSchema)
def previous_month(session_id: str, sessions: FlowSessionStorePort = Depends(get_flow_session_store)):
    flow = _get_flow(session_id, sessions)
    try:
        shown = flow.previous_month()
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return present_calendar(shown, flow.calendar())


@router.post("/{session_id}/date", response_model=SessionSchema)
async def select_date(
    session_id: str,
    req: SelectDateRequestSchema,
    sessions: FlowSessionStorePort = Depends(get_flow_session_store),
):
    flow = _get_flow(session_id, sessions)
    if not flow.is_selectable(req.date) and flow.draft.selected_date != req.date:
        raise HTTPException(status_code=400, detail="Date is not available")
    try:
        await flow.select_date(req.date)
    except SubmissionInProgressError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return present_session(session_id, flow)


@router.post("/{session_id}/slots/retry", response_model=SessionSchema)
async def retry_slots(session_id: str, sessions: FlowSessionStorePort = Depends(get_flow_session_store)):
    flow = _get_flow(session_id, sessions)
    try:
        await flow.retry_slots()
    except (PreconditionViolation, SubmissionInProgressError) as e:
        raise HTTPException(status_code=409, detail=str(e))
    return present_session(session_id, flow)


@router.post("/{session_id}/time", response_model=SessionSchema)
def select_time(
    session_id: str,
    req: SelectTimeRequestSchema,
    sessions: FlowSessionStorePort = Depends(get_flow_session_store),
):
    flow = _get_flow(session_id, sessions)
    try:
        flow.select_time(req.time)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except (PreconditionViolation, SubmissionInProgressError) as e:
        raise HTTPException(status_code=409, detail=str(e))
    return present_session(session_id, flow)


@router.post("/{session_id}/confirmation", response_model=BookingDetailsSchema)
def open_confirmation(session_id: str, sessions: FlowSessionStorePort = Depends(get_flow_session_store)):
    flow = _get_flow(session_id, sessions)
    try:
        details = flow.open_confirmation()
    except PreconditionViolation as e:
        raise HTTPException(status_code=409, detail=str(e))
    return present_details(details, settings.CURRENCY_SYMBOL)


@router.delete("/{session_id}/confirmation", response_model=SessionSchema)
def cancel_confirmation(session_id: str, sessions: FlowSessionStorePort = Depends(get_flow_session_store)):
    flow = _get_flow(session_id, sessions)
    try:
        flow.cancel_confirmation()
    except SubmissionInProgressError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return present_session(session_id, flow)


@router.post("/{session_id}/submit", response_model=BookingSchema, status_code=status.HTTP_201_CREATED)
async def submit(session_id: str, sessions: FlowSessionStorePort = Depends(get_flow_session_store)):
    flow = _get_flow(session_id, sessions)
    try:
        outcome = await flow.submit()
    except (PreconditionViolation, SubmissionInProgressError) as e:
        raise HTTPException(status_code=409, detail=str(e))

    if outcome.booking is None:
        status_code = 409 if isinstance(outcome.error, ConflictError) else 502
        raise HTTPException(status_code=status_code, detail=outcome.message)
    return present_booking(outcome.booking)
