from __future__ import annotations

from tuteasy.api.v1.schemas import (
    BookingDetailsSchema,
    BookingSchema,
    CalendarCellSchema,
    CalendarSchema,
    SessionSchema,
    SlotButtonSchema,
    SlotGroupSchema,
    SlotViewSchema,
    StepSchema,
    TutorSchema,
)
from tuteasy.application.use_cases.booking_flow import BookingFlowUseCase
from tuteasy.application.utils.calendar_grid import DAY_NAMES, month_title
from tuteasy.application.utils.formatting import (
    format_date,
    format_duration,
    format_price,
    format_time_range,
)
from tuteasy.application.utils.time_slots import format_time
from tuteasy.domain.entities.booking import Booking
from tuteasy.domain.entities.booking_draft import BookingDetails, DraftStatus
from tuteasy.domain.entities.calendar import CalendarCell, CalendarMonth


def present_calendar(month: CalendarMonth, cells: list[CalendarCell]) -> CalendarSchema:
    return CalendarSchema(
        year=month.year,
        month=month.month,
        title=month_title(month),
        day_names=list(DAY_NAMES),
        cells=[
            CalendarCellSchema(
                date=c.date,
                day=c.date.day,
                in_current_month=c.in_current_month,
                is_today=c.is_today,
                is_available=c.is_available,
                is_selected=c.is_selected,
                is_disabled=c.is_disabled,
                is_selectable=c.is_selectable,
                title=c.title,
            )
            for c in cells
        ],
    )


def present_slots(flow: BookingFlowUseCase) -> SlotViewSchema | None:
    selected_date = flow.draft.selected_date
    if selected_date is None:
        return None
    view = flow.slot_view()
    return SlotViewSchema(
        mode=view.mode,
        date_label=format_date(selected_date),
        groups=[
            SlotGroupSchema(
                name=name,
                slots=[
                    SlotButtonSchema(time=t, label=format_time(t), selected=t == flow.draft.selected_time)
                    for t in times
                ],
            )
            for name, times in view.groups.named()
        ],
        placeholders=view.placeholders,
        error=flow.slot_error,
    )


def present_details(details: BookingDetails, currency_symbol: str) -> BookingDetailsSchema:
    return BookingDetailsSchema(
        tutor_id=details.tutor_id,
        tutor_name=details.tutor_name,
        date=details.date,
        time=details.time,
        end_time=details.end_time,
        duration=details.duration,
        price=details.price,
        subject=details.subject,
        date_label=format_date(details.date),
        time_label=format_time_range(details.time, details.end_time),
        duration_label=format_duration(details.duration),
        price_label=format_price(details.price, currency_symbol),
    )


def present_session(session_id: str, flow: BookingFlowUseCase) -> SessionSchema:
    tutor = flow.tutor
    return SessionSchema(
        session_id=session_id,
        tutor=TutorSchema(**tutor.__dict__) if tutor else None,
        status=flow.draft.status.value,
        selected_date=flow.draft.selected_date,
        selected_time=flow.draft.selected_time,
        steps=[StepSchema(label=s.label, state=s.state) for s in flow.steps()],
        slots=present_slots(flow),
        can_continue=flow.draft.status is DraftStatus.TIME_SET and not flow.is_submitting,
        confirmation_open=flow.confirmation_open,
        submitting=flow.is_submitting,
        error=flow.last_error,
    )


def present_booking(booking: Booking) -> BookingSchema:
    return BookingSchema(
        id=booking.id,
        tutor_id=booking.tutor_id,
        student_id=booking.student_id,
        date=booking.date,
        time=booking.time,
        duration=booking.duration,
        status=booking.status.value,
        price=booking.price,
        subject=booking.subject,
        notes=booking.notes,
        created_at=booking.created_at,
    )
