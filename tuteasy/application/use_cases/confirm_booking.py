from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from tuteasy.application.exceptions import BookingError, PreconditionViolation, SubmissionInProgressError
from tuteasy.application.ports.booking_store import BookingStorePort
from tuteasy.application.use_cases.user_bookings import UserBookingsUseCase
from tuteasy.application.utils.booking_details import DEFAULT_DURATION_MINUTES
from tuteasy.domain.entities.booking import Booking, BookingRequest
from tuteasy.domain.entities.booking_draft import BookingDraft
from tuteasy.domain.entities.tutor import TutorDetails


@dataclass(frozen=True)
class BookingOutcome:
    booking: Booking | None = None
    error: BookingError | None = None

    @property
    def ok(self) -> bool:
        return self.booking is not None

    @property
    def message(self) -> str | None:
        return self.error.message if self.error else None


class ConfirmBookingUseCase:
    """Submits a complete draft to the booking store.

    Never retries and never touches the draft: on a conflict the caller keeps
    its selection so the user can pick another slot.
    """

    def __init__(
        self,
        store: BookingStorePort,
        user_bookings: UserBookingsUseCase | None = None,
        on_completed: Callable[[Booking], None] | None = None,
    ) -> None:
        self._store = store
        self._user_bookings = user_bookings
        self._on_completed = on_completed
        self._in_flight = False
        self._logger = logging.getLogger(__name__)

    @property
    def is_submitting(self) -> bool:
        return self._in_flight

    async def confirm(
        self,
        draft: BookingDraft,
        tutor: TutorDetails,
        duration_minutes: int = DEFAULT_DURATION_MINUTES,
        subject: str | None = None,
        notes: str | None = None,
    ) -> BookingOutcome:
        if not draft.is_complete or draft.selected_date is None or draft.selected_time is None:
            raise PreconditionViolation(f"confirm() needs a complete draft (draft is {draft.status.value})")
        if self._in_flight:
            raise SubmissionInProgressError("A booking submit is already in flight")

        request = BookingRequest(
            tutor_id=draft.tutor_id,
            date=draft.selected_date,
            time=draft.selected_time,
            duration=duration_minutes,
            subject=subject if subject is not None else tutor.subject,
            notes=notes,
        )

        self._in_flight = True
        self._logger.info(
            "Booking submitted",
            extra={"tutor_id": request.tutor_id, "date": request.date.isoformat(), "time": request.time},
        )
        try:
            booking = await self._store.create_booking(request)
        except BookingError as e:
            self._logger.warning(
                "Booking rejected",
                extra={"tutor_id": request.tutor_id, "reason": type(e).__name__, "error": e.message},
            )
            return BookingOutcome(error=e)
        finally:
            self._in_flight = False

        self._logger.info("Booking created", extra={"booking_id": booking.id, "tutor_id": booking.tutor_id})
        if self._user_bookings is not None:
            self._user_bookings.invalidate()
        if self._on_completed is not None:
            self._on_completed(booking)
        return BookingOutcome(booking=booking)
