from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date, datetime, timedelta

from tuteasy.application.exceptions import (
    NetworkError,
    PreconditionViolation,
    StaleSelectionError,
    SubmissionInProgressError,
)
from tuteasy.application.ports.availability import AvailabilityProviderPort
from tuteasy.application.use_cases.confirm_booking import BookingOutcome, ConfirmBookingUseCase
from tuteasy.application.utils.booking_details import DEFAULT_DURATION_MINUTES, derive_details
from tuteasy.application.utils.calendar_grid import as_day, build_grid, is_day_disabled
from tuteasy.application.utils.time_slots import slot_view
from tuteasy.domain.entities.booking_draft import BookingDetails, BookingDraft, DraftStatus
from tuteasy.domain.entities.calendar import CalendarCell, CalendarMonth
from tuteasy.domain.entities.time_slot import SlotView, TimeSlot
from tuteasy.domain.entities.tutor import TutorDetails


@dataclass(frozen=True)
class FlowStep:
    label: str
    state: str  # "complete", "current", "pending"


class BookingFlowUseCase:
    """Date -> time -> confirm -> submit for one tutor and one user session.

    Entering a new date starts a slot fetch. Every fetch is tagged with a
    generation number and its response is applied only if no later date
    selection (or reset) happened while it was in flight.
    """

    def __init__(
        self,
        tutor_id: str,
        availability: AvailabilityProviderPort,
        confirm_booking: ConfirmBookingUseCase,
        duration_minutes: int = DEFAULT_DURATION_MINUTES,
        subject: str | None = None,
        notes: str | None = None,
        horizon_days: int | None = None,
        clock: Callable[[], date] = date.today,
    ) -> None:
        if duration_minutes <= 0:
            raise ValueError("duration_minutes must be positive")
        self._tutor_id = tutor_id
        self._availability = availability
        self._confirm_booking = confirm_booking
        self._duration = duration_minutes
        self._subject = subject
        self._notes = notes
        self._horizon_days = horizon_days
        self._clock = clock
        self._logger = logging.getLogger(__name__)

        self._tutor: TutorDetails | None = None
        self._available_dates: frozenset[date] = frozenset()
        self._month = CalendarMonth.of(clock())
        self._draft = BookingDraft(tutor_id=tutor_id)
        self._slots: tuple[TimeSlot, ...] = ()
        self._slots_loading = False
        self._slot_error: str | None = None
        self._generation = 0
        self._confirmation_open = False
        self._last_error: str | None = None

    # -- read side -----------------------------------------------------------

    @property
    def tutor_id(self) -> str:
        return self._tutor_id

    @property
    def tutor(self) -> TutorDetails | None:
        return self._tutor

    @property
    def draft(self) -> BookingDraft:
        return self._draft

    @property
    def month(self) -> CalendarMonth:
        return self._month

    @property
    def duration_minutes(self) -> int:
        return self._duration

    @property
    def available_dates(self) -> frozenset[date]:
        return self._available_dates

    @property
    def slots(self) -> tuple[TimeSlot, ...]:
        return self._slots

    @property
    def slots_loading(self) -> bool:
        return self._slots_loading

    @property
    def slot_error(self) -> str | None:
        return self._slot_error

    @property
    def confirmation_open(self) -> bool:
        return self._confirmation_open

    @property
    def is_submitting(self) -> bool:
        return self._confirm_booking.is_submitting

    @property
    def last_error(self) -> str | None:
        return self._last_error

    @property
    def min_date(self) -> date:
        return self._clock()

    @property
    def max_date(self) -> date | None:
        if self._horizon_days is None:
            return None
        return self._clock() + timedelta(days=self._horizon_days)

    def calendar(self, month: CalendarMonth | None = None) -> list[CalendarCell]:
        month = month or self._month
        return build_grid(
            month.year,
            month.month,
            self._available_dates,
            min_date=self.min_date,
            max_date=self.max_date,
            selected_date=self._draft.selected_date,
            today=self._clock(),
        )

    def offered_times(self) -> list[str]:
        return [slot.time for slot in self._slots if slot.available]

    def slot_view(self) -> SlotView:
        return slot_view(self.offered_times(), loading=self._slots_loading)

    def steps(self) -> list[FlowStep]:
        status = self._draft.status
        return [
            FlowStep("Choose Date", "current" if status is DraftStatus.EMPTY else "complete"),
            FlowStep(
                "Choose Time",
                {
                    DraftStatus.EMPTY: "pending",
                    DraftStatus.DATE_ONLY: "current",
                    DraftStatus.TIME_SET: "complete",
                }[status],
            ),
            FlowStep("Confirm", "current" if status is DraftStatus.TIME_SET else "pending"),
        ]

    def details(self) -> BookingDetails:
        return derive_details(
            self._draft,
            self._require_tutor(),
            duration_minutes=self._duration,
            slot_price=self._selected_slot_price(),
            subject=self._subject,
        )

    # -- transitions ---------------------------------------------------------

    async def load(self) -> None:
        """Fetch tutor details and the available-dates snapshot."""
        self._tutor = await self._availability.get_tutor_details(self._tutor_id)
        dates = await self._availability.get_available_dates(self._tutor_id)
        self._available_dates = frozenset(as_day(d) for d in dates)
        self._logger.info(
            "Availability loaded",
            extra={"tutor_id": self._tutor_id, "date_count": len(self._available_dates)},
        )

    def show_month(self, month: CalendarMonth) -> CalendarMonth:
        self._month = month
        return self._month

    def next_month(self) -> CalendarMonth:
        return self.show_month(self._month.next())

    def previous_month(self) -> CalendarMonth:
        return self.show_month(self._month.previous())

    def is_selectable(self, day: date | datetime) -> bool:
        day = as_day(day)
        today = self._clock()
        return day in self._available_dates and not is_day_disabled(day, today, self.min_date, self.max_date)

    async def select_date(self, day: date | datetime) -> bool:
        """Select a date and fetch its slots. Returns False when nothing changed."""
        self._ensure_not_submitting()
        day = as_day(day)
        if self._draft.selected_date == day:
            return False
        if not self.is_selectable(day):
            self._logger.debug("Ignored unselectable date", extra={"date": day.isoformat()})
            return False

        self._draft = self._draft.with_date(day)
        self._last_error = None
        await self._fetch_slots(day)
        return True

    async def retry_slots(self) -> None:
        """Refetch slots for the selected date. The draft is left as it is."""
        self._ensure_not_submitting()
        selected = self._draft.selected_date
        if selected is None:
            raise PreconditionViolation("No date selected")
        await self._fetch_slots(selected)

    def select_time(self, time: str) -> None:
        self._ensure_not_submitting()
        if self._draft.selected_date is None:
            raise PreconditionViolation("Cannot select a time before a date")
        if self._slots_loading:
            raise ValueError("Time slots are still loading")
        if time not in self.offered_times():
            raise ValueError(f"{time} is not an available time on {self._draft.selected_date.isoformat()}")
        self._draft = self._draft.with_time(time)
        # a new time has not been reviewed yet
        self._confirmation_open = False
        self._last_error = None

    def open_confirmation(self) -> BookingDetails:
        details = self.details()
        self._confirmation_open = True
        return details

    def cancel_confirmation(self) -> None:
        """Back to TIME_SET. Nothing is refetched."""
        self._ensure_not_submitting()
        self._confirmation_open = False

    async def submit(self) -> BookingOutcome:
        if not self._confirmation_open:
            raise PreconditionViolation("Booking must be reviewed before it is submitted")
        outcome = await self._confirm_booking.confirm(
            self._draft,
            self._require_tutor(),
            duration_minutes=self._duration,
            subject=self._subject,
            notes=self._notes,
        )
        if outcome.ok:
            self.reset()
        else:
            # Selection is kept so another slot can be picked.
            self._confirmation_open = False
            self._last_error = outcome.message
        return outcome

    def reset(self) -> None:
        self._ensure_not_submitting()
        self._draft = self._draft.cleared()
        self._slots = ()
        self._slots_loading = False
        self._slot_error = None
        self._confirmation_open = False
        self._last_error = None
        self._generation += 1

    # -- internals -----------------------------------------------------------

    async def _fetch_slots(self, day: date) -> None:
        self._confirmation_open = False
        self._slots = ()
        self._slot_error = None
        self._slots_loading = True
        self._generation += 1
        generation = self._generation
        self._logger.debug("Slot fetch started", extra={"date": day.isoformat(), "generation": generation})

        try:
            slots = await self._availability.get_available_time_slots(self._tutor_id, day)
        except NetworkError as e:
            try:
                self._apply_slot_error(generation, e.message)
            except StaleSelectionError:
                self._logger.debug("Discarded stale slot failure", extra={"date": day.isoformat()})
            return

        try:
            self._apply_slots(generation, slots)
        except StaleSelectionError:
            self._logger.debug("Discarded stale slot response", extra={"date": day.isoformat()})

    def _apply_slots(self, generation: int, slots: list[TimeSlot]) -> None:
        if generation != self._generation:
            raise StaleSelectionError(f"Slot response {generation} superseded by {self._generation}")
        self._slots = tuple(slots)
        self._slots_loading = False
        self._logger.debug("Slots applied", extra={"generation": generation, "slot_count": len(slots)})

    def _apply_slot_error(self, generation: int, message: str) -> None:
        if generation != self._generation:
            raise StaleSelectionError(f"Slot failure {generation} superseded by {self._generation}")
        self._slots_loading = False
        self._slot_error = message
        self._logger.error("Slot fetch failed", extra={"tutor_id": self._tutor_id, "error": message})

    def _selected_slot_price(self) -> float | None:
        for slot in self._slots:
            if slot.time == self._draft.selected_time:
                return slot.price
        return None

    def _require_tutor(self) -> TutorDetails:
        if self._tutor is None:
            raise PreconditionViolation("Tutor details not loaded; call load() first")
        return self._tutor

    def _ensure_not_submitting(self) -> None:
        if self._confirm_booking.is_submitting:
            raise SubmissionInProgressError("A booking submit is in flight")
