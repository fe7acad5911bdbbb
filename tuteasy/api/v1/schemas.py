from __future__ import annotations

import datetime as dt

from pydantic import BaseModel, Field, field_validator

from tuteasy.application.utils.time_slots import parse_time


class CreateSessionRequestSchema(BaseModel):
    tutor_id: str = Field(min_length=1)
    duration_minutes: int | None = Field(default=None, gt=0, le=480)
    subject: str | None = None
    notes: str | None = None


class SelectDateRequestSchema(BaseModel):
    date: dt.date


class SelectTimeRequestSchema(BaseModel):
    time: str

    @field_validator("time")
    @classmethod
    def _valid_time(cls, value: str) -> str:
        parse_time(value)
        return value


class TutorSchema(BaseModel):
    id: str
    name: str
    subject: str
    hourly_rate: float
    rating: float | None = None
    experience: int | None = None
    avatar: str | None = None
    bio: str | None = None


class StepSchema(BaseModel):
    label: str
    state: str


class CalendarCellSchema(BaseModel):
    date: dt.date
    day: int
    in_current_month: bool
    is_today: bool
    is_available: bool
    is_selected: bool
    is_disabled: bool
    is_selectable: bool
    title: str


class CalendarSchema(BaseModel):
    year: int
    month: int
    title: str
    day_names: list[str]
    cells: list[CalendarCellSchema]


class SlotButtonSchema(BaseModel):
    time: str
    label: str
    selected: bool


class SlotGroupSchema(BaseModel):
    name: str
    slots: list[SlotButtonSchema]


class SlotViewSchema(BaseModel):
    mode: str
    date_label: str | None = None
    groups: list[SlotGroupSchema] = Field(default_factory=list)
    placeholders: dict[str, int] = Field(default_factory=dict)
    error: str | None = None


class BookingDetailsSchema(BaseModel):
    tutor_id: str
    tutor_name: str
    date: dt.date
    time: str
    end_time: str
    duration: int
    price: float
    subject: str | None = None
    date_label: str
    time_label: str
    duration_label: str
    price_label: str


class SessionSchema(BaseModel):
    session_id: str
    tutor: TutorSchema | None
    status: str
    selected_date: dt.date | None = None
    selected_time: str | None = None
    steps: list[StepSchema]
    slots: SlotViewSchema | None = None
    can_continue: bool
    confirmation_open: bool
    submitting: bool
    error: str | None = None


class BookingSchema(BaseModel):
    id: str
    tutor_id: str
    student_id: str
    date: dt.date
    time: str
    duration: int
    status: str
    price: float
    subject: str | None = None
    notes: str | None = None
    created_at: dt.datetime
