from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class TutorDetails:
    id: str
    name: str
    subject: str
    hourly_rate: float
    rating: float | None = None
    experience: int | None = None
    avatar: str | None = None
    bio: str | None = None
