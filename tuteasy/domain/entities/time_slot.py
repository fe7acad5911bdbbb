from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class TimeSlot:
    time: str  # HH:MM, 24-hour
    available: bool = True
    price: float | None = None


@dataclass(frozen=True)
class SlotGroups:
    morning: tuple[str, ...] = ()
    afternoon: tuple[str, ...] = ()
    evening: tuple[str, ...] = ()

    def total(self) -> int:
        return len(self.morning) + len(self.afternoon) + len(self.evening)

    def named(self) -> list[tuple[str, tuple[str, ...]]]:
        """Non-empty groups in display order."""
        groups = [("Morning", self.morning), ("Afternoon", self.afternoon), ("Evening", self.evening)]
        return [(name, times) for name, times in groups if times]


@dataclass(frozen=True)
class SlotView:
    mode: str  # "loading", "empty", "slots"
    groups: SlotGroups = field(default_factory=SlotGroups)
    placeholders: dict[str, int] = field(default_factory=dict)
