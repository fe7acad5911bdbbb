from __future__ import annotations

from collections.abc import Iterable

from tuteasy.domain.entities.time_slot import SlotGroups, SlotView

MORNING_HOURS = (6, 12)
AFTERNOON_HOURS = (12, 17)
EVENING_HOURS = (17, 22)

SKELETON_PLACEHOLDERS = {"Morning": 3, "Afternoon": 4, "Evening": 2}


def parse_time(time: str) -> tuple[int, int]:
    """Parse ``HH:MM`` into (hour, minute). Raises ValueError on anything else."""
    parts = time.strip().split(":")
    if len(parts) != 2 or not parts[0].isdigit() or not parts[1].isdigit():
        raise ValueError(f"Invalid time {time!r}, expected HH:MM")
    hour, minute = int(parts[0]), int(parts[1])
    if not (0 <= hour <= 23 and 0 <= minute <= 59):
        raise ValueError(f"Invalid time {time!r}, expected HH:MM")
    return hour, minute


def group_slots(times: Iterable[str]) -> SlotGroups:
    """Bucket times into morning/afternoon/evening by hour.

    Times outside 06:00-22:00 fall in no bucket and are dropped.
    """
    morning: list[str] = []
    afternoon: list[str] = []
    evening: list[str] = []
    for time in times:
        hour, _ = parse_time(time)
        if MORNING_HOURS[0] <= hour < MORNING_HOURS[1]:
            morning.append(time)
        elif AFTERNOON_HOURS[0] <= hour < AFTERNOON_HOURS[1]:
            afternoon.append(time)
        elif EVENING_HOURS[0] <= hour < EVENING_HOURS[1]:
            evening.append(time)
    return SlotGroups(morning=tuple(morning), afternoon=tuple(afternoon), evening=tuple(evening))


def slot_view(times: list[str], loading: bool = False) -> SlotView:
    if loading:
        return SlotView(mode="loading", placeholders=dict(SKELETON_PLACEHOLDERS))
    if not times:
        return SlotView(mode="empty")
    return SlotView(mode="slots", groups=group_slots(times))


def format_time(time: str) -> str:
    """``"13:30"`` -> ``"1:30 PM"``. The minute part is passed through as given."""
    hours, minutes = time.split(":")
    hour24 = int(hours)
    if hour24 == 0:
        hour12 = 12
    elif hour24 > 12:
        hour12 = hour24 - 12
    else:
        hour12 = hour24
    period = "PM" if hour24 >= 12 else "AM"
    return f"{hour12}:{minutes} {period}"
