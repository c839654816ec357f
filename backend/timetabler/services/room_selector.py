from __future__ import annotations

from collections.abc import Iterable, Sequence

from timetabler.models.room import Room
from timetabler.schemas.schedule import ScheduleEntryPayload
from timetabler.services.timeutils import time_overlaps


def occupied_room_ids(
    schedule: Iterable[ScheduleEntryPayload],
    *,
    day: str,
    start_time: str,
    end_time: str,
) -> set[str]:
    return {
        entry.room_id
        for entry in schedule
        if entry.day == day and time_overlaps(entry.start_time, entry.end_time, start_time, end_time)
    }


def select_room(
    rooms: Sequence[Room],
    schedule: Iterable[ScheduleEntryPayload],
    *,
    day: str,
    start_time: str,
    end_time: str,
) -> Room | None:
    """First room in ``rooms`` that is free for the slot.

    When every room is taken the first room is returned anyway, so the
    resulting entry fails conflict detection instead of vanishing silently.
    ``None`` only for an empty pool.
    """
    if not rooms:
        return None
    occupied = occupied_room_ids(schedule, day=day, start_time=start_time, end_time=end_time)
    for room in rooms:
        if room.id not in occupied:
            return room
    return rooms[0]
