from collections import defaultdict
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from timetabler.schemas.schedule import ConflictPayload, ScheduleEntryPayload
from timetabler.services.timeutils import time_overlaps


def entries_overlap(first: ScheduleEntryPayload, second: ScheduleEntryPayload) -> bool:
    return first.day == second.day and time_overlaps(
        first.start_time, first.end_time, second.start_time, second.end_time
    )


def detect_conflict(
    candidate: ScheduleEntryPayload,
    schedule: Iterable[ScheduleEntryPayload],
) -> ConflictPayload | None:
    """First clash between ``candidate`` and ``schedule``.

    Any instructor clash is reported ahead of any room clash.
    """
    overlapping = [existing for existing in schedule if entries_overlap(existing, candidate)]
    for existing in overlapping:
        if existing.instructor_id == candidate.instructor_id:
            return ConflictPayload(
                type="instructor",
                entry1=existing,
                entry2=candidate,
                message=f"Instructor {candidate.instructor_name} has overlapping classes",
            )
    for existing in overlapping:
        if existing.room_id == candidate.room_id:
            return ConflictPayload(
                type="room",
                entry1=existing,
                entry2=candidate,
                message=f"Room {candidate.room_number} is double-booked",
            )
    return None


@dataclass
class SectionTimetable:
    label: str
    entries: Sequence[ScheduleEntryPayload] = field(default_factory=list)


def detect_section_conflicts(timetables: Sequence[SectionTimetable]) -> list[ConflictPayload]:
    """Instructor clashes between different sections' timetables.

    Entries inside one timetable are never compared with each other; the
    placement pass already guards those.
    """
    conflicts: list[ConflictPayload] = []

    # Bucket by day, then compare across timetables only.
    by_day: dict[str, list[tuple[int, ScheduleEntryPayload]]] = defaultdict(list)
    for index, timetable in enumerate(timetables):
        for entry in timetable.entries:
            by_day[entry.day].append((index, entry))

    for day_entries in by_day.values():
        n = len(day_entries)
        for i in range(n):
            index_a, entry_a = day_entries[i]
            for j in range(i + 1, n):
                index_b, entry_b = day_entries[j]
                if index_a == index_b or entry_a.instructor_id != entry_b.instructor_id:
                    continue
                if not entries_overlap(entry_a, entry_b):
                    continue
                conflicts.append(
                    ConflictPayload(
                        type="section",
                        entry1=entry_a,
                        entry2=entry_b,
                        message=(
                            f"Instructor {entry_a.instructor_name} is double-booked across sections "
                            f"{timetables[index_a].label} and {timetables[index_b].label}"
                        ),
                    )
                )
    return conflicts
