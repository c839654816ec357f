from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from time import perf_counter

from timetabler.core.exceptions import NoAvailableRooms, NoClassrooms, NoCoursesFound, NoInstructors
from timetabler.models.course import Course, CourseCategory
from timetabler.models.instructor import Instructor
from timetabler.models.room import Room, RoomType
from timetabler.schemas.generation import GenerationOptions, GenerationRequest
from timetabler.schemas.schedule import ConflictPayload, ScheduleEntryPayload, ShiftName
from timetabler.services.conflict_service import detect_conflict
from timetabler.services.room_selector import select_room
from timetabler.services.store import EntityStore
from timetabler.services.timeutils import add_hours
from timetabler.services.workload import exceeds_max_load, instructor_load

logger = logging.getLogger(__name__)

QUEUE_ORDER = (CourseCategory.major, CourseCategory.common)


def opposite_shift(shift: ShiftName) -> ShiftName:
    return "afternoon" if shift == "morning" else "morning"


@dataclass
class PlacementResult:
    entries: list[ScheduleEntryPayload] = field(default_factory=list)
    conflicts: list[ConflictPayload] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


@dataclass
class PlacementState:
    """Partial schedule plus the rotating day cursor of the current queue."""

    entries: list[ScheduleEntryPayload] = field(default_factory=list)
    conflicts: list[ConflictPayload] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    day_index: int = 0

    def has_class_in_shift(self, day: str, shift: ShiftName) -> bool:
        return any(entry.day == day and entry.shift == shift for entry in self.entries)

    def to_result(self) -> PlacementResult:
        return PlacementResult(
            entries=list(self.entries),
            conflicts=list(self.conflicts),
            warnings=list(self.warnings),
        )


class PlacementEngine:
    """Greedy single-section placement over an in-memory snapshot.

    Majors are placed before commons. Within a queue, day search starts at
    the cursor and wraps through ``options.days``; a section gets at most one
    entry per (day, shift). Nothing here touches the database.
    """

    def __init__(
        self,
        *,
        courses: Sequence[Course],
        instructors: Sequence[Instructor],
        rooms: Sequence[Room],
        options: GenerationOptions,
    ) -> None:
        self.courses = list(courses)
        self.course_map = {course.id: course for course in self.courses}
        self.instructors = {instructor.id: instructor for instructor in instructors}
        self.classrooms = [room for room in rooms if room.room_type == RoomType.classroom]
        self.lab_rooms = [room for room in rooms if room.room_type == RoomType.lab]
        self.options = options
        self.days = list(options.days)

    def run(self) -> PlacementResult:
        started = perf_counter()
        state = PlacementState()
        for category in QUEUE_ORDER:
            queue = [course for course in self.courses if course.category == category]
            preferred = self.options.preferred_shift(category.value)
            state.day_index = 0
            for course in queue:
                self._place_course(state, course, preferred)

        logger.info(
            "Placed %d entries for %d courses (%d conflicts, %d warnings) in %.1fms",
            len(state.entries),
            len(self.courses),
            len(state.conflicts),
            len(state.warnings),
            (perf_counter() - started) * 1000,
        )
        return state.to_result()

    def _place_course(self, state: PlacementState, course: Course, preferred: ShiftName) -> None:
        instructor = self.instructors.get(course.instructor_id) if course.instructor_id else None
        if instructor is None:
            self._skip(state, course, f"Instructor not found for {course.code}")
            return

        current_load = instructor_load(state.entries, instructor.id, self.course_map)
        if exceeds_max_load(current_load, course.credit_hour, instructor.max_teaching_load):
            self._skip(state, course, f"Instructor {instructor.full_name} exceeds max load for {course.code}")
            return

        lecture = self._place_session(state, course, instructor, preferred, is_lab=False)
        if lecture is None:
            return

        if course.has_lab and course.lab_hours > 0:
            # Labs stay in the lecture's shift; a failed lab keeps the lecture.
            self._place_session(state, course, instructor, lecture.shift, is_lab=True)

    def _find_free_day(self, state: PlacementState, shift: ShiftName) -> str | None:
        for offset in range(len(self.days)):
            day = self.days[(state.day_index + offset) % len(self.days)]
            if not state.has_class_in_shift(day, shift):
                return day
        return None

    def _choose_slot(
        self,
        state: PlacementState,
        course: Course,
        preferred: ShiftName,
        *,
        allow_fallback: bool,
    ) -> tuple[str, ShiftName] | None:
        day = self._find_free_day(state, preferred)
        if day is not None:
            return day, preferred
        if not allow_fallback:
            return None

        fallback = opposite_shift(preferred)
        day = self._find_free_day(state, fallback)
        if day is None:
            return None
        state.warnings.append(f"{course.code} scheduled in {fallback} (preferred {preferred} unavailable)")
        return day, fallback

    def _place_session(
        self,
        state: PlacementState,
        course: Course,
        instructor: Instructor,
        preferred: ShiftName,
        *,
        is_lab: bool,
    ) -> ScheduleEntryPayload | None:
        label = f"{course.code} lab" if is_lab else course.code
        slot = self._choose_slot(state, course, preferred, allow_fallback=not is_lab)
        if slot is None:
            self._skip(state, course, f"Could not schedule {label} - no available slots")
            return None
        day, shift = slot

        window = self.options.shift_window(shift)
        hours = course.lab_hours if is_lab else course.lecture_hours
        start_time = window.start
        end_time = add_hours(start_time, hours)

        pool = self.lab_rooms if is_lab else self.classrooms
        room = select_room(pool, state.entries, day=day, start_time=start_time, end_time=end_time)
        if room is None:
            self._skip(state, course, f"No room available for {label} on {day} - skipping")
            return None

        entry = ScheduleEntryPayload(
            course_id=course.id,
            course_code=course.code,
            course_name=course.name,
            instructor_id=instructor.id,
            instructor_name=instructor.full_name,
            room_id=room.id,
            room_number=room.room_number,
            day=day,
            shift=shift,
            start_time=start_time,
            end_time=end_time,
            is_lab=is_lab,
        )

        conflict = detect_conflict(entry, state.entries)
        if conflict is not None:
            state.conflicts.append(conflict)
            self._skip(state, course, f"Conflict detected for {label}: {conflict.message}")
            return None

        state.entries.append(entry)
        state.day_index = (self.days.index(day) + 1) % len(self.days)
        return entry

    @staticmethod
    def _skip(state: PlacementState, course: Course, message: str) -> None:
        logger.debug("Skipping %s: %s", course.code, message)
        state.warnings.append(message)


def generate_schedule(store: EntityStore, request: GenerationRequest) -> PlacementResult:
    """Fetch the snapshot for one (batch, semester, section) and place it."""
    courses = store.find_courses(request.batch_id, request.semester_id, request.department)
    if not courses:
        raise NoCoursesFound(request.batch_id, request.semester_id, request.department)

    instructors = store.find_all_instructors()
    if not instructors:
        raise NoInstructors()

    rooms = store.find_rooms(request.selected_room_ids or None)
    if not rooms:
        raise NoAvailableRooms(request.selected_room_ids)
    if not any(room.room_type == RoomType.classroom for room in rooms):
        raise NoClassrooms()

    if request.reserved_fields_set:
        logger.info("Ignoring reserved generation fields: %s", ", ".join(request.reserved_fields_set))

    engine = PlacementEngine(courses=courses, instructors=instructors, rooms=rooms, options=request)
    return engine.run()
