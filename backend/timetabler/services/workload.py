from __future__ import annotations

from collections.abc import Iterable, Mapping

from timetabler.models.course import Course
from timetabler.schemas.schedule import ScheduleEntryPayload


def instructor_load(
    schedule: Iterable[ScheduleEntryPayload],
    instructor_id: str,
    courses: Mapping[str, Course],
) -> int:
    """Credit hours already committed to ``instructor_id`` in ``schedule``.

    Each course counts once, so the lecture and lab entries of one course do
    not double its credit.
    """
    course_ids = {entry.course_id for entry in schedule if entry.instructor_id == instructor_id}
    total = 0
    for course_id in course_ids:
        course = courses.get(course_id)
        if course is not None:
            total += course.credit_hour
    return total


def exceeds_max_load(current_load: int, credit_hour: int, max_load: int) -> bool:
    return current_load + credit_hour > max_load
