from __future__ import annotations

import math

LAB_COURSE_CREDIT = 5
LAB_COURSE_SPLIT = (2, 3)
LECTURE_SHARE = 0.4


def derive_course_hours(credit_hour: int, has_lab: bool) -> tuple[int, int]:
    """Return ``(lecture_hours, lab_hours)`` for a course.

    A five-credit lab course is the canonical 2 lecture + 3 lab split; other
    lab courses give 40% (rounded down) to lectures and the rest to the lab.
    """
    if not has_lab:
        return credit_hour, 0
    if credit_hour == LAB_COURSE_CREDIT:
        return LAB_COURSE_SPLIT
    lecture_hours = math.floor(credit_hour * LECTURE_SHARE)
    return lecture_hours, credit_hour - lecture_hours
