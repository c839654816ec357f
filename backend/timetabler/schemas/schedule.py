from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import Field, field_validator

from timetabler.models.schedule import ScheduleStatus
from timetabler.schemas.common import DAY_VALUES, CamelModel

ShiftName = Literal["morning", "afternoon"]
ConflictType = Literal["instructor", "room", "section"]


class ScheduleEntryPayload(CamelModel):
    course_id: str
    course_code: str
    course_name: str
    instructor_id: str
    instructor_name: str
    room_id: str
    room_number: str
    day: str
    shift: ShiftName
    start_time: str
    end_time: str
    is_lab: bool = False

    @field_validator("day")
    @classmethod
    def validate_day(cls, value: str) -> str:
        if value not in DAY_VALUES:
            raise ValueError("Invalid day value")
        return value

    @field_validator("start_time", "end_time")
    @classmethod
    def validate_time(cls, value: str) -> str:
        # add_hours may run past 23:59; only the shape is checked here.
        hours, _, minutes = value.partition(":")
        if not (hours.isdigit() and minutes.isdigit() and len(minutes) == 2):
            raise ValueError("Time must be in HH:MM format")
        return value


class ConflictPayload(CamelModel):
    type: ConflictType
    entry1: ScheduleEntryPayload
    entry2: ScheduleEntryPayload
    message: str


class ScheduleOut(CamelModel):
    id: str
    batch_id: str
    semester_id: str
    section: str
    department: str | None = None
    entries: list[ScheduleEntryPayload] = Field(default_factory=list)
    status: ScheduleStatus
    generated_at: datetime


class InstructorScheduleEntry(ScheduleEntryPayload):
    schedule_id: str
    batch_id: str
    semester_id: str
    section: str
