from __future__ import annotations

from typing import Literal

from pydantic import Field, field_validator, model_validator

from timetabler.core.config import get_settings
from timetabler.schemas.batch import SECTION_LABEL_MAX_LENGTH
from timetabler.schemas.common import DAY_VALUES, CamelModel, validate_time_value
from timetabler.schemas.schedule import ConflictPayload, ScheduleOut, ShiftName
from timetabler.services.timeutils import time_to_minutes


class ShiftWindow(CamelModel):
    start: str
    end: str

    @field_validator("start", "end")
    @classmethod
    def validate_time(cls, value: str) -> str:
        return validate_time_value(value)

    @model_validator(mode="after")
    def validate_order(self) -> "ShiftWindow":
        if time_to_minutes(self.end) <= time_to_minutes(self.start):
            raise ValueError("Shift end must be after shift start")
        return self


class PrioritySettings(CamelModel):
    major_courses_shift: ShiftName = "morning"
    common_courses_shift: ShiftName = "afternoon"


class SessionClassCount(CamelModel):
    morning: int | None = Field(default=None, ge=0, le=50)
    afternoon: int | None = Field(default=None, ge=0, le=50)


class SingleSessionConfig(CamelModel):
    session: ShiftName
    class_count: int = Field(ge=0, le=50)
    time_range: ShiftWindow


def _default_days() -> list[str]:
    return list(get_settings().default_days)


def _default_morning() -> ShiftWindow:
    settings = get_settings()
    return ShiftWindow(start=settings.default_morning_start, end=settings.default_morning_end)


def _default_afternoon() -> ShiftWindow:
    settings = get_settings()
    return ShiftWindow(start=settings.default_afternoon_start, end=settings.default_afternoon_end)


def _default_periods_per_day() -> int:
    return get_settings().default_periods_per_day


class GenerationOptions(CamelModel):
    """Fields shared by single-section and department-wide generation."""

    semester_id: str = Field(min_length=1, max_length=36)
    department: str | None = Field(default=None, max_length=200)
    days: list[str] = Field(default_factory=_default_days, min_length=1, max_length=5)
    morning_shift: ShiftWindow = Field(default_factory=_default_morning)
    afternoon_shift: ShiftWindow = Field(default_factory=_default_afternoon)
    periods_per_day: int = Field(default_factory=_default_periods_per_day, ge=1, le=12)
    selected_room_ids: list[str] | None = None
    priority_settings: PrioritySettings | None = None

    # Accepted on the wire, not used by placement.
    session_type: Literal["morning", "afternoon", "both"] | None = None
    session_class_count: SessionClassCount | None = None
    single_session_only: bool | None = None
    single_session_config: SingleSessionConfig | None = None

    @field_validator("days")
    @classmethod
    def validate_days(cls, value: list[str]) -> list[str]:
        cleaned = [day.strip() for day in value]
        invalid = [day for day in cleaned if day not in DAY_VALUES]
        if invalid:
            raise ValueError(f"Invalid day value(s): {', '.join(invalid)}")
        if len(set(cleaned)) != len(cleaned):
            raise ValueError("Duplicate day values")
        return cleaned

    @property
    def reserved_fields_set(self) -> list[str]:
        reserved = ("session_type", "session_class_count", "single_session_only", "single_session_config")
        return [name for name in reserved if getattr(self, name) is not None]

    def preferred_shift(self, category: str) -> ShiftName:
        priority = self.priority_settings or PrioritySettings()
        if category == "common":
            return priority.common_courses_shift
        return priority.major_courses_shift

    def shift_window(self, shift: ShiftName) -> ShiftWindow:
        return self.morning_shift if shift == "morning" else self.afternoon_shift


class GenerationRequest(GenerationOptions):
    batch_id: str = Field(min_length=1, max_length=36)
    section: str = Field(min_length=1, max_length=SECTION_LABEL_MAX_LENGTH)


class MultiGenerationRequest(GenerationOptions):
    pass


class GenerateScheduleResponse(CamelModel):
    schedule: ScheduleOut
    conflicts: list[ConflictPayload] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    message: str = "Schedule generated successfully"


class GenerateAllResponse(CamelModel):
    schedules: list[ScheduleOut] = Field(default_factory=list)
    conflicts: list[ConflictPayload] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    message: str
