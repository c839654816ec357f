from pydantic import BaseModel, Field, model_validator

from timetabler.models.course import CourseCategory
from timetabler.services.course_hours import derive_course_hours


class CourseBase(BaseModel):
    code: str = Field(min_length=1, max_length=50)
    name: str = Field(min_length=1, max_length=200)
    credit_hour: int = Field(ge=1, le=20)
    category: CourseCategory
    semester_id: str = Field(min_length=1, max_length=36)
    batch_id: str = Field(min_length=1, max_length=36)
    instructor_id: str = Field(min_length=1, max_length=36)
    has_lab: bool = False
    department: str | None = Field(default=None, max_length=200)


class CourseCreate(CourseBase):
    lecture_hours: int = 0
    lab_hours: int = 0

    @model_validator(mode="after")
    def derive_hours(self) -> "CourseCreate":
        # Hours are always derived; any client-supplied split is overwritten.
        self.lecture_hours, self.lab_hours = derive_course_hours(self.credit_hour, self.has_lab)
        return self

