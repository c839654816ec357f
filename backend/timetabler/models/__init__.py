from timetabler.models.batch import Batch  # noqa: F401
from timetabler.models.course import Course, CourseCategory  # noqa: F401
from timetabler.models.instructor import Instructor  # noqa: F401
from timetabler.models.room import Room, RoomType  # noqa: F401
from timetabler.models.schedule import Schedule, ScheduleStatus  # noqa: F401
from timetabler.models.semester import Semester  # noqa: F401
