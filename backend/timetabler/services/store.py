from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import datetime, timezone

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from timetabler.core.exceptions import ResourceNotFoundError
from timetabler.models.batch import Batch
from timetabler.models.course import Course
from timetabler.models.instructor import Instructor
from timetabler.models.room import Room
from timetabler.models.schedule import Schedule, ScheduleStatus
from timetabler.models.semester import Semester
from timetabler.schemas.batch import BatchCreate, SemesterCreate
from timetabler.schemas.course import CourseCreate
from timetabler.schemas.schedule import InstructorScheduleEntry, ScheduleEntryPayload

logger = logging.getLogger(__name__)


class EntityStore:
    """Read/write surface the scheduling engine and request layer rely on."""

    def __init__(self, db: Session) -> None:
        self.db = db

    # -- reads consumed by generation -------------------------------------

    def find_courses(self, batch_id: str, semester_id: str, department: str | None = None) -> list[Course]:
        query = select(Course).where(Course.batch_id == batch_id, Course.semester_id == semester_id)
        if department:
            query = query.where(Course.department == department)
        return list(self.db.execute(query.order_by(Course.position, Course.created_at, Course.code)).scalars())

    def find_all_instructors(self) -> list[Instructor]:
        return list(self.db.execute(select(Instructor).order_by(Instructor.staff_id)).scalars())

    def find_rooms(self, ids: Sequence[str] | None = None) -> list[Room]:
        query = select(Room).where(Room.is_available.is_(True))
        if ids:
            query = query.where(Room.id.in_(list(ids)))
        return list(self.db.execute(query.order_by(Room.room_number)).scalars())

    def find_all_batches(self) -> list[Batch]:
        return list(self.db.execute(select(Batch).order_by(Batch.batch_number)).scalars())

    # -- schedule writes ---------------------------------------------------

    def upsert_schedule(
        self,
        batch_id: str,
        semester_id: str,
        section: str,
        *,
        entries: Sequence[ScheduleEntryPayload],
        department: str | None = None,
        status: ScheduleStatus = ScheduleStatus.draft,
        generated_at: datetime | None = None,
    ) -> Schedule:
        payload = [entry.model_dump(by_alias=True, mode="json") for entry in entries]
        generated_at = generated_at or datetime.now(timezone.utc)
        schedule = self.db.execute(
            select(Schedule).where(
                Schedule.batch_id == batch_id,
                Schedule.semester_id == semester_id,
                Schedule.section == section,
            )
        ).scalar_one_or_none()

        if schedule is None:
            schedule = Schedule(batch_id=batch_id, semester_id=semester_id, section=section)
            self.db.add(schedule)
            action = "Created"
        else:
            action = "Replaced"

        schedule.entries = payload
        schedule.department = department
        schedule.status = status
        schedule.generated_at = generated_at
        self.db.commit()
        self.db.refresh(schedule)
        logger.info(
            "%s schedule %s for batch %s, semester %s, section %s (%d entries)",
            action,
            schedule.id,
            batch_id,
            semester_id,
            section,
            len(payload),
        )
        return schedule

    def get_schedule(self, schedule_id: str) -> Schedule:
        schedule = self.db.get(Schedule, schedule_id)
        if schedule is None:
            raise ResourceNotFoundError("Schedule", schedule_id)
        return schedule

    def list_schedules(
        self,
        *,
        batch_id: str | None = None,
        semester_id: str | None = None,
        section: str | None = None,
    ) -> list[Schedule]:
        query = select(Schedule)
        if batch_id:
            query = query.where(Schedule.batch_id == batch_id)
        if semester_id:
            query = query.where(Schedule.semester_id == semester_id)
        if section:
            query = query.where(Schedule.section == section)
        return list(self.db.execute(query.order_by(Schedule.generated_at.desc())).scalars())

    def publish_schedule(self, schedule_id: str) -> Schedule:
        schedule = self.get_schedule(schedule_id)
        if schedule.status != ScheduleStatus.published:
            schedule.status = ScheduleStatus.published
            self.db.commit()
            self.db.refresh(schedule)
            logger.info("Published schedule %s", schedule.id)
        return schedule

    def delete_schedule(self, schedule_id: str) -> None:
        schedule = self.get_schedule(schedule_id)
        self.db.delete(schedule)
        self.db.commit()

    def instructor_entries(self, instructor_id: str) -> list[InstructorScheduleEntry]:
        schedules = self.db.execute(
            select(Schedule).where(Schedule.status == ScheduleStatus.published)
        ).scalars()
        results: list[InstructorScheduleEntry] = []
        for schedule in schedules:
            for raw in schedule.entries:
                entry = ScheduleEntryPayload.model_validate(raw)
                if entry.instructor_id != instructor_id:
                    continue
                results.append(
                    InstructorScheduleEntry(
                        **entry.model_dump(),
                        schedule_id=schedule.id,
                        batch_id=schedule.batch_id,
                        semester_id=schedule.semester_id,
                        section=schedule.section,
                    )
                )
        return results

    # -- entity writes used by seeding and tests ---------------------------

    def create_batch(self, payload: BatchCreate) -> Batch:
        batch = Batch(**payload.model_dump())
        self.db.add(batch)
        self.db.commit()
        self.db.refresh(batch)
        return batch

    def create_semester(self, payload: SemesterCreate) -> Semester:
        semester = Semester(**payload.model_dump())
        self.db.add(semester)
        self.db.commit()
        self.db.refresh(semester)
        return semester

    def create_course(self, payload: CourseCreate) -> Course:
        last_position = self.db.execute(select(func.coalesce(func.max(Course.position), 0))).scalar_one()
        course = Course(**payload.model_dump(), position=last_position + 1)
        self.db.add(course)
        self.db.commit()
        self.db.refresh(course)
        return course
