import os
import tempfile
from pathlib import Path

# The app module binds its engine at import time; keep it away from a real database.
os.environ.setdefault(
    "DATABASE_URL",
    f"sqlite+pysqlite:///{Path(tempfile.gettempdir()) / 'timetabler-test.db'}",
)

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from timetabler.api.deps import get_db
from timetabler.db.base import Base
from timetabler.main import app
from timetabler.models.course import CourseCategory
from timetabler.models.instructor import Instructor
from timetabler.models.room import Room, RoomType
from timetabler.schemas.batch import BatchCreate, SemesterCreate
from timetabler.schemas.course import CourseCreate
from timetabler.services.store import EntityStore


@pytest.fixture()
def session_factory():
    engine = create_engine(
        "sqlite+pysqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


@pytest.fixture()
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def store(db):
    return EntityStore(db)


class Seeder:
    """Creates domain rows the way the CRUD collaborator would."""

    def __init__(self, store: EntityStore) -> None:
        self.store = store
        self._staff_counter = 0

    def batch(self, number="2018", sections=("A",)):
        return self.store.create_batch(BatchCreate(batch_number=number, sections=list(sections)))

    def semester(self, batch, number=1):
        return self.store.create_semester(
            SemesterCreate(batch_id=batch.id, semester_number=number, name=f"Semester {number}")
        )

    def instructor(self, name, max_load=12):
        self._staff_counter += 1
        instructor = Instructor(
            full_name=name,
            staff_id=f"STF-{self._staff_counter:03d}",
            max_teaching_load=max_load,
        )
        self.store.db.add(instructor)
        self.store.db.commit()
        self.store.db.refresh(instructor)
        return instructor

    def room(self, number, room_type=RoomType.classroom, is_available=True):
        room = Room(room_number=number, room_type=room_type, capacity=40, is_available=is_available)
        self.store.db.add(room)
        self.store.db.commit()
        self.store.db.refresh(room)
        return room

    def course(
        self,
        code,
        *,
        batch,
        semester,
        instructor,
        credit_hour=3,
        category=CourseCategory.major,
        has_lab=False,
        department=None,
    ):
        return self.store.create_course(
            CourseCreate(
                code=code,
                name=f"{code} Course",
                credit_hour=credit_hour,
                category=category,
                semester_id=semester.id,
                batch_id=batch.id,
                instructor_id=instructor.id,
                has_lab=has_lab,
                department=department,
            )
        )


@pytest.fixture()
def seed(store):
    return Seeder(store)


@pytest.fixture()
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
