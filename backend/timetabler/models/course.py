import uuid
from datetime import datetime
from enum import Enum

from sqlalchemy import Boolean, DateTime, Enum as SAEnum, Integer, String
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from timetabler.db.base import Base


class CourseCategory(str, Enum):
    major = "major"
    common = "common"


class Course(Base):
    __tablename__ = "courses"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    code: Mapped[str] = mapped_column(String(50), unique=True, index=True, nullable=False)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    credit_hour: Mapped[int] = mapped_column(Integer, nullable=False, default=3)
    category: Mapped[CourseCategory] = mapped_column(
        SAEnum(CourseCategory, name="course_category"), nullable=False, default=CourseCategory.major
    )
    # Plain string references: entries keep their own copies, so a dangling id is tolerated.
    semester_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    batch_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    instructor_id: Mapped[str | None] = mapped_column(String(36), nullable=True)
    has_lab: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    lecture_hours: Mapped[int] = mapped_column(Integer, nullable=False, default=3)
    lab_hours: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    department: Mapped[str | None] = mapped_column(String(200), nullable=True, index=True)
    # Insertion order; placement visits courses in this order.
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), onupdate=func.now())
