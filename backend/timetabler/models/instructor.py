import uuid
from datetime import datetime

from sqlalchemy import DateTime, Integer, JSON, String
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from timetabler.core.config import get_settings
from timetabler.db.base import Base


class Instructor(Base):
    __tablename__ = "instructors"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    full_name: Mapped[str] = mapped_column(String(200), nullable=False)
    staff_id: Mapped[str] = mapped_column(String(50), unique=True, index=True, nullable=False)
    position: Mapped[str] = mapped_column(String(100), nullable=False, default="Lecturer")
    max_teaching_load: Mapped[int] = mapped_column(
        Integer, nullable=False, default=lambda: get_settings().default_max_teaching_load
    )
    specialization: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), onupdate=func.now())
