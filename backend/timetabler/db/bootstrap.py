from __future__ import annotations

import logging

from sqlalchemy import inspect

from timetabler.db.base import Base
from timetabler.db.session import engine

import timetabler.models  # noqa: F401  registers tables on Base.metadata

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS: dict[str, set[str]] = {
    "batches": {"id", "batch_number", "sections"},
    "semesters": {"id", "batch_id", "semester_number"},
    "courses": {
        "id",
        "code",
        "credit_hour",
        "category",
        "has_lab",
        "lecture_hours",
        "lab_hours",
        "instructor_id",
    },
    "instructors": {"id", "full_name", "max_teaching_load"},
    "rooms": {"id", "room_number", "room_type", "is_available"},
    "schedules": {"id", "batch_id", "semester_id", "section", "entries", "status", "generated_at"},
}


def _assert_required_columns() -> None:
    with engine.connect() as connection:
        inspector = inspect(connection)
        table_names = set(inspector.get_table_names())
        missing_tables = [name for name in REQUIRED_COLUMNS if name not in table_names]
        if missing_tables:
            raise RuntimeError(f"Missing required tables: {', '.join(sorted(missing_tables))}")

        missing_columns: list[str] = []
        for table_name, required in REQUIRED_COLUMNS.items():
            existing = {item["name"] for item in inspector.get_columns(table_name)}
            for column_name in sorted(required - existing):
                missing_columns.append(f"{table_name}.{column_name}")
        if missing_columns:
            raise RuntimeError(f"Missing required columns: {', '.join(missing_columns)}")


def ensure_schema() -> None:
    try:
        Base.metadata.create_all(bind=engine)
        _assert_required_columns()
    except Exception as exc:  # pragma: no cover - runtime environment dependent
        logger.exception("Database schema bootstrap failed")
        raise RuntimeError("Database schema bootstrap failed") from exc
    logger.info("Database schema ready (%d tables)", len(REQUIRED_COLUMNS))
