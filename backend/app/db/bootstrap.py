from __future__ import annotations

import logging

from sqlalchemy import inspect, text

import app.models  # noqa: F401
from app.db.base import Base
from app.db.session import engine

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS: dict[str, set[str]] = {
    "campuses": {"id", "name"},
    "buildings": {"id", "name", "campus_id"},
    "rooms": {"id", "name", "capacity", "building_id"},
    "semesters": {"id", "calendar_year", "term"},
    "courses": {"id", "prefix", "number", "title", "is_undergraduate", "is_seas"},
    "course_instances": {"id", "course_id", "semester_id"},
    "faculty": {"id", "first_name", "last_name", "huid", "notes"},
    "faculty_course_instances": {"id", "faculty_id", "course_instance_id", "instructor_order"},
    "non_class_parents": {"id", "title", "contact_name", "notes"},
    "non_class_events": {"id", "non_class_parent_id", "semester_id"},
    "meetings": {
        "id",
        "day",
        "start_time",
        "end_time",
        "room_id",
        "course_instance_id",
        "non_class_event_id",
    },
}


def _ensure_rooms_capacity_column() -> None:
    with engine.begin() as connection:
        inspector = inspect(connection)
        if "rooms" not in set(inspector.get_table_names()):
            return
        column_names = {item["name"] for item in inspector.get_columns("rooms")}
        if "capacity" in column_names:
            return
        logger.info("Adding missing rooms.capacity column")
        connection.execute(text("ALTER TABLE rooms ADD COLUMN capacity INTEGER"))


def _assert_required_columns() -> None:
    with engine.begin() as connection:
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


def ensure_runtime_schema_compatibility() -> None:
    try:
        # Missing tables are created before the additive column patches run.
        Base.metadata.create_all(bind=engine)
        _ensure_rooms_capacity_column()
        _assert_required_columns()
    except Exception as exc:  # pragma: no cover - runtime environment dependent
        logger.exception("Runtime schema compatibility bootstrap failed")
        raise RuntimeError("Runtime schema compatibility bootstrap failed") from exc
