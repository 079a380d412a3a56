from __future__ import annotations

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.config import get_settings

IN_MEMORY_SQLITE_URLS = {"sqlite://", "sqlite+pysqlite://"}


def engine_options(database_url: str) -> dict:
    if not database_url.startswith("sqlite"):
        return {"pool_pre_ping": True}
    options: dict = {"connect_args": {"check_same_thread": False}}
    if database_url in IN_MEMORY_SQLITE_URLS or ":memory:" in database_url:
        # Every connection to an in-memory database would otherwise get its own empty database.
        options["poolclass"] = StaticPool
    return options


settings = get_settings()

engine = create_engine(settings.database_url, **engine_options(settings.database_url))
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
