"""MySQL connection pool and session management."""

import logging
from collections.abc import Generator
from typing import Any

from sqlalchemy import create_engine, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from app.core.config import settings

logger = logging.getLogger(__name__)


def _engine_options(url: str) -> dict[str, Any]:
    options: dict[str, Any] = {"pool_pre_ping": True, "echo": settings.DEBUG}
    if url.startswith("mysql"):
        options["pool_size"] = settings.DB_POOL_SIZE
        options["max_overflow"] = 0
        options["pool_recycle"] = 3600
    else:
        options["connect_args"] = {"check_same_thread": False}
    return options


engine = create_engine(settings.DATABASE_URL, **_engine_options(settings.DATABASE_URL))

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """
    Request-scoped session dependency.

    Closing the session rolls back anything the handler left uncommitted.
    """
    with SessionLocal() as db:
        yield db


def check_db_connected(db: Session) -> bool:
    """Ping MySQL (or the sqlite test database) with SELECT 1 for the health route."""
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.warning("Database health check failed: %s", e)
        return False
    return True
