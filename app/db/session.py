import logging
import time
from collections.abc import Generator
from typing import Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from app.core.config import settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    pass


engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,
    pool_size=settings.DB_POOL_SIZE,
    max_overflow=settings.DB_MAX_OVERFLOW,
    pool_timeout=settings.DB_POOL_TIMEOUT_SECONDS,
)

SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)


def install_slow_query_logging(target: Engine, threshold_ms: int) -> None:
    """Log a warning for every statement slower than `threshold_ms`."""

    @event.listens_for(target, "before_cursor_execute")
    def _start_timer(conn: Any, cursor: Any, statement: str, *args: Any) -> None:
        conn.info.setdefault("query_start_time", []).append(time.perf_counter())

    @event.listens_for(target, "after_cursor_execute")
    def _log_if_slow(conn: Any, cursor: Any, statement: str, *args: Any) -> None:
        started = conn.info["query_start_time"].pop()
        duration_ms = round((time.perf_counter() - started) * 1000, 2)
        if duration_ms > threshold_ms:
            logger.warning(
                "Slow query detected (%.2f ms, rows=%s): %s",
                duration_ms,
                cursor.rowcount,
                statement,
            )


install_slow_query_logging(engine, settings.SLOW_QUERY_THRESHOLD_MS)


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
