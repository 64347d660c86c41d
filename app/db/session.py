"""
Database session management.

Provides SQLModel engine and session creation.
"""

from typing import Any, Generator

from sqlalchemy.pool import StaticPool
from sqlmodel import Session, create_engine

from app.core.config import settings


def _engine_options(url: str) -> dict[str, Any]:
    """Pool options per backend.

    An in-memory SQLite database lives in one connection, so it is shared
    through ``StaticPool``.  File databases use the default pool.
    """
    if url.startswith("sqlite"):
        options: dict[str, Any] = { "connect_args": { "check_same_thread": False } }
        if url in ("sqlite://", "sqlite:///:memory:") or "mode=memory" in url:
            options["poolclass"] = StaticPool
        return options
    return {
        "pool_pre_ping": True,  # Verify connections before using
        "pool_size": 5,         # Connection pool size
        "max_overflow": 10,     # Max connections beyond pool_size
    }


# Create database engine
DATABASE_URL: str = settings.database_url

engine = create_engine(
    DATABASE_URL,
    echo=settings.DEBUG,  # Log SQL queries in debug mode
    **_engine_options(DATABASE_URL),
)


def get_db() -> Generator[Session, None, None]:
    """
    Dependency for FastAPI endpoints to get database session.

    Yields:
        SQLModel Session instance
    """
    with Session(engine) as session:
        yield session
