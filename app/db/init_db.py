"""
Database initialization.

Creates all tables.  Production schemas are managed by Alembic; this is
for local runs against a fresh database.
"""

from loguru import logger
from sqlalchemy.engine import Engine
from sqlmodel import SQLModel

from app.db.session import engine as default_engine


def init_db(engine: Engine = default_engine) -> None:
    """Create all SQLModel tables on ``engine``."""

    # Import all models so SQLModel.metadata has them
    import app.db.base  # noqa: F401

    logger.info("Creating database tables...")
    SQLModel.metadata.create_all(engine)
    logger.info("Tables created: {}", ", ".join(sorted(SQLModel.metadata.tables)))


if __name__ == "__main__":
    init_db()
