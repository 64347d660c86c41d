"""
Base database configuration.

Import all models here so Alembic can detect them for migrations.
"""

# Import all models for Alembic autogenerate
from app.models.user import User  # noqa: F401
from app.models.scheduled_session import ScheduledSession  # noqa: F401
from app.models.scheduled_session import ScheduleSlot  # noqa: F401
from app.models.scheduled_session import SessionCompletion  # noqa: F401
