"""Database repositories."""

from app.db.repositories.user import UserRepository
from app.db.repositories.scheduled_session import ScheduledSessionRepository

__all__ = [
    "UserRepository",
    "ScheduledSessionRepository",
]
