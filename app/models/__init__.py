"""SQLModel database models."""

from app.models.user import User
from app.models.scheduled_session import ScheduledSession, ScheduleSlot, SessionCompletion

__all__ = [
    "User",
    "ScheduledSession",
    "ScheduleSlot",
    "SessionCompletion",
]
