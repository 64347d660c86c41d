"""Business logic services."""

from app.services.user_service import UserService
from app.services.schedule_service import ScheduleService

__all__ = [
    "UserService",
    "ScheduleService",
]
