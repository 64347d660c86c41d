"""HTTP client for the schedule API."""

from app.client.schedule_client import ScheduleClient

__all__ = ["ScheduleClient"]
