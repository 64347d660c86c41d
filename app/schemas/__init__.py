"""Pydantic schemas for request/response validation."""

from app.schemas.user import Token, UserCreate, UserLogin, UserResponse
from app.schemas.enums import Equipment, Frequency, Intensity, Performance, Weekday, WorkoutType
from app.schemas.schedule import (
    AdvisoryResponse,
    CompletionCreate,
    CompletionRecord,
    ConflictRecord,
    ConflictResponse,
    ErrorResponse,
    ScheduleCheckResponse,
    ScheduledSessionCreate,
    ScheduledSessionResponse,
    ScheduledSessionUpdate,
    SessionSnapshot,
    WorkoutStatsResponse,
)

__all__ = [
    "Token",
    "UserCreate",
    "UserLogin",
    "UserResponse",
    "Equipment",
    "Frequency",
    "Intensity",
    "Performance",
    "Weekday",
    "WorkoutType",
    "AdvisoryResponse",
    "CompletionCreate",
    "CompletionRecord",
    "ConflictRecord",
    "ConflictResponse",
    "ErrorResponse",
    "ScheduleCheckResponse",
    "ScheduledSessionCreate",
    "ScheduledSessionResponse",
    "ScheduledSessionUpdate",
    "SessionSnapshot",
    "WorkoutStatsResponse",
]
