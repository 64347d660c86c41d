"""
Workout schedule API schemas.

``ScheduledSessionBase`` carries every field a client submits and owns
the session validation rules (duration bounds, time-of-day format,
non-empty days).  ``SessionSnapshot`` is the read-only copy consumed by
the conflict detector and the advisory generator.
"""

import datetime
import re
from typing import Annotated, Any, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, field_validator

from app.schemas.enums import (
    WEEKDAY_ORDER,
    Equipment,
    Frequency,
    Intensity,
    Performance,
    Weekday,
    WorkoutType,
)

MIN_DURATION_MINUTES = 15
MAX_DURATION_MINUTES = 180
MAX_NOTES_LENGTH = 500

_TIME_RE = re.compile(r"^(\d{1,2}):(\d{2})$")


def parse_time_of_day(value: Any) -> str:
    """Normalize a wall-clock time to zero-padded ``HH:MM``.

    Accepts ``"H:MM"``, ``"HH:MM"`` or a :class:`datetime.time`.

    Raises:
        ValueError: If the value is not a valid 24-hour time of day
    """
    if isinstance(value, datetime.time):
        return value.strftime("%H:%M")
    if not isinstance(value, str):
        raise ValueError("preferred_time must be a 'HH:MM' string")

    match = _TIME_RE.match(value.strip())
    if not match:
        raise ValueError(f"Invalid time of day: '{value}' (expected HH:MM)")

    hour, minute = int(match.group(1)), int(match.group(2))
    if hour > 23 or minute > 59:
        raise ValueError(f"Invalid time of day: '{value}' (expected HH:MM)")
    return f"{hour:02d}:{minute:02d}"


def time_to_minutes(value: str) -> int:
    """Minutes since midnight of a normalized ``HH:MM`` string."""
    hour, minute = value.split(":")
    return int(hour) * 60 + int(minute)


def canonical_days(days: list[Weekday]) -> list[Weekday]:
    """Drop duplicates and sort in calendar order (Monday first)."""
    return sorted(set(days), key=WEEKDAY_ORDER.__getitem__)


TimeOfDay = Annotated[str, BeforeValidator(parse_time_of_day)]
Duration = Annotated[int, Field(ge=MIN_DURATION_MINUTES, le=MAX_DURATION_MINUTES)]
Days = Annotated[list[Weekday], Field(min_length=1)]


# ======================================================================
# Session
# ======================================================================


class ScheduledSessionBase(BaseModel):
    """Fields shared by every representation of a scheduled session."""

    type: WorkoutType
    duration_minutes: Duration = Field(..., description="Session length in minutes (15-180)")
    preferred_time: TimeOfDay = Field(..., description="Start time, 24-hour 'HH:MM'")
    frequency: Frequency = Frequency.WEEKLY
    intensity: Intensity
    equipment: Equipment
    days: Days = Field(..., description="Weekdays the session recurs on (at least one)")
    notes: Optional[str] = Field(None, max_length=MAX_NOTES_LENGTH)

    @field_validator("days")
    @classmethod
    def _canonical_days(cls, value: list[Weekday]) -> list[Weekday]:
        return canonical_days(value)


class ScheduledSessionCreate(ScheduledSessionBase):
    """Schema for creating a scheduled session."""


class ScheduledSessionUpdate(BaseModel):
    """Schema for a partial update.  Omitted fields keep their value."""

    type: Optional[WorkoutType] = None
    duration_minutes: Optional[Duration] = None
    preferred_time: Optional[TimeOfDay] = None
    frequency: Optional[Frequency] = None
    intensity: Optional[Intensity] = None
    equipment: Optional[Equipment] = None
    days: Optional[Days] = None
    notes: Optional[str] = Field(None, max_length=MAX_NOTES_LENGTH)

    @field_validator("days")
    @classmethod
    def _canonical_days(cls, value: Optional[list[Weekday]]) -> Optional[list[Weekday]]:
        return canonical_days(value) if value is not None else None


class SessionSnapshot(ScheduledSessionBase):
    """Read-only copy of a session as seen by the scheduling engine.

    ``id`` is None for a candidate that has not been persisted yet.
    """

    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: Optional[int] = None
    user_id: Optional[int] = None


# ======================================================================
# Completion log
# ======================================================================


class CompletionCreate(BaseModel):
    """Schema for appending a completion record.  ``date`` defaults to now."""

    date: Optional[datetime.datetime] = None
    notes: Optional[str] = Field(None, max_length=1000)
    performance: Optional[Performance] = None


class CompletionRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    date: datetime.datetime
    notes: Optional[str] = None
    performance: Optional[Performance] = None


class ScheduledSessionResponse(ScheduledSessionBase):
    """Schema for a scheduled session in API responses."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    completed: list[CompletionRecord] = Field(default_factory=list)
    has_completed_sessions: bool = False
    created_at: datetime.datetime
    updated_at: datetime.datetime


# ======================================================================
# Conflicts and advisories
# ======================================================================


class ConflictRecord(BaseModel):
    """Two sessions of one owner colliding on ``day`` at ``time``."""

    day: Weekday
    time: str
    session_a: SessionSnapshot
    session_b: SessionSnapshot


class ConflictResponse(BaseModel):
    """Body of a 409 response."""

    detail: str
    code: str = "conflict"
    conflicts: list[ConflictRecord]
    alternative_time: Optional[str] = None


class ErrorResponse(BaseModel):
    detail: str
    code: str
    errors: list[str] = Field(default_factory=list)


class ScheduleCheckResponse(BaseModel):
    """Dry-run result for a candidate session."""

    has_conflicts: bool
    conflicts: list[ConflictRecord]
    suggestions: list[str]
    alternative_time: Optional[str] = Field(
        None, description="Proposed start time when conflicts exist",
    )


class AdvisoryResponse(BaseModel):
    suggestions: list[str]


# ======================================================================
# Statistics
# ======================================================================


class WorkoutTypeCount(BaseModel):
    type: WorkoutType
    count: int


class CompletionRate(BaseModel):
    type: WorkoutType
    completion_rate: float = Field(
        ..., description="Completion records per scheduled session of this type, x100",
    )


class WorkoutStatsResponse(BaseModel):
    workouts_by_type: list[WorkoutTypeCount]
    total_completed_sessions: int
    completion_rates: list[CompletionRate]
