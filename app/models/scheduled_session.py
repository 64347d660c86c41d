"""
Scheduled session database models.

A :class:`ScheduledSession` is a recurring weekly workout slot.  Its
weekdays are stored as a JSON list on the session row and mirrored one
row per day into :class:`ScheduleSlot`, whose unique constraint on
``(user_id, day, preferred_time)`` rejects two sessions of one owner
starting at the same minute of the same weekday even when concurrent
writers both passed the service-level conflict check.
"""

import datetime
from typing import Optional

from sqlalchemy import JSON, Column, UniqueConstraint
from sqlmodel import Field, SQLModel


class ScheduledSession(SQLModel, table=True):
    """A recurring workout session owned by one user."""

    __tablename__ = "scheduled_sessions"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", nullable=False, index=True)

    type: str = Field(nullable=False, max_length=20, index=True)
    intensity: str = Field(nullable=False, max_length=10)
    equipment: str = Field(nullable=False, max_length=20)
    duration_minutes: int = Field(nullable=False)
    frequency: str = Field(default="weekly", nullable=False, max_length=10)

    # Zero-padded "HH:MM"; compared by string equality
    preferred_time: str = Field(nullable=False, max_length=5, index=True)

    # Weekday names, calendar order
    days: list = Field(default_factory=list, sa_column=Column(JSON, nullable=False))

    notes: Optional[str] = Field(default=None, max_length=500)

    # Timestamps
    created_at: datetime.datetime = Field(default_factory=datetime.datetime.utcnow)
    updated_at: datetime.datetime = Field(default_factory=datetime.datetime.utcnow)


class ScheduleSlot(SQLModel, table=True):
    """One (weekday, start time) occupied by a session."""

    __tablename__ = "schedule_slots"
    __table_args__ = (
        UniqueConstraint("user_id", "day", "preferred_time", name="uq_schedule_slot_user_day_time", ),)

    id: Optional[int] = Field(default=None, primary_key=True)
    session_id: int = Field(foreign_key="scheduled_sessions.id", nullable=False, index=True)
    user_id: int = Field(foreign_key="users.id", nullable=False, index=True)
    day: str = Field(nullable=False, max_length=9)
    preferred_time: str = Field(nullable=False, max_length=5)


class SessionCompletion(SQLModel, table=True):
    """Append-only record of a completed occurrence of a session."""

    __tablename__ = "session_completions"

    id: Optional[int] = Field(default=None, primary_key=True)
    session_id: int = Field(foreign_key="scheduled_sessions.id", nullable=False, index=True)
    date: datetime.datetime = Field(nullable=False)
    notes: Optional[str] = Field(default=None, max_length=1000)
    performance: Optional[str] = Field(default=None, max_length=10)

    created_at: datetime.datetime = Field(default_factory=datetime.datetime.utcnow)
