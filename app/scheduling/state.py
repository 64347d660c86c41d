"""
Client-side schedule state.

The browser store keeps the owner's schedule, the session being drafted,
the last detected conflicts and a transient notice.  Here that store is
an immutable :class:`ScheduleState` value; every transition is a pure
function taking a state and returning a new one, so callers thread the
state explicitly instead of mutating a shared singleton.
"""

from __future__ import annotations

from typing import Any, Iterable, Literal, Optional

from pydantic import BaseModel, ConfigDict, ValidationError

from app.scheduling.alternatives import AlternativePolicy, blocked_times, suggest_alternative_time
from app.scheduling.conflicts import ConflictRule, find_conflicts
from app.schemas.enums import Equipment, Frequency, Intensity, Weekday, WorkoutType
from app.schemas.schedule import (
    ConflictRecord,
    SessionSnapshot,
    WorkoutStatsResponse,
)

NoticeLevel = Literal["info", "success", "warning"]


class Notice(BaseModel):
    """User-facing message replacing the store's toast."""

    model_config = ConfigDict(frozen=True)

    message: str
    level: NoticeLevel = "info"


class SessionDraft(BaseModel):
    """Form state of the session being composed.  ``days`` may be empty."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    type: WorkoutType = WorkoutType.STRENGTH
    duration_minutes: int = 60
    preferred_time: str = "09:00"
    frequency: Frequency = Frequency.WEEKLY
    intensity: Intensity = Intensity.MEDIUM
    equipment: Equipment = Equipment.MINIMAL
    days: tuple[Weekday, ...] = ()
    notes: Optional[str] = None


class ScheduleState(BaseModel):
    model_config = ConfigDict(frozen=True)

    schedule: tuple[SessionSnapshot, ...] = ()
    draft: SessionDraft = SessionDraft()
    conflicts: tuple[ConflictRecord, ...] = ()
    notice: Optional[Notice] = None
    loading: bool = False
    error: Optional[str] = None
    stats: Optional[WorkoutStatsResponse] = None


def _evolve(state: ScheduleState, **changes: Any) -> ScheduleState:
    return state.model_copy(update=changes)


# ======================================================================
# Draft editing
# ======================================================================


def update_draft(state: ScheduleState, field: str, value: Any) -> ScheduleState:
    """Set one draft field.  Unknown fields and bad values raise ValueError."""
    draft = SessionDraft.model_validate({**state.draft.model_dump(), field: value})
    return _evolve(state, draft=draft)


def toggle_day(state: ScheduleState, day: Weekday) -> ScheduleState:
    day = Weekday(day)
    days = state.draft.days
    if day in days:
        days = tuple(d for d in days if d != day)
    else:
        days = days + (day,)
    return _evolve(state, draft=state.draft.model_copy(update={ "days": days }))


def reset_draft(state: ScheduleState) -> ScheduleState:
    return _evolve(state, draft=SessionDraft())


def draft_to_candidate(draft: SessionDraft) -> SessionSnapshot:
    """Validate the draft into an unsaved snapshot.

    Raises:
        pydantic.ValidationError: If the draft breaks a session rule
    """
    return SessionSnapshot.model_validate(
        {**draft.model_dump(), "days": list(draft.days)}
    )


# ======================================================================
# Conflict check
# ======================================================================


def check_draft(
    state: ScheduleState,
    rule: ConflictRule = ConflictRule.EXACT_START,
    policy: AlternativePolicy = AlternativePolicy.NEAREST,
) -> ScheduleState:
    """Run the conflict detector for the draft against the schedule.

    On conflict the state carries the records and a warning naming an
    alternative start time.  A draft that breaks a session rule gets a
    warning naming the field.  A clean draft clears previous conflicts.
    """
    if not state.draft.days:
        return _evolve(state, notice=Notice(message="Please select at least one day", level="warning"))

    try:
        candidate = draft_to_candidate(state.draft)
    except ValidationError as e:
        return _evolve(state, conflicts=(), notice=Notice(message=_first_error(e), level="warning"))

    conflicts = find_conflicts(state.schedule, candidate, rule=rule)
    if not conflicts:
        return _evolve(state, conflicts=(), notice=None)

    taken = blocked_times(state.schedule, candidate, rule)
    alternative = suggest_alternative_time(conflicts[0].time, policy, taken)
    return _evolve(state, conflicts=tuple(conflicts), notice=_conflict_notice(alternative))


def _first_error(error: ValidationError) -> str:
    detail = error.errors()[0]
    field = ".".join(str(p) for p in detail["loc"])
    return f"{field}: {detail['msg']}" if field else detail["msg"]


def _conflict_notice(alternative_time: Optional[str]) -> Notice:
    if alternative_time:
        return Notice(message=f"Scheduling conflict detected. Consider {alternative_time} instead", level="warning")
    return Notice(message="Scheduling conflict detected", level="warning")


# ======================================================================
# Request lifecycle
# ======================================================================


def request_started(state: ScheduleState) -> ScheduleState:
    return _evolve(state, loading=True, error=None)


def request_failed(state: ScheduleState, error: str, message: str) -> ScheduleState:
    return _evolve(state, loading=False, error=error, notice=Notice(message=message, level="warning"))


def conflict_rejected(
    state: ScheduleState,
    conflicts: Iterable[ConflictRecord],
    alternative_time: Optional[str],
) -> ScheduleState:
    """The server refused a write with 409."""
    return _evolve(state, loading=False, conflicts=tuple(conflicts), notice=_conflict_notice(alternative_time))


def schedule_loaded(state: ScheduleState, sessions: Iterable[SessionSnapshot]) -> ScheduleState:
    return _evolve(state, schedule=tuple(sessions), loading=False)


def session_added(state: ScheduleState, saved: SessionSnapshot) -> ScheduleState:
    return _evolve(
        state,
        schedule=state.schedule + (saved,),
        conflicts=(),
        draft=SessionDraft(),
        loading=False,
        notice=Notice(message="Training session added successfully!", level="success"),
    )


def session_removed(state: ScheduleState, session_id: int) -> ScheduleState:
    return _evolve(
        state,
        schedule=tuple(s for s in state.schedule if s.id != session_id),
        loading=False,
        notice=Notice(message="Session removed", level="info"),
    )


def session_updated(state: ScheduleState, saved: SessionSnapshot) -> ScheduleState:
    return _evolve(
        state,
        schedule=tuple(saved if s.id == saved.id else s for s in state.schedule),
        loading=False,
        notice=Notice(message="Session updated successfully", level="success"),
    )


def stats_loaded(state: ScheduleState, stats: WorkoutStatsResponse) -> ScheduleState:
    return _evolve(state, stats=stats, loading=False)


def dismiss_notice(state: ScheduleState) -> ScheduleState:
    return _evolve(state, notice=None)
