"""
Schedule service.

Validates scheduled sessions, runs the conflict detector against the
owner's current schedule before every create or time/day change, and
persists through :class:`ScheduledSessionRepository`.  Writes of one
owner are serialized by :data:`owner_locks`; a slot collision raised by
the database is reported exactly like a detected conflict.
"""

import datetime
from typing import Any, Optional

from loguru import logger
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session

from app.core import errors
from app.core.config import settings
from app.db.repositories.scheduled_session import ScheduledSessionRepository
from app.models.scheduled_session import ScheduledSession, SessionCompletion
from app.scheduling.advisory import aggregate_suggestions, get_scheduling_suggestions
from app.scheduling.alternatives import AlternativePolicy, blocked_times, suggest_alternative_time
from app.scheduling.conflicts import ConflictRule, find_conflicts
from app.schemas.enums import WorkoutType
from app.schemas.schedule import (
    AdvisoryResponse,
    CompletionCreate,
    CompletionRate,
    CompletionRecord,
    ConflictRecord,
    ScheduleCheckResponse,
    ScheduledSessionCreate,
    ScheduledSessionResponse,
    ScheduledSessionUpdate,
    SessionSnapshot,
    WorkoutStatsResponse,
    WorkoutTypeCount,
)
from app.services.locks import OwnerLockRegistry, owner_locks

_SESSION_FIELDS = ("type", "duration_minutes", "preferred_time", "frequency", "intensity", "equipment", "days",
                   "notes")


class ScheduleService:
    """Service for scheduled session business logic."""

    def __init__(
        self,
        session: Session,
        rule: Optional[ConflictRule] = None,
        policy: Optional[AlternativePolicy] = None,
        locks: OwnerLockRegistry = owner_locks,
    ):
        self.repository = ScheduledSessionRepository(session)
        self.rule = ConflictRule(rule or settings.CONFLICT_RULE)
        self.policy = AlternativePolicy(policy or settings.ALTERNATIVE_TIME_POLICY)
        self.locks = locks

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def list_sessions(self, user_id: int) -> list[ScheduledSessionResponse]:
        entries = self.repository.list_for_user(user_id)
        return [self._to_response(e) for e in entries]

    def get(self, user_id: int, entry_id: int) -> ScheduledSessionResponse:
        return self._to_response(self._get_owned_entry(user_id, entry_id))

    def snapshots(self, user_id: int) -> list[SessionSnapshot]:
        """Read-only copies of the owner's sessions for the scheduling engine."""
        return [SessionSnapshot.model_validate(e) for e in self.repository.list_for_user(user_id)]

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def create(self, user_id: int, data: ScheduledSessionCreate) -> ScheduledSessionResponse:
        candidate = SessionSnapshot(**data.model_dump(), user_id=user_id)

        with self.locks.hold(user_id):
            existing = self.snapshots(user_id)
            conflicts = find_conflicts(existing, candidate, rule=self.rule)
            if conflicts:
                raise self._conflict_error(conflicts, existing, candidate)

            entry = ScheduledSession(user_id=user_id)
            self._apply(entry, data)
            try:
                entry = self.repository.create(entry)
            except IntegrityError:
                raise self._slot_taken(user_id, candidate)

        logger.info(f"Created session {entry.id} for user {user_id}: {entry.type} {entry.days} @ {entry.preferred_time}")
        return self._to_response(entry)

    def update(self, user_id: int, entry_id: int, data: ScheduledSessionUpdate) -> ScheduledSessionResponse:
        with self.locks.hold(user_id):
            entry = self._get_owned_entry(user_id, entry_id)
            merged = self._merge(entry, data)

            days = [d.value for d in merged.days]
            rescheduled = merged.preferred_time != entry.preferred_time or days != list(entry.days)
            if self.rule == ConflictRule.INTERVAL_OVERLAP:
                rescheduled = rescheduled or merged.duration_minutes != entry.duration_minutes

            candidate = SessionSnapshot(**merged.model_dump(), id=entry_id, user_id=user_id)
            if rescheduled:
                existing = self.snapshots(user_id)
                conflicts = find_conflicts(existing, candidate, exclude_id=entry_id, rule=self.rule)
                if conflicts:
                    raise self._conflict_error(conflicts, existing, candidate)

            self._apply(entry, merged)
            entry.updated_at = datetime.datetime.utcnow()
            try:
                entry = self.repository.update(entry)
            except IntegrityError:
                raise self._slot_taken(user_id, candidate)

        logger.info(f"Updated session {entry_id} for user {user_id}")
        return self._to_response(entry)

    def delete(self, user_id: int, entry_id: int) -> None:
        self._get_owned_entry(user_id, entry_id)
        self.repository.delete(entry_id)
        logger.info(f"Deleted session {entry_id} for user {user_id}")

    def add_completion(self, user_id: int, entry_id: int, data: CompletionCreate) -> ScheduledSessionResponse:
        """Append to the completion log.  Conflicts are not re-checked."""
        entry = self._get_owned_entry(user_id, entry_id)
        record = SessionCompletion(session_id=entry.id, date=data.date or datetime.datetime.utcnow(),
                                   notes=data.notes,
                                   performance=data.performance.value if data.performance else None, )
        self.repository.add_completion(entry, record)
        logger.info(f"Logged completion for session {entry_id} (user {user_id})")
        return self._to_response(entry)

    # ------------------------------------------------------------------
    # Scheduling engine
    # ------------------------------------------------------------------

    def check(self, user_id: int, data: ScheduledSessionCreate,
              exclude_id: Optional[int] = None) -> ScheduleCheckResponse:
        """Dry-run a candidate: conflicts, advisories and an alternative time."""
        candidate = SessionSnapshot(**data.model_dump(), id=exclude_id, user_id=user_id)
        existing = self.snapshots(user_id)
        conflicts = find_conflicts(existing, candidate, exclude_id=exclude_id, rule=self.rule)

        alternative = None
        if conflicts:
            alternative = self._alternative_time(conflicts, existing, candidate)

        return ScheduleCheckResponse(has_conflicts=bool(conflicts), conflicts=conflicts,
                                     suggestions=get_scheduling_suggestions(data.type, data.intensity),
                                     alternative_time=alternative, )

    def advisories(self, user_id: int) -> AdvisoryResponse:
        return AdvisoryResponse(suggestions=aggregate_suggestions(self.snapshots(user_id)))

    def stats(self, user_id: int) -> WorkoutStatsResponse:
        scheduled = self.repository.count_by_type(user_id)
        completed = self.repository.completion_counts_by_type(user_id)

        # Most scheduled first; enum order breaks ties
        type_order = {t.value: i for i, t in enumerate(WorkoutType)}
        ordered = sorted(scheduled, key=lambda t: (-scheduled[t], type_order.get(t, len(type_order))))

        return WorkoutStatsResponse(
            workouts_by_type=[WorkoutTypeCount(type=t, count=scheduled[t]) for t in ordered],
            total_completed_sessions=sum(completed.values()),
            completion_rates=[
                CompletionRate(type=t, completion_rate=round(completed.get(t, 0) / max(scheduled[t], 1) * 100, 2))
                for t in ordered
            ],
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _get_owned_entry(self, user_id: int, entry_id: int) -> ScheduledSession:
        entry = self.repository.get_by_id(entry_id)
        if not entry or entry.user_id != user_id:
            raise errors.NotFoundError("Schedule item not found")
        return entry

    @staticmethod
    def _entry_fields(entry: ScheduledSession) -> dict[str, Any]:
        return {name: getattr(entry, name) for name in _SESSION_FIELDS}

    def _merge(self, entry: ScheduledSession, data: ScheduledSessionUpdate) -> ScheduledSessionCreate:
        """Overlay a partial update on the stored session and re-validate.

        ``None`` keeps the stored value, except for ``notes`` where an
        explicit null clears it.
        """
        changes = {
            name: value for name, value in data.model_dump(exclude_unset=True).items()
            if value is not None or name == "notes"
        }
        try:
            return ScheduledSessionCreate.model_validate({**self._entry_fields(entry), **changes})
        except PydanticValidationError as e:
            raise errors.ValidationError("Invalid schedule data", errors=[err["msg"] for err in e.errors()])

    @staticmethod
    def _apply(entry: ScheduledSession, data: ScheduledSessionCreate) -> None:
        entry.type = data.type.value
        entry.duration_minutes = data.duration_minutes
        entry.preferred_time = data.preferred_time
        entry.frequency = data.frequency.value
        entry.intensity = data.intensity.value
        entry.equipment = data.equipment.value
        entry.days = [d.value for d in data.days]
        entry.notes = data.notes

    def _alternative_time(self, conflicts: list[ConflictRecord], existing: list[SessionSnapshot],
                          candidate: SessionSnapshot) -> Optional[str]:
        taken = blocked_times(existing, candidate, self.rule)
        return suggest_alternative_time(conflicts[0].time, self.policy, taken)

    def _conflict_error(self, conflicts: list[ConflictRecord], existing: list[SessionSnapshot],
                        candidate: SessionSnapshot) -> errors.ConflictError:
        logger.warning(f"Scheduling conflict for user {candidate.user_id}: "
                       f"{len(conflicts)} collision(s) at {candidate.preferred_time}")
        return errors.ConflictError("Scheduling conflict detected", conflicts=conflicts,
                                    alternative_time=self._alternative_time(conflicts, existing, candidate), )

    def _slot_taken(self, user_id: int, candidate: SessionSnapshot) -> errors.ConflictError:
        """Build the error for a write rejected by the slot constraint."""
        existing = self.snapshots(user_id)
        conflicts = find_conflicts(existing, candidate, exclude_id=candidate.id, rule=ConflictRule.EXACT_START)
        logger.warning(f"Slot constraint rejected write for user {user_id} at {candidate.preferred_time}")
        return errors.ConflictError("Scheduling conflict detected", conflicts=conflicts,
                                    alternative_time=self._alternative_time(conflicts, existing, candidate)
                                    if conflicts else None, )

    def _to_response(self, entry: ScheduledSession) -> ScheduledSessionResponse:
        completions = self.repository.list_completions(entry.id)
        return ScheduledSessionResponse(id=entry.id, user_id=entry.user_id, type=entry.type,
                                        duration_minutes=entry.duration_minutes,
                                        preferred_time=entry.preferred_time, frequency=entry.frequency,
                                        intensity=entry.intensity, equipment=entry.equipment, days=entry.days,
                                        notes=entry.notes,
                                        completed=[CompletionRecord.model_validate(c) for c in completions],
                                        has_completed_sessions=bool(completions), created_at=entry.created_at,
                                        updated_at=entry.updated_at, )
