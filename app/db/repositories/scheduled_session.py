"""
Scheduled session repository.

Handles database operations for :class:`ScheduledSession`, keeps its
:class:`ScheduleSlot` rows in step, and owns the append-only completion
log.  Includes the aggregation queries behind workout statistics.
"""

from typing import Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from app.models.scheduled_session import ScheduledSession, ScheduleSlot, SessionCompletion


class ScheduledSessionRepository:
    """Repository for ScheduledSession database operations."""

    def __init__(self, session: Session):
        self.session = session

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_by_id(self, entry_id: int) -> Optional[ScheduledSession]:
        return self.session.get(ScheduledSession, entry_id)

    def list_for_user(self, user_id: int) -> list[ScheduledSession]:
        """All sessions of one owner, earliest start time first."""
        statement = (select(ScheduledSession).where(ScheduledSession.user_id == user_id)
                     .order_by(ScheduledSession.preferred_time, ScheduledSession.id))
        return list(self.session.exec(statement).all())

    def list_completions(self, session_id: int) -> list[SessionCompletion]:
        statement = (select(SessionCompletion).where(SessionCompletion.session_id == session_id)
                     .order_by(SessionCompletion.id))
        return list(self.session.exec(statement).all())

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def create(self, entry: ScheduledSession) -> ScheduledSession:
        """Insert the session and its slots in one transaction.

        Raises:
            IntegrityError: If a slot is already taken by the owner
        """
        try:
            self.session.add(entry)
            self.session.flush()
            self._add_slots(entry)
            self.session.commit()
        except IntegrityError:
            self.session.rollback()
            raise
        self.session.refresh(entry)
        return entry

    def update(self, entry: ScheduledSession) -> ScheduledSession:
        """Persist changed fields and rebuild the session's slots.

        Raises:
            IntegrityError: If a new slot is already taken by the owner
        """
        try:
            self.session.add(entry)
            self._delete_slots(entry.id)
            # Old slots must be gone before the replacements are inserted
            self.session.flush()
            self._add_slots(entry)
            self.session.commit()
        except IntegrityError:
            self.session.rollback()
            raise
        self.session.refresh(entry)
        return entry

    def delete(self, entry_id: int) -> bool:
        entry = self.get_by_id(entry_id)
        if not entry:
            return False
        self._delete_slots(entry_id)
        for completion in self.list_completions(entry_id):
            self.session.delete(completion)
        self.session.flush()
        self.session.delete(entry)
        self.session.commit()
        return True

    def add_completion(self, entry: ScheduledSession, record: SessionCompletion) -> SessionCompletion:
        record.session_id = entry.id
        self.session.add(record)
        self.session.commit()
        self.session.refresh(record)
        return record

    # ------------------------------------------------------------------
    # Aggregation queries for statistics
    # ------------------------------------------------------------------

    def count_by_type(self, user_id: int) -> dict[str, int]:
        """Number of scheduled sessions per workout type."""
        statement = (select(ScheduledSession.type, func.count(ScheduledSession.id))
                     .where(ScheduledSession.user_id == user_id)
                     .group_by(ScheduledSession.type))
        return {row[0]: int(row[1]) for row in self.session.exec(statement).all()}

    def completion_counts_by_type(self, user_id: int) -> dict[str, int]:
        """Number of completion records per workout type."""
        statement = (select(ScheduledSession.type, func.count(SessionCompletion.id))
                     .join(SessionCompletion, SessionCompletion.session_id == ScheduledSession.id)
                     .where(ScheduledSession.user_id == user_id)
                     .group_by(ScheduledSession.type))
        return {row[0]: int(row[1]) for row in self.session.exec(statement).all()}

    # ------------------------------------------------------------------
    # Slots
    # ------------------------------------------------------------------

    def _add_slots(self, entry: ScheduledSession) -> None:
        for day in entry.days:
            self.session.add(ScheduleSlot(session_id=entry.id, user_id=entry.user_id, day=day,
                                          preferred_time=entry.preferred_time, ))
        self.session.flush()

    def _delete_slots(self, session_id: int) -> None:
        statement = select(ScheduleSlot).where(ScheduleSlot.session_id == session_id)
        for slot in self.session.exec(statement).all():
            self.session.delete(slot)
