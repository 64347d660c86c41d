"""
Schedule conflict detection.

Two sessions of the same owner conflict when they share at least one
weekday and collide in time on it.  The collision test depends on the
rule:

    * ``EXACT_START``: identical ``preferred_time`` strings.  Duration
      is ignored: 09:00 for 90 minutes and 10:00 on the same day do
      NOT conflict.
    * ``INTERVAL_OVERLAP``: ``[start, start + duration)`` intervals
      intersect on the shared day.  Sessions running past midnight are
      not carried into the next day.

One :class:`ConflictRecord` is emitted per shared day, so a pair sharing
Monday and Wednesday yields two records.  All functions are pure.
"""

from __future__ import annotations

from enum import Enum
from typing import Iterable, Optional, Sequence

from app.schemas.enums import Weekday
from app.schemas.schedule import ConflictRecord, SessionSnapshot, canonical_days, time_to_minutes


class ConflictRule(str, Enum):
    EXACT_START = "exact_start"
    INTERVAL_OVERLAP = "interval_overlap"


# ======================================================================
# Pair tests
# ======================================================================


def shared_days(a: SessionSnapshot, b: SessionSnapshot) -> list[Weekday]:
    """Weekdays present in both sessions, calendar order."""
    other = set(b.days)
    return [day for day in canonical_days(a.days) if day in other]


def _times_collide(a: SessionSnapshot, b: SessionSnapshot, rule: ConflictRule) -> bool:
    if rule == ConflictRule.EXACT_START:
        return a.preferred_time == b.preferred_time

    start_a = time_to_minutes(a.preferred_time)
    start_b = time_to_minutes(b.preferred_time)
    return start_a < start_b + b.duration_minutes and start_b < start_a + a.duration_minutes


def _pair_conflicts(a: SessionSnapshot, b: SessionSnapshot, rule: ConflictRule) -> list[ConflictRecord]:
    if not _times_collide(a, b, rule):
        return []
    return [
        ConflictRecord(day=day, time=a.preferred_time, session_a=a, session_b=b)
        for day in shared_days(a, b)
    ]


def _is_same_session(a: SessionSnapshot, b: SessionSnapshot) -> bool:
    return a.id is not None and a.id == b.id


# ======================================================================
# Public API
# ======================================================================


def find_conflicts(
    existing: Iterable[SessionSnapshot],
    candidate: SessionSnapshot,
    exclude_id: Optional[int] = None,
    rule: ConflictRule = ConflictRule.EXACT_START,
) -> list[ConflictRecord]:
    """Conflicts between ``candidate`` and the owner's existing sessions.

    Args:
        existing: The owner's current sessions, in the order to report.
        candidate: New or edited session.
        exclude_id: Id of the session being replaced by an update, so
            the candidate does not collide with its previous self.
        rule: Collision rule.

    Returns:
        Records in ``existing`` order, each with ``session_a`` the
        existing session and ``session_b`` the candidate.
    """
    conflicts: list[ConflictRecord] = []
    for session in existing:
        if exclude_id is not None and session.id == exclude_id:
            continue
        if _is_same_session(session, candidate):
            continue
        conflicts.extend(_pair_conflicts(session, candidate, rule))
    return conflicts


def find_all_conflicts(
    sessions: Sequence[SessionSnapshot],
    rule: ConflictRule = ConflictRule.EXACT_START,
) -> list[ConflictRecord]:
    """Every conflicting pair within one owner's batch.

    Pairs are visited with the outer index before the inner index
    (``i < j``), so each unordered pair is reported once per shared day.
    """
    conflicts: list[ConflictRecord] = []
    for i, first in enumerate(sessions):
        for second in sessions[i + 1:]:
            if _is_same_session(first, second):
                continue
            conflicts.extend(_pair_conflicts(first, second, rule))
    return conflicts


def has_conflicts(
    existing: Iterable[SessionSnapshot],
    candidate: SessionSnapshot,
    exclude_id: Optional[int] = None,
    rule: ConflictRule = ConflictRule.EXACT_START,
) -> bool:
    return bool(find_conflicts(existing, candidate, exclude_id, rule))
