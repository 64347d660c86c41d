"""
Alternative start-time suggestions.

When a candidate collides, a replacement start time is drawn from a
fixed pool of common training slots.  Selection is deterministic:

    * ``NEAREST``: the slot closest to the conflicting time, earlier
      slot on a tie.
    * ``FIRST_AVAILABLE``: the first remaining slot in pool order.
"""

from __future__ import annotations

from enum import Enum
from typing import Iterable, Optional, Sequence

from app.scheduling.conflicts import ConflictRule, find_conflicts
from app.schemas.schedule import SessionSnapshot, parse_time_of_day, time_to_minutes

CANDIDATE_TIMES: tuple[str, ...] = (
    "06:00", "07:00", "08:00", "09:00",
    "16:00", "17:00", "18:00", "19:00",
)


class AlternativePolicy(str, Enum):
    NEAREST = "nearest"
    FIRST_AVAILABLE = "first_available"


def available_times(conflict_time: str, taken: Iterable[str] = ()) -> list[str]:
    """Pool slots other than ``conflict_time`` and ``taken``, pool order."""
    excluded = {parse_time_of_day(conflict_time)}
    excluded.update(parse_time_of_day(t) for t in taken)
    return [t for t in CANDIDATE_TIMES if t not in excluded]


def suggest_alternative_time(
    conflict_time: str,
    policy: AlternativePolicy = AlternativePolicy.NEAREST,
    taken: Iterable[str] = (),
) -> Optional[str]:
    """Propose a start time different from ``conflict_time``.

    Args:
        conflict_time: The colliding ``HH:MM`` start time.
        policy: Selection policy.
        taken: Further times to avoid, typically the owner's other
            start times on the same days.

    Returns:
        An ``HH:MM`` slot, or None when every pool slot is excluded.
    """
    remaining = available_times(conflict_time, taken)
    if not remaining:
        return None

    if AlternativePolicy(policy) == AlternativePolicy.FIRST_AVAILABLE:
        return remaining[0]

    target = time_to_minutes(parse_time_of_day(conflict_time))
    # min() keeps the first of equal keys, and the pool is ascending
    return min(remaining, key=lambda t: abs(time_to_minutes(t) - target))


def blocked_times(
    existing: Sequence[SessionSnapshot],
    candidate: SessionSnapshot,
    rule: ConflictRule = ConflictRule.EXACT_START,
) -> list[str]:
    """Start times that would not resolve the candidate's conflicts.

    The candidate's own time plus every pool slot at which the moved
    candidate still collides with an existing session under ``rule``.
    Pass the result as ``taken`` to :func:`suggest_alternative_time`.
    """
    blocked = [candidate.preferred_time]
    for time in CANDIDATE_TIMES:
        moved = candidate.model_copy(update={ "preferred_time": time })
        if find_conflicts(existing, moved, exclude_id=candidate.id, rule=rule):
            blocked.append(time)
    return blocked
