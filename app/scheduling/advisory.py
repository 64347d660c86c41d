"""
Training-safety advisories.

Static rules keyed on workout type and intensity.  Cardio, Yoga and
Recovery sessions carry no advisory.
"""

from __future__ import annotations

from typing import Iterable

from app.schemas.enums import Intensity, WorkoutType
from app.schemas.schedule import SessionSnapshot

STRENGTH_RECOVERY_INTERVAL = "Allow 48 hours between strength sessions for recovery"
STRENGTH_RECOVERY_DAY = "Consider adding a recovery day after each session"
HIIT_WEEKLY_LIMIT = "Limit HIIT sessions to 2-3 times per week"
HIIT_SPACING = "Space HIIT sessions at least 48 hours apart"

# (base advisory, extra advisory at high intensity)
_RULES: dict[WorkoutType, tuple[str, str]] = {
    WorkoutType.STRENGTH: (STRENGTH_RECOVERY_INTERVAL, STRENGTH_RECOVERY_DAY),
    WorkoutType.HIIT: (HIIT_WEEKLY_LIMIT, HIIT_SPACING),
}


def get_scheduling_suggestions(workout_type: WorkoutType, intensity: Intensity) -> list[str]:
    """Ordered advisories for one (type, intensity) pair."""
    rule = _RULES.get(WorkoutType(workout_type))
    if rule is None:
        return []

    base, high_extra = rule
    suggestions = [base]
    if Intensity(intensity) == Intensity.HIGH:
        suggestions.append(high_extra)
    return suggestions


def aggregate_suggestions(sessions: Iterable[SessionSnapshot]) -> list[str]:
    """Advisories across a whole schedule, first occurrence wins."""
    seen: dict[str, None] = {}
    for session in sessions:
        for suggestion in get_scheduling_suggestions(session.type, session.intensity):
            seen.setdefault(suggestion, None)
    return list(seen)
