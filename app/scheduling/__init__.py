"""Scheduling engine: conflict detection, advisories, alternative times."""

from app.scheduling.advisory import aggregate_suggestions, get_scheduling_suggestions
from app.scheduling.alternatives import AlternativePolicy, suggest_alternative_time
from app.scheduling.conflicts import ConflictRule, find_all_conflicts, find_conflicts

__all__ = [
    "AlternativePolicy",
    "ConflictRule",
    "aggregate_suggestions",
    "find_all_conflicts",
    "find_conflicts",
    "get_scheduling_suggestions",
    "suggest_alternative_time",
]
