"""Tests for schedule conflict detection.

Pure unit tests over :class:`SessionSnapshot` values; no database.
"""

import pytest

from app.scheduling.conflicts import (
    ConflictRule,
    find_all_conflicts,
    find_conflicts,
    has_conflicts,
    shared_days,
)
from app.schemas.enums import Weekday
from app.schemas.schedule import SessionSnapshot


# ======================================================================
# Helpers
# ======================================================================


def _make_session(
    session_id: int | None = None,
    days: tuple[str, ...] = ("Monday",),
    time: str = "09:00",
    workout_type: str = "Strength",
    duration: int = 60,
) -> SessionSnapshot:
    return SessionSnapshot(
        id=session_id,
        user_id=1,
        type=workout_type,
        duration_minutes=duration,
        preferred_time=time,
        intensity="medium",
        equipment="minimal",
        days=list(days),
    )


# ======================================================================
# shared_days
# ======================================================================


class TestSharedDays:
    def test_calendar_order(self):
        a = _make_session(days=("Friday", "Monday", "Wednesday"))
        b = _make_session(days=("Wednesday", "Friday"))
        assert shared_days(a, b) == [Weekday.WEDNESDAY, Weekday.FRIDAY]

    def test_disjoint(self):
        a = _make_session(days=("Monday",))
        b = _make_session(days=("Tuesday",))
        assert shared_days(a, b) == []


# ======================================================================
# find_conflicts (candidate vs existing)
# ======================================================================


class TestFindConflicts:
    def test_shared_day_same_time_is_one_record(self):
        """S1 Mon+Wed 09:00 Strength vs S2 Wed+Fri 09:00 Cardio."""
        s1 = _make_session(1, ("Monday", "Wednesday"), "09:00", "Strength")
        s2 = _make_session(None, ("Wednesday", "Friday"), "09:00", "Cardio")

        conflicts = find_conflicts([s1], s2)

        assert len(conflicts) == 1
        record = conflicts[0]
        assert record.day == Weekday.WEDNESDAY
        assert record.time == "09:00"
        assert record.session_a == s1
        assert record.session_b == s2

    def test_different_time_same_day_no_conflict(self):
        s1 = _make_session(1, ("Monday",), "09:00")
        s2 = _make_session(None, ("Monday",), "10:00")
        assert find_conflicts([s1], s2) == []

    def test_disjoint_days_never_conflict(self):
        s1 = _make_session(1, ("Monday", "Wednesday"), "09:00")
        s2 = _make_session(None, ("Tuesday", "Thursday"), "09:00")
        assert find_conflicts([s1], s2) == []

    def test_one_record_per_shared_day(self):
        s1 = _make_session(1, ("Monday", "Wednesday", "Friday"), "18:00")
        s2 = _make_session(None, ("Monday", "Friday", "Sunday"), "18:00")

        conflicts = find_conflicts([s1], s2)

        assert [c.day for c in conflicts] == [Weekday.MONDAY, Weekday.FRIDAY]

    def test_records_follow_existing_order(self):
        s1 = _make_session(1, ("Tuesday",), "07:00")
        s2 = _make_session(2, ("Monday",), "07:00")
        candidate = _make_session(None, ("Monday", "Tuesday"), "07:00")

        conflicts = find_conflicts([s1, s2], candidate)

        assert [c.session_a.id for c in conflicts] == [1, 2]
        assert [c.day for c in conflicts] == [Weekday.TUESDAY, Weekday.MONDAY]

    def test_exclude_id_prevents_self_conflict(self):
        stored = _make_session(7, ("Monday",), "09:00")
        edited = _make_session(7, ("Monday",), "09:00", workout_type="HIIT")
        assert find_conflicts([stored], edited, exclude_id=7) == []

    def test_exclude_id_keeps_other_conflicts(self):
        stored = _make_session(7, ("Monday",), "09:00")
        other = _make_session(8, ("Monday",), "09:00")
        edited = _make_session(None, ("Monday",), "09:00")

        conflicts = find_conflicts([stored, other], edited, exclude_id=7)

        assert [c.session_a.id for c in conflicts] == [8]

    def test_candidate_with_same_id_is_skipped(self):
        stored = _make_session(3, ("Monday",), "09:00")
        assert find_conflicts([stored], stored) == []

    def test_empty_schedule(self):
        assert find_conflicts([], _make_session()) == []

    def test_has_conflicts(self):
        s1 = _make_session(1, ("Sunday",), "08:00")
        assert has_conflicts([s1], _make_session(None, ("Sunday",), "08:00")) is True
        assert has_conflicts([s1], _make_session(None, ("Sunday",), "08:30")) is False


# ======================================================================
# Duration is ignored by the default rule
# ======================================================================


class TestExactStartRule:
    def test_overlapping_intervals_are_not_a_conflict(self):
        """09:00 for 120 min and 10:00 share an hour but start apart."""
        long_session = _make_session(1, ("Monday",), "09:00", duration=120)
        later = _make_session(None, ("Monday",), "10:00", duration=30)
        assert find_conflicts([long_session], later) == []

    def test_duration_does_not_matter_for_equal_starts(self):
        short = _make_session(1, ("Monday",), "09:00", duration=15)
        long_session = _make_session(None, ("Monday",), "09:00", duration=180)
        assert len(find_conflicts([short], long_session)) == 1

    def test_unpadded_time_matches_padded(self):
        s1 = _make_session(1, ("Monday",), "07:30")
        s2 = _make_session(None, ("Monday",), "7:30")
        assert len(find_conflicts([s1], s2)) == 1


class TestIntervalOverlapRule:
    @pytest.mark.parametrize(
        "first, duration, second, expected",
        [
            ("09:00", 120, "10:00", True),
            ("09:00", 60, "10:00", False),   # back-to-back
            ("09:00", 60, "09:59", True),
            ("10:00", 30, "09:00", False),   # second (60 min) ends at 10:00
            ("09:30", 15, "09:00", True),
        ],
    )
    def test_interval_boundaries(self, first, duration, second, expected):
        a = _make_session(1, ("Monday",), first, duration=duration)
        b = _make_session(None, ("Monday",), second, duration=60)
        result = find_conflicts([a], b, rule=ConflictRule.INTERVAL_OVERLAP)
        assert bool(result) is expected

    def test_disjoint_days_still_clear(self):
        a = _make_session(1, ("Monday",), "09:00", duration=120)
        b = _make_session(None, ("Tuesday",), "09:30")
        assert find_conflicts([a], b, rule=ConflictRule.INTERVAL_OVERLAP) == []


# ======================================================================
# find_all_conflicts (batch)
# ======================================================================


class TestFindAllConflicts:
    def test_each_pair_reported_once(self):
        a = _make_session(1, ("Monday",), "09:00")
        b = _make_session(2, ("Monday",), "09:00")

        conflicts = find_all_conflicts([a, b])

        assert len(conflicts) == 1
        assert conflicts[0].session_a.id == 1
        assert conflicts[0].session_b.id == 2

    def test_outer_index_before_inner(self):
        a = _make_session(1, ("Monday",), "09:00")
        b = _make_session(2, ("Monday",), "09:00")
        c = _make_session(3, ("Monday",), "09:00")

        pairs = [(r.session_a.id, r.session_b.id) for r in find_all_conflicts([a, b, c])]

        assert pairs == [(1, 2), (1, 3), (2, 3)]

    def test_clean_batch(self):
        sessions = [
            _make_session(1, ("Monday",), "09:00"),
            _make_session(2, ("Monday",), "18:00"),
            _make_session(3, ("Tuesday",), "09:00"),
        ]
        assert find_all_conflicts(sessions) == []

    def test_multiple_shared_days(self):
        a = _make_session(1, ("Monday", "Thursday"), "06:00")
        b = _make_session(2, ("Thursday", "Monday"), "06:00")
        assert [r.day for r in find_all_conflicts([a, b])] == [Weekday.MONDAY, Weekday.THURSDAY]
