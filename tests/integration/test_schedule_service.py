"""ScheduleService tests: conflict gating, updates, completions and stats."""

import pytest

from app.core import errors
from app.db.repositories.user import UserRepository
from app.models.user import User
from app.scheduling.alternatives import AlternativePolicy
from app.scheduling.conflicts import ConflictRule
from app.schemas.enums import Weekday, WorkoutType
from app.schemas.schedule import CompletionCreate, ScheduledSessionCreate, ScheduledSessionUpdate
from app.services import schedule_service as schedule_service_module
from app.services.locks import OwnerLockRegistry
from app.services.schedule_service import ScheduleService


# ======================================================================
# Helpers
# ======================================================================


def _make_create(days=("Monday",), time: str = "09:00", workout_type: str = "Strength", intensity: str = "medium",
                 duration: int = 60) -> ScheduledSessionCreate:
    return ScheduledSessionCreate(type=workout_type, duration_minutes=duration, preferred_time=time,
                                  intensity=intensity, equipment="minimal", days=list(days))


@pytest.fixture
def owner(db_session):
    return UserRepository(db_session).create(User(email="owner@fittrack.io", hashed_password="x"))


@pytest.fixture
def service(db_session):
    return ScheduleService(db_session, rule=ConflictRule.EXACT_START, policy=AlternativePolicy.NEAREST,
                           locks=OwnerLockRegistry())


# ======================================================================
# Create
# ======================================================================


class TestCreate:
    def test_persists_normalized(self, service, owner):
        created = service.create(owner.id, _make_create(("Friday", "Monday"), "7:00"))

        assert created.id is not None
        assert created.preferred_time == "07:00"
        assert created.days == [Weekday.MONDAY, Weekday.FRIDAY]
        assert created.completed == []
        assert created.has_completed_sessions is False

    def test_conflict_blocks_write(self, service, owner):
        first = service.create(owner.id, _make_create(("Monday", "Wednesday")))

        with pytest.raises(errors.ConflictError) as exc_info:
            service.create(owner.id, _make_create(("Wednesday", "Friday"), workout_type="Cardio"))

        error = exc_info.value
        assert len(error.conflicts) == 1
        assert error.conflicts[0].day == Weekday.WEDNESDAY
        assert error.conflicts[0].session_a.id == first.id
        assert error.conflicts[0].session_b.type == WorkoutType.CARDIO
        assert error.alternative_time == "08:00"
        assert len(service.list_sessions(owner.id)) == 1

    def test_alternative_avoids_taken_times(self, service, owner):
        service.create(owner.id, _make_create(("Monday",), "08:00"))
        service.create(owner.id, _make_create(("Monday",), "09:00"))

        with pytest.raises(errors.ConflictError) as exc_info:
            service.create(owner.id, _make_create(("Monday",), "09:00"))

        assert exc_info.value.alternative_time == "07:00"

    def test_other_owner_never_conflicts(self, db_session, service, owner):
        other = UserRepository(db_session).create(User(email="other@fittrack.io", hashed_password="x"))
        service.create(owner.id, _make_create())
        assert service.create(other.id, _make_create()).user_id == other.id

    def test_interval_rule(self, db_session, owner):
        service = ScheduleService(db_session, rule=ConflictRule.INTERVAL_OVERLAP, locks=OwnerLockRegistry())
        service.create(owner.id, _make_create(time="09:00", duration=90))

        with pytest.raises(errors.ConflictError):
            service.create(owner.id, _make_create(time="10:00"))

    def test_interval_alternative_clears_the_overlap(self, db_session, owner):
        service = ScheduleService(db_session, rule=ConflictRule.INTERVAL_OVERLAP, policy=AlternativePolicy.NEAREST,
                                  locks=OwnerLockRegistry())
        service.create(owner.id, _make_create(time="06:00", duration=180))

        with pytest.raises(errors.ConflictError) as exc_info:
            service.create(owner.id, _make_create(time="07:00", duration=60))

        alternative = exc_info.value.alternative_time
        assert alternative == "09:00"
        # The proposed time is accepted as is
        assert service.create(owner.id, _make_create(time=alternative, duration=60)).preferred_time == "09:00"

    def test_slot_constraint_reported_as_conflict(self, monkeypatch, service, owner):
        service.create(owner.id, _make_create())
        # Simulate a concurrent writer that passed the check before the first commit
        monkeypatch.setattr(schedule_service_module, "find_conflicts", lambda *args, **kwargs: [])

        with pytest.raises(errors.ConflictError) as exc_info:
            service.create(owner.id, _make_create(workout_type="HIIT"))

        assert exc_info.value.status_code == 409
        assert len(service.list_sessions(owner.id)) == 1


# ======================================================================
# Update
# ======================================================================


class TestUpdate:
    def test_same_slot_is_not_a_self_conflict(self, service, owner):
        created = service.create(owner.id, _make_create())

        updated = service.update(owner.id, created.id, ScheduledSessionUpdate(preferred_time="9:00",
                                                                              intensity="high"))

        assert updated.preferred_time == "09:00"
        assert updated.intensity.value == "high"

    def test_reschedule_into_conflict(self, service, owner):
        service.create(owner.id, _make_create(time="09:00"))
        moving = service.create(owner.id, _make_create(time="18:00"))

        with pytest.raises(errors.ConflictError):
            service.update(owner.id, moving.id, ScheduledSessionUpdate(preferred_time="09:00"))

        assert service.get(owner.id, moving.id).preferred_time == "18:00"

    def test_reschedule_to_free_slot(self, service, owner):
        created = service.create(owner.id, _make_create(("Monday",)))

        updated = service.update(owner.id, created.id, ScheduledSessionUpdate(days=["Tuesday", "Monday"]))

        assert updated.days == [Weekday.MONDAY, Weekday.TUESDAY]
        assert updated.updated_at >= created.updated_at

    def test_explicit_null_clears_notes(self, service, owner):
        created = service.create(owner.id, _make_create().model_copy(update={ "notes": "tempo" }))

        updated = service.update(owner.id, created.id, ScheduledSessionUpdate.model_validate({ "notes": None }))

        assert updated.notes is None

    def test_other_owner_gets_not_found(self, db_session, service, owner):
        other = UserRepository(db_session).create(User(email="other@fittrack.io", hashed_password="x"))
        created = service.create(owner.id, _make_create())

        with pytest.raises(errors.NotFoundError):
            service.update(other.id, created.id, ScheduledSessionUpdate(notes="mine now"))

    def test_missing(self, service, owner):
        with pytest.raises(errors.NotFoundError):
            service.update(owner.id, 404, ScheduledSessionUpdate(notes="x"))


# ======================================================================
# Delete / completions
# ======================================================================


class TestDeleteAndComplete:
    def test_delete(self, service, owner):
        created = service.create(owner.id, _make_create())
        service.delete(owner.id, created.id)

        with pytest.raises(errors.NotFoundError):
            service.get(owner.id, created.id)

    def test_delete_missing(self, service, owner):
        with pytest.raises(errors.NotFoundError):
            service.delete(owner.id, 12345)

    def test_completion_appends(self, service, owner):
        created = service.create(owner.id, _make_create())

        service.add_completion(owner.id, created.id, CompletionCreate(performance="good"))
        result = service.add_completion(owner.id, created.id, CompletionCreate(notes="felt strong"))

        assert result.has_completed_sessions is True
        assert [c.performance for c in result.completed] == ["good", None]
        assert result.completed[1].notes == "felt strong"


# ======================================================================
# Check / advisories / stats
# ======================================================================


class TestEngineOperations:
    def test_check_reports_without_saving(self, service, owner):
        service.create(owner.id, _make_create())

        result = service.check(owner.id, _make_create(workout_type="HIIT", intensity="high"))

        assert result.has_conflicts is True
        assert result.alternative_time == "08:00"
        assert result.suggestions == ["Limit HIIT sessions to 2-3 times per week",
                                       "Space HIIT sessions at least 48 hours apart"]
        assert len(service.list_sessions(owner.id)) == 1

    def test_check_with_exclude_id(self, service, owner):
        created = service.create(owner.id, _make_create())

        result = service.check(owner.id, _make_create(workout_type="Yoga"), exclude_id=created.id)

        assert result.has_conflicts is False
        assert result.alternative_time is None
        assert result.suggestions == []

    def test_advisories(self, service, owner):
        service.create(owner.id, _make_create(time="06:00", workout_type="Strength", intensity="high"))
        service.create(owner.id, _make_create(time="07:00", workout_type="Strength"))

        assert service.advisories(owner.id).suggestions == [
            "Allow 48 hours between strength sessions for recovery",
            "Consider adding a recovery day after each session",
        ]

    def test_stats(self, service, owner):
        strength = service.create(owner.id, _make_create(time="06:00"))
        service.create(owner.id, _make_create(time="07:00"))
        yoga = service.create(owner.id, _make_create(time="08:00", workout_type="Yoga"))
        service.create(owner.id, _make_create(time="16:00", workout_type="Cardio"))
        service.add_completion(owner.id, strength.id, CompletionCreate())
        service.add_completion(owner.id, yoga.id, CompletionCreate())
        service.add_completion(owner.id, yoga.id, CompletionCreate())

        stats = service.stats(owner.id)

        assert [(c.type.value, c.count) for c in stats.workouts_by_type] == [
            ("Strength", 2), ("Cardio", 1), ("Yoga", 1),
        ]
        assert stats.total_completed_sessions == 3
        assert [(r.type.value, r.completion_rate) for r in stats.completion_rates] == [
            ("Strength", 50.0), ("Cardio", 0.0), ("Yoga", 200.0),
        ]

    def test_stats_empty(self, service, owner):
        stats = service.stats(owner.id)
        assert stats.workouts_by_type == []
        assert stats.total_completed_sessions == 0
        assert stats.completion_rates == []
