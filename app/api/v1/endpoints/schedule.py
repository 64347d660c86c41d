"""
Workout schedule endpoints.

CRUD for recurring sessions, completion logging, conflict dry-runs,
advisories and statistics.  Every route is scoped to the bearer's
sessions; business failures are raised as :mod:`app.core.errors`
exceptions and rendered by the handlers in :mod:`app.main`.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from app.api.dependencies import get_current_user, get_schedule_service
from app.models.user import User
from app.scheduling.advisory import get_scheduling_suggestions
from app.schemas.enums import Intensity, WorkoutType
from app.schemas.schedule import (
    AdvisoryResponse,
    CompletionCreate,
    ConflictResponse,
    ErrorResponse,
    ScheduleCheckResponse,
    ScheduledSessionCreate,
    ScheduledSessionResponse,
    ScheduledSessionUpdate,
    WorkoutStatsResponse,
)
from app.services.schedule_service import ScheduleService

router = APIRouter()

_NOT_FOUND = { 404: { "model": ErrorResponse } }
_WRITE_ERRORS = { 400: { "model": ErrorResponse }, 409: { "model": ConflictResponse } }


@router.get("", summary="List the current user's scheduled sessions.",
            response_model=list[ScheduledSessionResponse], )
def list_sessions(service: ScheduleService = Depends(get_schedule_service), user: User = Depends(get_current_user), ):
    return service.list_sessions(user.id)


@router.post("", summary="Schedule a new recurring session.", response_model=ScheduledSessionResponse,
             status_code=status.HTTP_201_CREATED, responses=_WRITE_ERRORS, )
def create_session(data: ScheduledSessionCreate, service: ScheduleService = Depends(get_schedule_service),
                   user: User = Depends(get_current_user), ):
    return service.create(user.id, data)


@router.post("/check", summary="Check a candidate session for conflicts without saving it.",
             response_model=ScheduleCheckResponse, )
def check_session(data: ScheduledSessionCreate,
                  exclude_id: Optional[int] = Query(None, description="Session being edited, ignored in the check"),
                  service: ScheduleService = Depends(get_schedule_service), user: User = Depends(get_current_user), ):
    return service.check(user.id, data, exclude_id)


@router.get("/suggestions", summary="Training-safety advisories for a workout type and intensity.",
            response_model=AdvisoryResponse, )
def get_suggestions(workout_type: WorkoutType = Query(..., alias="type"), intensity: Intensity = Query(...), ):
    return AdvisoryResponse(suggestions=get_scheduling_suggestions(workout_type, intensity))


@router.get("/advisories", summary="Deduplicated advisories for the current user's schedule.",
            response_model=AdvisoryResponse, )
def get_advisories(service: ScheduleService = Depends(get_schedule_service), user: User = Depends(get_current_user), ):
    return service.advisories(user.id)


@router.get("/stats/summary", summary="Workout statistics for the current user.",
            response_model=WorkoutStatsResponse, )
def get_stats(service: ScheduleService = Depends(get_schedule_service), user: User = Depends(get_current_user), ):
    return service.stats(user.id)


@router.get("/{session_id}", summary="Get one scheduled session.", response_model=ScheduledSessionResponse,
            responses=_NOT_FOUND, )
def get_session(session_id: int, service: ScheduleService = Depends(get_schedule_service),
                user: User = Depends(get_current_user), ):
    return service.get(user.id, session_id)


@router.put("/{session_id}", summary="Update a scheduled session.", response_model=ScheduledSessionResponse,
            responses={ **_NOT_FOUND, **_WRITE_ERRORS }, )
def update_session(session_id: int, data: ScheduledSessionUpdate,
                   service: ScheduleService = Depends(get_schedule_service),
                   user: User = Depends(get_current_user), ):
    return service.update(user.id, session_id, data)


@router.delete("/{session_id}", summary="Delete a scheduled session.", status_code=status.HTTP_204_NO_CONTENT,
               responses=_NOT_FOUND, )
def delete_session(session_id: int, service: ScheduleService = Depends(get_schedule_service),
                   user: User = Depends(get_current_user), ):
    service.delete(user.id, session_id)


@router.patch("/{session_id}/complete", summary="Log a completed occurrence of a session.",
              response_model=ScheduledSessionResponse, responses=_NOT_FOUND, )
def complete_session(session_id: int, data: CompletionCreate,
                     service: ScheduleService = Depends(get_schedule_service),
                     user: User = Depends(get_current_user), ):
    return service.add_completion(user.id, session_id, data)
