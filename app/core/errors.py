"""
Domain error types.

Services raise these; the exception handlers registered in
:mod:`app.main` turn them into JSON responses.  The conflict detector
and the advisory generator never raise: conflicts travel as data and
only become a :class:`ConflictError` when a write is refused.
"""

from __future__ import annotations

from typing import Any, Optional


class ScheduleError(Exception):
    """Base class for business-rule and storage failures.

    Attributes:
        status_code: HTTP status used when rendered by the API
        code: Stable machine-readable error code
        detail: Human-readable message
    """

    status_code: int = 500
    code: str = "error"

    def __init__(self, detail: str, errors: Optional[list[str]] = None):
        self.detail = detail
        self.errors = errors or []
        super().__init__(detail)

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"detail": self.detail, "code": self.code}
        if self.errors:
            payload["errors"] = self.errors
        return payload


class ValidationError(ScheduleError):
    """Missing or out-of-range session fields."""

    status_code = 400
    code = "validation_error"


class NotFoundError(ScheduleError):
    """The target session does not exist for the caller."""

    status_code = 404
    code = "not_found"


class ConflictError(ScheduleError):
    """The candidate session collides with existing sessions of the owner.

    ``conflicts`` holds :class:`~app.schemas.schedule.ConflictRecord`
    instances; ``alternative_time`` is a proposed start time, if any.
    """

    status_code = 409
    code = "conflict"

    def __init__(self, detail: str, conflicts: list, alternative_time: Optional[str] = None):
        super().__init__(detail)
        self.conflicts = conflicts
        self.alternative_time = alternative_time

    def to_payload(self) -> dict[str, Any]:
        payload = super().to_payload()
        payload["conflicts"] = [c.model_dump(mode="json") for c in self.conflicts]
        payload["alternative_time"] = self.alternative_time
        return payload


class StorageUnavailableError(ScheduleError):
    """The backing store could not be reached."""

    status_code = 500
    code = "storage_unavailable"
