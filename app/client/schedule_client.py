"""
HTTP client for the schedule API.

Mirrors the browser store's actions: each method takes the current
:class:`ScheduleState`, talks to the API and returns the next state.
Transport and server failures end up in ``state.error`` and a warning
notice rather than propagating, like the store did with its toasts.
"""

from __future__ import annotations

from typing import Any, Optional

import httpx
from loguru import logger

from app.scheduling import state as reducers
from app.scheduling.alternatives import AlternativePolicy
from app.scheduling.conflicts import ConflictRule
from app.scheduling.state import ScheduleState
from app.schemas.schedule import ConflictRecord, SessionSnapshot, WorkoutStatsResponse

API_PREFIX = "/api/v1/schedule"


class ScheduleClient:
    """Schedule API client operating on explicit state values.

    Args:
        http: An ``httpx.Client`` whose ``base_url`` points at the API
            host (a FastAPI ``TestClient`` works too).
        token: Bearer token of the schedule owner.
    """

    def __init__(
        self,
        http: httpx.Client,
        token: Optional[str] = None,
        rule: ConflictRule = ConflictRule.EXACT_START,
        policy: AlternativePolicy = AlternativePolicy.NEAREST,
    ):
        self.http = http
        self.token = token
        self.rule = rule
        self.policy = policy

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def fetch_schedule(self, state: ScheduleState) -> ScheduleState:
        state = reducers.request_started(state)
        response = self._request("GET", "", state)
        if isinstance(response, ScheduleState):
            return response
        if response.is_error:
            return self._failed(state, response, "Failed to load schedule.")
        return reducers.schedule_loaded(state, [SessionSnapshot.model_validate(s) for s in response.json()])

    def add_session(self, state: ScheduleState) -> ScheduleState:
        """Check the draft locally, then create it on the server."""
        state = reducers.check_draft(state, self.rule, self.policy)
        # Empty days, invalid fields and conflicts all leave a warning
        if state.notice is not None and state.notice.level == "warning":
            return state

        payload = reducers.draft_to_candidate(state.draft).model_dump(mode="json", exclude={ "id", "user_id" })
        state = reducers.request_started(state)
        response = self._request("POST", "", state, json=payload)
        if isinstance(response, ScheduleState):
            return response
        if response.status_code == httpx.codes.CONFLICT:
            return self._rejected(state, response)
        if response.is_error:
            return self._failed(state, response, "Failed to add session")
        return reducers.session_added(state, SessionSnapshot.model_validate(response.json()))

    def update_session(self, state: ScheduleState, session_id: int, changes: dict[str, Any]) -> ScheduleState:
        state = reducers.request_started(state)
        response = self._request("PUT", f"/{session_id}", state, json=changes)
        if isinstance(response, ScheduleState):
            return response
        if response.status_code == httpx.codes.CONFLICT:
            return self._rejected(state, response)
        if response.is_error:
            return self._failed(state, response, "Failed to update session")
        return reducers.session_updated(state, SessionSnapshot.model_validate(response.json()))

    def remove_session(self, state: ScheduleState, session_id: int) -> ScheduleState:
        state = reducers.request_started(state)
        response = self._request("DELETE", f"/{session_id}", state)
        if isinstance(response, ScheduleState):
            return response
        if response.is_error:
            return self._failed(state, response, "Failed to remove session")
        return reducers.session_removed(state, session_id)

    def fetch_stats(self, state: ScheduleState) -> ScheduleState:
        state = reducers.request_started(state)
        response = self._request("GET", "/stats/summary", state)
        if isinstance(response, ScheduleState):
            return response
        if response.is_error:
            return self._failed(state, response, "Failed to load workout statistics")
        return reducers.stats_loaded(state, WorkoutStatsResponse.model_validate(response.json()))

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _headers(self) -> dict[str, str]:
        return { "Authorization": f"Bearer {self.token}" } if self.token else { }

    def _request(self, method: str, path: str, state: ScheduleState, **kwargs: Any) -> httpx.Response | ScheduleState:
        """Send a request; a transport failure comes back as a failed state."""
        try:
            return self.http.request(method, f"{API_PREFIX}{path}", headers=self._headers(), **kwargs)
        except httpx.TransportError as e:
            logger.error(f"{method} {API_PREFIX}{path} failed: {e}")
            return reducers.request_failed(state, str(e), "Schedule service is unreachable")

    @staticmethod
    def _failed(state: ScheduleState, response: httpx.Response, message: str) -> ScheduleState:
        try:
            detail = response.json().get("detail", message)
        except ValueError:
            detail = message
        logger.warning(f"Schedule API returned {response.status_code}: {detail}")
        return reducers.request_failed(state, str(detail), message)

    @staticmethod
    def _rejected(state: ScheduleState, response: httpx.Response) -> ScheduleState:
        body = response.json()
        conflicts = [ConflictRecord.model_validate(c) for c in body.get("conflicts", [])]
        return reducers.conflict_rejected(state, conflicts, body.get("alternative_time"))
