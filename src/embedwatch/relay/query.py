"""Read side of the relay: authorize, sweep, shape."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from embedwatch.logging import get_logger
from embedwatch.relay.auth import AuthFailure, QueryAuthorizer
from embedwatch.relay.store import AnnouncementStore

log = get_logger("embedwatch.relay.query")

# One fixed status and message per failure category
_FAILURE_RESPONSES: dict[AuthFailure, tuple[int, str]] = {
    AuthFailure.MISSING_PARAMETERS: (400, "Missing required parameters."),
    AuthFailure.BAD_CREDENTIAL: (401, "Unauthorized. Invalid credentials."),
    AuthFailure.IDENTITY_NOT_AUTHORIZED: (403, "Forbidden."),
}


@dataclass(frozen=True)
class QueryResult:
    """Status code and JSON-serialisable body for one data request."""

    status: int
    body: Any = field(default_factory=list)


class QueryHandler:
    """Serves entries newer than the retention window to authorized callers."""

    def __init__(
        self,
        *,
        store: AnnouncementStore,
        authorizer: QueryAuthorizer,
        window_ms: float,
    ) -> None:
        self._store = store
        self._authorizer = authorizer
        self._window_ms = window_ms

    @property
    def window_ms(self) -> float:
        return self._window_ms

    def handle(
        self,
        headers: Mapping[str, str],
        params: Mapping[str, str],
    ) -> QueryResult:
        """Authorize the request and return the fresh entries.

        An empty list is a normal successful response.
        """
        auth = self._authorizer.authorize(headers, params)
        if auth.failure is not None:
            status, message = _FAILURE_RESPONSES[auth.failure]
            return QueryResult(status=status, body={"error": message})

        entries = self._store.read_recent(self._window_ms)
        log.info("query_served", caller_id=auth.caller_id, count=len(entries))
        return QueryResult(status=200, body=[e.to_public() for e in entries])
