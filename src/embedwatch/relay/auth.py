"""Authorization for the data endpoint.

Two credential shapes are supported, one per deployment:

* bearer: ``Authorization: Bearer <secret>``
* query: ``?key=<secret>&userId=<caller>`` with an allow-list of callers

Failures are returned as values so the HTTP layer can map each category to
its own status code without revealing anything else.
"""

from __future__ import annotations

import secrets
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Protocol

from embedwatch.config import AuthMode, Settings
from embedwatch.logging import get_logger

log = get_logger("embedwatch.relay.auth")

BEARER_PREFIX = "Bearer "
SECRET_PARAM = "key"
IDENTITY_PARAM = "userId"


class AuthFailure(StrEnum):
    """Why a request was refused."""

    MISSING_PARAMETERS = "missing_parameters"
    BAD_CREDENTIAL = "bad_credential"
    IDENTITY_NOT_AUTHORIZED = "identity_not_authorized"


@dataclass(frozen=True)
class AuthResult:
    """Outcome of an authorization check."""

    failure: AuthFailure | None = None
    caller_id: str | None = None

    @property
    def allowed(self) -> bool:
        return self.failure is None


ALLOWED = AuthResult()


def validate_secret(provided: str | None, expected: str | None) -> bool:
    """Constant-time secret comparison; empty or missing secrets never match."""
    if not provided or not expected:
        return False
    return secrets.compare_digest(provided.encode(), expected.encode())


class QueryAuthorizer(Protocol):
    """Anything that can vet a request from its headers and query string."""

    def authorize(
        self, headers: Mapping[str, str], params: Mapping[str, str]
    ) -> AuthResult: ...


class BearerTokenAuthorizer:
    """Checks a shared secret sent as an ``Authorization: Bearer`` header.

    With no secret configured (permissive deployments) every request passes.
    """

    def __init__(self, secret: str | None) -> None:
        self._secret = secret

    def authorize(self, headers: Mapping[str, str], params: Mapping[str, str]) -> AuthResult:
        if self._secret is None:
            return ALLOWED

        header = headers.get("Authorization", "")
        # The whole remainder is the token; extra space-separated parts are not dropped
        token = header[len(BEARER_PREFIX) :] if header.startswith(BEARER_PREFIX) else None
        if not validate_secret(token, self._secret):
            log.warning("query_unauthorized", reason="invalid_or_missing_bearer_token")
            return AuthResult(failure=AuthFailure.BAD_CREDENTIAL)
        return ALLOWED


class QueryParamAuthorizer:
    """Checks ``key`` against the shared secret and ``userId`` against an allow-list.

    Order: missing parameters, then secret, then identity.
    """

    def __init__(self, secret: str | None, allowed_ids: Iterable[str]) -> None:
        self._secret = secret
        self._allowed_ids = frozenset(allowed_ids)

    def authorize(self, headers: Mapping[str, str], params: Mapping[str, str]) -> AuthResult:
        key = params.get(SECRET_PARAM)
        caller_id = params.get(IDENTITY_PARAM)
        if not key or not caller_id:
            log.warning("query_unauthorized", reason="missing_parameters")
            return AuthResult(failure=AuthFailure.MISSING_PARAMETERS)

        if self._secret is not None and not validate_secret(key, self._secret):
            log.warning("query_unauthorized", reason="bad_secret")
            return AuthResult(failure=AuthFailure.BAD_CREDENTIAL)

        if caller_id not in self._allowed_ids:
            log.warning("query_unauthorized", reason="identity_not_authorized")
            return AuthResult(failure=AuthFailure.IDENTITY_NOT_AUTHORIZED)

        return AuthResult(caller_id=caller_id)


def build_authorizer(settings: Settings) -> QueryAuthorizer:
    """Pick the authorizer matching the configured auth mode."""
    if settings.auth_mode is AuthMode.QUERY:
        return QueryParamAuthorizer(settings.api_secret, settings.authorized_user_ids)
    return BearerTokenAuthorizer(settings.api_secret)
