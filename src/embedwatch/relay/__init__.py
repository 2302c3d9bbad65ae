"""Announcement relay core: extraction, dedup, retention and queries."""

from embedwatch.relay.auth import (
    AuthFailure,
    AuthResult,
    BearerTokenAuthorizer,
    QueryParamAuthorizer,
    build_authorizer,
)
from embedwatch.relay.buffer import TTLBuffer
from embedwatch.relay.dedup import DedupGate
from embedwatch.relay.ingest import IngestionHandler, IngestOutcome
from embedwatch.relay.models import (
    ExtractedEntry,
    IncomingMessage,
    MonitoredChannel,
    QueueEntry,
    RawField,
)
from embedwatch.relay.query import QueryHandler, QueryResult
from embedwatch.relay.store import AnnouncementStore

__all__ = [
    "AnnouncementStore",
    "AuthFailure",
    "AuthResult",
    "BearerTokenAuthorizer",
    "DedupGate",
    "ExtractedEntry",
    "IncomingMessage",
    "IngestOutcome",
    "IngestionHandler",
    "MonitoredChannel",
    "QueryHandler",
    "QueryParamAuthorizer",
    "QueryResult",
    "QueueEntry",
    "RawField",
    "TTLBuffer",
    "build_authorizer",
]
