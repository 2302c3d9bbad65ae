"""Ingestion of chat messages into the announcement store.

Each incoming message ends in exactly one ``IngestOutcome``. Nothing here
performs I/O; the Discord client converts its events to ``IncomingMessage``
and calls ``IngestionHandler.handle``.
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import StrEnum

from embedwatch.logging import get_logger
from embedwatch.relay.extractor import DEFAULT_SELECTOR, FieldSelector, extract_entry
from embedwatch.relay.models import IncomingMessage, MonitoredChannel
from embedwatch.relay.store import AnnouncementStore

log = get_logger("embedwatch.relay.ingest")


class IngestOutcome(StrEnum):
    """Terminal state reached by one incoming message."""

    IGNORED_SELF = "ignored_self"
    IGNORED_UNMONITORED = "ignored_unmonitored"
    IGNORED_NO_FIELDS = "ignored_no_fields"
    IGNORED_MISSING_FIELDS = "ignored_missing_fields"
    DUPLICATE = "duplicate"
    ACCEPTED = "accepted"


class IngestionHandler:
    """Filters, extracts and deduplicates announcements from monitored channels."""

    def __init__(
        self,
        *,
        store: AnnouncementStore,
        self_user_id: str | None = None,
        channels: Iterable[MonitoredChannel] = (),
        selector: FieldSelector = DEFAULT_SELECTOR,
    ) -> None:
        self._store = store
        self._self_user_id = self_user_id
        self._selector = selector
        self._channels: dict[str, MonitoredChannel] = {}
        self.set_monitored_channels(channels)

    # ------------------------------------------------------------------
    # Startup wiring
    # ------------------------------------------------------------------

    def set_self_user_id(self, user_id: str) -> None:
        """Set the bot's own account ID; its messages are always ignored."""
        self._self_user_id = user_id

    def set_monitored_channels(self, channels: Iterable[MonitoredChannel]) -> None:
        """Replace the monitored channel set (called by discovery only)."""
        self._channels = {c.channel_id: c for c in channels}

    @property
    def monitored_channel_ids(self) -> frozenset[str]:
        return frozenset(self._channels)

    # ------------------------------------------------------------------
    # Ingestion
    # ------------------------------------------------------------------

    def handle(self, message: IncomingMessage) -> IngestOutcome:
        """Process one message and return the state it ended in."""
        if self._self_user_id is not None and message.author_id == self._self_user_id:
            return IngestOutcome.IGNORED_SELF

        channel = self._channels.get(message.channel_id)
        if channel is None:
            return IngestOutcome.IGNORED_UNMONITORED

        channel_name = channel.name or message.channel_name

        # Only the first embed is considered
        if not message.embeds or not message.embeds[0]:
            return IngestOutcome.IGNORED_NO_FIELDS
        fields = message.embeds[0]

        entry = extract_entry(message.channel_id, fields, self._selector)
        if entry is None:
            log.info(
                "announcement_ignored_missing_fields",
                channel_id=message.channel_id,
                channel_name=channel_name,
            )
            return IngestOutcome.IGNORED_MISSING_FIELDS

        if self._store.offer(entry) is None:
            log.info(
                "duplicate_announcement",
                channel_id=message.channel_id,
                channel_name=channel_name,
                name=entry.name,
            )
            return IngestOutcome.DUPLICATE

        log.info(
            "announcement_accepted",
            channel_id=message.channel_id,
            channel_name=channel_name,
            name=entry.name,
            generation=entry.generation,
            job_id=entry.job_id,
        )
        return IngestOutcome.ACCEPTED
