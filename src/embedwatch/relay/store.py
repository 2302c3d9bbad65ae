"""Process-wide announcement state.

``AnnouncementStore`` owns the dedup memory and the retention buffer
together so that acceptance updates both or neither. It is created once in
``main`` and handed to the ingestion and query handlers.
"""

from __future__ import annotations

from embedwatch.relay.buffer import TTLBuffer
from embedwatch.relay.dedup import DedupGate
from embedwatch.relay.models import ExtractedEntry, QueueEntry


class AnnouncementStore:
    """Dedup state plus retained entries, accessed only through two operations."""

    def __init__(
        self,
        *,
        dedup: DedupGate | None = None,
        buffer: TTLBuffer | None = None,
    ) -> None:
        self._dedup = dedup if dedup is not None else DedupGate()
        self._buffer = buffer if buffer is not None else TTLBuffer()

    def offer(self, entry: ExtractedEntry) -> QueueEntry | None:
        """Accept a new entry, or return None if it repeats the channel's last one."""
        if not self._dedup.accept(entry):
            return None
        return self._buffer.push(entry)

    def read_recent(self, window_ms: float) -> list[QueueEntry]:
        """Entries accepted within the last ``window_ms`` milliseconds."""
        return self._buffer.prune_and_read(window_ms)

    def __len__(self) -> int:
        return len(self._buffer)
