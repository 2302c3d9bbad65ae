"""Time-bounded buffer of accepted announcements."""

from __future__ import annotations

import time
from collections.abc import Callable

from embedwatch.logging import get_logger
from embedwatch.relay.models import ExtractedEntry, QueueEntry

log = get_logger("embedwatch.relay.buffer")


class TTLBuffer:
    """Arrival-ordered entries, swept when read.

    Expired entries are only removed by ``prune_and_read``; there is no
    background timer. ``max_entries`` bounds growth when nobody reads.
    """

    def __init__(
        self,
        *,
        max_entries: int | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize the buffer.

        Args:
            max_entries: Oldest entries are evicted past this size.
                None or 0 leaves the buffer unbounded.
            clock: Returns the current time in seconds.
        """
        self._entries: list[QueueEntry] = []
        self._max_entries = max_entries or None
        self._clock = clock

    def _now_ms(self) -> float:
        return self._clock() * 1000

    def push(self, entry: ExtractedEntry) -> QueueEntry:
        """Append an entry stamped with the current time."""
        queued = QueueEntry(entry=entry, accepted_at_ms=self._now_ms())
        self._entries.append(queued)

        if self._max_entries is not None and len(self._entries) > self._max_entries:
            overflow = len(self._entries) - self._max_entries
            del self._entries[:overflow]
            log.warning(
                "buffer_entries_evicted",
                evicted=overflow,
                max_entries=self._max_entries,
            )
        return queued

    def prune_and_read(self, window_ms: float) -> list[QueueEntry]:
        """Drop entries at or before ``now - window_ms`` and return the rest.

        The survivors stay retained and come back in arrival order.
        """
        cutoff = self._now_ms() - window_ms
        survivors = [e for e in self._entries if e.accepted_at_ms > cutoff]
        pruned = len(self._entries) - len(survivors)
        self._entries = survivors
        if pruned:
            log.debug("buffer_pruned", pruned=pruned, retained=len(survivors))
        return list(survivors)

    def __len__(self) -> int:
        return len(self._entries)
