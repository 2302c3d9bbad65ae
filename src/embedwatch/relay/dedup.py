"""Per-channel duplicate suppression."""

from __future__ import annotations

from typing import Any

from embedwatch.relay.models import ExtractedEntry


class DedupGate:
    """Remembers the last accepted (name, generation) pair for each channel.

    Only the most recent pair is kept, so an announcement that reappears
    after a different one on the same channel is accepted again.
    """

    def __init__(self) -> None:
        self._last: dict[str, tuple[Any, Any]] = {}

    def is_duplicate(self, entry: ExtractedEntry) -> bool:
        """True when the entry repeats the channel's last accepted pair."""
        return self._last.get(entry.channel_id) == entry.dedup_pair

    def accept(self, entry: ExtractedEntry) -> bool:
        """Record the entry unless it is a duplicate.

        Returns:
            True if the entry was accepted and recorded, False if rejected.
        """
        if self.is_duplicate(entry):
            return False
        self._last[entry.channel_id] = entry.dedup_pair
        return True

    def last_accepted(self, channel_id: str) -> tuple[Any, Any] | None:
        return self._last.get(channel_id)

    def __len__(self) -> int:
        return len(self._last)
