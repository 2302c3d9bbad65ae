"""Data models for the announcement relay.

All models are plain dataclasses. Channel and author identifiers are kept
as opaque strings regardless of how the chat platform represents them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

# ------------------------------------------------------------------
# Inbound event
# ------------------------------------------------------------------


@dataclass(frozen=True)
class MonitoredChannel:
    """A channel discovered at startup whose embeds are ingested."""

    channel_id: str
    name: str


@dataclass(frozen=True)
class RawField:
    """One name/value pair of an embed, in the order it was posted."""

    name: str
    value: Any
    inline: bool = False


@dataclass(frozen=True)
class IncomingMessage:
    """A chat message reduced to what the relay needs.

    ``embeds`` holds one field sequence per embed attached to the message.
    """

    author_id: str
    channel_id: str
    embeds: tuple[tuple[RawField, ...], ...] = ()
    channel_name: str = ""


# ------------------------------------------------------------------
# Extracted and retained entries
# ------------------------------------------------------------------


@dataclass(frozen=True)
class ExtractedEntry:
    """The named fields pulled out of one announcement."""

    channel_id: str
    name: Any
    generation: Any
    job_id: Any = None

    @property
    def dedup_pair(self) -> tuple[Any, Any]:
        """The (name, generation) pair compared for duplicates; job_id is excluded."""
        return (self.name, self.generation)


@dataclass(frozen=True)
class QueueEntry:
    """An accepted entry and the time (epoch milliseconds) it was accepted."""

    entry: ExtractedEntry
    accepted_at_ms: float = field(compare=False)

    def to_public(self) -> dict[str, Any]:
        """Shape served to API callers."""
        return {
            "name": self.entry.name,
            "gen": self.entry.generation,
            "jobId": self.entry.job_id,
        }
