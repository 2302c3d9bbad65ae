"""Field extraction for announcement embeds.

Roles are found by case-sensitive substring match on the field name, not by
position. The matching policy is a small ordered list of ``FieldRole``
entries so it can be swapped or tested without touching extraction.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from embedwatch.constants import (
    GENERATION_FIELD_TOKEN,
    JOB_ID_FIELD_TOKEN,
    NAME_FIELD_TOKEN,
)
from embedwatch.logging import get_logger
from embedwatch.relay.models import ExtractedEntry, RawField

log = get_logger("embedwatch.relay.extractor")

_TRIPLE_BACKTICK = "```"
_BACKTICK = "`"


def strip_markdown_fences(value: Any) -> Any:
    """Remove triple backticks, then any remaining single backticks.

    Non-string values are returned unchanged.
    """
    if not isinstance(value, str):
        return value
    return value.replace(_TRIPLE_BACKTICK, "").replace(_BACKTICK, "")


def name_contains(token: str) -> Callable[[str], bool]:
    """Build a predicate matching field names that contain ``token``."""

    def _match(field_name: str) -> bool:
        return token in field_name

    return _match


@dataclass(frozen=True)
class FieldRole:
    """A semantic role and how to recognise the field that carries it."""

    role: str
    matches: Callable[[str], bool]
    required: bool = True


class FieldSelector:
    """Ordered set of roles resolved against an embed's fields.

    For each role the first field whose name matches wins.
    """

    def __init__(self, roles: Sequence[FieldRole]) -> None:
        self._roles = tuple(roles)

    @property
    def roles(self) -> tuple[FieldRole, ...]:
        return self._roles

    def select(self, fields: Sequence[RawField]) -> dict[str, RawField]:
        """Map each role name to its matching field; unmatched roles are absent."""
        selected: dict[str, RawField] = {}
        for role in self._roles:
            for raw in fields:
                if role.matches(raw.name):
                    selected[role.role] = raw
                    break
        return selected

    def missing_required(self, selected: dict[str, RawField]) -> list[str]:
        return [r.role for r in self._roles if r.required and r.role not in selected]


DEFAULT_SELECTOR = FieldSelector(
    [
        FieldRole("name", name_contains(NAME_FIELD_TOKEN)),
        FieldRole("generation", name_contains(GENERATION_FIELD_TOKEN)),
        FieldRole("job_id", name_contains(JOB_ID_FIELD_TOKEN), required=False),
    ]
)


def extract_entry(
    channel_id: str,
    fields: Sequence[RawField],
    selector: FieldSelector = DEFAULT_SELECTOR,
) -> ExtractedEntry | None:
    """Build an ExtractedEntry from an embed's fields.

    Returns None when a required role (name or generation) has no field.
    """
    selected = selector.select(fields)
    missing = selector.missing_required(selected)
    if missing:
        log.debug(
            "embed_missing_fields",
            channel_id=channel_id,
            missing=missing,
            field_names=[f.name for f in fields],
        )
        return None

    job_field = selected.get("job_id")
    return ExtractedEntry(
        channel_id=channel_id,
        name=strip_markdown_fences(selected["name"].value),
        generation=strip_markdown_fences(selected["generation"].value),
        job_id=strip_markdown_fences(job_field.value) if job_field is not None else None,
    )
