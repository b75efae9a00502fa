"""
Document store port.

Records are plain dicts addressed by collection and id. Writes that must
land together go through `transactional_write`.
"""

from __future__ import annotations

import enum
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Protocol


class FieldValue(enum.Enum):
    """Placeholders resolved by the store when a write commits."""

    SERVER_TIMESTAMP = "server_timestamp"


SERVER_TIMESTAMP = FieldValue.SERVER_TIMESTAMP


@dataclass(frozen=True)
class DocumentWrite:
    """
    One write inside a transaction.

    With merge=True only the given fields are set and the rest of the
    record is left untouched; a missing record is created.
    """

    collection: str
    doc_id: str
    data: Mapping[str, Any] = field(default_factory=dict)
    merge: bool = True


class DocumentStoreError(Exception):
    """Raised when the store fails to read, write or delete."""


def resolve_field_values(data: Mapping[str, Any], commit_time: datetime) -> dict[str, Any]:
    """Replace SERVER_TIMESTAMP placeholders with the commit time (ISO-8601)."""
    stamp = commit_time.isoformat()
    return {key: (stamp if value is SERVER_TIMESTAMP else value) for key, value in data.items()}


class DocumentStore(Protocol):
    """Read, write and delete records.

    Intent:
        Let the workflows persist records without depending on a specific
        database.
    """

    async def get(self, collection: str, doc_id: str) -> dict[str, Any] | None: ...

    async def transactional_write(self, writes: Sequence[DocumentWrite]) -> datetime: ...

    async def delete(self, collection: str, doc_id: str) -> None: ...


__all__ = [
    "SERVER_TIMESTAMP",
    "DocumentStore",
    "DocumentStoreError",
    "DocumentWrite",
    "FieldValue",
    "resolve_field_values",
]
