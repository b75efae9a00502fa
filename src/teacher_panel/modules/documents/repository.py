"""
Document Repository

SQLAlchemy implementation of the document store port.

Design Principles:
- All writes of one `transactional_write` call share a single database
  transaction and a single commit time
- Reads return copies, so callers can never mutate tracked state
- Failures roll back and surface as DocumentStoreError
"""

import logging
from collections.abc import Sequence
from datetime import UTC, datetime
from typing import Any

from fastapi import Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from teacher_panel.core.database import get_db
from teacher_panel.modules.documents.models import Document
from teacher_panel.modules.documents.ports import (
    DocumentStoreError,
    DocumentWrite,
    resolve_field_values,
)

logger = logging.getLogger(__name__)


class SqlDocumentStore:
    """Document store backed by the `documents` table."""

    def __init__(self, db: AsyncSession):
        self._db = db

    async def get(self, collection: str, doc_id: str) -> dict[str, Any] | None:
        """Get a record, or None if it does not exist."""
        try:
            document = await self._db.get(Document, (collection, doc_id))
        except SQLAlchemyError as e:
            logger.error(f"Failed to read {collection}/{doc_id}: {e}", exc_info=True)
            raise DocumentStoreError(f"Failed to read {collection}/{doc_id}") from e

        if document is None:
            return None
        return dict(document.data or {})

    async def _apply(self, write: DocumentWrite, commit_time: datetime) -> None:
        fields = resolve_field_values(write.data, commit_time)
        document = await self._db.get(Document, (write.collection, write.doc_id))

        if document is None:
            self._db.add(Document(collection=write.collection, doc_id=write.doc_id, data=fields))
            await self._db.flush()
        elif write.merge:
            # Assign a new dict so the JSON column is marked dirty
            document.data = {**(document.data or {}), **fields}
        else:
            document.data = fields

    async def transactional_write(self, writes: Sequence[DocumentWrite]) -> datetime:
        """
        Apply all writes atomically.

        Args:
            writes: Writes to apply, in order

        Returns:
            The commit time used for SERVER_TIMESTAMP placeholders

        Raises:
            DocumentStoreError: If any write fails; nothing is persisted
        """
        commit_time = datetime.now(UTC)

        try:
            for write in writes:
                await self._apply(write, commit_time)
            await self._db.commit()
        except SQLAlchemyError as e:
            await self._db.rollback()
            targets = ", ".join(f"{w.collection}/{w.doc_id}" for w in writes)
            logger.error(f"Transaction failed for {targets}: {e}", exc_info=True)
            raise DocumentStoreError(f"Transaction failed for {targets}") from e

        return commit_time

    async def delete(self, collection: str, doc_id: str) -> None:
        """Delete a record. Deleting a missing record is a no-op."""
        try:
            document = await self._db.get(Document, (collection, doc_id))
            if document is None:
                return
            await self._db.delete(document)
            await self._db.commit()
        except SQLAlchemyError as e:
            await self._db.rollback()
            logger.error(f"Failed to delete {collection}/{doc_id}: {e}", exc_info=True)
            raise DocumentStoreError(f"Failed to delete {collection}/{doc_id}") from e


async def get_document_store(db: AsyncSession = Depends(get_db)) -> SqlDocumentStore:
    """FastAPI dependency returning a document store bound to the request session."""
    return SqlDocumentStore(db)
