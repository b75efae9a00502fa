"""
Document Models

Schemaless records addressed by (collection, doc_id). The record body is a
JSON object; timestamps inside it are ISO-8601 strings.
"""

from datetime import datetime

from sqlalchemy import JSON, DateTime, Index, String, func
from sqlalchemy.orm import Mapped, mapped_column

from teacher_panel.core.database import Base


class Document(Base):
    """A JSON record in a named collection."""

    __tablename__ = "documents"

    # Composite primary key
    collection: Mapped[str] = mapped_column(String(100), primary_key=True)
    doc_id: Mapped[str] = mapped_column(String(255), primary_key=True)

    data: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)

    # Row audit timestamps (the record body keeps its own)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    __table_args__ = (Index("ix_documents_collection", "collection"),)

    def __repr__(self) -> str:
        return f"<Document({self.collection}/{self.doc_id})>"
