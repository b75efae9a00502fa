"""
Documents module - JSON records addressed by collection and id.
"""

from teacher_panel.modules.documents.models import Document
from teacher_panel.modules.documents.ports import (
    SERVER_TIMESTAMP,
    DocumentStore,
    DocumentStoreError,
    DocumentWrite,
)
from teacher_panel.modules.documents.repository import SqlDocumentStore, get_document_store

__all__ = [
    "SERVER_TIMESTAMP",
    "Document",
    "DocumentStore",
    "DocumentStoreError",
    "DocumentWrite",
    "SqlDocumentStore",
    "get_document_store",
]
