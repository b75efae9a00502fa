"""
Tests for the SQL document store.
"""

from datetime import UTC, datetime
from unittest.mock import patch

import pytest
from sqlalchemy.exc import SQLAlchemyError

from teacher_panel.modules.documents.ports import (
    SERVER_TIMESTAMP,
    DocumentStoreError,
    DocumentWrite,
    resolve_field_values,
)
from teacher_panel.modules.documents.repository import SqlDocumentStore


class TestResolveFieldValues:
    def test_replaces_placeholders_only(self):
        commit_time = datetime(2026, 3, 1, 12, 0, tzinfo=UTC)

        resolved = resolve_field_values(
            {"a": SERVER_TIMESTAMP, "b": "kept", "c": None}, commit_time
        )

        assert resolved == {"a": "2026-03-01T12:00:00+00:00", "b": "kept", "c": None}


class TestGet:
    async def test_missing_record(self, document_store):
        assert await document_store.get("teachers", "nope") is None

    async def test_returns_a_copy(self, document_store, seed_document):
        await seed_document("teachers", "u1", {"status": "active"})

        record = await document_store.get("teachers", "u1")
        record["status"] = "mutated"

        assert (await document_store.get("teachers", "u1"))["status"] == "active"


class TestTransactionalWrite:
    async def test_creates_missing_records(self, document_store):
        await document_store.transactional_write(
            [
                DocumentWrite("teachers", "u1", {"status": "active"}),
                DocumentWrite("teacherApplications", "A1", {"status": "approved"}),
            ]
        )

        assert await document_store.get("teachers", "u1") == {"status": "active"}
        assert await document_store.get("teacherApplications", "A1") == {"status": "approved"}

    async def test_merge_keeps_other_fields(self, document_store, seed_document):
        await seed_document(
            "teacherApplications", "A1", {"fullName": "T", "status": "pending"}
        )

        await seed_document("teacherApplications", "A1", {"status": "rejected"})

        assert await document_store.get("teacherApplications", "A1") == {
            "fullName": "T",
            "status": "rejected",
        }

    async def test_overwrite_without_merge(self, document_store, seed_document):
        await seed_document("teachers", "u1", {"a": 1, "b": 2})

        await seed_document("teachers", "u1", {"b": 3}, merge=False)

        assert await document_store.get("teachers", "u1") == {"b": 3}

    async def test_one_commit_time_for_all_writes(self, document_store):
        commit_time = await document_store.transactional_write(
            [
                DocumentWrite("teachers", "u1", {"updatedAt": SERVER_TIMESTAMP}),
                DocumentWrite("teacherApplications", "A1", {"reviewedAt": SERVER_TIMESTAMP}),
            ]
        )

        teacher = await document_store.get("teachers", "u1")
        application = await document_store.get("teacherApplications", "A1")
        assert teacher["updatedAt"] == commit_time.isoformat()
        assert application["reviewedAt"] == commit_time.isoformat()

    async def test_failure_rolls_back_every_write(self, document_store, seed_document):
        await seed_document("teacherApplications", "A1", {"status": "pending"})

        original_apply = SqlDocumentStore._apply
        calls = {"count": 0}

        async def failing_apply(self, write, commit_time):
            calls["count"] += 1
            if calls["count"] == 2:
                raise SQLAlchemyError("forced failure")
            await original_apply(self, write, commit_time)

        with patch.object(SqlDocumentStore, "_apply", failing_apply):
            with pytest.raises(DocumentStoreError):
                await document_store.transactional_write(
                    [
                        DocumentWrite("teacherApplications", "A1", {"status": "approved"}),
                        DocumentWrite("teachers", "u1", {"status": "active"}),
                    ]
                )

        assert await document_store.get("teacherApplications", "A1") == {"status": "pending"}
        assert await document_store.get("teachers", "u1") is None


class TestDelete:
    async def test_deletes_record(self, document_store, seed_document):
        await seed_document("teacherApplications", "A1", {"status": "pending"})

        await document_store.delete("teacherApplications", "A1")

        assert await document_store.get("teacherApplications", "A1") is None

    async def test_missing_record_is_noop(self, document_store):
        await document_store.delete("teacherApplications", "nope")

    async def test_only_touches_its_collection(self, document_store, seed_document):
        await seed_document("teacherApplications", "x", {"status": "pending"})
        await seed_document("teachers", "x", {"status": "active"})

        await document_store.delete("teacherApplications", "x")

        assert await document_store.get("teachers", "x") == {"status": "active"}
