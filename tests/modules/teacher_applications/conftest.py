"""
Fixtures for teacher applications tests.
"""

from unittest.mock import AsyncMock

import pytest

from teacher_panel.modules.identity.ports import IdentityRecord


@pytest.fixture
def mock_store():
    """Create a mock document store with no records."""
    store = AsyncMock()
    store.get = AsyncMock(return_value=None)
    store.transactional_write = AsyncMock()
    store.delete = AsyncMock()
    return store


@pytest.fixture
def mock_identities():
    """Create a mock identity provider that creates uid-new."""
    identities = AsyncMock()
    identities.create_identity = AsyncMock(
        return_value=IdentityRecord(uid="uid-new", email="t@x.com", display_name="T One")
    )
    identities.find_identity_by_email = AsyncMock()
    identities.update_identity = AsyncMock()
    return identities


@pytest.fixture
def pending_application():
    """An application record as submitted by the intake form."""
    return {
        "fullName": "T One",
        "email": "t@x.com",
        "schoolName": "Hill School",
        "country": "GH",
        "status": "pending",
        "createdAt": "2026-01-05T10:00:00+00:00",
    }


@pytest.fixture
def approve_payload():
    return {"applicationId": "A1", "email": "t@x.com", "tempPassword": "longenough1"}
