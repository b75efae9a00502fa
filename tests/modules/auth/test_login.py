"""
Tests for POST /auth/login.
"""

import pytest

from teacher_panel.core.auth import caller_from_token
from teacher_panel.modules.auth.schemas import LoginRequest

LOGIN_URL = "/api/v1/auth/login"


class TestLogin:
    async def test_success_returns_token_with_email_claim(self, client, identity_provider):
        created = await identity_provider.create_identity(
            email="admin@example.com", password="adminpass1", display_name="Admin"
        )

        response = await client.post(
            LOGIN_URL, json={"email": "Admin@Example.com", "password": "adminpass1"}
        )

        assert response.status_code == 200
        body = response.json()
        assert body["token_type"] == "bearer"
        assert body["uid"] == created.uid
        caller = caller_from_token(body["access_token"])
        assert caller.uid == created.uid
        assert caller.email == "admin@example.com"
        assert caller.name == "Admin"

    async def test_token_opens_admin_endpoints(self, client, identity_provider):
        await identity_provider.create_identity(email="admin@example.com", password="adminpass1")
        login = await client.post(
            LOGIN_URL, json={"email": "admin@example.com", "password": "adminpass1"}
        )
        token = login.json()["access_token"]

        response = await client.post(
            "/api/v1/admin/teacher-applications/delete",
            json={"applicationId": "x"},
            headers={"Authorization": f"Bearer {token}"},
        )

        assert response.status_code == 200

    async def test_wrong_password(self, client, identity_provider):
        await identity_provider.create_identity(email="t@x.com", password="longenough1")

        response = await client.post(LOGIN_URL, json={"email": "t@x.com", "password": "nope1234"})

        assert response.status_code == 401
        assert response.json()["detail"]["error"] == "INVALID_CREDENTIALS"

    async def test_unknown_email(self, client):
        response = await client.post(
            LOGIN_URL, json={"email": "nobody@x.com", "password": "whatever1"}
        )

        assert response.status_code == 401

    async def test_disabled_identity(self, client, identity_provider):
        await identity_provider.create_identity(
            email="t@x.com", password="longenough1", disabled=True
        )

        response = await client.post(
            LOGIN_URL, json={"email": "t@x.com", "password": "longenough1"}
        )

        assert response.status_code == 403
        assert response.json()["detail"]["error"] == "ACCOUNT_DISABLED"

    async def test_unknown_email_without_at_sign(self, client):
        response = await client.post(LOGIN_URL, json={"email": "not-an-email", "password": "x"})

        assert response.status_code == 401

    async def test_email_without_dot_in_domain(self, client, identity_provider):
        await identity_provider.create_identity(email="t@school", password="longenough1")

        response = await client.post(
            LOGIN_URL, json={"email": "  T@School\n", "password": "longenough1"}
        )

        assert response.status_code == 200
        assert response.json()["email"] == "t@school"

    async def test_non_string_email(self, client):
        response = await client.post(LOGIN_URL, json={"email": 42, "password": "whatever1"})

        assert response.status_code == 401


class TestLoginRequest:
    @pytest.mark.parametrize(
        "raw,expected",
        [(" T@X.com ", "t@x.com"), ("t@school", "t@school"), (None, ""), (7, "")],
    )
    def test_email_is_normalized_like_approval(self, raw, expected):
        assert LoginRequest(email=raw, password="p").email == expected
