"""
Authentication and Authorization Module

Resolves the caller behind a request and decides whether that caller is
an administrator.

- `get_caller_context` turns the bearer token into a CallerContext, or None
  when no valid token was presented. It never raises, so the decision about
  what an anonymous caller may do stays with the guard.
- `AdminGuard` is the single authorization boundary for the admin
  workflows. It is built from an allow-list of administrator emails and
  must run before any other logic in every operation.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from teacher_panel.core.config import settings
from teacher_panel.core.errors import PermissionDeniedError, UnauthenticatedError
from teacher_panel.core.security import decode_token

logger = logging.getLogger(__name__)

# Security scheme for OpenAPI documentation
security = HTTPBearer(
    auto_error=False,
    description="JWT Bearer token for authentication",
)


@dataclass
class CallerContext:
    """
    A verified caller, populated from JWT claims.

    Attributes:
        uid: Identity id (the `sub` claim)
        email: Email claim, may be empty
        name: Display name claim (optional)
    """

    uid: str
    email: str
    name: str | None = None

    def __str__(self) -> str:
        return f"CallerContext(uid={self.uid}, email={self.email})"


class AdminGuard:
    """Checks callers against a fixed administrator allow-list."""

    def __init__(self, admin_emails: Iterable[str]):
        self._admin_emails = frozenset(
            email.strip().lower() for email in admin_emails if email and email.strip()
        )

    @property
    def admin_emails(self) -> frozenset[str]:
        return self._admin_emails

    def assert_admin(self, caller: CallerContext | None) -> str:
        """
        Ensure the caller is signed in and is an administrator.

        Args:
            caller: The verified caller, or None for anonymous requests

        Returns:
            The administrator's lower-cased email, for attribution

        Raises:
            UnauthenticatedError: If there is no verified caller
            PermissionDeniedError: If the caller is not on the allow-list
        """
        if caller is None:
            raise UnauthenticatedError()

        email = (caller.email or "").lower()
        if not email or email not in self._admin_emails:
            logger.warning(f"Access denied for {caller.uid} ({caller.email or 'no email'})")
            raise PermissionDeniedError()

        return email


def get_admin_guard() -> AdminGuard:
    """FastAPI dependency returning a guard built from configuration."""
    return AdminGuard(settings.admin_email_list)


def caller_from_token(token: str) -> CallerContext | None:
    """
    Validate an access token and extract the caller.

    Returns:
        CallerContext, or None if the token is invalid, expired, not an
        access token, or missing its subject
    """
    payload = decode_token(token)
    if payload is None:
        logger.warning("Invalid or expired JWT token")
        return None

    if payload.get("type", "access") != "access":
        logger.warning(f"Invalid token type: {payload.get('type')}")
        return None

    uid = payload.get("sub")
    if not uid:
        logger.warning("Missing 'sub' claim in token")
        return None

    return CallerContext(
        uid=str(uid),
        email=str(payload.get("email") or ""),
        name=payload.get("name"),
    )


async def get_caller_context(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> CallerContext | None:
    """
    FastAPI dependency resolving the caller behind the request.

    Usage:
        @router.post("/admin/endpoint")
        async def admin_endpoint(
            caller: CallerContext | None = Depends(get_caller_context),
            guard: AdminGuard = Depends(get_admin_guard),
        ):
            admin_email = guard.assert_admin(caller)
    """
    if not credentials:
        return None
    return caller_from_token(credentials.credentials)


__all__ = [
    "AdminGuard",
    "CallerContext",
    "caller_from_token",
    "get_admin_guard",
    "get_caller_context",
]
