"""
Identity provider port.

The approval workflow only needs to create, find and update credentials by
email. Keep this small so tests can supply simple fakes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class IdentityRecord:
    """Public view of an identity. Never carries the credential."""

    uid: str
    email: str
    display_name: str | None = None
    email_verified: bool = False
    disabled: bool = False


class IdentityProviderError(Exception):
    """Base class for identity provider failures."""


class IdentityAlreadyExistsError(IdentityProviderError):
    """Raised when creating an identity for an email that is already registered."""

    def __init__(self, email: str):
        self.email = email
        super().__init__(f"An identity with email {email} already exists")


class IdentityNotFoundError(IdentityProviderError):
    """Raised when no identity matches the lookup."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"No identity found for {key}")


class IdentityProvider(Protocol):
    """Create, find and update credentials.

    Permissions:
        Callers are trusted; authorization happens before these calls.
    """

    async def create_identity(
        self,
        *,
        email: str,
        password: str,
        display_name: str | None = None,
        email_verified: bool = False,
        disabled: bool = False,
    ) -> IdentityRecord: ...

    async def find_identity_by_email(self, email: str) -> IdentityRecord: ...

    async def update_identity(
        self,
        uid: str,
        *,
        password: str | None = None,
        display_name: str | None = None,
        disabled: bool | None = None,
    ) -> IdentityRecord: ...


__all__ = [
    "IdentityAlreadyExistsError",
    "IdentityNotFoundError",
    "IdentityProvider",
    "IdentityProviderError",
    "IdentityRecord",
]
