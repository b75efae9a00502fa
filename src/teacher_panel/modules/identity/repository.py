"""
Identity Repository

SQLAlchemy implementation of the identity provider port. Every mutation
commits immediately: identities are not part of any document transaction.
"""

import logging

from fastapi import Depends
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from teacher_panel.core.database import get_db
from teacher_panel.core.security import hash_password, verify_password
from teacher_panel.modules.identity.models import Identity
from teacher_panel.modules.identity.ports import (
    IdentityAlreadyExistsError,
    IdentityNotFoundError,
    IdentityRecord,
)

logger = logging.getLogger(__name__)


def _to_record(identity: Identity) -> IdentityRecord:
    return IdentityRecord(
        uid=identity.uid,
        email=identity.email,
        display_name=identity.display_name,
        email_verified=identity.email_verified,
        disabled=identity.disabled,
    )


class SqlIdentityProvider:
    """Identity provider backed by the `identities` table."""

    def __init__(self, db: AsyncSession):
        self._db = db

    async def _get_by_email(self, email: str) -> Identity | None:
        result = await self._db.execute(select(Identity).where(Identity.email == email))
        return result.scalar_one_or_none()

    async def create_identity(
        self,
        *,
        email: str,
        password: str,
        display_name: str | None = None,
        email_verified: bool = False,
        disabled: bool = False,
    ) -> IdentityRecord:
        """
        Create a new identity.

        Raises:
            IdentityAlreadyExistsError: If the email is already registered
        """
        identity = Identity(
            email=email,
            password_hash=hash_password(password),
            display_name=display_name,
            email_verified=email_verified,
            disabled=disabled,
        )
        self._db.add(identity)

        try:
            await self._db.commit()
        except IntegrityError as e:
            await self._db.rollback()
            raise IdentityAlreadyExistsError(email) from e

        await self._db.refresh(identity)
        logger.info(f"Created identity: {identity.uid} - {identity.email}")
        return _to_record(identity)

    async def find_identity_by_email(self, email: str) -> IdentityRecord:
        """
        Raises:
            IdentityNotFoundError: If no identity has this email
        """
        identity = await self._get_by_email(email)
        if identity is None:
            raise IdentityNotFoundError(email)
        return _to_record(identity)

    async def update_identity(
        self,
        uid: str,
        *,
        password: str | None = None,
        display_name: str | None = None,
        disabled: bool | None = None,
    ) -> IdentityRecord:
        """
        Update the given fields of an identity; None leaves a field unchanged.

        Raises:
            IdentityNotFoundError: If the uid does not exist
        """
        identity = await self._db.get(Identity, uid)
        if identity is None:
            raise IdentityNotFoundError(uid)

        if password is not None:
            identity.password_hash = hash_password(password)
        if display_name is not None:
            identity.display_name = display_name
        if disabled is not None:
            identity.disabled = disabled

        await self._db.commit()
        await self._db.refresh(identity)
        logger.info(f"Updated identity: {identity.uid}")
        return _to_record(identity)

    async def verify_credentials(self, email: str, password: str) -> IdentityRecord | None:
        """Return the identity if the password matches, else None."""
        identity = await self._get_by_email(email)
        if identity is None or not verify_password(password, identity.password_hash):
            return None
        return _to_record(identity)


async def get_identity_provider(db: AsyncSession = Depends(get_db)) -> SqlIdentityProvider:
    """FastAPI dependency returning an identity provider bound to the request session."""
    return SqlIdentityProvider(db)
