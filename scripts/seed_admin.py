"""
Seed Administrator Identity

Creates a sign-in identity for an administrator so they can obtain a token
from POST /api/v1/auth/login. The email must also be listed in ADMIN_EMAILS
for the admin endpoints to accept it.

Usage:
    python scripts/seed_admin.py admin@example.com
"""

import asyncio
import getpass
import sys

from teacher_panel.core.config import settings
from teacher_panel.core.database import async_session_maker, close_db, init_db
from teacher_panel.modules.identity.ports import IdentityAlreadyExistsError
from teacher_panel.modules.identity.repository import SqlIdentityProvider


async def seed_admin(email: str, password: str) -> None:
    """Create the administrator identity if it doesn't exist."""
    await init_db()

    try:
        async with async_session_maker() as db:
            identities = SqlIdentityProvider(db)
            try:
                identity = await identities.create_identity(
                    email=email,
                    password=password,
                    display_name="Administrator",
                    email_verified=True,
                )
                print("Administrator identity created successfully!")
            except IdentityAlreadyExistsError:
                identity = await identities.find_identity_by_email(email)
                print(f"Administrator identity already exists: {email}")

            print(f"  Email: {identity.email}")
            print(f"  UID: {identity.uid}")

        if email not in settings.admin_email_list:
            print(f"  WARNING: {email} is not in ADMIN_EMAILS yet")
    finally:
        await close_db()


if __name__ == "__main__":
    if len(sys.argv) != 2:
        print(__doc__)
        sys.exit(1)

    admin_email = sys.argv[1].strip().lower()
    admin_password = getpass.getpass("Password: ")
    if len(admin_password) < 8:
        print("Password must be at least 8 characters.")
        sys.exit(1)

    asyncio.run(seed_admin(admin_email, admin_password))
