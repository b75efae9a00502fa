"""Authentication router."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from teacher_panel.core.security import create_access_token
from teacher_panel.modules.auth.schemas import LoginRequest, LoginResponse
from teacher_panel.modules.identity.repository import SqlIdentityProvider, get_identity_provider

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/login", response_model=LoginResponse)
async def login(
    credentials: LoginRequest,
    identities: SqlIdentityProvider = Depends(get_identity_provider),
) -> LoginResponse:
    """
    Authenticate an identity and return an access token.

    Teachers sign in with the temp password set at approval; administrators
    sign in the same way and are recognized by their email.

    Raises:
        HTTPException 401: Invalid credentials
        HTTPException 403: Identity disabled
    """
    email = credentials.email
    identity = await identities.verify_credentials(email, credentials.password)

    if identity is None:
        logger.warning(f"Failed login for: {email}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={
                "error": "INVALID_CREDENTIALS",
                "message": "Invalid email or password.",
            },
        )

    if identity.disabled:
        logger.warning(f"Login attempt for disabled identity: {email}")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail={
                "error": "ACCOUNT_DISABLED",
                "message": "Your account has been disabled.",
            },
        )

    access_token = create_access_token(
        subject=identity.uid,
        additional_claims={
            "email": identity.email,
            "email_verified": identity.email_verified,
            "name": identity.display_name,
        },
    )

    logger.info(f"Identity signed in: {identity.email}")

    return LoginResponse(
        access_token=access_token,
        uid=identity.uid,
        email=identity.email,
        display_name=identity.display_name,
    )
