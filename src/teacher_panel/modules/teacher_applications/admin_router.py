"""
Teacher Applications Admin Router

API endpoints for administrators to review teacher applications.
All endpoints require a bearer token whose email is on the administrator
allow-list (ADMIN_EMAILS).

Endpoints:
- POST /admin/teacher-applications/approve - Approve and activate the teacher
- POST /admin/teacher-applications/reject - Reject application
- POST /admin/teacher-applications/delete - Delete application record
- GET /admin/teacher-applications/{application_id} - Get application record
- GET /admin/teachers/{uid} - Get teacher profile

Error bodies are {"detail": {"error": <KIND>, "message": <text>}}.
"""

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, status

from teacher_panel.core.auth import AdminGuard, CallerContext, get_admin_guard, get_caller_context
from teacher_panel.core.config import settings
from teacher_panel.core.errors import ApplicationServiceError
from teacher_panel.core.rate_limit import RateLimitExceeded, check_rate_limit
from teacher_panel.modules.documents.repository import SqlDocumentStore, get_document_store
from teacher_panel.modules.identity.repository import SqlIdentityProvider, get_identity_provider
from teacher_panel.modules.teacher_applications import service
from teacher_panel.modules.teacher_applications.models import ReapprovalPolicy
from teacher_panel.modules.teacher_applications.schemas import (
    ApplicationRecordResponse,
    ApproveResponse,
    OkResponse,
    TeacherProfileResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


# ============================================
# Rate Limiting Configuration
# ============================================

RATE_LIMIT_APPROVE = (10, 60)  # 10 approvals per minute
RATE_LIMIT_REJECT = (10, 60)
RATE_LIMIT_DELETE = (20, 60)

_ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    400: {"description": "Invalid argument - payload failed validation"},
    401: {"description": "Unauthenticated - missing or invalid token"},
    403: {"description": "Permission denied - not an administrator"},
    429: {"description": "Rate limit exceeded"},
    500: {"description": "Internal error - a collaborator failed"},
}


async def _authorize_and_rate_limit(
    guard: AdminGuard,
    caller: CallerContext | None,
    action: str,
    limit: int,
    window_seconds: int,
) -> None:
    """
    Run the admin guard, then check the rate limit for an admin action.

    Only verified administrators are counted, keyed on their uid, so
    anonymous and non-admin callers always get 401 / 403.

    Raises:
        HTTPException: 401 / 403 from the guard
        RateLimitExceeded: If rate limit is exceeded
    """
    try:
        guard.assert_admin(caller)
    except ApplicationServiceError as e:
        raise _handle_service_error(e) from e

    key = f"admin:{action}:{caller.uid}"
    if not await check_rate_limit(key, limit, window_seconds):
        logger.warning(
            f"Rate limit exceeded for {caller.uid} on action '{action}': "
            f"{limit}/{window_seconds}s"
        )
        raise RateLimitExceeded(limit, window_seconds)


# ============================================
# Helper Functions
# ============================================


def _handle_service_error(e: ApplicationServiceError) -> HTTPException:
    """Convert service errors to HTTPExceptions."""
    return HTTPException(
        status_code=e.status_code,
        detail={
            "error": e.error_code,
            "message": e.message,
        },
    )


def _internal_error() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail={
            "error": "INTERNAL",
            "message": "An unexpected error occurred.",
        },
    )


# ============================================
# Workflow Endpoints
# ============================================


@router.post(
    "/teacher-applications/approve",
    response_model=ApproveResponse,
    summary="Approve Teacher Application",
    description="""
Approve an application and activate the teacher.

1. Creates the teacher identity, or reuses the one already registered for
   the email (password reset to `tempPassword`, account re-enabled)
2. Writes `teachers/{uid}` with status `active`
3. Marks the application `approved`, recording `previousStatus`

Steps 2 and 3 are atomic. Step 1 is not part of that transaction.

**Body:** `applicationId`, `email`, `tempPassword` (8+ chars), optional
`fullName`, `schoolName`, `country`, `force`.

**Access:** Administrators only
""",
    responses={**_ERROR_RESPONSES, 404: {"description": "Application not found"}},
)
async def approve_application(
    payload: Any = Body(None),
    store: SqlDocumentStore = Depends(get_document_store),
    identities: SqlIdentityProvider = Depends(get_identity_provider),
    caller: CallerContext | None = Depends(get_caller_context),
    guard: AdminGuard = Depends(get_admin_guard),
) -> ApproveResponse:
    """Approve application and provision the teacher."""
    await _authorize_and_rate_limit(guard, caller, "approve", *RATE_LIMIT_APPROVE)

    try:
        result = await service.approve_teacher_application(
            store,
            identities,
            guard,
            caller,
            payload,
            reapproval_policy=ReapprovalPolicy(settings.reapproval_policy),
        )
    except ApplicationServiceError as e:
        raise _handle_service_error(e) from e
    except Exception as e:
        logger.exception(f"Error approving application: {e}")
        raise _internal_error() from e

    return ApproveResponse(teacher_uid=result["teacherUid"], email=result["email"])


@router.post(
    "/teacher-applications/reject",
    response_model=OkResponse,
    summary="Reject Teacher Application",
    description="""
Mark an application `rejected`. No identity or profile is touched.

**Body:** `applicationId`

**Access:** Administrators only
""",
    responses={**_ERROR_RESPONSES, 404: {"description": "Application not found"}},
)
async def reject_application(
    payload: Any = Body(None),
    store: SqlDocumentStore = Depends(get_document_store),
    caller: CallerContext | None = Depends(get_caller_context),
    guard: AdminGuard = Depends(get_admin_guard),
) -> OkResponse:
    """Reject an application."""
    await _authorize_and_rate_limit(guard, caller, "reject", *RATE_LIMIT_REJECT)

    try:
        await service.reject_teacher_application(store, guard, caller, payload)
    except ApplicationServiceError as e:
        raise _handle_service_error(e) from e
    except Exception as e:
        logger.exception(f"Error rejecting application: {e}")
        raise _internal_error() from e

    return OkResponse()


@router.post(
    "/teacher-applications/delete",
    response_model=OkResponse,
    summary="Delete Teacher Application",
    description="""
Delete an application record. Deleting an id that does not exist succeeds.
Teacher profiles and identities are kept.

**Body:** `applicationId`

**Access:** Administrators only
""",
    responses=_ERROR_RESPONSES,
)
async def delete_application(
    payload: Any = Body(None),
    store: SqlDocumentStore = Depends(get_document_store),
    caller: CallerContext | None = Depends(get_caller_context),
    guard: AdminGuard = Depends(get_admin_guard),
) -> OkResponse:
    """Delete an application record."""
    await _authorize_and_rate_limit(guard, caller, "delete", *RATE_LIMIT_DELETE)

    try:
        await service.delete_teacher_application(store, guard, caller, payload)
    except ApplicationServiceError as e:
        raise _handle_service_error(e) from e
    except Exception as e:
        logger.exception(f"Error deleting application: {e}")
        raise _internal_error() from e

    return OkResponse()


# ============================================
# Lookup Endpoints
# ============================================


@router.get(
    "/teacher-applications/{application_id}",
    response_model=ApplicationRecordResponse,
    summary="Get Teacher Application",
    responses={**_ERROR_RESPONSES, 404: {"description": "Application not found"}},
)
async def get_application(
    application_id: str,
    store: SqlDocumentStore = Depends(get_document_store),
    caller: CallerContext | None = Depends(get_caller_context),
    guard: AdminGuard = Depends(get_admin_guard),
) -> ApplicationRecordResponse:
    """Get an application record."""
    try:
        record = await service.get_teacher_application(store, guard, caller, application_id)
        return ApplicationRecordResponse.model_validate(record)
    except ApplicationServiceError as e:
        raise _handle_service_error(e) from e
    except Exception as e:
        logger.exception(f"Error reading application {application_id}: {e}")
        raise _internal_error() from e


@router.get(
    "/teachers/{uid}",
    response_model=TeacherProfileResponse,
    summary="Get Teacher Profile",
    responses={**_ERROR_RESPONSES, 404: {"description": "Teacher not found"}},
)
async def get_teacher(
    uid: str,
    store: SqlDocumentStore = Depends(get_document_store),
    caller: CallerContext | None = Depends(get_caller_context),
    guard: AdminGuard = Depends(get_admin_guard),
) -> TeacherProfileResponse:
    """Get a teacher profile."""
    try:
        profile = await service.get_teacher_profile(store, guard, caller, uid)
        return TeacherProfileResponse.model_validate(profile)
    except ApplicationServiceError as e:
        raise _handle_service_error(e) from e
    except Exception as e:
        logger.exception(f"Error reading teacher {uid}: {e}")
        raise _internal_error() from e
