"""
Teacher Applications Service Layer

Administrator workflows that review teacher applications.

This module implements:
1. Approval:
   - Provision the teacher's identity (create, or reuse on duplicate email)
   - Write teachers/{uid} and mark the application approved in one
     transaction
2. Rejection:
   - Mark the application rejected; no identity or profile side effects
3. Deletion:
   - Remove the application record only
4. Lookups for the admin panel (application, teacher profile)

Every operation runs the AdminGuard first and sanitizes the payload second.

Consistency:
- Identity provisioning is not part of the document transaction. If the
  transaction fails afterwards, the identity stays provisioned and the
  application stays unapproved. Re-running the approval is safe because
  provisioning reuses the existing identity.
- No locking: concurrent approvals of one application both succeed and the
  last transaction wins.
- The existing teacher profile (for its createdAt) is read before the
  transaction, not inside it. Two concurrent first approvals for one uid
  may therefore both stamp createdAt with their own commit time; the last
  transaction wins. Later approvals see the stored value and keep it.
"""

import logging
from typing import Any

from teacher_panel.core.auth import AdminGuard, CallerContext
from teacher_panel.core.errors import FailedPreconditionError, InternalError, NotFoundError
from teacher_panel.modules.documents.ports import DocumentStore, DocumentStoreError
from teacher_panel.modules.identity.ports import (
    IdentityAlreadyExistsError,
    IdentityProvider,
    IdentityRecord,
)
from teacher_panel.modules.teacher_applications import repository
from teacher_panel.modules.teacher_applications.models import (
    ApplicationStatus,
    ReapprovalPolicy,
)
from teacher_panel.modules.teacher_applications.sanitizer import (
    sanitize_application_request,
    sanitize_approve_request,
)
from teacher_panel.modules.teacher_applications.schemas import ApproveTeacherRequest

logger = logging.getLogger(__name__)


async def provision_identity(
    identities: IdentityProvider,
    request: ApproveTeacherRequest,
) -> IdentityRecord:
    """
    Create the teacher's identity, or reuse the one registered for the email.

    On reuse the password is reset to the temp password, the display name
    is replaced only when a full name was supplied, and the identity is
    re-enabled.

    Raises:
        InternalError: If the provider fails for any other reason
    """
    display_name = request.full_name or None

    try:
        return await identities.create_identity(
            email=request.email,
            password=request.temp_password,
            display_name=display_name,
            email_verified=False,
            disabled=False,
        )
    except IdentityAlreadyExistsError:
        logger.info(f"Identity for {request.email} already exists, reusing it")
    except Exception as e:
        logger.error(f"Identity creation failed for {request.email}: {e}", exc_info=True)
        raise InternalError("Failed to create teacher user.") from e

    try:
        existing = await identities.find_identity_by_email(request.email)
        return await identities.update_identity(
            existing.uid,
            password=request.temp_password,
            display_name=display_name or existing.display_name,
            disabled=False,
        )
    except Exception as e:
        logger.error(f"Identity reuse failed for {request.email}: {e}", exc_info=True)
        raise InternalError("Failed to create teacher user.") from e


async def _load_application(store: DocumentStore, application_id: str) -> dict[str, Any]:
    try:
        application = await repository.get_application(store, application_id)
    except DocumentStoreError as e:
        raise InternalError("Failed to read application.") from e

    if application is None:
        logger.warning(f"Application not found: {application_id}")
        raise NotFoundError("Application not found.")
    return application


async def approve_teacher_application(
    store: DocumentStore,
    identities: IdentityProvider,
    guard: AdminGuard,
    caller: CallerContext | None,
    payload: Any,
    *,
    reapproval_policy: ReapprovalPolicy = ReapprovalPolicy.ALLOW,
) -> dict[str, Any]:
    """
    Approve a teacher application and activate the teacher.

    Steps:
    1. Authorize the caller and sanitize the payload
    2. Load the application (its status is kept as previousStatus)
    3. Provision the identity (outside the transaction)
    4. Write teachers/{uid} and the approved application atomically

    Re-approving an approved or rejected application is allowed under
    ReapprovalPolicy.ALLOW. Under REQUIRE_FORCE the payload must carry
    force=true.

    Args:
        store: Document store
        identities: Identity provider
        guard: Administrator guard
        caller: Verified caller, or None
        payload: Raw request payload

    Returns:
        {"ok": True, "teacherUid": ..., "email": ...}

    Raises:
        UnauthenticatedError / PermissionDeniedError: From the guard
        InvalidArgumentError: If the payload is invalid
        NotFoundError: If the application does not exist
        FailedPreconditionError: Re-approval without force under REQUIRE_FORCE
        InternalError: If the identity provider or document store fails
    """
    admin_email = guard.assert_admin(caller)
    request = sanitize_approve_request(payload)

    logger.info(f"Admin {admin_email} approving application {request.application_id}")

    application = await _load_application(store, request.application_id)
    previous_status = repository.current_status(application)

    if (
        reapproval_policy == ReapprovalPolicy.REQUIRE_FORCE
        and previous_status != ApplicationStatus.PENDING.value
        and not request.force
    ):
        logger.warning(
            f"Refusing to re-approve application {request.application_id}: "
            f"status={previous_status}, force not set"
        )
        raise FailedPreconditionError(
            f"Application is already {previous_status}. Pass force=true to approve it again."
        )

    identity = await provision_identity(identities, request)
    teacher_uid = identity.uid

    try:
        existing_profile = await repository.get_teacher(store, teacher_uid)
        await store.transactional_write(
            [
                repository.build_teacher_profile_write(
                    request, application, existing_profile, teacher_uid, admin_email
                ),
                repository.build_approval_write(
                    request.application_id, teacher_uid, admin_email, previous_status
                ),
            ]
        )
    except DocumentStoreError as e:
        logger.error(
            f"Approval of {request.application_id} failed after identity {teacher_uid} "
            f"was provisioned; re-run the approval to recover: {e}"
        )
        raise InternalError("Failed to save teacher profile.") from e

    logger.info(
        f"Application {request.application_id} approved by {admin_email}. "
        f"Teacher: {teacher_uid} (previous status: {previous_status})"
    )

    return {
        "ok": True,
        "teacherUid": teacher_uid,
        "email": request.email,
    }


async def reject_teacher_application(
    store: DocumentStore,
    guard: AdminGuard,
    caller: CallerContext | None,
    payload: Any,
) -> dict[str, Any]:
    """
    Mark an application rejected.

    Rejecting an already rejected application re-stamps the review fields.

    Raises:
        UnauthenticatedError / PermissionDeniedError: From the guard
        InvalidArgumentError: If applicationId is missing
        NotFoundError: If the application does not exist
        InternalError: If the document store fails
    """
    admin_email = guard.assert_admin(caller)
    request = sanitize_application_request(payload)

    logger.info(f"Admin {admin_email} rejecting application {request.application_id}")

    await _load_application(store, request.application_id)

    try:
        await store.transactional_write(
            [repository.build_rejection_write(request.application_id, admin_email)]
        )
    except DocumentStoreError as e:
        raise InternalError("Failed to update application.") from e

    logger.info(f"Application {request.application_id} rejected by {admin_email}")
    return {"ok": True}


async def delete_teacher_application(
    store: DocumentStore,
    guard: AdminGuard,
    caller: CallerContext | None,
    payload: Any,
) -> dict[str, Any]:
    """
    Delete an application record.

    Teacher profiles and identities are never touched. Deleting an id that
    does not exist succeeds.

    Raises:
        UnauthenticatedError / PermissionDeniedError: From the guard
        InvalidArgumentError: If applicationId is missing
        InternalError: If the document store fails
    """
    admin_email = guard.assert_admin(caller)
    request = sanitize_application_request(payload)

    try:
        await repository.delete_application(store, request.application_id)
    except DocumentStoreError as e:
        raise InternalError("Failed to delete application.") from e

    logger.info(f"Application {request.application_id} deleted by {admin_email}")
    return {"ok": True}


async def get_teacher_application(
    store: DocumentStore,
    guard: AdminGuard,
    caller: CallerContext | None,
    application_id: str,
) -> dict[str, Any]:
    """Get an application record for the admin panel."""
    guard.assert_admin(caller)
    request = sanitize_application_request({"applicationId": application_id})
    application = await _load_application(store, request.application_id)
    return {
        **application,
        "id": request.application_id,
        "status": repository.current_status(application),
    }


async def get_teacher_profile(
    store: DocumentStore,
    guard: AdminGuard,
    caller: CallerContext | None,
    uid: str,
) -> dict[str, Any]:
    """Get a teacher profile for the admin panel."""
    guard.assert_admin(caller)

    try:
        profile = await repository.get_teacher(store, uid.strip())
    except DocumentStoreError as e:
        raise InternalError("Failed to read teacher profile.") from e

    if profile is None:
        logger.warning(f"Teacher not found: {uid}")
        raise NotFoundError("Teacher not found.")
    return profile
