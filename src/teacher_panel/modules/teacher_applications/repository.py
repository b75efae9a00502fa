"""
Teacher Applications Repository

Record access for the teacherApplications and teachers collections, built on
the document store port. Only data shaping lives here; the decisions are
made in the service layer.
"""

from typing import Any

from teacher_panel.modules.documents.ports import SERVER_TIMESTAMP, DocumentStore, DocumentWrite
from teacher_panel.modules.teacher_applications.models import (
    APPLICATIONS_COLLECTION,
    TEACHERS_COLLECTION,
    ApplicationStatus,
    TeacherStatus,
)
from teacher_panel.modules.teacher_applications.schemas import ApproveTeacherRequest


async def get_application(store: DocumentStore, application_id: str) -> dict[str, Any] | None:
    """Get an application record by id."""
    return await store.get(APPLICATIONS_COLLECTION, application_id)


async def get_teacher(store: DocumentStore, uid: str) -> dict[str, Any] | None:
    """Get a teacher profile by identity uid."""
    return await store.get(TEACHERS_COLLECTION, uid)


def current_status(application: dict[str, Any]) -> str:
    """Status of a record, lower-cased; records without one are pending."""
    status = application.get("status")
    if not isinstance(status, str) or not status:
        return ApplicationStatus.PENDING.value
    return status.lower()


def _first_non_empty(*values: Any) -> str:
    for value in values:
        if isinstance(value, str) and value:
            return value
    return ""


def build_teacher_profile_write(
    request: ApproveTeacherRequest,
    application: dict[str, Any],
    existing_profile: dict[str, Any] | None,
    uid: str,
    admin_email: str,
) -> DocumentWrite:
    """
    Merge-write for teachers/{uid}.

    Overrides from the request win over values on the application, which
    win over the empty string. createdAt keeps the profile's original value,
    then the application's, else the commit time.
    """
    created_at = (existing_profile or {}).get("createdAt") or application.get("createdAt")

    return DocumentWrite(
        collection=TEACHERS_COLLECTION,
        doc_id=uid,
        data={
            "uid": uid,
            "email": request.email,
            "fullName": _first_non_empty(request.full_name, application.get("fullName")),
            "schoolName": _first_non_empty(request.school_name, application.get("schoolName")),
            "country": _first_non_empty(request.country, application.get("country")),
            "status": TeacherStatus.ACTIVE.value,
            "approvedAt": SERVER_TIMESTAMP,
            "approvedBy": admin_email,
            "updatedAt": SERVER_TIMESTAMP,
            "createdAt": created_at or SERVER_TIMESTAMP,
        },
    )


def build_approval_write(
    application_id: str,
    uid: str,
    admin_email: str,
    previous_status: str,
) -> DocumentWrite:
    """Merge-write marking teacherApplications/{id} approved."""
    return DocumentWrite(
        collection=APPLICATIONS_COLLECTION,
        doc_id=application_id,
        data={
            "status": ApplicationStatus.APPROVED.value,
            "reviewedAt": SERVER_TIMESTAMP,
            "reviewedBy": admin_email,
            "teacherUid": uid,
            "updatedAt": SERVER_TIMESTAMP,
            "previousStatus": previous_status,
        },
    )


def build_rejection_write(application_id: str, admin_email: str) -> DocumentWrite:
    """Merge-write marking teacherApplications/{id} rejected."""
    return DocumentWrite(
        collection=APPLICATIONS_COLLECTION,
        doc_id=application_id,
        data={
            "status": ApplicationStatus.REJECTED.value,
            "reviewedAt": SERVER_TIMESTAMP,
            "reviewedBy": admin_email,
            "updatedAt": SERVER_TIMESTAMP,
        },
    )


async def delete_application(store: DocumentStore, application_id: str) -> None:
    """Delete an application record; a missing record is not an error."""
    await store.delete(APPLICATIONS_COLLECTION, application_id)
