"""
Teacher Applications Input Sanitizer

Turns a raw JSON payload into a typed request. Pure and deterministic:
string fields are trimmed, anything that is not a string reads as "", and
the first rule a payload breaks is reported as an InvalidArgumentError
naming the field.

Callers must run the authorization guard first, so that validation
messages are never shown to unauthenticated callers.
"""

from collections.abc import Mapping
from typing import Any

from teacher_panel.core.errors import InvalidArgumentError
from teacher_panel.modules.teacher_applications.models import MIN_TEMP_PASSWORD_LENGTH
from teacher_panel.modules.teacher_applications.schemas import (
    ApplicationRequest,
    ApproveTeacherRequest,
)


def clean_string(value: Any) -> str:
    """Trim a string; any other value becomes the empty string."""
    return value.strip() if isinstance(value, str) else ""


def _field(payload: Any, name: str) -> str:
    if not isinstance(payload, Mapping):
        return ""
    return clean_string(payload.get(name))


def _require_application_id(payload: Any) -> str:
    application_id = _field(payload, "applicationId")
    if not application_id:
        raise InvalidArgumentError("applicationId", "Missing applicationId.")
    return application_id


def sanitize_application_request(payload: Any) -> ApplicationRequest:
    """
    Sanitize a reject or delete payload.

    Raises:
        InvalidArgumentError: If applicationId is missing or blank
    """
    return ApplicationRequest(application_id=_require_application_id(payload))


def sanitize_approve_request(payload: Any) -> ApproveTeacherRequest:
    """
    Sanitize an approval payload.

    Rules, checked in order:
    - applicationId is required
    - email is required and must contain "@"; it is lower-cased
    - tempPassword is required and at least 8 characters long

    fullName, schoolName and country are optional overrides. force is only
    honored when it is the boolean true.

    Raises:
        InvalidArgumentError: Naming the first field that breaks a rule
    """
    application_id = _require_application_id(payload)

    email = _field(payload, "email").lower()
    if not email or "@" not in email:
        raise InvalidArgumentError("email", "Invalid email.")

    temp_password = _field(payload, "tempPassword")
    if len(temp_password) < MIN_TEMP_PASSWORD_LENGTH:
        raise InvalidArgumentError(
            "tempPassword",
            f"Temp password must be at least {MIN_TEMP_PASSWORD_LENGTH} characters.",
        )

    force = isinstance(payload, Mapping) and payload.get("force") is True

    return ApproveTeacherRequest(
        application_id=application_id,
        email=email,
        temp_password=temp_password,
        full_name=_field(payload, "fullName"),
        school_name=_field(payload, "schoolName"),
        country=_field(payload, "country"),
        force=force,
    )
