"""
Teacher Applications Schemas

Typed requests produced by the sanitizer, and the response bodies of the
admin endpoints. Wire names are camelCase.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# ============================================
# Sanitized Requests
# ============================================


class ApplicationRequest(BaseModel):
    """A request addressing one application (reject, delete)."""

    model_config = ConfigDict(frozen=True)

    application_id: str = Field(..., min_length=1)


class ApproveTeacherRequest(ApplicationRequest):
    """
    A sanitized approval request.

    Empty override strings mean "not supplied".
    """

    email: str = Field(..., min_length=1)
    temp_password: str = Field(..., min_length=8, repr=False)
    full_name: str = ""
    school_name: str = ""
    country: str = ""
    force: bool = False


# ============================================
# Responses
# ============================================


class OkResponse(BaseModel):
    """Response for reject and delete."""

    ok: bool = True


class ApproveResponse(OkResponse):
    """Response after approving an application."""

    model_config = ConfigDict(populate_by_name=True)

    teacher_uid: str = Field(..., alias="teacherUid", description="Identity uid of the teacher")
    email: str = Field(..., description="Teacher email (lower-cased)")


class ApplicationRecordResponse(BaseModel):
    """
    An application record as stored.

    The intake process writes email, names, country and the timestamps, so
    their types are not ours to fix. status is normalized by the service.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: str
    email: Any = None
    full_name: Any = Field(None, alias="fullName")
    school_name: Any = Field(None, alias="schoolName")
    country: Any = None
    status: str = "pending"
    created_at: Any = Field(None, alias="createdAt")
    updated_at: Any = Field(None, alias="updatedAt")
    reviewed_at: str | None = Field(None, alias="reviewedAt")
    reviewed_by: str | None = Field(None, alias="reviewedBy")
    teacher_uid: str | None = Field(None, alias="teacherUid")
    previous_status: str | None = Field(None, alias="previousStatus")


class TeacherProfileResponse(BaseModel):
    """A teacher profile as stored."""

    model_config = ConfigDict(populate_by_name=True)

    uid: str
    email: str
    full_name: str = Field("", alias="fullName")
    school_name: str = Field("", alias="schoolName")
    country: str = ""
    status: str
    approved_at: str | None = Field(None, alias="approvedAt")
    approved_by: str | None = Field(None, alias="approvedBy")
    created_at: Any = Field(None, alias="createdAt")
    updated_at: str | None = Field(None, alias="updatedAt")
