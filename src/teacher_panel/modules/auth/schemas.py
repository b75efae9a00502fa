"""Authentication schemas."""

from typing import Any

from pydantic import BaseModel, field_validator

from teacher_panel.modules.teacher_applications.sanitizer import clean_string


class LoginRequest(BaseModel):
    """
    Login request schema.

    The email is normalized exactly like the approval sanitizer does
    (trimmed, lower-cased, no format check beyond that), so every identity
    approval can provision is able to sign in.
    """

    email: str
    password: str

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, value: Any) -> str:
        return clean_string(value).lower()


class LoginResponse(BaseModel):
    """Login response schema."""

    access_token: str
    token_type: str = "bearer"
    uid: str
    email: str
    display_name: str | None = None
