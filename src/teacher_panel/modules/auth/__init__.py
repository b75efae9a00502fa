"""Authentication module."""

from teacher_panel.modules.auth.router import router
from teacher_panel.modules.auth.schemas import LoginRequest, LoginResponse

__all__ = ["router", "LoginRequest", "LoginResponse"]
