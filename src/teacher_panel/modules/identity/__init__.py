"""
Identity module - Sign-in credentials shared with teacher profiles.
"""

from teacher_panel.modules.identity.models import Identity
from teacher_panel.modules.identity.ports import (
    IdentityAlreadyExistsError,
    IdentityNotFoundError,
    IdentityProvider,
    IdentityProviderError,
    IdentityRecord,
)
from teacher_panel.modules.identity.repository import SqlIdentityProvider, get_identity_provider

__all__ = [
    "Identity",
    "IdentityAlreadyExistsError",
    "IdentityNotFoundError",
    "IdentityProvider",
    "IdentityProviderError",
    "IdentityRecord",
    "SqlIdentityProvider",
    "get_identity_provider",
]
