"""Abstract repository interfaces for sessions and password resets."""

from shop_identity.repositories.password_reset_repository import (
    PasswordResetData,
    PasswordResetRepository,
)
from shop_identity.repositories.user_session_repository import (
    UserSessionData,
    UserSessionRepository,
)

__all__ = [
    "PasswordResetData",
    "PasswordResetRepository",
    "UserSessionData",
    "UserSessionRepository",
]
