# ruff: noqa: E501 - Long import paths in __init__.py re-exports
"""SQLAlchemy models for identity management."""

from shop_identity.infrastructure.persistence.sqlalchemy.models.password_reset_model import (
    PasswordResetModel,
)
from shop_identity.infrastructure.persistence.sqlalchemy.models.user_model import (
    UserModel,
)
from shop_identity.infrastructure.persistence.sqlalchemy.models.user_session_model import (
    UserSessionModel,
)

__all__ = [
    "PasswordResetModel",
    "UserModel",
    "UserSessionModel",
]
