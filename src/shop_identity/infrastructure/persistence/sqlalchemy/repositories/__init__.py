# ruff: noqa: E501 - Long import paths in __init__.py re-exports
"""SQLAlchemy repository implementations for identity management."""

from shop_identity.infrastructure.persistence.sqlalchemy.repositories.password_reset_repository import (
    PasswordResetRepositorySQLAlchemy,
)
from shop_identity.infrastructure.persistence.sqlalchemy.repositories.user_repository import (
    UserRepositorySQLAlchemy,
)
from shop_identity.infrastructure.persistence.sqlalchemy.repositories.user_session_repository import (
    UserSessionRepositorySQLAlchemy,
)

__all__ = [
    "PasswordResetRepositorySQLAlchemy",
    "UserRepositorySQLAlchemy",
    "UserSessionRepositorySQLAlchemy",
]
