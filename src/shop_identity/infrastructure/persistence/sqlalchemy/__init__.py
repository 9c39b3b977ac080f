"""SQLAlchemy implementation for shop_identity persistence.

Provides:
- IdentityBase: Declarative base for identity models
- UserModel, UserSessionModel, PasswordResetModel: table models
- UserRepositorySQLAlchemy: Repository implementation for users
- UserSessionRepositorySQLAlchemy: Repository implementation for sessions
- PasswordResetRepositorySQLAlchemy: Repository implementation for resets
- SQLAlchemyUnitOfWork: transaction boundary over the three repositories
"""

from shop_identity.infrastructure.persistence.sqlalchemy.base import IdentityBase
from shop_identity.infrastructure.persistence.sqlalchemy.database import (
    create_engine,
    create_engine_from_settings,
    create_session_maker,
    create_tables,
    drop_tables,
)
from shop_identity.infrastructure.persistence.sqlalchemy.models import (
    PasswordResetModel,
    UserModel,
    UserSessionModel,
)
from shop_identity.infrastructure.persistence.sqlalchemy.repositories import (
    PasswordResetRepositorySQLAlchemy,
    UserRepositorySQLAlchemy,
    UserSessionRepositorySQLAlchemy,
)
from shop_identity.infrastructure.persistence.sqlalchemy.unit_of_work import (
    SQLAlchemyUnitOfWork,
)

__all__ = [
    "IdentityBase",
    "PasswordResetModel",
    "PasswordResetRepositorySQLAlchemy",
    "SQLAlchemyUnitOfWork",
    "UserModel",
    "UserRepositorySQLAlchemy",
    "UserSessionModel",
    "UserSessionRepositorySQLAlchemy",
    "create_engine",
    "create_engine_from_settings",
    "create_session_maker",
    "create_tables",
    "drop_tables",
]
