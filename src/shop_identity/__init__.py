"""shop_identity - authentication and backoffice access core.

Registration, login gated by backoffice approval, bcrypt password
hashing, JWT bearer tokens, session bookkeeping and single-use password
reset tokens, persisted with async SQLAlchemy.
"""

from shop_identity.bootstrap import AuthCore, configure_logging, create_auth_core
from shop_identity.exceptions import (
    ERROR_STATUS,
    AccessPendingError,
    AccessRejectedError,
    AuthenticationError,
    ConflictError,
    EmailAlreadyExistsError,
    ErrorCode,
    ExpiredTokenError,
    IdentityError,
    InternalError,
    InvalidCredentialsError,
    InvalidEmailError,
    InvalidTokenError,
    NotFoundError,
    SessionNotFoundError,
    UserNotFoundError,
    ValidationError,
    WeakPasswordError,
)
from shop_identity.schemas import (
    AuthResult,
    PurgeResult,
    ResetTicket,
    TokenPayload,
    UserProfile,
)

__all__ = [
    "ERROR_STATUS",
    "AccessPendingError",
    "AccessRejectedError",
    "AuthCore",
    "AuthResult",
    "AuthenticationError",
    "ConflictError",
    "EmailAlreadyExistsError",
    "ErrorCode",
    "ExpiredTokenError",
    "IdentityError",
    "InternalError",
    "InvalidCredentialsError",
    "InvalidEmailError",
    "InvalidTokenError",
    "NotFoundError",
    "PurgeResult",
    "ResetTicket",
    "SessionNotFoundError",
    "TokenPayload",
    "UserNotFoundError",
    "UserProfile",
    "ValidationError",
    "WeakPasswordError",
    "configure_logging",
    "create_auth_core",
]
