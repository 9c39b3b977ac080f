"""Identity exceptions and error codes.

Every failure the core reports is one of the classes below. Each carries a
stable ``ErrorCode`` so that collaborators (HTTP layer, CLI, workers) can
map failures without string matching. Raw storage errors never leave the
core: the unit of work converts them into ``InternalError``.
"""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Stable error codes for API clients.

    These codes are part of the public contract. Should not be changed.
    """

    # Validation Errors (400)
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_EMAIL = "INVALID_EMAIL"
    WEAK_PASSWORD = "WEAK_PASSWORD"

    # Conflict Errors (409)
    CONFLICT = "CONFLICT"
    EMAIL_ALREADY_EXISTS = "EMAIL_ALREADY_EXISTS"

    # Authentication Errors (401/403)
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    ACCESS_PENDING = "ACCESS_PENDING"
    ACCESS_REJECTED = "ACCESS_REJECTED"

    # Not Found Errors (404)
    NOT_FOUND = "NOT_FOUND"
    USER_NOT_FOUND = "USER_NOT_FOUND"
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"

    # Token Errors (401)
    INVALID_TOKEN = "INVALID_TOKEN"
    EXPIRED_TOKEN = "EXPIRED_TOKEN"

    # General Errors
    INTERNAL_ERROR = "INTERNAL_ERROR"


# HTTP status a collaborator should use for each code
ERROR_STATUS: dict[ErrorCode, int] = {
    ErrorCode.VALIDATION_ERROR: 400,
    ErrorCode.INVALID_EMAIL: 400,
    ErrorCode.WEAK_PASSWORD: 400,
    ErrorCode.CONFLICT: 409,
    ErrorCode.EMAIL_ALREADY_EXISTS: 409,
    ErrorCode.INVALID_CREDENTIALS: 401,
    ErrorCode.ACCESS_PENDING: 403,
    ErrorCode.ACCESS_REJECTED: 403,
    ErrorCode.NOT_FOUND: 404,
    ErrorCode.USER_NOT_FOUND: 404,
    ErrorCode.SESSION_NOT_FOUND: 404,
    ErrorCode.INVALID_TOKEN: 401,
    ErrorCode.EXPIRED_TOKEN: 401,
    ErrorCode.INTERNAL_ERROR: 500,
}


class IdentityError(Exception):
    """Base exception for all identity errors.

    Attributes
    ----------
    message
        Human-readable error message (safe for end users)
    code
        Stable error code for programmatic handling
    details
        Optional additional context (logged but not exposed to users)
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    @property
    def http_status(self) -> int:
        return ERROR_STATUS.get(self.code, 500)

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"code={self.code.value!r}, "
            f"details={self.details!r})"
        )


# -----------------------------------------------------------------------------
# Validation
# -----------------------------------------------------------------------------


class ValidationError(IdentityError):
    """Raised when input is malformed. The caller can fix it and retry."""

    def __init__(
        self,
        message: str = "Invalid input",
        errors: list[str] | None = None,
        code: ErrorCode = ErrorCode.VALIDATION_ERROR,
    ) -> None:
        self.errors = list(errors) if errors else [message]
        super().__init__(message, code, {"errors": self.errors})


class InvalidEmailError(ValidationError):
    """Raised when email format is invalid."""

    def __init__(self, message: str = "Invalid email format") -> None:
        super().__init__(message, code=ErrorCode.INVALID_EMAIL)


class WeakPasswordError(ValidationError):
    """Raised when a password doesn't meet strength requirements.

    ``errors`` lists every violated rule, not just the first one.
    """

    def __init__(
        self,
        errors: list[str],
        message: str = "Password does not meet requirements",
    ) -> None:
        super().__init__(
            f"{message}: {', '.join(errors)}" if errors else message,
            errors=errors,
            code=ErrorCode.WEAK_PASSWORD,
        )


# -----------------------------------------------------------------------------
# Conflict
# -----------------------------------------------------------------------------


class ConflictError(IdentityError):
    """Raised when an operation conflicts with existing state."""

    def __init__(
        self,
        message: str = "Conflict with existing state",
        code: ErrorCode = ErrorCode.CONFLICT,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class EmailAlreadyExistsError(ConflictError):
    """Email already registered."""

    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__(
            "A user with this email already exists",
            ErrorCode.EMAIL_ALREADY_EXISTS,
            {"email": email},
        )


# -----------------------------------------------------------------------------
# Authentication
# -----------------------------------------------------------------------------


class AuthenticationError(IdentityError):
    """Base for login failures."""

    def __init__(
        self,
        message: str = "Authentication failed",
        code: ErrorCode = ErrorCode.INVALID_CREDENTIALS,
    ) -> None:
        super().__init__(message, code)


class InvalidCredentialsError(AuthenticationError):
    """Unknown email, inactive account or wrong password.

    The three causes share one message on purpose.
    """

    def __init__(self, message: str = "Invalid credentials") -> None:
        super().__init__(message, ErrorCode.INVALID_CREDENTIALS)


class AccessPendingError(AuthenticationError):
    """Backoffice access has not been approved yet."""

    def __init__(self, message: str = "Access pending approval") -> None:
        super().__init__(message, ErrorCode.ACCESS_PENDING)


class AccessRejectedError(AuthenticationError):
    """Backoffice access was rejected by an operator."""

    def __init__(self, message: str = "Access rejected") -> None:
        super().__init__(message, ErrorCode.ACCESS_REJECTED)


# -----------------------------------------------------------------------------
# Not found
# -----------------------------------------------------------------------------


class NotFoundError(IdentityError):
    """Raised when a referenced entity does not exist."""

    def __init__(
        self,
        message: str = "Not found",
        code: ErrorCode = ErrorCode.NOT_FOUND,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class UserNotFoundError(NotFoundError):
    """User not found."""

    def __init__(self, user_id: int | str) -> None:
        self.user_id = user_id
        super().__init__(
            f"User not found: {user_id}",
            ErrorCode.USER_NOT_FOUND,
            {"user_id": user_id},
        )


class SessionNotFoundError(NotFoundError):
    """Session not found."""

    def __init__(self, session_id: int) -> None:
        self.session_id = session_id
        super().__init__(
            f"Session not found: {session_id}",
            ErrorCode.SESSION_NOT_FOUND,
            {"session_id": session_id},
        )


# -----------------------------------------------------------------------------
# Tokens
# -----------------------------------------------------------------------------


class InvalidTokenError(IdentityError):
    """Raised when a bearer or reset token is invalid, unknown or malformed."""

    def __init__(
        self,
        message: str = "Invalid token",
        code: ErrorCode = ErrorCode.INVALID_TOKEN,
    ) -> None:
        super().__init__(message, code)


class ExpiredTokenError(InvalidTokenError):
    """Raised when a bearer or reset token is past its expiry."""

    def __init__(self, message: str = "Token has expired") -> None:
        super().__init__(message, ErrorCode.EXPIRED_TOKEN)


# -----------------------------------------------------------------------------
# Internal
# -----------------------------------------------------------------------------


class InternalError(IdentityError):
    """Unclassified failure (storage outage, driver error).

    The message is generic; the original exception is chained and logged.
    """

    def __init__(self, message: str = "An internal error occurred") -> None:
        super().__init__(message, ErrorCode.INTERNAL_ERROR)
