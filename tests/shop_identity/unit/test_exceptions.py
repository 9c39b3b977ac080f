"""Unit tests for the identity error taxonomy."""

import pytest

from shop_identity.exceptions import (
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
    InvalidTokenError,
    NotFoundError,
    SessionNotFoundError,
    UserNotFoundError,
    ValidationError,
    WeakPasswordError,
)


@pytest.mark.parametrize(
    ("error", "base", "code", "status"),
    [
        (ValidationError(), IdentityError, ErrorCode.VALIDATION_ERROR, 400),
        (WeakPasswordError(["too short"]), ValidationError, ErrorCode.WEAK_PASSWORD, 400),
        (EmailAlreadyExistsError("a@b.co"), ConflictError, ErrorCode.EMAIL_ALREADY_EXISTS, 409),
        (InvalidCredentialsError(), AuthenticationError, ErrorCode.INVALID_CREDENTIALS, 401),
        (AccessPendingError(), AuthenticationError, ErrorCode.ACCESS_PENDING, 403),
        (AccessRejectedError(), AuthenticationError, ErrorCode.ACCESS_REJECTED, 403),
        (UserNotFoundError(1), NotFoundError, ErrorCode.USER_NOT_FOUND, 404),
        (SessionNotFoundError(1), NotFoundError, ErrorCode.SESSION_NOT_FOUND, 404),
        (InvalidTokenError(), IdentityError, ErrorCode.INVALID_TOKEN, 401),
        (ExpiredTokenError(), InvalidTokenError, ErrorCode.EXPIRED_TOKEN, 401),
        (InternalError(), IdentityError, ErrorCode.INTERNAL_ERROR, 500),
    ],
)
def test_codes_and_statuses(error, base, code, status):
    assert isinstance(error, base)
    assert error.code == code
    assert error.http_status == status


def test_weak_password_lists_all_rules():
    error = WeakPasswordError(["rule one", "rule two"])

    assert error.errors == ["rule one", "rule two"]
    assert str(error) == "Password does not meet requirements: rule one, rule two"
    assert error.details == {"errors": ["rule one", "rule two"]}


def test_validation_error_defaults_errors_to_message():
    assert ValidationError("Passwords do not match").errors == ["Passwords do not match"]


def test_login_failures_are_distinguishable_by_code_only():
    assert str(InvalidCredentialsError()) == "Invalid credentials"
    assert str(AccessPendingError()) == "Access pending approval"
    assert str(AccessRejectedError()) == "Access rejected"


def test_repr_includes_code():
    assert "USER_NOT_FOUND" in repr(UserNotFoundError(5))
