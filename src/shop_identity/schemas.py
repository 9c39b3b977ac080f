"""Identity schemas and data structures.

Frozen dataclasses for data leaving the core, and pydantic models for
request-shaped input that collaborators validate before calling a service.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, model_validator

from shop_identity.domain.user import BackofficeStatus, User


@dataclass(frozen=True)
class TokenPayload:
    """Decoded bearer token claims.

    Attributes
    ----------
    user_id
        The surrogate id of the user
    email
        The user's email address at issuance time
    first_name, last_name
        Profile names at issuance time
    exp
        Token expiration timestamp
    issued_at
        Token issuance timestamp
    """

    user_id: int
    email: str
    first_name: str
    last_name: str
    exp: datetime
    issued_at: datetime | None = None


@dataclass(frozen=True)
class UserProfile:
    """Public projection of a user (never carries the password hash)."""

    user_id: int
    email: str
    first_name: str
    last_name: str
    full_name: str
    is_active: bool
    backoffice_status: BackofficeStatus
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_user(cls, user: User) -> UserProfile:
        if user.user_id is None:
            msg = "Cannot project a user that has not been stored"
            raise ValueError(msg)
        return cls(
            user_id=user.user_id,
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
            full_name=user.full_name,
            is_active=user.is_active,
            backoffice_status=user.backoffice_status,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


@dataclass(frozen=True)
class AuthResult:
    """User projection plus the bearer token issued for it."""

    user: UserProfile
    token: str


@dataclass(frozen=True)
class ResetTicket:
    """Data a mail collaborator needs to send a reset link.

    ``token`` is the plaintext secret; it is returned exactly once and is
    never stored.
    """

    token: str
    display_name: str
    email: str
    expires_at: datetime


@dataclass(frozen=True)
class PurgeResult:
    """Rows removed by an expiry sweep."""

    sessions: int
    resets: int


# -----------------------------------------------------------------------------
# Boundary input models
# -----------------------------------------------------------------------------


class _Input(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class RegisterInput(_Input):
    """Registration request body."""

    email: EmailStr
    password: str = Field(..., min_length=1, max_length=128)
    confirm_password: str | None = None
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        json_schema_extra={
            "example": {
                "email": "alice@example.com",
                "password": "Secret123",
                "confirm_password": "Secret123",
                "first_name": "Alice",
                "last_name": "Martin",
            },
        },
    )


class LoginInput(_Input):
    email: EmailStr
    password: str = Field(..., min_length=1)


class ChangePasswordInput(_Input):
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=1, max_length=128)


class ForgotPasswordInput(_Input):
    email: EmailStr


class ConfirmResetInput(_Input):
    token: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=1, max_length=128)
    confirm_password: str | None = None

    @model_validator(mode="after")
    def _passwords_match(self) -> ConfirmResetInput:
        if self.confirm_password is not None and self.confirm_password != self.new_password:
            msg = "Passwords do not match"
            raise ValueError(msg)
        return self


class UpdateProfileInput(_Input):
    """Profile update body. Omitted fields stay unchanged."""

    email: EmailStr | None = None
    first_name: str | None = Field(default=None, min_length=1, max_length=100)
    last_name: str | None = Field(default=None, min_length=1, max_length=100)
