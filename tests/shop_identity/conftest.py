"""
Pytest configuration for shop_identity tests.

Fixtures shared by unit, persistence and end-to-end tests: fast bcrypt,
the default password policy, a JWT codec and a user factory.
"""

from datetime import timedelta

import pytest

from shop_identity.domain.user import BackofficeStatus, User
from shop_identity.services import JWTService, PasswordHashingService, PasswordPolicy

TEST_SECRET = "unit-test-signing-key-0123456789abcdef"
TEST_EMAIL = "alice@example.com"
TEST_PASSWORD = "Secret123"


@pytest.fixture
def password_service() -> PasswordHashingService:
    """bcrypt at the minimum work factor."""
    return PasswordHashingService(rounds=4)


@pytest.fixture
def password_policy() -> PasswordPolicy:
    return PasswordPolicy()


@pytest.fixture
def jwt_service() -> JWTService:
    return JWTService(secret_key=TEST_SECRET, access_token_expire_hours=1)


@pytest.fixture
def session_ttl() -> timedelta:
    return timedelta(hours=1)


@pytest.fixture
def make_user():
    """Build stored-looking users without touching a database."""

    def _make(
        user_id: int = 1,
        email: str = TEST_EMAIL,
        password_hash: str = "stored-hash",
        status: BackofficeStatus = BackofficeStatus.PENDING,
        is_active: bool = True,
    ) -> User:
        return User(
            user_id=user_id,
            email=email,
            password_hash=password_hash,
            first_name="Alice",
            last_name="Martin",
            is_active=is_active,
            backoffice_status=status,
        )

    return _make
