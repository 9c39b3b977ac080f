"""Identity services - password hashing, password policy and JWT."""

from shop_identity.services.jwt_service import JWTService
from shop_identity.services.password_policy import (
    PasswordPolicy,
    PasswordValidationResult,
)
from shop_identity.services.password_service import PasswordHashingService
from shop_identity.services.secret_tokens import (
    generate_secret,
    hash_secret,
)

__all__ = [
    "JWTService",
    "PasswordHashingService",
    "PasswordPolicy",
    "PasswordValidationResult",
    "generate_secret",
    "hash_secret",
]
