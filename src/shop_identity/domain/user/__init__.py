"""User domain manages operator and customer identity.

This domain handles:
- User aggregate (identity, profile, credential hash, approval state)
- Email normalisation
- The user repository contract
"""

from shop_identity.domain.user.aggregates import User, UserUpdate
from shop_identity.domain.user.repositories import UserRepository
from shop_identity.domain.user.value_objects import BackofficeStatus, Email

__all__ = [
    "BackofficeStatus",
    "Email",
    "User",
    "UserRepository",
    "UserUpdate",
]
