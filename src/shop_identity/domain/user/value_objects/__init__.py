"""Value objects for the user domain."""

from shop_identity.domain.user.value_objects.backoffice_status import (
    BackofficeStatus,
)
from shop_identity.domain.user.value_objects.email import Email

__all__ = [
    "BackofficeStatus",
    "Email",
]
