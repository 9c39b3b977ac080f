"""Application services for the identity core."""

from shop_identity.application.services.authentication_service import (
    AuthenticationService,
)
from shop_identity.application.services.backoffice_access_service import (
    BackofficeAccessService,
)
from shop_identity.application.services.password_reset_service import (
    PasswordResetService,
)
from shop_identity.application.services.session_service import SessionService

__all__ = [
    "AuthenticationService",
    "BackofficeAccessService",
    "PasswordResetService",
    "SessionService",
]
