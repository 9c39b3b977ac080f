import asyncio
import logging
from datetime import timedelta

from shop_identity.application.ports import UnitOfWorkFactory
from shop_identity.domain.user import Email
from shop_identity.exceptions import (
    ExpiredTokenError,
    InvalidTokenError,
    UserNotFoundError,
    ValidationError,
    WeakPasswordError,
)
from shop_identity.schemas import ResetTicket
from shop_identity.services import (
    PasswordHashingService,
    PasswordPolicy,
    generate_secret,
    hash_secret,
)
from shop_identity.shared.time import utc_now

logger = logging.getLogger(__name__)

_UNUSABLE_TOKEN = "Invalid or already used reset token"
_EXPIRED_TOKEN = "Reset token has expired"


class PasswordResetService:
    """Service for issuing and consuming one-time password reset tokens."""

    DEFAULT_EXPIRY = timedelta(minutes=15)

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        password_service: PasswordHashingService,
        password_policy: PasswordPolicy,
        reset_ttl: timedelta | None = None,
    ):
        self._uow_factory = uow_factory
        self._password_service = password_service
        self._password_policy = password_policy
        self._reset_ttl = reset_ttl or self.DEFAULT_EXPIRY

    async def request_reset(self, email: str) -> ResetTicket:
        """
        Issue a fresh reset token, replacing any earlier one for the user.

        The plaintext token is returned exactly once; only its hash is
        stored. Sending it is up to the caller.

        Raises
        ------
        InvalidEmailError
            If the email is malformed
        UserNotFoundError
            If no user has that email
        """
        normalized = Email.normalize(email)

        async with self._uow_factory() as uow:
            user = await uow.users.find_by_email(normalized, for_update=True)
            if user is None or user.user_id is None:
                logger.debug("Password reset requested for unknown email: %s", normalized)
                raise UserNotFoundError(normalized)

            replaced = await uow.resets.delete_by_user(user.user_id)

            raw_token = generate_secret()
            expires_at = utc_now() + self._reset_ttl
            await uow.resets.save(user.user_id, hash_secret(raw_token), expires_at)

        logger.info(
            "Password reset issued for user %s (%d earlier tokens dropped)",
            user.user_id,
            replaced,
        )
        return ResetTicket(
            token=raw_token,
            display_name=user.first_name or user.full_name,
            email=user.email,
            expires_at=expires_at,
        )

    async def confirm_reset(
        self,
        token: str,
        new_password: str,
        confirm_password: str | None = None,
    ) -> None:
        """
        Set a new password with a reset token and consume the token.

        The token is checked first, then the password is validated and
        hashed with no transaction open, then the token is consumed and the
        password stored in one transaction. A weak password leaves the token
        usable. Of two concurrent calls with the same token exactly one
        succeeds; the other gets ``InvalidTokenError``.

        Raises
        ------
        InvalidTokenError
            Unknown or already consumed token
        ExpiredTokenError
            Token past its expiry (the record is removed)
        WeakPasswordError
            If the new password violates the policy
        """
        if confirm_password is not None and confirm_password != new_password:
            msg = "Passwords do not match"
            raise ValidationError(msg)

        token_hash = hash_secret(token)

        async with self._uow_factory() as uow:
            reset = await uow.resets.find_by_token_hash(token_hash)
            if reset is None:
                raise InvalidTokenError(_UNUSABLE_TOKEN)

            if reset.is_expired(utc_now()):
                await uow.resets.delete(reset.reset_id)
                await uow.commit()
                logger.info("Expired reset token removed for user %s", reset.user_id)
                raise ExpiredTokenError(_EXPIRED_TOKEN)

        result = self._password_policy.validate(new_password)
        if not result.is_valid:
            raise WeakPasswordError(result.errors)

        new_hash = await asyncio.to_thread(self._password_service.hash, new_password)

        async with self._uow_factory() as uow:
            consumed = await uow.resets.consume_by_token_hash(token_hash)
            if consumed is None:
                logger.warning("Reset token consumed concurrently for user %s", reset.user_id)
                raise InvalidTokenError(_UNUSABLE_TOKEN)

            if consumed.is_expired(utc_now()):
                # Expired while the password was being hashed; keep the delete
                await uow.commit()
                logger.info("Expired reset token removed for user %s", consumed.user_id)
                raise ExpiredTokenError(_EXPIRED_TOKEN)

            user = await uow.users.find_by_id(consumed.user_id, for_update=True)
            if user is None:
                raise UserNotFoundError(consumed.user_id)

            await uow.users.update(user.with_password_hash(new_hash))
            await uow.resets.delete_by_user(consumed.user_id)
            revoked = await uow.sessions.delete_by_user(consumed.user_id)

        logger.info(
            "Password reset completed for user %s, %d sessions revoked",
            consumed.user_id,
            revoked,
        )
