"""Authentication service for registration, login and credentials."""

from __future__ import annotations

import asyncio
import logging
from datetime import timedelta

from shop_identity.application.context import UserContext
from shop_identity.application.ports import UnitOfWorkFactory
from shop_identity.domain.user import Email, User, UserRepository, UserUpdate
from shop_identity.exceptions import (
    AccessPendingError,
    AccessRejectedError,
    ConflictError,
    EmailAlreadyExistsError,
    InvalidCredentialsError,
    InvalidEmailError,
    InvalidTokenError,
    UserNotFoundError,
    ValidationError,
    WeakPasswordError,
)
from shop_identity.repositories import UserSessionRepository
from shop_identity.schemas import AuthResult, TokenPayload, UserProfile
from shop_identity.services import (
    JWTService,
    PasswordHashingService,
    PasswordPolicy,
    PasswordValidationResult,
    hash_secret,
)
from shop_identity.shared.time import utc_now

logger = logging.getLogger(__name__)

# Verified against when the email is unknown so both paths cost one bcrypt check
_DUMMY_PASSWORD = "dummy-password-for-timing"  # noqa: S105

_PROFILE_FIELDS = frozenset({"email", "first_name", "last_name"})


class AuthenticationService:
    """
    Application service for user authentication.

    Orchestrates password hashing, the password policy and bearer tokens
    with the user and session stores to provide:
    - User registration
    - Login gated by backoffice approval
    - Password change (revokes every session)
    - Logout and session-checked token authentication
    - Profile reads and updates

    Every operation runs in its own unit of work.
    """

    def __init__(  # noqa: PLR0913
        self,
        uow_factory: UnitOfWorkFactory,
        password_service: PasswordHashingService,
        password_policy: PasswordPolicy,
        jwt_service: JWTService,
        session_ttl: timedelta | None = None,
    ):
        self._uow_factory = uow_factory
        self._password_service = password_service
        self._password_policy = password_policy
        self._jwt_service = jwt_service
        self._session_ttl = session_ttl or jwt_service.default_ttl
        self._dummy_hash: str | None = None

    async def register(  # noqa: PLR0913
        self,
        email: str,
        password: str,
        first_name: str,
        last_name: str,
        confirm_password: str | None = None,
    ) -> AuthResult:
        """
        Register a new user and issue a token right away.

        The account starts with ``backoffice_status = pending``; the token
        is usable, but a later ``login`` is refused until approval.

        Raises
        ------
        InvalidEmailError
            If the email is malformed
        ValidationError
            If the passwords differ or a name is blank
        WeakPasswordError
            If the password violates the policy
        EmailAlreadyExistsError
            If the email is already registered
        """
        normalized = Email.normalize(email)

        if confirm_password is not None and confirm_password != password:
            msg = "Passwords do not match"
            raise ValidationError(msg)

        if not first_name.strip() or not last_name.strip():
            msg = "First and last name are required"
            raise ValidationError(msg)

        self._enforce_policy(password)
        password_hash = await self._hash(password)

        async with self._uow_factory() as uow:
            if await uow.users.exists_by_email(normalized):
                raise EmailAlreadyExistsError(normalized)

            user = await uow.users.save(
                User.create(normalized, password_hash, first_name, last_name),
            )
            token = await self._open_session(uow.sessions, user)

        logger.info("User registered: %s (pending approval)", normalized)
        return AuthResult(user=UserProfile.from_user(user), token=token)

    async def login(self, email: str, password: str) -> AuthResult:
        """
        Authenticate with email and password.

        The password is checked before the approval state is looked at, so
        a caller without the password learns nothing about the account.

        Raises
        ------
        InvalidCredentialsError
            Unknown email, inactive account or wrong password
        AccessRejectedError
            Valid credentials but backoffice access was rejected
        AccessPendingError
            Valid credentials but backoffice access is not approved yet
        """
        try:
            normalized: str | None = Email.normalize(email)
        except InvalidEmailError:
            normalized = None

        user: User | None = None
        if normalized:
            async with self._uow_factory() as uow:
                user = await uow.users.find_by_email(normalized)

        stored_hash = user.password_hash if user else await self._get_dummy_hash()
        password_ok = await self._verify(password, stored_hash)

        if user is None or not user.is_active or not password_ok:
            logger.info("Failed login attempt for %s", normalized or "<malformed>")
            raise InvalidCredentialsError

        if user.is_rejected:
            logger.info("Login refused, access rejected: %s", user.email)
            raise AccessRejectedError
        if not user.is_approved:
            logger.info("Login refused, access pending: %s", user.email)
            raise AccessPendingError

        rehashed = None
        if self._password_service.needs_rehash(user.password_hash):
            rehashed = await self._hash(password)

        async with self._uow_factory() as uow:
            if rehashed is not None:
                await self._store_rehash(uow.users, user, rehashed)
            token = await self._open_session(uow.sessions, user)

        logger.info("User logged in: %s", user.email)
        return AuthResult(user=UserProfile.from_user(user), token=token)

    async def change_password(
        self,
        user_id: int,
        current_password: str,
        new_password: str,
    ) -> int:
        """
        Change a password and revoke every session of the user.

        bcrypt runs between two short transactions. The second one locks
        the user row and refuses to write if the stored hash moved on in
        the meantime.

        Returns
        -------
        Number of sessions that were revoked

        Raises
        ------
        ConflictError
            If the password was changed concurrently
        """
        async with self._uow_factory() as uow:
            user = await uow.users.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError(user_id)

        if not await self._verify(current_password, user.password_hash):
            msg = "Current password is incorrect"
            raise ValidationError(msg)

        self._enforce_policy(new_password)
        new_hash = await self._hash(new_password)

        async with self._uow_factory() as uow:
            locked = await uow.users.find_by_id(user_id, for_update=True)
            if locked is None:
                raise UserNotFoundError(user_id)
            if locked.password_hash != user.password_hash:
                msg = "Password was changed concurrently"
                raise ConflictError(msg)

            await uow.users.update(locked.with_password_hash(new_hash))
            revoked = await uow.sessions.delete_by_user(user_id)

        logger.info("Password changed for user %s, %d sessions revoked", user_id, revoked)
        return revoked

    async def logout(self, token: str) -> bool:
        """Delete the session row for ``token``. True if one was removed."""
        async with self._uow_factory() as uow:
            removed = await uow.sessions.delete_by_token_hash(hash_secret(token))

        if removed:
            logger.debug("Session closed")
        return removed

    def verify_token(self, token: str) -> TokenPayload:
        """Stateless signature and expiry check; never touches the stores."""
        return self._jwt_service.verify(token)

    async def authenticate_session(self, token: str) -> UserContext:
        """
        Verify ``token`` and require a live session row for it.

        Use this where a revoked session must stop a still-signed token.

        Raises
        ------
        InvalidTokenError
            Bad signature, expired token, or no active session
        """
        payload = self._jwt_service.verify(token)

        async with self._uow_factory() as uow:
            session = await uow.sessions.find_by_token_hash(hash_secret(token))

        if (
            session is None
            or session.user_id != payload.user_id
            or session.is_expired(utc_now())
        ):
            msg = "Session is no longer active"
            raise InvalidTokenError(msg)

        return UserContext.from_payload(payload, session_id=session.session_id)

    async def email_exists(self, email: str) -> bool:
        try:
            normalized = Email.normalize(email)
        except InvalidEmailError:
            return False

        async with self._uow_factory() as uow:
            return await uow.users.exists_by_email(normalized)

    def validate_password(self, password: str) -> PasswordValidationResult:
        return self._password_policy.validate(password)

    async def get_profile(self, user_id: int) -> UserProfile:
        async with self._uow_factory() as uow:
            user = await uow.users.find_by_id(user_id)

        if user is None:
            raise UserNotFoundError(user_id)
        return UserProfile.from_user(user)

    async def update_profile(self, user_id: int, update: UserUpdate) -> UserProfile:
        """
        Overlay the supplied profile fields onto the stored user.

        Only ``email``, ``first_name`` and ``last_name`` can change here;
        passwords go through ``change_password`` and status through the
        backoffice service.
        """
        supplied = update.supplied()
        forbidden = sorted(set(supplied) - _PROFILE_FIELDS)
        if forbidden:
            msg = f"Fields cannot be changed through a profile update: {', '.join(forbidden)}"
            raise ValidationError(msg)

        for name in ("first_name", "last_name"):
            value = supplied.get(name)
            if value is not None:
                if not str(value).strip():
                    msg = f"{name} cannot be blank"
                    raise ValidationError(msg)
                supplied[name] = str(value).strip()

        if "email" in supplied:
            supplied["email"] = Email.normalize(str(supplied["email"]))

        async with self._uow_factory() as uow:
            user = await uow.users.find_by_id(user_id)
            if user is None:
                raise UserNotFoundError(user_id)

            if not supplied:
                return UserProfile.from_user(user)

            new_email = supplied.get("email")
            if (
                new_email is not None
                and new_email != user.email
                and await uow.users.exists_by_email(new_email)
            ):
                raise EmailAlreadyExistsError(str(new_email))

            updated = await uow.users.update(user.merge(UserUpdate(**supplied)))

        logger.info("Profile updated for user %s", user_id)
        return UserProfile.from_user(updated)

    async def _open_session(self, sessions: UserSessionRepository, user: User) -> str:
        if user.user_id is None:
            msg = "Cannot open a session for a user that has not been stored"
            raise ValueError(msg)
        token = self._jwt_service.issue(
            user_id=user.user_id,
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
            ttl=self._session_ttl,
        )
        await sessions.save(
            user_id=user.user_id,
            token_hash=hash_secret(token),
            expires_at=utc_now() + self._session_ttl,
        )
        return token

    async def _store_rehash(self, users: UserRepository, user: User, new_hash: str) -> None:
        if user.user_id is None:
            return
        current = await users.find_by_id(user.user_id, for_update=True)
        # Skip if the password changed since it was verified
        if current is None or current.password_hash != user.password_hash:
            return
        await users.update(current.with_password_hash(new_hash))
        logger.info("Password rehashed with the current work factor for user %s", user.user_id)

    def _enforce_policy(self, password: str) -> None:
        result = self._password_policy.validate(password)
        if not result.is_valid:
            raise WeakPasswordError(result.errors)

    async def _hash(self, password: str) -> str:
        return await asyncio.to_thread(self._password_service.hash, password)

    async def _verify(self, password: str, password_hash: str) -> bool:
        return await asyncio.to_thread(self._password_service.verify, password, password_hash)

    async def _get_dummy_hash(self) -> str:
        if self._dummy_hash is None:
            self._dummy_hash = await self._hash(_DUMMY_PASSWORD)
        return self._dummy_hash
