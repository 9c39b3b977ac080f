"""Session bookkeeping and expiry sweeps."""

import logging
from datetime import timedelta

from shop_identity.application.ports import UnitOfWorkFactory
from shop_identity.exceptions import SessionNotFoundError, ValidationError
from shop_identity.repositories import UserSessionData
from shop_identity.schemas import PurgeResult

logger = logging.getLogger(__name__)


class SessionService:
    """Manage the session rows that back issued bearer tokens."""

    def __init__(self, uow_factory: UnitOfWorkFactory):
        self._uow_factory = uow_factory

    async def list_sessions(
        self,
        user_id: int,
        active_only: bool = False,
    ) -> list[UserSessionData]:
        async with self._uow_factory() as uow:
            if active_only:
                return await uow.sessions.list_active_by_user(user_id)
            return await uow.sessions.list_by_user(user_id)

    async def count_active_sessions(self, user_id: int) -> int:
        async with self._uow_factory() as uow:
            return await uow.sessions.count_active_by_user(user_id)

    async def extend_session(self, session_id: int, duration: timedelta) -> UserSessionData:
        if duration <= timedelta(0):
            msg = "Extension must be positive"
            raise ValidationError(msg)

        async with self._uow_factory() as uow:
            session = await uow.sessions.extend(session_id, duration)

        if session is None:
            raise SessionNotFoundError(session_id)
        return session

    async def invalidate_session(self, session_id: int) -> UserSessionData:
        """Force-expire a session; the row is kept for audit."""
        async with self._uow_factory() as uow:
            session = await uow.sessions.invalidate(session_id)

        if session is None:
            raise SessionNotFoundError(session_id)
        logger.info("Session %s invalidated", session_id)
        return session

    async def delete_session(self, session_id: int) -> None:
        async with self._uow_factory() as uow:
            removed = await uow.sessions.delete(session_id)

        if not removed:
            raise SessionNotFoundError(session_id)

    async def revoke_all(self, user_id: int) -> int:
        async with self._uow_factory() as uow:
            removed = await uow.sessions.delete_by_user(user_id)

        logger.info("Revoked %d sessions for user %s", removed, user_id)
        return removed

    async def purge_expired(self) -> PurgeResult:
        """Expiry sweep over sessions and reset tokens."""
        async with self._uow_factory() as uow:
            sessions = await uow.sessions.delete_expired()
            resets = await uow.resets.delete_expired()

        if sessions or resets:
            logger.info("Purged %d expired sessions and %d expired resets", sessions, resets)
        return PurgeResult(sessions=sessions, resets=resets)
