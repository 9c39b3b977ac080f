"""Backoffice approval workflow and user administration."""

import logging
from typing import Callable

from shop_identity.application.ports import UnitOfWorkFactory
from shop_identity.domain.user import BackofficeStatus, User
from shop_identity.exceptions import UserNotFoundError
from shop_identity.schemas import UserProfile

logger = logging.getLogger(__name__)


class BackofficeAccessService:
    """
    Operator-side actions on user accounts.

    Approval and rejection only change what a later ``login`` permits.
    They never touch ``is_active``, credentials or sessions.
    """

    def __init__(self, uow_factory: UnitOfWorkFactory):
        self._uow_factory = uow_factory

    async def approve_access(self, user_id: int) -> UserProfile:
        profile = await self._transition(user_id, User.approve_backoffice)
        logger.info("Backoffice access approved for user %s", user_id)
        return profile

    async def reject_access(self, user_id: int) -> UserProfile:
        profile = await self._transition(user_id, User.reject_backoffice)
        logger.info("Backoffice access rejected for user %s", user_id)
        return profile

    async def set_active(self, user_id: int, is_active: bool) -> UserProfile:
        """Administrative kill-switch, independent of approval."""
        transition = User.activate if is_active else User.deactivate
        profile = await self._transition(user_id, transition)
        logger.info("User %s %s", user_id, "activated" if is_active else "deactivated")
        return profile

    async def get_user(self, user_id: int) -> UserProfile:
        async with self._uow_factory() as uow:
            user = await uow.users.find_by_id(user_id)

        if user is None:
            raise UserNotFoundError(user_id)
        return UserProfile.from_user(user)

    async def list_users(self) -> list[UserProfile]:
        async with self._uow_factory() as uow:
            users = await uow.users.list_all()
        return [UserProfile.from_user(u) for u in users]

    async def list_pending_users(self) -> list[UserProfile]:
        async with self._uow_factory() as uow:
            users = await uow.users.list_by_backoffice_status(BackofficeStatus.PENDING)
        return [UserProfile.from_user(u) for u in users]

    async def delete_user(self, user_id: int) -> None:
        """Delete a user together with its sessions and reset records."""
        async with self._uow_factory() as uow:
            user = await uow.users.find_by_id(user_id, for_update=True)
            if user is None:
                raise UserNotFoundError(user_id)

            resets = await uow.resets.delete_by_user(user_id)
            sessions = await uow.sessions.delete_by_user(user_id)
            await uow.users.delete(user_id)

        logger.info(
            "Deleted user %s (%d sessions, %d reset tokens)",
            user_id,
            sessions,
            resets,
        )

    async def _transition(
        self,
        user_id: int,
        transition: Callable[[User], User],
    ) -> UserProfile:
        async with self._uow_factory() as uow:
            user = await uow.users.find_by_id(user_id, for_update=True)
            if user is None:
                raise UserNotFoundError(user_id)
            updated = await uow.users.update(transition(user))
        return UserProfile.from_user(updated)
