"""SQLAlchemy implementation of UserRepository."""

import logging
from typing import Union

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from shop_identity.domain.user import (
    BackofficeStatus,
    Email,
    User,
    UserRepository,
)
from shop_identity.exceptions import EmailAlreadyExistsError, UserNotFoundError
from shop_identity.infrastructure.persistence.sqlalchemy.models import UserModel
from shop_identity.shared.time import ensure_tz_aware

logger = logging.getLogger(__name__)


def _is_unique_violation(error: IntegrityError) -> bool:
    text = str(error.orig if error.orig is not None else error).lower()
    return "unique" in text or "duplicate" in text


class UserRepositorySQLAlchemy(UserRepository):
    """SQLAlchemy implementation of the UserRepository interface."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find_by_id(self, user_id: int, for_update: bool = False) -> User | None:
        model = await self._find_model_by_id(user_id, for_update=for_update)
        if model is None:
            return None
        return self._map_to_domain(model)

    async def find_by_email(
        self,
        email: Union[str, Email],
        for_update: bool = False,
    ) -> User | None:
        stmt = select(UserModel).where(UserModel.email == Email.normalize(email))
        if for_update:
            stmt = stmt.with_for_update()
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            return None

        return self._map_to_domain(model)

    async def exists_by_email(self, email: Union[str, Email]) -> bool:
        stmt = select(func.count()).select_from(UserModel).where(
            UserModel.email == Email.normalize(email),
        )
        result = await self._session.execute(stmt)
        return result.scalar_one() > 0

    async def save(self, user: User) -> User:
        model = self._map_to_model(user)
        self._session.add(model)
        try:
            await self._session.flush()
        except IntegrityError as e:
            if _is_unique_violation(e):
                raise EmailAlreadyExistsError(user.email) from e
            raise

        logger.info("Created user: %s (email: %s)", model.user_id, model.email)
        return self._map_to_domain(model)

    async def update(self, user: User) -> User:
        if user.user_id is None:
            msg = "Cannot update a user that has not been saved"
            raise ValueError(msg)

        model = await self._find_model_by_id(user.user_id)
        if model is None:
            raise UserNotFoundError(user.user_id)

        self._update_model(model, user)
        try:
            await self._session.flush()
        except IntegrityError as e:
            if _is_unique_violation(e):
                raise EmailAlreadyExistsError(user.email) from e
            raise

        logger.debug("Updated user: %s", user.user_id)
        return self._map_to_domain(model)

    async def delete(self, user_id: int) -> bool:
        stmt = delete(UserModel).where(UserModel.user_id == user_id)
        result = await self._session.execute(stmt)
        await self._session.flush()
        deleted = bool(result.rowcount)
        if deleted:
            logger.info("Deleted user: %s", user_id)
        return deleted

    async def count(self) -> int:
        stmt = select(func.count()).select_from(UserModel)
        result = await self._session.execute(stmt)
        return result.scalar_one()

    async def list_all(self) -> list[User]:
        stmt = select(UserModel).order_by(UserModel.created_at, UserModel.user_id)
        result = await self._session.execute(stmt)
        return [self._map_to_domain(model) for model in result.scalars().all()]

    async def list_by_backoffice_status(self, status: BackofficeStatus) -> list[User]:
        stmt = (
            select(UserModel)
            .where(UserModel.backoffice_status == BackofficeStatus(status).value)
            .order_by(UserModel.created_at, UserModel.user_id)
        )
        result = await self._session.execute(stmt)
        return [self._map_to_domain(model) for model in result.scalars().all()]

    async def _find_model_by_id(
        self,
        user_id: int,
        for_update: bool = False,
    ) -> UserModel | None:
        stmt = select(UserModel).where(UserModel.user_id == user_id)
        if for_update:
            stmt = stmt.with_for_update()
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    def _map_to_domain(self, model: UserModel) -> User:
        return User(
            user_id=model.user_id,
            email=model.email,
            password_hash=model.password_hash,
            first_name=model.first_name,
            last_name=model.last_name,
            is_active=model.is_active,
            backoffice_status=BackofficeStatus(model.backoffice_status),
            created_at=ensure_tz_aware(model.created_at),
            updated_at=ensure_tz_aware(model.updated_at),
        )

    def _map_to_model(self, user: User) -> UserModel:
        return UserModel(
            email=user.email,
            password_hash=user.password_hash,
            first_name=user.first_name,
            last_name=user.last_name,
            is_active=user.is_active,
            backoffice_status=user.backoffice_status.value,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )

    def _update_model(self, model: UserModel, user: User) -> None:
        model.email = user.email
        model.password_hash = user.password_hash
        model.first_name = user.first_name
        model.last_name = user.last_name
        model.is_active = user.is_active
        model.backoffice_status = user.backoffice_status.value
        model.updated_at = user.updated_at
