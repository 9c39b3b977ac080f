"""SQLAlchemy implementation of UserSessionRepository."""

from datetime import datetime, timedelta

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from shop_identity.infrastructure.persistence.sqlalchemy.models import (
    UserSessionModel,
)
from shop_identity.repositories import UserSessionData, UserSessionRepository
from shop_identity.shared.time import ensure_tz_aware, utc_now


class UserSessionRepositorySQLAlchemy(UserSessionRepository):
    def __init__(self, session: AsyncSession):
        self._session = session

    async def save(
        self,
        user_id: int,
        token_hash: str,
        expires_at: datetime,
    ) -> UserSessionData:
        model = UserSessionModel(
            user_id=user_id,
            token_hash=token_hash,
            expires_at=expires_at,
            created_at=utc_now(),
        )
        self._session.add(model)
        await self._session.flush()
        return self._to_data(model)

    async def find_by_id(self, session_id: int) -> UserSessionData | None:
        model = await self._find_model(session_id)
        return self._to_data(model) if model else None

    async def find_by_token_hash(self, token_hash: str) -> UserSessionData | None:
        stmt = select(UserSessionModel).where(UserSessionModel.token_hash == token_hash)
        result = await self._session.execute(stmt)
        model = result.scalars().first()
        return self._to_data(model) if model else None

    async def list_by_user(self, user_id: int) -> list[UserSessionData]:
        stmt = (
            select(UserSessionModel)
            .where(UserSessionModel.user_id == user_id)
            .order_by(
                UserSessionModel.created_at.desc(),
                UserSessionModel.session_id.desc(),
            )
        )
        result = await self._session.execute(stmt)
        return [self._to_data(m) for m in result.scalars().all()]

    async def list_active_by_user(self, user_id: int) -> list[UserSessionData]:
        stmt = (
            select(UserSessionModel)
            .where(
                UserSessionModel.user_id == user_id,
                UserSessionModel.expires_at > utc_now(),
            )
            .order_by(
                UserSessionModel.created_at.desc(),
                UserSessionModel.session_id.desc(),
            )
        )
        result = await self._session.execute(stmt)
        return [self._to_data(m) for m in result.scalars().all()]

    async def count_active_by_user(self, user_id: int) -> int:
        stmt = (
            select(func.count())
            .select_from(UserSessionModel)
            .where(
                UserSessionModel.user_id == user_id,
                UserSessionModel.expires_at > utc_now(),
            )
        )
        result = await self._session.execute(stmt)
        return result.scalar_one()

    async def extend(self, session_id: int, duration: timedelta) -> UserSessionData | None:
        model = await self._find_model(session_id)
        if model is None:
            return None
        model.expires_at = ensure_tz_aware(model.expires_at) + duration
        await self._session.flush()
        return self._to_data(model)

    async def invalidate(self, session_id: int) -> UserSessionData | None:
        model = await self._find_model(session_id)
        if model is None:
            return None
        model.expires_at = utc_now()
        await self._session.flush()
        return self._to_data(model)

    async def delete(self, session_id: int) -> bool:
        stmt = delete(UserSessionModel).where(UserSessionModel.session_id == session_id)
        result = await self._session.execute(stmt)
        await self._session.flush()
        return bool(result.rowcount)

    async def delete_by_token_hash(self, token_hash: str) -> bool:
        stmt = delete(UserSessionModel).where(UserSessionModel.token_hash == token_hash)
        result = await self._session.execute(stmt)
        await self._session.flush()
        return bool(result.rowcount)

    async def delete_by_user(self, user_id: int) -> int:
        stmt = delete(UserSessionModel).where(UserSessionModel.user_id == user_id)
        result = await self._session.execute(stmt)
        await self._session.flush()
        return result.rowcount  # type: ignore

    async def delete_expired(self) -> int:
        stmt = (
            delete(UserSessionModel)
            .where(UserSessionModel.expires_at <= utc_now())
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        await self._session.flush()
        return result.rowcount  # type: ignore

    async def _find_model(self, session_id: int) -> UserSessionModel | None:
        stmt = select(UserSessionModel).where(UserSessionModel.session_id == session_id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    def _to_data(model: UserSessionModel) -> UserSessionData:
        return UserSessionData(
            session_id=model.session_id,
            user_id=model.user_id,
            token_hash=model.token_hash,
            expires_at=ensure_tz_aware(model.expires_at),
            created_at=ensure_tz_aware(model.created_at),
        )
