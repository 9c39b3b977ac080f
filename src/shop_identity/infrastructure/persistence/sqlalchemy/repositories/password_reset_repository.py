"""SQLAlchemy implementation of PasswordResetRepository."""

from datetime import datetime

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from shop_identity.infrastructure.persistence.sqlalchemy.models import (
    PasswordResetModel,
)
from shop_identity.repositories import PasswordResetData, PasswordResetRepository
from shop_identity.shared.time import ensure_tz_aware, utc_now


class PasswordResetRepositorySQLAlchemy(PasswordResetRepository):
    def __init__(self, session: AsyncSession):
        self._session = session

    async def save(
        self,
        user_id: int,
        reset_token_hash: str,
        expires_at: datetime,
    ) -> PasswordResetData:
        model = PasswordResetModel(
            user_id=user_id,
            reset_token_hash=reset_token_hash,
            expires_at=expires_at,
            created_at=utc_now(),
        )
        self._session.add(model)
        await self._session.flush()
        return self._to_data(model)

    async def find_by_token_hash(self, reset_token_hash: str) -> PasswordResetData | None:
        stmt = select(PasswordResetModel).where(
            PasswordResetModel.reset_token_hash == reset_token_hash,
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_data(model) if model else None

    async def consume_by_token_hash(
        self,
        reset_token_hash: str,
    ) -> PasswordResetData | None:
        # DELETE ... RETURNING: of two concurrent callers only one gets the row
        stmt = (
            delete(PasswordResetModel)
            .where(PasswordResetModel.reset_token_hash == reset_token_hash)
            .returning(
                PasswordResetModel.reset_id,
                PasswordResetModel.user_id,
                PasswordResetModel.reset_token_hash,
                PasswordResetModel.expires_at,
                PasswordResetModel.created_at,
            )
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        row = result.one_or_none()
        await self._session.flush()

        if row is None:
            return None

        return PasswordResetData(
            reset_id=row.reset_id,
            user_id=row.user_id,
            reset_token_hash=row.reset_token_hash,
            expires_at=ensure_tz_aware(row.expires_at),
            created_at=ensure_tz_aware(row.created_at),
        )

    async def list_active_by_user(self, user_id: int) -> list[PasswordResetData]:
        stmt = (
            select(PasswordResetModel)
            .where(
                PasswordResetModel.user_id == user_id,
                PasswordResetModel.expires_at > utc_now(),
            )
            .order_by(
                PasswordResetModel.created_at.desc(),
                PasswordResetModel.reset_id.desc(),
            )
        )
        result = await self._session.execute(stmt)
        return [self._to_data(m) for m in result.scalars().all()]

    async def count_active_by_user(self, user_id: int) -> int:
        stmt = (
            select(func.count())
            .select_from(PasswordResetModel)
            .where(
                PasswordResetModel.user_id == user_id,
                PasswordResetModel.expires_at > utc_now(),
            )
        )
        result = await self._session.execute(stmt)
        return result.scalar_one()

    async def delete(self, reset_id: int) -> bool:
        stmt = delete(PasswordResetModel).where(PasswordResetModel.reset_id == reset_id)
        result = await self._session.execute(stmt)
        await self._session.flush()
        return bool(result.rowcount)

    async def delete_by_user(self, user_id: int) -> int:
        stmt = delete(PasswordResetModel).where(PasswordResetModel.user_id == user_id)
        result = await self._session.execute(stmt)
        await self._session.flush()
        return result.rowcount  # type: ignore

    async def delete_expired(self) -> int:
        stmt = (
            delete(PasswordResetModel)
            .where(PasswordResetModel.expires_at <= utc_now())
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        await self._session.flush()
        return result.rowcount  # type: ignore

    @staticmethod
    def _to_data(model: PasswordResetModel) -> PasswordResetData:
        return PasswordResetData(
            reset_id=model.reset_id,
            user_id=model.user_id,
            reset_token_hash=model.reset_token_hash,
            expires_at=ensure_tz_aware(model.expires_at),
            created_at=ensure_tz_aware(model.created_at),
        )
