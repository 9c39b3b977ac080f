"""SQLAlchemy implementation of the identity unit of work."""

from __future__ import annotations

import logging
from types import TracebackType

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from shop_identity.exceptions import InternalError
from shop_identity.infrastructure.persistence.sqlalchemy.repositories import (
    PasswordResetRepositorySQLAlchemy,
    UserRepositorySQLAlchemy,
    UserSessionRepositorySQLAlchemy,
)

logger = logging.getLogger(__name__)


class SQLAlchemyUnitOfWork:
    """Open one ``AsyncSession`` and expose the three repositories on it.

    Storage errors raised inside the block are logged, rolled back and
    re-raised as ``InternalError``; identity errors pass through untouched.

    Examples
    --------
    >>> async with SQLAlchemyUnitOfWork(session_maker) as uow:
    ...     user = await uow.users.find_by_email("alice@example.com")
    """

    def __init__(self, session_maker: async_sessionmaker[AsyncSession]):
        self._session_maker = session_maker
        self._session: AsyncSession | None = None

    @property
    def session(self) -> AsyncSession:
        if self._session is None:
            msg = "Unit of work is not active"
            raise RuntimeError(msg)
        return self._session

    async def __aenter__(self) -> SQLAlchemyUnitOfWork:
        self._session = self._session_maker()
        self.users = UserRepositorySQLAlchemy(self._session)
        self.sessions = UserSessionRepositorySQLAlchemy(self._session)
        self.resets = PasswordResetRepositorySQLAlchemy(self._session)
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        try:
            if exc is None:
                await self.commit()
            else:
                await self.rollback()
        finally:
            await self.session.close()
            self._session = None

        if isinstance(exc, SQLAlchemyError):
            logger.error("Storage failure, transaction rolled back", exc_info=exc)
            raise InternalError() from exc

    async def commit(self) -> None:
        try:
            await self.session.commit()
        except SQLAlchemyError as e:
            logger.exception("Commit failed")
            await self.session.rollback()
            raise InternalError() from e

    async def rollback(self) -> None:
        try:
            await self.session.rollback()
        except SQLAlchemyError as e:
            logger.exception("Rollback failed")
            raise InternalError() from e
