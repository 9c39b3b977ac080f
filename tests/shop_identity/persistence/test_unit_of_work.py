"""Tests for SQLAlchemyUnitOfWork transaction handling."""

import asyncio
from unittest.mock import AsyncMock

import pytest
from sqlalchemy.exc import OperationalError

from shop_identity.domain.user import User
from shop_identity.exceptions import EmailAlreadyExistsError, InternalError
from shop_identity.infrastructure.persistence.sqlalchemy import SQLAlchemyUnitOfWork


def _user(email: str = "alice@example.com") -> User:
    return User.create(email, "hash", "Alice", "Martin")


class TestSQLAlchemyUnitOfWork:
    @pytest.mark.asyncio
    async def test_clean_exit_commits(self, uow_factory):
        async with uow_factory() as uow:
            await uow.users.save(_user())

        async with uow_factory() as uow:
            assert await uow.users.exists_by_email("alice@example.com")

    @pytest.mark.asyncio
    async def test_error_rolls_back_every_write(self, uow_factory):
        with pytest.raises(RuntimeError):
            async with uow_factory() as uow:
                user = await uow.users.save(_user())
                await uow.sessions.save(user.user_id, "h", user.created_at)
                raise RuntimeError("boom")

        async with uow_factory() as uow:
            assert await uow.users.count() == 0

    @pytest.mark.asyncio
    async def test_cancellation_rolls_back(self, uow_factory):
        started = asyncio.Event()

        async def writer():
            async with uow_factory() as uow:
                await uow.users.save(_user())
                started.set()
                await asyncio.sleep(10)

        task = asyncio.create_task(writer())
        await started.wait()
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

        async with uow_factory() as uow:
            assert await uow.users.count() == 0

    @pytest.mark.asyncio
    async def test_duplicate_email_surfaces_as_conflict(self, uow_factory):
        async with uow_factory() as uow:
            await uow.users.save(_user())

        with pytest.raises(EmailAlreadyExistsError):
            async with uow_factory() as uow:
                await uow.users.save(_user("Alice@Example.com"))

    @pytest.mark.asyncio
    async def test_storage_error_becomes_internal_error(self, uow_factory):
        with pytest.raises(InternalError) as exc_info:
            async with uow_factory() as uow:
                uow.users.count = AsyncMock(
                    side_effect=OperationalError("SELECT 1", {}, Exception("db down")),
                )
                await uow.users.count()

        assert str(exc_info.value) == "An internal error occurred"
        assert isinstance(exc_info.value.__cause__, OperationalError)

    def test_session_outside_block(self, session_maker):
        uow = SQLAlchemyUnitOfWork(session_maker)
        with pytest.raises(RuntimeError, match="not active"):
            _ = uow.session
