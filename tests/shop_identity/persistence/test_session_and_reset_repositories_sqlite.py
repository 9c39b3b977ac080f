"""Persistence tests for the session and reset repositories on SQLite."""

from datetime import timedelta

import pytest

from shop_identity.domain.user import User
from shop_identity.infrastructure.persistence.sqlalchemy import (
    PasswordResetRepositorySQLAlchemy,
    UserRepositorySQLAlchemy,
    UserSessionRepositorySQLAlchemy,
)
from shop_identity.shared.time import utc_now


async def _store_user(session, email: str = "alice@example.com") -> int:
    user = await UserRepositorySQLAlchemy(session).save(
        User.create(email, "hash", "Alice", "Martin"),
    )
    return user.user_id


class TestUserSessionRepositorySQLAlchemy:
    @pytest.mark.asyncio
    async def test_save_and_find_by_token_hash(self, session_maker):
        async with session_maker() as session:
            user_id = await _store_user(session)
            repo = UserSessionRepositorySQLAlchemy(session)
            expires = utc_now() + timedelta(hours=1)

            saved = await repo.save(user_id, "hash-1", expires)
            found = await repo.find_by_token_hash("hash-1")

        assert found is not None
        assert found.session_id == saved.session_id
        assert found.user_id == user_id
        assert found.expires_at.tzinfo is not None
        assert found.is_valid(utc_now())

    @pytest.mark.asyncio
    async def test_active_filtering_and_count(self, session_maker):
        async with session_maker() as session:
            user_id = await _store_user(session)
            repo = UserSessionRepositorySQLAlchemy(session)
            await repo.save(user_id, "live", utc_now() + timedelta(hours=1))
            await repo.save(user_id, "dead", utc_now() - timedelta(minutes=1))

            every = await repo.list_by_user(user_id)
            active = await repo.list_active_by_user(user_id)
            count = await repo.count_active_by_user(user_id)

        assert len(every) == 2
        assert [s.token_hash for s in active] == ["live"]
        assert count == 1

    @pytest.mark.asyncio
    async def test_extend_and_invalidate(self, session_maker):
        async with session_maker() as session:
            user_id = await _store_user(session)
            repo = UserSessionRepositorySQLAlchemy(session)
            saved = await repo.save(user_id, "h", utc_now() + timedelta(minutes=10))

            extended = await repo.extend(saved.session_id, timedelta(hours=1))
            assert extended.expires_at == saved.expires_at + timedelta(hours=1)

            invalidated = await repo.invalidate(saved.session_id)
            assert invalidated.is_expired(utc_now() + timedelta(seconds=1))
            # Row is kept for audit
            assert await repo.find_by_id(saved.session_id) is not None
            assert await repo.count_active_by_user(user_id) == 0

            assert await repo.extend(999, timedelta(hours=1)) is None
            assert await repo.invalidate(999) is None

    @pytest.mark.asyncio
    async def test_deletes(self, session_maker):
        async with session_maker() as session:
            user_id = await _store_user(session)
            repo = UserSessionRepositorySQLAlchemy(session)
            first = await repo.save(user_id, "a", utc_now() + timedelta(hours=1))
            await repo.save(user_id, "b", utc_now() + timedelta(hours=1))
            await repo.save(user_id, "c", utc_now() + timedelta(hours=1))
            await repo.save(user_id, "old", utc_now() - timedelta(hours=1))

            assert await repo.delete(first.session_id) is True
            assert await repo.delete_by_token_hash("b") is True
            assert await repo.delete_by_token_hash("b") is False
            assert await repo.delete_expired() == 1
            assert await repo.delete_by_user(user_id) == 1
            assert await repo.list_by_user(user_id) == []


class TestPasswordResetRepositorySQLAlchemy:
    @pytest.mark.asyncio
    async def test_save_and_find(self, session_maker):
        async with session_maker() as session:
            user_id = await _store_user(session)
            repo = PasswordResetRepositorySQLAlchemy(session)
            saved = await repo.save(user_id, "reset-hash", utc_now() + timedelta(minutes=15))

            found = await repo.find_by_token_hash("reset-hash")

        assert found == saved
        assert not found.is_expired(utc_now())

    @pytest.mark.asyncio
    async def test_consume_is_single_use(self, session_maker):
        async with session_maker() as session:
            user_id = await _store_user(session)
            repo = PasswordResetRepositorySQLAlchemy(session)
            saved = await repo.save(user_id, "reset-hash", utc_now() + timedelta(minutes=15))

            first = await repo.consume_by_token_hash("reset-hash")
            second = await repo.consume_by_token_hash("reset-hash")

        assert first is not None
        assert first.reset_id == saved.reset_id
        assert first.user_id == user_id
        assert first.expires_at.tzinfo is not None
        assert second is None

    @pytest.mark.asyncio
    async def test_active_listing_and_sweeps(self, session_maker):
        async with session_maker() as session:
            user_id = await _store_user(session)
            repo = PasswordResetRepositorySQLAlchemy(session)
            live = await repo.save(user_id, "live", utc_now() + timedelta(minutes=15))
            await repo.save(user_id, "stale", utc_now() - timedelta(minutes=1))

            assert [r.reset_id for r in await repo.list_active_by_user(user_id)] == [
                live.reset_id,
            ]
            assert await repo.count_active_by_user(user_id) == 1
            assert await repo.delete_expired() == 1
            assert await repo.delete(live.reset_id) is True
            assert await repo.delete(live.reset_id) is False
            assert await repo.delete_by_user(user_id) == 0

    @pytest.mark.asyncio
    async def test_user_delete_cascades(self, session_maker):
        async with session_maker() as session:
            user_id = await _store_user(session)
            await PasswordResetRepositorySQLAlchemy(session).save(
                user_id, "r", utc_now() + timedelta(minutes=15)
            )
            await UserSessionRepositorySQLAlchemy(session).save(
                user_id, "s", utc_now() + timedelta(hours=1)
            )
            await session.commit()

        async with session_maker() as session:
            await UserRepositorySQLAlchemy(session).delete(user_id)
            await session.commit()

        async with session_maker() as session:
            assert await PasswordResetRepositorySQLAlchemy(session).find_by_token_hash("r") is None
            assert await UserSessionRepositorySQLAlchemy(session).find_by_token_hash("s") is None
