"""Engine, session maker and schema helpers."""

import logging
from pathlib import Path
from typing import Any

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

# Import models to register with IdentityBase.metadata
import shop_identity.infrastructure.persistence.sqlalchemy.models  # noqa: F401
from shop_config import Settings
from shop_identity.infrastructure.persistence.sqlalchemy.base import IdentityBase

logger = logging.getLogger(__name__)


def _enable_sqlite_foreign_keys(dbapi_connection: Any, _connection_record: Any) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_engine(
    url: str,
    echo: bool = False,
    command_timeout: float | None = None,
    **kwargs: Any,
) -> AsyncEngine:
    """
    Create the shared async engine (one connection pool per process).

    Parameters
    ----------
    url
        SQLAlchemy database URL (``postgresql+asyncpg://`` or ``sqlite+aiosqlite://``)
    echo
        Log every SQL statement
    command_timeout
        Per-statement deadline in seconds (asyncpg only)
    **kwargs
        Passed through to ``create_async_engine``

    Returns
    -------
    AsyncEngine instance
    """
    is_sqlite = url.startswith("sqlite")

    if is_sqlite and ":memory:" not in url and "///" in url:
        # Ensure data directory exists for SQLite
        db_path = url.split("///")[-1]
        if db_path:
            Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    if url.startswith("postgresql+asyncpg") and command_timeout is not None:
        connect_args = kwargs.setdefault("connect_args", {})
        connect_args.setdefault("command_timeout", command_timeout)

    if not is_sqlite:
        kwargs.setdefault("pool_pre_ping", True)

    engine = create_async_engine(url, echo=echo, **kwargs)

    if is_sqlite:
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)

    return engine


def create_engine_from_settings(settings: Settings) -> AsyncEngine:
    return create_engine(
        settings.database_url,
        echo=settings.database_echo,
        command_timeout=settings.database_command_timeout,
    )


def create_session_maker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session maker bound to ``engine``; objects stay usable after commit."""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def create_tables(engine: AsyncEngine) -> None:
    """
    Create all identity tables (idempotent).

    Uses SQLAlchemy's create_all() which only creates missing tables.
    Existing tables and their data are never modified or deleted.
    """
    logger.info("Ensuring identity tables exist...")

    async with engine.begin() as conn:
        await conn.run_sync(IdentityBase.metadata.create_all)

    logger.info("Identity schema is up to date")


async def drop_tables(engine: AsyncEngine) -> None:
    """
    Drop all identity tables (USE WITH CAUTION!).

    This is primarily for testing and development reset scenarios.
    """
    logger.warning("Dropping all identity tables...")

    async with engine.begin() as conn:
        await conn.run_sync(IdentityBase.metadata.drop_all)

    logger.info("Identity tables dropped")
