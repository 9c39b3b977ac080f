"""Composition root: build the identity core from settings."""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from datetime import timedelta

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from shop_config import Settings, get_settings
from shop_identity.application.services import (
    AuthenticationService,
    BackofficeAccessService,
    PasswordResetService,
    SessionService,
)
from shop_identity.infrastructure.persistence.sqlalchemy import (
    SQLAlchemyUnitOfWork,
    create_engine_from_settings,
    create_session_maker,
    create_tables,
)
from shop_identity.services import JWTService, PasswordHashingService, PasswordPolicy

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings | None = None) -> None:
    """Configure process logging.

    Sets up:
    - Console output with timestamps and module names
    - Configurable log level for shop modules (from settings)
    - WARNING level for noisy third-party libraries
    """
    settings = settings or get_settings()
    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,  # Override any existing config
    )

    logging.getLogger("shop_identity").setLevel(log_level)
    logging.getLogger("shop_config").setLevel(log_level)

    # Quiet down noisy third-party loggers
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)
    logging.getLogger("asyncpg").setLevel(logging.WARNING)


@dataclass(frozen=True)
class AuthCore:
    """Every operation the identity core offers to its collaborators."""

    auth: AuthenticationService
    resets: PasswordResetService
    backoffice: BackofficeAccessService
    sessions: SessionService
    engine: AsyncEngine

    async def create_schema(self) -> None:
        await create_tables(self.engine)

    async def dispose(self) -> None:
        await self.engine.dispose()


def create_auth_core(
    settings: Settings | None = None,
    engine: AsyncEngine | None = None,
    password_service: PasswordHashingService | None = None,
) -> AuthCore:
    """
    Wire the services against one engine and one signing key.

    The signing key is read here, once, and injected into ``JWTService``;
    nothing below this function looks at settings again.

    Parameters
    ----------
    settings
        Settings to use (defaults to ``get_settings()``)
    engine
        Existing engine to share (defaults to one built from ``settings``)
    password_service
        Hasher override, e.g. fewer bcrypt rounds in tests

    Returns
    -------
    AuthCore with all services wired
    """
    settings = settings or get_settings()
    engine = engine or create_engine_from_settings(settings)
    session_maker: async_sessionmaker[AsyncSession] = create_session_maker(engine)

    def uow_factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(session_maker)

    jwt_service = JWTService(
        secret_key=settings.jwt_secret_key.get_secret_value(),
        access_token_expire_hours=settings.jwt_access_token_expire_hours,
        algorithm=settings.jwt_algorithm,
    )
    hasher = password_service or PasswordHashingService(rounds=settings.bcrypt_rounds)
    policy = PasswordPolicy(min_length=settings.password_min_length)

    auth = AuthenticationService(
        uow_factory=uow_factory,
        password_service=hasher,
        password_policy=policy,
        jwt_service=jwt_service,
        session_ttl=timedelta(hours=settings.effective_session_expire_hours),
    )
    resets = PasswordResetService(
        uow_factory=uow_factory,
        password_service=hasher,
        password_policy=policy,
        reset_ttl=timedelta(minutes=settings.password_reset_expire_minutes),
    )

    logger.debug("Identity core wired (algorithm=%s)", settings.jwt_algorithm)
    return AuthCore(
        auth=auth,
        resets=resets,
        backoffice=BackofficeAccessService(uow_factory),
        sessions=SessionService(uow_factory),
        engine=engine,
    )
