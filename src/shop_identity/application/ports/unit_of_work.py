"""Unit-of-work port used by the application services."""

from __future__ import annotations

from types import TracebackType
from typing import Callable, Protocol

from shop_identity.domain.user import UserRepository
from shop_identity.repositories import PasswordResetRepository, UserSessionRepository


class IdentityUnitOfWork(Protocol):
    """One transaction spanning the user, session and reset stores.

    Leaving the ``async with`` block normally commits. Leaving it with any
    exception, cancellation included, rolls back so no partial multi-row
    mutation is ever committed.
    """

    users: UserRepository
    sessions: UserSessionRepository
    resets: PasswordResetRepository

    async def __aenter__(self) -> IdentityUnitOfWork: ...

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None: ...

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...


UnitOfWorkFactory = Callable[[], IdentityUnitOfWork]
