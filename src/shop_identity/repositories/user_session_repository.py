"""Abstract repository interface for user sessions."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timedelta


@dataclass(frozen=True)
class UserSessionData:
    """Immutable session record.

    A session is revocable bookkeeping for an issued bearer token; the
    token itself is identified by its SHA-256 hash.
    """

    session_id: int
    user_id: int
    token_hash: str
    expires_at: datetime
    created_at: datetime

    def is_expired(self, now: datetime) -> bool:
        """Check if the session has expired."""
        return now > self.expires_at

    def is_valid(self, now: datetime) -> bool:
        return not self.is_expired(now)

    def time_until_expiration(self, now: datetime) -> timedelta:
        return self.expires_at - now


class UserSessionRepository(ABC):
    """Abstract repository for user sessions."""

    @abstractmethod
    async def save(
        self,
        user_id: int,
        token_hash: str,
        expires_at: datetime,
    ) -> UserSessionData:
        """Store a new session and return it with its ``session_id``."""

    @abstractmethod
    async def find_by_id(self, session_id: int) -> UserSessionData | None:
        """Find a session by ID."""

    @abstractmethod
    async def find_by_token_hash(self, token_hash: str) -> UserSessionData | None:
        """Find a session by the hash of its bearer token."""

    @abstractmethod
    async def list_by_user(self, user_id: int) -> list[UserSessionData]:
        """List every session of a user, newest first."""

    @abstractmethod
    async def list_active_by_user(self, user_id: int) -> list[UserSessionData]:
        """List non-expired sessions of a user, newest first."""

    @abstractmethod
    async def count_active_by_user(self, user_id: int) -> int:
        """Count non-expired sessions of a user."""

    @abstractmethod
    async def extend(self, session_id: int, duration: timedelta) -> UserSessionData | None:
        """Push ``expires_at`` forward by ``duration``.

        Returns
        -------
        The updated session, or None if it does not exist
        """

    @abstractmethod
    async def invalidate(self, session_id: int) -> UserSessionData | None:
        """Force-expire a session without deleting it (kept for audit).

        Returns
        -------
        The updated session, or None if it does not exist
        """

    @abstractmethod
    async def delete(self, session_id: int) -> bool:
        """Delete one session. Returns True if a row was removed."""

    @abstractmethod
    async def delete_by_token_hash(self, token_hash: str) -> bool:
        """Delete the session for a bearer token hash (logout)."""

    @abstractmethod
    async def delete_by_user(self, user_id: int) -> int:
        """Delete every session of a user.

        Returns
        -------
        Number of sessions deleted
        """

    @abstractmethod
    async def delete_expired(self) -> int:
        """Remove expired sessions (maintenance sweep).

        Returns
        -------
        Number of sessions deleted
        """
