"""Abstract repository interface for password reset requests."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timedelta


@dataclass(frozen=True)
class PasswordResetData:
    """Immutable password reset record.

    Only the SHA-256 hash of the one-time secret is ever stored.
    """

    reset_id: int
    user_id: int
    reset_token_hash: str
    expires_at: datetime
    created_at: datetime

    def is_expired(self, now: datetime) -> bool:
        """Check if the reset token has expired."""
        return now > self.expires_at

    def time_until_expiration(self, now: datetime) -> timedelta:
        return self.expires_at - now


class PasswordResetRepository(ABC):
    """Abstract repository for password reset requests.

    All lookups take the *hash* of the secret, never the plaintext.
    """

    @abstractmethod
    async def save(
        self,
        user_id: int,
        reset_token_hash: str,
        expires_at: datetime,
    ) -> PasswordResetData:
        """Store a new reset request.

        Parameters
        ----------
        user_id
            Owner of the request
        reset_token_hash
            SHA-256 hash of the raw token
        expires_at
            When the token expires

        Returns
        -------
        The stored record with its assigned ``reset_id``
        """

    @abstractmethod
    async def find_by_token_hash(self, reset_token_hash: str) -> PasswordResetData | None:
        """Find a reset request by token hash, expired or not."""

    @abstractmethod
    async def consume_by_token_hash(
        self,
        reset_token_hash: str,
    ) -> PasswordResetData | None:
        """Atomically delete and return the request for ``reset_token_hash``.

        Of two concurrent callers with the same hash, exactly one receives
        the record; the other receives ``None``.
        """

    @abstractmethod
    async def list_active_by_user(self, user_id: int) -> list[PasswordResetData]:
        """List non-expired requests of a user, newest first."""

    @abstractmethod
    async def count_active_by_user(self, user_id: int) -> int:
        """Count non-expired requests of a user."""

    @abstractmethod
    async def delete(self, reset_id: int) -> bool:
        """Delete one request. Returns True if a row was removed."""

    @abstractmethod
    async def delete_by_user(self, user_id: int) -> int:
        """Delete every request of a user.

        Returns
        -------
        Number of requests deleted
        """

    @abstractmethod
    async def delete_expired(self) -> int:
        """Remove expired requests (maintenance sweep).

        Returns
        -------
        Number of requests deleted
        """
