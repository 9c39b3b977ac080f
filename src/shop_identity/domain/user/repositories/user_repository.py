"""User repository interface."""

from abc import ABC, abstractmethod
from typing import Optional, Union

from shop_identity.domain.user.aggregates.user import User
from shop_identity.domain.user.value_objects import BackofficeStatus, Email


class UserRepository(ABC):
    """Repository interface for User aggregates.

    Emails are stored lowercased; every lookup normalises its argument
    first, so ``find_by_email`` is case-insensitive.
    """

    @abstractmethod
    async def find_by_id(self, user_id: int, for_update: bool = False) -> Optional[User]:
        """Find a user by their ID.

        ``for_update`` locks the row until the transaction ends, so
        concurrent flows for the same user run one after the other.
        """

    @abstractmethod
    async def find_by_email(
        self,
        email: Union[str, Email],
        for_update: bool = False,
    ) -> Optional[User]:
        """Find a user by their email address (optionally row-locked)."""

    @abstractmethod
    async def exists_by_email(self, email: Union[str, Email]) -> bool:
        """Check if a user exists with the given email."""

    @abstractmethod
    async def save(self, user: User) -> User:
        """Insert a new user and return it with its assigned ``user_id``.

        Raises
        ------
        EmailAlreadyExistsError
            If the email is already registered
        """

    @abstractmethod
    async def update(self, user: User) -> User:
        """Replace the stored record keyed by ``user.user_id``.

        Raises
        ------
        UserNotFoundError
            If no user has that id
        EmailAlreadyExistsError
            If the new email belongs to another user
        """

    @abstractmethod
    async def delete(self, user_id: int) -> bool:
        """Delete a user by ID. Sessions and resets cascade."""

    @abstractmethod
    async def count(self) -> int:
        """Count total users."""

    @abstractmethod
    async def list_all(self) -> list[User]:
        """List all users, oldest first."""

    @abstractmethod
    async def list_by_backoffice_status(self, status: BackofficeStatus) -> list[User]:
        """List users in the given approval state, oldest first."""
