"""User aggregate.

Users are immutable: every state transition returns a new, fully populated
``User``. Repositories persist the returned value with a full-record
replace, so a caller never has to reason about half-mutated objects.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from datetime import datetime
from typing import Union

from shop_identity.domain.user.value_objects import BackofficeStatus, Email
from shop_identity.shared.time import utc_now


@dataclass(frozen=True)
class UserUpdate:
    """Fields a caller wants to change. ``None`` means "leave as is"."""

    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    is_active: bool | None = None
    backoffice_status: BackofficeStatus | None = None
    password_hash: str | None = None

    def supplied(self) -> dict[str, object]:
        """Return only the fields that were actually set."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }

    def is_empty(self) -> bool:
        return not self.supplied()


@dataclass(frozen=True)
class User:
    """
    User aggregate root.

    ``user_id`` is ``None`` until the user store assigns the surrogate key.
    ``password_hash`` never leaves the core; use ``UserProfile`` for output.
    """

    email: str
    password_hash: str = field(repr=False)
    first_name: str
    last_name: str
    is_active: bool = True
    backoffice_status: BackofficeStatus = BackofficeStatus.PENDING
    user_id: int | None = None
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    def __post_init__(self) -> None:
        object.__setattr__(self, "email", Email.normalize(self.email))
        if not isinstance(self.backoffice_status, BackofficeStatus):
            object.__setattr__(
                self,
                "backoffice_status",
                BackofficeStatus(self.backoffice_status),
            )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def is_approved(self) -> bool:
        return self.backoffice_status == BackofficeStatus.APPROVED

    @property
    def is_pending(self) -> bool:
        return self.backoffice_status == BackofficeStatus.PENDING

    @property
    def is_rejected(self) -> bool:
        return self.backoffice_status == BackofficeStatus.REJECTED

    def merge(self, update: UserUpdate) -> User:
        """Overlay the supplied fields of ``update`` onto this user."""
        changes = update.supplied()
        if not changes:
            return self
        return replace(self, **changes, updated_at=utc_now())

    def with_password_hash(self, password_hash: str) -> User:
        return self.merge(UserUpdate(password_hash=password_hash))

    def approve_backoffice(self) -> User:
        return self.merge(UserUpdate(backoffice_status=BackofficeStatus.APPROVED))

    def reject_backoffice(self) -> User:
        return self.merge(UserUpdate(backoffice_status=BackofficeStatus.REJECTED))

    def activate(self) -> User:
        return self.merge(UserUpdate(is_active=True))

    def deactivate(self) -> User:
        return self.merge(UserUpdate(is_active=False))

    @classmethod
    def create(
        cls,
        email: Union[str, Email],
        password_hash: str,
        first_name: str,
        last_name: str,
    ) -> User:
        """Build a freshly registered user: active, awaiting approval."""
        now = utc_now()
        return cls(
            email=Email.normalize(email),
            password_hash=password_hash,
            first_name=first_name.strip(),
            last_name=last_name.strip(),
            is_active=True,
            backoffice_status=BackofficeStatus.PENDING,
            created_at=now,
            updated_at=now,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, User):
            return NotImplemented
        if self.user_id is None or other.user_id is None:
            return self is other
        return self.user_id == other.user_id

    def __hash__(self) -> int:
        return hash(self.user_id) if self.user_id is not None else id(self)
