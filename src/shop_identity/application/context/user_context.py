"""User context for request-scoped user identity."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from shop_identity.schemas import TokenPayload


@dataclass(frozen=True)
class UserContext:
    """Immutable context for the current authenticated user.

    ``session_id`` is set only when the bearer token was matched against a
    live session row.
    """

    user_id: int
    email: str
    first_name: str = ""
    last_name: str = ""
    session_id: int | None = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @classmethod
    def from_payload(
        cls,
        payload: TokenPayload,
        session_id: int | None = None,
    ) -> UserContext:
        return cls(
            user_id=payload.user_id,
            email=payload.email,
            first_name=payload.first_name,
            last_name=payload.last_name,
            session_id=session_id,
        )

    def __str__(self) -> str:
        return f"UserContext({self.email})"
