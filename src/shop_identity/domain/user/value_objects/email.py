"""Email value object.

Store accounts are keyed by email, compared case-insensitively: the whole
address is lowercased (local part included) before it is checked, stored
or looked up.
"""

import re
from dataclasses import dataclass

from email_validator import EmailNotValidError, validate_email

from shop_identity.exceptions import InvalidEmailError

# Top-level domain of at least two letters
_TLD_PATTERN = re.compile(r"\.[a-z]{2,}$")


@dataclass(frozen=True)
class Email:
    """Validated, lowercased email address used as the login identity."""

    value: str

    def __post_init__(self) -> None:
        raw = self.value.strip().lower() if isinstance(self.value, str) else ""
        if not raw:
            msg = "Email cannot be empty"
            raise InvalidEmailError(msg)

        try:
            checked = validate_email(raw, check_deliverability=False)
        except EmailNotValidError as exc:
            msg = f"Invalid email format: {self.value}"
            raise InvalidEmailError(msg) from exc

        if not _TLD_PATTERN.search(checked.domain):
            msg = f"Invalid email format: {self.value}"
            raise InvalidEmailError(msg)

        object.__setattr__(self, "value", checked.normalized)

    @classmethod
    def normalize(cls, email: "str | Email") -> str:
        """Return the lowercased, validated form of ``email``."""
        return email.value if isinstance(email, Email) else cls(email).value

    def __str__(self) -> str:
        return self.value
