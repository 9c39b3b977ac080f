"""Password strength policy.

Registration, password change and reset confirmation all run the same
policy instance; there is no weaker rule set for any entry point.
"""

import re
from dataclasses import dataclass, field


@dataclass(frozen=True)
class PasswordValidationResult:
    """Outcome of a policy check. ``errors`` lists every violated rule."""

    is_valid: bool
    errors: list[str] = field(default_factory=list)


class PasswordPolicy:
    """Stateless password validator.

    Current requirements:
    - Minimum 8 characters (configurable)
    - Maximum 72 bytes once UTF-8 encoded (bcrypt input limit)
    - At least one lowercase letter, one uppercase letter and one digit
    """

    DEFAULT_MIN_LENGTH = 8
    MAX_BYTES = 72

    _LOWER = re.compile(r"[a-z]")
    _UPPER = re.compile(r"[A-Z]")
    _DIGIT = re.compile(r"\d")

    def __init__(self, min_length: int = DEFAULT_MIN_LENGTH):
        if min_length < self.DEFAULT_MIN_LENGTH:
            msg = f"Minimum password length cannot be below {self.DEFAULT_MIN_LENGTH}"
            raise ValueError(msg)
        self._min_length = min_length

    @property
    def min_length(self) -> int:
        return self._min_length

    def validate(self, password: str | None) -> PasswordValidationResult:
        """Check ``password`` against every rule and report all violations."""
        if not password:
            return PasswordValidationResult(
                is_valid=False,
                errors=["Password is required"],
            )

        errors: list[str] = []
        if len(password) < self._min_length:
            errors.append(f"Password must be at least {self._min_length} characters long")
        if len(password.encode("utf-8")) > self.MAX_BYTES:
            errors.append(f"Password must be at most {self.MAX_BYTES} bytes long")
        if not self._LOWER.search(password):
            errors.append("Password must contain at least one lowercase letter")
        if not self._UPPER.search(password):
            errors.append("Password must contain at least one uppercase letter")
        if not self._DIGIT.search(password):
            errors.append("Password must contain at least one number")

        return PasswordValidationResult(is_valid=not errors, errors=errors)
