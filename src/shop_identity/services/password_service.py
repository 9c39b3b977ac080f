"""Password hashing service using bcrypt.

Provides secure password hashing and verification. Strength rules live in
``PasswordPolicy``; this service only transforms and compares.
"""

import bcrypt


class PasswordHashingService:
    """Service for secure password hashing and verification.

    Uses bcrypt with a per-call random salt baked into the output.

    Examples
    --------
    >>> service = PasswordHashingService(rounds=4)
    >>> hashed = service.hash("my_secure_password")
    >>> service.verify("my_secure_password", hashed)
    True
    >>> service.verify("wrong_password", hashed)
    False
    """

    # bcrypt only reads the first 72 bytes; longer input is refused, never cut
    MAX_BYTES = 72

    def __init__(self, rounds: int = 12):
        """Initialize the password hashing service.

        Parameters
        ----------
        rounds
            The bcrypt work factor (log2 of iterations). Default is 12.
            Tests use the minimum (4) to stay fast.
        """
        self._rounds = rounds

    def hash(self, password: str) -> str:
        """Hash a plaintext password.

        Parameters
        ----------
        password
            The plaintext password to hash (non-empty)

        Returns
        -------
        The bcrypt hash as a string
        """
        if not password:
            msg = "Cannot hash an empty password"
            raise ValueError(msg)
        salt = bcrypt.gensalt(rounds=self._rounds)
        hashed = bcrypt.hashpw(self._encode(password), salt)
        return hashed.decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        """Verify a password against a hash.

        bcrypt's comparison is constant-time. Malformed hashes and passwords
        longer than ``MAX_BYTES`` yield False.

        Returns
        -------
        True if password matches, False otherwise
        """
        if not password or not password_hash:
            return False
        try:
            return bcrypt.checkpw(
                self._encode(password),
                password_hash.encode("utf-8"),
            )
        except (ValueError, TypeError):
            # Invalid hash format or oversized password
            return False

    def needs_rehash(self, password_hash: str) -> bool:
        """Check if a password hash was produced with a different work factor."""
        try:
            # bcrypt format: $2b$XX$...
            parts = password_hash.split("$")
            if len(parts) >= 3:
                current_rounds = int(parts[2])
                return current_rounds != self._rounds
        except (ValueError, IndexError):
            pass
        return True

    def _encode(self, password: str) -> bytes:
        encoded = password.encode("utf-8")
        if len(encoded) > self.MAX_BYTES:
            msg = f"Password exceeds {self.MAX_BYTES} bytes"
            raise ValueError(msg)
        return encoded
