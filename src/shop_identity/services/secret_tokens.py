"""One-time secrets for password resets and session bookkeeping."""

import hashlib
import secrets

RESET_TOKEN_BYTES = 32


def generate_secret(nbytes: int = RESET_TOKEN_BYTES) -> str:
    """Return a URL-safe random secret."""
    return secrets.token_urlsafe(nbytes)


def hash_secret(raw: str) -> str:
    """SHA-256 hex digest used as the lookup key for a stored secret."""
    return hashlib.sha256(raw.encode("utf-8")).hexdigest()
