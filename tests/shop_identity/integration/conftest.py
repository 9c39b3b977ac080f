"""
Pytest configuration for shop_identity integration tests.

Integration tests use Testcontainers for an ephemeral PostgreSQL instance.
Import the shared fixtures to make them available.
"""

# Re-export shared database fixtures
from tests.shared.fixtures.database import (
    pg_engine,
    postgres_container,
)

__all__ = [
    "pg_engine",
    "postgres_container",
]
