"""
Pytest configuration for tests that run against in-memory SQLite.

Import the shared fixtures to make them available.
"""

# Re-export shared database fixtures
from tests.shared.fixtures.database import (
    session_maker,
    sqlite_engine,
    uow_factory,
)

__all__ = [
    "session_maker",
    "sqlite_engine",
    "uow_factory",
]
