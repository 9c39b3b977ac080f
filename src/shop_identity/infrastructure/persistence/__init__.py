"""Persistence implementations for shop_identity.

This package contains database-specific implementations of the
repository interfaces defined in shop_identity.domain and
shop_identity.repositories.

Structure:
    persistence/
    └── sqlalchemy/     # SQLAlchemy/SQL database implementation
"""
