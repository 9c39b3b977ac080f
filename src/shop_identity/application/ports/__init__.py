"""Ports the application layer depends on."""

from shop_identity.application.ports.unit_of_work import (
    IdentityUnitOfWork,
    UnitOfWorkFactory,
)

__all__ = ["IdentityUnitOfWork", "UnitOfWorkFactory"]
