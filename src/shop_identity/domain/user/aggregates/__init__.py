from shop_identity.domain.user.aggregates.user import User, UserUpdate

__all__ = ["User", "UserUpdate"]
