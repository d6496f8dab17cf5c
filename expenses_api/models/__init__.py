from .base import EntityMixin, utcnow
from .user import User
from .transaction import Transaction

__all__ = ["EntityMixin", "utcnow", "User", "Transaction"]
