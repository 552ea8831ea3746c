from .base import Base
from .user import User
from .transaction import Transaction, TransactionType
from .category import Category, DEFAULT_COLOR, DEFAULT_ICON

__all__ = [
    "Base",
    "User",
    "Transaction",
    "TransactionType",
    "Category",
    "DEFAULT_COLOR",
    "DEFAULT_ICON",
]
