"""ドメインサービスモジュール."""
from .cart_manager import (
    CartManager,
    CartManagerError,
    CartStorageClearError,
    DuplicateCartInstanceError,
    InvalidCartInstanceError,
    InvalidStorageImplementationError,
)

__all__ = [
    "CartManager",
    "CartManagerError",
    "CartStorageClearError",
    "DuplicateCartInstanceError",
    "InvalidCartInstanceError",
    "InvalidStorageImplementationError",
]
