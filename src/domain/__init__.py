"""ドメイン層モジュール."""
from .entities import Cart, CartItem
from .identifiers import ItemId
from .ports import CartStorage
from .services import (
    CartManager,
    CartManagerError,
    CartStorageClearError,
    DuplicateCartInstanceError,
    InvalidCartInstanceError,
    InvalidStorageImplementationError,
)
from .value_objects import (
    CartConfig,
    CartItemSnapshot,
    CartSnapshot,
    Money,
    StorageConfig,
    StorageKey,
)

__all__ = [
    # Identifiers
    "ItemId",
    # Value Objects
    "CartConfig",
    "CartItemSnapshot",
    "CartSnapshot",
    "Money",
    "StorageConfig",
    "StorageKey",
    # Entities
    "Cart",
    "CartItem",
    # Ports
    "CartStorage",
    # Services
    "CartManager",
    "CartManagerError",
    "CartStorageClearError",
    "DuplicateCartInstanceError",
    "InvalidCartInstanceError",
    "InvalidStorageImplementationError",
]
