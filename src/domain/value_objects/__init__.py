"""値オブジェクトモジュール."""
from .cart_config import CartConfig, StorageConfig
from .cart_snapshot import CartItemSnapshot, CartSnapshot
from .money import Money
from .storage_key import StorageKey

__all__ = [
    "CartConfig",
    "CartItemSnapshot",
    "CartSnapshot",
    "Money",
    "StorageConfig",
    "StorageKey",
]
