"""ストレージドライバー実装モジュール."""
from .cart_storage_factory import STORAGE_DRIVER_NAMES, create_cart_storage
from .dynamodb_cart_storage import DynamoDBCartStorage
from .in_memory_cart_storage import InMemoryCartStorage
from .session_cart_storage import SessionCartStorage

__all__ = [
    "STORAGE_DRIVER_NAMES",
    "DynamoDBCartStorage",
    "InMemoryCartStorage",
    "SessionCartStorage",
    "create_cart_storage",
]
