"""インフラストラクチャ層モジュール."""
from .config import (
    load_cart_manager_config,
    load_cart_manager_config_file,
    load_cart_manager_config_from_env,
)
from .storages import (
    DynamoDBCartStorage,
    InMemoryCartStorage,
    SessionCartStorage,
    create_cart_storage,
)

__all__ = [
    "DynamoDBCartStorage",
    "InMemoryCartStorage",
    "SessionCartStorage",
    "create_cart_storage",
    "load_cart_manager_config",
    "load_cart_manager_config_file",
    "load_cart_manager_config_from_env",
]
