"""ポートモジュール."""
from .cart_storage import CartStorage

__all__ = [
    "CartStorage",
]
