"""CartStorage ファクトリ."""
import logging
from collections.abc import Callable, MutableMapping

from src.domain.ports import CartStorage
from src.domain.services import InvalidStorageImplementationError

logger = logging.getLogger(__name__)

STORAGE_DRIVER_NAMES = ("memory", "session", "dynamodb")


def create_cart_storage(
    name: str,
    session_factory: Callable[[], MutableMapping[str, str]] | None = None,
    table_name: str | None = None,
) -> CartStorage:
    """ドライバー名からCartStorageを生成する.

    name:
        "memory"   → InMemoryCartStorage（ローカル開発・テスト用）
        "session"  → SessionCartStorage（session_factory が必須）
        "dynamodb" → DynamoDBCartStorage

    Raises:
        InvalidStorageImplementationError: 未知のドライバー名、または必要な引数が無い場合
    """
    if name == "memory":
        from src.infrastructure.storages.in_memory_cart_storage import InMemoryCartStorage

        return InMemoryCartStorage()

    if name == "session":
        if session_factory is None:
            raise InvalidStorageImplementationError(
                "The session storage driver requires a session_factory."
            )
        from src.infrastructure.storages.session_cart_storage import SessionCartStorage

        return SessionCartStorage(session_factory)

    if name == "dynamodb":
        from src.infrastructure.storages.dynamodb_cart_storage import DynamoDBCartStorage

        return DynamoDBCartStorage(table_name)

    raise InvalidStorageImplementationError(
        f"Unknown storage driver: {name}. Valid drivers are {STORAGE_DRIVER_NAMES}"
    )
