"""カート状態ストレージのインメモリ実装."""
from src.domain.ports import CartStorage


class InMemoryCartStorage(CartStorage):
    """カート状態ストレージのインメモリ実装（テスト・ローカル開発用）."""

    def __init__(self) -> None:
        """初期化."""
        self._data: dict[str, str] = {}

    def init(self) -> None:
        """何もしない."""
        pass

    def restore(self, storage_key: str) -> str | None:
        """保存済みデータを取得する."""
        return self._data.get(storage_key)

    def save(self, storage_key: str, data: str) -> None:
        """データを保存する."""
        self._data[storage_key] = data

    def clear(self, storage_key: str) -> None:
        """保存済みデータを削除する."""
        self._data.pop(storage_key, None)

    def keys(self) -> list[str]:
        """保存済みのキー一覧を取得する."""
        return list(self._data)
