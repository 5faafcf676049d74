"""セッションを使ったカート状態ストレージ実装."""
import logging
from collections.abc import Callable, MutableMapping

from src.domain.ports import CartStorage

logger = logging.getLogger(__name__)


class SessionCartStorage(CartStorage):
    """ユーザーセッション（辞書互換オブジェクト）にカート状態を保存する.

    セッションは最初の操作時に session_factory から1度だけ取得する。
    """

    def __init__(self, session_factory: Callable[[], MutableMapping[str, str]]) -> None:
        """初期化.

        Args:
            session_factory: 現在のリクエストのセッションを返す呼び出し可能オブジェクト
        """
        self._session_factory = session_factory
        self._session: MutableMapping[str, str] | None = None

    def init(self) -> None:
        """セッションを開始する（開始済みなら何もしない）."""
        if self._session is None:
            self._session = self._session_factory()
            logger.debug("Session storage initialized")

    @property
    def session(self) -> MutableMapping[str, str]:
        self.init()
        return self._session

    def restore(self, storage_key: str) -> str | None:
        """セッションから保存済みデータを取得する."""
        return self.session.get(storage_key)

    def save(self, storage_key: str, data: str) -> None:
        """セッションにデータを保存する."""
        self.session[storage_key] = data

    def clear(self, storage_key: str) -> None:
        """セッションから保存済みデータを削除する."""
        self.session.pop(storage_key, None)
