"""カート状態ストレージインターフェース."""
from abc import ABC, abstractmethod


class CartStorage(ABC):
    """カート状態を永続化するストレージドライバーのインターフェース.

    保存されるデータはエンコード済みの文字列で、ドライバーは中身を解釈しない。
    """

    @abstractmethod
    def init(self) -> None:
        """ストレージを利用可能にする（複数回呼ばれても安全であること）."""
        pass

    @abstractmethod
    def restore(self, storage_key: str) -> str | None:
        """保存済みデータを取得する（未保存ならNone）."""
        pass

    @abstractmethod
    def save(self, storage_key: str, data: str) -> None:
        """データを保存する."""
        pass

    @abstractmethod
    def clear(self, storage_key: str) -> None:
        """保存済みデータを削除する（未保存でもエラーにしない）."""
        pass
