"""カート設定の値オブジェクト."""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ..ports import CartStorage


@dataclass(frozen=True)
class StorageConfig:
    """カート状態の永続化設定.

    driver が None の場合は永続化しない。
    """

    driver: CartStorage | None = None
    autosave: bool = False
    storage_key_prefix: str | None = None
    storage_key_suffix: str | None = None

    def __post_init__(self) -> None:
        """バリデーション."""
        if not isinstance(self.autosave, bool):
            raise ValueError("autosave must be a bool")
        for name in ("storage_key_prefix", "storage_key_suffix"):
            value = getattr(self, name)
            if value is not None and not isinstance(value, str):
                raise ValueError(f"{name} must be a string")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | StorageConfig | None) -> StorageConfig:
        """辞書から生成する（存在しないキーは既定値）."""
        if isinstance(data, StorageConfig):
            return data
        if data is None:
            return cls()
        return cls(
            driver=data.get("driver"),
            autosave=False if data.get("autosave") is None else data["autosave"],
            storage_key_prefix=data.get("storage_key_prefix"),
            storage_key_suffix=data.get("storage_key_suffix"),
        )

    def to_dict(self) -> dict[str, Any]:
        """辞書に変換する."""
        return {
            "driver": self.driver,
            "autosave": self.autosave,
            "storage_key_prefix": self.storage_key_prefix,
            "storage_key_suffix": self.storage_key_suffix,
        }

    def has_driver(self) -> bool:
        """ストレージドライバーが設定されているか判定する."""
        return self.driver is not None


@dataclass(frozen=True)
class CartConfig:
    """カート1件分の実効設定.

    storage 以外のトップレベルキーは options にそのまま保持し、Cart に渡す。
    """

    storage: StorageConfig = field(default_factory=StorageConfig)
    options: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | CartConfig | None) -> CartConfig:
        """辞書から生成する."""
        if isinstance(data, CartConfig):
            return data
        if data is None:
            return cls()
        options = {key: value for key, value in data.items() if key != "storage"}
        return cls(storage=StorageConfig.from_dict(data.get("storage")), options=options)

    def to_dict(self) -> dict[str, Any]:
        """辞書に変換する."""
        return {**self.options, "storage": self.storage.to_dict()}

    def merged_with(self, overrides: Mapping[str, Any] | None) -> CartConfig:
        """カート固有の設定で上書きした新しい設定を返す.

        マージは1階層のみ。overrides に storage があれば storage セクション全体が置き換わる。
        """
        if not overrides:
            return self
        return CartConfig.from_dict({**self.to_dict(), **overrides})

    def get_option(self, key: str, default: Any = None) -> Any:
        """storage 以外の設定値を取得する."""
        return self.options.get(key, default)
