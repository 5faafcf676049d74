"""ストレージキーの値オブジェクト."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class StorageKey:
    """外部ストレージ上でカート状態を引くためのキー."""

    value: str

    @classmethod
    def derive(
        cls,
        cart_id: str,
        prefix: str | None = None,
        suffix: str | None = None,
    ) -> StorageKey:
        """接頭辞 + カートID + 接尾辞 でキーを導出する."""
        return cls(f"{prefix or ''}{cart_id}{suffix or ''}")

    def __str__(self) -> str:
        return self.value
