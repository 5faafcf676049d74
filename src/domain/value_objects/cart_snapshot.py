"""カート状態スナップショットの値オブジェクト."""
from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

SCHEMA_VERSION = 1


@dataclass(frozen=True)
class CartItemSnapshot:
    """明細1件分のスナップショット."""

    item_id: str
    name: str
    unit_price: int
    quantity: int
    added_at: str

    def to_dict(self) -> dict[str, Any]:
        """辞書に変換する."""
        return {
            "item_id": self.item_id,
            "name": self.name,
            "unit_price": self.unit_price,
            "quantity": self.quantity,
            "added_at": self.added_at,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CartItemSnapshot:
        """辞書から生成する."""
        return cls(
            item_id=str(data["item_id"]),
            name=str(data["name"]),
            unit_price=int(data["unit_price"]),
            quantity=int(data["quantity"]),
            added_at=str(data["added_at"]),
        )


@dataclass(frozen=True)
class CartSnapshot:
    """Cart.export() が返す状態のスナップショット.

    ストレージへはJSON文字列として保存する。スキーマ:

        {"version": 1,
         "items": [{"item_id", "name", "unit_price", "quantity", "added_at"}],
         "created_at": ISO8601, "updated_at": ISO8601}
    """

    items: tuple[CartItemSnapshot, ...]
    created_at: str
    updated_at: str

    def to_dict(self) -> dict[str, Any]:
        """辞書に変換する."""
        return {
            "version": SCHEMA_VERSION,
            "items": [item.to_dict() for item in self.items],
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }

    def to_json(self) -> str:
        """JSON文字列にエンコードする（キー順固定）."""
        return json.dumps(
            self.to_dict(), ensure_ascii=False, sort_keys=True, separators=(",", ":")
        )

    @classmethod
    def from_json(cls, blob: str | bytes) -> CartSnapshot:
        """JSON文字列からデコードする."""
        try:
            data = json.loads(blob)
        except (TypeError, ValueError) as e:
            raise ValueError(f"Invalid cart snapshot: {e}") from e
        if not isinstance(data, dict):
            raise ValueError("Invalid cart snapshot: top level must be an object")

        version = data.get("version")
        if version != SCHEMA_VERSION:
            raise ValueError(f"Unsupported cart snapshot version: {version}")

        try:
            items = tuple(CartItemSnapshot.from_dict(item) for item in data["items"])
            return cls(
                items=items,
                created_at=str(data["created_at"]),
                updated_at=str(data["updated_at"]),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise ValueError(f"Invalid cart snapshot: {e}") from e
