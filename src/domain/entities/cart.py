"""カート集約ルート."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from ..identifiers import ItemId
from ..value_objects import CartConfig, CartSnapshot, Money

from .cart_item import CartItem


@dataclass
class Cart:
    """購入予定の商品明細を保持するコンテナ（集約ルート）.

    CartManager からは export() / import_state() のみを通して扱われる。
    """

    cart_id: str
    config: CartConfig = field(default_factory=CartConfig)
    _items: list[CartItem] = field(default_factory=list)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def add_item(self, name: str, unit_price: Money, quantity: int = 1) -> CartItem:
        """商品をカートに追加する."""
        item = CartItem.create(name=name, unit_price=unit_price, quantity=quantity)
        self._items.append(item)
        self.updated_at = datetime.now(timezone.utc)
        return item

    def remove_item(self, item_id: ItemId) -> bool:
        """指定明細を削除する."""
        for i, item in enumerate(self._items):
            if item.item_id == item_id:
                self._items.pop(i)
                self.updated_at = datetime.now(timezone.utc)
                return True
        return False

    def clear(self) -> None:
        """全明細を削除する."""
        self._items.clear()
        self.updated_at = datetime.now(timezone.utc)

    def get_total_amount(self) -> Money:
        """合計金額を計算する."""
        total = Money.zero()
        for item in self._items:
            total = total.add(item.get_amount())
        return total

    def get_item_count(self) -> int:
        """明細数を取得する."""
        return len(self._items)

    def is_empty(self) -> bool:
        """カートが空か判定する."""
        return len(self._items) == 0

    def get_items(self) -> list[CartItem]:
        """明細のリストを取得（防御的コピー）."""
        return list(self._items)

    def get_item(self, item_id: ItemId) -> CartItem | None:
        """指定IDの明細を取得する."""
        for item in self._items:
            if item.item_id == item_id:
                return item
        return None

    def export(self) -> CartSnapshot:
        """現在の状態をスナップショットとして書き出す."""
        return CartSnapshot(
            items=tuple(item.to_snapshot() for item in self._items),
            created_at=self.created_at.isoformat(),
            updated_at=self.updated_at.isoformat(),
        )

    def import_state(self, snapshot: CartSnapshot) -> None:
        """スナップショットから状態を復元する（既存の明細は置き換える）."""
        self._items = [CartItem.from_snapshot(item) for item in snapshot.items]
        self.created_at = datetime.fromisoformat(snapshot.created_at)
        self.updated_at = datetime.fromisoformat(snapshot.updated_at)
