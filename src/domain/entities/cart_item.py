"""カート内明細エンティティ."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone

from ..identifiers import ItemId
from ..value_objects import CartItemSnapshot, Money


@dataclass(frozen=True)
class CartItem:
    """カートに追加された商品1行（Cart集約内でのみ意味を持つ）."""

    item_id: ItemId
    name: str
    unit_price: Money
    quantity: int
    added_at: datetime

    def __post_init__(self) -> None:
        """バリデーション."""
        if not self.name:
            raise ValueError("Item name cannot be empty")
        if self.quantity < 1:
            raise ValueError("Quantity must be at least 1")

    @classmethod
    def create(
        cls,
        name: str,
        unit_price: Money,
        quantity: int = 1,
        added_at: datetime | None = None,
    ) -> CartItem:
        """新しい明細を作成する."""
        return cls(
            item_id=ItemId.generate(),
            name=name,
            unit_price=unit_price,
            quantity=quantity,
            added_at=added_at or datetime.now(timezone.utc),
        )

    def get_amount(self) -> Money:
        """小計（単価 × 数量）を取得."""
        return self.unit_price.multiply(self.quantity)

    def to_snapshot(self) -> CartItemSnapshot:
        return CartItemSnapshot(
            item_id=self.item_id.value,
            name=self.name,
            unit_price=self.unit_price.value,
            quantity=self.quantity,
            added_at=self.added_at.isoformat(),
        )

    @classmethod
    def from_snapshot(cls, snapshot: CartItemSnapshot) -> CartItem:
        return cls(
            item_id=ItemId(snapshot.item_id),
            name=snapshot.name,
            unit_price=Money(snapshot.unit_price),
            quantity=snapshot.quantity,
            added_at=datetime.fromisoformat(snapshot.added_at),
        )
