"""金額を表現する値オブジェクト."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Money:
    """金額（円）を表現する値オブジェクト."""

    value: int

    def __post_init__(self) -> None:
        """バリデーション."""
        if self.value < 0:
            raise ValueError("Money value cannot be negative")

    @classmethod
    def zero(cls) -> Money:
        """ゼロ円を生成する."""
        return cls(0)

    def add(self, other: Money) -> Money:
        """金額を加算して新しいMoneyを返す."""
        return Money(self.value + other.value)

    def multiply(self, factor: int) -> Money:
        """金額を乗算して新しいMoneyを返す."""
        if factor < 0:
            raise ValueError("Factor cannot be negative")
        return Money(self.value * factor)
