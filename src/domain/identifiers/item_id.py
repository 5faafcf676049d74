"""カート明細識別子の値オブジェクト."""
from __future__ import annotations

import uuid
from dataclasses import dataclass


@dataclass(frozen=True)
class ItemId:
    """カート内の明細を一意に識別するローカル識別子."""

    value: str

    def __post_init__(self) -> None:
        """バリデーション."""
        if not self.value:
            raise ValueError("ItemId cannot be empty")

    @classmethod
    def generate(cls) -> ItemId:
        """新しいItemIdを生成する."""
        return cls(uuid.uuid4().hex)

    def __str__(self) -> str:
        return self.value
