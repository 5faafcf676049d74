"""Cartのテスト."""
import pytest

from src.domain.entities import Cart, CartItem
from src.domain.identifiers import ItemId
from src.domain.value_objects import CartConfig, Money


class TestCartItem:
    """CartItemの単体テスト."""

    def test_小計は単価と数量の積(self) -> None:
        item = CartItem.create(name="りんご", unit_price=Money(120), quantity=3)
        assert item.get_amount() == Money(360)

    def test_商品名が空だとエラー(self) -> None:
        with pytest.raises(ValueError, match="name cannot be empty"):
            CartItem.create(name="", unit_price=Money(120))

    def test_数量が0だとエラー(self) -> None:
        with pytest.raises(ValueError, match="Quantity"):
            CartItem.create(name="りんご", unit_price=Money(120), quantity=0)


class TestCart:
    """Cartの単体テスト."""

    def test_IDと設定で生成できる(self) -> None:
        config = CartConfig.from_dict({"currency": "JPY"})
        cart = Cart("main", config)
        assert cart.cart_id == "main"
        assert cart.config is config
        assert cart.is_empty()

    def test_商品を追加すると合計金額に反映される(self) -> None:
        cart = Cart("main")
        cart.add_item("りんご", Money(120), quantity=2)
        cart.add_item("みかん", Money(80))
        assert cart.get_item_count() == 2
        assert cart.get_total_amount() == Money(320)

    def test_明細を削除できる(self) -> None:
        cart = Cart("main")
        item = cart.add_item("りんご", Money(120))
        assert cart.remove_item(item.item_id) is True
        assert cart.is_empty()

    def test_存在しない明細の削除はFalse(self) -> None:
        cart = Cart("main")
        assert cart.remove_item(ItemId("nonexistent")) is False

    def test_clearで全明細を削除する(self) -> None:
        cart = Cart("main")
        cart.add_item("りんご", Money(120))
        cart.clear()
        assert cart.is_empty()

    def test_get_itemsは防御的コピーを返す(self) -> None:
        cart = Cart("main")
        cart.add_item("りんご", Money(120))
        cart.get_items().clear()
        assert cart.get_item_count() == 1

    def test_exportした状態を別のカートにimportできる(self) -> None:
        cart = Cart("main")
        item = cart.add_item("りんご", Money(120), quantity=2)
        other = Cart("other")
        other.import_state(cart.export())
        assert other.get_item(item.item_id) == item
        assert other.created_at == cart.created_at
        assert other.updated_at == cart.updated_at

    def test_importは既存の明細を置き換える(self) -> None:
        source = Cart("source")
        source.add_item("りんご", Money(120))
        target = Cart("target")
        target.add_item("みかん", Money(80))
        target.add_item("ぶどう", Money(400))
        target.import_state(source.export())
        assert [item.name for item in target.get_items()] == ["りんご"]

    def test_JSON経由の往復でスナップショットが変わらない(self) -> None:
        from src.domain.value_objects import CartSnapshot

        cart = Cart("main")
        cart.add_item("りんご", Money(120), quantity=2)
        blob = cart.export().to_json()
        restored = Cart("main")
        restored.import_state(CartSnapshot.from_json(blob))
        assert restored.export().to_json() == blob
