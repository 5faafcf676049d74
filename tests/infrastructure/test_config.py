"""CartManager 設定読み込みのテスト."""
import json

import pytest

from src.domain.services import CartManager, InvalidStorageImplementationError
from src.domain.value_objects import Money
from src.infrastructure.config import (
    load_cart_manager_config,
    load_cart_manager_config_file,
    load_cart_manager_config_from_env,
)
from src.infrastructure.storages import InMemoryCartStorage, SessionCartStorage


class TestLoadCartManagerConfig:
    """load_cart_manager_configの単体テスト."""

    def test_ドライバー名をインスタンスに解決する(self) -> None:
        config = load_cart_manager_config(
            {
                "defaults": {"storage": {"driver": "memory", "autosave": False}},
                "carts": {"a": {}, "b": {"storage": {"driver": "memory", "autosave": True}}},
            }
        )
        default_driver = config["defaults"]["storage"]["driver"]
        assert isinstance(default_driver, InMemoryCartStorage)
        assert config["carts"]["b"]["storage"]["driver"] is default_driver
        assert config["carts"]["a"] == {}

    def test_宣言順を保つ(self) -> None:
        config = load_cart_manager_config({"defaults": {}, "carts": {"z": {}, "a": {}}})
        assert list(config["carts"]) == ["z", "a"]

    def test_noneは永続化なし(self) -> None:
        config = load_cart_manager_config({"defaults": {"storage": {"driver": "none"}}})
        assert config["defaults"]["storage"]["driver"] is None
        assert config["carts"] == {}

    def test_生成済みのストレージはそのまま使う(self) -> None:
        storage = InMemoryCartStorage()
        config = load_cart_manager_config({"defaults": {"storage": {"driver": storage}}})
        assert config["defaults"]["storage"]["driver"] is storage

    def test_storagesで名前に対応するストレージを渡せる(self) -> None:
        storage = InMemoryCartStorage()
        config = load_cart_manager_config(
            {"defaults": {"storage": {"driver": "memory"}}}, storages={"memory": storage}
        )
        assert config["defaults"]["storage"]["driver"] is storage

    def test_sessionドライバーにsession_factoryを渡せる(self) -> None:
        session: dict[str, str] = {}
        config = load_cart_manager_config(
            {"defaults": {"storage": {"driver": "session"}}, "carts": {"main": {}}},
            session_factory=lambda: session,
        )
        assert isinstance(config["defaults"]["storage"]["driver"], SessionCartStorage)

    def test_未知のドライバー名はエラー(self) -> None:
        with pytest.raises(InvalidStorageImplementationError):
            load_cart_manager_config({"defaults": {"storage": {"driver": "redis"}}})

    def test_文字列でもCartStorageでもないドライバーはエラー(self) -> None:
        with pytest.raises(InvalidStorageImplementationError, match="does not implement"):
            load_cart_manager_config({"defaults": {"storage": {"driver": 42}}})

    def test_読み込んだ設定でCartManagerを生成できる(self) -> None:
        session: dict[str, str] = {}
        data = {
            "defaults": {"storage": {"driver": "session", "autosave": True, "storage_key_prefix": "shop_"}},
            "carts": {"main": {}, "wishlist": {}},
        }

        with CartManager(load_cart_manager_config(data, session_factory=lambda: session)) as manager:
            manager.get_cart().add_item("りんご", Money(120))

        assert sorted(session) == ["shop_main", "shop_wishlist"]
        restored = CartManager(load_cart_manager_config(data, session_factory=lambda: session))
        assert restored.get_cart("main").get_item_count() == 1


class TestLoadCartManagerConfigFile:
    """load_cart_manager_config_fileの単体テスト."""

    def test_JSONファイルから読み込む(self, tmp_path) -> None:
        path = tmp_path / "carts.json"
        path.write_text(
            json.dumps(
                {
                    "defaults": {"storage": {"driver": "memory", "autosave": False}},
                    "carts": {"main": {"currency": "JPY"}},
                }
            ),
            encoding="utf-8",
        )

        config = load_cart_manager_config_file(path)

        assert isinstance(config["defaults"]["storage"]["driver"], InMemoryCartStorage)
        assert config["carts"]["main"] == {"currency": "JPY"}


class TestLoadCartManagerConfigFromEnv:
    """load_cart_manager_config_from_envの単体テスト."""

    def test_環境変数から設定を組み立てる(self) -> None:
        config = load_cart_manager_config_from_env(
            {
                "CART_STORAGE_DRIVER": "memory",
                "CART_AUTOSAVE": "true",
                "CART_STORAGE_KEY_PREFIX": "shop_",
                "CART_INSTANCES": "main, wishlist",
            }
        )
        manager = CartManager(config)
        assert manager.cart_ids() == ["main", "wishlist"]
        assert manager.context() == "main"
        assert manager.get_cart_storage_key("wishlist") == "shop_wishlist"
        assert manager.get_cart_config("main").storage.autosave is True
        assert isinstance(manager.get_cart_storage_driver("main"), InMemoryCartStorage)

    def test_未設定なら永続化なしのdefaultカート(self) -> None:
        config = load_cart_manager_config_from_env({})
        manager = CartManager(config)
        assert manager.cart_ids() == ["default"]
        assert manager.get_cart_config("default").storage.driver is None
        assert manager.get_cart_config("default").storage.autosave is False

    def test_未知のドライバー名は警告して永続化なし(self, caplog) -> None:
        config = load_cart_manager_config_from_env({"CART_STORAGE_DRIVER": "redis"})
        assert config["defaults"]["storage"]["driver"] is None
        assert "Unknown CART_STORAGE_DRIVER=redis" in caplog.text

    def test_テーブル名を環境変数から渡す(self) -> None:
        config = load_cart_manager_config_from_env(
            {"CART_STORAGE_DRIVER": "dynamodb", "CART_STORAGE_TABLE_NAME": "carts"}
        )
        assert config["defaults"]["storage"]["driver"].table_name == "carts"
