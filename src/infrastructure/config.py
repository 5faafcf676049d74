"""CartManager 設定の読み込み.

設定ファイルや環境変数ではストレージドライバーを名前（"memory" など）で指定する。
ここで名前をドライバーのインスタンスに解決してから CartManager に渡す。
"""
import json
import logging
import os
from collections.abc import Callable, Mapping, MutableMapping
from pathlib import Path
from typing import Any

from src.domain.ports import CartStorage
from src.domain.services import InvalidStorageImplementationError
from src.infrastructure.storages import STORAGE_DRIVER_NAMES, create_cart_storage

logger = logging.getLogger(__name__)

DISABLED_DRIVER_NAMES = ("", "none")
TRUTHY_VALUES = ("1", "true", "yes", "on")


class _DriverResolver:
    """ドライバー名をインスタンスに解決する（同じ名前は同じインスタンスを共有）."""

    def __init__(
        self,
        storages: Mapping[str, CartStorage] | None,
        session_factory: Callable[[], MutableMapping[str, str]] | None,
        table_name: str | None,
    ) -> None:
        self._storages: dict[str, CartStorage] = dict(storages or {})
        self._session_factory = session_factory
        self._table_name = table_name

    def resolve(self, driver: Any) -> CartStorage | None:
        if driver is None or isinstance(driver, CartStorage):
            return driver
        if not isinstance(driver, str):
            raise InvalidStorageImplementationError(
                f"The driver: {driver!r} does not implement CartStorage."
            )
        name = driver.strip().lower()
        if name in DISABLED_DRIVER_NAMES:
            return None
        if name not in self._storages:
            self._storages[name] = create_cart_storage(
                name,
                session_factory=self._session_factory,
                table_name=self._table_name,
            )
        return self._storages[name]

    def resolve_section(self, section: Mapping[str, Any] | None) -> Mapping[str, Any] | None:
        """カート設定1件の storage.driver を解決した新しい辞書を返す."""
        if section is None or "storage" not in section:
            return section
        storage = section["storage"]
        if not isinstance(storage, Mapping) or "driver" not in storage:
            return section
        return {
            **section,
            "storage": {**storage, "driver": self.resolve(storage["driver"])},
        }


def load_cart_manager_config(
    data: Mapping[str, Any],
    storages: Mapping[str, CartStorage] | None = None,
    session_factory: Callable[[], MutableMapping[str, str]] | None = None,
    table_name: str | None = None,
) -> dict[str, Any]:
    """ドライバー名を含む設定辞書を CartManager 用の設定に変換する.

    Args:
        data: {"defaults": {...}, "carts": {カートID: {...}}}
        storages: ドライバー名 → 生成済みのストレージ（ファクトリより優先）
        session_factory: "session" ドライバー用のセッション取得関数
        table_name: "dynamodb" ドライバー用のテーブル名

    Raises:
        InvalidStorageImplementationError: ドライバーを解決できない場合
    """
    resolver = _DriverResolver(storages, session_factory, table_name)
    carts = data.get("carts") or {}
    return {
        "defaults": resolver.resolve_section(data.get("defaults") or {}),
        "carts": {
            cart_id: resolver.resolve_section(overrides or {})
            for cart_id, overrides in carts.items()
        },
    }


def load_cart_manager_config_file(path: str | Path, **kwargs: Any) -> dict[str, Any]:
    """JSONファイルから CartManager 用の設定を読み込む."""
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    return load_cart_manager_config(data, **kwargs)


def load_cart_manager_config_from_env(
    environ: Mapping[str, str] | None = None,
    **kwargs: Any,
) -> dict[str, Any]:
    """環境変数から CartManager 用の設定を組み立てる.

    CART_STORAGE_DRIVER:
        "memory"   → InMemoryCartStorage
        "dynamodb" → DynamoDBCartStorage（CART_STORAGE_TABLE_NAME）
        未設定      → 永続化しない（デフォルト）
    CART_AUTOSAVE: "true" / "1" / "yes" で有効
    CART_STORAGE_KEY_PREFIX, CART_STORAGE_KEY_SUFFIX: ストレージキーの接頭辞・接尾辞
    CART_INSTANCES: カンマ区切りのカートID（デフォルト "default"）
    """
    env = os.environ if environ is None else environ

    driver = env.get("CART_STORAGE_DRIVER", "none").strip().lower()
    if driver not in DISABLED_DRIVER_NAMES and driver not in STORAGE_DRIVER_NAMES:
        logger.warning("Unknown CART_STORAGE_DRIVER=%s, falling back to no storage", driver)
        driver = "none"

    storage: dict[str, Any] = {
        "driver": driver,
        "autosave": env.get("CART_AUTOSAVE", "").strip().lower() in TRUTHY_VALUES,
    }
    if env.get("CART_STORAGE_KEY_PREFIX"):
        storage["storage_key_prefix"] = env["CART_STORAGE_KEY_PREFIX"]
    if env.get("CART_STORAGE_KEY_SUFFIX"):
        storage["storage_key_suffix"] = env["CART_STORAGE_KEY_SUFFIX"]

    cart_ids = [
        cart_id.strip()
        for cart_id in env.get("CART_INSTANCES", "default").split(",")
        if cart_id.strip()
    ]
    kwargs.setdefault("table_name", env.get("CART_STORAGE_TABLE_NAME"))
    return load_cart_manager_config(
        {"defaults": {"storage": storage}, "carts": {cart_id: {} for cart_id in cart_ids}},
        **kwargs,
    )
