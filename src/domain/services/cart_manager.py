"""カートインスタンス管理サービス."""
from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any

from ..entities import Cart
from ..ports import CartStorage
from ..value_objects import CartConfig, CartSnapshot, StorageKey

logger = logging.getLogger(__name__)


class CartManagerError(Exception):
    """CartManager が送出するエラーの基底クラス."""

    pass


class InvalidCartInstanceError(CartManagerError):
    """指定IDのカートインスタンスが存在しないエラー."""

    def __init__(self, cart_id: str | None) -> None:
        self.cart_id = cart_id
        super().__init__(f"There is no cart instance with the id: {cart_id}")


class DuplicateCartInstanceError(CartManagerError):
    """指定IDのカートインスタンスが既に存在するエラー."""

    def __init__(self, cart_id: str) -> None:
        self.cart_id = cart_id
        super().__init__(f"There is already a cart instance with the id: {cart_id}")


class InvalidStorageImplementationError(CartManagerError):
    """ストレージドライバーが解決できない、またはCartStorageを満たさないエラー."""

    pass


class CartStorageClearError(CartManagerError):
    """一括破棄中にストレージのクリアに失敗したエラー."""

    def __init__(self, failures: dict[str, Exception]) -> None:
        self.failures = failures
        super().__init__(
            f"Failed to clear storage for carts: {', '.join(failures)}"
        )


CartFactory = Callable[[str, CartConfig], Cart]


class CartManager:
    """名前付きカートインスタンスの生成・切り替え・破棄と永続化を管理する.

    リクエスト（またはセッション）ごとに1インスタンスを生成して使う。
    autosave が有効なカートは close() 時に保存されるため、
    with 文で寿命を区切ること。

        with CartManager(config) as manager:
            manager.get_cart().add_item("りんご", Money(120))
    """

    def __init__(
        self,
        config: Mapping[str, Any],
        cart_factory: CartFactory = Cart,
    ) -> None:
        """初期化.

        Args:
            config: {"defaults": 既定のカート設定, "carts": {カートID: 上書き設定}}
            cart_factory: (カートID, 設定) からカートを生成する呼び出し可能オブジェクト
        """
        self._cart_factory = cart_factory
        self._carts: dict[str, Cart] = {}
        self._context: str | None = None
        self._defaults = CartConfig.from_dict(config.get("defaults"))
        self._cart_configs: dict[str, CartConfig] = {}
        self._autosave_cart_ids: list[str] = []

        declared = config.get("carts") or {}
        for cart_id, overrides in declared.items():
            self.new_cart(
                cart_id,
                self._defaults.merged_with(overrides),
                overwrite=True,
                switch_context=False,
            )

        if declared:
            self._context = next(iter(declared))

    def __enter__(self) -> CartManager:
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()

    def context(self, cart_id: str | None = None) -> str | None:
        """カートIDを渡すとコンテキストを切り替え、渡さなければ現在のコンテキストを返す.

        Raises:
            InvalidCartInstanceError: 指定IDのカートが存在しない場合
        """
        if cart_id:
            if cart_id not in self._carts:
                raise InvalidCartInstanceError(cart_id)
            self._context = cart_id
        return self._context

    def cart_exists(self, cart_id: str | None) -> bool:
        """指定IDのカートインスタンスが存在するか判定する."""
        return cart_id in self._carts

    def cart_ids(self) -> list[str]:
        """登録済みのカートIDを登録順に返す."""
        return list(self._carts)

    def get_cart(self, cart_id: str | None = None) -> Cart:
        """カートを取得する（IDを省略すると現在のコンテキストのカート）.

        Raises:
            InvalidCartInstanceError: 指定IDのカートが存在しない場合
        """
        cart_id = cart_id or self._context
        if not self.cart_exists(cart_id):
            raise InvalidCartInstanceError(cart_id)
        return self._carts[cart_id]

    def new_cart(
        self,
        cart_id: str,
        config: CartConfig | Mapping[str, Any] | None = None,
        overwrite: bool = True,
        switch_context: bool = True,
    ) -> Cart:
        """カートインスタンスを生成して登録する.

        Args:
            cart_id: カートID
            config: カート設定。CartConfig はそのまま使い、辞書は既定設定への上書きとして扱う。
                省略時は get_cart_config() の結果を使う
            overwrite: 同じIDのカートが存在する場合に置き換えるか
            switch_context: 生成したカートにコンテキストを切り替えるか

        Returns:
            生成したカート

        Raises:
            DuplicateCartInstanceError: overwrite=False で同じIDのカートが存在する場合
            InvalidStorageImplementationError: ドライバーがCartStorageでない場合（登録内容は変わらない）
        """
        if self.cart_exists(cart_id) and not overwrite:
            raise DuplicateCartInstanceError(cart_id)

        if config is None:
            cart_config = self.get_cart_config(cart_id)
        else:
            if isinstance(config, CartConfig):
                cart_config = config
            else:
                cart_config = self._defaults.merged_with(config)

        # 復元まで済んでからレジストリと設定に反映する
        cart = self._cart_factory(cart_id, cart_config)
        if cart_config.storage.has_driver():
            self._restore_into(cart, cart_id, cart_config)

        if config is not None:
            self._cart_configs[cart_id] = cart_config
        self._carts[cart_id] = cart
        logger.debug("Created cart instance: %s", cart_id)

        if cart_config.storage.autosave and cart_id not in self._autosave_cart_ids:
            self._autosave_cart_ids.append(cart_id)

        if switch_context:
            self._context = cart_id

        return cart

    def destroy_cart(self, cart_id: str | None = None, clear_storage: bool = True) -> None:
        """カートを破棄する（IDを省略すると現在のコンテキストのカート）.

        破棄したカートがコンテキストだった場合、コンテキストは None になる。
        ストレージのクリアはドライバーが設定されているカートのみ行う。
        """
        cart_id = cart_id or self._context
        if not self.cart_exists(cart_id):
            return

        del self._carts[cart_id]
        logger.debug("Destroyed cart instance: %s", cart_id)

        if self._context == cart_id:
            self._context = None

        if clear_storage and self.get_cart_config(cart_id).storage.has_driver():
            self.clear_cart_state(cart_id)

    def destroy_all_carts(self, clear_storage: bool = True) -> None:
        """全カートを破棄する.

        ストレージのクリアに失敗したカートがあっても残りのカートの破棄を続け、
        最後に失敗をまとめて送出する。

        Raises:
            CartStorageClearError: 1件以上のカートでストレージのクリアに失敗した場合
        """
        failures: dict[str, Exception] = {}
        for cart_id in list(self._carts):
            try:
                self.destroy_cart(cart_id, clear_storage)
            except Exception as e:
                logger.error(f"Failed to clear storage for cart {cart_id}: {e}")
                failures[cart_id] = e

        if failures:
            raise CartStorageClearError(failures)

    def get_cart_config(self, cart_id: str | None = "") -> CartConfig:
        """カートの実効設定を取得する（個別設定が無ければ既定設定）."""
        return self._cart_configs.get(cart_id, self._defaults)

    def save_cart_state(self, cart_id: str) -> None:
        """カートの状態を設定されたストレージに保存する."""
        data = self.get_cart(cart_id).export().to_json()
        driver = self.get_cart_storage_driver(cart_id)
        driver.save(self.get_cart_storage_key(cart_id), data)
        logger.info("Saved cart state: %s", cart_id)

    def restore_cart_state(self, cart_id: str) -> None:
        """ストレージに保存された状態をカートに復元する（未保存なら何もしない）."""
        self._restore_into(self.get_cart(cart_id), cart_id, self.get_cart_config(cart_id))

    def _restore_into(self, cart: Cart, cart_id: str, cart_config: CartConfig) -> None:
        driver = self._resolve_driver(cart_id, cart_config)
        data = driver.restore(self._derive_storage_key(cart_id, cart_config))
        if data is None:
            return
        cart.import_state(CartSnapshot.from_json(data))
        logger.info("Restored cart state: %s", cart_id)

    def clear_cart_state(self, cart_id: str) -> None:
        """ストレージに保存されたカートの状態を削除する."""
        driver = self.get_cart_storage_driver(cart_id)
        driver.clear(self.get_cart_storage_key(cart_id))

    def get_cart_storage_driver(self, cart_id: str) -> CartStorage:
        """カートに設定されたストレージドライバーを取得する.

        Raises:
            InvalidStorageImplementationError: ドライバーが未設定、またはCartStorageでない場合
        """
        return self._resolve_driver(cart_id, self.get_cart_config(cart_id))

    def _resolve_driver(self, cart_id: str, cart_config: CartConfig) -> CartStorage:
        driver = cart_config.storage.driver
        if driver is None:
            raise InvalidStorageImplementationError(
                f"No storage driver is configured for cart: {cart_id}"
            )
        if not isinstance(driver, CartStorage):
            raise InvalidStorageImplementationError(
                f"The driver: {driver!r} does not implement CartStorage."
            )
        driver.init()
        return driver

    def get_cart_storage_key(self, cart_id: str) -> str:
        """接頭辞・接尾辞を考慮したストレージキーを取得する."""
        return self._derive_storage_key(cart_id, self.get_cart_config(cart_id))

    def _derive_storage_key(self, cart_id: str, cart_config: CartConfig) -> str:
        storage = cart_config.storage
        return StorageKey.derive(
            cart_id, storage.storage_key_prefix, storage.storage_key_suffix
        ).value

    def save_autosave_carts(self) -> None:
        """autosave が有効なカートを登録順に1回ずつ保存する.

        破棄済みのカートは飛ばす。保存の失敗はログに残し、送出しない。
        """
        cart_ids, self._autosave_cart_ids = self._autosave_cart_ids, []
        for cart_id in cart_ids:
            if not self.cart_exists(cart_id):
                logger.debug("Skipping autosave for destroyed cart: %s", cart_id)
                continue
            try:
                self.save_cart_state(cart_id)
            except Exception:
                logger.exception("Autosave failed for cart: %s", cart_id)

    def close(self) -> None:
        """マネージャーの寿命を終える（autosave を実行する）."""
        self.save_autosave_carts()
