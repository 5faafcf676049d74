"""カート状態ストレージのDynamoDB実装."""
import logging
import os
from datetime import datetime, timedelta, timezone

import boto3
from botocore.exceptions import ClientError

from src.domain.ports import CartStorage

logger = logging.getLogger(__name__)

# TTL: 24時間
TTL_HOURS = 24


class DynamoDBCartStorage(CartStorage):
    """カート状態ストレージのDynamoDB実装.

    テーブルのパーティションキーは storage_key（文字列）。
    """

    def __init__(self, table_name: str | None = None) -> None:
        """初期化."""
        self._table_name = table_name or os.environ.get(
            "CART_STORAGE_TABLE_NAME", "cart-manager-cart-state"
        )
        self._table = None

    @property
    def table_name(self) -> str:
        return self._table_name

    def init(self) -> None:
        """テーブルへの接続を準備する（準備済みなら何もしない）."""
        if self._table is None:
            dynamodb = boto3.resource("dynamodb")
            self._table = dynamodb.Table(self._table_name)

    def restore(self, storage_key: str) -> str | None:
        """保存済みデータを取得する."""
        self.init()
        try:
            response = self._table.get_item(Key={"storage_key": storage_key})
        except ClientError as e:
            logger.error(f"Failed to restore cart state for {storage_key}: {e}")
            raise
        item = response.get("Item")
        if item is None:
            return None
        return item["data"]

    def save(self, storage_key: str, data: str) -> None:
        """データを保存する."""
        self.init()
        now = datetime.now(timezone.utc)
        ttl = int((now + timedelta(hours=TTL_HOURS)).timestamp())
        try:
            self._table.put_item(
                Item={
                    "storage_key": storage_key,
                    "data": data,
                    "updated_at": now.isoformat(),
                    "ttl": ttl,
                }
            )
        except ClientError as e:
            logger.error(f"Failed to save cart state for {storage_key}: {e}")
            raise

    def clear(self, storage_key: str) -> None:
        """保存済みデータを削除する."""
        self.init()
        try:
            self._table.delete_item(Key={"storage_key": storage_key})
        except ClientError as e:
            logger.error(f"Failed to clear cart state for {storage_key}: {e}")
            raise
