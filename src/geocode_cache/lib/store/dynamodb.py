"""DynamoDB lookup store.

Items are shaped ``{Address: S, Response: S, TTL: N}`` where ``TTL`` holds
the expiry in epoch seconds, so the table's native TTL feature can be
pointed at the same attribute. Native deletion is eventual, which is why
entries are returned with their expiry and judged by the caller.
"""

import asyncio
from datetime import UTC, datetime, timedelta
from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from loguru import logger

from geocode_cache.lib.store.base import BaseLookupStore, CacheEntry, StoreError, expiry_from_now

DEFAULT_TABLE_NAME = "GeocodeCache"

KEY_ATTRIBUTE = "Address"
RESPONSE_ATTRIBUTE = "Response"
TTL_ATTRIBUTE = "TTL"


def create_dynamodb_client(region_name: str, endpoint_url: str | None = None) -> Any:
    """Create a boto3 DynamoDB client.

    Args:
        region_name: AWS region.
        endpoint_url: Optional endpoint override (e.g. DynamoDB Local).

    Returns:
        Configured boto3 DynamoDB client.
    """
    return boto3.client("dynamodb", region_name=region_name, endpoint_url=endpoint_url)


class DynamoDbLookupStore(BaseLookupStore):
    """Lookup store backed by a DynamoDB table keyed on ``Address``."""

    def __init__(self, client: Any, table_name: str = DEFAULT_TABLE_NAME) -> None:
        self._client = client
        self._table_name = table_name

    @property
    def backend_name(self) -> str:
        return "dynamodb"

    @property
    def table_name(self) -> str:
        return self._table_name

    async def get(self, key: str) -> CacheEntry | None:
        try:
            response = await asyncio.to_thread(
                self._client.get_item,
                TableName=self._table_name,
                Key={KEY_ATTRIBUTE: {"S": key}},
            )
        except (ClientError, BotoCoreError) as e:
            raise StoreError(self.backend_name, f"GetItem failed: {e}") from e

        item = response.get("Item")
        if not item:
            return None

        payload = item.get(RESPONSE_ATTRIBUTE, {}).get("S")
        if payload is None:
            logger.warning("Ignoring cache item without a string response for key: {}", key)
            return None

        expires_at = _parse_ttl(item.get(TTL_ATTRIBUTE))
        if expires_at is None:
            logger.warning("Ignoring cache item without a valid TTL for key: {}", key)
            return None

        return CacheEntry(key=key, payload=payload, expires_at=expires_at)

    async def put(self, key: str, payload: str, ttl: timedelta) -> CacheEntry:
        expires_at = expiry_from_now(ttl)
        ttl_value = int(expires_at.timestamp())
        try:
            await asyncio.to_thread(
                self._client.put_item,
                TableName=self._table_name,
                Item={
                    KEY_ATTRIBUTE: {"S": key},
                    RESPONSE_ATTRIBUTE: {"S": payload},
                    TTL_ATTRIBUTE: {"N": str(ttl_value)},
                },
            )
        except (ClientError, BotoCoreError) as e:
            raise StoreError(self.backend_name, f"PutItem failed: {e}") from e

        logger.debug("Wrote cache item for key: {} with TTL: {}", key, ttl_value)
        return CacheEntry(key=key, payload=payload, expires_at=datetime.fromtimestamp(ttl_value, tz=UTC))


def _parse_ttl(attribute: dict[str, str] | None) -> datetime | None:
    """Convert a DynamoDB ``N`` epoch-seconds attribute to an aware datetime."""
    if not attribute or "N" not in attribute:
        return None
    try:
        return datetime.fromtimestamp(int(attribute["N"]), tz=UTC)
    except (ValueError, OverflowError, OSError):
        return None
