"""
Redis implementation of the key-value store.

Stores each storage key as a plain redis string under a namespace prefix.
"""

import logging
from typing import Optional

import redis.asyncio as redis
from redis.exceptions import RedisError

from ..domain.exceptions import StorageException
from ..metrics import track_store_operation
from .kv_store import IKeyValueStore

logger = logging.getLogger(__name__)


class RedisKeyValueStore(IKeyValueStore):
    """
    Redis-backed key-value store.

    Redis errors surface as StorageException.
    """

    backend_name = "redis"

    def __init__(self, redis_client: redis.Redis, key_prefix: str = "profile_history:"):
        """
        Initialize Redis store.

        Args:
            redis_client: Async Redis client
            key_prefix: Namespace prepended to every key
        """
        self.redis = redis_client
        self.key_prefix = key_prefix

    def _build_key(self, key: str) -> str:
        """
        Build namespaced redis key.

        Returns:
            Key in format: {prefix}{key}
        """
        return f"{self.key_prefix}{key}"

    async def get(self, key: str) -> Optional[str]:
        redis_key = self._build_key(key)
        try:
            value = await self.redis.get(redis_key)
        except RedisError as e:
            logger.error(f"Error reading {redis_key} from Redis: {e}")
            track_store_operation(self.backend_name, "get", success=False)
            raise StorageException("read", str(e)) from e

        track_store_operation(self.backend_name, "get", success=True)

        if value is None:
            logger.debug(f"Redis MISS: {redis_key}")
            return None

        if isinstance(value, bytes):
            value = value.decode("utf-8")
        return value

    async def set(self, key: str, value: str) -> None:
        redis_key = self._build_key(key)
        try:
            await self.redis.set(redis_key, value)
        except RedisError as e:
            logger.error(f"Error writing {redis_key} to Redis: {e}")
            track_store_operation(self.backend_name, "set", success=False)
            raise StorageException("write", str(e)) from e

        track_store_operation(self.backend_name, "set", success=True)
        logger.debug(f"Saved to Redis: {redis_key}")

    async def ping(self) -> bool:
        try:
            return bool(await self.redis.ping())
        except RedisError as e:
            logger.warning(f"Redis ping failed: {e}")
            return False

    async def close(self) -> None:
        await self.redis.aclose()
        logger.info("Redis connection closed")
