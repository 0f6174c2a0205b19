"""Redis cache backend adapter for remote-state-cache."""

import logging
from typing import List, Optional

from redis.asyncio import Redis
from redis.exceptions import RedisError

from ..entities.config import RedisBackendConfig
from ....core.exceptions import CacheConnectionError, CacheError

logger = logging.getLogger(__name__)


class RedisAdapter:
    """Redis cache backend adapter.

    Implements the CacheAdapter contract on top of ``redis.asyncio``. Keys are
    stored under ``config.key_prefix`` and handed back without it, so several
    applications can share one database.
    """

    def __init__(self, config: Optional[RedisBackendConfig] = None, client: Optional[Redis] = None):
        self.config = config or RedisBackendConfig()
        self.redis_client: Optional[Redis] = client
        self._connected = client is not None

    async def connect(self) -> None:
        """Connect to Redis."""
        if self._connected:
            return

        try:
            self.redis_client = Redis(**self.config.to_connection_kwargs())
            await self.redis_client.ping()
            self._connected = True
            logger.info(f"Connected to Redis: {self.config.host}:{self.config.port}")
        except RedisError as e:
            self.redis_client = None
            raise CacheConnectionError(f"Failed to connect to Redis: {e}") from e

    async def disconnect(self) -> None:
        """Disconnect from Redis."""
        if self.redis_client:
            try:
                await self.redis_client.aclose()
            except RedisError as e:
                logger.error(f"Error closing Redis connection: {e}")
            finally:
                self.redis_client = None
                self._connected = False

    async def get(self, key: str) -> Optional[str]:
        """Get value by key."""
        await self._ensure_connected()

        try:
            result = await self.redis_client.get(self._full_key(key))
        except RedisError as e:
            raise CacheError(f"Redis get error for key {key}: {e}") from e

        if isinstance(result, bytes):
            return result.decode("utf-8")
        return result

    async def set(
        self,
        key: str,
        value: Optional[str],
        seconds_until_expiration: Optional[int] = None,
    ) -> None:
        """Set key-value pair with optional expiry; None deletes the key."""
        await self._ensure_connected()

        full_key = self._full_key(key)
        try:
            if value is None:
                await self.redis_client.delete(full_key)
            elif seconds_until_expiration is not None and seconds_until_expiration <= 0:
                await self.redis_client.delete(full_key)
            else:
                await self.redis_client.set(full_key, value, ex=seconds_until_expiration)
        except RedisError as e:
            raise CacheError(f"Redis set error for key {key}: {e}") from e

    async def keys(self) -> List[str]:
        """Get all keys under the configured prefix, prefix removed."""
        await self._ensure_connected()

        prefix = self.config.key_prefix
        try:
            found = [key async for key in self.redis_client.scan_iter(match=f"{prefix}*")]
        except RedisError as e:
            raise CacheError(f"Redis keys error with prefix {prefix!r}: {e}") from e

        keys = []
        for key in found:
            if isinstance(key, bytes):
                key = key.decode("utf-8")
            keys.append(key[len(prefix):])
        return keys

    async def delete(self, key: str) -> bool:
        """Delete key and return whether it existed."""
        await self._ensure_connected()

        try:
            return await self.redis_client.delete(self._full_key(key)) > 0
        except RedisError as e:
            raise CacheError(f"Redis delete error for key {key}: {e}") from e

    async def health_check(self) -> bool:
        """Check Redis health."""
        try:
            if not self._connected:
                return False

            await self.redis_client.ping()
            return True
        except RedisError as e:
            logger.error(f"Redis health check failed: {e}")
            return False

    def _full_key(self, key: str) -> str:
        return f"{self.config.key_prefix}{key}"

    async def _ensure_connected(self) -> None:
        """Ensure Redis connection is active."""
        if not self._connected:
            await self.connect()
