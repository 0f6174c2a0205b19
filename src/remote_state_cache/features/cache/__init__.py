"""Cache feature for remote-state-cache.

- entities/: storage contract and configuration
- services/: key derivation and value serialization
- adapters/: Redis and in-memory backends
"""

from .entities import (
    CacheAdapter,
    CacheBackend,
    CacheSettings,
    RedisBackendConfig,
)
from .services import (
    KeyCodec,
    serialize_key,
    serialize_value,
    deserialize_value,
)
from .adapters import MemoryAdapter, RedisAdapter, create_cache_adapter

__all__ = [
    "CacheAdapter",
    "CacheBackend",
    "CacheSettings",
    "RedisBackendConfig",
    "KeyCodec",
    "serialize_key",
    "serialize_value",
    "deserialize_value",
    "MemoryAdapter",
    "RedisAdapter",
    "create_cache_adapter",
]
