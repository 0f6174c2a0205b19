"""Cache entities - storage contract and configuration."""

from .protocols import (
    CacheAdapter,
    CacheBackend,
    KeySerializer,
    ValueSerializer,
    ValueDeserializer,
)
from .config import CacheSettings, RedisBackendConfig

__all__ = [
    "CacheAdapter",
    "CacheBackend",
    "KeySerializer",
    "ValueSerializer",
    "ValueDeserializer",
    "CacheSettings",
    "RedisBackendConfig",
]
