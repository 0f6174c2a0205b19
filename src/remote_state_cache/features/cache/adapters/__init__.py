"""Cache adapters - Redis and in-memory implementations."""

from .redis_adapter import RedisAdapter
from .memory_adapter import MemoryAdapter
from .factory import create_cache_adapter

__all__ = [
    "RedisAdapter",
    "MemoryAdapter",
    "create_cache_adapter",
]
