"""Cache adapter factory - picks a backend from CacheSettings."""

import logging
from typing import Optional

from ..entities.config import CacheSettings
from ..entities.protocols import CacheAdapter, CacheBackend
from .memory_adapter import MemoryAdapter
from .redis_adapter import RedisAdapter

logger = logging.getLogger(__name__)


def create_cache_adapter(settings: Optional[CacheSettings] = None) -> CacheAdapter:
    """Create the cache adapter configured by settings (memory by default)."""
    settings = settings or CacheSettings()

    if settings.backend == CacheBackend.REDIS:
        logger.debug(f"Creating Redis cache adapter for {settings.redis_host}:{settings.redis_port}")
        return RedisAdapter(settings.redis_backend_config())

    logger.debug(f"Creating memory cache adapter with max_size={settings.memory_max_size}")
    return MemoryAdapter(max_size=settings.memory_max_size)
