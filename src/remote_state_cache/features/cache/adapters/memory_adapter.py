"""Memory cache backend adapter for remote-state-cache."""

import asyncio
import logging
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)


@dataclass
class MemoryCacheEntry:
    """Memory cache entry with metadata."""
    value: str
    expires_at: Optional[float] = None

    @property
    def is_expired(self) -> bool:
        """Check if entry is expired."""
        if self.expires_at is None:
            return False
        return time.time() >= self.expires_at


class MemoryAdapter:
    """In-process cache backend with LRU eviction and per-entry expiry.

    Implements the CacheAdapter contract. Writing ``None`` deletes the entry.
    """

    def __init__(self, max_size: int = 10000):
        if max_size < 1:
            raise ValueError("max_size must be positive")

        self.max_size = max_size
        self._store: "OrderedDict[str, MemoryCacheEntry]" = OrderedDict()
        self._lock = asyncio.Lock()
        self._evictions = 0

    async def get(self, key: str) -> Optional[str]:
        """Get value by key."""
        async with self._lock:
            entry = self._store.get(key)
            if entry is None:
                return None

            if entry.is_expired:
                self._store.pop(key, None)
                return None

            self._store.move_to_end(key)
            return entry.value

    async def set(
        self,
        key: str,
        value: Optional[str],
        seconds_until_expiration: Optional[int] = None,
    ) -> None:
        """Set key-value pair with optional expiry; None removes the key."""
        async with self._lock:
            self._store.pop(key, None)

            if value is None:
                return

            if seconds_until_expiration is not None and seconds_until_expiration <= 0:
                # already expired, nothing to keep
                return

            expires_at = (
                time.time() + seconds_until_expiration
                if seconds_until_expiration is not None
                else None
            )
            self._ensure_capacity()
            self._store[key] = MemoryCacheEntry(value=value, expires_at=expires_at)

    async def keys(self) -> List[str]:
        """Get all live keys."""
        async with self._lock:
            self._cleanup_expired()
            return list(self._store.keys())

    async def delete(self, key: str) -> bool:
        """Delete key and return whether it existed."""
        async with self._lock:
            entry = self._store.pop(key, None)
            return entry is not None and not entry.is_expired

    async def clear(self) -> None:
        """Clear all cache entries."""
        async with self._lock:
            self._store.clear()

    async def size(self) -> int:
        """Get cache size (number of live keys)."""
        async with self._lock:
            self._cleanup_expired()
            return len(self._store)

    async def info(self) -> Dict[str, Any]:
        """Get cache backend information."""
        async with self._lock:
            self._cleanup_expired()
            return {
                "backend_type": "memory",
                "total_entries": len(self._store),
                "max_entries": self.max_size,
                "evictions": self._evictions,
                "capacity_usage_percent": (len(self._store) / self.max_size) * 100,
            }

    async def health_check(self) -> bool:
        """Memory cache is healthy whenever its lock can be taken."""
        async with self._lock:
            return True

    def _ensure_capacity(self) -> None:
        """Evict least recently used entries until one more fits."""
        self._cleanup_expired()
        while len(self._store) >= self.max_size:
            evicted_key, _ = self._store.popitem(last=False)
            self._evictions += 1
            logger.debug(f"Evicted least recently used key {evicted_key}")

    def _cleanup_expired(self) -> None:
        """Remove all expired entries."""
        expired_keys = [key for key, entry in self._store.items() if entry.is_expired]
        for key in expired_keys:
            self._store.pop(key, None)
