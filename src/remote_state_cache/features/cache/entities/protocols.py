"""Cache protocols for remote-state-cache.

The core only needs a minimal storage contract: read by key, write by key
with optional expiry, and enumerate keys. Anything that satisfies
``CacheAdapter`` can back a context (in-memory, Redis, a remote KV service).
"""

from enum import Enum
from typing import Any, Callable, List, Optional

from typing_extensions import Protocol, runtime_checkable


class CacheBackend(str, Enum):
    """Supported cache backend types."""
    MEMORY = "memory"
    REDIS = "redis"


@runtime_checkable
class CacheAdapter(Protocol):
    """Storage contract consumed by query caches and the trigger engine."""

    async def get(self, key: str) -> Optional[str]:
        """Get the serialized value for key, or None when absent/expired."""
        ...

    async def set(
        self,
        key: str,
        value: Optional[str],
        seconds_until_expiration: Optional[int] = None,
    ) -> None:
        """Write value under key.

        A ``None`` value removes (or expires) the entry: a following ``get``
        returns None and ``keys`` no longer lists it.
        """
        ...

    async def keys(self) -> List[str]:
        """List all live keys, in any order."""
        ...


KeySerializer = Callable[[Any], str]
ValueSerializer = Callable[[Any], str]
ValueDeserializer = Callable[[str], Any]
