"""Infrastructure exceptions - cache backend failures."""

from .base import RemoteStateCacheError


class CacheError(RemoteStateCacheError):
    """Base class for cache-related errors."""
    pass


class CacheConnectionError(CacheError):
    """Raised when cache connection fails."""
    pass


class CacheSerializationError(CacheError):
    """Raised when cache value serialization/deserialization fails."""
    pass
