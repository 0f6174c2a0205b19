"""Exception hierarchy for remote-state-cache."""

from .base import RemoteStateCacheError
from .infrastructure import (
    CacheError,
    CacheConnectionError,
    CacheSerializationError,
)
from .domain import (
    ValidationError,
    TriggerConfigurationError,
    QueryRegistrationError,
    InvalidTargetError,
)

__all__ = [
    "RemoteStateCacheError",
    # Infrastructure
    "CacheError",
    "CacheConnectionError",
    "CacheSerializationError",
    # Domain
    "ValidationError",
    "TriggerConfigurationError",
    "QueryRegistrationError",
    "InvalidTargetError",
]
