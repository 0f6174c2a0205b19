"""Core building blocks shared by every remote-state-cache feature."""

from .exceptions import (
    RemoteStateCacheError,
    CacheError,
    CacheConnectionError,
    CacheSerializationError,
    ValidationError,
    TriggerConfigurationError,
    QueryRegistrationError,
    InvalidTargetError,
)
from .value_objects import NO_VALUE, has_value

__all__ = [
    "RemoteStateCacheError",
    "CacheError",
    "CacheConnectionError",
    "CacheSerializationError",
    "ValidationError",
    "TriggerConfigurationError",
    "QueryRegistrationError",
    "InvalidTargetError",
    "NO_VALUE",
    "has_value",
]
