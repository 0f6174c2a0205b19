"""Configuration for remote-state-cache."""

from .logging_config import LoggingConfig, LogFormat, LogLevel, LogVerbosity, configure_logging
from ..features.cache.entities.config import CacheSettings

__all__ = [
    "LoggingConfig",
    "LogFormat",
    "LogLevel",
    "LogVerbosity",
    "configure_logging",
    "CacheSettings",
]
