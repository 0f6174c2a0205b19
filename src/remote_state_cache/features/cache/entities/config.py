"""Cache configuration for remote-state-cache."""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .protocols import CacheBackend

GLOB_CHARACTERS = "*?[]\\"


def check_key_prefix(prefix: str) -> str:
    """Reject glob metacharacters, the prefix is used as a SCAN match pattern."""
    if any(ch in GLOB_CHARACTERS for ch in prefix):
        raise ValueError(f"Invalid redis key prefix: {prefix!r}. Glob characters are not allowed")
    return prefix


class CacheSettings(BaseSettings):
    """Global cache settings, read from ``REMOTE_STATE_CACHE_*`` variables."""

    model_config = SettingsConfigDict(
        env_prefix="REMOTE_STATE_CACHE_",
        case_sensitive=False,
        extra="ignore",
    )

    # Default backend configuration
    backend: CacheBackend = Field(default=CacheBackend.MEMORY, description="Cache backend")
    default_seconds_until_expiration: Optional[int] = Field(
        default=None, ge=1, description="Expiry applied to queries that set none"
    )

    # Memory cache configuration
    memory_max_size: int = Field(default=10000, ge=1, description="Max memory cache entries")

    # Redis configuration
    redis_host: str = Field(default="localhost", description="Redis host")
    redis_port: int = Field(default=6379, ge=1, le=65535, description="Redis port")
    redis_password: Optional[str] = Field(default=None, description="Redis password")
    redis_db: int = Field(default=0, ge=0, le=15, description="Redis database number")
    redis_ssl: bool = Field(default=False, description="Use SSL for Redis")
    redis_key_prefix: str = Field(default="", description="Prefix for every Redis key")
    redis_socket_timeout: int = Field(default=5, ge=1, description="Redis socket timeout")
    redis_max_connections: int = Field(default=50, ge=1, description="Max Redis connections")

    @field_validator("redis_key_prefix")
    @classmethod
    def validate_key_prefix(cls, v: str) -> str:
        return check_key_prefix(v)

    def redis_backend_config(self) -> "RedisBackendConfig":
        """Build the Redis connection config from these settings."""
        return RedisBackendConfig(
            host=self.redis_host,
            port=self.redis_port,
            password=self.redis_password,
            database=self.redis_db,
            ssl=self.redis_ssl,
            key_prefix=self.redis_key_prefix,
            command_timeout=self.redis_socket_timeout,
            max_connections=self.redis_max_connections,
        )


@dataclass
class RedisBackendConfig:
    """Configuration for a Redis cache backend."""

    # Connection settings
    host: str = "localhost"
    port: int = 6379
    password: Optional[str] = None
    database: int = 0
    ssl: bool = False

    # Pool settings
    max_connections: int = 10
    connection_timeout: int = 5
    command_timeout: int = 3

    # Behavior settings
    key_prefix: str = ""

    def __post_init__(self):
        check_key_prefix(self.key_prefix)

    def to_connection_kwargs(self) -> Dict[str, Any]:
        """Convert to connection arguments for the redis client."""
        kwargs = {
            "host": self.host,
            "port": self.port,
            "db": self.database,
            "password": self.password,
            "socket_timeout": self.command_timeout,
            "socket_connect_timeout": self.connection_timeout,
            "max_connections": self.max_connections,
            "decode_responses": True,
        }

        # redis.asyncio rejects ssl=False on plain connection pools
        if self.ssl:
            kwargs["ssl"] = self.ssl

        return kwargs
