"""remote-state-cache - cached remote reads kept consistent by mutation triggers.

Usage::

    from remote_state_cache import create_remote_state_context, MemoryAdapter

    context = create_remote_state_context(cache=MemoryAdapter())

    get_recipes = context.with_query_caching(fetch_recipes, name="get_recipes")
    add_recipe = context.with_mutation_registration(post_recipe, name="add_recipe")

    get_recipes.add_trigger(
        invalidated_by={
            "mutation": add_recipe,
            "affects": lambda ctx: {"inputs": [{"searchFor": ctx.mutation_input["title"]}]},
        }
    )
"""

from .__version__ import __version__
from .core import (
    NO_VALUE,
    CacheConnectionError,
    CacheError,
    CacheSerializationError,
    InvalidTargetError,
    QueryRegistrationError,
    RemoteStateCacheError,
    TriggerConfigurationError,
    ValidationError,
    has_value,
)
from .config import LoggingConfig, configure_logging
from .features.cache import (
    CacheAdapter,
    CacheBackend,
    CacheSettings,
    KeyCodec,
    MemoryAdapter,
    RedisAdapter,
    RedisBackendConfig,
    create_cache_adapter,
    deserialize_value,
    serialize_key,
    serialize_value,
)
from .features.triggers import (
    AffectedTargets,
    AffectsContext,
    InvalidatedBy,
    Trigger,
    TriggerDeliveryReport,
    TriggerEngine,
    TriggerFailure,
    TriggerKind,
    UpdateContext,
    UpdatedBy,
)
from .features.queries import QueryCache
from .features.mutations import MutationHandle, MutationInvocation
from .features.context import RemoteStateContext, create_remote_state_context

__all__ = [
    "__version__",
    # Core
    "NO_VALUE",
    "has_value",
    "RemoteStateCacheError",
    "CacheError",
    "CacheConnectionError",
    "CacheSerializationError",
    "ValidationError",
    "TriggerConfigurationError",
    "QueryRegistrationError",
    "InvalidTargetError",
    # Config
    "LoggingConfig",
    "configure_logging",
    "CacheSettings",
    # Cache
    "CacheAdapter",
    "CacheBackend",
    "KeyCodec",
    "MemoryAdapter",
    "RedisAdapter",
    "RedisBackendConfig",
    "create_cache_adapter",
    "serialize_key",
    "serialize_value",
    "deserialize_value",
    # Triggers
    "AffectedTargets",
    "AffectsContext",
    "InvalidatedBy",
    "Trigger",
    "TriggerDeliveryReport",
    "TriggerEngine",
    "TriggerFailure",
    "TriggerKind",
    "UpdateContext",
    "UpdatedBy",
    # Queries and mutations
    "QueryCache",
    "MutationHandle",
    "MutationInvocation",
    # Context
    "RemoteStateContext",
    "create_remote_state_context",
]
