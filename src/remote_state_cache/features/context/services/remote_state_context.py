"""Remote state context - wires query caches and mutations to one adapter.

A context owns a cache adapter and a trigger engine. Every query cache made
by ``with_query_caching`` stores its entries in that adapter and is registered
with the engine; every mutation made by ``with_mutation_registration`` delivers
its invocations to the same engine. Triggers only see queries and mutations of
their own context.
"""

import logging
from typing import Dict, Optional

from ...cache.adapters.factory import create_cache_adapter
from ...cache.entities.config import CacheSettings
from ...cache.entities.protocols import CacheAdapter, KeySerializer, ValueDeserializer, ValueSerializer
from ...cache.services.key_codec import KeyCodec
from ...mutations.services.mutation_handle import MutationHandle, MutationLogic
from ...queries.services.query_cache import QueryCache, QueryLogic
from ...triggers.services.trigger_engine import TriggerEngine, TriggerErrorHandler

logger = logging.getLogger(__name__)


class RemoteStateContext:
    """Factory for query caches and mutations sharing one cache adapter."""

    def __init__(
        self,
        cache: CacheAdapter,
        settings: Optional[CacheSettings] = None,
        on_trigger_error: Optional[TriggerErrorHandler] = None,
    ):
        self.cache = cache
        self.settings = settings
        self.engine = TriggerEngine(on_trigger_error=on_trigger_error)
        self._mutations: Dict[str, MutationHandle] = {}

    @property
    def default_seconds_until_expiration(self) -> Optional[int]:
        if self.settings is None:
            return None
        return self.settings.default_seconds_until_expiration

    @property
    def queries(self) -> Dict[str, QueryCache]:
        """Registered query caches by name."""
        return {query.name: query for query in self.engine.queries}

    @property
    def mutations(self) -> Dict[str, MutationHandle]:
        """Registered mutations by name; a later registration shadows an earlier one."""
        return dict(self._mutations)

    def with_query_caching(
        self,
        logic: QueryLogic,
        name: str,
        serialize_key: Optional[KeySerializer] = None,
        serialize_value: Optional[ValueSerializer] = None,
        deserialize_value: Optional[ValueDeserializer] = None,
        seconds_until_expiration: Optional[int] = None,
    ) -> QueryCache:
        """Wrap a read operation with caching in this context's adapter.

        Args:
            logic: The remote read; sync or async, called with one input
            name: Unique query name, used as the key namespace
            serialize_key: Input to key function (defaults to the JSON key codec)
            serialize_value: Output to stored text (defaults to tagged JSON)
            deserialize_value: Stored text back to output
            seconds_until_expiration: Entry lifetime; falls back to the settings default

        Raises:
            ValidationError: If the name or expiry is invalid
            QueryRegistrationError: If a query with this name already exists
        """
        if seconds_until_expiration is None:
            seconds_until_expiration = self.default_seconds_until_expiration

        query = QueryCache(
            logic,
            name,
            self.cache,
            codec=KeyCodec.with_overrides(
                key=serialize_key,
                value=serialize_value,
                deserialize=deserialize_value,
            ),
            seconds_until_expiration=seconds_until_expiration,
        )
        self.engine.register_query(query)

        logger.debug(f"Registered query '{name}'")
        return query

    def with_mutation_registration(self, logic: MutationLogic, name: str) -> MutationHandle:
        """Wrap a write operation so its calls fire the triggers of this context."""
        mutation = MutationHandle(logic, name, self.engine)
        if name in self._mutations:
            logger.warning(f"Mutation '{name}' registered more than once; triggers match by handle")
        self._mutations[name] = mutation

        logger.debug(f"Registered mutation '{name}'")
        return mutation


def create_remote_state_context(
    cache: Optional[CacheAdapter] = None,
    settings: Optional[CacheSettings] = None,
    on_trigger_error: Optional[TriggerErrorHandler] = None,
) -> RemoteStateContext:
    """Create a context, building the cache adapter from settings when none is given."""
    if cache is None:
        settings = settings or CacheSettings()
        cache = create_cache_adapter(settings)

    return RemoteStateContext(cache, settings=settings, on_trigger_error=on_trigger_error)
