"""Query cache - wraps a remote read operation with a cache.

``execute`` serves from the cache adapter when it can and populates it on a
miss. ``invalidate`` and ``update`` let callers (and triggers) drop or rewrite
entries without calling the wrapped function.

Concurrent misses for the same input are not coalesced: each one calls the
wrapped function and writes its own result, the last write wins.
"""

import logging
from typing import Any, Awaitable, Callable, Iterable, List, Mapping, Optional, Tuple, Union

from ...cache.entities.protocols import CacheAdapter
from ...cache.services.key_codec import KEY_SEPARATOR, KeyCodec
from ...triggers.entities.trigger import InvalidatedBy, Trigger, UpdatedBy
from ....core.exceptions import InvalidTargetError, ValidationError
from ....utils import resolve
from ....core.value_objects import NO_VALUE, has_value

logger = logging.getLogger(__name__)

QueryLogic = Callable[[Any], Union[Any, Awaitable[Any]]]
ToValueFn = Callable[[Any], Union[Any, Awaitable[Any]]]


class QueryCache:
    """Cached wrapper around one read operation, owning its triggers.

    Triggers only fire for queries registered with a ``TriggerEngine``.
    Build queries with ``RemoteStateContext.with_query_caching``, which
    registers them with the context's engine. A ``QueryCache`` constructed
    directly accepts ``add_trigger`` but its triggers stay inert until it is
    passed to ``TriggerEngine.register_query``.
    """

    def __init__(
        self,
        logic: QueryLogic,
        name: str,
        cache: CacheAdapter,
        codec: Optional[KeyCodec] = None,
        seconds_until_expiration: Optional[int] = None,
    ):
        if not name or KEY_SEPARATOR in name:
            raise ValidationError(
                f"Query name must be non-empty and must not contain '{KEY_SEPARATOR}': {name!r}",
                details={"name": name},
            )
        if seconds_until_expiration is not None and seconds_until_expiration <= 0:
            raise ValidationError("seconds_until_expiration must be positive")

        self.name = name
        self.codec = codec or KeyCodec()
        self.seconds_until_expiration = seconds_until_expiration
        self._logic = logic
        self._cache = cache
        self._triggers: List[Trigger] = []

    def __repr__(self) -> str:
        return f"QueryCache(name={self.name!r}, triggers={len(self._triggers)})"

    @property
    def namespace(self) -> str:
        """Prefix shared by every key this query writes."""
        return f"{self.name}{KEY_SEPARATOR}"

    @property
    def triggers(self) -> Tuple[Trigger, ...]:
        """Registered triggers, in registration order."""
        return tuple(self._triggers)

    def get_key(self, query_input: Any) -> str:
        """Full cache key for a query input."""
        return self.namespace + self.codec.serialize_key(query_input)

    # Read path

    async def execute(self, query_input: Any) -> Any:
        """Return the cached output for query_input, calling the query on a miss."""
        key = self.get_key(query_input)

        cached = await self._read_degrading_to_miss(key)
        if has_value(cached):
            logger.debug(f"Cache hit for {key}")
            return cached

        logger.debug(f"Cache miss for {key}")
        output = await resolve(self._logic(query_input))

        try:
            await self._write(key, output)
        except Exception as e:
            logger.warning(f"Failed to cache result of query '{self.name}' under {key}: {e}")

        return output

    async def __call__(self, query_input: Any) -> Any:
        return await self.execute(query_input)

    # Write path

    async def invalidate(
        self,
        *,
        for_input: Any = NO_VALUE,
        for_inputs: Optional[Iterable[Any]] = None,
        for_keys: Optional[Iterable[str]] = None,
    ) -> List[str]:
        """Drop the targeted entries so the next execute for them is a miss.

        Returns the keys that were invalidated. Missing entries are a no-op.
        """
        keys = self.resolve_keys(for_input=for_input, for_inputs=for_inputs, for_keys=for_keys)
        for key in keys:
            await self._cache.set(key, None)
        logger.debug(f"Invalidated {len(keys)} key(s) of query '{self.name}'")
        return keys

    async def update(
        self,
        *,
        to_value: ToValueFn,
        for_input: Any = NO_VALUE,
        for_inputs: Optional[Iterable[Any]] = None,
        for_keys: Optional[Iterable[str]] = None,
    ) -> List[str]:
        """Rewrite the targeted entries without calling the wrapped query.

        ``to_value`` receives the currently cached output, or NO_VALUE when
        nothing is cached, and returns the new output. Returns updated keys.
        """
        keys = self.resolve_keys(for_input=for_input, for_inputs=for_inputs, for_keys=for_keys)
        for key in keys:
            current = await self._read(key)
            new_value = await resolve(to_value(current))
            await self._write(key, new_value)
        logger.debug(f"Updated {len(keys)} key(s) of query '{self.name}'")
        return keys

    # Triggers

    def add_trigger(
        self,
        invalidated_by: Union[InvalidatedBy, Mapping[str, Any], None] = None,
        updated_by: Union[UpdatedBy, Mapping[str, Any], None] = None,
    ) -> Trigger:
        """Register a trigger; exactly one of invalidated_by / updated_by."""
        trigger = Trigger.from_definition(invalidated_by=invalidated_by, updated_by=updated_by)
        self._triggers.append(trigger)
        mutation_name = getattr(trigger.source_mutation, "name", trigger.source_mutation)
        logger.debug(
            f"Registered {trigger.kind.value} trigger on query '{self.name}' for mutation '{mutation_name}'"
        )
        return trigger

    def triggers_for(self, mutation: Any) -> List[Trigger]:
        """Triggers sourced by the given mutation, in registration order."""
        return [trigger for trigger in self._triggers if trigger.is_sourced_by(mutation)]

    # Keys

    async def cached_keys(self) -> List[str]:
        """Keys currently cached for this query."""
        return [key for key in await self._cache.keys() if key.startswith(self.namespace)]

    def resolve_keys(
        self,
        *,
        for_input: Any = NO_VALUE,
        for_inputs: Optional[Iterable[Any]] = None,
        for_keys: Optional[Iterable[str]] = None,
    ) -> List[str]:
        """Union of literal keys and keys derived from inputs, deduplicated in order."""
        if not has_value(for_input) and for_inputs is None and for_keys is None:
            raise InvalidTargetError(
                f"Query '{self.name}' needs for_input, for_inputs or for_keys"
            )

        if isinstance(for_keys, str):
            for_keys = [for_keys]

        keys: List[str] = list(for_keys or ())
        if has_value(for_input):
            keys.append(self.get_key(for_input))
        keys.extend(self.get_key(query_input) for query_input in (for_inputs or ()))

        return list(dict.fromkeys(keys))

    # Storage helpers

    async def _read(self, key: str) -> Any:
        text = await self._cache.get(key)
        if text is None:
            return NO_VALUE
        return self.codec.deserialize_value(text)

    async def _read_degrading_to_miss(self, key: str) -> Any:
        try:
            return await self._read(key)
        except Exception as e:
            logger.warning(f"Cache read failed for {key}, treating as miss: {e}")
            return NO_VALUE

    async def _write(self, key: str, value: Any) -> None:
        await self._cache.set(
            key,
            self.codec.serialize_value(value),
            seconds_until_expiration=self.seconds_until_expiration,
        )
