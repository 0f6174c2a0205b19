"""Tests for remote state context wiring."""

import pytest
from unittest.mock import AsyncMock

from remote_state_cache.core.exceptions import QueryRegistrationError
from remote_state_cache.features.cache.adapters.memory_adapter import MemoryAdapter
from remote_state_cache.features.cache.entities.config import CacheSettings
from remote_state_cache.features.context.services.remote_state_context import (
    RemoteStateContext,
    create_remote_state_context,
)
from remote_state_cache.features.queries.services.query_cache import QueryCache


class TestRemoteStateContext:
    """Test factories sharing one adapter and engine."""

    def test_query_registered_with_engine(self, context):
        query = context.with_query_caching(AsyncMock(), name="get_recipes")

        assert context.engine.queries == [query]
        assert context.queries == {"get_recipes": query}

    def test_duplicate_query_name_rejected(self, context):
        context.with_query_caching(AsyncMock(), name="get_recipes")

        with pytest.raises(QueryRegistrationError):
            context.with_query_caching(AsyncMock(), name="get_recipes")

    @pytest.mark.asyncio
    async def test_unregistered_query_triggers_stay_inert(self, context, memory_cache):
        """Test a directly built query only reacts to mutations once on the engine."""
        query = QueryCache(AsyncMock(return_value=1), "standalone", memory_cache)
        add_recipe = context.with_mutation_registration(AsyncMock(return_value=None), name="add_recipe")
        query.add_trigger(invalidated_by={"mutation": add_recipe, "affects": lambda ctx: {"inputs": ["x"]}})
        await query.execute("x")

        await add_recipe({"title": "cake"})
        assert await query.cached_keys() == [query.get_key("x")]

        context.engine.register_query(query)
        await add_recipe({"title": "cake"})
        assert await query.cached_keys() == []

    def test_mutation_registered(self, context):
        mutation = context.with_mutation_registration(AsyncMock(), name="add_recipe")

        assert context.mutations == {"add_recipe": mutation}

    @pytest.mark.asyncio
    async def test_queries_share_adapter(self, context, memory_cache):
        first = context.with_query_caching(AsyncMock(return_value=1), name="first")
        second = context.with_query_caching(AsyncMock(return_value=2), name="second")

        await first.execute("x")
        await second.execute("x")

        assert sorted(await memory_cache.keys()) == sorted([first.get_key("x"), second.get_key("x")])

    @pytest.mark.asyncio
    async def test_custom_serializers(self, context, memory_cache):
        query = context.with_query_caching(
            AsyncMock(return_value={"n": 1}),
            name="user",
            serialize_key=lambda query_input: str(query_input["id"]),
            serialize_value=lambda output: str(output["n"]),
            deserialize_value=lambda text: {"n": int(text)},
        )

        await query.execute({"id": 9})

        assert await memory_cache.get("user.9") == "1"
        assert await query.execute({"id": 9}) == {"n": 1}

    def test_settings_default_expiry_applied(self, memory_cache):
        context = RemoteStateContext(memory_cache, settings=CacheSettings(default_seconds_until_expiration=120))

        inherited = context.with_query_caching(AsyncMock(), name="inherited")
        explicit = context.with_query_caching(AsyncMock(), name="explicit", seconds_until_expiration=5)

        assert inherited.seconds_until_expiration == 120
        assert explicit.seconds_until_expiration == 5

    @pytest.mark.asyncio
    async def test_contexts_are_isolated(self, memory_cache):
        """Test a mutation only fires triggers of queries in its own context."""
        first = RemoteStateContext(memory_cache)
        second = RemoteStateContext(MemoryAdapter())
        query = second.with_query_caching(AsyncMock(return_value=1), name="q")
        mutation = first.with_mutation_registration(AsyncMock(), name="m")
        affects = AsyncMock(return_value=None)
        query.add_trigger(invalidated_by={"mutation": mutation, "affects": affects})

        await mutation.execute(None)

        affects.assert_not_awaited()


class TestCreateRemoteStateContext:

    def test_uses_given_cache(self, memory_cache):
        context = create_remote_state_context(cache=memory_cache)

        assert context.cache is memory_cache

    def test_builds_cache_from_settings(self):
        context = create_remote_state_context(settings=CacheSettings(memory_max_size=3))

        assert isinstance(context.cache, MemoryAdapter)
        assert context.cache.max_size == 3
        assert context.settings.memory_max_size == 3

    def test_error_handler_passed_to_engine(self, memory_cache):
        handler = AsyncMock()

        context = create_remote_state_context(cache=memory_cache, on_trigger_error=handler)

        assert context.engine._on_trigger_error is handler
