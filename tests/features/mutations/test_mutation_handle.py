"""Tests for mutation handles."""

import pytest
from unittest.mock import AsyncMock

from remote_state_cache.core.exceptions import ValidationError
from remote_state_cache.core.value_objects import NO_VALUE
from remote_state_cache.features.mutations.entities.mutation_invocation import MutationInvocation
from remote_state_cache.features.mutations.services.mutation_handle import MutationHandle
from remote_state_cache.features.triggers.services.trigger_engine import TriggerDeliveryReport


@pytest.fixture
def mock_engine():
    engine = AsyncMock()
    engine.deliver = AsyncMock(return_value=TriggerDeliveryReport(mutation_name="add_recipe"))
    return engine


class TestMutationHandle:
    """Test mutation execution and trigger delivery."""

    def test_requires_name(self, mock_engine):
        with pytest.raises(ValidationError):
            MutationHandle(lambda mutation_input: None, "", mock_engine)

    @pytest.mark.asyncio
    async def test_success_returns_output_and_delivers(self, mock_engine, recipe_backend):
        mutation = MutationHandle(recipe_backend.add, "add_recipe", mock_engine)

        output = await mutation.execute({"title": "brownie"})

        assert output == {"id": 3, "title": "brownie"}
        mock_engine.deliver.assert_awaited_once()
        source, invocation = mock_engine.deliver.await_args.args
        assert source is mutation
        assert invocation == MutationInvocation.success("add_recipe", {"title": "brownie"}, output)

    @pytest.mark.asyncio
    async def test_failure_delivers_then_reraises(self, mock_engine, recipe_backend):
        """Test triggers see a failed call before the error reaches the caller."""
        recipe_backend.fail_next_add = True
        mutation = MutationHandle(recipe_backend.add, "add_recipe", mock_engine)

        with pytest.raises(RuntimeError, match="remote write rejected"):
            await mutation({"title": "brownie"})

        mock_engine.deliver.assert_awaited_once()
        _, invocation = mock_engine.deliver.await_args.args
        assert invocation.succeeded is False
        assert invocation.output is NO_VALUE
        assert isinstance(invocation.error, RuntimeError)
        assert invocation.input == {"title": "brownie"}

    @pytest.mark.asyncio
    async def test_sync_mutation_function(self, mock_engine):
        mutation = MutationHandle(lambda mutation_input: mutation_input.upper(), "shout", mock_engine)

        assert await mutation("hi") == "HI"
        mock_engine.deliver.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_none_output_is_a_success(self, mock_engine):
        mutation = MutationHandle(AsyncMock(return_value=None), "delete", mock_engine)

        assert await mutation.execute({"id": 1}) is None

        _, invocation = mock_engine.deliver.await_args.args
        assert invocation.succeeded is True
        assert invocation.output is None

    @pytest.mark.asyncio
    async def test_every_call_delivers(self, mock_engine):
        mutation = MutationHandle(AsyncMock(return_value=1), "touch", mock_engine)

        await mutation.execute("a")
        await mutation.execute("b")

        assert mock_engine.deliver.await_count == 2
