"""Pytest configuration and fixtures for remote-state-cache tests."""

import pytest
from typing import Any, Dict, List
from unittest.mock import AsyncMock

from remote_state_cache.features.cache.adapters.memory_adapter import MemoryAdapter
from remote_state_cache.features.context.services.remote_state_context import RemoteStateContext


class RecipeBackend:
    """Fake remote service holding recipes, recording every call it receives."""

    def __init__(self):
        self.recipes: List[Dict[str, Any]] = [
            {"title": "chocolate cake", "ingredients": ["chocolate", "flour"]},
            {"title": "vanilla ice cream", "ingredients": ["vanilla", "cream"]},
        ]
        self.search_calls: List[Dict[str, Any]] = []
        self.add_calls: List[Dict[str, Any]] = []
        self.fail_next_add = False

    async def search(self, query_input: Dict[str, Any]) -> List[Dict[str, Any]]:
        self.search_calls.append(query_input)
        term = query_input["searchFor"]
        return [recipe for recipe in self.recipes if term in recipe["title"]]

    async def add(self, recipe: Dict[str, Any]) -> Dict[str, Any]:
        self.add_calls.append(recipe)
        if self.fail_next_add:
            self.fail_next_add = False
            raise RuntimeError("remote write rejected")
        self.recipes.append(recipe)
        return {"id": len(self.recipes), **recipe}


@pytest.fixture
def memory_cache():
    """Empty in-memory cache adapter."""
    return MemoryAdapter()


@pytest.fixture
def context(memory_cache):
    """Context backed by the in-memory adapter."""
    return RemoteStateContext(memory_cache)


@pytest.fixture
def recipe_backend():
    """Fake recipe service."""
    return RecipeBackend()


@pytest.fixture
def mock_cache_adapter():
    """Mock cache adapter for failure scenarios."""
    mock_cache = AsyncMock()
    mock_cache.get = AsyncMock(return_value=None)
    mock_cache.set = AsyncMock(return_value=None)
    mock_cache.keys = AsyncMock(return_value=[])
    return mock_cache


@pytest.fixture
def mock_redis_client():
    """Mock redis.asyncio client."""
    mock_client = AsyncMock()
    mock_client.get = AsyncMock(return_value=None)
    mock_client.set = AsyncMock(return_value=True)
    mock_client.delete = AsyncMock(return_value=1)
    mock_client.ping = AsyncMock(return_value=True)
    mock_client.info = AsyncMock(return_value={})
    return mock_client
