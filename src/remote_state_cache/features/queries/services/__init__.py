"""Query services."""

from .query_cache import QueryCache, QueryLogic, ToValueFn

__all__ = ["QueryCache", "QueryLogic", "ToValueFn"]
