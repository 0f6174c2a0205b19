"""Queries feature - cached remote reads."""

from .services import QueryCache

__all__ = ["QueryCache"]
