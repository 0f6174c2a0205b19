"""Utilities for remote-state-cache."""

from .awaitables import resolve

__all__ = ["resolve"]
