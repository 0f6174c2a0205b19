"""Mutations feature - registered remote writes."""

from .entities import MutationInvocation
from .services import MutationHandle

__all__ = ["MutationInvocation", "MutationHandle"]
