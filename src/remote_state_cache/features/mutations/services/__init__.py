"""Mutation services."""

from .mutation_handle import MutationHandle, MutationLogic

__all__ = ["MutationHandle", "MutationLogic"]
