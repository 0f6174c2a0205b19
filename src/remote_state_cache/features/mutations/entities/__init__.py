"""Mutation entities."""

from .mutation_invocation import MutationInvocation

__all__ = ["MutationInvocation"]
