"""Context feature - one cache adapter shared by queries and mutations."""

from .services import RemoteStateContext, create_remote_state_context

__all__ = ["RemoteStateContext", "create_remote_state_context"]
