"""Context services."""

from .remote_state_context import RemoteStateContext, create_remote_state_context

__all__ = ["RemoteStateContext", "create_remote_state_context"]
