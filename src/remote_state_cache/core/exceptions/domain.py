"""Domain exceptions - misuse of queries, mutations and triggers."""

from .base import RemoteStateCacheError


class ValidationError(RemoteStateCacheError):
    """Raised when input validation fails."""
    pass


class TriggerConfigurationError(ValidationError):
    """Raised when a trigger definition is not exactly one of invalidated_by / updated_by."""
    pass


class QueryRegistrationError(ValidationError):
    """Raised when a query name is already registered in the same context."""
    pass


class InvalidTargetError(ValidationError):
    """Raised when invalidate/update is called without any input or key."""
    pass
