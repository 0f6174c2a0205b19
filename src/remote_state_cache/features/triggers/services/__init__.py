"""Trigger services."""

from .trigger_engine import (
    TriggerDeliveryReport,
    TriggerEngine,
    TriggerErrorHandler,
    TriggerFailure,
    resolve_target_keys,
)

__all__ = [
    "TriggerDeliveryReport",
    "TriggerEngine",
    "TriggerErrorHandler",
    "TriggerFailure",
    "resolve_target_keys",
]
