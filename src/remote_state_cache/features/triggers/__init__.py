"""Triggers feature - keeping cached queries consistent with mutations."""

from .entities import (
    AffectedTargets,
    AffectsContext,
    InvalidatedBy,
    Trigger,
    TriggerKind,
    UpdateContext,
    UpdatedBy,
)
from .services import TriggerDeliveryReport, TriggerEngine, TriggerFailure

__all__ = [
    "AffectedTargets",
    "AffectsContext",
    "InvalidatedBy",
    "Trigger",
    "TriggerKind",
    "UpdateContext",
    "UpdatedBy",
    "TriggerDeliveryReport",
    "TriggerEngine",
    "TriggerFailure",
]
