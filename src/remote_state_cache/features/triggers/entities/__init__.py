"""Trigger entities."""

from .trigger import (
    AffectedTargets,
    AffectsContext,
    AffectsFn,
    InvalidatedBy,
    Trigger,
    TriggerKind,
    UpdateContext,
    UpdatedBy,
    UpdateFn,
)

__all__ = [
    "AffectedTargets",
    "AffectsContext",
    "AffectsFn",
    "InvalidatedBy",
    "Trigger",
    "TriggerKind",
    "UpdateContext",
    "UpdatedBy",
    "UpdateFn",
]
