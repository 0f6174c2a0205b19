"""Trigger definitions.

A trigger connects one mutation to one query cache: whenever the mutation is
executed, ``affects`` names the cached entries it touched, and the trigger
either invalidates them or rewrites them in place with ``update``.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Awaitable, Callable, List, Mapping, Optional, Tuple, Union

from ....core.exceptions import TriggerConfigurationError

if TYPE_CHECKING:
    from ...mutations.services.mutation_handle import MutationHandle


class TriggerKind(str, Enum):
    """What a trigger does to the entries it affects."""
    INVALIDATE = "invalidate"
    UPDATE = "update"


@dataclass(frozen=True)
class AffectsContext:
    """Argument handed to a trigger's ``affects`` function."""

    mutation_input: Any
    mutation_output: Any  # NO_VALUE when the mutation failed
    cached_query_keys: List[str]


@dataclass(frozen=True)
class AffectedTargets:
    """Entries a trigger applies to: literal keys and/or query inputs."""

    keys: Tuple[str, ...] = ()
    inputs: Tuple[Any, ...] = ()

    @classmethod
    def from_result(cls, result: Any) -> "AffectedTargets":
        """Normalize whatever ``affects`` returned.

        Accepts an AffectedTargets, a mapping with optional ``keys`` and
        ``inputs`` lists, or None for "nothing affected".
        """
        if result is None:
            return cls()
        if isinstance(result, AffectedTargets):
            return result
        if not isinstance(result, Mapping):
            raise TypeError(
                f"affects must return AffectedTargets or a mapping, got {type(result).__name__}"
            )

        unknown = set(result) - {"keys", "inputs"}
        if unknown:
            raise TypeError(f"affects returned unknown fields: {sorted(unknown)}")

        keys = result.get("keys") or ()
        inputs = result.get("inputs") or ()
        if not isinstance(keys, (list, tuple)) or not isinstance(inputs, (list, tuple)):
            raise TypeError("affects must return 'keys' and 'inputs' as lists")
        if not all(isinstance(key, str) for key in keys):
            raise TypeError("affects returned a non-string cache key")

        return cls(keys=tuple(keys), inputs=tuple(inputs))


@dataclass(frozen=True)
class UpdateContext:
    """Argument handed to an update trigger's ``update`` function."""

    cached_query_output: Any  # NO_VALUE when nothing is cached for the key
    mutation_output: Any  # NO_VALUE when the mutation failed
    mutation_input: Any = None


AffectsResult = Union[AffectedTargets, Mapping[str, Any], None]
AffectsFn = Callable[[AffectsContext], Union[AffectsResult, Awaitable[AffectsResult]]]
UpdateFn = Callable[[UpdateContext], Any]


@dataclass(frozen=True, eq=False)
class InvalidatedBy:
    """Definition of an invalidation trigger."""

    mutation: "MutationHandle"
    affects: AffectsFn


@dataclass(frozen=True, eq=False)
class UpdatedBy:
    """Definition of an update trigger."""

    mutation: "MutationHandle"
    affects: AffectsFn
    update: UpdateFn


@dataclass(frozen=True, eq=False)
class Trigger:
    """A registered rule owned by exactly one query cache."""

    source_mutation: "MutationHandle"
    kind: TriggerKind
    affects: AffectsFn
    update: Optional[UpdateFn] = field(default=None)

    def __post_init__(self):
        if not callable(self.affects):
            raise TriggerConfigurationError("Trigger 'affects' must be callable")
        if self.kind == TriggerKind.UPDATE and not callable(self.update):
            raise TriggerConfigurationError("Update triggers require a callable 'update'")
        if self.kind == TriggerKind.INVALIDATE and self.update is not None:
            raise TriggerConfigurationError("Invalidation triggers take no 'update' function")

    @classmethod
    def from_definition(
        cls,
        invalidated_by: Union[InvalidatedBy, Mapping[str, Any], None] = None,
        updated_by: Union[UpdatedBy, Mapping[str, Any], None] = None,
    ) -> "Trigger":
        """Build a trigger from exactly one of invalidated_by / updated_by."""
        if (invalidated_by is None) == (updated_by is None):
            raise TriggerConfigurationError(
                "Trigger definition must have exactly one of 'invalidated_by' or 'updated_by'"
            )

        try:
            if invalidated_by is not None:
                if isinstance(invalidated_by, Mapping):
                    invalidated_by = InvalidatedBy(**invalidated_by)
                return cls(
                    source_mutation=invalidated_by.mutation,
                    kind=TriggerKind.INVALIDATE,
                    affects=invalidated_by.affects,
                )

            if isinstance(updated_by, Mapping):
                updated_by = UpdatedBy(**updated_by)
            return cls(
                source_mutation=updated_by.mutation,
                kind=TriggerKind.UPDATE,
                affects=updated_by.affects,
                update=updated_by.update,
            )
        except (TypeError, AttributeError) as e:
            raise TriggerConfigurationError(f"Invalid trigger definition: {e}") from e

    def is_sourced_by(self, mutation: "MutationHandle") -> bool:
        """Triggers match their mutation by identity."""
        return self.source_mutation is mutation
