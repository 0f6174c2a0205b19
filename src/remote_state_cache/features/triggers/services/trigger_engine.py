"""Trigger engine - applies triggers for a mutation invocation.

For every query registered with the engine and every trigger on it sourced by
the invoked mutation, in registration order:

1. list the keys currently cached for the query
2. ask the trigger's ``affects`` which keys/inputs the invocation touched
3. resolve those into one key list
4. invalidate them, or rewrite them through the trigger's ``update``

``affects`` runs whether the mutation succeeded or failed. Each trigger runs
inside its own failure boundary: a failing trigger is logged and reported but
never stops the others, and never reaches the mutation's caller.
"""

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Awaitable, Callable, List, Optional, Union

from ..entities.trigger import AffectedTargets, AffectsContext, Trigger, TriggerKind, UpdateContext
from ...mutations.entities.mutation_invocation import MutationInvocation
from ....core.exceptions import QueryRegistrationError
from ....utils import resolve

if TYPE_CHECKING:
    from ...queries.services.query_cache import QueryCache

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TriggerFailure:
    """One trigger that raised while handling an invocation."""

    query_name: str
    trigger: Trigger
    invocation: MutationInvocation
    error: Exception


@dataclass
class TriggerDeliveryReport:
    """Outcome of delivering one invocation to its triggers."""

    mutation_name: str
    applied: int = 0
    affected_keys: List[str] = field(default_factory=list)
    failures: List[TriggerFailure] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return not self.failures


TriggerErrorHandler = Callable[[TriggerFailure], Union[None, Awaitable[None]]]


def resolve_target_keys(query: "QueryCache", targets: AffectedTargets) -> List[str]:
    """Union of the literal keys and the keys of the inputs a trigger named."""
    return query.resolve_keys(for_keys=targets.keys, for_inputs=targets.inputs)


class TriggerEngine:
    """Matches mutation invocations to the triggers of registered queries."""

    def __init__(self, on_trigger_error: Optional[TriggerErrorHandler] = None):
        self._queries: List["QueryCache"] = []
        self._on_trigger_error = on_trigger_error

    @property
    def queries(self) -> List["QueryCache"]:
        return list(self._queries)

    def register_query(self, query: "QueryCache") -> None:
        """Make a query's triggers visible to mutations delivered here."""
        if any(existing.name == query.name for existing in self._queries):
            raise QueryRegistrationError(
                f"A query named '{query.name}' is already registered",
                details={"name": query.name},
            )
        self._queries.append(query)

    async def deliver(self, mutation: Any, invocation: MutationInvocation) -> TriggerDeliveryReport:
        """Apply every trigger sourced by mutation; never raises for a trigger failure."""
        report = TriggerDeliveryReport(mutation_name=invocation.mutation_name)

        for query in list(self._queries):
            for trigger in query.triggers_for(mutation):
                try:
                    keys = await self.apply(query, trigger, invocation)
                except Exception as e:
                    failure = TriggerFailure(
                        query_name=query.name,
                        trigger=trigger,
                        invocation=invocation,
                        error=e,
                    )
                    report.failures.append(failure)
                    logger.error(
                        f"{trigger.kind.value} trigger of query '{query.name}' failed "
                        f"for mutation '{invocation.mutation_name}': {e}",
                        exc_info=e,
                    )
                    await self._report_failure(failure)
                    continue

                report.applied += 1
                report.affected_keys.extend(keys)

        logger.debug(
            f"Delivered mutation '{invocation.mutation_name}': "
            f"{report.applied} trigger(s) applied, {len(report.failures)} failed"
        )
        return report

    async def apply(self, query: "QueryCache", trigger: Trigger, invocation: MutationInvocation) -> List[str]:
        """Apply one trigger to its query; returns the keys it touched."""
        cached_query_keys = await query.cached_keys()

        result = await resolve(
            trigger.affects(
                AffectsContext(
                    mutation_input=invocation.input,
                    mutation_output=invocation.output,
                    cached_query_keys=cached_query_keys,
                )
            )
        )
        keys = resolve_target_keys(query, AffectedTargets.from_result(result))

        if trigger.kind == TriggerKind.INVALIDATE:
            return await query.invalidate(for_keys=keys)

        def to_value(cached_query_output: Any) -> Any:
            return trigger.update(
                UpdateContext(
                    cached_query_output=cached_query_output,
                    mutation_output=invocation.output,
                    mutation_input=invocation.input,
                )
            )

        return await query.update(for_keys=keys, to_value=to_value)

    async def _report_failure(self, failure: TriggerFailure) -> None:
        if self._on_trigger_error is None:
            return
        try:
            await resolve(self._on_trigger_error(failure))
        except Exception as e:
            logger.error(f"Trigger error handler raised: {e}", exc_info=e)
