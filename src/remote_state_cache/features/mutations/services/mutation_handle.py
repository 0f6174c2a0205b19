"""Mutation handle - wraps a remote write operation.

Every call, successful or not, is recorded as a MutationInvocation and
delivered to the triggers sourced by this handle before control returns to
the caller. A failure of the wrapped function is re-raised unchanged once
delivery is done.
"""

import logging
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Optional, Union

from ..entities.mutation_invocation import MutationInvocation
from ....core.exceptions import ValidationError
from ....utils import resolve
from ....core.value_objects import NO_VALUE

if TYPE_CHECKING:
    from ...triggers.services.trigger_engine import TriggerEngine

logger = logging.getLogger(__name__)

MutationLogic = Callable[[Any], Union[Any, Awaitable[Any]]]


class MutationHandle:
    """Registered write operation; triggers match it by identity."""

    def __init__(self, logic: MutationLogic, name: str, engine: "TriggerEngine"):
        if not name:
            raise ValidationError("Mutation name must be non-empty")

        self.name = name
        self._logic = logic
        self._engine = engine

    def __repr__(self) -> str:
        return f"MutationHandle(name={self.name!r})"

    async def execute(self, mutation_input: Any) -> Any:
        """Run the mutation, then fire its triggers whatever the outcome."""
        output: Any = NO_VALUE
        error: Optional[BaseException] = None
        try:
            output = await resolve(self._logic(mutation_input))
            return output
        except BaseException as e:
            error = e
            raise
        finally:
            if error is None:
                invocation = MutationInvocation.success(self.name, mutation_input, output)
            else:
                logger.debug(f"Mutation '{self.name}' failed, delivering triggers before re-raising")
                invocation = MutationInvocation.failure(self.name, mutation_input, error)
            await self._engine.deliver(self, invocation)

    async def __call__(self, mutation_input: Any) -> Any:
        return await self.execute(mutation_input)
