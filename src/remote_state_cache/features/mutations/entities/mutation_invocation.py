"""Mutation invocation record."""

from dataclasses import dataclass
from typing import Any, Optional

from ....core.value_objects import NO_VALUE


@dataclass(frozen=True)
class MutationInvocation:
    """Immutable record of one mutation call.

    ``output`` is NO_VALUE unless the call succeeded; ``error`` is None unless
    it failed.
    """

    mutation_name: str
    input: Any
    succeeded: bool
    output: Any = NO_VALUE
    error: Optional[BaseException] = None

    @classmethod
    def success(cls, mutation_name: str, mutation_input: Any, output: Any) -> "MutationInvocation":
        return cls(mutation_name=mutation_name, input=mutation_input, succeeded=True, output=output)

    @classmethod
    def failure(cls, mutation_name: str, mutation_input: Any, error: BaseException) -> "MutationInvocation":
        return cls(mutation_name=mutation_name, input=mutation_input, succeeded=False, error=error)
