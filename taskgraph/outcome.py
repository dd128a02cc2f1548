from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, ClassVar, Generic, TypeVar, Union

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Awaitable, Callable
    from typing import Any

T = TypeVar("T")


class OutcomeKind(str, Enum):
    FULFILLED = "fulfilled"
    REJECTED = "rejected"
    SETTLED = "settled"

    def admits(self, outcome: "Outcome") -> bool:
        """Whether a finished task's outcome satisfies a dependency of this kind."""
        if self is OutcomeKind.SETTLED:
            return True
        elif self is OutcomeKind.FULFILLED:
            return isinstance(outcome, Fulfilled)
        elif self is OutcomeKind.REJECTED:
            return isinstance(outcome, Rejected)

        raise ValueError(f"Unhandled outcome kind '{self.value}'.")  # pragma: no cover


@dataclass(frozen=True, slots=True)
class Fulfilled(Generic[T]):
    value: T

    kind: ClassVar[OutcomeKind] = OutcomeKind.FULFILLED


@dataclass(frozen=True, slots=True)
class Rejected:
    reason: Exception

    kind: ClassVar[OutcomeKind] = OutcomeKind.REJECTED


Outcome = Union[Fulfilled, Rejected]


async def capture(
    fn: "Callable[..., Awaitable[T]]", *args: "Any"
) -> "Fulfilled[T] | Rejected":
    """Await `fn(*args)`, wrapping its result or the exception it raised."""
    try:
        return Fulfilled(await fn(*args))
    except Exception as e:
        return Rejected(e)
