from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

from .outcome import OutcomeKind

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Awaitable, Callable, Mapping
    from typing import Any

    from .outcome import Outcome

    TaskFn = Callable[[Mapping[str, Outcome]], Awaitable[Any]]


class TaskState(Enum):
    PENDING = "pending"
    ELIGIBLE = "eligible"
    RUNNING = "running"
    FINISHED = "finished"


class Dependency(BaseModel):
    parent: str
    kind: OutcomeKind

    model_config = ConfigDict(extra="forbid", frozen=True)


@dataclass(eq=False)
class TaskNode:
    key: str
    fn: "TaskFn"
    dependencies: tuple[Dependency, ...] = ()
    children: list["TaskNode"] = field(default_factory=list)

    def satisfied(
        self, states: "Mapping[str, TaskState]", outcomes: "Mapping[str, Outcome]"
    ) -> bool:
        return all(
            states[dep.parent] is TaskState.FINISHED
            and dep.kind.admits(outcomes[dep.parent])
            for dep in self.dependencies
        )

    def __repr__(self) -> str:
        return f"TaskNode(key={self.key!r})"
