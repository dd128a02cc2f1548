"""
Registry module for the taskgraph framework.
"""

import logging
from typing import TYPE_CHECKING

import anyio
import sniffio

from .config import RunConfig
from .exceptions import (
    DuplicateTaskError,
    RegistrationDuringRunError,
    UnknownDependencyError,
)
from .runner import Runner
from .task import Dependency, TaskNode
from .topology import Topology

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Callable, Iterator, KeysView, Mapping
    from typing import Any

    from .outcome import OutcomeKind
    from .store import OutcomeStore
    from .task import TaskFn

    DependsOn = Mapping[str, OutcomeKind | str | None]

logger = logging.getLogger(__name__)


class TaskQueue:
    """
    A graph of named async tasks, each gated on the outcomes of tasks registered
    before it.

    ```python
    queue = TaskQueue()

    @queue.task("fetch")
    async def fetch(outcomes): ...

    @queue.task("report", depends_on={"fetch": "settled"})
    async def report(outcomes): ...

    results = await queue.run(concurrency=4)
    ```

    A task may only depend on keys that are already registered, so registration
    order is also a valid execution order. Each dependency requires the parent to
    be `fulfilled`, `rejected`, or merely `settled`; a task whose requirements are
    not met is skipped and has no entry in the results.
    """

    def __init__(self) -> None:
        self._nodes: dict[str, TaskNode] = {}
        self._active_runs = 0

    def register(
        self, key: str, fn: "TaskFn", depends_on: "DependsOn | None" = None
    ) -> "TaskQueue":
        if self._active_runs:
            raise RegistrationDuringRunError(key)
        elif key in self._nodes:
            raise DuplicateTaskError(key)

        dependencies: list[Dependency] = []
        for parent, kind in (depends_on or {}).items():
            if kind is None:
                continue
            elif parent not in self._nodes:
                raise UnknownDependencyError(parent)

            dependencies.append(Dependency(parent=parent, kind=kind))

        # nothing is mutated until every dependency has been validated
        node = TaskNode(key=key, fn=fn, dependencies=tuple(dependencies))
        self._nodes[key] = node
        for dep in node.dependencies:
            self._nodes[dep.parent].children.append(node)

        logger.debug(
            "Registered task '%s' depending on %s.",
            key,
            {dep.parent: dep.kind.value for dep in node.dependencies},
        )
        return self

    def task(
        self, key: str, depends_on: "DependsOn | None" = None
    ) -> "Callable[[TaskFn], TaskFn]":
        def decorator(fn: "TaskFn") -> "TaskFn":
            self.register(key, fn, depends_on=depends_on)
            return fn

        return decorator

    @property
    def topology(self) -> Topology:
        return Topology.from_nodes(self._nodes.values())

    async def run(self, **settings: "Any") -> "OutcomeStore":
        """Run every task in the queue, returning the outcome of each that finished."""
        config = RunConfig(**settings)

        self._active_runs += 1
        try:
            return await Runner(self._nodes, config).run()
        finally:
            self._active_runs -= 1

    def run_sync(self, backend: str = "asyncio", **settings: "Any") -> "OutcomeStore":
        try:
            sniffio.current_async_library()
            raise RuntimeError(
                "Running a TaskQueue synchronously within an event loop is forbidden"
                " as it would block that loop. Use `await queue.run(...)` instead."
            )
        except sniffio.AsyncLibraryNotFoundError:
            pass

        config = RunConfig(**settings)

        self._active_runs += 1
        try:
            return anyio.run(Runner(self._nodes, config).run, backend=backend)
        finally:
            self._active_runs -= 1

    def keys(self) -> "KeysView[str]":
        return self._nodes.keys()

    def __getitem__(self, key: str) -> TaskNode:
        return self._nodes[key]

    def __contains__(self, key: object) -> bool:
        return key in self._nodes

    def __iter__(self) -> "Iterator[str]":
        return iter(self._nodes)

    def __len__(self) -> int:
        return len(self._nodes)
