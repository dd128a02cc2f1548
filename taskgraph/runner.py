import logging
import math
from collections import deque
from typing import TYPE_CHECKING

import anyio

from .outcome import Rejected, capture
from .store import OutcomeStore
from .task import TaskState

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Mapping

    from anyio.abc import TaskGroup
    from anyio.streams.memory import MemoryObjectSendStream

    from .config import RunConfig
    from .outcome import Outcome
    from .task import TaskNode

logger = logging.getLogger(__name__)


class Runner:
    """
    Drives a single run over a fully registered task graph.

    Tasks without dependencies seed the frontier. While there is room under the
    concurrency cap the runner starts the oldest eligible task; otherwise it waits
    for the next in-flight task to finish, records its outcome, and promotes any
    children whose dependencies are now all satisfied. Tasks that are never
    promoted, either because a required outcome did not occur or because they sit
    on a cycle, are left out of the result.
    """

    def __init__(self, nodes: "Mapping[str, TaskNode]", config: "RunConfig") -> None:
        self.nodes = nodes
        self.config = config
        self.store = OutcomeStore()
        self.states: dict[str, TaskState] = {key: TaskState.PENDING for key in nodes}
        self._frontier: deque["TaskNode"] = deque()
        self._in_flight: set[str] = set()

    @property
    def in_flight(self) -> int:
        return len(self._in_flight)

    async def run(self) -> OutcomeStore:
        for node in self.nodes.values():
            if not node.dependencies:
                self._enqueue(node)

        send_stream, receive_stream = anyio.create_memory_object_stream[
            tuple[str, "Outcome"]
        ](max_buffer_size=math.inf)

        async with send_stream, receive_stream:
            async with anyio.create_task_group() as tg:
                while self._frontier or self._in_flight:
                    if self._frontier and self.in_flight < self.config.concurrency:
                        self._start(tg, self._frontier.popleft(), send_stream)
                    else:
                        key, outcome = await receive_stream.receive()
                        self._finish(key, outcome)

        self.store.seal()
        logger.debug(
            "Run finished with %d of %d tasks completed.",
            len(self.store),
            len(self.nodes),
        )
        return self.store

    def _enqueue(self, node: "TaskNode") -> None:
        self.states[node.key] = TaskState.ELIGIBLE
        self._frontier.append(node)

    def _start(
        self,
        tg: "TaskGroup",
        node: "TaskNode",
        send_stream: "MemoryObjectSendStream[tuple[str, Outcome]]",
    ) -> None:
        self.states[node.key] = TaskState.RUNNING
        self._in_flight.add(node.key)

        logger.debug("Starting task '%s'.", node.key)
        tg.start_soon(
            self._execute, node, self.store.snapshot(), send_stream, name=node.key
        )

    @staticmethod
    async def _execute(
        node: "TaskNode",
        outcomes: "Mapping[str, Outcome]",
        send_stream: "MemoryObjectSendStream[tuple[str, Outcome]]",
    ) -> None:
        outcome = await capture(node.fn, outcomes)
        await send_stream.send((node.key, outcome))

    def _finish(self, key: str, outcome: "Outcome") -> None:
        self._in_flight.remove(key)
        self.store.record(key, outcome)
        self.states[key] = TaskState.FINISHED

        if isinstance(outcome, Rejected):
            logger.info("Task '%s' was rejected.", key, exc_info=outcome.reason)
        else:
            logger.debug("Task '%s' was fulfilled.", key)

        for child in self.nodes[key].children:
            if self.states[child.key] is TaskState.PENDING and child.satisfied(
                self.states, self.store
            ):
                logger.debug("Task '%s' is now eligible.", child.key)
                self._enqueue(child)
