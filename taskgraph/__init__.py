from .config import RunConfig
from .outcome import Fulfilled, Outcome, OutcomeKind, Rejected
from .queue import TaskQueue
from .store import OutcomeStore
from .topology import Topology

__all__ = [
    "Fulfilled",
    "Outcome",
    "OutcomeKind",
    "OutcomeStore",
    "Rejected",
    "RunConfig",
    "TaskQueue",
    "Topology",
]
