from collections.abc import Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING

from .exceptions import OutcomeAlreadyRecordedError, SealedStoreError

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Iterator

    from .outcome import Outcome


class OutcomeStore(Mapping[str, "Outcome"]):
    """
    The outcomes of every task that finished during a run, keyed by task key.

    Each key is written exactly once, by the runner, when its task finishes. Once
    the run completes the store is sealed and becomes the run's result. A key that
    is absent means the task never became eligible.
    """

    def __init__(self) -> None:
        self._outcomes: dict[str, "Outcome"] = {}
        self._sealed = False

    def record(self, key: str, outcome: "Outcome") -> None:
        if self._sealed:
            raise SealedStoreError()
        elif key in self._outcomes:
            raise OutcomeAlreadyRecordedError(key)

        self._outcomes[key] = outcome

    def snapshot(self) -> "Mapping[str, Outcome]":
        """Copy the current outcomes so the view stays frozen at a task's start."""
        return MappingProxyType(dict(self._outcomes))

    def seal(self) -> None:
        self._sealed = True

    @property
    def sealed(self) -> bool:
        return self._sealed

    def __getitem__(self, key: str) -> "Outcome":
        return self._outcomes[key]

    def __iter__(self) -> "Iterator[str]":
        return iter(self._outcomes)

    def __len__(self) -> int:
        return len(self._outcomes)

    def __repr__(self) -> str:
        return f"OutcomeStore({self._outcomes!r})"
