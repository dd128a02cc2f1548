from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    from typing import Any


class TaskgraphError(Exception):
    def __init__(self, *args: "Any", **kwargs: "Any") -> None:
        super().__init__(*args, **kwargs)


##
## GRAPH REGISTRATION
##


class GraphRegistrationError(TaskgraphError):
    def __init__(self, message: str) -> None:
        super().__init__(message)


class UnknownDependencyError(GraphRegistrationError):
    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Cannot depend on task '{key}', as it does not exist.")


class DuplicateTaskError(GraphRegistrationError):
    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Task '{key}' is already registered.")


class RegistrationDuringRunError(GraphRegistrationError):
    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(
            f"Cannot register task '{key}' while the queue is running."
        )


##
## OUTCOMES
##


class OutcomeStoreError(TaskgraphError):
    def __init__(self, message: str) -> None:
        super().__init__(message)


class OutcomeAlreadyRecordedError(OutcomeStoreError):
    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"An outcome for task '{key}' has already been recorded.")


class SealedStoreError(OutcomeStoreError):
    def __init__(self) -> None:
        super().__init__("Outcomes cannot be recorded once a run has completed.")
