from pydantic import PositiveInt, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class RunConfig(BaseSettings):
    concurrency: PositiveInt
    """Max number of task executors in flight at any one time."""

    model_config = SettingsConfigDict(env_prefix="TASKGRAPH_", extra="forbid")

    @field_validator("concurrency", mode="before")
    @classmethod
    def _reject_bool(cls, value):
        # lax int validation would otherwise coerce True to 1
        if isinstance(value, bool):
            raise ValueError("concurrency must be an integer, not a boolean")

        return value
