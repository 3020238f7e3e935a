"""RunTaskOptions — knobs for a run_task call."""

from typing import Any

from pydantic import BaseModel, field_validator


class RunTaskOptions(BaseModel, frozen=True):
    """Normalized run options.

    ``runs_per_eval`` is the number of attempts per plan entry and
    ``max_concurrency`` bounds in-flight executions across all entries and
    attempts. Both are floored at 1; None means the default.
    """

    runs_per_eval: int = 1
    max_concurrency: int = 1
    verbose: bool = False

    @field_validator("runs_per_eval", "max_concurrency", mode="before")
    @classmethod
    def _default_count(cls, value: Any) -> Any:
        return 1 if value is None else value

    @field_validator("runs_per_eval", "max_concurrency", mode="after")
    @classmethod
    def _floor_at_one(cls, value: int) -> int:
        return max(1, value)

    @field_validator("verbose", mode="before")
    @classmethod
    def _default_verbose(cls, value: Any) -> Any:
        return False if value is None else value
