"""RunConfig — file-based settings for the `eval-express run` command."""

from pathlib import Path

from pydantic import BaseModel, Field, field_validator


class RunConfig(BaseModel, frozen=True):
    """Root configuration for a CLI run; every field can be overridden by a flag.

    ``runs_per_eval`` and ``max_concurrency`` are floored at 1, like
    RunTaskOptions.
    """

    task: str | None = Field(default=None, min_length=1)
    runs_per_eval: int = 1
    max_concurrency: int = 1
    verbose: bool = False
    output: Path | None = None
    pretty: bool = False

    @field_validator("runs_per_eval", "max_concurrency", mode="after")
    @classmethod
    def _floor_at_one(cls, value: int) -> int:
        return max(1, value)
