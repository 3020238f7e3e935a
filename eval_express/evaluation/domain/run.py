"""RunRecord — the immutable result of one execution attempt."""

import traceback
from datetime import datetime
from typing import Any, Literal, Self

from pydantic import BaseModel, Field

from eval_express.scoring.domain.score import ScoreResult

type RunId = str
type RunStatus = Literal["success", "error"]


class CapturedError(BaseModel, frozen=True):
    """Name, message and formatted traceback of an exception caught during a run."""

    name: str
    message: str
    stack: str | None = None

    @classmethod
    def from_exception(cls, exc: BaseException) -> Self:
        return cls(
            name=type(exc).__name__,
            message=str(exc),
            stack="".join(traceback.format_exception(exc)) or None,
        )


class RunRecord(BaseModel, frozen=True):
    """Immutable record of one attempt: task invoked, output scored, outcome stamped.

    ``output``, ``score``, ``error`` and ``run_fields`` are left unset when the
    run did not produce them, so ``model_dump(exclude_unset=True)`` omits them
    rather than emitting nulls.
    """

    id: RunId = Field(min_length=1)
    status: RunStatus
    plan_id: str
    task_name: str
    task_description: str | None = None
    eval_id: str
    eval_name: str | None = None
    attempt: int = Field(ge=1)
    params: dict[str, Any]
    input: Any
    expected_output: Any
    output: Any = None
    scorer: str | None = None
    score: ScoreResult | None = None
    error: CapturedError | None = None
    started_at: datetime
    finished_at: datetime
    duration_ms: float = Field(ge=0)
    metadata: dict[str, Any] | None = None
    run_fields: dict[str, Any] | None = None
