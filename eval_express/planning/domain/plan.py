"""Plan value objects — the resolved, pre-execution units of work."""

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel

from eval_express.scoring.domain.scorer import Scorer
from eval_express.task.domain.eval_case import EvalCase


class TaskPlan(BaseModel, frozen=True):
    """Public projection of one (eval case x matrix combination) pairing."""

    plan_id: str
    task_name: str
    eval_id: str
    eval_name: str | None = None
    params: dict[str, Any]
    input: Any
    expected_output: Any
    scorer: str | None = None
    metadata: dict[str, Any] | None = None


@dataclass(frozen=True)
class PlanEntry:
    """A TaskPlan plus what execution needs but callers never see.

    ``scorer_fn`` is None when the entry runs unscored.
    """

    plan: TaskPlan
    eval_case: EvalCase
    scorer_fn: Scorer | None = None


@dataclass(frozen=True)
class PlannedExecution:
    """One attempt at one plan entry; attempts are numbered from 1."""

    entry: PlanEntry
    attempt: int
