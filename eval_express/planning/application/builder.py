"""Plan builder — expands a TaskDefinition into ordered plan entries."""

from collections.abc import Mapping
from typing import Any

from eval_express.planning.domain.errors import (
    DuplicateEvalIdError,
    InvalidMatrixError,
    ScorerNotRegisteredError,
)
from eval_express.planning.domain.plan import PlanEntry, TaskPlan
from eval_express.planning.domain.slug import create_eval_id, create_plan_id
from eval_express.scoring.application.resolver import resolve_scorer
from eval_express.task.domain.eval_case import RESERVED_EVAL_KEYS
from eval_express.task.domain.task import Params, TaskDefinition

type Combination = dict[str, Any]


def build_matrix_combinations(
    matrix: Mapping[str, Any] | None, task_name: str
) -> list[Combination]:
    """Return the Cartesian product of the matrix, in declaration order.

    Keys vary slowest-first: the first declared key is the outermost loop.
    No matrix (or an empty one) yields a single empty combination.

    Raises:
        InvalidMatrixError: if any entry is not a non-empty list or tuple.
    """
    if not matrix:
        return [{}]

    for key, values in matrix.items():
        if not isinstance(values, (list, tuple)) or not values:
            raise InvalidMatrixError(key=key, task_name=task_name)

    combinations: list[Combination] = [{}]
    for key, values in matrix.items():
        combinations = [
            {**combination, key: value}
            for combination in combinations
            for value in values
        ]
    return combinations


def extract_eval_params(fields: Mapping[str, Any]) -> Params:
    """Return every case field outside the reserved key set."""
    return {
        key: value for key, value in fields.items() if key not in RESERVED_EVAL_KEYS
    }


def build_plan_entries(task: TaskDefinition) -> list[PlanEntry]:
    """Expand task into one PlanEntry per (eval case, matrix combination).

    Eval cases are the outer loop and combinations the inner one. Parameters
    merge as defaults < combination < eval-case overrides.

    All configuration problems are raised here, before anything runs, so a bad
    declaration never yields a partial plan.

    Raises:
        InvalidMatrixError: if a matrix entry is empty or not a list.
        DuplicateEvalIdError: if two cases resolve to the same eval id.
        ScorerNotRegisteredError: if a named scorer cannot be resolved.
    """
    combinations = build_matrix_combinations(matrix=task.matrix, task_name=task.name)
    seen_ids: set[str] = set()
    entries: list[PlanEntry] = []

    for eval_index, eval_case in enumerate(task.evals):
        eval_id = create_eval_id(eval_case=eval_case, index=eval_index)
        if eval_id in seen_ids:
            raise DuplicateEvalIdError(eval_id=eval_id, task_name=task.name)
        seen_ids.add(eval_id)

        eval_params = extract_eval_params(eval_case.fields())

        scorer_name = (
            eval_case.scorer if eval_case.scorer is not None else task.scorer
        )
        scorer_fn = (
            resolve_scorer(name=scorer_name, task_scorers=task.scorers)
            if scorer_name
            else None
        )
        if scorer_name and scorer_fn is None:
            raise ScorerNotRegisteredError(scorer=scorer_name, task_name=task.name)

        for combination_index, combination in enumerate(combinations):
            plan = TaskPlan(
                plan_id=create_plan_id(
                    task_name=task.name,
                    eval_id=eval_id,
                    combination_index=combination_index,
                ),
                task_name=task.name,
                eval_id=eval_id,
                eval_name=eval_case.name,
                params={**task.defaults, **combination, **eval_params},
                input=eval_case.input,
                expected_output=eval_case.expected_output,
                scorer=scorer_name,
                metadata=eval_case.metadata,
            )
            entries.append(
                PlanEntry(plan=plan, eval_case=eval_case, scorer_fn=scorer_fn)
            )

    return entries


def plan_task(task: TaskDefinition) -> list[TaskPlan]:
    """Dry run: return the plan projections for task without executing anything."""
    return [entry.plan for entry in build_plan_entries(task)]
