"""Scorer lookup and score-result validation."""

import math
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from eval_express.scoring.domain.score import ScoreResult
from eval_express.scoring.domain.scorer import Scorer, ScorerRegistry
from eval_express.scoring.infrastructure.builtin import BUILTIN_SCORERS
from eval_express.scoring.infrastructure.errors import ScorerContractError


def resolve_scorer(
    name: str, task_scorers: ScorerRegistry | None = None
) -> Scorer | None:
    """Return the scorer registered under name, or None if nothing matches.

    The task's own registry is consulted before the built-in table, so a task
    may shadow a built-in name.
    """
    if task_scorers and name in task_scorers:
        return task_scorers[name]
    return BUILTIN_SCORERS.get(name)


def ensure_score_result(value: Any, scorer_name: str) -> ScoreResult:
    """Validate a scorer's raw return value and coerce it into a ScoreResult.

    Raises:
        ScorerContractError: if value is not a ScoreResult or mapping, or its
            score is missing, non-numeric, or NaN.
    """
    if isinstance(value, ScoreResult):
        result = value
    elif isinstance(value, Mapping):
        score = value.get("score")
        if isinstance(score, bool) or not isinstance(score, (int, float)):
            raise ScorerContractError(
                scorer=scorer_name, reason="returned a non-numeric score value"
            )
        try:
            result = ScoreResult.model_validate(dict(value))
        except ValidationError as exc:
            raise ScorerContractError(
                scorer=scorer_name, reason=f"returned an invalid score result: {exc}"
            ) from exc
    else:
        raise ScorerContractError(
            scorer=scorer_name, reason="returned an invalid score result object"
        )

    if math.isnan(result.score):
        raise ScorerContractError(
            scorer=scorer_name, reason="returned a non-numeric score value"
        )
    return result
