"""Scorer Protocol — structural interface for built-in and custom scorers."""

from collections.abc import Awaitable, Mapping
from typing import Any, Protocol

from eval_express.scoring.domain.score import ScoreContext, ScoreResult

type RawScore = ScoreResult | Mapping[str, Any]


class Scorer(Protocol):
    """Grades an actual output against the expected output.

    May be a plain function or a coroutine function; the runner awaits the
    return value when it is awaitable.
    """

    def __call__(
        self, ctx: ScoreContext, output: Any, expected: Any
    ) -> RawScore | Awaitable[RawScore]: ...


type ScorerRegistry = Mapping[str, Scorer]
