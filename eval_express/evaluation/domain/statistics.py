"""Score statistics over run records (or anything carrying an optional score)."""

import statistics
from collections.abc import Sequence
from typing import Protocol

from pydantic import BaseModel

from eval_express.scoring.domain.score import ScoreResult


class Scored(Protocol):
    @property
    def score(self) -> ScoreResult | None: ...


class ScoreSummary(BaseModel, frozen=True):
    total: int
    scored: int
    average_score: float | None
    median_score: float | None
    pass_rate: float | None


def _collect_scores(items: Sequence[Scored]) -> list[float]:
    return [item.score.score for item in items if item.score is not None]


def mean_score(items: Sequence[Scored]) -> float | None:
    """Mean of all present scores, or None if nothing was scored."""
    scores = _collect_scores(items)
    if not scores:
        return None
    return statistics.fmean(scores)


def median_score(items: Sequence[Scored]) -> float | None:
    scores = _collect_scores(items)
    if not scores:
        return None
    return float(statistics.median(scores))


def pass_rate(
    items: Sequence[Scored],
    threshold: float | None = None,
    include_missing: bool = False,
) -> float | None:
    """Fraction of items that passed.

    An item's explicit ``passed`` flag wins; otherwise ``score >= threshold``
    decides when a threshold is given, and the item is skipped when not.
    Unscored items count as failures only with ``include_missing``. Returns
    None when no item could be judged.
    """
    passed = 0
    total = 0

    for item in items:
        if item.score is None:
            if include_missing:
                total += 1
            continue

        if item.score.passed is not None:
            total += 1
            passed += int(item.score.passed)
        elif threshold is not None:
            total += 1
            passed += int(item.score.score >= threshold)

    if total == 0:
        return None
    return passed / total


def summarize_scores(
    items: Sequence[Scored],
    threshold: float | None = None,
    include_missing: bool = False,
) -> ScoreSummary:
    return ScoreSummary(
        total=len(items),
        scored=len(_collect_scores(items)),
        average_score=mean_score(items),
        median_score=median_score(items),
        pass_rate=pass_rate(
            items, threshold=threshold, include_missing=include_missing
        ),
    )
