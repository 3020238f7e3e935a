"""Aggregator — groups RunRecords by plan entry and computes score statistics."""

import statistics
from dataclasses import dataclass

from eval_express.evaluation.domain.run import RunRecord
from eval_express.evaluation.domain.statistics import mean_score, pass_rate


@dataclass(frozen=True)
class AggregatedResult:
    """One plan entry with its attempts folded together."""

    plan_id: str
    eval_id: str
    eval_name: str | None
    runs: list[RunRecord]

    errors: int
    score_mean: float | None
    score_stddev: float | None
    pass_rate: float | None

    @property
    def label(self) -> str:
        return self.eval_name or self.eval_id


def _stddev(values: list[float]) -> float | None:
    """Return sample stddev for N >= 2, 0.0 for N == 1, None when nothing scored."""
    if not values:
        return None
    if len(values) < 2:
        return 0.0
    return statistics.stdev(values)


def aggregate(runs: list[RunRecord]) -> list[AggregatedResult]:
    """Group runs by plan_id, preserving the order of first occurrence."""
    groups: dict[str, list[RunRecord]] = {}
    for run in runs:
        groups.setdefault(run.plan_id, []).append(run)

    results: list[AggregatedResult] = []
    for plan_id, group_runs in groups.items():
        sorted_runs = sorted(group_runs, key=lambda r: r.attempt)
        first = sorted_runs[0]
        scores = [r.score.score for r in sorted_runs if r.score is not None]
        results.append(
            AggregatedResult(
                plan_id=plan_id,
                eval_id=first.eval_id,
                eval_name=first.eval_name,
                runs=sorted_runs,
                errors=sum(1 for r in sorted_runs if r.status == "error"),
                score_mean=mean_score(sorted_runs),
                score_stddev=_stddev(scores),
                pass_rate=pass_rate(sorted_runs),
            )
        )

    return results
