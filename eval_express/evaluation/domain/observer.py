"""Observer port for the evaluation domain — defines events in domain language."""

from typing import Protocol


class EvaluationObserver(Protocol):
    """Observer port emitting structured events during a run_task call.

    Implementations may log to structlog, render progress, or record for tests.
    No ordering is guaranteed between events of different in-flight runs.
    """

    def evaluation_started(
        self,
        task_name: str,
        total_plans: int,
        runs_per_eval: int,
        max_concurrency: int,
    ) -> None: ...

    def evaluation_completed(
        self,
        task_name: str,
        total_runs: int,
        failed_runs: int,
        elapsed_seconds: float,
    ) -> None: ...

    def run_started(
        self,
        task_name: str,
        run_id: str,
        eval_id: str,
        eval_name: str | None,
        attempt: int,
    ) -> None: ...

    def run_completed(
        self,
        task_name: str,
        run_id: str,
        eval_id: str,
        attempt: int,
        score: float | None,
        duration_ms: float,
    ) -> None: ...

    def run_failed(
        self,
        task_name: str,
        run_id: str,
        eval_id: str,
        attempt: int,
        reason: str,
    ) -> None: ...
