"""StructlogEvaluationObserver — production observer that delegates to structlog."""

import structlog


class StructlogEvaluationObserver:
    """Logs evaluation domain events to structlog.

    Does NOT inherit from EvaluationObserver (structural typing via Protocol).
    """

    def __init__(self) -> None:
        self._log = structlog.get_logger()

    def evaluation_started(
        self,
        task_name: str,
        total_plans: int,
        runs_per_eval: int,
        max_concurrency: int,
    ) -> None:
        self._log.info(
            "evaluation.started",
            task_name=task_name,
            total_plans=total_plans,
            runs_per_eval=runs_per_eval,
            max_concurrency=max_concurrency,
            total_runs=total_plans * runs_per_eval,
        )

    def evaluation_completed(
        self,
        task_name: str,
        total_runs: int,
        failed_runs: int,
        elapsed_seconds: float,
    ) -> None:
        self._log.info(
            "evaluation.completed",
            task_name=task_name,
            total_runs=total_runs,
            failed_runs=failed_runs,
            elapsed_seconds=round(elapsed_seconds, 2),
        )

    def run_started(
        self,
        task_name: str,
        run_id: str,
        eval_id: str,
        eval_name: str | None,
        attempt: int,
    ) -> None:
        self._log.info(
            "evaluation.run.started",
            task_name=task_name,
            run_id=run_id,
            eval=eval_name or eval_id,
            attempt=attempt,
        )

    def run_completed(
        self,
        task_name: str,
        run_id: str,
        eval_id: str,
        attempt: int,
        score: float | None,
        duration_ms: float,
    ) -> None:
        self._log.info(
            "evaluation.run.completed",
            task_name=task_name,
            run_id=run_id,
            eval_id=eval_id,
            attempt=attempt,
            score=score,
            duration_ms=round(duration_ms, 1),
        )

    def run_failed(
        self,
        task_name: str,
        run_id: str,
        eval_id: str,
        attempt: int,
        reason: str,
    ) -> None:
        self._log.error(
            "evaluation.run.failed",
            task_name=task_name,
            run_id=run_id,
            eval_id=eval_id,
            attempt=attempt,
            reason=reason,
        )
