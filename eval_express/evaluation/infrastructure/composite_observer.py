"""CompositeEvaluationObserver — fans out all events to a list of observers."""

from eval_express.evaluation.domain.observer import EvaluationObserver


class CompositeEvaluationObserver:
    """Delegates every observer event to each observer in order.

    Does NOT inherit from EvaluationObserver (structural typing via Protocol).
    """

    def __init__(self, observers: list[EvaluationObserver]) -> None:
        self._observers = observers

    def evaluation_started(
        self,
        task_name: str,
        total_plans: int,
        runs_per_eval: int,
        max_concurrency: int,
    ) -> None:
        for obs in self._observers:
            obs.evaluation_started(
                task_name=task_name,
                total_plans=total_plans,
                runs_per_eval=runs_per_eval,
                max_concurrency=max_concurrency,
            )

    def evaluation_completed(
        self,
        task_name: str,
        total_runs: int,
        failed_runs: int,
        elapsed_seconds: float,
    ) -> None:
        for obs in self._observers:
            obs.evaluation_completed(
                task_name=task_name,
                total_runs=total_runs,
                failed_runs=failed_runs,
                elapsed_seconds=elapsed_seconds,
            )

    def run_started(
        self,
        task_name: str,
        run_id: str,
        eval_id: str,
        eval_name: str | None,
        attempt: int,
    ) -> None:
        for obs in self._observers:
            obs.run_started(
                task_name=task_name,
                run_id=run_id,
                eval_id=eval_id,
                eval_name=eval_name,
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
        for obs in self._observers:
            obs.run_completed(
                task_name=task_name,
                run_id=run_id,
                eval_id=eval_id,
                attempt=attempt,
                score=score,
                duration_ms=duration_ms,
            )

    def run_failed(
        self,
        task_name: str,
        run_id: str,
        eval_id: str,
        attempt: int,
        reason: str,
    ) -> None:
        for obs in self._observers:
            obs.run_failed(
                task_name=task_name,
                run_id=run_id,
                eval_id=eval_id,
                attempt=attempt,
                reason=reason,
            )
