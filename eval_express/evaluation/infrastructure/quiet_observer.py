"""QuietEvaluationObserver — ignores every event."""


class QuietEvaluationObserver:
    """Used by run_task when verbose output is off and no observer is given.

    Does NOT inherit from EvaluationObserver (structural typing via Protocol).
    """

    def evaluation_started(
        self,
        task_name: str,
        total_plans: int,
        runs_per_eval: int,
        max_concurrency: int,
    ) -> None:
        pass

    def evaluation_completed(
        self,
        task_name: str,
        total_runs: int,
        failed_runs: int,
        elapsed_seconds: float,
    ) -> None:
        pass

    def run_started(
        self,
        task_name: str,
        run_id: str,
        eval_id: str,
        eval_name: str | None,
        attempt: int,
    ) -> None:
        pass

    def run_completed(
        self,
        task_name: str,
        run_id: str,
        eval_id: str,
        attempt: int,
        score: float | None,
        duration_ms: float,
    ) -> None:
        pass

    def run_failed(
        self,
        task_name: str,
        run_id: str,
        eval_id: str,
        attempt: int,
        reason: str,
    ) -> None:
        pass
