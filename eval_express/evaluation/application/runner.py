"""EvaluationRunner — orchestrates plan expansion, execution and scoring."""

import inspect
import time
import uuid
from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any

from eval_express.core.pool import run_with_concurrency
from eval_express.evaluation.domain.observer import EvaluationObserver
from eval_express.evaluation.domain.options import RunTaskOptions
from eval_express.evaluation.domain.run import CapturedError, RunRecord
from eval_express.evaluation.domain.summary import RunTaskResult
from eval_express.evaluation.infrastructure.observer import (
    StructlogEvaluationObserver,
)
from eval_express.evaluation.infrastructure.quiet_observer import (
    QuietEvaluationObserver,
)
from eval_express.planning.application.builder import build_plan_entries
from eval_express.planning.domain.plan import PlannedExecution
from eval_express.scoring.application.resolver import ensure_score_result
from eval_express.scoring.domain.score import ScoreContext, TaskIdentity
from eval_express.task.domain.task import RunFields, TaskDefinition


def _create_run_id() -> str:
    return f"run_{uuid.uuid4()}"


async def _resolve(value: Any) -> Any:
    """Await value if it is awaitable, so sync and async callables look alike."""
    if inspect.isawaitable(value):
        return await value
    return value


class EvaluationRunner:
    """Runs every (plan entry, attempt) pair of a task through a bounded pool.

    The runner is free of infrastructure choices — it receives the task,
    normalized options and an observer, so tests can swap in a recording
    observer without touching the orchestration logic.
    """

    def __init__(
        self,
        task: TaskDefinition,
        options: RunTaskOptions,
        observer: EvaluationObserver,
    ) -> None:
        self._task = task
        self._options = options
        self._observer = observer

    async def run(self) -> RunTaskResult:
        """Execute the full task and return one RunRecord per attempt.

        Planning errors propagate before anything runs. Failures inside an
        individual run are captured into that run's record, so the result is
        always the same length as the work list, ordered by (plan entry,
        attempt).
        """
        entries = build_plan_entries(self._task)
        executions = [
            PlannedExecution(entry=entry, attempt=attempt)
            for entry in entries
            for attempt in range(1, self._options.runs_per_eval + 1)
        ]

        self._observer.evaluation_started(
            task_name=self._task.name,
            total_plans=len(entries),
            runs_per_eval=self._options.runs_per_eval,
            max_concurrency=self._options.max_concurrency,
        )
        started_at = time.monotonic()

        runs = await run_with_concurrency(
            items=executions,
            handler=lambda execution, _index: self._execute(execution),
            concurrency=self._options.max_concurrency,
        )

        self._observer.evaluation_completed(
            task_name=self._task.name,
            total_runs=len(runs),
            failed_runs=sum(1 for run in runs if run.status == "error"),
            elapsed_seconds=time.monotonic() - started_at,
        )
        return RunTaskResult(runs=runs)

    async def _execute(self, execution: PlannedExecution) -> RunRecord:
        """Run one attempt: invoke the task, score the output, build the record.

        Never raises for failures of the task function or scorer; they are
        recorded on the returned RunRecord with ``status="error"``.
        """
        plan = execution.entry.plan
        attempt = execution.attempt
        params = dict(plan.params)  # per attempt; task functions may mutate it
        run_id = _create_run_id()
        started_at = datetime.now(UTC)
        started = time.perf_counter()
        captured_fields: list[RunFields] = []

        def set_run_fields(fields: RunFields) -> None:
            captured_fields[:] = [dict(fields)]

        self._observer.run_started(
            task_name=self._task.name,
            run_id=run_id,
            eval_id=plan.eval_id,
            eval_name=plan.eval_name,
            attempt=attempt,
        )

        outcome: dict[str, Any] = {}
        try:
            output = await _resolve(
                self._task.task(plan.eval_id, plan.input, params, set_run_fields)
            )
            outcome["output"] = output

            scorer_fn = execution.entry.scorer_fn
            if plan.scorer and scorer_fn is not None:
                ctx = ScoreContext(
                    task=TaskIdentity(
                        name=self._task.name, description=self._task.description
                    ),
                    eval_case={
                        **execution.entry.eval_case.fields(),
                        "id": plan.eval_id,
                        "scorer": plan.scorer,
                    },
                    params=params,
                    run_id=run_id,
                    attempt=attempt,
                )
                raw_score = await _resolve(
                    scorer_fn(ctx, output, plan.expected_output)
                )
                outcome["score"] = ensure_score_result(raw_score, plan.scorer)
        except Exception as exc:
            outcome["error"] = CapturedError.from_exception(exc)

        finished_at = datetime.now(UTC)
        duration_ms = (time.perf_counter() - started) * 1000.0

        if captured_fields:
            outcome["run_fields"] = captured_fields[0]

        status = "error" if "error" in outcome else "success"
        if status == "error":
            # A failed run reports no output or score, even if the task returned.
            outcome.pop("output", None)
            outcome.pop("score", None)

        record = RunRecord(
            id=run_id,
            status=status,
            plan_id=plan.plan_id,
            task_name=self._task.name,
            task_description=self._task.description,
            eval_id=plan.eval_id,
            eval_name=plan.eval_name,
            attempt=attempt,
            params=params,
            input=plan.input,
            expected_output=plan.expected_output,
            scorer=plan.scorer,
            started_at=started_at,
            finished_at=finished_at,
            duration_ms=duration_ms,
            metadata=plan.metadata,
            **outcome,
        )

        if record.error is not None:
            self._observer.run_failed(
                task_name=self._task.name,
                run_id=run_id,
                eval_id=plan.eval_id,
                attempt=attempt,
                reason=f"{record.error.name}: {record.error.message}",
            )
        else:
            self._observer.run_completed(
                task_name=self._task.name,
                run_id=run_id,
                eval_id=plan.eval_id,
                attempt=attempt,
                score=record.score.score if record.score is not None else None,
                duration_ms=duration_ms,
            )
        return record


async def run_task(
    task: TaskDefinition,
    options: RunTaskOptions | Mapping[str, Any] | None = None,
    observer: EvaluationObserver | None = None,
    **overrides: Any,
) -> RunTaskResult:
    """Plan and execute task, returning one RunRecord per (plan entry, attempt).

    Options may be given as a RunTaskOptions, a mapping, or keyword arguments
    (``runs_per_eval``, ``max_concurrency``, ``verbose``); keywords win. Without
    an explicit observer, ``verbose=True`` logs each run through structlog and
    ``verbose=False`` stays silent.

    Raises:
        DuplicateEvalIdError, InvalidMatrixError, ScorerNotRegisteredError:
            if the task cannot be planned. Nothing is executed in that case.
    """
    normalized = _normalize_options(options=options, overrides=overrides)
    if observer is None:
        observer = (
            StructlogEvaluationObserver()
            if normalized.verbose
            else QuietEvaluationObserver()
        )
    runner = EvaluationRunner(task=task, options=normalized, observer=observer)
    return await runner.run()


def _normalize_options(
    options: RunTaskOptions | Mapping[str, Any] | None,
    overrides: Mapping[str, Any],
) -> RunTaskOptions:
    if isinstance(options, RunTaskOptions):
        base = options.model_dump()
    else:
        base = dict(options or {})
    return RunTaskOptions.model_validate({**base, **overrides})
