"""ProgressEvaluationObserver — renders a Rich progress bar for a task run."""

from __future__ import annotations

from rich.console import Console
from rich.progress import (
    Progress,
    ProgressColumn,
    Task,
    TaskID,
    TextColumn,
    TimeElapsedColumn,
    TimeRemainingColumn,
)
from rich.text import Text


class _CountsColumn(ProgressColumn):
    """Renders done+inflight/total, then failures when there are any."""

    def render(self, task: Task) -> Text:
        done = int(task.fields.get("done", 0))
        inflight = int(task.fields.get("inflight", 0))
        failed = int(task.fields.get("failed", 0))
        total = int(task.total or 0)
        text = Text.assemble(
            (str(done), "bright_green"),
            ("+", "dim white"),
            (str(inflight), "grey50"),
            ("/", "dim white"),
            (str(total), "default"),
        )
        if failed:
            text.append(f"  {failed} failed", style="red")
        return text


class _ThreeSegmentBarColumn(ProgressColumn):
    """ProgressColumn that renders three segments: done, in-flight, remaining."""

    def __init__(self, bar_width: int = 40) -> None:
        super().__init__()
        self.bar_width = bar_width

    def render(self, task: Task) -> Text:
        bar_width = self.bar_width or 40
        total = task.total or 0
        if total > 0:
            done_cells = int(task.completed / total * bar_width)
            inflight = int(task.fields.get("inflight", 0))
            # In-flight starts where done ends; done + in-flight never exceeds the bar.
            inflight_cells = min(
                int(inflight / total * bar_width),
                bar_width - done_cells,
            )
        else:
            done_cells = 0
            inflight_cells = 0
        remaining_cells = bar_width - done_cells - inflight_cells

        result = Text()
        result.append("█" * done_cells, style="bright_green")
        result.append("▒" * inflight_cells, style="grey50")
        result.append("░" * remaining_cells, style="dim white")
        return result


def _make_progress(console: Console) -> Progress:
    return Progress(
        TextColumn("[bold]{task.description}[/bold]"),
        _ThreeSegmentBarColumn(bar_width=40),
        _CountsColumn(),
        TimeElapsedColumn(),
        TextColumn("eta"),
        TimeRemainingColumn(),
        console=console,
        refresh_per_second=10,
        transient=False,
    )


class ProgressEvaluationObserver:
    """Renders one progress row per run_task call on stderr.

    Only evaluation_started, run_started, run_completed, run_failed and
    evaluation_completed touch the bar; counters are kept even when
    ``disabled=True`` so tests can assert on them without a terminal.

    Does NOT inherit from EvaluationObserver (structural typing via Protocol).
    """

    def __init__(self, disabled: bool = False) -> None:
        self._disabled = disabled
        self._done = 0
        self._inflight = 0
        self._failed = 0
        self._total = 0
        self._progress: Progress | None = None
        self._task_id: TaskID | None = None

    @property
    def done(self) -> int:
        return self._done

    @property
    def inflight(self) -> int:
        return self._inflight

    @property
    def failed(self) -> int:
        return self._failed

    @property
    def total(self) -> int:
        return self._total

    def _update(self) -> None:
        if self._progress is None or self._task_id is None:
            return
        self._progress.update(
            self._task_id,
            completed=self._done,
            done=self._done,
            inflight=self._inflight,
            failed=self._failed,
        )

    def evaluation_started(
        self,
        task_name: str,
        total_plans: int,
        runs_per_eval: int,
        max_concurrency: int,
    ) -> None:
        self._done = 0
        self._inflight = 0
        self._failed = 0
        self._total = total_plans * runs_per_eval
        self._progress = None
        self._task_id = None

        if self._disabled:
            return

        self._progress = _make_progress(console=Console(stderr=True))
        self._task_id = self._progress.add_task(
            description=task_name,
            total=float(self._total),
            done=0,
            inflight=0,
            failed=0,
        )
        self._progress.start()

    def evaluation_completed(
        self,
        task_name: str,
        total_runs: int,
        failed_runs: int,
        elapsed_seconds: float,
    ) -> None:
        if self._progress is not None:
            self._progress.stop()
        self._progress = None
        self._task_id = None

    def run_started(
        self,
        task_name: str,
        run_id: str,
        eval_id: str,
        eval_name: str | None,
        attempt: int,
    ) -> None:
        self._inflight += 1
        self._update()

    def run_completed(
        self,
        task_name: str,
        run_id: str,
        eval_id: str,
        attempt: int,
        score: float | None,
        duration_ms: float,
    ) -> None:
        self._done += 1
        self._inflight = max(0, self._inflight - 1)
        self._update()

    def run_failed(
        self,
        task_name: str,
        run_id: str,
        eval_id: str,
        attempt: int,
        reason: str,
    ) -> None:
        self._done += 1
        self._failed += 1
        self._inflight = max(0, self._inflight - 1)
        self._update()
