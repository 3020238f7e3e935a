"""CLI entrypoint for eval-express — typer app with `run` and `plan` commands."""

import asyncio
import json
import sys
import time
from pathlib import Path

import structlog
import typer
from pydantic import ValidationError

from eval_express.cli.output.aggregator import aggregate
from eval_express.cli.output.summary import print_summary
from eval_express.config.domain.config import RunConfig
from eval_express.config.infrastructure.errors import ConfigValidationError
from eval_express.config.infrastructure.yaml_loader import YamlConfigLoader
from eval_express.core.errors import EvalExpressError
from eval_express.evaluation.application.runner import run_task
from eval_express.evaluation.domain.observer import EvaluationObserver
from eval_express.evaluation.domain.options import RunTaskOptions
from eval_express.evaluation.infrastructure.composite_observer import (
    CompositeEvaluationObserver,
)
from eval_express.evaluation.infrastructure.observer import (
    StructlogEvaluationObserver,
)
from eval_express.evaluation.infrastructure.progress_observer import (
    ProgressEvaluationObserver,
)
from eval_express.planning.application.builder import plan_task
from eval_express.storage.infrastructure.json_writer import save_runs, to_jsonable
from eval_express.task.infrastructure.loader import load_task

app = typer.Typer(add_completion=False)


def _configure_structlog(log_format: str) -> None:
    """Configure structlog based on the requested format."""
    if log_format == "console":
        renderer: structlog.types.Processor = structlog.dev.ConsoleRenderer()
    elif log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        typer.echo(f"Invalid log format: {log_format!r}. Must be 'console' or 'json'.")
        raise typer.Exit(code=1)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(0),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )


def _resolve_config(
    config_path: Path | None,
    task_ref: str | None,
    runs_per_eval: int | None,
    max_concurrency: int | None,
    verbose: bool | None,
    output: Path | None,
    pretty: bool | None,
) -> RunConfig:
    """Merge the optional YAML config with command-line overrides.

    Raises:
        ConfigValidationError: if the merged settings fail validation.
    """
    base = (
        YamlConfigLoader().load(path=config_path)
        if config_path is not None
        else RunConfig()
    )
    overrides = {
        key: value
        for key, value in {
            "task": task_ref,
            "runs_per_eval": runs_per_eval,
            "max_concurrency": max_concurrency,
            "verbose": verbose,
            "output": output,
            "pretty": pretty,
        }.items()
        if value is not None
    }
    try:
        return RunConfig.model_validate({**base.model_dump(), **overrides})
    except ValidationError as exc:
        raise ConfigValidationError(str(exc)) from exc


@app.command()
def run(
    task_ref: str | None = typer.Argument(
        None, help="Task reference, e.g. 'my_evals.greeting:task'"
    ),
    config_path: Path | None = typer.Option(
        None, "--config", "-c", help="Path to a run config YAML"
    ),
    runs_per_eval: int | None = typer.Option(
        None, "--runs-per-eval", "-n", help="Attempts per plan entry"
    ),
    max_concurrency: int | None = typer.Option(
        None, "--max-concurrency", "-j", help="Maximum runs in flight"
    ),
    verbose: bool | None = typer.Option(
        None, "--verbose/--quiet", help="Log every run instead of a progress bar"
    ),
    output: Path | None = typer.Option(
        None, "--output", "-o", help="Write run records to this JSON file"
    ),
    pretty: bool | None = typer.Option(
        None, "--pretty/--compact", help="Indent the JSON output"
    ),
    log_format: str = typer.Option(
        "console",
        "--log-format",
        help="Log format: 'console' or 'json'",
    ),
) -> None:
    """Run every eval case of a task and print a score summary."""
    try:
        _configure_structlog(log_format=log_format)

        config = _resolve_config(
            config_path=config_path,
            task_ref=task_ref,
            runs_per_eval=runs_per_eval,
            max_concurrency=max_concurrency,
            verbose=verbose,
            output=output,
            pretty=pretty,
        )
        if config.task is None:
            typer.echo("Missing task reference: pass TASK_REF or set 'task' in config.")
            raise typer.Exit(code=1)

        task = load_task(config.task)

        observers: list[EvaluationObserver] = []
        if config.verbose or log_format == "json":
            observers.append(StructlogEvaluationObserver())
        else:
            observers.append(ProgressEvaluationObserver())

        started_at = time.monotonic()
        result = asyncio.run(
            run_task(
                task,
                RunTaskOptions(
                    runs_per_eval=config.runs_per_eval,
                    max_concurrency=config.max_concurrency,
                    verbose=config.verbose,
                ),
                observer=CompositeEvaluationObserver(observers=observers),
            )
        )
        elapsed_seconds = time.monotonic() - started_at

        output_path = None
        if config.output is not None:
            output_path = save_runs(
                runs=result.runs, path=config.output, pretty=config.pretty
            )

        print_summary(
            task_name=task.name,
            result=result,
            aggregated=aggregate(runs=result.runs),
            elapsed_seconds=elapsed_seconds,
            output_path=output_path,
        )

    except KeyboardInterrupt:
        typer.echo("Evaluation interrupted.")
        sys.exit(1)
    except EvalExpressError as exc:
        typer.echo(str(exc))
        sys.exit(1)


@app.command()
def plan(
    task_ref: str = typer.Argument(
        ..., help="Task reference, e.g. 'my_evals.greeting:task'"
    ),
) -> None:
    """Print the expanded plan as JSON without running anything."""
    try:
        task = load_task(task_ref)
        plans = plan_task(task)
    except EvalExpressError as exc:
        typer.echo(str(exc))
        sys.exit(1)

    payload = [to_jsonable(p.model_dump()) for p in plans]
    typer.echo(json.dumps(payload, indent=2))


if __name__ == "__main__":
    app()
