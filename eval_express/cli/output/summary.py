"""Terminal summary for a finished run — one row per plan entry."""

from pathlib import Path

import typer

from eval_express.cli.output.aggregator import AggregatedResult
from eval_express.evaluation.domain.statistics import summarize_scores
from eval_express.evaluation.domain.summary import RunTaskResult

# ---------------------------------------------------------------------------
# ANSI helpers
# ---------------------------------------------------------------------------
_RESET = "\033[0m"
_BOLD = "\033[1m"
_DIM = "\033[2m"
_CYAN = "\033[36m"
_YELLOW = "\033[33m"
_GREEN = "\033[32m"
_RED = "\033[31m"
_WHITE = "\033[97m"

# Maximum display width for a plan label column (chars, excluding padding).
_MAX_LABEL_LEN = 32


def _score_color(score: float) -> str:
    if score >= 0.9:
        return _GREEN
    if score >= 0.5:
        return _YELLOW
    return _RED


def _rule(width: int = 72, color: str = _DIM) -> None:
    typer.echo(f"{color}{'─' * width}{_RESET}")


def _truncate(name: str, max_len: int = _MAX_LABEL_LEN) -> str:
    """Truncate a label to max_len, appending '…' if needed."""
    if len(name) <= max_len:
        return name
    return name[: max_len - 1] + "…"


def _format_optional(value: float | None, fmt: str = ".2f") -> str:
    return "—" if value is None else format(value, fmt)


def _format_elapsed(elapsed_seconds: float) -> str:
    """Format elapsed seconds as '1m 23.4s' or '5.2s'."""
    minutes, seconds = divmod(elapsed_seconds, 60)
    if minutes >= 1:
        return f"{int(minutes)}m {seconds:.1f}s"
    return f"{elapsed_seconds:.1f}s"


def print_summary(
    task_name: str,
    result: RunTaskResult,
    aggregated: list[AggregatedResult],
    elapsed_seconds: float,
    output_path: Path | None,
) -> None:
    """Print a colorized summary to stdout."""
    overall = summarize_scores(result.runs)

    typer.echo("")
    _rule(color=_CYAN)
    typer.echo(f"{_CYAN}{_BOLD}  eval-express  ·  {task_name}{_RESET}")
    _rule(color=_CYAN)
    typer.echo("")

    meta_rows: list[tuple[str, str]] = [
        ("Plan entries", str(len(aggregated))),
        ("Total runs", str(overall.total)),
        ("Failed runs", str(len(result.failed))),
        ("Mean score", _format_optional(overall.average_score)),
        ("Pass rate", _format_optional(overall.pass_rate, ".0%")),
        ("Elapsed", _format_elapsed(elapsed_seconds=elapsed_seconds)),
    ]
    if output_path is not None:
        meta_rows.append(("Runs JSON", str(output_path)))
    label_w = max(len(label) for label, _ in meta_rows)
    for label, value in meta_rows:
        typer.echo(f"  {_DIM}{label:<{label_w}}{_RESET}  {_WHITE}{value}{_RESET}")

    if not aggregated:
        typer.echo("")
        _rule(color=_CYAN)
        return

    plan_w = max(len(_truncate(r.label)) for r in aggregated)
    typer.echo("")
    typer.echo(
        f"  {_DIM}{'Eval':<{plan_w}}  {'Runs':>4}  {'Errors':>6}"
        f"  {'Mean':>6}  {'±StdDev':>7}  {'Pass':>5}{_RESET}"
    )
    widths = [plan_w, 4, 6, 6, 7, 5]
    typer.echo("  " + "  ".join("─" * w for w in widths))

    for row in aggregated:
        mean_color = (
            _score_color(row.score_mean) if row.score_mean is not None else _DIM
        )
        error_color = _RED if row.errors else _DIM
        typer.echo(
            f"  {_WHITE}{_truncate(row.label):<{plan_w}}{_RESET}"
            f"  {len(row.runs):>4}"
            f"  {error_color}{row.errors:>6}{_RESET}"
            f"  {mean_color}{_format_optional(row.score_mean):>6}{_RESET}"
            f"  {_DIM}{_format_optional(row.score_stddev):>7}{_RESET}"
            f"  {_format_optional(row.pass_rate, '.0%'):>5}"
        )

    failed = result.failed
    if failed:
        typer.echo("")
        typer.echo(f"  {_YELLOW}{_BOLD}Errors  ({len(failed)} total){_RESET}")
        for run in failed[:10]:
            message = run.error.message if run.error is not None else ""
            short = message[:60] + ("…" if len(message) > 60 else "")
            typer.echo(f"  {_DIM}[{run.eval_id} #{run.attempt}]{_RESET} {short}")
        if len(failed) > 10:
            remaining = len(failed) - 10
            typer.echo(f"  {_DIM}… and {remaining} more — see runs JSON{_RESET}")

    typer.echo("")
    _rule(color=_CYAN)
    typer.echo("")
