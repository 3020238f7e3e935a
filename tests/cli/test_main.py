"""Tests for the eval-express CLI."""

import json
from collections.abc import Iterator
from pathlib import Path

import pytest
import structlog
from typer.testing import CliRunner

from eval_express.cli.main import app
from eval_express.storage.infrastructure.json_loader import load_runs

_TASK_REF = "tests.sample_tasks:greeting_task"

runner = CliRunner()


@pytest.fixture(autouse=True)
def _reset_structlog() -> Iterator[None]:
    # The run command points structlog at the runner's captured stderr.
    yield
    structlog.reset_defaults()


class TestPlanCommand:
    def test_prints_plan_as_json(self) -> None:
        result = runner.invoke(app, ["plan", _TASK_REF])

        assert result.exit_code == 0
        plans = json.loads(result.stdout)
        assert [p["eval_id"] for p in plans] == ["ada", "grace", "broken"]
        assert plans[1]["params"] == {"greeting": "Hi"}
        assert plans[0]["scorer"] == "string_exact_match"

    def test_bad_reference_exits_with_error(self) -> None:
        result = runner.invoke(app, ["plan", "tests.sample_tasks:not_a_task"])

        assert result.exit_code == 1
        assert "Failed to load task" in result.stdout


class TestRunCommand:
    def test_runs_and_writes_output(self, tmp_path: Path) -> None:
        output = tmp_path / "out" / "runs.json"

        result = runner.invoke(
            app,
            [
                "run",
                _TASK_REF,
                "--runs-per-eval",
                "2",
                "--max-concurrency",
                "3",
                "--output",
                str(output),
                "--log-format",
                "json",
            ],
        )

        assert result.exit_code == 0
        assert "greeter" in result.stdout
        runs = load_runs(output)
        assert len(runs) == 6
        assert [r.status for r in runs].count("error") == 2
        assert runs[0].run_fields == {"length": 3}

    def test_config_file_supplies_task_and_options(self, tmp_path: Path) -> None:
        config = tmp_path / "run.yaml"
        config.write_text(
            f"task: {_TASK_REF}\nruns_per_eval: 1\noutput: runs.json\n",
            encoding="utf-8",
        )

        result = runner.invoke(
            app, ["run", "--config", str(config), "--log-format", "json"]
        )

        assert result.exit_code == 0
        assert len(load_runs(tmp_path / "runs.json")) == 3

    def test_zero_counts_are_floored_to_one(self, tmp_path: Path) -> None:
        output = tmp_path / "runs.json"

        result = runner.invoke(
            app,
            [
                "run",
                _TASK_REF,
                "-n",
                "0",
                "-j",
                "0",
                "--quiet",
                "--log-format",
                "json",
                "--output",
                str(output),
            ],
        )

        assert result.exit_code == 0
        assert len(load_runs(output)) == 3

    def test_invalid_merged_config_exits_cleanly(self, tmp_path: Path) -> None:
        config = tmp_path / "run.yaml"
        config.write_text(f"task: {_TASK_REF}\n", encoding="utf-8")

        result = runner.invoke(
            app,
            ["run", "", "--config", str(config), "--log-format", "json"],
        )

        assert result.exit_code == 1
        assert "Failed to validate config" in result.stdout
        assert isinstance(result.exception, SystemExit)

    def test_missing_task_reference_exits(self) -> None:
        result = runner.invoke(app, ["run", "--log-format", "json"])

        assert result.exit_code == 1
        assert "Missing task reference" in result.stdout

    def test_invalid_log_format_exits(self) -> None:
        result = runner.invoke(app, ["run", _TASK_REF, "--log-format", "xml"])

        assert result.exit_code == 1
        assert "Invalid log format" in result.stdout
