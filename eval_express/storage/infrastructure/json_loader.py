"""JSON run loader — reads a file written by save_runs back into RunRecords."""

import json
from pathlib import Path

from pydantic import ValidationError

from eval_express.evaluation.domain.run import RunRecord
from eval_express.storage.infrastructure.errors import RunsLoadError


def load_runs(path: Path) -> list[RunRecord]:
    """Parse a JSON array of run records.

    Only files written with the default serializer are expected to validate;
    errors come back as CapturedError and timestamps as datetimes.

    Raises:
        RunsLoadError: if the file is missing, is not JSON, is not an array, or
            any element fails RunRecord validation (all failures are listed).
    """
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise RunsLoadError(path=path, reason="file not found") from exc
    except json.JSONDecodeError as exc:
        raise RunsLoadError(path=path, reason=f"invalid JSON: {exc}") from exc

    if not isinstance(raw, list):
        raise RunsLoadError(path=path, reason="expected a JSON array of runs")

    runs: list[RunRecord] = []
    errors: list[str] = []
    for index, item in enumerate(raw):
        try:
            runs.append(RunRecord.model_validate(item))
        except ValidationError as exc:
            errors.append(f"run {index}: {exc.error_count()} validation error(s)")

    if errors:
        raise RunsLoadError(path=path, reason="; ".join(errors))
    return runs
