"""JSON run writer — serializes RunRecords with fallbacks for non-plain values."""

import json
import traceback
from collections.abc import Callable, Mapping, Sequence
from datetime import date, datetime, time
from pathlib import Path
from typing import Any

from pydantic import BaseModel

from eval_express.evaluation.domain.run import RunRecord

type RunSerializer = Callable[[RunRecord], Any]

_CIRCULAR = "[Circular]"


def default_serializer(run: RunRecord) -> Any:
    """Return the record's explicitly set fields; unset outcome fields are omitted.

    Values are left as-is; to_jsonable takes care of anything non-plain.
    """
    return {key: value for key, value in run if key in run.model_fields_set}


def to_jsonable(value: Any) -> Any:
    """Convert value into plain JSON types.

    Exceptions become ``{name, message, stack}``, dates become ISO strings,
    sets become lists, pydantic models are dumped, callables become
    ``"[Function: name]"`` and unknown objects fall back to ``str()``. A
    container that contains itself is replaced by ``"[Circular]"``.
    """
    return _encode(value=value, ancestors=set())


def _encode(value: Any, ancestors: set[int]) -> Any:
    if value is None or isinstance(value, (bool, int, float, str)):
        return value

    if isinstance(value, BaseException):
        return {
            "name": type(value).__name__,
            "message": str(value),
            "stack": _format_stack(value),
        }
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")

    marker = id(value)
    if marker in ancestors:
        return _CIRCULAR

    ancestors.add(marker)
    try:
        if isinstance(value, BaseModel):
            return _encode(value=value.model_dump(mode="python"), ancestors=ancestors)
        if isinstance(value, Mapping):
            return {
                str(key): _encode(value=child, ancestors=ancestors)
                for key, child in value.items()
            }
        if isinstance(value, (set, frozenset)):
            return [_encode(value=child, ancestors=ancestors) for child in value]
        if isinstance(value, (list, tuple)):
            return [_encode(value=child, ancestors=ancestors) for child in value]
        if callable(value):
            name = getattr(value, "__name__", "")
            return f"[Function: {name}]" if name else "[Function]"
        return str(value)
    finally:
        ancestors.discard(marker)


def _format_stack(exc: BaseException) -> str | None:
    formatted = "".join(traceback.format_exception(exc))
    return formatted or None


def dumps_runs(
    runs: Sequence[RunRecord],
    serializer: RunSerializer | None = None,
    pretty: bool = False,
) -> str:
    """Serialize runs into a JSON array string."""
    serialize = serializer or default_serializer
    payload = [to_jsonable(serialize(run)) for run in runs]
    return json.dumps(payload, indent=2 if pretty else None, allow_nan=True)


def save_runs(
    runs: Sequence[RunRecord],
    path: Path,
    serializer: RunSerializer | None = None,
    pretty: bool = False,
) -> Path:
    """Write runs as a JSON array to path, creating parent directories.

    ``serializer`` may reshape each record before encoding; its output still
    goes through the same non-plain-value fallbacks.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        dumps_runs(runs=runs, serializer=serializer, pretty=pretty), encoding="utf-8"
    )
    return path
