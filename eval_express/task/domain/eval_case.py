"""EvalCase — one named input/expected-output pair a task is tested against."""

from typing import Any

from pydantic import BaseModel, ConfigDict

RESERVED_EVAL_KEYS = frozenset(
    {"id", "name", "input", "expected_output", "scorer", "metadata"}
)


class EvalCase(BaseModel):
    """Immutable eval case.

    Any keyword outside RESERVED_EVAL_KEYS is kept as an extra field and acts
    as a per-case parameter override, e.g.
    ``EvalCase(input="hi", expected_output="HI", temperature=0.0)``.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    id: str | None = None
    name: str | None = None
    input: Any
    expected_output: Any
    scorer: str | None = None
    metadata: dict[str, Any] | None = None

    def fields(self) -> dict[str, Any]:
        """Return declared and extra fields together as a plain mapping."""
        return dict(self)
