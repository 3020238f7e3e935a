"""ScoreResult and ScoreContext — what a scorer receives and what it returns."""

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

type EvalFields = dict[str, Any]


class ScoreResult(BaseModel):
    """Immutable outcome of one scorer invocation.

    ``passed`` is also accepted as ``pass`` on input so that scorers may return
    plain mappings such as ``{"score": 1.0, "pass": True}``.
    """

    model_config = ConfigDict(frozen=True)

    score: float
    passed: bool | None = Field(
        default=None, validation_alias=AliasChoices("passed", "pass")
    )
    label: str | None = None
    details: dict[str, Any] | None = None


class TaskIdentity(BaseModel, frozen=True):
    name: str
    description: str | None = None


class ScoreContext(BaseModel, frozen=True):
    """Everything a scorer may want to know about the run it is grading.

    ``eval_case`` holds the original case fields (including parameter overrides)
    with ``id`` set to the resolved eval id and ``scorer`` set to the resolved
    scorer name.
    """

    task: TaskIdentity
    eval_case: EvalFields
    params: dict[str, Any]
    run_id: str
    attempt: int = Field(ge=1)
