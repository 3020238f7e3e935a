"""TaskDefinition — the declarative description of what to evaluate."""

from collections.abc import Awaitable, Callable
from typing import Any, Protocol, overload

from pydantic import BaseModel, Field, ValidationError

from eval_express.task.domain.errors import TaskDefinitionError
from eval_express.task.domain.eval_case import EvalCase

type Params = dict[str, Any]
type RunFields = dict[str, Any]


class RunFieldSetter(Protocol):
    """Callback a task function may use to attach custom fields to its run record."""

    def __call__(self, fields: RunFields) -> None: ...


class TaskRunner(Protocol):
    """The function under test.

    Receives the eval id, the case input, the merged parameters and a
    RunFieldSetter. May be sync or async and may raise.
    """

    def __call__(
        self,
        eval_id: str,
        input: Any,
        params: Params,
        set_run_fields: RunFieldSetter,
    ) -> Any | Awaitable[Any]: ...


class TaskDefinition(BaseModel, frozen=True):
    """Immutable task declaration: function under test, cases, sweeps, scorers.

    ``matrix`` is deliberately loosely typed; its shape is checked during
    planning so that a malformed sweep surfaces as a planning error.
    """

    name: str = Field(min_length=1)
    description: str | None = None
    task: Callable[..., Any]
    defaults: Params = Field(default_factory=dict)
    matrix: dict[str, Any] | None = None
    scorers: dict[str, Callable[..., Any]] = Field(default_factory=dict)
    scorer: str | None = None
    evals: list[EvalCase]


@overload
def define_task(
    task: Callable[..., Any], /, **declaration: Any
) -> TaskDefinition: ...


@overload
def define_task(
    task: None = None, /, **declaration: Any
) -> Callable[[Callable[..., Any]], TaskDefinition]: ...


def define_task(
    task: Callable[..., Any] | None = None, /, **declaration: Any
) -> TaskDefinition | Callable[[Callable[..., Any]], TaskDefinition]:
    """Build a TaskDefinition, directly or as a decorator.

    Direct form::

        greet = define_task(greet_fn, name="greet", evals=[...])

    Decorator form::

        @define_task(name="greet", evals=[...])
        def greet(eval_id, input, params, set_run_fields): ...

    Raises:
        TaskDefinitionError: if the declaration fails schema validation.
    """
    if task is None:
        return lambda fn: _build(task=fn, declaration=declaration)
    return _build(task=task, declaration=declaration)


def _build(task: Callable[..., Any], declaration: dict[str, Any]) -> TaskDefinition:
    try:
        return TaskDefinition(task=task, **declaration)
    except ValidationError as exc:
        raise TaskDefinitionError(str(exc)) from exc
