"""Error types raised while declaring a task."""

from eval_express.core.errors import EvalExpressError


class TaskDefinitionError(EvalExpressError):
    """Raised when a task declaration does not match the TaskDefinition schema."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"Failed to define task: {reason}")
