"""Configuration errors raised while expanding a task into a plan."""

from eval_express.core.errors import EvalExpressError


class DuplicateEvalIdError(EvalExpressError):
    """Raised when two eval cases in one task resolve to the same eval id."""

    def __init__(self, eval_id: str, task_name: str) -> None:
        self.eval_id = eval_id
        super().__init__(
            f"Failed to plan task '{task_name}': eval id '{eval_id}' is duplicated"
        )


class InvalidMatrixError(EvalExpressError):
    """Raised when a matrix entry is not a non-empty list of values."""

    def __init__(self, key: str, task_name: str) -> None:
        self.key = key
        super().__init__(
            f"Failed to plan task '{task_name}': matrix entry '{key}' must be a"
            f" non-empty list"
        )


class ScorerNotRegisteredError(EvalExpressError):
    """Raised when a scorer name matches neither a task scorer nor a built-in."""

    def __init__(self, scorer: str, task_name: str) -> None:
        self.scorer = scorer
        super().__init__(
            f"Failed to plan task '{task_name}': scorer '{scorer}' is not registered"
        )
