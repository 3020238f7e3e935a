"""Error types raised by task infrastructure."""

from eval_express.core.errors import EvalExpressError


class TaskLoadError(EvalExpressError):
    """Raised when a ``module:attribute`` reference does not resolve to a task."""

    def __init__(self, reference: str, reason: str) -> None:
        self.reference = reference
        super().__init__(f"Failed to load task '{reference}': {reason}")
