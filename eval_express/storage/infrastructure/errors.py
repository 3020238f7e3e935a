"""Error types raised by run storage."""

from pathlib import Path

from eval_express.core.errors import EvalExpressError


class RunsLoadError(EvalExpressError):
    """Raised when a saved runs file cannot be read back into RunRecords."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        super().__init__(f"Failed to load runs from {path}: {reason}")
