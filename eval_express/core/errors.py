"""Base exception class for all eval-express-specific errors."""


class EvalExpressError(Exception):
    """Base class for all eval-express errors."""

    def __init__(self, message: str, retriable: bool = False) -> None:
        super().__init__(message)
        self.retriable = retriable
