"""Error types raised while scoring a run."""

from eval_express.core.errors import EvalExpressError


class ScorerInputError(EvalExpressError):
    """Raised when a built-in scorer receives a value of the wrong shape."""

    def __init__(self, scorer: str, label: str, expected_type: str) -> None:
        self.scorer = scorer
        super().__init__(
            f"Failed to score with '{scorer}': expected {label} to be {expected_type}"
        )


class ScorerContractError(EvalExpressError):
    """Raised when a scorer returns something that is not a valid score result."""

    def __init__(self, scorer: str, reason: str) -> None:
        self.scorer = scorer
        super().__init__(f"Failed to score with '{scorer}': {reason}")
