"""RunTaskResult — the aggregate result of one run_task call."""

from pydantic import BaseModel

from eval_express.evaluation.domain.run import RunRecord


class RunTaskResult(BaseModel, frozen=True):
    """Every RunRecord produced, ordered by (plan entry, attempt).

    Always the same length as the work list; failed runs are included with
    ``status == "error"``.
    """

    runs: list[RunRecord]

    @property
    def failed(self) -> list[RunRecord]:
        return [run for run in self.runs if run.status == "error"]
