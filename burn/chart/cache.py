"""Last generated chart per job, so switching jobs does not force regeneration."""

from typing import TYPE_CHECKING, Dict, Optional

if TYPE_CHECKING:
    from burn.chart.generator import ChartResult


class ChartCache:
    """
    Job id -> last successful ChartResult.

    Entries are only ever overwritten by the next successful generation for
    the same job; there is no other invalidation.
    """

    def __init__(self):
        self._results: Dict[int, "ChartResult"] = {}

    def put(self, job_id: int, result: "ChartResult") -> None:
        self._results[int(job_id)] = result

    def get(self, job_id: int) -> Optional["ChartResult"]:
        return self._results.get(int(job_id))
