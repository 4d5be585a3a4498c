"""
Ceiling accrual onto the chart's month axis.

Each month's ceiling is the running sum of every release dated strictly
before the first day of the following month. Releases are consumed with a
single forward cursor, so the pass is O(releases + months).
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional

from burn.ceiling.models import CeilingRelease, parse_record_date, sort_releases
from burn.timetracker.months import start_of_next_month

WARNING_RATIO = 0.75


@dataclass
class CeilingSeries:
    values: List[float]
    warning: List[float]  # values scaled by WARNING_RATIO

    def to_dict(self) -> Dict[str, Any]:
        return {"ceiling": list(self.values), "ceiling75": list(self.warning)}


def accrue_ceiling(
    releases: Iterable[CeilingRelease],
    month_keys: List[str],
    ratio: float = WARNING_RATIO,
) -> Optional[CeilingSeries]:
    """
    Stepped cumulative ceiling for each month key.

    Returns None ("no ceiling configured") when there are no releases or when
    every accrued value is exactly zero. A malformed month key repeats the
    previous month's value.
    """
    ordered = sort_releases(
        [CeilingRelease(id=r.id, date=parse_record_date(r.date), hours=r.hours, note=r.note)
         for r in releases]
    )
    if not ordered:
        return None

    values: List[float] = []
    running = 0.0
    cursor = 0
    for key in month_keys:
        boundary = start_of_next_month(key)
        if boundary is None:
            values.append(values[-1] if values else 0.0)
            continue
        while cursor < len(ordered) and ordered[cursor].date < boundary:
            running += ordered[cursor].hours
            cursor += 1
        values.append(running)

    if all(v == 0 for v in values):
        return None
    return CeilingSeries(values=values, warning=[v * ratio for v in values])
