"""
Actual hours, month by month.

For every calendar month intersecting [PoP start, query stop] one batch of
timesheet entries is fetched for the month's slice of that range and folded
into a month -> hours map. Slices are disjoint, so no entry is counted twice.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Callable, Dict, Iterable, List, Optional, Set, Tuple

from burn.core import ValidationError, get_logger
from burn.timetracker.models import TimesheetEntry
from burn.timetracker.months import clamp_to_month, format_month_key, iter_months

logger = get_logger("burn.timetracker.actuals")

# fetch(start, end, jobcode_ids) -> entries
TimesheetFetcher = Callable[[date, date, Optional[List[int]]], Iterable[TimesheetEntry]]


@dataclass
class ActualsSummary:
    hours_by_month: Dict[str, float] = field(default_factory=dict)
    user_ids: Set[int] = field(default_factory=set)
    entry_count: int = 0

    @property
    def total_hours(self) -> float:
        return sum(self.hours_by_month.values())

    def add_batch(self, key: str, entries: Iterable[TimesheetEntry]) -> float:
        """Fold one month's entries in. Returns the hours added."""
        added = 0.0
        for entry in entries:
            added += entry.hours
            self.user_ids.add(entry.user_id)
            self.entry_count += 1
        self.hours_by_month[key] = self.hours_by_month.get(key, 0.0) + added
        return added


def query_windows(pop_start: date, query_stop: date) -> List[Tuple[str, date, date]]:
    """
    (month key, range start, range end) for each month of [pop_start, query_stop].

    Each window is the month clamped to the overall range.
    """
    windows = []
    for month in iter_months(pop_start, query_stop):
        bounds = clamp_to_month(month, pop_start, query_stop)
        if bounds is not None:
            windows.append((format_month_key(month), bounds[0], bounds[1]))
    return windows


def collect_actuals(
    fetch: TimesheetFetcher,
    job_id: int,
    pop_start: date,
    query_stop: date,
) -> ActualsSummary:
    """
    Fetch and aggregate actual hours for ``job_id`` sequentially, one month at a time.

    Any fetch failure propagates unchanged; no partial summary is returned.
    """
    if query_stop < pop_start:
        raise ValidationError(
            "Query Stop occurs before PoP Start. Adjust Query Stop or PoP dates."
        )

    summary = ActualsSummary()
    for key, start, end in query_windows(pop_start, query_stop):
        entries = list(fetch(start, end, [job_id]))
        hours = summary.add_batch(key, entries)
        logger.debug("%s: %d entries, %.2f h (%s..%s)", key, len(entries), hours, start, end)

    logger.info(
        "Collected %.2f actual hours from %d entries across %d month(s) for job %s",
        summary.total_hours,
        summary.entry_count,
        len(summary.hours_by_month),
        job_id,
    )
    return summary
