"""
Projection Business Logic

Forward projection of remaining PoP hours and the cumulative burn series.
No CLI imports; used by the chart generator and tests directly.

Projected hours for a month = working days (Mon-Fri, non-holiday) inside
(query stop, PoP end] that fall in the month, times hours-per-day.
"""

from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, List, Mapping, NamedTuple, Optional, Tuple

from burn.core import ValidationError, get_logger
from burn.timetracker.holidays import HolidayCalendar
from burn.timetracker.months import (
    clamp_to_month,
    day_after,
    format_month_key,
    iter_months,
    month_keys,
    month_of,
    parse_month_key,
)

logger = get_logger("burn.timetracker.projections")

DEFAULT_HOURS_PER_DAY = 8


class SeriesPoint(NamedTuple):
    month: str
    value: float


# ---------------------------------------------------------------------------
# Projection extender
# ---------------------------------------------------------------------------


def has_projection(query_stop: date, pop_end: date) -> bool:
    """Projection applies only when PoP end is strictly after query stop."""
    return pop_end > query_stop


def projection_windows(query_stop: date, pop_end: date) -> List[Tuple[str, date, date]]:
    """(month key, start, end) slices of (query_stop, pop_end], one per month."""
    if not has_projection(query_stop, pop_end):
        return []
    first = day_after(query_stop)
    windows = []
    for month in iter_months(first, pop_end):
        bounds = clamp_to_month(month, first, pop_end)
        if bounds is not None:
            windows.append((format_month_key(month), bounds[0], bounds[1]))
    return windows


def extend_projection(
    hours_by_month: Mapping[str, float],
    query_stop: date,
    pop_end: date,
    *,
    calendar: Optional[HolidayCalendar] = None,
    hours_per_day: float = DEFAULT_HOURS_PER_DAY,
) -> Dict[str, float]:
    """
    Return a copy of ``hours_by_month`` with projected hours added.

    Projected hours accumulate on top of whatever a month already holds.
    """
    calendar = calendar or HolidayCalendar()
    merged = dict(hours_by_month)
    for key, start, end in projection_windows(query_stop, pop_end):
        days = calendar.working_days(start, end)
        merged[key] = merged.get(key, 0.0) + days * hours_per_day
        logger.debug("%s: projected %d working days (%s..%s)", key, days, start, end)
    return merged


# ---------------------------------------------------------------------------
# Cumulative series
# ---------------------------------------------------------------------------


def projected_start_index(
    keys: List[str],
    query_stop: date,
    pop_end: date,
    today: Optional[date] = None,
) -> Optional[int]:
    """
    Index of the first month drawn as projected, or None without a projection.

    Query stop in the future: the first month >= the month holding the day
    after query stop. Query stop today or earlier: the first month strictly
    after query stop's own month, so a mid-month query stop never marks its
    own month as projected.
    """
    if not has_projection(query_stop, pop_end):
        return None
    today = today or date.today()

    if query_stop > today:
        boundary = month_of(day_after(query_stop))
        inclusive = True
    else:
        boundary = month_of(query_stop)
        inclusive = False

    for idx, key in enumerate(keys):
        month = parse_month_key(key)
        if month is None:
            continue
        if month > boundary or (inclusive and month == boundary):
            return idx
    return None


@dataclass
class CumulativeSeries:
    monthly: List[SeriesPoint]
    cumulative: List[SeriesPoint]
    projected_start_index: Optional[int]

    @property
    def months(self) -> List[str]:
        return [p.month for p in self.cumulative]

    @property
    def total(self) -> Optional[float]:
        return self.cumulative[-1].value if self.cumulative else None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "monthly": [p._asdict() for p in self.monthly],
            "cumulative": [p._asdict() for p in self.cumulative],
            "projected_start_index": self.projected_start_index,
        }


def build_cumulative_series(
    pop_start: date,
    pop_end: date,
    query_stop: date,
    hours_by_month: Mapping[str, float],
    *,
    today: Optional[date] = None,
) -> CumulativeSeries:
    """
    Running-total series over [PoP start month, max(query stop, PoP end) month].

    Months absent from ``hours_by_month`` contribute 0.
    """
    if pop_start > pop_end:
        raise ValidationError("PoP Start must be on or before PoP End.")

    keys = month_keys(pop_start, max(query_stop, pop_end))
    monthly: List[SeriesPoint] = []
    cumulative: List[SeriesPoint] = []
    running = 0.0
    for key in keys:
        hours = float(hours_by_month.get(key, 0.0))
        running += hours
        monthly.append(SeriesPoint(key, hours))
        cumulative.append(SeriesPoint(key, running))

    return CumulativeSeries(
        monthly=monthly,
        cumulative=cumulative,
        projected_start_index=projected_start_index(keys, query_stop, pop_end, today),
    )
