"""
Burn Chart Generation

Combines monthly actuals, the working-day projection and the ceiling
schedule into one chart result for a job.

Data flow:
    timesheets API (one fetch per month of [PoP start, query stop])
        ↓ collect_actuals()          month -> actual hours, user ids
        ↓ extend_projection()        + working days x hours/day after query stop
        ↓ build_cumulative_series()  monthly / cumulative, projected start index
        ↓ accrue_ceiling()           stepped ceiling + 75% line on the same months
    ChartResult → CLI table / JSON
"""

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Any, Dict, Iterable, List, Mapping, Optional

from burn.ceiling import (
    CeilingRecord,
    CeilingRelease,
    CeilingStore,
    accrue_ceiling,
    load_record_or_empty,
    pop_validation_message,
)
from burn.chart.cache import ChartCache
from burn.core import TransportError, ValidationError, get_logger
from burn.core.config import get_hours_per_day
from burn.timetracker.actuals import TimesheetFetcher, collect_actuals
from burn.timetracker.client import TimesheetClient
from burn.timetracker.holidays import HolidayCalendar
from burn.timetracker.jobs import employee_names
from burn.timetracker.models import User
from burn.timetracker.months import month_start
from burn.timetracker.projections import (
    DEFAULT_HOURS_PER_DAY,
    SeriesPoint,
    build_cumulative_series,
    extend_projection,
)

logger = get_logger("burn.chart.generator")


# ---------------------------------------------------------------------------
# Defaults & validation
# ---------------------------------------------------------------------------


def default_query_stop(today: Optional[date] = None) -> date:
    """Last day of the month before ``today``."""
    today = today or date.today()
    return month_start(today) - timedelta(days=1)


def default_pop_start(today: Optional[date] = None) -> date:
    """January 1 of the current year."""
    today = today or date.today()
    return date(today.year, 1, 1)


def validate_chart_request(
    pop_start: Optional[date], pop_end: Optional[date], query_stop: date
) -> None:
    """Raise ValidationError for an unusable PoP / query stop combination."""
    if pop_start is None or pop_end is None:
        raise ValidationError(
            "Missing PoP: set PoP Start and End on the ceiling record before "
            "generating a chart."
        )
    message = pop_validation_message(pop_start, pop_end)
    if message:
        raise ValidationError(message)
    if query_stop < pop_start:
        raise ValidationError(
            "Query Stop occurs before PoP Start. Adjust Query Stop or PoP dates."
        )


# ---------------------------------------------------------------------------
# Result
# ---------------------------------------------------------------------------


@dataclass
class ChartResult:
    job_id: int
    pop_start: date
    pop_end: date
    query_stop: date
    cumulative_series: List[SeriesPoint]
    monthly_series: List[SeriesPoint]
    cumulative_actual_series: List[SeriesPoint]
    projected_start_index: Optional[int] = None
    ceiling_series: Optional[List[float]] = None
    ceiling75_series: Optional[List[float]] = None
    employee_names: List[str] = field(default_factory=list)
    generated_at: datetime = field(default_factory=datetime.now)

    @property
    def months(self) -> List[str]:
        return [p.month for p in self.cumulative_series]

    @property
    def projected_total(self) -> Optional[float]:
        """Cumulative hours at the last month (actual + projected)."""
        return self.cumulative_series[-1].value if self.cumulative_series else None

    @property
    def ceiling_total(self) -> Optional[float]:
        """Ceiling value aligned to the last month of the series."""
        if not self.ceiling_series:
            return None
        idx = min(len(self.ceiling_series), len(self.cumulative_series)) - 1
        if idx < 0:
            return self.ceiling_series[-1]
        return self.ceiling_series[idx]

    def is_projected(self, index: int) -> bool:
        return self.projected_start_index is not None and index >= self.projected_start_index

    def to_dict(self) -> Dict[str, Any]:
        return {
            "job_id": self.job_id,
            "pop_start": self.pop_start.isoformat(),
            "pop_end": self.pop_end.isoformat(),
            "query_stop": self.query_stop.isoformat(),
            "cumulative_series": [p._asdict() for p in self.cumulative_series],
            "monthly_series": [p._asdict() for p in self.monthly_series],
            "cumulative_actual_series": [p._asdict() for p in self.cumulative_actual_series],
            "projected_start_index": self.projected_start_index,
            "ceiling_series": self.ceiling_series,
            "ceiling75_series": self.ceiling75_series,
            "employee_names": list(self.employee_names),
            "projected_total": self.projected_total,
            "ceiling_total": self.ceiling_total,
            "generated_at": self.generated_at.isoformat(timespec="seconds"),
        }


# ---------------------------------------------------------------------------
# Generation
# ---------------------------------------------------------------------------


def generate_chart(
    job_id: int,
    pop_start: date,
    pop_end: date,
    query_stop: date,
    *,
    fetch_timesheets: TimesheetFetcher,
    releases: Iterable[CeilingRelease] = (),
    users: Optional[Mapping[int, User]] = None,
    calendar: Optional[HolidayCalendar] = None,
    hours_per_day: float = DEFAULT_HOURS_PER_DAY,
    today: Optional[date] = None,
) -> ChartResult:
    """
    Build the complete chart for one job, or raise.

    Inputs are validated before the first fetch. A failed month fetch aborts
    the whole generation; no partial series is ever returned.
    """
    validate_chart_request(pop_start, pop_end, query_stop)
    calendar = calendar or HolidayCalendar()

    try:
        actuals = collect_actuals(fetch_timesheets, job_id, pop_start, query_stop)
    except TransportError as exc:
        logger.error("Chart generation for job %s aborted: %s", job_id, exc)
        raise

    hours_by_month = extend_projection(
        actuals.hours_by_month,
        query_stop,
        pop_end,
        calendar=calendar,
        hours_per_day=hours_per_day,
    )
    series = build_cumulative_series(
        pop_start, pop_end, query_stop, hours_by_month, today=today
    )
    ceiling = accrue_ceiling(releases, series.months)

    result = ChartResult(
        job_id=job_id,
        pop_start=pop_start,
        pop_end=pop_end,
        query_stop=query_stop,
        cumulative_series=series.cumulative,
        monthly_series=series.monthly,
        cumulative_actual_series=list(series.cumulative),
        projected_start_index=series.projected_start_index,
        ceiling_series=ceiling.values if ceiling else None,
        ceiling75_series=ceiling.warning if ceiling else None,
        employee_names=employee_names(actuals.user_ids, users or {}),
    )
    logger.info(
        "Generated chart for job %s: %d months, total %.2f h, ceiling %s",
        job_id,
        len(result.months),
        result.projected_total or 0.0,
        "none" if result.ceiling_total is None else f"{result.ceiling_total:.2f} h",
    )
    return result


class ChartGenerator:
    """
    Caller-side workflow around generate_chart().

    Resolves PoP dates from the stored ceiling record, talks to the timesheet
    API, and caches the last successful result per job.
    """

    def __init__(
        self,
        client: Optional[TimesheetClient] = None,
        store: Optional[CeilingStore] = None,
        cache: Optional[ChartCache] = None,
    ):
        self._client = client
        self.store = store or CeilingStore()
        self.cache = cache if cache is not None else ChartCache()
        self._users: Optional[Dict[int, User]] = None

    @property
    def client(self) -> TimesheetClient:
        if self._client is None:
            self._client = TimesheetClient.from_config()
        return self._client

    def users(self) -> Dict[int, User]:
        if self._users is None:
            self._users = self.client.fetch_users()
        return self._users

    def load_record(self, job_id: int) -> CeilingRecord:
        return load_record_or_empty(self.store, job_id)

    def cached(
        self,
        job_id: int,
        pop_start: date,
        pop_end: date,
        query_stop: date,
        releases: Iterable[CeilingRelease] = (),
    ) -> Optional[ChartResult]:
        """
        The cached chart for a job, if it still matches the request.

        A hit needs the same PoP and query stop, and ``releases`` must accrue
        to the ceiling the cached chart was drawn with.
        """
        result = self.cache.get(job_id)
        if result is None:
            return None
        if (result.pop_start, result.pop_end, result.query_stop) != (pop_start, pop_end, query_stop):
            return None
        ceiling = accrue_ceiling(releases, result.months)
        if (ceiling.values if ceiling else None) != result.ceiling_series:
            return None
        return result

    def generate(
        self,
        job_id: int,
        *,
        query_stop: Optional[date] = None,
        pop_start: Optional[date] = None,
        pop_end: Optional[date] = None,
        today: Optional[date] = None,
        refresh: bool = False,
    ) -> ChartResult:
        """
        Generate and cache a chart; explicit PoP dates override the stored record.

        A chart already generated for the same job and dates is returned from
        the cache unless ``refresh`` is set.
        """
        record = self.load_record(job_id)
        pop_start = pop_start or record.pop_start
        pop_end = pop_end or record.pop_end
        query_stop = query_stop or default_query_stop(today)

        validate_chart_request(pop_start, pop_end, query_stop)

        if not refresh:
            hit = self.cached(job_id, pop_start, pop_end, query_stop, record.releases)
            if hit is not None:
                logger.debug("Using cached chart for job %s", job_id)
                return hit

        client = self.client
        result = generate_chart(
            job_id,
            pop_start,
            pop_end,
            query_stop,
            fetch_timesheets=client.fetch_timesheets,
            releases=record.releases,
            users=self.users(),
            hours_per_day=get_hours_per_day(),
            today=today,
        )
        self.cache.put(job_id, result)
        return result
