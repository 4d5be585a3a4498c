"""
Burn Time Tracker Module

Timesheet API client, federal holiday calendar, monthly actuals and
working-day projections.
"""

from burn.timetracker.actuals import ActualsSummary, collect_actuals, query_windows
from burn.timetracker.holidays import (
    HolidayCalendar,
    federal_holiday_schedule,
    federal_holidays,
    working_days,
)
from burn.timetracker.months import month_key, month_keys
from burn.timetracker.projections import (
    CumulativeSeries,
    SeriesPoint,
    build_cumulative_series,
    extend_projection,
    projected_start_index,
)

__all__ = [
    "ActualsSummary",
    "collect_actuals",
    "query_windows",
    "HolidayCalendar",
    "federal_holiday_schedule",
    "federal_holidays",
    "working_days",
    "month_key",
    "month_keys",
    "CumulativeSeries",
    "SeriesPoint",
    "build_cumulative_series",
    "extend_projection",
    "projected_start_index",
]
