"""
U.S. Federal Holiday Calendar

Observed federal holidays and Mon-Fri working-day counts.
Pure calendar arithmetic: no I/O, no process-wide state.

Fixed-date holidays that fall on a weekend are observed on the nearest
weekday (Saturday -> preceding Friday, Sunday -> following Monday).
Because of that shift, New Year's Day can be observed on December 31 of the
previous year; that date belongs to the *following* year's holiday set.
"""

from datetime import date, timedelta
from typing import Dict, FrozenSet, List, Optional, Set, Tuple

from burn.timetracker.months import last_day

MONDAY, TUESDAY, WEDNESDAY, THURSDAY, FRIDAY, SATURDAY, SUNDAY = range(7)

# (month, day, name)
FIXED_HOLIDAYS = (
    (1, 1, "New Year's Day"),
    (6, 19, "Juneteenth"),
    (7, 4, "Independence Day"),
    (11, 11, "Veterans Day"),
    (12, 25, "Christmas Day"),
)

# (month, weekday, ordinal, name); ordinal -1 means "last"
FLOATING_HOLIDAYS = (
    (1, MONDAY, 3, "Martin Luther King Jr. Day"),
    (2, MONDAY, 3, "Presidents Day"),
    (5, MONDAY, -1, "Memorial Day"),
    (9, MONDAY, 1, "Labor Day"),
    (10, MONDAY, 2, "Columbus Day"),
    (11, THURSDAY, 4, "Thanksgiving Day"),
)


# ---------------------------------------------------------------------------
# Date rules
# ---------------------------------------------------------------------------


def observed_date(day: date) -> date:
    """Shift a weekend date to its observed weekday."""
    if day.weekday() == SATURDAY:
        return day - timedelta(days=1)
    if day.weekday() == SUNDAY:
        return day + timedelta(days=1)
    return day


def nth_weekday(year: int, month: int, weekday: int, n: int) -> date:
    """The n-th (1-based) ``weekday`` of the month, e.g. 3rd Monday of January."""
    first = date(year, month, 1)
    offset = (weekday - first.weekday()) % 7
    return first + timedelta(days=offset + 7 * (n - 1))


def last_weekday(year: int, month: int, weekday: int) -> date:
    """The last ``weekday`` of the month, e.g. last Monday of May."""
    end = last_day((year, month))
    return end - timedelta(days=(end.weekday() - weekday) % 7)


def federal_holiday_schedule(year: int) -> List[Tuple[date, str]]:
    """Observed federal holidays for ``year`` as (date, name), sorted by date."""
    schedule = [
        (observed_date(date(year, month, day)), name)
        for month, day, name in FIXED_HOLIDAYS
    ]
    for month, weekday, ordinal, name in FLOATING_HOLIDAYS:
        if ordinal == -1:
            schedule.append((last_weekday(year, month, weekday), name))
        else:
            schedule.append((nth_weekday(year, month, weekday, ordinal), name))
    return sorted(schedule)


def federal_holidays(year: int) -> Set[date]:
    """Set of observed federal holiday dates for ``year``."""
    return {d for d, _ in federal_holiday_schedule(year)}


# ---------------------------------------------------------------------------
# Working days
# ---------------------------------------------------------------------------


class HolidayCalendar:
    """
    Working-day calculator with an explicit per-year holiday cache.

    Each instance owns its cache, so two calendars never share state.
    """

    def __init__(self):
        self._cache: Dict[int, FrozenSet[date]] = {}

    def holidays(self, year: int) -> FrozenSet[date]:
        if year not in self._cache:
            self._cache[year] = frozenset(federal_holidays(year))
        return self._cache[year]

    @property
    def cached_years(self) -> List[int]:
        return sorted(self._cache)

    def is_working_day(self, day: date) -> bool:
        """Mon-Fri and not in the holiday set of the day's own year."""
        if day.weekday() >= SATURDAY:
            return False
        return day not in self.holidays(day.year)

    def working_days(self, start: date, end: date) -> int:
        """Count working days in [start, end] inclusive. 0 when start > end."""
        if start > end:
            return 0
        count = 0
        current = start
        while current <= end:
            if self.is_working_day(current):
                count += 1
            current += timedelta(days=1)
        return count


def working_days(start: date, end: date, calendar: Optional[HolidayCalendar] = None) -> int:
    """
    Count Mon-Fri, non-holiday days in [start, end] inclusive.

    Holiday sets are computed once per distinct year within the call; pass a
    shared ``calendar`` to reuse them across calls.
    """
    return (calendar or HolidayCalendar()).working_days(start, end)
