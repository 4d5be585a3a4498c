"""
Month arithmetic and month-key bucketing.

Months are handled internally as ``(year, month)`` tuples; the ``YYYY-MM``
string form is produced only where a key leaves this module.
"""

import re
from calendar import monthrange
from datetime import date, timedelta
from typing import Iterator, List, Optional, Tuple

Month = Tuple[int, int]

_KEY_RE = re.compile(r"^(\d{4})-(\d{2})$")


def month_of(day: date) -> Month:
    return (day.year, day.month)


def format_month_key(month: Month) -> str:
    """(2025, 3) -> "2025-03"."""
    year, mon = month
    return f"{year:04d}-{mon:02d}"


def month_key(day: date) -> str:
    """Key of the calendar month containing ``day``."""
    return format_month_key(month_of(day))


def parse_month_key(key: str) -> Optional[Month]:
    """Parse "YYYY-MM" into (year, month). Returns None for malformed keys."""
    match = _KEY_RE.match(key or "")
    if not match:
        return None
    year, mon = int(match.group(1)), int(match.group(2))
    if not 1 <= mon <= 12 or year < 1:
        return None
    return (year, mon)


def next_month(month: Month) -> Month:
    year, mon = month
    if mon == 12:
        return (year + 1, 1)
    return (year, mon + 1)


def first_day(month: Month) -> date:
    return date(month[0], month[1], 1)


def last_day(month: Month) -> date:
    year, mon = month
    return date(year, mon, monthrange(year, mon)[1])


def month_start(day: date) -> date:
    return day.replace(day=1)


def month_end(day: date) -> date:
    return last_day(month_of(day))


def start_of_next_month(key: str) -> Optional[date]:
    """First day of the month after ``key``, or None if the key is malformed."""
    month = parse_month_key(key)
    if month is None:
        return None
    year, mon = next_month(month)
    if year > date.max.year:
        return None
    return first_day((year, mon))


def iter_months(start: date, end: date) -> Iterator[Month]:
    """Yield every calendar month from start's month through end's month."""
    current = month_of(start)
    last = month_of(end)
    while current <= last:
        yield current
        current = next_month(current)


def month_keys(start: date, end: date) -> List[str]:
    """
    Inclusive, ascending month keys spanning ``start`` through ``end``.

    A reversed range (start's month after end's month) yields an empty list.
    """
    return [format_month_key(m) for m in iter_months(start, end)]


def clamp_to_month(month: Month, start: date, end: date) -> Optional[Tuple[date, date]]:
    """
    Intersect ``month`` with the inclusive range [start, end].

    Returns (range_start, range_end), or None when they do not overlap.
    """
    range_start = max(first_day(month), start)
    range_end = min(last_day(month), end)
    if range_start > range_end:
        return None
    return range_start, range_end


def day_after(day: date) -> date:
    return day + timedelta(days=1)
