"""Tests for timetracker.holidays: federal holidays and working days."""

from datetime import date

import pytest

from burn.timetracker.holidays import (
    HolidayCalendar,
    federal_holiday_schedule,
    federal_holidays,
    last_weekday,
    nth_weekday,
    observed_date,
    working_days,
)


# ---------------------------------------------------------------------------
# TestObservedDate
# ---------------------------------------------------------------------------


class TestObservedDate:
    def test_saturday_moves_to_friday(self):
        # July 4, 2026 is a Saturday
        assert observed_date(date(2026, 7, 4)) == date(2026, 7, 3)

    def test_sunday_moves_to_monday(self):
        # July 4, 2021 is a Sunday
        assert observed_date(date(2021, 7, 4)) == date(2021, 7, 5)

    def test_weekday_unchanged(self):
        assert observed_date(date(2026, 6, 19)) == date(2026, 6, 19)


# ---------------------------------------------------------------------------
# TestWeekdayRules
# ---------------------------------------------------------------------------


class TestWeekdayRules:
    def test_third_monday_january_2026(self):
        assert nth_weekday(2026, 1, 0, 3) == date(2026, 1, 19)

    def test_first_monday_when_month_starts_monday(self):
        # June 1, 2026 is a Monday
        assert nth_weekday(2026, 6, 0, 1) == date(2026, 6, 1)

    def test_fourth_thursday_november_2026(self):
        assert nth_weekday(2026, 11, 3, 4) == date(2026, 11, 26)

    def test_last_monday_may_2026(self):
        # May 31, 2026 is a Sunday
        assert last_weekday(2026, 5, 0) == date(2026, 5, 25)

    def test_last_monday_when_month_ends_monday(self):
        # March 31, 2025 is a Monday
        assert last_weekday(2025, 3, 0) == date(2025, 3, 31)


# ---------------------------------------------------------------------------
# TestFederalHolidays
# ---------------------------------------------------------------------------


class TestFederalHolidays:
    def test_2026_full_set(self):
        assert federal_holidays(2026) == {
            date(2026, 1, 1),    # New Year's Day (Thu)
            date(2026, 1, 19),   # MLK Day
            date(2026, 2, 16),   # Presidents Day
            date(2026, 5, 25),   # Memorial Day
            date(2026, 6, 19),   # Juneteenth (Fri)
            date(2026, 7, 3),    # Independence Day observed
            date(2026, 9, 7),    # Labor Day
            date(2026, 10, 12),  # Columbus Day
            date(2026, 11, 11),  # Veterans Day (Wed)
            date(2026, 11, 26),  # Thanksgiving
            date(2026, 12, 25),  # Christmas (Fri)
        }

    def test_eleven_holidays(self):
        for year in (2021, 2022, 2025, 2026, 2027):
            assert len(federal_holidays(year)) == 11

    def test_new_year_on_saturday_observed_previous_year(self):
        # Jan 1, 2022 is a Saturday: observed Friday Dec 31, 2021
        assert date(2021, 12, 31) in federal_holidays(2022)
        assert date(2022, 1, 1) not in federal_holidays(2022)

    def test_christmas_on_sunday_observed_monday(self):
        assert date(2022, 12, 26) in federal_holidays(2022)

    def test_schedule_sorted_and_named(self):
        schedule = federal_holiday_schedule(2026)
        assert [d for d, _ in schedule] == sorted(d for d, _ in schedule)
        names = dict((d, n) for d, n in schedule)
        assert names[date(2026, 7, 3)] == "Independence Day"
        assert names[date(2026, 11, 26)] == "Thanksgiving Day"

    def test_all_observed_dates_are_weekdays(self):
        for year in range(2020, 2031):
            for day in federal_holidays(year):
                assert day.weekday() < 5


# ---------------------------------------------------------------------------
# TestWorkingDays
# ---------------------------------------------------------------------------


class TestWorkingDays:
    def test_single_weekday(self):
        assert working_days(date(2025, 2, 4), date(2025, 2, 4)) == 1

    def test_single_weekend_day(self):
        assert working_days(date(2025, 2, 1), date(2025, 2, 1)) == 0

    def test_single_holiday(self):
        # Observed Independence Day 2026
        assert working_days(date(2026, 7, 3), date(2026, 7, 3)) == 0

    def test_reversed_range_is_zero(self):
        assert working_days(date(2025, 3, 1), date(2025, 2, 1)) == 0

    def test_january_2025(self):
        # 23 weekdays minus New Year's Day and MLK Day
        assert working_days(date(2025, 1, 1), date(2025, 1, 31)) == 21

    def test_february_2025(self):
        # 20 weekdays minus Presidents Day
        assert working_days(date(2025, 2, 1), date(2025, 2, 28)) == 19

    def test_march_2025_has_no_holidays(self):
        assert working_days(date(2025, 3, 1), date(2025, 3, 31)) == 21

    def test_observed_new_year_not_counted_against_prior_year(self):
        # Dec 31, 2021 belongs to 2022's holiday set, so it counts as a
        # working day when checked against 2021's holidays.
        assert working_days(date(2021, 12, 31), date(2021, 12, 31)) == 1

    def test_range_spanning_years(self):
        # Dec 29, 2025 (Mon) .. Jan 2, 2026 (Fri): Jan 1 is a holiday
        assert working_days(date(2025, 12, 29), date(2026, 1, 2)) == 4


class TestHolidayCalendar:
    def test_cache_populated_once_per_year(self):
        cal = HolidayCalendar()
        cal.working_days(date(2025, 12, 1), date(2026, 1, 31))
        assert cal.cached_years == [2025, 2026]
        first = cal.holidays(2026)
        assert cal.holidays(2026) is first

    def test_calendars_do_not_share_cache(self):
        a = HolidayCalendar()
        b = HolidayCalendar()
        a.holidays(2025)
        assert b.cached_years == []

    def test_shared_calendar_matches_fresh(self):
        cal = HolidayCalendar()
        assert working_days(date(2025, 1, 1), date(2025, 12, 31), cal) == working_days(
            date(2025, 1, 1), date(2025, 12, 31)
        )

    @pytest.mark.parametrize(
        "day,expected",
        [
            (date(2025, 1, 20), False),  # MLK Day
            (date(2025, 1, 21), True),
            (date(2025, 1, 25), False),  # Saturday
        ],
    )
    def test_is_working_day(self, day, expected):
        assert HolidayCalendar().is_working_day(day) is expected
