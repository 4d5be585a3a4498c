"""Tests for timetracker.actuals: month-by-month actual hours."""

from datetime import date

import pytest

from burn.core import TransportError, ValidationError
from burn.timetracker.actuals import ActualsSummary, collect_actuals, query_windows
from burn.timetracker.models import TimesheetEntry


def _entry(entry_id, user_id, hours):
    return TimesheetEntry(id=entry_id, user_id=user_id, jobcode_id=42, duration=hours * 3600)


class TestQueryWindows:
    def test_clamped_to_pop_start_and_query_stop(self):
        assert query_windows(date(2025, 1, 15), date(2025, 3, 10)) == [
            ("2025-01", date(2025, 1, 15), date(2025, 1, 31)),
            ("2025-02", date(2025, 2, 1), date(2025, 2, 28)),
            ("2025-03", date(2025, 3, 1), date(2025, 3, 10)),
        ]

    def test_single_day(self):
        assert query_windows(date(2025, 6, 3), date(2025, 6, 3)) == [
            ("2025-06", date(2025, 6, 3), date(2025, 6, 3)),
        ]

    def test_windows_are_disjoint(self):
        windows = query_windows(date(2024, 11, 20), date(2025, 2, 5))
        for (_, _, prev_end), (_, next_start, _) in zip(windows, windows[1:]):
            assert next_start > prev_end


class TestActualsSummary:
    def test_add_batch_converts_seconds_and_tracks_users(self):
        summary = ActualsSummary()
        added = summary.add_batch("2025-01", [_entry(1, 7, 1.5), _entry(2, 8, 0.25)])
        assert added == pytest.approx(1.75)
        assert summary.hours_by_month == {"2025-01": pytest.approx(1.75)}
        assert summary.user_ids == {7, 8}
        assert summary.entry_count == 2

    def test_empty_batch_records_zero(self):
        summary = ActualsSummary()
        summary.add_batch("2025-02", [])
        assert summary.hours_by_month == {"2025-02": 0.0}


class TestCollectActuals:
    def test_one_fetch_per_month_with_job_filter(self):
        calls = []

        def fetch(start, end, ids):
            calls.append((start, end, ids))
            if start.month == 1:
                return [_entry(1, 7, 8), _entry(2, 7, 4)]
            return [_entry(3, 9, 2)]

        summary = collect_actuals(fetch, 42, date(2025, 1, 10), date(2025, 2, 14))

        assert calls == [
            (date(2025, 1, 10), date(2025, 1, 31), [42]),
            (date(2025, 2, 1), date(2025, 2, 14), [42]),
        ]
        assert summary.hours_by_month == {"2025-01": 12.0, "2025-02": 2.0}
        assert summary.user_ids == {7, 9}
        assert summary.total_hours == 14.0

    def test_query_stop_before_pop_start(self):
        def fetch(start, end, ids):
            raise AssertionError("must not fetch")

        with pytest.raises(ValidationError):
            collect_actuals(fetch, 42, date(2025, 3, 1), date(2025, 2, 28))

    def test_fetch_failure_propagates(self):
        def fetch(start, end, ids):
            if start.month == 2:
                raise TransportError("HTTP 502")
            return [_entry(1, 7, 8)]

        with pytest.raises(TransportError, match="502"):
            collect_actuals(fetch, 42, date(2025, 1, 1), date(2025, 3, 31))
