"""Tests for ceiling.models: releases, records, parsing and PoP validation."""

from datetime import date, datetime, timezone

import pytest

from burn.core import ValidationError
from burn.ceiling.models import (
    CeilingRecord,
    CeilingRelease,
    is_valid_pop,
    parse_hours,
    parse_record_date,
    pop_validation_message,
)


class TestParseHours:
    @pytest.mark.parametrize(
        "text,expected",
        [("100", 100.0), ("-20", -20.0), (" 12.5 ", 12.5), ("1,250", 1250.0), (7, 7.0)],
    )
    def test_numeric(self, text, expected):
        assert parse_hours(text) == expected

    @pytest.mark.parametrize("text", ["", "abc", "12h", "nan", "inf", True])
    def test_non_numeric(self, text):
        with pytest.raises(ValidationError):
            parse_hours(text)

    def test_validation_error_is_value_error(self):
        with pytest.raises(ValueError):
            parse_hours("x")


class TestParseRecordDate:
    def test_plain_date(self):
        assert parse_record_date("2025-01-15") == date(2025, 1, 15)

    def test_none_and_blank(self):
        assert parse_record_date(None) is None
        assert parse_record_date("") is None

    def test_zulu_timestamp_floored_to_local_day(self):
        expected = datetime(2025, 1, 15, 12, 0, tzinfo=timezone.utc).astimezone().date()
        assert parse_record_date("2025-01-15T12:00:00Z") == expected

    def test_naive_datetime(self):
        assert parse_record_date(datetime(2025, 1, 31, 23, 59)) == date(2025, 1, 31)

    def test_garbage_raises_value_error(self):
        with pytest.raises(ValueError):
            parse_record_date("15/01/2025")


class TestPopValidation:
    def test_valid(self):
        assert is_valid_pop(date(2025, 1, 1), date(2025, 1, 1))
        assert pop_validation_message(date(2025, 1, 1), date(2025, 12, 31)) is None

    def test_missing(self):
        assert not is_valid_pop(None, date(2025, 1, 1))
        assert pop_validation_message(None, None) == "Set both PoP Start and PoP End."

    def test_reversed(self):
        assert not is_valid_pop(date(2025, 2, 1), date(2025, 1, 1))
        assert "on or before" in pop_validation_message(date(2025, 2, 1), date(2025, 1, 1))


class TestCeilingRelease:
    def test_generated_ids_unique_uppercase(self):
        a = CeilingRelease(date=date(2025, 1, 1), hours=1)
        b = CeilingRelease(date=date(2025, 1, 1), hours=1)
        assert a.id != b.id
        assert a.id == a.id.upper()

    def test_round_trip_dict(self):
        release = CeilingRelease(date=date(2025, 3, 4), hours=-2.5, note="mod 3", id="ABC")
        assert release.to_dict() == {"id": "ABC", "date": "2025-03-04", "hours": -2.5, "note": "mod 3"}
        assert CeilingRelease.from_dict(release.to_dict()) == release

    def test_blank_note_becomes_none(self):
        release = CeilingRelease.from_dict({"id": "x", "date": "2025-01-01", "hours": 1, "note": ""})
        assert release.note is None
        assert release.id == "X"


class TestCeilingRecord:
    def test_releases_sorted_on_creation(self):
        record = CeilingRecord(releases=[
            CeilingRelease(date=date(2025, 3, 1), hours=1, id="B"),
            CeilingRelease(date=date(2025, 1, 1), hours=2, id="A"),
        ])
        assert [r.id for r in record.releases] == ["A", "B"]

    def test_add_update_remove(self):
        record = CeilingRecord()
        first = record.add_release(date(2025, 2, 1), "100", "initial")
        second = record.add_release(date(2025, 1, 1), "-10")
        assert [r.id for r in record.releases] == [second.id, first.id]
        assert record.total_hours == 90.0
        assert second.note is None

        updated = record.update_release(first.id.lower(), hours="120", note="")
        assert updated.hours == 120.0
        assert updated.note is None
        assert record.get_release(first.id).hours == 120.0

        record.update_release(second.id, day=date(2025, 6, 1))
        assert [r.id for r in record.releases] == [first.id, second.id]

        assert record.remove_release(second.id)
        assert not record.remove_release(second.id)
        assert record.total_hours == 120.0

    def test_add_non_numeric_rejected(self):
        record = CeilingRecord()
        with pytest.raises(ValidationError):
            record.add_release(date(2025, 1, 1), "lots")
        assert record.releases == []

    def test_update_unknown_id(self):
        with pytest.raises(KeyError):
            CeilingRecord().update_release("missing", hours=1)

    def test_set_pop(self):
        record = CeilingRecord()
        record.set_pop(date(2025, 1, 1), date(2025, 12, 31))
        assert record.has_valid_pop
        with pytest.raises(ValidationError):
            record.set_pop(date(2025, 12, 31), date(2025, 1, 1))
        assert record.pop_start == date(2025, 1, 1)

    def test_to_dict_shape(self):
        record = CeilingRecord(
            pop_start=date(2025, 1, 1),
            releases=[CeilingRelease(date=date(2025, 1, 15), hours=10, id="A")],
        )
        assert record.to_dict() == {
            "popStart": "2025-01-01",
            "popEnd": None,
            "releases": [{"id": "A", "date": "2025-01-15", "hours": 10, "note": None}],
        }

    def test_from_legacy_list(self):
        record = CeilingRecord.from_data([
            {"id": "b", "date": "2025-02-20", "hours": -20},
            {"id": "a", "date": "2025-01-15", "hours": 100, "note": "base"},
        ])
        assert record.pop_start is None
        assert record.pop_end is None
        assert [r.id for r in record.releases] == ["A", "B"]

    def test_from_object_with_missing_releases(self):
        record = CeilingRecord.from_data({"popStart": "2025-01-01", "popEnd": "2025-06-30"})
        assert record.pop_end == date(2025, 6, 30)
        assert record.releases == []

    def test_from_unsupported_shape(self):
        with pytest.raises(ValueError):
            CeilingRecord.from_data("nope")
