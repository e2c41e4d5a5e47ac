"""
Unit tests for the record store view functions.
"""

import pytest
from pathlib import Path

import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from domain.entities import AttendanceRecord, Sewadar
from domain.errors import NotFoundError, ShiftAlreadyClosedError, ValidationError
from domain.record_store import (
    DEFAULT_COUNTERS, add_entry, count_active, dates_with_records,
    filter_by_date, filter_counters, filter_sewadars, find_record,
    is_known_counter, mark_out, most_recent_first, new_record_id,
    shift_duration_minutes, summarize_day
)


ROSTER = [
    Sewadar(id="1", name="Rahul Sharma"),
    Sewadar(id="2", name="Priya Singh"),
    Sewadar(id="3", name="Amit Kumar"),
]


def make_record(record_id, date="2026-10-19", start="09:00", end=None, counter="Tea", name="Rahul Sharma"):
    return AttendanceRecord(
        id=record_id, sewadar_id="1", sewadar_name=name, date=date,
        counter=counter, start_time=start, end_time=end
    )


class _Ids:
    """Deterministic id factory."""

    def __init__(self):
        self.n = 0

    def __call__(self):
        self.n += 1
        return f"r{self.n}"


class TestQueries:
    """Tests for date filtering and counting."""

    @pytest.fixture
    def records(self):
        return [
            make_record("a", date="2026-10-18"),
            make_record("b", end="12:00"),
            make_record("c"),
            make_record("d"),
        ]

    def test_filter_by_date_keeps_store_order(self, records):
        result = filter_by_date(records, "2026-10-19")
        assert [r.id for r in result] == ["b", "c", "d"]

    def test_filter_by_date_no_match(self, records):
        assert filter_by_date(records, "2020-01-01") == []

    def test_filter_by_date_returns_new_list(self, records):
        result = filter_by_date(records, "2026-10-19")
        result.clear()
        assert len(filter_by_date(records, "2026-10-19")) == 3

    def test_most_recent_first(self, records):
        day = filter_by_date(records, "2026-10-19")
        assert [r.id for r in most_recent_first(day)] == ["d", "c", "b"]

    def test_count_active(self, records):
        assert count_active(filter_by_date(records, "2026-10-19")) == 2
        assert count_active([]) == 0

    def test_find_record(self, records):
        assert find_record(records, "c").id == "c"

    def test_find_record_missing(self, records):
        with pytest.raises(NotFoundError) as exc_info:
            find_record(records, "zzz")
        assert exc_info.value.record_id == "zzz"

    def test_dates_with_records_newest_first(self, records):
        assert dates_with_records(records) == ["2026-10-19", "2026-10-18"]


class TestAddEntry:
    """Tests for add_entry."""

    def test_appends_record_with_roster_name(self):
        records = []
        record = add_entry(records, ROSTER, "2026-10-19", "2", "Dessert", "09:00", id_factory=_Ids())

        assert records == [record]
        assert record.id == "r1"
        assert record.sewadar_name == "Priya Singh"
        assert record.date == "2026-10-19"
        assert record.end_time is None
        assert record.is_active

    def test_entry_with_end_time(self):
        records = []
        record = add_entry(records, ROSTER, "2026-10-19", "1", "Tea", "09:00", "17:00")
        assert record.end_time == "17:00"
        assert count_active(records) == 0

    def test_back_dated_entry(self):
        records = []
        record = add_entry(records, ROSTER, "2025-01-01", "3", "Tea", "10:00")
        assert record.date == "2025-01-01"
        assert filter_by_date(records, "2025-01-01") == [record]

    def test_counter_is_trimmed_free_text(self):
        records = []
        record = add_entry(records, ROSTER, "2026-10-19", "1", "  Parking Gate  ", "09:00")
        assert record.counter == "Parking Gate"

    def test_ids_are_unique(self):
        records = []
        for _ in range(5):
            add_entry(records, ROSTER, "2026-10-19", "1", "Tea", "09:00")
        assert len({r.id for r in records}) == 5

    def test_empty_sewadar_rejected(self):
        records = []
        with pytest.raises(ValidationError) as exc_info:
            add_entry(records, ROSTER, "2026-10-19", "", "Tea", "09:00")
        assert exc_info.value.field == "sewadar_id"
        assert records == []

    def test_blank_counter_rejected(self):
        records = []
        with pytest.raises(ValidationError) as exc_info:
            add_entry(records, ROSTER, "2026-10-19", "1", "   ", "09:00")
        assert exc_info.value.field == "counter"
        assert records == []

    def test_unknown_sewadar_rejected(self):
        records = []
        with pytest.raises(ValidationError):
            add_entry(records, ROSTER, "2026-10-19", "99", "Tea", "09:00")
        assert records == []

    def test_malformed_times_rejected(self):
        records = []
        with pytest.raises(ValidationError) as exc_info:
            add_entry(records, ROSTER, "2026-10-19", "1", "Tea", "9:00")
        assert exc_info.value.field == "start_time"
        with pytest.raises(ValidationError) as exc_info:
            add_entry(records, ROSTER, "2026-10-19", "1", "Tea", "09:00", "24:00")
        assert exc_info.value.field == "end_time"
        assert records == []

    def test_malformed_date_rejected(self):
        records = []
        with pytest.raises(ValidationError):
            add_entry(records, ROSTER, "19-10-2026", "1", "Tea", "09:00")
        assert records == []


class TestMarkOut:
    """Tests for mark_out."""

    def test_sets_end_time(self):
        records = [make_record("a"), make_record("b")]
        record = mark_out(records, "a", "17:30")

        assert record.end_time == "17:30"
        assert record == make_record("a", end="17:30")
        assert records[1].end_time is None
        assert count_active(records) == 1

    def test_unknown_id(self):
        records = [make_record("a")]
        with pytest.raises(NotFoundError):
            mark_out(records, "nope", "17:00")
        assert records[0].end_time is None

    def test_malformed_end_time(self):
        records = [make_record("a")]
        with pytest.raises(ValidationError):
            mark_out(records, "a", "5 PM")
        assert records[0].end_time is None

    def test_already_closed(self):
        records = [make_record("a", end="12:00")]
        with pytest.raises(ShiftAlreadyClosedError) as exc_info:
            mark_out(records, "a", "17:00")
        assert exc_info.value.end_time == "12:00"
        assert records[0].end_time == "12:00"


class TestFiltering:
    """Tests for sewadar and counter search."""

    def test_filter_sewadars_case_insensitive(self):
        result = filter_sewadars(ROSTER, "RAH")
        assert [s.id for s in result] == ["1"]

    def test_filter_sewadars_substring(self):
        result = filter_sewadars(ROSTER, "a")
        assert [s.id for s in result] == ["1", "2", "3"]
        result = filter_sewadars(ROSTER, "ng")
        assert [s.id for s in result] == ["2"]

    def test_filter_sewadars_empty_query_returns_all(self):
        assert filter_sewadars(ROSTER, "") == ROSTER

    def test_filter_sewadars_no_match(self):
        assert filter_sewadars(ROSTER, "xyz") == []

    def test_filter_counters(self):
        result = filter_counters(DEFAULT_COUNTERS, "main office")
        assert result == [
            "Main office - Coupon Counters",
            "Main Office - Card Counter",
            "Main Office - Admin",
        ]

    def test_filter_counters_empty_query(self):
        assert filter_counters(DEFAULT_COUNTERS, "") == DEFAULT_COUNTERS

    def test_is_known_counter(self):
        assert is_known_counter(DEFAULT_COUNTERS, "tea")
        assert is_known_counter(DEFAULT_COUNTERS, " Dessert ")
        assert not is_known_counter(DEFAULT_COUNTERS, "Parking Gate")


class TestSummaries:
    """Tests for duration and daily summary helpers."""

    def test_duration_completed(self):
        assert shift_duration_minutes(make_record("a", start="09:15", end="17:00")) == 465

    def test_duration_active(self):
        assert shift_duration_minutes(make_record("a")) is None

    def test_duration_across_midnight(self):
        assert shift_duration_minutes(make_record("a", start="22:00", end="01:30")) == 210

    def test_summarize_day(self):
        records = [
            make_record("a", counter="Tea"),
            make_record("b", counter="Dessert", end="13:00"),
            make_record("c", counter="Tea", end="14:00"),
            make_record("d", date="2026-10-18"),
        ]
        summary = summarize_day(records, "2026-10-19")

        assert summary.total == 3
        assert summary.active == 1
        assert summary.completed == 2
        assert summary.by_counter == {"Tea": 2, "Dessert": 1}

    def test_summarize_empty_day(self):
        summary = summarize_day([], "2026-10-19")
        assert summary.total == 0
        assert summary.by_counter == {}

    def test_new_record_id_is_unique(self):
        assert new_record_id() != new_record_id()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
