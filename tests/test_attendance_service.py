"""
Unit tests for AttendanceSession, the application-layer state owner.
"""

import pytest
import json
import tempfile
from datetime import datetime
from pathlib import Path

import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from application.attendance_service import AttendanceSession, EntryDraft
from config.config_manager import ConfigManager, OutputSettings
from domain.entities import Period, Sewadar, TimeParts
from domain.errors import NotFoundError, ShiftAlreadyClosedError, ValidationError
from infrastructure.record_repository import JsonRecordRepository


ROSTER = [
    Sewadar(id="1", name="Rahul Sharma"),
    Sewadar(id="2", name="Priya Singh"),
    Sewadar(id="3", name="Amit Kumar"),
]


@pytest.fixture
def session():
    return AttendanceSession(roster=ROSTER, records=[], current_date="2026-10-19")


class TestDailyLog:
    """Tests for the selected-date views."""

    def test_entry_is_filed_under_selected_date(self, session):
        session.set_current_date("2026-10-18")
        record = session.add_entry("1", "Tea", "09:00")

        assert record.date == "2026-10-18"
        assert session.day_records() == [record]
        session.set_current_date("2026-10-19")
        assert session.day_records() == []

    def test_display_order_is_most_recent_first(self, session):
        first = session.add_entry("1", "Tea", "09:00")
        second = session.add_entry("2", "Dessert", "09:30")
        assert session.day_records_for_display() == [second, first]

    def test_active_count(self, session):
        session.add_entry("1", "Tea", "09:00")
        session.add_entry("2", "Dessert", "09:30", "12:00")
        assert session.active_count() == 1
        assert session.roster_size() == 3

    def test_invalid_current_date_rejected(self, session):
        with pytest.raises(ValidationError):
            session.set_current_date("tomorrow")
        assert session.current_date == "2026-10-19"

    def test_search_sewadars_needs_text(self, session):
        assert session.search_sewadars("") == []
        assert session.search_sewadars("   ") == []
        assert [s.id for s in session.search_sewadars("priya")] == ["2"]

    def test_suggest_counters_uses_configured_list(self):
        session = AttendanceSession(roster=ROSTER, records=[], counters=["Tea", "Gate 1"])
        assert session.suggest_counters("g") == ["Gate 1"]

    def test_replace_roster(self, session):
        session.add_entry("1", "Tea", "09:00")
        session.replace_roster([Sewadar(id="9", name="New Person")])

        assert session.roster_size() == 1
        assert session.records[0].sewadar_name == "Rahul Sharma"
        with pytest.raises(ValidationError):
            session.add_entry("1", "Tea", "10:00")


class TestEntryDraft:
    """Tests for the add-entry form flow."""

    def test_new_draft_uses_default_times(self, session):
        draft = session.new_entry_draft()
        assert draft.in_time == TimeParts("09", "00", Period.AM)
        assert draft.out_time == TimeParts("05", "00", Period.PM)
        assert draft.has_out_time is False
        assert not draft.can_confirm

    def test_can_confirm_needs_sewadar_and_counter(self):
        draft = EntryDraft(sewadar_id="1")
        assert not draft.can_confirm
        draft.counter = "   "
        assert not draft.can_confirm
        draft.counter = "Tea"
        assert draft.can_confirm

    def test_confirm_converts_times_and_resets(self, session):
        draft = session.new_entry_draft()
        draft.sewadar_id = "2"
        draft.sewadar_search = "Priya Singh"
        draft.counter = "Dessert"
        draft.in_time = TimeParts("10", "15", Period.AM)
        draft.has_out_time = True
        draft.out_time = TimeParts("12", "00", Period.PM)

        record = session.confirm_entry(draft)

        assert record.start_time == "10:15"
        assert record.end_time == "12:00"
        assert draft.sewadar_id == ""
        assert draft.sewadar_search == ""
        assert draft.counter == ""
        assert draft.in_time == TimeParts("09", "00", Period.AM)
        assert draft.has_out_time is False

    def test_confirm_without_out_time_leaves_shift_active(self, session):
        draft = session.new_entry_draft()
        draft.sewadar_id = "1"
        draft.counter = "Tea"
        draft.out_time = TimeParts("05", "00", Period.PM)

        record = session.confirm_entry(draft)
        assert record.end_time is None

    def test_failed_confirm_keeps_draft(self, session):
        draft = session.new_entry_draft()
        draft.counter = "Tea"

        with pytest.raises(ValidationError):
            session.confirm_entry(draft)

        assert draft.counter == "Tea"
        assert session.records == []


class TestMarkOut:
    """Tests for the mark-out flow."""

    def test_begin_mark_out_prefills_rounded_time(self, session):
        record = session.add_entry("1", "Tea", "09:00")
        draft = session.begin_mark_out(record.id, now=datetime(2026, 10, 19, 14, 37))

        assert draft.record_id == record.id
        assert draft.out_time == TimeParts("02", "35", Period.PM)

    def test_confirm_mark_out(self, session):
        record = session.add_entry("1", "Tea", "09:00")
        draft = session.begin_mark_out(record.id, now=datetime(2026, 10, 19, 14, 37))

        session.confirm_mark_out(draft)

        assert record.end_time == "14:35"
        assert session.active_count() == 0

    def test_begin_mark_out_unknown_record(self, session):
        with pytest.raises(NotFoundError):
            session.begin_mark_out("missing")

    def test_begin_mark_out_closed_record(self, session):
        record = session.add_entry("1", "Tea", "09:00", "11:00")
        with pytest.raises(ShiftAlreadyClosedError):
            session.begin_mark_out(record.id)

    def test_mark_out_twice_keeps_first_time(self, session):
        record = session.add_entry("1", "Tea", "09:00")
        session.mark_out(record.id, "13:00")
        with pytest.raises(ShiftAlreadyClosedError):
            session.mark_out(record.id, "15:00")
        assert record.end_time == "13:00"


class TestHistory:
    """Tests for history queries and share text."""

    def test_history_is_store_order(self, session):
        first = session.add_entry("1", "Tea", "09:00")
        second = session.add_entry("2", "Dessert", "10:00")
        assert session.history("2026-10-19") == [first, second]

    def test_history_rejects_bad_date(self, session):
        with pytest.raises(ValidationError):
            session.history("2026/10/19")

    def test_summary_and_recorded_dates(self, session):
        session.add_entry("1", "Tea", "09:00")
        session.set_current_date("2026-10-17")
        session.add_entry("2", "Tea", "09:00", "10:00")

        assert session.recorded_dates() == ["2026-10-19", "2026-10-17"]
        summary = session.summary("2026-10-17")
        assert summary.total == 1
        assert summary.completed == 1

    def test_share_text(self, session):
        session.add_entry("1", "Tea", "09:00")
        text = session.share_text("2026-10-19")
        assert "1. Rahul Sharma | Tea | 9:00 AM - ACTIVE" in text


class TestPersistence:
    """Tests for repository-backed sessions."""

    def test_changes_are_saved(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            repo = JsonRecordRepository(Path(tmpdir) / "records.json")
            session = AttendanceSession(roster=ROSTER, repository=repo, current_date="2026-10-19")

            record = session.add_entry("1", "Tea", "09:00")
            session.mark_out(record.id, "17:00")

            reloaded = AttendanceSession(roster=ROSTER, repository=repo, current_date="2026-10-19")
            assert len(reloaded.records) == 1
            assert reloaded.records[0].end_time == "17:00"

    def test_rejected_entry_is_not_saved(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "records.json"
            session = AttendanceSession(
                roster=ROSTER, repository=JsonRecordRepository(path), current_date="2026-10-19"
            )
            with pytest.raises(ValidationError):
                session.add_entry("", "Tea", "09:00")
            assert not path.exists()

    def test_from_config(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            tmp = Path(tmpdir)
            roster_csv = tmp / "roster.csv"
            roster_csv.write_text("ID,Name\n7,Kiran Kaur\n", encoding="utf-8")
            config_path = tmp / "config.json"
            config_path.write_text(json.dumps({
                "paths": {"roster_csv": str(roster_csv)},
                "counters": {"predefined": ["Tea"]},
            }), encoding="utf-8")

            manager = ConfigManager(config_path)
            manager.load()
            session = AttendanceSession.from_config(manager)

            assert [s.name for s in session.roster] == ["Kiran Kaur"]
            assert session.counters == ["Tea"]
            session.add_entry("7", "Tea", "08:00")
            assert (tmp / "records.json").exists()


class TestExport:
    """Tests for PDF and Excel export through the session."""

    def test_export_pdf(self, session):
        session.add_entry("1", "Tea", "09:00")
        with tempfile.TemporaryDirectory() as tmpdir:
            output_path = session.export_pdf("2026-10-19", Path(tmpdir))

            assert output_path == Path(tmpdir) / "Sewa_Report_2026-10-19.pdf"
            assert output_path.exists()
            assert output_path.stat().st_size > 0

    def test_export_excel_uses_configured_dir(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            session = AttendanceSession(
                roster=ROSTER, records=[], current_date="2026-10-19",
                output_settings=OutputSettings(output_dir=tmpdir, excel_filename_pattern="log_{date}.xlsx")
            )
            session.add_entry("1", "Tea", "09:00")

            output_path = session.export_excel("2026-10-19")

            assert output_path == Path(tmpdir) / "log_2026-10-19.xlsx"
            assert output_path.exists()

    def test_export_empty_date_writes_nothing(self, session):
        with tempfile.TemporaryDirectory() as tmpdir:
            assert session.export_pdf("2026-10-19", Path(tmpdir)) is None
            assert session.export_excel("2026-10-19", Path(tmpdir)) is None
            assert list(Path(tmpdir).iterdir()) == []

    def test_export_bad_filename_pattern(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            session = AttendanceSession(
                roster=ROSTER, records=[], current_date="2026-10-19",
                output_settings=OutputSettings(pdf_filename_pattern="Report_{day}.pdf")
            )
            session.add_entry("1", "Tea", "09:00")

            with pytest.raises(ValidationError):
                session.export_pdf("2026-10-19", Path(tmpdir))
            assert list(Path(tmpdir).iterdir()) == []


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
