"""
Attendance Service Module

Application layer state owner for the daily log and history views.
Holds the roster, the record collection and the selected date, and
routes every change through the domain functions. Separates the
workflow from UI concerns (PyQt).
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from pathlib import Path
from typing import Iterable, List, Optional

from config.config_manager import ConfigManager, OutputSettings, TimeDefault, TimeDefaults
from domain import record_store
from domain.entities import AttendanceRecord, DailySummary, Period, Sewadar, TimeParts
from domain.errors import AttendanceError, ShiftAlreadyClosedError, ValidationError
from domain.roster import Roster
from domain.time_codec import convert_to_24_hour, parse_iso_date, round_to_current_time
from infrastructure.logger import get_logger
from infrastructure.record_repository import JsonRecordRepository

logger = get_logger("AttendanceService")


def _time_parts_from_default(value: TimeDefault) -> TimeParts:
    """Build picker fields from a configured default."""
    try:
        period = Period(value.period.upper())
    except ValueError:
        period = Period.AM
    return TimeParts(hour=value.hour, minute=value.minute, period=period)


@dataclass
class EntryDraft:
    """
    Form state of the add-entry dialog.

    Attributes:
        sewadar_id: Selected roster id ("" until chosen)
        sewadar_search: Text typed in the sewadar search box
        counter: Sewa spot, typed or picked from suggestions
        in_time: Check-in picker fields
        out_time: Check-out picker fields
        has_out_time: Whether the check-out time is recorded now
    """
    sewadar_id: str = ""
    sewadar_search: str = ""
    counter: str = ""
    in_time: TimeParts = field(default_factory=TimeParts)
    out_time: TimeParts = field(default_factory=lambda: TimeParts("05", "00", Period.PM))
    has_out_time: bool = False

    @property
    def can_confirm(self) -> bool:
        """The confirm action is offered only when both required fields are set."""
        return bool(self.sewadar_id) and bool(self.counter.strip())


@dataclass
class MarkOutDraft:
    """Form state of the mark-out dialog."""
    record_id: str
    out_time: TimeParts


class AttendanceSession:
    """
    Owner of the attendance state shown by the UI.

    This session:
    - Keeps the selected date that new entries are filed under
    - Validates and applies add-entry / mark-out through the domain layer
    - Persists the record list after each change when a repository is set
    - Feeds date-filtered records to the export collaborators
    """

    def __init__(
        self,
        roster: Iterable[Sewadar],
        records: Optional[List[AttendanceRecord]] = None,
        repository: Optional[JsonRecordRepository] = None,
        counters: Optional[List[str]] = None,
        time_defaults: Optional[TimeDefaults] = None,
        output_settings: Optional[OutputSettings] = None,
        custom_font_path: Optional[str] = None,
        current_date: Optional[str] = None
    ):
        self._roster: List[Sewadar] = list(roster)
        self._repository = repository
        if records is not None:
            self._records = records
        elif repository is not None:
            self._records = repository.load()
        else:
            self._records = []
        self.counters: List[str] = list(counters) if counters is not None else list(record_store.DEFAULT_COUNTERS)
        self.time_defaults = time_defaults or TimeDefaults()
        self.output_settings = output_settings or OutputSettings()
        self.custom_font_path = custom_font_path
        self._current_date = current_date or date.today().isoformat()
        parse_iso_date(self._current_date)

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------
    @property
    def records(self) -> List[AttendanceRecord]:
        """The full record collection (all dates)."""
        return self._records

    @property
    def roster(self) -> List[Sewadar]:
        return list(self._roster)

    def replace_roster(self, sewadars: Iterable[Sewadar]) -> None:
        """Swap in a freshly loaded roster; existing records keep their names."""
        self._roster = list(sewadars)
        logger.info(f"Roster replaced: {len(self._roster)} sewadars")

    def roster_size(self) -> int:
        return len(self._roster)

    @property
    def current_date(self) -> str:
        return self._current_date

    def set_current_date(self, iso_date: str) -> None:
        """
        Change the date new entries are filed under.

        Raises:
            ValidationError: If iso_date is not a YYYY-MM-DD date
        """
        parse_iso_date(iso_date)
        self._current_date = iso_date

    # ------------------------------------------------------------------
    # Daily log queries
    # ------------------------------------------------------------------
    def day_records(self) -> List[AttendanceRecord]:
        """Records for the selected date, in store order."""
        return record_store.filter_by_date(self._records, self._current_date)

    def day_records_for_display(self) -> List[AttendanceRecord]:
        """Records for the selected date, most recent first."""
        return record_store.most_recent_first(self.day_records())

    def active_count(self) -> int:
        """Sewadars currently on duty on the selected date."""
        return record_store.count_active(self.day_records())

    def search_sewadars(self, query: str) -> List[Sewadar]:
        """Roster matches; nothing until the user has typed something."""
        if not (query or "").strip():
            return []
        return record_store.filter_sewadars(self._roster, query)

    def suggest_counters(self, query: str) -> List[str]:
        return record_store.filter_counters(self.counters, query)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------
    def add_entry(
        self,
        sewadar_id: str,
        counter: str,
        start_time: str,
        end_time: Optional[str] = None
    ) -> AttendanceRecord:
        """
        Add a record on the selected date.

        Raises:
            ValidationError: If a required field is missing or malformed
        """
        try:
            record = record_store.add_entry(
                self._records, self._roster, self._current_date,
                sewadar_id, counter, start_time, end_time
            )
        except ValidationError as e:
            logger.warning(f"Entry rejected ({e.field}): {e.message}")
            raise

        logger.info(
            f"Entry added: {record.sewadar_name} at {record.counter} "
            f"on {record.date} from {record.start_time}"
            + (f" to {record.end_time}" if record.end_time else " (active)")
        )
        self._persist()
        return record

    def mark_out(self, record_id: str, end_time: str) -> AttendanceRecord:
        """
        Close an active shift.

        Raises:
            NotFoundError: If record_id is unknown
            ValidationError: If end_time is malformed
            ShiftAlreadyClosedError: If the shift is already closed
        """
        try:
            record = record_store.mark_out(self._records, record_id, end_time)
        except AttendanceError as e:
            logger.warning(f"Mark-out rejected for {record_id}: {e}")
            raise

        logger.info(f"Marked out: {record.sewadar_name} at {end_time} on {record.date}")
        self._persist()
        return record

    # ------------------------------------------------------------------
    # Form drafts
    # ------------------------------------------------------------------
    def new_entry_draft(self) -> EntryDraft:
        """Empty add-entry form with the configured default times."""
        return EntryDraft(
            in_time=_time_parts_from_default(self.time_defaults.entry_in),
            out_time=_time_parts_from_default(self.time_defaults.entry_out),
        )

    def reset_entry_draft(self, draft: EntryDraft) -> None:
        """Clear selections and restore the default check-in time."""
        fresh = self.new_entry_draft()
        draft.sewadar_id = ""
        draft.sewadar_search = ""
        draft.counter = ""
        draft.in_time = fresh.in_time
        draft.has_out_time = False

    def confirm_entry(self, draft: EntryDraft) -> AttendanceRecord:
        """
        Convert the draft's picker fields and add the entry.

        The draft is reset on success and left as is on failure.

        Raises:
            ValidationError: If the draft is incomplete or malformed
        """
        start_time = convert_to_24_hour(draft.in_time.hour, draft.in_time.minute, draft.in_time.period)
        end_time = None
        if draft.has_out_time:
            end_time = convert_to_24_hour(draft.out_time.hour, draft.out_time.minute, draft.out_time.period)

        record = self.add_entry(draft.sewadar_id, draft.counter, start_time, end_time)
        self.reset_entry_draft(draft)
        return record

    def begin_mark_out(self, record_id: str, now: Optional[datetime] = None) -> MarkOutDraft:
        """
        Start the mark-out flow, prefilled with the rounded current time.

        Raises:
            NotFoundError: If record_id is unknown
            ShiftAlreadyClosedError: If the shift is already closed
        """
        record = record_store.find_record(self._records, record_id)
        if record.end_time is not None:
            raise ShiftAlreadyClosedError(record_id, record.end_time)
        out_time = round_to_current_time(now, self.time_defaults.mark_out_step_minutes)
        return MarkOutDraft(record_id=record_id, out_time=out_time)

    def confirm_mark_out(self, draft: MarkOutDraft) -> AttendanceRecord:
        end_time = convert_to_24_hour(draft.out_time.hour, draft.out_time.minute, draft.out_time.period)
        return self.mark_out(draft.record_id, end_time)

    # ------------------------------------------------------------------
    # History and export
    # ------------------------------------------------------------------
    def history(self, iso_date: str) -> List[AttendanceRecord]:
        """Records for any date, in store order."""
        parse_iso_date(iso_date)
        return record_store.filter_by_date(self._records, iso_date)

    def summary(self, iso_date: str) -> DailySummary:
        parse_iso_date(iso_date)
        return record_store.summarize_day(self._records, iso_date)

    def recorded_dates(self) -> List[str]:
        return record_store.dates_with_records(self._records)

    def share_text(self, iso_date: str) -> str:
        from infrastructure.report_share import build_share_text
        return build_share_text(iso_date, self.history(iso_date))

    def export_pdf(self, iso_date: str, output_dir: Optional[Path] = None) -> Optional[Path]:
        """
        Write the PDF report for a date.

        Returns:
            Path of the written file, or None if the date has no records
        """
        from infrastructure.pdf_writer import PdfWriter, format_filename

        records = self.history(iso_date)
        filename = format_filename(self.output_settings.pdf_filename_pattern, iso_date)
        output_path = self._output_dir(output_dir) / filename
        logger.info(f"Exporting PDF for {iso_date}: {output_path}")
        return PdfWriter(custom_font_path=self.custom_font_path).create_daily_report(
            iso_date, records, output_path
        )

    def export_excel(self, iso_date: str, output_dir: Optional[Path] = None) -> Optional[Path]:
        """
        Write the Excel report for a date.

        Returns:
            Path of the written file, or None if the date has no records
        """
        from infrastructure.excel_writer import ExcelWriter
        from infrastructure.pdf_writer import format_filename

        records = self.history(iso_date)
        filename = format_filename(self.output_settings.excel_filename_pattern, iso_date)
        output_path = self._output_dir(output_dir) / filename
        logger.info(f"Exporting Excel for {iso_date}: {output_path}")
        return ExcelWriter().create_daily_report(iso_date, records, output_path)

    def _output_dir(self, output_dir: Optional[Path]) -> Path:
        if output_dir is not None:
            return Path(output_dir)
        if self.output_settings.output_dir:
            return Path(self.output_settings.output_dir)
        return Path.cwd()

    def _persist(self) -> None:
        if self._repository is not None:
            self._repository.save(self._records)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------
    @classmethod
    def from_config(cls, config_manager: ConfigManager) -> "AttendanceSession":
        """
        Build a session from the loaded application configuration.

        Loads the roster CSV (if configured) and the record file.
        """
        config = config_manager.config
        roster = Roster()
        if config.paths.roster_csv:
            roster.load_from_csv(Path(config.paths.roster_csv))

        return cls(
            roster=roster.all_sewadars,
            repository=JsonRecordRepository(config_manager.records_path()),
            counters=config.counters.predefined,
            time_defaults=config.time_defaults,
            output_settings=config.output_settings,
            custom_font_path=config.paths.custom_font_path or None,
        )
