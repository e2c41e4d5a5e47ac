"""
Record Store View Module

Date-keyed queries and the two mutations (add entry, mark out) over a
flat list of attendance records. The list is owned by the caller; every
function here takes it explicitly.
"""

import uuid
from typing import Callable, Iterable, List, Optional, Sequence

from .entities import AttendanceRecord, DailySummary, Sewadar
from .errors import NotFoundError, ShiftAlreadyClosedError, ValidationError
from .time_codec import parse_canonical_time, parse_iso_date


# Work locations offered as suggestions; counter itself stays free text
DEFAULT_COUNTERS = [
    "Roti, Dal / Subzi",
    "Special Counter",
    "Dessert",
    "Chole Bhature",
    "Kadi / Rajma Chawal",
    "Bread Pakoda",
    "Tea",
    "Coffee / Cold Drink",
    "Chips Counter",
    "Sweets Counter",
    "Main office - Coupon Counters",
    "Main Office - Card Counter",
    "Main Office - Admin",
]


def new_record_id() -> str:
    """Generate a fresh record id."""
    return uuid.uuid4().hex


def filter_by_date(records: Iterable[AttendanceRecord], date: str) -> List[AttendanceRecord]:
    """
    Get all records for a date, in store order.

    Args:
        records: Full record collection
        date: ISO date string to match

    Returns:
        New list (possibly empty); recomputed on every call
    """
    return [r for r in records if r.date == date]


def most_recent_first(records: Sequence[AttendanceRecord]) -> List[AttendanceRecord]:
    """Reverse store order for the daily log display."""
    return list(reversed(records))


def count_active(records: Iterable[AttendanceRecord]) -> int:
    """Count records still on duty (no end time)."""
    return sum(1 for r in records if r.end_time is None)


def find_record(records: Iterable[AttendanceRecord], record_id: str) -> AttendanceRecord:
    """
    Look up a record by id.

    Raises:
        NotFoundError: If no record has this id
    """
    for record in records:
        if record.id == record_id:
            return record
    raise NotFoundError(record_id)


def add_entry(
    records: List[AttendanceRecord],
    roster: Iterable[Sewadar],
    entry_date: str,
    sewadar_id: str,
    counter: str,
    start_time: str,
    end_time: Optional[str] = None,
    id_factory: Callable[[], str] = new_record_id
) -> AttendanceRecord:
    """
    Create a record and append it to the collection.

    The date comes from the caller's selected date, not from today, so
    entries can be back-dated. All checks run before the list is touched.

    Args:
        records: Collection to append to
        roster: Known sewadars, used to resolve the display name
        entry_date: ISO date of the selected day
        sewadar_id: Roster id
        counter: Work location (free text)
        start_time: Canonical check-in time
        end_time: Canonical check-out time, None to leave the shift active
        id_factory: Id generator

    Returns:
        The new record

    Raises:
        ValidationError: If a required field is missing or malformed
    """
    if not sewadar_id:
        raise ValidationError("sewadar_id", "Please select a sewadar")
    counter = (counter or "").strip()
    if not counter:
        raise ValidationError("counter", "Please enter a sewa spot")

    parse_iso_date(entry_date)
    parse_canonical_time(start_time, "start_time")
    if end_time is not None:
        parse_canonical_time(end_time, "end_time")

    sewadar = next((s for s in roster if s.id == sewadar_id), None)
    if sewadar is None:
        raise ValidationError("sewadar_id", f"Unknown sewadar id '{sewadar_id}'")

    record = AttendanceRecord(
        id=id_factory(),
        sewadar_id=sewadar.id,
        sewadar_name=sewadar.name,
        date=entry_date,
        counter=counter,
        start_time=start_time,
        end_time=end_time,
    )
    records.append(record)
    return record


def mark_out(
    records: Iterable[AttendanceRecord],
    record_id: str,
    end_time: str
) -> AttendanceRecord:
    """
    Close an active shift by setting its end time.

    Raises:
        NotFoundError: If record_id is unknown
        ValidationError: If end_time is not a canonical time
        ShiftAlreadyClosedError: If the record already has an end time
    """
    record = find_record(records, record_id)
    parse_canonical_time(end_time, "end_time")
    if record.end_time is not None:
        raise ShiftAlreadyClosedError(record_id, record.end_time)

    record.end_time = end_time
    return record


def filter_sewadars(all_sewadars: Iterable[Sewadar], search_text: str) -> List[Sewadar]:
    """Case-insensitive substring match on sewadar name."""
    needle = (search_text or "").lower()
    return [s for s in all_sewadars if needle in s.name.lower()]


def filter_counters(predefined: Iterable[str], query: str) -> List[str]:
    """Case-insensitive substring match against the suggestion list."""
    needle = (query or "").lower()
    return [c for c in predefined if needle in c.lower()]


def is_known_counter(predefined: Iterable[str], value: str) -> bool:
    """True if value is one of the predefined counters (ignoring case)."""
    value = (value or "").strip().lower()
    return any(c.lower() == value for c in predefined)


def shift_duration_minutes(record: AttendanceRecord) -> Optional[int]:
    """
    Length of a completed shift in minutes, None while active.

    An end time earlier than the start time is taken to cross midnight.
    """
    if record.end_time is None:
        return None
    start = parse_canonical_time(record.start_time, "start_time")
    end = parse_canonical_time(record.end_time, "end_time")
    minutes = (end.hour * 60 + end.minute) - (start.hour * 60 + start.minute)
    if minutes < 0:
        minutes += 24 * 60
    return minutes


def summarize_day(records: Iterable[AttendanceRecord], date: str) -> DailySummary:
    """Aggregate totals and per-counter counts for one date."""
    day = filter_by_date(records, date)
    summary = DailySummary(date=date, total=len(day))
    summary.active = count_active(day)
    summary.completed = summary.total - summary.active
    for record in day:
        summary.by_counter[record.counter] = summary.by_counter.get(record.counter, 0) + 1
    return summary


def dates_with_records(records: Iterable[AttendanceRecord]) -> List[str]:
    """Distinct record dates, newest first."""
    return sorted({r.date for r in records}, reverse=True)
