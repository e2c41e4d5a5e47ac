"""
Report Share Module

Builds the plain-text daily report that the UI copies to the clipboard
for pasting into a chat or mail.
"""

from typing import List

from domain.entities import AttendanceRecord
from domain.record_store import count_active
from domain.time_codec import format_date_display, format_for_display

REPORT_TITLE = "Jalpan Sewa Record"
EMPTY_TEXT = "No sewa records found for this date."


def build_share_text(report_date: str, records: List[AttendanceRecord]) -> str:
    """
    Build a shareable text report for one date.

    Args:
        report_date: ISO date the records belong to
        records: Records already filtered to report_date

    Returns:
        Multi-line report text
    """
    lines = [f"{REPORT_TITLE} - {format_date_display(report_date, 'long')}", ""]

    if not records:
        lines.append(EMPTY_TEXT)
        return "\n".join(lines)

    for index, record in enumerate(records, start=1):
        time_in = format_for_display(record.start_time)
        time_out = format_for_display(record.end_time) if record.end_time else "ACTIVE"
        lines.append(f"{index}. {record.sewadar_name} | {record.counter} | {time_in} - {time_out}")

    active = count_active(records)
    lines.append("")
    lines.append(f"Total: {len(records)} | On duty: {active} | Completed: {len(records) - active}")
    return "\n".join(lines)
