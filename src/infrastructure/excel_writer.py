"""
Excel Writer Module

Generates a formatted Excel sheet of one day's sewa records with styling.
"""

from pathlib import Path
from typing import List, Optional

from openpyxl import Workbook
from openpyxl.styles import (
    Font, PatternFill, Alignment, Border, Side
)
from openpyxl.utils import get_column_letter

from domain.entities import AttendanceRecord
from domain.record_store import count_active, shift_duration_minutes
from domain.time_codec import format_date_display, format_for_display
from infrastructure.logger import get_logger

logger = get_logger("ExcelWriter")


class ExcelWriter:
    """
    Generates formatted Excel daily reports.

    Output format:
    - Row 1: Column headers
    - Row 2..n: One row per record, in store order
    - After a blank row: Total / On duty summary rows

    Styling:
    - Blue header with white bold text
    - Green ACTIVE cell for shifts without an end time
    """

    COLORS = {
        'header': PatternFill(start_color='2563EB', end_color='2563EB', fill_type='solid'),
        'active': PatternFill(start_color='DCFCE7', end_color='DCFCE7', fill_type='solid'),
        'summary': PatternFill(start_color='F1F5F9', end_color='F1F5F9', fill_type='solid'),
    }

    HEADERS = ["#", "Sewadar Name", "Sewa Spot", "Time In", "Time Out", "Duration (min)"]
    COLUMN_WIDTHS = [5, 28, 30, 12, 12, 15]

    BORDER = Border(
        left=Side(style='thin'),
        right=Side(style='thin'),
        top=Side(style='thin'),
        bottom=Side(style='thin')
    )

    def __init__(self):
        self.wb: Optional[Workbook] = None

    def create_daily_report(
        self,
        report_date: str,
        records: List[AttendanceRecord],
        output_path: Path
    ) -> Optional[Path]:
        """
        Create the Excel report for one date.

        Args:
            report_date: ISO date of the report
            records: Records already filtered to report_date
            output_path: Path to save the Excel file

        Returns:
            Path to the created file, or None when there was nothing to write
        """
        if not records:
            logger.info(f"No records for {report_date}, Excel not written")
            return None

        self.wb = Workbook()
        ws = self.wb.active
        ws.title = report_date
        self._write_sheet(ws, report_date, records)

        output_path.parent.mkdir(parents=True, exist_ok=True)
        self.wb.save(output_path)
        logger.info(f"Excel report saved: {output_path}")
        return output_path

    def _write_sheet(self, ws, report_date: str, records: List[AttendanceRecord]) -> None:
        """Write header, record rows and summary rows to a worksheet."""
        # Header row
        for col, title in enumerate(self.HEADERS, start=1):
            cell = ws.cell(1, col, title)
            cell.font = Font(bold=True, color='FFFFFF')
            cell.fill = self.COLORS['header']
            cell.alignment = Alignment(horizontal='center', vertical='center')
            cell.border = self.BORDER

        # Data rows
        row = 2
        for index, record in enumerate(records, start=1):
            duration = shift_duration_minutes(record)
            values = [
                index,
                record.sewadar_name,
                record.counter,
                format_for_display(record.start_time),
                format_for_display(record.end_time) if record.end_time else "ACTIVE",
                duration if duration is not None else "",
            ]
            for col, value in enumerate(values, start=1):
                cell = ws.cell(row, col, value)
                cell.border = self.BORDER
                cell.alignment = Alignment(
                    horizontal='left' if col in (2, 3) else 'center'
                )

            if record.end_time is None:
                out_cell = ws.cell(row, 5)
                out_cell.fill = self.COLORS['active']
                out_cell.font = Font(bold=True, color='16A34A')
            row += 1

        # Summary rows after one blank row
        row += 1
        active = count_active(records)
        summary = [
            ("Date", format_date_display(report_date, 'long')),
            ("Total", len(records)),
            ("On duty", active),
            ("Completed", len(records) - active),
        ]
        for label, value in summary:
            label_cell = ws.cell(row, 2, label)
            label_cell.font = Font(bold=True)
            label_cell.fill = self.COLORS['summary']
            label_cell.border = self.BORDER
            value_cell = ws.cell(row, 3, value)
            value_cell.border = self.BORDER
            row += 1

        # Adjust column widths
        for col, width in enumerate(self.COLUMN_WIDTHS, start=1):
            ws.column_dimensions[get_column_letter(col)].width = width
        ws.freeze_panes = "A2"
