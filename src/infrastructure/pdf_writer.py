"""
PDF Writer Module

Generates the daily sewa record PDF using fpdf2.
Replicates the history table: name, sewa spot, time in, time out.
"""

import sys
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from fpdf import FPDF

from domain.entities import AttendanceRecord
from domain.errors import ValidationError
from domain.record_store import count_active
from domain.time_codec import format_date_display, format_for_display
from infrastructure.logger import get_logger

logger = get_logger("PdfWriter")


# ==============================================================================
# Font Configuration
# ==============================================================================
WINDOWS_FONT_PATHS: List[Path] = [
    Path("C:/Windows/Fonts/arial.ttf"),
    Path("C:/Windows/Fonts/Nirmala.ttf"),      # Nirmala UI (Devanagari, Gurmukhi)
    Path("C:/Windows/Fonts/segoeui.ttf"),
]

MACOS_FONT_PATHS: List[Path] = [
    Path("/Library/Fonts/Arial Unicode.ttf"),
    Path("/System/Library/Fonts/Supplemental/Arial Unicode.ttf"),
    Path("/System/Library/Fonts/Supplemental/Arial.ttf"),
]

LINUX_FONT_PATHS: List[Path] = [
    Path("/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf"),
    Path("/usr/share/fonts/TTF/DejaVuSans.ttf"),
    Path("/usr/share/fonts/truetype/noto/NotoSans-Regular.ttf"),
    Path("/usr/share/fonts/truetype/liberation/LiberationSans-Regular.ttf"),
]

FALLBACK_FONT = "Helvetica"

REPORT_TITLE = "Jalpan Sewa Record"


def find_unicode_font(custom_font_path: Optional[str] = None) -> Optional[Path]:
    """
    Search for an available Unicode TTF font with cross-platform support.
    """
    if custom_font_path:
        custom_path = Path(custom_font_path)
        if custom_path.exists():
            logger.info(f"Using custom font: {custom_path}")
            return custom_path
        else:
            logger.warning(f"Custom font path does not exist: {custom_path}")

    for font_path in _get_platform_fonts():
        if font_path.exists():
            logger.debug(f"Found system font: {font_path}")
            return font_path

    return None


def _get_platform_fonts() -> List[Path]:
    """Get the font search list for the current platform."""
    if sys.platform == 'win32':
        return WINDOWS_FONT_PATHS
    elif sys.platform == 'darwin':
        return MACOS_FONT_PATHS
    else:
        return LINUX_FONT_PATHS


# ==============================================================================
# SewaReportPdf Class (A4 Portrait)
# ==============================================================================
class SewaReportPdf(FPDF):
    """
    Custom FPDF class with Unicode font support for A4 daily reports.
    """

    _font_family: str = FALLBACK_FONT
    _font_loaded: bool = False

    def __init__(self, title: str = "", custom_font_path: Optional[str] = None):
        super().__init__(orientation='P', unit='mm', format='A4')
        self.title_text = title
        self._setup_font(custom_font_path)

    def _setup_font(self, custom_font_path: Optional[str] = None) -> None:
        """Load a Unicode font if available."""
        font_path = find_unicode_font(custom_font_path)

        if font_path:
            try:
                self.add_font("ReportFont", "", str(font_path))
                self._font_family = "ReportFont"
                self._font_loaded = True
                logger.info(f"Loaded font: {font_path.name}")
            except Exception as e:
                logger.warning(f"Cannot load font {font_path}: {e}")
                self._font_family = FALLBACK_FONT
                self._font_loaded = False
        else:
            logger.warning("No Unicode font found, non-Latin names will be replaced.")
            self._font_family = FALLBACK_FONT
            self._font_loaded = False

    @property
    def font_family_name(self) -> str:
        return self._font_family

    def safe_text(self, text: str) -> str:
        """Core fonts only cover Latin-1; replace anything else."""
        if self._font_loaded:
            return text
        return text.encode('latin-1', 'replace').decode('latin-1')

    def header(self) -> None:
        """Draw page header with centered title."""
        self.set_font(self._font_family, '', 14)
        self.set_text_color(0, 0, 0)
        self.cell(0, 10, self.safe_text(self.title_text), align='C', new_x='LMARGIN', new_y='NEXT')
        self.ln(2)

    def footer(self) -> None:
        """Draw page footer with page number."""
        self.set_y(-12)
        self.set_font(self._font_family, '', 8)
        self.set_text_color(0, 0, 0)
        self.cell(0, 10, f'Page {self.page_no()}/{{nb}}', align='C')


# ==============================================================================
# PdfWriter Class
# ==============================================================================
class PdfWriter:
    """
    Generates daily sewa record PDFs.

    Features:
    - A4 portrait, one table row per record
    - Active shifts show an ACTIVE badge instead of an end time
    - Header row repeated on every page
    """

    # RGB Color definitions (matching ExcelWriter)
    COLORS: Dict[str, Tuple[int, int, int]] = {
        'header': (37, 99, 235),
        'active': (220, 252, 231),
        'active_text': (22, 163, 74),
        'stripe': (248, 250, 252),
        'white': (255, 255, 255),
    }

    # Layout constants (mm) for A4 Portrait (210mm width)
    MARGIN = 10
    PAGE_HEIGHT = 297

    COLUMNS: List[Tuple[str, float, str]] = [
        # (header, width, align)
        ("Sewadar Name", 62, 'L'),
        ("Sewa Spot", 62, 'L'),
        ("Time In", 33, 'C'),
        ("Time Out", 33, 'C'),
    ]

    HEADER_ROW_HEIGHT = 9
    DATA_ROW_HEIGHT = 8
    TOTALS_HEIGHT = 12
    # Content stops above the footer
    BOTTOM_LIMIT = PAGE_HEIGHT - 20

    def __init__(self, custom_font_path: Optional[str] = None):
        self._custom_font_path = custom_font_path

    def create_daily_report(
        self,
        report_date: str,
        records: List[AttendanceRecord],
        output_path: Path
    ) -> Optional[Path]:
        """
        Create the PDF report for one date.

        Args:
            report_date: ISO date of the report
            records: Records already filtered to report_date
            output_path: Destination file

        Returns:
            output_path, or None when there was nothing to write
        """
        if not records:
            logger.info(f"No records for {report_date}, PDF not written")
            return None

        pdf = SewaReportPdf(title=REPORT_TITLE, custom_font_path=self._custom_font_path)
        pdf.alias_nb_pages()
        pdf.set_auto_page_break(auto=False)
        pdf.set_margins(self.MARGIN, self.MARGIN, self.MARGIN)
        pdf.add_page()

        # Date heading
        pdf.set_font(pdf.font_family_name, '', 18)
        pdf.cell(0, 10, format_date_display(report_date, 'long'), align='C', new_x='LMARGIN', new_y='NEXT')
        pdf.ln(4)

        self._draw_header_row(pdf)
        for index, record in enumerate(records):
            if pdf.get_y() + self.DATA_ROW_HEIGHT > self.BOTTOM_LIMIT:
                pdf.add_page()
                self._draw_header_row(pdf)
            self._draw_record_row(pdf, record, striped=(index % 2 == 1))

        self._draw_totals(pdf, records)

        output_path.parent.mkdir(parents=True, exist_ok=True)
        pdf.output(str(output_path))
        logger.info(f"PDF report saved: {output_path}")
        return output_path

    def _draw_header_row(self, pdf: SewaReportPdf) -> None:
        """Draw the table header."""
        pdf.set_font(pdf.font_family_name, '', 10)
        pdf.set_fill_color(*self.COLORS['header'])
        pdf.set_text_color(*self.COLORS['white'])
        pdf.set_line_width(0.2)

        for title, width, align in self.COLUMNS:
            pdf.cell(width, self.HEADER_ROW_HEIGHT, title, border=1, align=align, fill=True)
        pdf.ln(self.HEADER_ROW_HEIGHT)
        pdf.set_text_color(0, 0, 0)

    def _draw_record_row(self, pdf: SewaReportPdf, record: AttendanceRecord, striped: bool) -> None:
        """Draw one record; the last cell is an ACTIVE badge for open shifts."""
        values = [
            record.sewadar_name,
            record.counter,
            format_for_display(record.start_time),
        ]

        pdf.set_font(pdf.font_family_name, '', 10)
        fill_color = self.COLORS['stripe'] if striped else self.COLORS['white']
        pdf.set_fill_color(*fill_color)

        for (title, width, align), value in zip(self.COLUMNS[:-1], values):
            pdf.cell(width, self.DATA_ROW_HEIGHT, pdf.safe_text(value), border=1, align=align, fill=True)

        _, out_width, out_align = self.COLUMNS[-1]
        if record.end_time:
            pdf.cell(out_width, self.DATA_ROW_HEIGHT, format_for_display(record.end_time),
                     border=1, align=out_align, fill=True)
        else:
            pdf.set_fill_color(*self.COLORS['active'])
            pdf.set_text_color(*self.COLORS['active_text'])
            pdf.cell(out_width, self.DATA_ROW_HEIGHT, "ACTIVE", border=1, align=out_align, fill=True)
            pdf.set_text_color(0, 0, 0)

        pdf.ln(self.DATA_ROW_HEIGHT)

    def _draw_totals(self, pdf: SewaReportPdf, records: List[AttendanceRecord]) -> None:
        """Draw the summary line below the table."""
        active = count_active(records)
        if pdf.get_y() + self.TOTALS_HEIGHT > self.BOTTOM_LIMIT:
            pdf.add_page()
        pdf.ln(4)
        pdf.set_font(pdf.font_family_name, '', 10)
        pdf.cell(
            0, 8,
            f"Total: {len(records)}    On duty: {active}    Completed: {len(records) - active}",
            align='L', new_x='LMARGIN', new_y='NEXT'
        )


# ==============================================================================
# Utility Functions
# ==============================================================================
def format_filename(pattern: str, report_date: str) -> str:
    """
    Format filename pattern with the {date} placeholder.

    Raises:
        ValidationError: If the pattern has any other placeholder or bad braces
    """
    try:
        return pattern.format(date=report_date)
    except (KeyError, IndexError, ValueError) as e:
        raise ValidationError("filename_pattern", f"Invalid filename pattern '{pattern}': {e}")
