"""
Unit tests for PdfWriter daily report generation.
"""

import pytest
from unittest.mock import patch
from pathlib import Path
import tempfile

import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from domain.entities import AttendanceRecord
from domain.errors import ValidationError
from infrastructure.pdf_writer import PdfWriter, SewaReportPdf, find_unicode_font, format_filename


class TestFormatFilename:
    """Tests for format_filename utility function."""

    def test_basic_formatting(self):
        result = format_filename("Sewa_Report_{date}.pdf", "2026-10-19")
        assert result == "Sewa_Report_2026-10-19.pdf"

    def test_pattern_without_placeholder(self):
        assert format_filename("report.pdf", "2026-10-19") == "report.pdf"

    @pytest.mark.parametrize("pattern", ["Report_{day}.pdf", "Report_{0}.pdf", "Report_{date.pdf"])
    def test_bad_pattern_raises_validation_error(self, pattern):
        with pytest.raises(ValidationError) as exc_info:
            format_filename(pattern, "2026-10-19")
        assert exc_info.value.field == "filename_pattern"


class TestFindUnicodeFont:
    """Tests for font lookup."""

    def test_custom_font_used_when_present(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            font = Path(tmpdir) / "custom.ttf"
            font.write_bytes(b"")
            assert find_unicode_font(str(font)) == font

    def test_missing_custom_font_falls_through(self):
        with patch("infrastructure.pdf_writer._get_platform_fonts", return_value=[]):
            assert find_unicode_font("/no/such/font.ttf") is None


class TestSewaReportPdf:
    """Tests for SewaReportPdf class."""

    def test_initialization(self):
        pdf = SewaReportPdf(title="Test Report")
        assert pdf.title_text == "Test Report"

    def test_font_family_name(self):
        pdf = SewaReportPdf(title="Test")
        assert pdf.font_family_name in ["ReportFont", "Helvetica"]

    def test_safe_text_with_core_font(self):
        with patch("infrastructure.pdf_writer.find_unicode_font", return_value=None):
            pdf = SewaReportPdf(title="Test")
        assert pdf.font_family_name == "Helvetica"
        assert pdf.safe_text("Rahul") == "Rahul"
        assert pdf.safe_text("गुरु") == "????"


class TestPdfWriter:
    """Tests for PdfWriter class."""

    @pytest.fixture
    def records(self):
        return [
            AttendanceRecord(
                id="a1", sewadar_id="1", sewadar_name="Rahul Sharma", date="2026-10-19",
                counter="Tea", start_time="09:00", end_time="17:00"
            ),
            AttendanceRecord(
                id="a2", sewadar_id="2", sewadar_name="Priya Singh", date="2026-10-19",
                counter="Main Office - Admin", start_time="10:30"
            ),
        ]

    def test_create_report_empty_list(self):
        """Test that an empty record list writes nothing."""
        writer = PdfWriter()

        with tempfile.TemporaryDirectory() as tmpdir:
            output_path = Path(tmpdir) / "test.pdf"

            assert writer.create_daily_report("2026-10-19", [], output_path) is None
            assert not output_path.exists()

    def test_create_report_generates_file(self, records):
        writer = PdfWriter()

        with tempfile.TemporaryDirectory() as tmpdir:
            output_path = Path(tmpdir) / "output" / "test.pdf"

            result = writer.create_daily_report("2026-10-19", records, output_path)

            assert result == output_path
            assert output_path.exists()
            assert output_path.read_bytes().startswith(b"%PDF")

    def test_many_records_span_pages(self, records):
        many = [records[i % 2] for i in range(80)]
        writer = PdfWriter()

        with tempfile.TemporaryDirectory() as tmpdir:
            output_path = Path(tmpdir) / "long.pdf"
            writer.create_daily_report("2026-10-19", many, output_path)
            assert output_path.stat().st_size > 0

    def test_totals_move_to_new_page_near_bottom(self, records):
        writer = PdfWriter()
        pdf = SewaReportPdf(title="Test")
        pdf.set_auto_page_break(auto=False)
        pdf.add_page()
        pdf.set_y(writer.BOTTOM_LIMIT - 4)

        writer._draw_totals(pdf, records)

        assert pdf.page_no() == 2
        assert pdf.get_y() <= writer.BOTTOM_LIMIT

    def test_totals_stay_on_page_with_room(self, records):
        writer = PdfWriter()
        pdf = SewaReportPdf(title="Test")
        pdf.set_auto_page_break(auto=False)
        pdf.add_page()

        writer._draw_totals(pdf, records)

        assert pdf.page_no() == 1


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
