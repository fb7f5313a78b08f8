"""
Tests for PDF output.

Uses pypdf to inspect generated PDFs.
"""

import io

import pytest
from pypdf import PdfReader

from photo_report.builder.output import (
    ExportedReport,
    ImageOp,
    LineOp,
    PolygonOp,
    RenderedPage,
    RoundedRectOp,
    TextOp,
    pdf_bytes,
    write_pdf,
)
from photo_report.builder.output.pdf_writer import _flip

# A4 dimensions in points (1/72 inch)
A4_WIDTH_PT = 595.276  # 210mm
A4_HEIGHT_PT = 841.890  # 297mm
TOLERANCE_PT = 1.0


@pytest.fixture
def sample_report(jpeg_bytes) -> ExportedReport:
    page_1 = RenderedPage(number=1, ops=(
        TextOp("Rapport Photo d'Intervention - Site", 105.0, 25.0, "Times-Bold", 20.0, align="center"),
        RoundedRectOp(25.0, 25.0, 160.0, 30.0, 3.0),
        LineOp(92.0, 90.0, 105.0, 90.0, 1.5),
        PolygonOp(((108.0, 90.0), (105.0, 88.0), (105.0, 92.0))),
        ImageOp(jpeg_bytes, 20.0, 65.0, 70.0, 50.0),
        TextOp("Page 1 / 2", 105.0, 287.0, "Helvetica", 10.0, align="center"),
    ))
    page_2 = RenderedPage(number=2, ops=(
        TextOp("Page 2 / 2", 105.0, 287.0, "Helvetica", 10.0, align="center"),
    ))
    return ExportedReport(name="report-4-2024-05-02", report_id=4, pages=(page_1, page_2))


class TestWritePdf:
    def test_page_count_and_size(self, sample_report):
        reader = PdfReader(io.BytesIO(pdf_bytes(sample_report)))

        assert len(reader.pages) == 2
        for page in reader.pages:
            assert abs(float(page.mediabox.width) - A4_WIDTH_PT) < TOLERANCE_PT
            assert abs(float(page.mediabox.height) - A4_HEIGHT_PT) < TOLERANCE_PT

    def test_text_is_extractable(self, sample_report):
        reader = PdfReader(io.BytesIO(pdf_bytes(sample_report)))

        assert "Page 1 / 2" in reader.pages[0].extract_text()
        assert "Page 2 / 2" in reader.pages[1].extract_text()

    def test_writes_to_path_and_creates_parents(self, tmp_path, sample_report):
        target = tmp_path / "nested" / "out" / sample_report.filename

        warnings = write_pdf(sample_report, target)

        assert target.exists()
        assert target.read_bytes().startswith(b"%PDF")
        assert warnings == ()

    def test_output_is_deterministic(self, sample_report):
        assert pdf_bytes(sample_report) == pdf_bytes(sample_report)

    def test_unembeddable_image_becomes_warning(self):
        page = RenderedPage(number=1, ops=(ImageOp(b"garbage", 20.0, 65.0, 70.0, 50.0),))
        report = ExportedReport(name="report-1-2024-01-01", report_id=1, pages=(page,))

        buf = io.BytesIO()
        warnings = write_pdf(report, buf)

        assert len(warnings) == 1
        assert "page 1" in warnings[0]
        assert "Image unavailable" in PdfReader(io.BytesIO(buf.getvalue())).pages[0].extract_text()

    def test_unknown_instruction_raises(self):
        page = RenderedPage(number=1, ops=("not an op",))
        report = ExportedReport(name="report-1-2024-01-01", report_id=1, pages=(page,))

        with pytest.raises(TypeError, match="Unknown draw instruction"):
            pdf_bytes(report)


def test_flip_converts_top_down_mm_to_points():
    assert _flip(297.0, 297.0) == 0.0
    assert _flip(297.0, 10.0) == pytest.approx(287.0 * 72 / 25.4)
