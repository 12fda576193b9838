"""
Report Renderer Tests
=====================

Tests for PDF layout, spreadsheet and JSON encodings, and format dispatch.

Version: 0.1.0
"""

import io
import json

import openpyxl
import pytest
from datetime import datetime, UTC

from services.rmf_assessment.errors import RenderError, UnsupportedFormatError
from services.rmf_assessment.models import (
    Framework,
    FrameworkSection,
    Implementation,
    PopulatedAssessment,
)
from services.rmf_assessment.reports import (
    ReportContent,
    ReportFormat,
    ReportRenderer,
    build_json_report,
    layout_pdf,
    render_excel,
    render_json,
    render_pdf,
    render_risk_register,
    report_filename,
    wrap_text,
)
from services.rmf_assessment.reports import renderer as renderer_module
from services.rmf_assessment.reports.content import format_date
from services.rmf_assessment.reports.excel import RISK_REGISTER_HEADERS
from services.rmf_assessment.reports.pdf import IMPLEMENTATION_COLORS, NOTE_COLOR, SECTION_COLOR
from services.rmf_assessment.services import ScoringService
from tests.conftest import make_record


GENERATED_AT = datetime(2026, 3, 20, 8, 30, tzinfo=UTC)


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def content(sample_populated) -> ReportContent:
    return ReportContent.build(sample_populated, generated_at=GENERATED_AT)


@pytest.fixture
def long_populated(sample_populated) -> PopulatedAssessment:
    """Assessment with enough subcategories to span several pages."""
    notes = " ".join(["remediation"] * 30)
    section = FrameworkSection(
        completed=True,
        subcategories=[
            make_record(f"GV-{i}.1", Implementation.SUBSTANTIALLY_IMPLEMENTED, notes=notes)
            for i in range(30)
        ],
    )
    assessment = sample_populated.assessment.model_copy(
        update={"framework": Framework(govern=section, manage=section)}
    )
    return sample_populated.model_copy(update={"assessment": assessment})


# =============================================================================
# Text Helper Tests
# =============================================================================


class TestWrapText:
    """Tests for greedy word wrapping."""

    def test_empty_text_is_one_empty_line(self):
        assert wrap_text("") == [""]
        assert wrap_text(None) == [""]

    def test_short_text_unchanged(self):
        assert wrap_text("Reviewed by counsel") == ["Reviewed by counsel"]

    def test_join_check_ignores_separator(self):
        """A word joins while current + word fits, not counting the space."""
        assert wrap_text("aaa bbb", max_length=6) == ["aaa bbb"]
        assert wrap_text("aaa bbbb", max_length=6) == ["aaa", "bbbb"]

    def test_long_words_not_broken(self):
        word = "x" * 75
        assert wrap_text(f"short {word} tail") == ["short", word, "tail"]

    def test_wraps_long_notes(self):
        text = " ".join(["remediation"] * 12)
        lines = wrap_text(text)

        assert len(lines) > 1
        assert " ".join(lines) == text


class TestFilenames:
    """Tests for report naming helpers."""

    def test_slug(self):
        assert report_filename("Credit Model Review", "pdf") == "compliance-report-credit-model-review.pdf"

    def test_whitespace_runs_collapse(self):
        assert report_filename("Q1  Vendor\tAudit", "xlsx") == "compliance-report-q1-vendor-audit.xlsx"

    def test_format_date(self):
        assert format_date(datetime(2026, 1, 5, tzinfo=UTC)) == "1/5/2026"
        assert format_date(None) == ""


# =============================================================================
# PDF Tests
# =============================================================================


class TestPdfLayout:
    """Tests for the paginated document layout."""

    def test_single_page(self, content):
        canvas = layout_pdf(content)

        assert canvas.page_count == 1
        assert canvas.lines[0].text == "NIST AI Risk Management Framework"
        assert canvas.lines[0].y == 750
        assert canvas.lines[1].y == 725

    def test_detail_lines(self, content):
        texts = [line.text for line in layout_pdf(content).lines]

        assert "Assessment Title: Credit Model Review" in texts
        assert "Assessor: Jane Doe" in texts
        assert "Overall Risk Score: 42%" in texts
        assert "Created: 1/5/2026" in texts

    def test_sections_in_framework_order(self, content):
        headers = [
            line.text
            for line in layout_pdf(content).lines
            if line.color == SECTION_COLOR and line.size == 14
        ]

        assert headers == [
            "GOVERN Framework",
            "MAP Framework",
            "MEASURE Framework",
            "MANAGE Framework",
        ]

    def test_section_status_lines(self, content):
        texts = [line.text for line in layout_pdf(content).lines]

        assert texts[texts.index("GOVERN Framework") + 1] == "Status: Completed"
        assert texts[texts.index("MAP Framework") + 1] == "Status: In Progress"

    def test_implementation_colors(self, content):
        lines = {line.text: line for line in layout_pdf(content).lines}

        fully = lines["Implementation: fully-implemented"]
        not_started = lines["Implementation: not-started"]

        assert fully.color == IMPLEMENTATION_COLORS["fully-implemented"]
        assert not_started.color == (1, 0, 0)
        assert fully.x == 110

    def test_notes_drawn_in_gray(self, content):
        notes = [line for line in layout_pdf(content).lines if line.text.startswith("Notes: ")]

        assert [n.text for n in notes] == ["Notes: Policy draft awaiting legal review."]
        assert notes[0].color == NOTE_COLOR
        assert notes[0].size == 8

    def test_pagination(self, long_populated):
        canvas = layout_pdf(ReportContent.build(long_populated, generated_at=GENERATED_AT))

        assert canvas.page_count > 1
        assert all(line.y >= 60 for line in canvas.lines)

        for page in range(2, canvas.page_count + 1):
            first = next(line for line in canvas.lines if line.page == page)
            assert first.y == 750

    def test_subcategory_never_split_from_its_header(self, long_populated):
        lines = layout_pdf(ReportContent.build(long_populated, generated_at=GENERATED_AT)).lines

        for i, line in enumerate(lines):
            if line.text.startswith("Implementation: "):
                assert lines[i - 1].page == line.page

    def test_render_bytes(self, content):
        body = render_pdf(content)

        assert body.startswith(b"%PDF")


# =============================================================================
# Spreadsheet Tests
# =============================================================================


class TestExcel:
    """Tests for workbook encodings, read back with openpyxl."""

    def test_sheets(self, content):
        workbook = openpyxl.load_workbook(io.BytesIO(render_excel(content)))

        assert workbook.sheetnames == ["Summary", "Framework Details"]

    def test_summary_sheet(self, content):
        sheet = openpyxl.load_workbook(io.BytesIO(render_excel(content)))["Summary"]
        rows = dict(sheet.iter_rows(values_only=True))

        assert rows["Assessment Title"] == "Credit Model Review"
        assert rows["Organization"] == "Acme Lending"
        assert rows["Overall Risk Score"] == "42%"
        assert rows["Created Date"] == "1/5/2026"
        assert rows["Last Updated"] == "3/15/2026"

    def test_framework_details_sheet(self, content):
        sheet = openpyxl.load_workbook(io.BytesIO(render_excel(content)))["Framework Details"]
        rows = list(sheet.iter_rows(values_only=True))

        assert rows[0] == (
            "Framework Section",
            "Subcategory ID",
            "Outcome",
            "Implementation Level",
            "Notes",
            "Last Reviewed",
        )
        assert len(rows) == 4
        assert rows[1][:4] == ("GOVERN", "GV-1.1", "Outcome for GV-1.1", "fully-implemented")
        assert rows[1][5] == "3/15/2026"
        assert rows[2][4] == "Policy draft awaiting legal review."
        assert rows[3][0] == "MAP"
        assert rows[3][5] in (None, "")

    def test_risk_register_workbook(self, sample_populated):
        rows = ScoringService().risk_register([sample_populated])
        workbook = openpyxl.load_workbook(io.BytesIO(render_risk_register(rows)))

        assert workbook.sheetnames == ["Risk Register"]
        values = list(workbook["Risk Register"].iter_rows(values_only=True))
        assert list(values[0]) == RISK_REGISTER_HEADERS
        assert len(values) == 3

        record = dict(zip(values[0], values[1]))
        assert record["subcategoryId"] == "GV-1.2"
        assert record["frameworkSection"] == "GOVERN"
        assert record["riskLevel"] == "High"
        assert record["currentImplementation"] == "partially-implemented"
        assert isinstance(record["lastReviewed"], datetime)

    def test_control_characters_stripped_from_report(self, sample_populated):
        govern = FrameworkSection(
            completed=True,
            subcategories=[
                make_record("GV-1.1", Implementation.PARTIALLY_IMPLEMENTED, notes="pasted\x0bfrom word")
            ],
        )
        assessment = sample_populated.assessment.model_copy(
            update={"title": "Credit\x07 Model Review", "framework": Framework(govern=govern)}
        )
        populated = sample_populated.model_copy(update={"assessment": assessment})
        content = ReportContent.build(populated, generated_at=GENERATED_AT)

        workbook = openpyxl.load_workbook(io.BytesIO(render_excel(content)))

        assert dict(workbook["Summary"].iter_rows(values_only=True))["Assessment Title"] == (
            "Credit Model Review"
        )
        assert list(workbook["Framework Details"].iter_rows(values_only=True))[1][4] == (
            "pastedfrom word"
        )

    def test_control_characters_stripped_from_risk_register(self, sample_populated):
        govern = FrameworkSection(
            subcategories=[
                make_record("GV-1.2", Implementation.NOT_STARTED, notes="pasted\x0bfrom word")
            ],
        )
        assessment = sample_populated.assessment.model_copy(
            update={"framework": Framework(govern=govern)}
        )
        populated = sample_populated.model_copy(update={"assessment": assessment})
        rows = ScoringService().risk_register([populated])

        sheet = openpyxl.load_workbook(io.BytesIO(render_risk_register(rows)))["Risk Register"]
        values = list(sheet.iter_rows(values_only=True))

        assert dict(zip(values[0], values[1]))["notes"] == "pastedfrom word"

    def test_empty_risk_register_has_header(self):
        workbook = openpyxl.load_workbook(io.BytesIO(render_risk_register([])))

        assert list(workbook["Risk Register"].iter_rows(values_only=True)) == [
            tuple(RISK_REGISTER_HEADERS)
        ]


# =============================================================================
# JSON Tests
# =============================================================================


class TestJsonReport:
    """Tests for the JSON snapshot."""

    def test_metadata(self, content):
        report = json.loads(render_json(content))

        assert report["reportMetadata"] == {
            "generatedAt": GENERATED_AT.isoformat(),
            "generatedBy": "jane@acme.test",
            "reportType": "NIST AI RMF Compliance Report",
        }

    def test_assessment_fields(self, content):
        assessment = build_json_report(content)["assessment"]

        assert assessment["id"] == "assess-001"
        assert assessment["overallRiskScore"] == 42
        assert assessment["overallStatus"] == "not-started"
        assert assessment["assessor"] == {"name": "Jane Doe", "email": "jane@acme.test"}
        assert assessment["organization"] == {"name": "Acme Lending", "industry": "Finance"}
        assert assessment["aiSystem"]["name"] == "CreditScorer"
        assert assessment["completedAt"] is None

    def test_framework_reproduces_source(self, content, sample_framework):
        report = json.loads(render_json(content))

        assert Framework.model_validate(report["assessment"]["framework"]) == sample_framework

    def test_pretty_printed(self, content):
        assert b'\n  "reportMetadata"' in render_json(content)


# =============================================================================
# Dispatch Tests
# =============================================================================


class TestReportRenderer:
    """Tests for format dispatch and failure handling."""

    @pytest.mark.parametrize(
        "fmt,media_type,extension",
        [
            ("pdf", "application/pdf", "pdf"),
            ("excel", "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet", "xlsx"),
            ("JSON", "application/json", "json"),
        ],
    )
    def test_formats(self, sample_populated, fmt, media_type, extension):
        report = ReportRenderer().render(sample_populated, fmt, generated_at=GENERATED_AT)

        assert report.media_type == media_type
        assert report.filename == f"compliance-report-credit-model-review.{extension}"
        assert report.content_disposition == f'attachment; filename="{report.filename}"'
        assert report.content

    def test_unsupported_format(self, sample_populated):
        with pytest.raises(UnsupportedFormatError) as exc_info:
            ReportRenderer().render(sample_populated, "xyz")

        assert exc_info.value.field == "format"

    def test_parse(self):
        assert ReportFormat.parse("Excel") == ReportFormat.EXCEL
        with pytest.raises(UnsupportedFormatError):
            ReportFormat.parse("docx")

    def test_encoder_failure_returns_nothing(self, sample_populated, monkeypatch):
        def broken(content):
            raise RuntimeError("encoder crashed")

        monkeypatch.setitem(
            renderer_module.ENCODINGS,
            ReportFormat.JSON,
            renderer_module.Encoding("json", "application/json", broken),
        )

        with pytest.raises(RenderError):
            ReportRenderer().render(sample_populated, ReportFormat.JSON)

    def test_report_type_configurable(self, sample_populated):
        report = ReportRenderer(report_type="Quarterly AI Risk Report").render(
            sample_populated, "json", generated_at=GENERATED_AT
        )

        assert json.loads(report.content)["reportMetadata"]["reportType"] == "Quarterly AI Risk Report"
