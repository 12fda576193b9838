"""
Report Renderer
===============

Dispatches an assessment to one of the three report encodings and wraps
the result with its media type and download filename.

Formats:
- pdf   -> paginated document
- excel -> two-sheet workbook (.xlsx)
- json  -> nested snapshot

Version: 0.1.0
"""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from services.rmf_assessment.errors import RenderError, UnsupportedFormatError
from services.rmf_assessment.models.assessment import PopulatedAssessment
from services.rmf_assessment.reports.content import REPORT_TYPE, ReportContent, report_filename
from services.rmf_assessment.reports.excel import render_excel
from services.rmf_assessment.reports.json_report import render_json
from services.rmf_assessment.reports.pdf import render_pdf
from shared.logging import get_logger


logger = get_logger(__name__)


class ReportFormat(str, Enum):
    """Supported report encodings."""

    PDF = "pdf"
    EXCEL = "excel"
    JSON = "json"

    @classmethod
    def parse(cls, value: str) -> "ReportFormat":
        """
        Case-insensitive lookup.

        Raises:
            UnsupportedFormatError: For any other value.
        """
        try:
            return cls(value.lower())
        except ValueError:
            raise UnsupportedFormatError(value) from None


@dataclass(frozen=True)
class Encoding:
    extension: str
    media_type: str
    render: Callable[[ReportContent], bytes]


ENCODINGS: dict[ReportFormat, Encoding] = {
    ReportFormat.PDF: Encoding("pdf", "application/pdf", render_pdf),
    ReportFormat.EXCEL: Encoding(
        "xlsx",
        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        render_excel,
    ),
    ReportFormat.JSON: Encoding("json", "application/json", render_json),
}


@dataclass(frozen=True)
class RenderedReport:
    """A complete encoded report ready for download."""

    content: bytes
    media_type: str
    filename: str

    @property
    def content_disposition(self) -> str:
        return f'attachment; filename="{self.filename}"'


class ReportRenderer:
    """Renders populated assessments. Stateless; safe to share across requests."""

    def __init__(self, report_type: str = REPORT_TYPE) -> None:
        self.report_type = report_type

    def render(
        self,
        populated: PopulatedAssessment,
        fmt: ReportFormat | str,
        generated_at: datetime | None = None,
    ) -> RenderedReport:
        """
        Render one assessment.

        Raises:
            UnsupportedFormatError: Unknown format, raised before rendering.
            RenderError: The encoder failed; nothing is returned.
        """
        report_format = fmt if isinstance(fmt, ReportFormat) else ReportFormat.parse(fmt)
        encoding = ENCODINGS[report_format]
        content = ReportContent.build(populated, generated_at, self.report_type)

        try:
            body = encoding.render(content)
        except Exception as e:
            logger.error(
                "report_render_failed",
                assessment_id=populated.assessment.id,
                format=report_format.value,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise RenderError(f"Failed to render {report_format.value} report") from e

        logger.info(
            "report_generated",
            assessment_id=populated.assessment.id,
            format=report_format.value,
            size_bytes=len(body),
        )

        return RenderedReport(
            content=body,
            media_type=encoding.media_type,
            filename=report_filename(populated.assessment.title, encoding.extension),
        )
