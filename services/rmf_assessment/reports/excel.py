"""
Spreadsheet Encodings
=====================

Workbook renderings built with openpyxl:
- Assessment report: "Summary" and "Framework Details" sheets
- Risk register: a single "Risk Register" sheet

Version: 0.1.0
"""

import io
from collections.abc import Sequence
from datetime import UTC, datetime

import openpyxl
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from services.rmf_assessment.models.api import RiskRegisterRow
from services.rmf_assessment.reports.content import ReportContent, format_date


FRAMEWORK_HEADERS = [
    "Framework Section",
    "Subcategory ID",
    "Outcome",
    "Implementation Level",
    "Notes",
    "Last Reviewed",
]

RISK_REGISTER_HEADERS = [
    "assessmentTitle",
    "aiSystemName",
    "frameworkSection",
    "subcategoryId",
    "outcome",
    "currentImplementation",
    "riskLevel",
    "assessor",
    "lastReviewed",
    "notes",
]

MAX_COLUMN_WIDTH = 80


def _naive_utc(value: datetime | None) -> datetime | None:
    """openpyxl rejects timezone-aware datetimes."""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(UTC).replace(tzinfo=None)


def _append(sheet: Worksheet, values: Sequence[object]) -> None:
    """Append a row, stripping control characters worksheets cannot hold."""
    sheet.append([ILLEGAL_CHARACTERS_RE.sub("", v) if isinstance(v, str) else v for v in values])


def _autosize(sheet: Worksheet) -> None:
    for index, column in enumerate(sheet.iter_cols(values_only=True), start=1):
        width = max((len(str(v)) for v in column if v is not None), default=8)
        sheet.column_dimensions[get_column_letter(index)].width = min(width + 2, MAX_COLUMN_WIDTH)


def _to_bytes(workbook: openpyxl.Workbook) -> bytes:
    buffer = io.BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


def render_excel(content: ReportContent) -> bytes:
    """Two-sheet assessment workbook."""
    workbook = openpyxl.Workbook()

    summary = workbook.active
    summary.title = "Summary"
    for label, value in content.details(created_label="Created Date"):
        _append(summary, [label, value])
    _autosize(summary)

    details = workbook.create_sheet("Framework Details")
    _append(details, FRAMEWORK_HEADERS)
    for cell in details[1]:
        cell.font = Font(bold=True)

    for function, section in content.sections():
        for sub in section.subcategories:
            _append(
                details,
                [
                    function.value.upper(),
                    sub.subcategory_id,
                    sub.outcome,
                    sub.implementation.value,
                    sub.notes or "",
                    format_date(sub.last_reviewed),
                ],
            )
    _autosize(details)

    return _to_bytes(workbook)


def render_risk_register(rows: Sequence[RiskRegisterRow]) -> bytes:
    """Risk register workbook; header row uses the row field names."""
    workbook = openpyxl.Workbook()
    sheet = workbook.active
    sheet.title = "Risk Register"

    _append(sheet, RISK_REGISTER_HEADERS)
    for row in rows:
        data = row.model_dump(by_alias=True, mode="json")
        data["lastReviewed"] = _naive_utc(row.last_reviewed)
        _append(sheet, [data[h] for h in RISK_REGISTER_HEADERS])

    _autosize(sheet)
    return _to_bytes(workbook)
