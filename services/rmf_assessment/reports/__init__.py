"""
Report Generation
=================

Encodings for assessment reports and the risk register.
"""

from services.rmf_assessment.reports.canvas import Canvas, wrap_text
from services.rmf_assessment.reports.content import ReportContent, report_filename
from services.rmf_assessment.reports.excel import render_excel, render_risk_register
from services.rmf_assessment.reports.json_report import build_json_report, render_json
from services.rmf_assessment.reports.pdf import layout_pdf, render_pdf
from services.rmf_assessment.reports.renderer import (
    RenderedReport,
    ReportFormat,
    ReportRenderer,
)


__all__ = [
    "Canvas",
    "wrap_text",
    "ReportContent",
    "report_filename",
    "render_excel",
    "render_risk_register",
    "build_json_report",
    "render_json",
    "layout_pdf",
    "render_pdf",
    "RenderedReport",
    "ReportFormat",
    "ReportRenderer",
]
