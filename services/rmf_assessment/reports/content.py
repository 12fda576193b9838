"""
Report Content Model
====================

Logical content shared by every report encoding: metadata, assessment
detail fields and the per-function breakdown.

Version: 0.1.0
"""

import re
from dataclasses import dataclass
from datetime import UTC, datetime

from services.rmf_assessment.models.assessment import (
    FrameworkSection,
    PopulatedAssessment,
)
from services.rmf_assessment.models.template import FrameworkFunction


REPORT_TYPE = "NIST AI RMF Compliance Report"


def format_date(value: datetime | None) -> str:
    """US short date (M/D/YYYY); empty for missing values."""
    if value is None:
        return ""
    return f"{value.month}/{value.day}/{value.year}"


def report_slug(title: str) -> str:
    """Title with whitespace runs replaced by hyphens, lower-cased."""
    return re.sub(r"\s+", "-", title).lower()


def report_filename(title: str, extension: str) -> str:
    return f"compliance-report-{report_slug(title)}.{extension}"


@dataclass(frozen=True)
class ReportMetadata:
    generated_at: datetime
    generated_by: str | None
    report_type: str = REPORT_TYPE


@dataclass(frozen=True)
class ReportContent:
    """Everything a renderer needs about one assessment."""

    metadata: ReportMetadata
    source: PopulatedAssessment

    @classmethod
    def build(
        cls,
        populated: PopulatedAssessment,
        generated_at: datetime | None = None,
        report_type: str = REPORT_TYPE,
    ) -> "ReportContent":
        return cls(
            metadata=ReportMetadata(
                generated_at=generated_at or datetime.now(UTC),
                generated_by=populated.assessor.email,
                report_type=report_type,
            ),
            source=populated,
        )

    def details(self, created_label: str = "Created") -> list[tuple[str, str]]:
        """Assessment detail fields as (label, value), in report order."""
        a = self.source.assessment
        return [
            ("Assessment Title", a.title),
            ("AI System", a.ai_system.name),
            ("Organization", self.source.organization.name),
            ("Assessor", self.source.assessor.full_name),
            ("Overall Status", a.overall_status.value),
            ("Overall Risk Score", f"{a.overall_risk_score}%"),
            (created_label, format_date(a.created_at)),
            ("Last Updated", format_date(a.updated_at)),
        ]

    def sections(self) -> list[tuple[FrameworkFunction, FrameworkSection]]:
        return self.source.assessment.framework.sections()
