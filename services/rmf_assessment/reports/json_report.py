"""
JSON Report Encoding
====================

Snapshot of an assessment with report metadata. The `framework` subtree is
the stored structure dumped verbatim, so reading it back reproduces the
source sections.

Version: 0.1.0
"""

import json
from typing import Any

from services.rmf_assessment.reports.content import ReportContent


def build_json_report(content: ReportContent) -> dict[str, Any]:
    a = content.source.assessment
    org = content.source.organization
    assessor = content.source.assessor

    return {
        "reportMetadata": {
            "generatedAt": content.metadata.generated_at.isoformat(),
            "generatedBy": content.metadata.generated_by,
            "reportType": content.metadata.report_type,
        },
        "assessment": {
            "id": a.id,
            "title": a.title,
            "description": a.description,
            "aiSystem": a.ai_system.model_dump(by_alias=True, mode="json"),
            "overallStatus": a.overall_status.value,
            "overallRiskScore": a.overall_risk_score,
            "assessor": {
                "name": assessor.full_name,
                "email": assessor.email,
            },
            "organization": {
                "name": org.name,
                "industry": org.industry,
            },
            "framework": a.framework.model_dump(by_alias=True, mode="json"),
            "createdAt": a.created_at.isoformat(),
            "updatedAt": a.updated_at.isoformat(),
            "completedAt": a.completed_at.isoformat() if a.completed_at else None,
        },
    }


def render_json(content: ReportContent) -> bytes:
    return json.dumps(build_json_report(content), indent=2).encode("utf-8")
