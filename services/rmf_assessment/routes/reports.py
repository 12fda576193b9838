"""
Reports Routes
==============

Dashboard aggregates, the risk register export and per-assessment report
downloads (PDF, Excel, JSON).

Version: 0.1.0
"""

from fastapi import APIRouter, Depends, HTTPException, Response, status
from fastapi.concurrency import run_in_threadpool
from motor.motor_asyncio import AsyncIOMotorDatabase

from services.rmf_assessment.errors import RenderError
from services.rmf_assessment.models import DashboardData
from services.rmf_assessment.reports import ReportFormat, render_risk_register
from services.rmf_assessment.reports.renderer import ENCODINGS
from services.rmf_assessment.routes.common import (
    CLIENT_ERRORS,
    assessment_service,
    report_renderer,
    scoring_service,
    to_http_exception,
)
from shared.auth import User, get_current_user, require_auditor
from shared.database import get_mongodb
from shared.logging import get_logger


logger = get_logger(__name__)

router = APIRouter()

RISK_REGISTER_FILENAME = "risk-register.xlsx"


@router.get("/dashboard", response_model=DashboardData)
async def get_dashboard(
    db: AsyncIOMotorDatabase = Depends(get_mongodb),  # type: ignore[type-arg]
    current_user: User = Depends(get_current_user),
) -> DashboardData:
    """
    Organization dashboard: overview stats, recent assessments, monthly
    risk trend and mean compliance per framework function.
    """
    org_id = current_user.organization_id
    assessments = await assessment_service.list_assessments(db, org_id)
    snapshots = await assessment_service.list_snapshots(
        db, org_id, scoring_service.config.trend_months
    )
    return scoring_service.dashboard(assessments, snapshots)


@router.get("/risk-register")
async def export_risk_register(
    db: AsyncIOMotorDatabase = Depends(get_mongodb),  # type: ignore[type-arg]
    current_user: User = Depends(require_auditor),
) -> Response:
    """
    Download every not fully implemented subcategory as a workbook.
    """
    try:
        populated = await assessment_service.list_populated(db, current_user.organization_id)
    except CLIENT_ERRORS as e:
        raise to_http_exception(e) from e

    rows = scoring_service.risk_register(populated)
    body = await run_in_threadpool(render_risk_register, rows)

    logger.info(
        "risk_register_exported",
        organization_id=current_user.organization_id,
        rows=len(rows),
    )

    return Response(
        content=body,
        media_type=ENCODINGS[ReportFormat.EXCEL].media_type,
        headers={"Content-Disposition": f'attachment; filename="{RISK_REGISTER_FILENAME}"'},
    )


@router.get("/{assessment_id}/{report_format}")
async def generate_report(
    assessment_id: str,
    report_format: str,
    db: AsyncIOMotorDatabase = Depends(get_mongodb),  # type: ignore[type-arg]
    current_user: User = Depends(get_current_user),
) -> Response:
    """
    Download one assessment report.

    The format is checked before the assessment is loaded; an unknown
    format is a 400 and nothing is rendered.
    """
    try:
        fmt = ReportFormat.parse(report_format)
        populated = await assessment_service.get_populated(
            db, current_user.organization_id, assessment_id
        )
    except CLIENT_ERRORS as e:
        raise to_http_exception(e) from e

    try:
        report = await run_in_threadpool(report_renderer.render, populated, fmt)
    except RenderError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e),
        ) from e

    return Response(
        content=report.content,
        media_type=report.media_type,
        headers={"Content-Disposition": report.content_disposition},
    )
