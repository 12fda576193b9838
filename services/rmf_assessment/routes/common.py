"""
Shared Route Helpers
====================

Translation of domain errors into HTTP errors, and the service instances
used by the route modules.
"""

from fastapi import HTTPException, status

from services.rmf_assessment.errors import NotFoundError, ValidationError
from services.rmf_assessment.reports import ReportRenderer
from services.rmf_assessment.services import (
    AssessmentService,
    ScoringConfig,
    ScoringService,
    TemplateCatalogService,
)
from shared.config import settings


scoring_service = ScoringService(
    ScoringConfig(
        high_risk_threshold=settings.reports.high_risk_threshold,
        recent_limit=settings.reports.recent_limit,
        trend_months=settings.reports.trend_months,
    )
)
catalog_service = TemplateCatalogService()
assessment_service = AssessmentService(scoring=scoring_service, catalog=catalog_service)
report_renderer = ReportRenderer(report_type=settings.reports.report_type)


CLIENT_ERRORS = (NotFoundError, ValidationError)


def to_http_exception(exc: NotFoundError | ValidationError) -> HTTPException:
    """
    Map a client-side domain error onto an HTTP error.

    Other domain errors are left to the application's internal-error handler.
    """
    if isinstance(exc, NotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
