"""
Assessments Routes
==================

API endpoints for the assessment lifecycle, the questionnaire catalog and
framework section updates.

Version: 0.1.0
"""

from fastapi import APIRouter, Depends, Query, status
from motor.motor_asyncio import AsyncIOMotorDatabase

from services.rmf_assessment.models import (
    Assessment,
    AssessmentCreate,
    AssessmentList,
    AssessmentResponse,
    AssessmentUpdate,
    FrameworkSectionUpdate,
    OverallStatus,
    TemplateCatalog,
)
from services.rmf_assessment.routes.common import (
    CLIENT_ERRORS,
    assessment_service,
    catalog_service,
    to_http_exception,
)
from shared.auth import User, get_current_user, require_admin, require_assessor
from shared.database import get_mongodb
from shared.logging import get_logger


logger = get_logger(__name__)

router = APIRouter()


# ============================================================================
# Lifecycle
# ============================================================================


@router.post("", response_model=AssessmentResponse, status_code=status.HTTP_201_CREATED)
async def create_assessment(
    data: AssessmentCreate,
    db: AsyncIOMotorDatabase = Depends(get_mongodb),  # type: ignore[type-arg]
    current_user: User = Depends(require_assessor),
) -> AssessmentResponse:
    """
    Create an assessment in the caller's organization.

    The framework starts empty and the overall risk score at 0.
    """
    assessment = await assessment_service.create_assessment(
        db, current_user.id, current_user.organization_id, data
    )
    return AssessmentResponse(
        message="Assessment created successfully",
        assessment=assessment,
    )


@router.get("", response_model=AssessmentList)
async def list_assessments(
    status_filter: OverallStatus | None = Query(None, alias="status"),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    db: AsyncIOMotorDatabase = Depends(get_mongodb),  # type: ignore[type-arg]
    current_user: User = Depends(get_current_user),
) -> AssessmentList:
    """
    List the organization's assessments, newest first.
    """
    return await assessment_service.list_assessments_page(
        db,
        current_user.organization_id,
        status=status_filter,
        page=page,
        limit=limit,
    )


@router.get("/templates", response_model=TemplateCatalog)
async def get_templates(
    db: AsyncIOMotorDatabase = Depends(get_mongodb),  # type: ignore[type-arg]
    current_user: User = Depends(get_current_user),
) -> TemplateCatalog:
    """
    Active questionnaire templates grouped by framework function.
    """
    grouped = await catalog_service.grouped_templates(db)
    return TemplateCatalog(templates=grouped)


@router.get("/{assessment_id}", response_model=Assessment)
async def get_assessment(
    assessment_id: str,
    db: AsyncIOMotorDatabase = Depends(get_mongodb),  # type: ignore[type-arg]
    current_user: User = Depends(get_current_user),
) -> Assessment:
    """
    Get an assessment by ID.
    """
    try:
        return await assessment_service.get_assessment(
            db, current_user.organization_id, assessment_id
        )
    except CLIENT_ERRORS as e:
        raise to_http_exception(e) from e


@router.put("/{assessment_id}", response_model=AssessmentResponse)
async def update_assessment(
    assessment_id: str,
    data: AssessmentUpdate,
    db: AsyncIOMotorDatabase = Depends(get_mongodb),  # type: ignore[type-arg]
    current_user: User = Depends(require_assessor),
) -> AssessmentResponse:
    """
    Edit assessment metadata.

    Scores, status and framework sections are not accepted here.
    """
    try:
        assessment = await assessment_service.update_assessment(
            db, current_user.organization_id, assessment_id, data
        )
    except CLIENT_ERRORS as e:
        raise to_http_exception(e) from e

    return AssessmentResponse(
        message="Assessment updated successfully",
        assessment=assessment,
    )


@router.delete("/{assessment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_assessment(
    assessment_id: str,
    db: AsyncIOMotorDatabase = Depends(get_mongodb),  # type: ignore[type-arg]
    current_user: User = Depends(require_admin),
) -> None:
    """
    Delete an assessment. Admin only.
    """
    try:
        await assessment_service.delete_assessment(
            db, current_user.organization_id, assessment_id
        )
    except CLIENT_ERRORS as e:
        raise to_http_exception(e) from e


# ============================================================================
# Questionnaire
# ============================================================================


@router.put("/{assessment_id}/framework", response_model=AssessmentResponse)
async def update_framework(
    assessment_id: str,
    update: FrameworkSectionUpdate,
    db: AsyncIOMotorDatabase = Depends(get_mongodb),  # type: ignore[type-arg]
    current_user: User = Depends(require_assessor),
) -> AssessmentResponse:
    """
    Submit questionnaire answers for one framework section.

    Implementation levels are derived from the answers; the assessment is
    rescored and returned.
    """
    try:
        assessment = await assessment_service.update_framework_section(
            db,
            current_user.organization_id,
            assessment_id,
            update.section,
            update.data,
        )
    except CLIENT_ERRORS as e:
        logger.warning(
            "framework_update_rejected",
            assessment_id=assessment_id,
            section=update.section.value,
            error=str(e),
        )
        raise to_http_exception(e) from e

    return AssessmentResponse(
        message="Framework section updated successfully",
        assessment=assessment,
    )
