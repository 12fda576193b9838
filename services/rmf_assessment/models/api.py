"""
API Models
==========

Request and response bodies for the assessment and report endpoints.

Version: 0.1.0
"""

from datetime import datetime

from pydantic import ConfigDict, Field, field_validator

from services.rmf_assessment.models.assessment import (
    AISystem,
    Assessment,
    Implementation,
    OverallStatus,
    QuestionAnswer,
)
from services.rmf_assessment.models.template import (
    CamelModel,
    FrameworkFunction,
    RiskTemplate,
)


# =============================================================================
# Requests
# =============================================================================


class AssessmentCreate(CamelModel):
    """
    Body of `POST /assessments`.

    A new assessment starts with an empty framework, score 0 and status
    not-started; those fields are not accepted here.
    """

    model_config = ConfigDict(extra="forbid")

    title: str = Field(min_length=1)
    description: str | None = None
    ai_system: AISystem
    due_date: datetime | None = None
    assessor_id: str | None = None


class AssessmentUpdate(CamelModel):
    """
    Body of `PUT /assessments/{id}`: metadata only.

    Framework sections change through `PUT /assessments/{id}/framework`;
    score, status and completion are never set directly.
    """

    model_config = ConfigDict(extra="forbid")

    title: str | None = Field(default=None, min_length=1)
    description: str | None = None
    ai_system: AISystem | None = None
    due_date: datetime | None = None
    assessor_id: str | None = None

    @field_validator("title", "ai_system", "assessor_id")
    @classmethod
    def not_null(cls, v: object) -> object:
        if v is None:
            raise ValueError("may be omitted but not null")
        return v


class SubcategorySubmission(CamelModel):
    """Wizard answers for one subcategory. Implementation is not accepted."""

    subcategory_id: str
    responses: list[QuestionAnswer] = Field(default_factory=list)
    notes: str = ""


class SectionData(CamelModel):
    completed: bool = False
    subcategories: list[SubcategorySubmission] = Field(default_factory=list)


class FrameworkSectionUpdate(CamelModel):
    """Body of `PUT /assessments/{id}/framework`."""

    section: FrameworkFunction
    data: SectionData


# =============================================================================
# Responses
# =============================================================================


class TemplateCatalog(CamelModel):
    """Active templates grouped by framework function."""

    templates: dict[FrameworkFunction, list[RiskTemplate]]


class AssessmentResponse(CamelModel):
    message: str
    assessment: Assessment


class Pagination(CamelModel):
    current_page: int
    total_pages: int
    total_items: int
    items_per_page: int


class AssessmentList(CamelModel):
    """One page of an organization's assessments, newest first."""

    assessments: list[Assessment]
    pagination: Pagination


class OverviewStats(CamelModel):
    total_assessments: int = 0
    completed_assessments: int = 0
    high_risk_items: int = 0
    avg_compliance_score: int = 0


class RecentAssessment(CamelModel):
    title: str
    status: OverallStatus
    risk_score: int
    updated_at: datetime
    ai_system: AISystem


class TrendPoint(CamelModel):
    """Mean score for one calendar month; `None` when nothing was recorded."""

    date: str
    score: int | None = None


class DashboardData(CamelModel):
    overview_stats: OverviewStats
    recent_assessments: list[RecentAssessment]
    risk_trends: list[TrendPoint]
    compliance_by_framework: dict[FrameworkFunction, int]


class RiskRegisterRow(CamelModel):
    """One remediation item: a subcategory that is not fully implemented."""

    assessment_title: str
    ai_system_name: str
    framework_section: str
    subcategory_id: str
    outcome: str
    current_implementation: Implementation | str
    risk_level: str
    assessor: str
    last_reviewed: datetime | None = None
    notes: str = ""
