"""
RMF Assessment Models
=====================

Pydantic models for the NIST AI RMF assessment domain.

Documents:
- risk_templates: Questionnaire catalog (RiskTemplate)
- assessments: Assessment aggregate with framework sections
- organizations / users: Read-only collaborators used by reports

Version: 0.1.0
"""

from services.rmf_assessment.models.api import (
    AssessmentCreate,
    AssessmentList,
    AssessmentResponse,
    AssessmentUpdate,
    DashboardData,
    FrameworkSectionUpdate,
    OverviewStats,
    Pagination,
    RecentAssessment,
    RiskRegisterRow,
    SectionData,
    SubcategorySubmission,
    TemplateCatalog,
    TrendPoint,
)
from services.rmf_assessment.models.assessment import (
    AISystem,
    Assessment,
    Assessor,
    FileRef,
    Framework,
    FrameworkSection,
    Implementation,
    Lifecycle,
    Organization,
    OverallStatus,
    PopulatedAssessment,
    QuestionAnswer,
    SubcategoryRecord,
)
from services.rmf_assessment.models.history import ScoreSnapshot
from services.rmf_assessment.models.template import (
    FRAMEWORK_FUNCTIONS,
    EvidenceRequirement,
    FrameworkFunction,
    Question,
    QuestionType,
    RiskFactor,
    RiskTemplate,
)

__all__ = [
    # Template
    "FRAMEWORK_FUNCTIONS",
    "FrameworkFunction",
    "Question",
    "QuestionType",
    "RiskFactor",
    "EvidenceRequirement",
    "RiskTemplate",
    # Assessment
    "AISystem",
    "Assessment",
    "Assessor",
    "FileRef",
    "Framework",
    "FrameworkSection",
    "Implementation",
    "Lifecycle",
    "Organization",
    "OverallStatus",
    "PopulatedAssessment",
    "QuestionAnswer",
    "SubcategoryRecord",
    # History
    "ScoreSnapshot",
    # API
    "AssessmentCreate",
    "AssessmentList",
    "AssessmentResponse",
    "AssessmentUpdate",
    "DashboardData",
    "FrameworkSectionUpdate",
    "OverviewStats",
    "Pagination",
    "RecentAssessment",
    "RiskRegisterRow",
    "SectionData",
    "SubcategorySubmission",
    "TemplateCatalog",
    "TrendPoint",
]
