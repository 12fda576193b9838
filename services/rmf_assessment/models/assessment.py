"""
Assessment Models
=================

The assessment aggregate: an AI system evaluated against the four
NIST AI RMF functions.

Subcategory records are frozen. Their implementation level is derived from
the recorded responses by the response aggregator and is never accepted
from a client.

Version: 0.1.0
"""

from datetime import UTC, datetime
from enum import Enum
from typing import Any

from pydantic import AliasChoices, ConfigDict, Field

from services.rmf_assessment.models.template import CamelModel, FrameworkFunction


class Implementation(str, Enum):
    """Four-point implementation level of a subcategory."""

    NOT_STARTED = "not-started"
    PARTIALLY_IMPLEMENTED = "partially-implemented"
    SUBSTANTIALLY_IMPLEMENTED = "substantially-implemented"
    FULLY_IMPLEMENTED = "fully-implemented"


class OverallStatus(str, Enum):
    """Assessment workflow status."""

    NOT_STARTED = "not-started"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    NEEDS_REVIEW = "needs-review"


class Lifecycle(str, Enum):
    """AI system lifecycle stage."""

    DESIGN = "design"
    DEVELOPMENT = "development"
    DEPLOYMENT = "deployment"
    OPERATION = "operation"
    RETIREMENT = "retirement"


class FileRef(CamelModel):
    """Reference to an uploaded supporting document."""

    model_config = ConfigDict(frozen=True)

    document_id: str
    filename: str | None = None


class QuestionAnswer(CamelModel):
    """One questionnaire answer as submitted by the wizard."""

    model_config = ConfigDict(frozen=True)

    question_id: str
    response: str = ""
    files: list[FileRef] = Field(default_factory=list)


class SubcategoryRecord(CamelModel):
    """Persisted result for one subcategory of one assessment."""

    model_config = ConfigDict(frozen=True)

    subcategory_id: str
    outcome: str = ""
    implementation: Implementation = Implementation.NOT_STARTED
    responses: list[QuestionAnswer] = Field(default_factory=list)
    notes: str = ""
    last_reviewed: datetime | None = None


class FrameworkSection(CamelModel):
    """Results for one framework function."""

    completed: bool = False
    subcategories: list[SubcategoryRecord] = Field(default_factory=list)


class Framework(CamelModel):
    """The four framework sections keyed by function name."""

    govern: FrameworkSection = Field(default_factory=FrameworkSection)
    map: FrameworkSection = Field(default_factory=FrameworkSection)
    measure: FrameworkSection = Field(default_factory=FrameworkSection)
    manage: FrameworkSection = Field(default_factory=FrameworkSection)

    def section(self, function: FrameworkFunction | str) -> FrameworkSection:
        return getattr(self, FrameworkFunction(function).value)

    def sections(self) -> list[tuple[FrameworkFunction, FrameworkSection]]:
        """Sections in framework order."""
        return [(fn, self.section(fn)) for fn in FrameworkFunction]

    def with_section(
        self,
        function: FrameworkFunction | str,
        section: FrameworkSection,
    ) -> "Framework":
        return self.model_copy(update={FrameworkFunction(function).value: section})


class AISystem(CamelModel):
    """The AI system under assessment."""

    name: str
    description: str | None = None
    purpose: str | None = None
    data_types: list[str] = Field(default_factory=list)
    deployment_environment: str | None = None
    stakeholders: list[str] = Field(default_factory=list)
    lifecycle: Lifecycle = Lifecycle.DESIGN


class Assessment(CamelModel):
    """
    Root aggregate owned by one organization.

    `overall_risk_score`, `overall_status` and `completed_at` are maintained
    by the scoring engine whenever a framework section changes.
    """

    id: str = Field(
        validation_alias=AliasChoices("_id", "id"),
        serialization_alias="id",
    )
    title: str
    description: str | None = None
    organization_id: str
    ai_system: AISystem
    framework: Framework = Field(default_factory=Framework)
    overall_status: OverallStatus = OverallStatus.NOT_STARTED
    overall_risk_score: int = Field(default=0, ge=0, le=100)
    assessor_id: str
    due_date: datetime | None = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    completed_at: datetime | None = None

    def to_document(self) -> dict[str, Any]:
        """Serialize for storage, keyed by `_id`."""
        doc = self.model_dump(by_alias=True)
        doc["_id"] = doc.pop("id")
        return doc


class Organization(CamelModel):
    """Owning organization, as needed by reports."""

    id: str = Field(validation_alias=AliasChoices("_id", "id"), serialization_alias="id")
    name: str
    industry: str | None = None
    size: str | None = None


class Assessor(CamelModel):
    """User attributed as the assessor."""

    id: str = Field(validation_alias=AliasChoices("_id", "id"), serialization_alias="id")
    first_name: str = ""
    last_name: str = ""
    email: str | None = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class PopulatedAssessment(CamelModel):
    """An assessment loaded together with its organization and assessor."""

    assessment: Assessment
    organization: Organization
    assessor: Assessor
