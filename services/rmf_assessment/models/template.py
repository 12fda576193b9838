"""
Risk Template Models
====================

Catalog entries describing one NIST AI RMF subcategory and the
questionnaire used to assess it.

Version: 0.1.0
"""

from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class FrameworkFunction(str, Enum):
    """NIST AI RMF core functions, in framework order."""

    GOVERN = "govern"
    MAP = "map"
    MEASURE = "measure"
    MANAGE = "manage"


FRAMEWORK_FUNCTIONS: tuple[FrameworkFunction, ...] = tuple(FrameworkFunction)


class QuestionType(str, Enum):
    """Questionnaire input types."""

    YES_NO = "yes-no"
    MULTIPLE_CHOICE = "multiple-choice"
    SCALE = "scale"
    TEXT = "text"
    FILE_UPLOAD = "file-upload"


class Level(str, Enum):
    """Three-point rating used for risk factor impact and likelihood."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class CamelModel(BaseModel):
    """Base model serializing to the camelCase names used on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class Question(CamelModel):
    """A single questionnaire item."""

    id: str
    text: str
    type: QuestionType
    options: list[str] = Field(default_factory=list)
    required: bool = False
    help_text: str | None = None
    # Documentary only: scoring averages answers without weighting.
    weight: int = Field(default=5, ge=1, le=10)


class RiskFactor(CamelModel):
    """A risk factor the subcategory mitigates."""

    factor: str
    impact: Level | None = None
    likelihood: Level | None = None


class EvidenceRequirement(CamelModel):
    """Evidence an assessor is expected to attach."""

    type: str
    description: str
    mandatory: bool = False


class RiskTemplate(CamelModel):
    """Immutable catalog entry for one framework subcategory."""

    model_config = ConfigDict(frozen=True)

    framework_function: FrameworkFunction
    category: str
    subcategory_id: str
    outcome: str
    description: str | None = None
    informative_references: list[str] = Field(default_factory=list)
    questions: list[Question] = Field(default_factory=list)
    risk_factors: list[RiskFactor] = Field(default_factory=list)
    mitigation_strategies: list[str] = Field(default_factory=list)
    evidence_requirements: list[EvidenceRequirement] = Field(default_factory=list)
    is_active: bool = True
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @property
    def sort_key(self) -> tuple[str, str, str]:
        return (self.framework_function.value, self.category, self.subcategory_id)
