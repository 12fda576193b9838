"""
Score History Model
===================

Point-in-time record of an assessment's overall risk score, written on
every framework section update. Dashboard trend series are computed from
these snapshots.

Version: 0.1.0
"""

from datetime import UTC, datetime
from typing import Any

from pydantic import Field

from services.rmf_assessment.models.template import CamelModel


class ScoreSnapshot(CamelModel):
    """One recorded overall score."""

    assessment_id: str
    organization_id: str
    score: int = Field(ge=0, le=100)
    previous_score: int | None = None
    recorded_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    def to_document(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)
