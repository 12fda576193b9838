"""
Risk Scoring Engine
===================

Aggregates subcategory implementation levels into section scores, the
overall assessment risk score, organization dashboards and the risk
register.

Every method is a pure function of its arguments. Lookup tables live on a
`ScoringConfig` instance passed to the service rather than in module state.

Score Components:
- Section score: mean implementation value of a section (0 when empty)
- Overall score: mean over all subcategories of all four sections, flattened
- Dashboard: counts, averages, per-function compliance, trend series
- Risk register: every subcategory not yet fully implemented

Version: 0.1.0
"""

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import UTC, datetime

from services.rmf_assessment.models.api import (
    DashboardData,
    OverviewStats,
    RecentAssessment,
    RiskRegisterRow,
    TrendPoint,
)
from services.rmf_assessment.models.assessment import (
    Assessment,
    Framework,
    FrameworkSection,
    Implementation,
    OverallStatus,
    PopulatedAssessment,
)
from services.rmf_assessment.models.history import ScoreSnapshot
from services.rmf_assessment.models.template import FrameworkFunction
from shared.logging import get_logger


logger = get_logger(__name__)


# =============================================================================
# Score Configuration
# =============================================================================


@dataclass
class ScoringConfig:
    """Lookup tables and limits used by the scoring engine."""

    implementation_values: dict[str, int] = field(
        default_factory=lambda: {
            Implementation.NOT_STARTED.value: 0,
            Implementation.PARTIALLY_IMPLEMENTED.value: 25,
            Implementation.SUBSTANTIALLY_IMPLEMENTED.value: 75,
            Implementation.FULLY_IMPLEMENTED.value: 100,
        }
    )

    risk_levels: dict[str, str] = field(
        default_factory=lambda: {
            Implementation.NOT_STARTED.value: "Critical",
            Implementation.PARTIALLY_IMPLEMENTED.value: "High",
            Implementation.SUBSTANTIALLY_IMPLEMENTED.value: "Medium",
            Implementation.FULLY_IMPLEMENTED.value: "Low",
        }
    )

    # Assessments scoring below this count as high risk on the dashboard
    high_risk_threshold: int = 60
    recent_limit: int = 5
    trend_months: int = 6


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives."""
    return math.floor(value + 0.5)


def mean(values: Sequence[float]) -> float:
    """Arithmetic mean; 0 for an empty sequence."""
    if not values:
        return 0.0
    return sum(values) / len(values)


def _level_value(level: Implementation | str) -> str:
    return level.value if isinstance(level, Implementation) else str(level)


def _shift_month(moment: datetime, months_back: int) -> str:
    index = moment.year * 12 + (moment.month - 1) - months_back
    return f"{index // 12:04d}-{index % 12 + 1:02d}"


# =============================================================================
# Scoring Service
# =============================================================================


class ScoringService:
    """
    Scores assessments and builds organization-level aggregates.

    Calculation Methods:
    1. Section: mean implementation value of the section's subcategories
    2. Overall: mean over every subcategory of every section, rounded
    3. Dashboard: cross-assessment statistics for one organization
    """

    def __init__(self, config: ScoringConfig | None = None) -> None:
        self.config = config or ScoringConfig()

    # -------------------------------------------------------------------------
    # Single assessment
    # -------------------------------------------------------------------------

    def implementation_value(self, level: Implementation | str) -> int:
        """Numeric value of an implementation level; unknown levels score 0."""
        return self.config.implementation_values.get(_level_value(level), 0)

    def section_score(self, section: FrameworkSection) -> float:
        """Mean implementation value of a section (unrounded)."""
        return mean([self.implementation_value(s.implementation) for s in section.subcategories])

    def overall_risk_score(self, framework: Framework) -> int:
        """Mean implementation value across all sections, rounded."""
        values = [
            self.implementation_value(sub.implementation)
            for _, section in framework.sections()
            for sub in section.subcategories
        ]
        return round_half_up(mean(values))

    def is_complete(self, framework: Framework) -> bool:
        return all(section.completed for _, section in framework.sections())

    def apply_section_update(
        self,
        assessment: Assessment,
        function: FrameworkFunction | str,
        section: FrameworkSection,
        now: datetime | None = None,
    ) -> Assessment:
        """
        Replace one framework section and recompute derived fields.

        The score is always recomputed. Status moves to completed, and
        `completed_at` is stamped, when all four sections are complete;
        otherwise the previous status is kept.

        Returns:
            A new Assessment; the input is not modified.
        """
        now = now or datetime.now(UTC)
        framework = assessment.framework.with_section(function, section)

        updates: dict[str, object] = {
            "framework": framework,
            "overall_risk_score": self.overall_risk_score(framework),
            "updated_at": now,
        }
        if self.is_complete(framework):
            updates["overall_status"] = OverallStatus.COMPLETED
            updates["completed_at"] = now

        updated = assessment.model_copy(update=updates)

        logger.info(
            "assessment_scored",
            assessment_id=assessment.id,
            section=FrameworkFunction(function).value,
            overall_risk_score=updated.overall_risk_score,
            status=updated.overall_status.value,
        )
        return updated

    # -------------------------------------------------------------------------
    # Risk register
    # -------------------------------------------------------------------------

    def risk_level(self, level: Implementation | str) -> str:
        return self.config.risk_levels.get(_level_value(level), "Unknown")

    def risk_register(self, populated: Iterable[PopulatedAssessment]) -> list[RiskRegisterRow]:
        """Rows for every subcategory that is not fully implemented."""
        rows: list[RiskRegisterRow] = []

        for item in populated:
            assessment = item.assessment
            for function, section in assessment.framework.sections():
                for sub in section.subcategories:
                    if sub.implementation == Implementation.FULLY_IMPLEMENTED:
                        continue
                    rows.append(
                        RiskRegisterRow(
                            assessment_title=assessment.title,
                            ai_system_name=assessment.ai_system.name,
                            framework_section=function.value.upper(),
                            subcategory_id=sub.subcategory_id,
                            outcome=sub.outcome,
                            current_implementation=sub.implementation,
                            risk_level=self.risk_level(sub.implementation),
                            assessor=item.assessor.full_name,
                            last_reviewed=sub.last_reviewed,
                            notes=sub.notes,
                        )
                    )

        return rows

    # -------------------------------------------------------------------------
    # Dashboard
    # -------------------------------------------------------------------------

    def compliance_by_framework(
        self,
        assessments: Sequence[Assessment],
    ) -> dict[FrameworkFunction, int]:
        """Mean section score per function over assessments with data."""
        result: dict[FrameworkFunction, int] = {}
        for function in FrameworkFunction:
            scores = [
                self.section_score(a.framework.section(function))
                for a in assessments
                if a.framework.section(function).subcategories
            ]
            result[function] = round_half_up(mean(scores))
        return result

    def risk_trends(
        self,
        snapshots: Sequence[ScoreSnapshot],
        now: datetime | None = None,
    ) -> list[TrendPoint]:
        """
        Monthly trend of recorded scores, oldest month first.

        Each month's value is the mean of the latest snapshot per assessment
        recorded in that month, or None when there is none.
        """
        now = now or datetime.now(UTC)
        months = [_shift_month(now, back) for back in range(self.config.trend_months - 1, -1, -1)]

        latest: dict[tuple[str, str], ScoreSnapshot] = {}
        for snap in snapshots:
            key = (snap.recorded_at.strftime("%Y-%m"), snap.assessment_id)
            current = latest.get(key)
            if current is None or snap.recorded_at >= current.recorded_at:
                latest[key] = snap

        trends = []
        for month in months:
            scores = [s.score for (m, _), s in latest.items() if m == month]
            trends.append(TrendPoint(date=month, score=round_half_up(mean(scores)) if scores else None))
        return trends

    def dashboard(
        self,
        assessments: Sequence[Assessment],
        snapshots: Sequence[ScoreSnapshot] = (),
        now: datetime | None = None,
    ) -> DashboardData:
        """Organization dashboard aggregates."""
        stats = OverviewStats(
            total_assessments=len(assessments),
            completed_assessments=sum(
                1 for a in assessments if a.overall_status == OverallStatus.COMPLETED
            ),
            high_risk_items=sum(
                1 for a in assessments if a.overall_risk_score < self.config.high_risk_threshold
            ),
            avg_compliance_score=round_half_up(mean([a.overall_risk_score for a in assessments])),
        )

        recent = sorted(assessments, key=lambda a: a.updated_at, reverse=True)[: self.config.recent_limit]

        return DashboardData(
            overview_stats=stats,
            recent_assessments=[
                RecentAssessment(
                    title=a.title,
                    status=a.overall_status,
                    risk_score=a.overall_risk_score,
                    updated_at=a.updated_at,
                    ai_system=a.ai_system,
                )
                for a in recent
            ],
            risk_trends=self.risk_trends(snapshots, now),
            compliance_by_framework=self.compliance_by_framework(assessments),
        )
