"""
Scoring Service Tests
=====================

Tests for the risk scoring engine: section and overall scores, status
promotion, dashboard aggregates, trends and the risk register.

Version: 0.1.0
"""

import pytest
from datetime import datetime, timedelta, UTC

from services.rmf_assessment.models import (
    AISystem,
    Assessment,
    Framework,
    FrameworkFunction,
    FrameworkSection,
    Implementation,
    OverallStatus,
    ScoreSnapshot,
)
from services.rmf_assessment.services.scoring import (
    ScoringConfig,
    ScoringService,
    mean,
    round_half_up,
)
from tests.conftest import NOW, ORG_ID, make_record


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def scoring_service() -> ScoringService:
    """Get a scoring service with default configuration."""
    return ScoringService()


def make_assessment(
    assessment_id: str,
    score: int = 0,
    status: OverallStatus = OverallStatus.IN_PROGRESS,
    framework: Framework | None = None,
    updated_at: datetime = NOW,
) -> Assessment:
    return Assessment(
        id=assessment_id,
        title=f"Assessment {assessment_id}",
        organization_id=ORG_ID,
        ai_system=AISystem(name=f"System {assessment_id}"),
        framework=framework or Framework(),
        overall_status=status,
        overall_risk_score=score,
        assessor_id="user-001",
        updated_at=updated_at,
    )


def completed_section(*levels: Implementation) -> FrameworkSection:
    return FrameworkSection(
        completed=True,
        subcategories=[make_record(f"X-{i}", level) for i, level in enumerate(levels)],
    )


# =============================================================================
# Rounding Tests
# =============================================================================


class TestRounding:
    """Tests for half-up rounding and means."""

    @pytest.mark.parametrize("value,expected", [(0.5, 1), (62.5, 63), (41.666, 42), (56.25, 56), (0.49, 0)])
    def test_round_half_up(self, value, expected):
        assert round_half_up(value) == expected

    def test_mean_of_nothing_is_zero(self):
        assert mean([]) == 0

    def test_mixed_subcategory_values(self):
        """Values 100, 75, 50 and 0 average to 56."""
        assert round_half_up(mean([100, 75, 50, 0])) == 56

    def test_mixed_values_through_scoring(self):
        """A level worth 50 gives 56.25 for the section and 56 overall."""
        values = ScoringConfig().implementation_values
        values[Implementation.PARTIALLY_IMPLEMENTED.value] = 50
        service = ScoringService(ScoringConfig(implementation_values=values))
        levels = (
            Implementation.FULLY_IMPLEMENTED,
            Implementation.SUBSTANTIALLY_IMPLEMENTED,
            Implementation.PARTIALLY_IMPLEMENTED,
            Implementation.NOT_STARTED,
        )

        assert service.section_score(completed_section(*levels)) == 56.25

        framework = Framework(
            govern=completed_section(levels[0]),
            map=completed_section(levels[1]),
            measure=completed_section(levels[2]),
            manage=completed_section(levels[3]),
        )
        assert service.overall_risk_score(framework) == 56


# =============================================================================
# Score Calculation Tests
# =============================================================================


class TestScoreCalculation:
    """Tests for section and overall scores."""

    def test_implementation_values(self, scoring_service):
        assert scoring_service.implementation_value(Implementation.NOT_STARTED) == 0
        assert scoring_service.implementation_value(Implementation.PARTIALLY_IMPLEMENTED) == 25
        assert scoring_service.implementation_value(Implementation.SUBSTANTIALLY_IMPLEMENTED) == 75
        assert scoring_service.implementation_value(Implementation.FULLY_IMPLEMENTED) == 100
        assert scoring_service.implementation_value("retired") == 0

    def test_empty_framework_scores_zero(self, scoring_service):
        assert scoring_service.overall_risk_score(Framework()) == 0

    def test_empty_section_scores_zero(self, scoring_service):
        assert scoring_service.section_score(FrameworkSection()) == 0

    def test_section_score_is_unrounded(self, scoring_service, sample_framework):
        assert scoring_service.section_score(sample_framework.govern) == 62.5

    def test_overall_score_is_flattened(self, scoring_service, sample_framework):
        """100, 25 and 0 across two sections: flattened mean 41.67, not mean of sections."""
        assert scoring_service.overall_risk_score(sample_framework) == 42

    def test_score_within_bounds(self, scoring_service):
        framework = Framework(
            govern=completed_section(*[Implementation.FULLY_IMPLEMENTED] * 3),
            manage=completed_section(Implementation.NOT_STARTED),
        )
        score = scoring_service.overall_risk_score(framework)
        assert 0 <= score <= 100
        assert score == 75

    def test_custom_values(self):
        config = ScoringConfig()
        config.implementation_values[Implementation.PARTIALLY_IMPLEMENTED.value] = 50
        service = ScoringService(config)

        framework = Framework(govern=completed_section(Implementation.PARTIALLY_IMPLEMENTED))
        assert service.overall_risk_score(framework) == 50


# =============================================================================
# Section Update Tests
# =============================================================================


class TestApplySectionUpdate:
    """Tests for rescoring after a section replacement."""

    def test_replaces_section_and_rescores(self, scoring_service, sample_assessment):
        section = completed_section(Implementation.FULLY_IMPLEMENTED, Implementation.FULLY_IMPLEMENTED)

        updated = scoring_service.apply_section_update(
            sample_assessment, FrameworkFunction.GOVERN, section, now=NOW
        )

        assert updated.framework.govern == section
        assert updated.framework.map == sample_assessment.framework.map
        # 100, 100 and 0
        assert updated.overall_risk_score == 67
        assert updated.updated_at == NOW

    def test_input_not_modified(self, scoring_service, sample_assessment):
        before = sample_assessment.model_copy(deep=True)

        scoring_service.apply_section_update(
            sample_assessment, "manage", completed_section(Implementation.NOT_STARTED)
        )

        assert sample_assessment == before

    def test_idempotent(self, scoring_service, sample_assessment):
        section = completed_section(Implementation.SUBSTANTIALLY_IMPLEMENTED)

        once = scoring_service.apply_section_update(sample_assessment, "measure", section, now=NOW)
        twice = scoring_service.apply_section_update(once, "measure", section, now=NOW)

        assert once == twice

    def test_status_unchanged_until_complete(self, scoring_service, sample_assessment):
        updated = scoring_service.apply_section_update(
            sample_assessment, "measure", completed_section(Implementation.FULLY_IMPLEMENTED)
        )

        assert updated.overall_status == OverallStatus.NOT_STARTED
        assert updated.completed_at is None

    def test_completion_promotes_status(self, scoring_service):
        assessment = make_assessment(
            "a-1",
            framework=Framework(
                govern=completed_section(Implementation.FULLY_IMPLEMENTED),
                map=completed_section(Implementation.FULLY_IMPLEMENTED),
                measure=completed_section(Implementation.FULLY_IMPLEMENTED),
            ),
        )

        updated = scoring_service.apply_section_update(
            assessment, "manage", completed_section(Implementation.PARTIALLY_IMPLEMENTED), now=NOW
        )

        assert updated.overall_status == OverallStatus.COMPLETED
        assert updated.completed_at == NOW
        assert updated.overall_risk_score == 81

    def test_no_automatic_revert(self, scoring_service):
        assessment = make_assessment("a-1", status=OverallStatus.COMPLETED)

        updated = scoring_service.apply_section_update(
            assessment, "govern", FrameworkSection(completed=False)
        )

        assert updated.overall_status == OverallStatus.COMPLETED


# =============================================================================
# Risk Register Tests
# =============================================================================


class TestRiskRegister:
    """Tests for risk register extraction."""

    def test_excludes_fully_implemented(self, scoring_service, sample_populated):
        rows = scoring_service.risk_register([sample_populated])

        assert [r.subcategory_id for r in rows] == ["GV-1.2", "MP-1.1"]

    def test_row_fields(self, scoring_service, sample_populated):
        row = scoring_service.risk_register([sample_populated])[0]

        assert row.assessment_title == "Credit Model Review"
        assert row.ai_system_name == "CreditScorer"
        assert row.framework_section == "GOVERN"
        assert row.current_implementation == Implementation.PARTIALLY_IMPLEMENTED
        assert row.risk_level == "High"
        assert row.assessor == "Jane Doe"
        assert row.notes == "Policy draft awaiting legal review."

    def test_risk_levels(self, scoring_service):
        assert scoring_service.risk_level(Implementation.NOT_STARTED) == "Critical"
        assert scoring_service.risk_level(Implementation.PARTIALLY_IMPLEMENTED) == "High"
        assert scoring_service.risk_level(Implementation.SUBSTANTIALLY_IMPLEMENTED) == "Medium"
        assert scoring_service.risk_level(Implementation.FULLY_IMPLEMENTED) == "Low"
        assert scoring_service.risk_level("under-review") == "Unknown"

    def test_empty_input(self, scoring_service):
        assert scoring_service.risk_register([]) == []


# =============================================================================
# Dashboard Tests
# =============================================================================


class TestDashboard:
    """Tests for organization dashboard aggregates."""

    def test_empty_organization(self, scoring_service):
        data = scoring_service.dashboard([], now=NOW)

        assert data.overview_stats.total_assessments == 0
        assert data.overview_stats.avg_compliance_score == 0
        assert data.recent_assessments == []
        assert all(v == 0 for v in data.compliance_by_framework.values())
        assert len(data.risk_trends) == 6
        assert all(p.score is None for p in data.risk_trends)

    def test_overview_stats(self, scoring_service):
        assessments = [
            make_assessment("a-1", score=59, status=OverallStatus.COMPLETED),
            make_assessment("a-2", score=60),
            make_assessment("a-3", score=90, status=OverallStatus.COMPLETED),
        ]

        stats = scoring_service.dashboard(assessments, now=NOW).overview_stats

        assert stats.total_assessments == 3
        assert stats.completed_assessments == 2
        assert stats.high_risk_items == 1
        # (59 + 60 + 90) / 3 = 69.67
        assert stats.avg_compliance_score == 70

    def test_recent_assessments_ordered_and_limited(self, scoring_service):
        assessments = [
            make_assessment(f"a-{i}", updated_at=NOW - timedelta(days=i)) for i in range(7)
        ]

        recent = scoring_service.dashboard(assessments, now=NOW).recent_assessments

        assert [r.title for r in recent] == [f"Assessment a-{i}" for i in range(5)]

    def test_compliance_by_framework_skips_empty_sections(self, scoring_service, sample_framework):
        assessments = [
            make_assessment("a-1", framework=sample_framework),
            make_assessment(
                "a-2",
                framework=Framework(map=completed_section(Implementation.FULLY_IMPLEMENTED)),
            ),
        ]

        result = scoring_service.compliance_by_framework(assessments)

        # govern only has data in a-1: mean(100, 25) = 62.5
        assert result[FrameworkFunction.GOVERN] == 63
        # map: a-1 scores 0, a-2 scores 100
        assert result[FrameworkFunction.MAP] == 50
        assert result[FrameworkFunction.MEASURE] == 0
        assert result[FrameworkFunction.MANAGE] == 0


# =============================================================================
# Trend Tests
# =============================================================================


class TestRiskTrends:
    """Tests for monthly trend series built from score snapshots."""

    @staticmethod
    def snapshot(assessment_id: str, score: int, recorded_at: datetime) -> ScoreSnapshot:
        return ScoreSnapshot(
            assessment_id=assessment_id,
            organization_id=ORG_ID,
            score=score,
            recorded_at=recorded_at,
        )

    def test_month_labels(self, scoring_service):
        trends = scoring_service.risk_trends([], now=NOW)

        assert [p.date for p in trends] == [
            "2025-10",
            "2025-11",
            "2025-12",
            "2026-01",
            "2026-02",
            "2026-03",
        ]

    def test_latest_snapshot_per_assessment(self, scoring_service):
        snapshots = [
            self.snapshot("a-1", 40, datetime(2026, 3, 2, tzinfo=UTC)),
            self.snapshot("a-1", 60, datetime(2026, 3, 10, tzinfo=UTC)),
            self.snapshot("a-2", 81, datetime(2026, 3, 5, tzinfo=UTC)),
            self.snapshot("a-1", 30, datetime(2026, 1, 20, tzinfo=UTC)),
        ]

        trends = {p.date: p.score for p in scoring_service.risk_trends(snapshots, now=NOW)}

        # (60 + 81) / 2 = 70.5
        assert trends["2026-03"] == 71
        assert trends["2026-02"] is None
        assert trends["2026-01"] == 30

    def test_deterministic(self, scoring_service):
        snapshots = [self.snapshot("a-1", 55, datetime(2025, 12, 1, tzinfo=UTC))]

        first = scoring_service.risk_trends(snapshots, now=NOW)
        second = scoring_service.risk_trends(snapshots, now=NOW)

        assert first == second

    def test_window_length_configurable(self):
        service = ScoringService(ScoringConfig(trend_months=12))

        trends = service.risk_trends([], now=NOW)

        assert len(trends) == 12
        assert trends[0].date == "2025-04"
