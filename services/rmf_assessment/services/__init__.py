"""
RMF Assessment Services
=======================

Business logic for questionnaire scoring and assessment workflows.

Services:
- TemplateCatalogService: Questionnaire template store
- Response aggregator: answers -> implementation level
- ScoringService: Section, overall, dashboard and risk register scoring
- AssessmentService: Assessment lifecycle, organization-scoped loading and
  section updates

Version: 0.1.0
"""

from services.rmf_assessment.services.aggregator import (
    average_score,
    build_subcategory_record,
    classify,
    derive_implementation,
    response_points,
    validate_required_answers,
)
from services.rmf_assessment.services.assessment import (
    AssessmentService,
    build_section,
)
from services.rmf_assessment.services.catalog import (
    TemplateCatalogService,
    bundled_templates,
    group_by_function,
)
from services.rmf_assessment.services.scoring import (
    ScoringConfig,
    ScoringService,
    round_half_up,
)


__all__ = [
    # Catalog
    "TemplateCatalogService",
    "bundled_templates",
    "group_by_function",
    # Aggregator
    "average_score",
    "build_subcategory_record",
    "classify",
    "derive_implementation",
    "response_points",
    "validate_required_answers",
    # Scoring
    "ScoringConfig",
    "ScoringService",
    "round_half_up",
    # Assessment
    "AssessmentService",
    "build_section",
]
