"""
Questionnaire Template Store
============================

Read access to the NIST AI RMF questionnaire catalog, plus the one-time
seed that loads the bundled catalog into an empty store.

Version: 0.1.0
"""

from collections.abc import Sequence
from typing import Any

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ASCENDING

from services.rmf_assessment.data import NIST_AI_RMF_TEMPLATES
from services.rmf_assessment.errors import ValidationError
from services.rmf_assessment.models.template import FrameworkFunction, RiskTemplate
from shared.logging import get_logger


logger = get_logger(__name__)

TEMPLATE_SORT = [
    ("frameworkFunction", ASCENDING),
    ("category", ASCENDING),
    ("subcategoryId", ASCENDING),
]


def group_by_function(
    templates: Sequence[RiskTemplate],
) -> dict[FrameworkFunction, list[RiskTemplate]]:
    """
    Group templates by framework function.

    Templates are ordered by (function, category, subcategory id); only
    functions with at least one template appear.
    """
    grouped: dict[FrameworkFunction, list[RiskTemplate]] = {}
    for template in sorted(templates, key=lambda t: t.sort_key):
        grouped.setdefault(template.framework_function, []).append(template)
    return grouped


def check_unique_ids(templates: Sequence[RiskTemplate]) -> None:
    """
    Raises:
        ValidationError: If two active templates share a subcategory id.
    """
    seen: set[str] = set()
    for template in templates:
        if not template.is_active:
            continue
        if template.subcategory_id in seen:
            raise ValidationError(
                f"Duplicate subcategory id: {template.subcategory_id}",
                field="subcategoryId",
            )
        seen.add(template.subcategory_id)


def bundled_templates() -> list[RiskTemplate]:
    """The catalog shipped with the service."""
    return [RiskTemplate.model_validate(t) for t in NIST_AI_RMF_TEMPLATES]


class TemplateCatalogService:
    """Reads the active questionnaire templates."""

    async def list_active_templates(
        self,
        db: AsyncIOMotorDatabase,  # type: ignore[type-arg]
    ) -> list[RiskTemplate]:
        """Active templates ordered by (function, category, subcategory id)."""
        cursor = db.risk_templates.find({"isActive": True}).sort(TEMPLATE_SORT)
        docs: list[dict[str, Any]] = await cursor.to_list(None)
        return [RiskTemplate.model_validate(doc) for doc in docs]

    async def grouped_templates(
        self,
        db: AsyncIOMotorDatabase,  # type: ignore[type-arg]
    ) -> dict[FrameworkFunction, list[RiskTemplate]]:
        return group_by_function(await self.list_active_templates(db))

    async def templates_for(
        self,
        db: AsyncIOMotorDatabase,  # type: ignore[type-arg]
        function: FrameworkFunction,
    ) -> dict[str, RiskTemplate]:
        """Active templates of one function keyed by subcategory id."""
        cursor = db.risk_templates.find(
            {"isActive": True, "frameworkFunction": function.value}
        ).sort(TEMPLATE_SORT)
        docs: list[dict[str, Any]] = await cursor.to_list(None)
        templates = [RiskTemplate.model_validate(doc) for doc in docs]
        return {t.subcategory_id: t for t in templates}

    async def seed_risk_templates(
        self,
        db: AsyncIOMotorDatabase,  # type: ignore[type-arg]
        templates: Sequence[RiskTemplate] | None = None,
    ) -> int:
        """
        Load the catalog into an empty template store.

        Returns:
            Number of templates inserted (0 when the store was not empty).
        """
        existing = await db.risk_templates.count_documents({})
        if existing > 0:
            logger.info("risk_templates_present", count=existing)
            return 0

        templates = list(templates) if templates is not None else bundled_templates()
        check_unique_ids(templates)

        await db.risk_templates.insert_many(
            [t.model_dump(by_alias=True) for t in templates]
        )
        logger.info("risk_templates_seeded", count=len(templates))
        return len(templates)
