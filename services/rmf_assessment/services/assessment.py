"""
Assessment Workflow Service
===========================

Creates, lists, edits and deletes assessments for an organization and
applies questionnaire submissions to them.

Section update workflow:
1. Load the assessment (scoped to the caller's organization)
2. Look up the catalog templates of the submitted function
3. Derive each subcategory record through the response aggregator
4. Replace the section and rescore through the scoring engine
5. Persist and record a score snapshot for trend reporting

Version: 0.1.0
"""

import math
import uuid
from collections.abc import Sequence
from datetime import UTC, datetime, timedelta
from typing import Any

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import DESCENDING, ReturnDocument

from services.rmf_assessment.errors import NotFoundError, ValidationError
from services.rmf_assessment.models.api import (
    AssessmentCreate,
    AssessmentList,
    AssessmentUpdate,
    Pagination,
    SectionData,
)
from services.rmf_assessment.models.assessment import (
    Assessment,
    Assessor,
    OverallStatus,
    FrameworkSection,
    Organization,
    PopulatedAssessment,
)
from services.rmf_assessment.models.history import ScoreSnapshot
from services.rmf_assessment.models.template import FrameworkFunction, RiskTemplate
from services.rmf_assessment.services.aggregator import build_subcategory_record
from services.rmf_assessment.services.catalog import TemplateCatalogService
from services.rmf_assessment.services.scoring import ScoringService
from shared.logging import get_logger


logger = get_logger(__name__)


def build_section(
    templates: dict[str, RiskTemplate],
    data: SectionData,
    now: datetime,
) -> FrameworkSection:
    """
    Derive a framework section from wizard submissions.

    Raises:
        ValidationError: Unknown subcategory, missing required answer or an
            empty answer set.
    """
    records = []
    for submission in data.subcategories:
        template = templates.get(submission.subcategory_id)
        if template is None:
            raise ValidationError(
                f"Unknown subcategory for this section: {submission.subcategory_id}",
                field="subcategoryId",
            )
        records.append(
            build_subcategory_record(
                template,
                submission.responses,
                notes=submission.notes,
                now=now,
            )
        )
    return FrameworkSection(completed=data.completed, subcategories=records)


class AssessmentService:
    """
    Service for loading and updating NIST AI RMF assessments.

    Handles:
    - Assessment lifecycle (create, paginated listing, metadata edits, delete)
    - Organization-scoped lookups
    - Population of organization and assessor for reports
    - Framework section updates with rescoring
    - Score snapshot history
    """

    def __init__(
        self,
        scoring: ScoringService | None = None,
        catalog: TemplateCatalogService | None = None,
    ) -> None:
        self.scoring = scoring or ScoringService()
        self.catalog = catalog or TemplateCatalogService()

    # -------------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------------

    async def get_assessment(
        self,
        db: AsyncIOMotorDatabase,  # type: ignore[type-arg]
        organization_id: str,
        assessment_id: str,
    ) -> Assessment:
        """
        Raises:
            NotFoundError: Absent, or owned by another organization.
        """
        doc = await db.assessments.find_one(
            {"_id": assessment_id, "organizationId": organization_id}
        )
        if doc is None:
            raise NotFoundError("Assessment", assessment_id)
        return Assessment.model_validate(doc)

    async def list_assessments(
        self,
        db: AsyncIOMotorDatabase,  # type: ignore[type-arg]
        organization_id: str,
    ) -> list[Assessment]:
        cursor = db.assessments.find({"organizationId": organization_id})
        docs: list[dict[str, Any]] = await cursor.to_list(None)
        return [Assessment.model_validate(doc) for doc in docs]

    async def _organization(
        self,
        db: AsyncIOMotorDatabase,  # type: ignore[type-arg]
        organization_id: str,
    ) -> Organization:
        doc = await db.organizations.find_one({"_id": organization_id})
        if doc is None:
            raise NotFoundError("Organization", organization_id)
        return Organization.model_validate(doc)

    async def _assessors(
        self,
        db: AsyncIOMotorDatabase,  # type: ignore[type-arg]
        assessor_ids: Sequence[str],
    ) -> dict[str, Assessor]:
        cursor = db.users.find(
            {"_id": {"$in": list(set(assessor_ids))}},
            {"firstName": 1, "lastName": 1, "email": 1},
        )
        docs: list[dict[str, Any]] = await cursor.to_list(None)
        assessors = {str(doc["_id"]): Assessor.model_validate(doc) for doc in docs}

        for assessor_id in assessor_ids:
            if assessor_id not in assessors:
                logger.warning("assessor_missing", assessor_id=assessor_id)
                assessors[assessor_id] = Assessor(id=assessor_id)
        return assessors

    async def get_populated(
        self,
        db: AsyncIOMotorDatabase,  # type: ignore[type-arg]
        organization_id: str,
        assessment_id: str,
    ) -> PopulatedAssessment:
        """Assessment with its organization and assessor loaded."""
        assessment = await self.get_assessment(db, organization_id, assessment_id)
        organization = await self._organization(db, organization_id)
        assessors = await self._assessors(db, [assessment.assessor_id])

        return PopulatedAssessment(
            assessment=assessment,
            organization=organization,
            assessor=assessors[assessment.assessor_id],
        )

    async def list_populated(
        self,
        db: AsyncIOMotorDatabase,  # type: ignore[type-arg]
        organization_id: str,
    ) -> list[PopulatedAssessment]:
        """All assessments of an organization, populated."""
        assessments = await self.list_assessments(db, organization_id)
        if not assessments:
            return []

        organization = await self._organization(db, organization_id)
        assessors = await self._assessors(db, [a.assessor_id for a in assessments])

        return [
            PopulatedAssessment(
                assessment=a,
                organization=organization,
                assessor=assessors[a.assessor_id],
            )
            for a in assessments
        ]

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    async def create_assessment(
        self,
        db: AsyncIOMotorDatabase,  # type: ignore[type-arg]
        user_id: str,
        organization_id: str,
        data: AssessmentCreate,
    ) -> Assessment:
        """
        Create an assessment with an empty framework and score 0.

        The creating user is the assessor unless another one is named.
        """
        now = datetime.now(UTC)
        assessment = Assessment(
            id=str(uuid.uuid4()),
            title=data.title,
            description=data.description,
            organization_id=organization_id,
            ai_system=data.ai_system,
            assessor_id=data.assessor_id or user_id,
            due_date=data.due_date,
            created_at=now,
            updated_at=now,
        )
        await db.assessments.insert_one(assessment.to_document())

        logger.info(
            "assessment_created",
            assessment_id=assessment.id,
            organization_id=organization_id,
            user_id=user_id,
        )
        return assessment

    async def list_assessments_page(
        self,
        db: AsyncIOMotorDatabase,  # type: ignore[type-arg]
        organization_id: str,
        status: OverallStatus | None = None,
        page: int = 1,
        limit: int = 10,
    ) -> AssessmentList:
        """One page of assessments, newest first, optionally filtered by status."""
        query: dict[str, Any] = {"organizationId": organization_id}
        if status is not None:
            query["overallStatus"] = status.value

        total = await db.assessments.count_documents(query)
        cursor = (
            db.assessments.find(query)
            .sort("createdAt", DESCENDING)
            .skip((page - 1) * limit)
            .limit(limit)
        )
        docs: list[dict[str, Any]] = await cursor.to_list(None)

        return AssessmentList(
            assessments=[Assessment.model_validate(doc) for doc in docs],
            pagination=Pagination(
                current_page=page,
                total_pages=math.ceil(total / limit),
                total_items=total,
                items_per_page=limit,
            ),
        )

    async def update_assessment(
        self,
        db: AsyncIOMotorDatabase,  # type: ignore[type-arg]
        organization_id: str,
        assessment_id: str,
        data: AssessmentUpdate,
    ) -> Assessment:
        """
        Change assessment metadata. Only the fields present in `data` are set.

        Raises:
            NotFoundError: Absent, or owned by another organization.
        """
        fields = data.model_dump(by_alias=True, exclude_unset=True)
        fields["updatedAt"] = datetime.now(UTC)

        doc = await db.assessments.find_one_and_update(
            {"_id": assessment_id, "organizationId": organization_id},
            {"$set": fields},
            return_document=ReturnDocument.AFTER,
        )
        if doc is None:
            raise NotFoundError("Assessment", assessment_id)

        logger.info(
            "assessment_updated",
            assessment_id=assessment_id,
            fields=sorted(fields),
        )
        return Assessment.model_validate(doc)

    async def delete_assessment(
        self,
        db: AsyncIOMotorDatabase,  # type: ignore[type-arg]
        organization_id: str,
        assessment_id: str,
    ) -> None:
        """
        Delete an assessment together with its score history.

        Raises:
            NotFoundError: Absent, or owned by another organization.
        """
        result = await db.assessments.delete_one(
            {"_id": assessment_id, "organizationId": organization_id}
        )
        if result.deleted_count == 0:
            raise NotFoundError("Assessment", assessment_id)

        await db.score_history.delete_many({"assessmentId": assessment_id})
        logger.info("assessment_deleted", assessment_id=assessment_id)

    # -------------------------------------------------------------------------
    # Section updates
    # -------------------------------------------------------------------------

    async def update_framework_section(
        self,
        db: AsyncIOMotorDatabase,  # type: ignore[type-arg]
        organization_id: str,
        assessment_id: str,
        function: FrameworkFunction,
        data: SectionData,
    ) -> Assessment:
        """
        Apply a questionnaire submission to one framework section.

        Returns:
            The updated, rescored assessment.
        """
        now = datetime.now(UTC)
        assessment = await self.get_assessment(db, organization_id, assessment_id)
        templates = await self.catalog.templates_for(db, function)

        section = build_section(templates, data, now)
        updated = self.scoring.apply_section_update(assessment, function, section, now)

        doc = updated.to_document()
        result = await db.assessments.update_one(
            {"_id": assessment_id, "organizationId": organization_id},
            {
                "$set": {
                    f"framework.{function.value}": doc["framework"][function.value],
                    "overallRiskScore": doc["overallRiskScore"],
                    "overallStatus": doc["overallStatus"],
                    "completedAt": doc["completedAt"],
                    "updatedAt": doc["updatedAt"],
                }
            },
        )
        if result.matched_count == 0:
            raise NotFoundError("Assessment", assessment_id)

        await self.record_snapshot(
            db,
            ScoreSnapshot(
                assessment_id=assessment_id,
                organization_id=organization_id,
                score=updated.overall_risk_score,
                previous_score=assessment.overall_risk_score,
                recorded_at=now,
            ),
        )

        logger.info(
            "framework_section_updated",
            assessment_id=assessment_id,
            section=function.value,
            subcategories=len(section.subcategories),
            completed=section.completed,
            overall_risk_score=updated.overall_risk_score,
        )
        return updated

    # -------------------------------------------------------------------------
    # Score history
    # -------------------------------------------------------------------------

    async def record_snapshot(
        self,
        db: AsyncIOMotorDatabase,  # type: ignore[type-arg]
        snapshot: ScoreSnapshot,
    ) -> None:
        await db.score_history.insert_one(snapshot.to_document())

    async def list_snapshots(
        self,
        db: AsyncIOMotorDatabase,  # type: ignore[type-arg]
        organization_id: str,
        months: int,
        now: datetime | None = None,
    ) -> list[ScoreSnapshot]:
        """Snapshots recorded within roughly the last `months` months."""
        now = now or datetime.now(UTC)
        since = now - timedelta(days=31 * months)
        cursor = db.score_history.find(
            {"organizationId": organization_id, "recordedAt": {"$gte": since}}
        )
        docs: list[dict[str, Any]] = await cursor.to_list(None)
        return [ScoreSnapshot.model_validate(doc) for doc in docs]
