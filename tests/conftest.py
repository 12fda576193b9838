"""
Test Configuration
==================

Pytest fixtures for RMF assessment tests.
"""

import os
from collections.abc import AsyncGenerator
from datetime import UTC, datetime
from typing import Any

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# Set test environment
os.environ["ENVIRONMENT"] = "testing"
os.environ["SEED_TEMPLATES"] = "false"

from services.rmf_assessment.models import (  # noqa: E402
    AISystem,
    Assessment,
    Assessor,
    Framework,
    FrameworkSection,
    Implementation,
    Organization,
    PopulatedAssessment,
    QuestionAnswer,
    SubcategoryRecord,
)


ORG_ID = "org-001"
ASSESSOR_ID = "user-001"
NOW = datetime(2026, 3, 15, 12, 0, tzinfo=UTC)


@pytest.fixture(scope="session")
def anyio_backend() -> str:
    """Use asyncio backend for async tests."""
    return "asyncio"


@pytest_asyncio.fixture
async def rmf_assessment_client() -> AsyncGenerator[AsyncClient, None]:
    """Create test client for the RMF Assessment Service."""
    from services.rmf_assessment.main import app

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client


def make_record(
    subcategory_id: str,
    implementation: Implementation,
    notes: str = "",
    last_reviewed: datetime | None = NOW,
) -> SubcategoryRecord:
    """Subcategory record with a fixed outcome text."""
    return SubcategoryRecord(
        subcategory_id=subcategory_id,
        outcome=f"Outcome for {subcategory_id}",
        implementation=implementation,
        responses=[QuestionAnswer(question_id=f"{subcategory_id}-Q1", response="yes")],
        notes=notes,
        last_reviewed=last_reviewed,
    )


@pytest.fixture
def sample_framework() -> Framework:
    """Framework with data in govern and map only."""
    return Framework(
        govern=FrameworkSection(
            completed=True,
            subcategories=[
                make_record("GV-1.1", Implementation.FULLY_IMPLEMENTED),
                make_record(
                    "GV-1.2",
                    Implementation.PARTIALLY_IMPLEMENTED,
                    notes="Policy draft awaiting legal review.",
                ),
            ],
        ),
        map=FrameworkSection(
            completed=False,
            subcategories=[make_record("MP-1.1", Implementation.NOT_STARTED, last_reviewed=None)],
        ),
    )


@pytest.fixture
def sample_assessment(sample_framework: Framework) -> Assessment:
    """Assessment owned by ORG_ID."""
    return Assessment(
        id="assess-001",
        title="Credit Model Review",
        description="Annual review of the credit scoring model",
        organization_id=ORG_ID,
        ai_system=AISystem(name="CreditScorer", purpose="Loan decisions"),
        framework=sample_framework,
        overall_risk_score=42,
        assessor_id=ASSESSOR_ID,
        created_at=datetime(2026, 1, 5, 9, 0, tzinfo=UTC),
        updated_at=NOW,
    )


@pytest.fixture
def sample_organization() -> Organization:
    return Organization(id=ORG_ID, name="Acme Lending", industry="Finance", size="large")


@pytest.fixture
def sample_assessor() -> Assessor:
    return Assessor(id=ASSESSOR_ID, first_name="Jane", last_name="Doe", email="jane@acme.test")


@pytest.fixture
def sample_populated(
    sample_assessment: Assessment,
    sample_organization: Organization,
    sample_assessor: Assessor,
) -> PopulatedAssessment:
    return PopulatedAssessment(
        assessment=sample_assessment,
        organization=sample_organization,
        assessor=sample_assessor,
    )


@pytest.fixture
def auth_headers() -> dict[str, str]:
    """Generate test authentication headers."""
    from shared.auth import create_access_token

    token = create_access_token({
        "sub": ASSESSOR_ID,
        "email": "jane@acme.test",
        "organization_id": ORG_ID,
        "roles": ["assessor"],
    })
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def sample_template_doc() -> dict[str, Any]:
    """Stored risk template document."""
    return {
        "_id": "tmpl-1",
        "frameworkFunction": "govern",
        "category": "GOVERN 1",
        "subcategoryId": "GV-1.1",
        "outcome": "Legal and regulatory requirements involving AI are understood.",
        "questions": [
            {"id": "GV-1.1-Q1", "text": "Inventory exists?", "type": "yes-no", "required": True},
            {"id": "GV-1.1-Q2", "text": "Maturity?", "type": "scale", "required": True},
            {"id": "GV-1.1-Q3", "text": "Evidence", "type": "file-upload", "required": False},
        ],
        "isActive": True,
    }
