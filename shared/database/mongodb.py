"""
MongoDB Client
==============

Async MongoDB client using Motor for assessment and catalog documents.

Version: 0.1.0
"""

import time
from typing import Any

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo import ASCENDING, DESCENDING

from shared.config import settings
from shared.logging import get_logger

logger = get_logger(__name__)


class MongoDBClient:
    """
    Async MongoDB client wrapper.

    Manages client lifecycle and provides database access.
    """

    _client: AsyncIOMotorClient | None = None  # type: ignore[type-arg]

    @classmethod
    def get_client(cls) -> AsyncIOMotorClient:  # type: ignore[type-arg]
        """Get or create the async client."""
        if cls._client is None:
            cls._client = AsyncIOMotorClient(
                settings.mongodb.uri,
                maxPoolSize=50,
                minPoolSize=5,
                serverSelectionTimeoutMS=5000,
                connectTimeoutMS=5000,
                tz_aware=True,
            )
            logger.info(
                "mongodb_client_created",
                host=settings.mongodb.host,
                database=settings.mongodb.db,
            )
        return cls._client

    @classmethod
    def get_database(cls, name: str | None = None) -> AsyncIOMotorDatabase:  # type: ignore[type-arg]
        """
        Get a database instance.

        Args:
            name: Database name (default from settings)
        """
        client = cls.get_client()
        return client[name or settings.mongodb.db]

    @classmethod
    async def close(cls) -> None:
        """Close the client and release all connections."""
        if cls._client is not None:
            cls._client.close()
            cls._client = None
            logger.info("mongodb_client_closed")

    @classmethod
    async def health_check(cls) -> dict[str, Any]:
        """
        Check database health.

        Returns:
            dict with status and latency
        """
        try:
            start = time.perf_counter()
            result = await cls.get_client().admin.command("ping")
            latency_ms = (time.perf_counter() - start) * 1000

            return {
                "status": "healthy" if result.get("ok") == 1 else "unhealthy",
                "latency_ms": round(latency_ms, 2),
                "database": settings.mongodb.db,
            }
        except Exception as e:
            logger.error("mongodb_health_check_failed", error=str(e))
            return {
                "status": "unhealthy",
                "error": str(e),
            }

    @classmethod
    async def create_indexes(cls) -> None:
        """Create indexes for all collections."""
        db = cls.get_database()

        await db.risk_templates.create_index("subcategoryId", unique=True)
        await db.risk_templates.create_index(
            [("frameworkFunction", ASCENDING), ("category", ASCENDING), ("subcategoryId", ASCENDING)]
        )

        await db.assessments.create_index("organizationId")
        await db.assessments.create_index([("organizationId", ASCENDING), ("updatedAt", DESCENDING)])
        await db.assessments.create_index([("organizationId", ASCENDING), ("createdAt", DESCENDING)])

        await db.score_history.create_index(
            [("organizationId", ASCENDING), ("recordedAt", ASCENDING)]
        )
        await db.score_history.create_index("assessmentId")

        logger.info("mongodb_indexes_created")


async def get_mongodb() -> AsyncIOMotorDatabase:  # type: ignore[type-arg]
    """
    Dependency that provides the MongoDB database.

    Usage:
        @router.get("/templates")
        async def templates(db: AsyncIOMotorDatabase = Depends(get_mongodb)):
            cursor = db.risk_templates.find({"isActive": True})
            return await cursor.to_list(None)
    """
    return MongoDBClient.get_database()
