"""
Database Module
===============

Async MongoDB access for the RMF assessment service.

Usage:
    from shared.database import get_mongodb

    @app.get("/example")
    async def example(db: AsyncIOMotorDatabase = Depends(get_mongodb)):
        return await db.assessments.find_one({"_id": assessment_id})
"""

from shared.database.mongodb import (
    MongoDBClient,
    get_mongodb,
)


__all__ = [
    "get_mongodb",
    "MongoDBClient",
]
