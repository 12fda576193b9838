#!/usr/bin/env python3
"""
Database Initialization Script
==============================

Create the MongoDB indexes used by the RMF assessment service and load
the NIST AI RMF questionnaire catalog into an empty template store.

Usage:
    python scripts/init_database.py
    python scripts/init_database.py --indexes-only

Version: 0.1.0
"""

import argparse
import asyncio
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from shared.logging import get_logger, setup_logging

setup_logging(log_level="INFO", json_logs=False, service_name="init-db")
logger = get_logger(__name__)


async def init_mongodb() -> bool:
    """Verify the connection and create indexes."""
    from shared.database import MongoDBClient

    try:
        info = await MongoDBClient.get_client().server_info()
        logger.info("mongodb_connected", version=info["version"])

        await MongoDBClient.create_indexes()
        return True

    except Exception as e:
        logger.error("mongodb_init_failed", error=str(e))
        return False


async def seed_templates() -> bool:
    """Load the bundled questionnaire catalog when the store is empty."""
    from services.rmf_assessment.services import TemplateCatalogService
    from shared.database import MongoDBClient

    try:
        inserted = await TemplateCatalogService().seed_risk_templates(MongoDBClient.get_database())
        logger.info("template_seed_finished", inserted=inserted)
        return True

    except Exception as e:
        logger.error("template_seed_failed", error=str(e))
        return False


async def main(args: argparse.Namespace) -> int:
    """Main initialization function."""
    from shared.database import MongoDBClient

    results = {"indexes": await init_mongodb()}
    if results["indexes"] and not args.indexes_only:
        results["templates"] = await seed_templates()

    await MongoDBClient.close()

    failed = [name for name, ok in results.items() if not ok]
    if failed:
        logger.error("initialization_failed", steps=failed)
        return 1

    logger.info("initialization_complete", steps=list(results))
    return 0


def parse_args() -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Initialize the RMF assessment database",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--indexes-only",
        action="store_true",
        help="Create indexes without seeding the template catalog",
    )
    return parser.parse_args()


if __name__ == "__main__":
    args = parse_args()
    exit_code = asyncio.run(main(args))
    sys.exit(exit_code)
