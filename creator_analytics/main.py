"""
Creator Analytics - engine lifecycle

This module wires logging, the MongoDB connection and the Mongo
repositories into a ready ContentAnalyticsEngine.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator

from motor.motor_asyncio import AsyncIOMotorDatabase

from creator_analytics.analytics.engine import ContentAnalyticsEngine
from creator_analytics.core.config import settings
from creator_analytics.core.database import (
    close_mongo_connection, connect_to_mongo, create_indexes, get_database
)
from creator_analytics.core.logging import LoggingService, get_logger, setup_logging
from creator_analytics.repositories.mongo import (
    MongoContentRepository, MongoCreatorRepository, MongoPerformanceRepository
)

logger = get_logger(__name__)


def create_engine(database: AsyncIOMotorDatabase) -> ContentAnalyticsEngine:
    """Create an engine reading from the given database."""
    return ContentAnalyticsEngine(
        content_repository=MongoContentRepository(database),
        performance_repository=MongoPerformanceRepository(database),
        creator_repository=MongoCreatorRepository(database),
        logging_service=LoggingService(),
    )


@asynccontextmanager
async def lifespan() -> AsyncIterator[ContentAnalyticsEngine]:
    """Engine lifespan manager for startup and shutdown."""
    # Startup
    setup_logging()
    await connect_to_mongo()

    try:
        await create_indexes()
        logger.info("Analytics engine ready", database=settings.MONGODB_DATABASE)
        yield create_engine(get_database())
    finally:
        # Shutdown
        await close_mongo_connection()
