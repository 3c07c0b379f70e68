"""
Database connection and management for Creator Analytics.

This module handles MongoDB connection using Motor async driver
and provides database access for the read-only repositories.
"""

import logging
from typing import Optional
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from creator_analytics.core.config import settings

logger = logging.getLogger(__name__)


class Database:
    """Database connection manager."""

    client: Optional[AsyncIOMotorClient] = None
    database: Optional[AsyncIOMotorDatabase] = None


db = Database()


async def connect_to_mongo():
    """Create database connection."""
    try:
        logger.info("Connecting to MongoDB...")
        db.client = AsyncIOMotorClient(settings.MONGODB_URL)
        db.database = db.client[settings.MONGODB_DATABASE]

        # Test the connection
        await db.client.admin.command('ping')
        logger.info(f"Successfully connected to MongoDB database: {settings.MONGODB_DATABASE}")

    except Exception as e:
        logger.error(f"Failed to connect to MongoDB: {e}")
        raise


async def close_mongo_connection():
    """Close database connection."""
    if db.client:
        logger.info("Closing MongoDB connection...")
        db.client.close()
        db.client = None
        db.database = None
        logger.info("MongoDB connection closed")


def get_database() -> AsyncIOMotorDatabase:
    """Get database instance."""
    if db.database is None:
        raise RuntimeError("Database not initialized. Call connect_to_mongo() first.")
    return db.database


async def create_indexes():
    """Create the indexes the analytics queries rely on."""
    database = get_database()

    # Content items: lookups by creator, optionally bounded by creation date
    content = database[settings.CONTENT_COLLECTION]
    await content.create_index("creator_id")
    await content.create_index([("creator_id", 1), ("created_at", 1)])

    # Performance snapshots: time series per content item
    performance = database[settings.PERFORMANCE_COLLECTION]
    await performance.create_index([("content_id", 1), ("date", 1)])

    # Follower history per creator
    followers = database[settings.FOLLOWER_COLLECTION]
    await followers.create_index([("creator_id", 1), ("date", 1)])

    logger.info("Database indexes created successfully")
