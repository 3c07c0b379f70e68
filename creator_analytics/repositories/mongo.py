"""
MongoDB implementations of the read-only repositories.

Documents keep their identifier in ``_id``; it is exposed as ``id`` on the
models. All queries are reads.
"""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional
from motor.motor_asyncio import AsyncIOMotorDatabase

from creator_analytics.core.config import settings
from creator_analytics.core.database import get_database
from creator_analytics.models.content import (
    ContentItem, Creator, FollowerSnapshot, PerformanceSnapshot
)
from creator_analytics.repositories.base import (
    ContentRepository, CreatorRepository, PerformanceRepository
)

logger = logging.getLogger(__name__)


def _with_id(document: Dict[str, Any]) -> Dict[str, Any]:
    """Copy a document, exposing ``_id`` as a string ``id``."""
    data = dict(document)
    if "_id" in data:
        data["id"] = str(data.pop("_id"))
    return data


class MongoRepository:
    """Shared database handle for the Mongo repositories."""

    def __init__(self, database: AsyncIOMotorDatabase = None):
        self.database = database if database is not None else get_database()


class MongoContentRepository(MongoRepository, ContentRepository):
    """Content items stored in the content collection."""

    @property
    def collection(self):
        return self.database[settings.CONTENT_COLLECTION]

    async def get_by_id(self, content_id: str) -> Optional[ContentItem]:
        document = await self.collection.find_one({"_id": content_id})
        if document is None:
            return None
        return ContentItem(**_with_id(document))

    async def get_by_creator(self, creator_id: str) -> List[ContentItem]:
        cursor = self.collection.find({"creator_id": creator_id})
        documents = await cursor.to_list(length=None)
        logger.debug(f"Loaded {len(documents)} content items for creator {creator_id}")
        return [ContentItem(**_with_id(doc)) for doc in documents]

    async def get_by_creator_between_dates(
        self,
        creator_id: str,
        start: datetime,
        end: datetime
    ) -> List[ContentItem]:
        cursor = self.collection.find({
            "creator_id": creator_id,
            "created_at": {"$gte": start, "$lte": end},
        })
        documents = await cursor.to_list(length=None)
        return [ContentItem(**_with_id(doc)) for doc in documents]


class MongoPerformanceRepository(MongoRepository, PerformanceRepository):
    """Performance snapshots stored in the performance collection."""

    @property
    def collection(self):
        return self.database[settings.PERFORMANCE_COLLECTION]

    async def get_by_content_id(self, content_id: str) -> List[PerformanceSnapshot]:
        cursor = self.collection.find({"content_id": content_id})
        documents = await cursor.to_list(length=None)
        return [PerformanceSnapshot(**_with_id(doc)) for doc in documents]


class MongoCreatorRepository(MongoRepository, CreatorRepository):
    """Creator profiles and their follower history."""

    @property
    def collection(self):
        return self.database[settings.CREATOR_COLLECTION]

    @property
    def follower_collection(self):
        return self.database[settings.FOLLOWER_COLLECTION]

    async def get_by_id(self, creator_id: str) -> Optional[Creator]:
        document = await self.collection.find_one({"_id": creator_id})
        if document is None:
            return None
        return Creator(**_with_id(document))

    async def get_follower_history(
        self,
        creator_id: str,
        start: datetime,
        end: datetime
    ) -> List[FollowerSnapshot]:
        cursor = self.follower_collection.find(
            {"creator_id": creator_id, "date": {"$gte": start, "$lte": end}},
            {"_id": 0},
        ).sort("date", 1)
        documents = await cursor.to_list(length=None)
        return [FollowerSnapshot(**doc) for doc in documents]
