"""
Read-only data access interfaces consumed by the analytics engine.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from creator_analytics.models.content import (
    ContentItem, Creator, FollowerSnapshot, PerformanceSnapshot
)


class ContentRepository(ABC):
    """Access to creators' content items."""

    @abstractmethod
    async def get_by_id(self, content_id: str) -> Optional[ContentItem]:
        """Return the content item, or None when it does not exist."""

    @abstractmethod
    async def get_by_creator(self, creator_id: str) -> List[ContentItem]:
        """Return every content item of a creator."""

    @abstractmethod
    async def get_by_creator_between_dates(
        self,
        creator_id: str,
        start: datetime,
        end: datetime
    ) -> List[ContentItem]:
        """Return the creator's items created within ``[start, end]``."""


class PerformanceRepository(ABC):
    """Access to performance snapshots."""

    @abstractmethod
    async def get_by_content_id(self, content_id: str) -> List[PerformanceSnapshot]:
        """Return every snapshot of a content item, in no guaranteed order."""


class CreatorRepository(ABC):
    """Access to creator profiles and follower history."""

    @abstractmethod
    async def get_by_id(self, creator_id: str) -> Optional[Creator]:
        """Return the creator, or None when it does not exist."""

    @abstractmethod
    async def get_follower_history(
        self,
        creator_id: str,
        start: datetime,
        end: datetime
    ) -> List[FollowerSnapshot]:
        """Return follower observations of the creator within ``[start, end]``."""
