"""
Pytest configuration and fixtures for Creator Analytics tests.

This module provides builders for content items, performance snapshots
and joined views, and an engine wired to mocked repositories.
"""

import itertools
from datetime import datetime
from typing import Optional
from unittest.mock import AsyncMock, MagicMock

import pytest

from creator_analytics.analytics.engine import ContentAnalyticsEngine
from creator_analytics.core.logging import LoggingService
from creator_analytics.models.base import Platform
from creator_analytics.models.content import (
    ContentItem, Creator, JoinedContentView, PerformanceSnapshot
)
from creator_analytics.repositories.base import (
    ContentRepository, CreatorRepository, PerformanceRepository
)

# Monday
BASE_DATE = datetime(2024, 1, 1, 12, 0)


@pytest.fixture
def make_item():
    """Factory for content items with sensible defaults."""
    counter = itertools.count(1)

    def _make_item(
        id: Optional[str] = None,
        creator_id: str = "creator-1",
        title: str = "Sample post",
        body: str = "Sample body",
        platform: Platform = Platform.YOUTUBE,
        media_url: Optional[str] = None,
        created_at: datetime = BASE_DATE,
        published_at: Optional[datetime] = None
    ) -> ContentItem:
        return ContentItem(
            id=id or f"content-{next(counter)}",
            creator_id=creator_id,
            title=title,
            body=body,
            platform=platform,
            media_url=media_url,
            created_at=created_at,
            published_at=published_at,
        )

    return _make_item


@pytest.fixture
def make_snapshot():
    """Factory for performance snapshots."""
    counter = itertools.count(1)

    def _make_snapshot(
        content_id: str = "content-1",
        views: int = 1000,
        likes: int = 0,
        comments: int = 0,
        shares: int = 0,
        date: datetime = BASE_DATE,
        platform: Platform = Platform.YOUTUBE,
        estimated_revenue: float = 0.0
    ) -> PerformanceSnapshot:
        return PerformanceSnapshot(
            id=f"snapshot-{next(counter)}",
            content_id=content_id,
            platform=platform,
            date=date,
            views=views,
            likes=likes,
            comments=comments,
            shares=shares,
            estimated_revenue=estimated_revenue,
        )

    return _make_snapshot


@pytest.fixture
def make_view(make_item, make_snapshot):
    """
    Factory for a joined view with a single snapshot.

    ``rate`` is the engagement rate of the snapshot, expressed as likes
    over 1000 views.
    """

    def _make_view(rate: float = 0.05, views: int = 1000, **item_fields) -> JoinedContentView:
        item = make_item(**item_fields)
        snapshot = make_snapshot(
            content_id=item.id,
            views=views,
            likes=int(round(rate * views)),
            platform=item.platform,
            date=item.published_at or item.created_at,
        )
        return JoinedContentView(content=item, snapshots=[snapshot])

    return _make_view


@pytest.fixture
def creator():
    """Sample creator profile."""
    return Creator(id="creator-1", name="Test Creator", total_followers=12000)


@pytest.fixture
def content_repository():
    repository = AsyncMock(spec=ContentRepository)
    repository.get_by_creator.return_value = []
    repository.get_by_creator_between_dates.return_value = []
    return repository


@pytest.fixture
def performance_repository():
    repository = AsyncMock(spec=PerformanceRepository)
    repository.get_by_content_id.return_value = []
    return repository


@pytest.fixture
def creator_repository(creator):
    repository = AsyncMock(spec=CreatorRepository)
    repository.get_by_id.return_value = creator
    repository.get_follower_history.return_value = []
    return repository


@pytest.fixture
def logging_service():
    return MagicMock(spec=LoggingService)


@pytest.fixture
def engine(content_repository, performance_repository, creator_repository, logging_service):
    """Create a Content Analytics Engine wired to mocked collaborators."""
    return ContentAnalyticsEngine(
        content_repository=content_repository,
        performance_repository=performance_repository,
        creator_repository=creator_repository,
        logging_service=logging_service,
    )
