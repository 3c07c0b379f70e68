"""
Content-related data models for Creator Analytics.

This module defines the read-only input entities handed to the engine by
the repositories, and the JoinedContentView built once per invocation.
"""

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field, validator

from creator_analytics.models.base import Platform


class ContentItem(BaseModel):
    """A published or scheduled piece of content owned by a creator."""
    id: str
    creator_id: str
    title: str = ""
    body: str = ""
    platform: Platform
    media_url: Optional[str] = None
    created_at: datetime
    published_at: Optional[datetime] = None

    class Config:
        frozen = True

    @validator("title", "body", pre=True, always=True)
    def coerce_missing_text(cls, v):
        """Title and body may be empty but never None."""
        return v if v is not None else ""

    @property
    def has_media(self) -> bool:
        return bool(self.media_url)


class PerformanceSnapshot(BaseModel):
    """Performance counters observed for one content item at one point in time."""
    id: str
    content_id: str
    platform: Platform
    date: datetime
    views: int = Field(default=0, ge=0)
    likes: int = Field(default=0, ge=0)
    comments: int = Field(default=0, ge=0)
    shares: int = Field(default=0, ge=0)
    estimated_revenue: float = Field(default=0.0, ge=0.0)

    class Config:
        frozen = True

    @property
    def total_engagements(self) -> int:
        return self.likes + self.comments + self.shares


class Creator(BaseModel):
    """Content creator profile, as much of it as the engine needs."""
    id: str
    name: str = ""
    total_followers: int = Field(default=0, ge=0)

    class Config:
        frozen = True


class FollowerSnapshot(BaseModel):
    """Follower count of a creator on one platform at one point in time."""
    creator_id: str
    platform: Platform
    date: datetime
    followers: int = Field(default=0, ge=0)

    class Config:
        frozen = True


class JoinedContentView(BaseModel):
    """A content item paired with its performance snapshots in date order."""
    content: ContentItem
    snapshots: List[PerformanceSnapshot] = Field(default_factory=list)

    class Config:
        frozen = True

    @validator("snapshots")
    def order_by_date(cls, v):
        """Re-establish chronological order regardless of input order."""
        return sorted(v, key=lambda s: s.date)

    @property
    def content_id(self) -> str:
        return self.content.id

    @property
    def has_performance(self) -> bool:
        return len(self.snapshots) > 0

    @property
    def total_views(self) -> int:
        return sum(s.views for s in self.snapshots)

    @property
    def total_likes(self) -> int:
        return sum(s.likes for s in self.snapshots)

    @property
    def total_comments(self) -> int:
        return sum(s.comments for s in self.snapshots)

    @property
    def total_shares(self) -> int:
        return sum(s.shares for s in self.snapshots)
