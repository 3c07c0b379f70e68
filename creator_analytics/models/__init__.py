"""
Data models for Creator Analytics.
"""

from creator_analytics.models.base import (
    ContentType, ErrorCode, OperationResult, Platform, RecommendationCategory
)
from creator_analytics.models.content import (
    ContentItem, Creator, FollowerSnapshot, JoinedContentView, PerformanceSnapshot
)

__all__ = [
    "ContentItem",
    "ContentType",
    "Creator",
    "ErrorCode",
    "FollowerSnapshot",
    "JoinedContentView",
    "OperationResult",
    "PerformanceSnapshot",
    "Platform",
    "RecommendationCategory",
]
