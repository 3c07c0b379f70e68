"""
Base models and common types for Creator Analytics.

This module defines the foundational enums and the discriminated
result type returned by every public engine operation.
"""

from enum import Enum
from typing import Generic, Optional, TypeVar
from pydantic import BaseModel

T = TypeVar("T")


class Platform(str, Enum):
    """Enumeration of social media platforms."""
    INSTAGRAM = "instagram"
    YOUTUBE = "youtube"
    TIKTOK = "tiktok"
    FACEBOOK = "facebook"
    TWITTER = "twitter"
    LINKEDIN = "linkedin"
    PINTEREST = "pinterest"
    SNAPCHAT = "snapchat"


class ErrorCode(str, Enum):
    """Enumeration of failure codes returned by the engine."""
    NOT_FOUND = "NOT_FOUND"
    INSUFFICIENT_DATA = "INSUFFICIENT_DATA"
    INVALID_ARGUMENT = "INVALID_ARGUMENT"
    INTERNAL = "INTERNAL"


class ContentType(str, Enum):
    """Enumeration of planned content types."""
    VIDEO = "video"
    SOCIAL_MEDIA = "social_media"
    BLOG = "blog"
    OTHER = "other"


class RecommendationCategory(str, Enum):
    """Enumeration of recommendation categories."""
    TOPIC = "topic"
    FORMAT = "format"
    STRATEGY = "strategy"
    TACTIC = "tactic"
    MONETIZATION = "monetization"


class OperationResult(BaseModel, Generic[T]):
    """Success payload or typed failure of an engine operation."""
    success: bool
    value: Optional[T] = None
    error_code: Optional[ErrorCode] = None
    message: Optional[str] = None

    @classmethod
    def ok(cls, value: T):
        """Create a successful result."""
        return cls(success=True, value=value)

    @classmethod
    def failure(cls, error_code: ErrorCode, message: str):
        """Create a failed result."""
        return cls(success=False, error_code=error_code, message=message)

    def is_failure(self) -> bool:
        """Check if the operation failed."""
        return not self.success
