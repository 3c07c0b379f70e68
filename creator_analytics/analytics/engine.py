"""
Content Analytics Engine for Creator Analytics.

This module implements the facade that loads a creator's content and
performance history through the repositories and runs the analyzers over
it. Every public operation returns an OperationResult and never raises.
"""

import asyncio
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from creator_analytics.analytics import comparison
from creator_analytics.analytics.audience import build_audience_insights, simulated_sensitivity
from creator_analytics.analytics.factors import identify_factors
from creator_analytics.analytics.insights import analyze_content
from creator_analytics.analytics.patterns import extract_patterns
from creator_analytics.analytics.predict import predict_performance
from creator_analytics.analytics.recommendations import generate_recommendations
from creator_analytics.core.config import settings
from creator_analytics.core.exceptions import (
    AnalyticsException, InsufficientDataError, NotFoundError, ValidationError
)
from creator_analytics.core.logging import LoggingService
from creator_analytics.models.base import ErrorCode, OperationResult
from creator_analytics.models.content import ContentItem, Creator, JoinedContentView
from creator_analytics.models.insights import (
    AudienceInsights, AudienceSensitivity, ContentComparison, ContentInsights,
    ContentPrediction, ContentPredictionRequest, ContentRecommendations,
    EngagementFactor, HighPerformancePatterns
)
from creator_analytics.repositories.base import (
    ContentRepository, CreatorRepository, PerformanceRepository
)

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "An unexpected error occurred while processing the request"


class ContentAnalyticsEngine:
    """
    Content Analytics Engine for creator performance analysis.

    This engine handles:
    - Per-content insights and viral potential
    - High performance pattern extraction
    - Content recommendations and engagement factors
    - Audience insights and content type comparison
    - Heuristic performance prediction for planned content
    """

    def __init__(
        self,
        content_repository: ContentRepository,
        performance_repository: PerformanceRepository,
        creator_repository: CreatorRepository,
        logging_service: Optional[LoggingService] = None
    ):
        """Initialize the engine with its data collaborators."""
        self.content_repository = content_repository
        self.performance_repository = performance_repository
        self.creator_repository = creator_repository
        self.logging_service = logging_service if logging_service is not None else LoggingService()

    # Loading helpers

    async def _require_creator(self, creator_id: str) -> Creator:
        creator = await self.creator_repository.get_by_id(creator_id)
        if creator is None:
            raise NotFoundError("Creator", creator_id)
        return creator

    async def _load_views(self, items: List[ContentItem]) -> List[JoinedContentView]:
        """
        Join each item with its snapshots, fetching them concurrently.

        Every fetch runs to completion before the first failure, if any, is
        raised.
        """
        snapshot_lists = await asyncio.gather(*[
            self.performance_repository.get_by_content_id(item.id) for item in items
        ], return_exceptions=True)

        for result in snapshot_lists:
            if isinstance(result, BaseException):
                raise result

        return [
            JoinedContentView(content=item, snapshots=snapshots)
            for item, snapshots in zip(items, snapshot_lists)
        ]

    def _require_performance(self, creator_id: str, views: List[JoinedContentView]):
        if not any(view.has_performance for view in views):
            raise InsufficientDataError(
                f"No performance data available for creator '{creator_id}'",
                details={"creator_id": creator_id, "content_count": len(views)}
            )

    async def _creator_views(self, creator_id: str) -> Tuple[Creator, List[JoinedContentView]]:
        """
        Load a creator and every joined view of their content.

        Raises:
            NotFoundError: If the creator or their content does not exist
            InsufficientDataError: If none of the content has snapshots
        """
        creator = await self._require_creator(creator_id)

        items = await self.content_repository.get_by_creator(creator_id)
        if not items:
            raise NotFoundError(
                "Content", creator_id,
                message=f"No content found for creator '{creator_id}'"
            )

        views = await self._load_views(items)
        self._require_performance(creator_id, views)
        return creator, views

    async def _creator_views_between(
        self,
        creator_id: str,
        start: datetime,
        end: datetime
    ) -> Tuple[Creator, List[JoinedContentView]]:
        creator = await self._require_creator(creator_id)
        self._validate_period(start, end)

        items = await self.content_repository.get_by_creator_between_dates(creator_id, start, end)
        if not items:
            raise NotFoundError(
                "Content", creator_id,
                message=f"No content found for creator '{creator_id}' in the requested period"
            )

        views = await self._load_views(items)
        self._require_performance(creator_id, views)
        return creator, views

    def _validate_period(self, start: datetime, end: datetime):
        if start >= end:
            raise ValidationError(
                "Period start must be before period end",
                details={"start": start.isoformat(), "end": end.isoformat()}
            )

    def _internal_failure(
        self,
        operation: str,
        error: Exception,
        context: Dict[str, Any]
    ) -> OperationResult:
        self.logging_service.log_error(error, {"operation": operation, **context})
        return OperationResult.failure(ErrorCode.INTERNAL, INTERNAL_ERROR_MESSAGE)

    # Public operations

    async def get_content_insights(self, content_id: str) -> OperationResult[ContentInsights]:
        """
        Analyze the performance of a single content item.

        Args:
            content_id: Identifier of the content item

        Returns:
            OperationResult with ContentInsights, or NOT_FOUND when the item
            or its creator does not exist, or INSUFFICIENT_DATA when the item
            has no performance snapshots
        """
        try:
            logger.info(f"Analyzing content {content_id}")

            content = await self.content_repository.get_by_id(content_id)
            if content is None:
                raise NotFoundError("Content", content_id)

            snapshots = await self.performance_repository.get_by_content_id(content_id)
            if not snapshots:
                raise InsufficientDataError(
                    f"No performance data available for content '{content_id}'",
                    details={"content_id": content_id}
                )

            await self._require_creator(content.creator_id)

            view = JoinedContentView(content=content, snapshots=snapshots)
            return OperationResult.ok(analyze_content(view))

        except AnalyticsException as e:
            logger.warning(f"Content insights failed for {content_id}: {e.message}")
            return OperationResult.failure(e.error_code, e.message)
        except Exception as e:
            return self._internal_failure("get_content_insights", e, {"content_id": content_id})

    async def analyze_high_performance_patterns(
        self,
        creator_id: str,
        top_posts_count: Optional[int] = None
    ) -> OperationResult[HighPerformancePatterns]:
        """
        Extract the patterns shared by a creator's best performing content.

        Args:
            creator_id: Identifier of the creator
            top_posts_count: Number of top items to analyze, defaults to
                settings.DEFAULT_TOP_POSTS_COUNT

        Returns:
            OperationResult with HighPerformancePatterns
        """
        if top_posts_count is None:
            top_posts_count = settings.DEFAULT_TOP_POSTS_COUNT

        try:
            if not 1 <= top_posts_count <= settings.MAX_TOP_POSTS_COUNT:
                raise ValidationError(
                    f"top_posts_count must be between 1 and {settings.MAX_TOP_POSTS_COUNT}",
                    details={"top_posts_count": top_posts_count}
                )

            _, views = await self._creator_views(creator_id)
            return OperationResult.ok(extract_patterns(creator_id, views, top_posts_count))

        except AnalyticsException as e:
            logger.warning(f"Pattern analysis failed for creator {creator_id}: {e.message}")
            return OperationResult.failure(e.error_code, e.message)
        except Exception as e:
            return self._internal_failure(
                "analyze_high_performance_patterns", e,
                {"creator_id": creator_id, "top_posts_count": top_posts_count}
            )

    async def generate_content_recommendations(
        self,
        creator_id: str
    ) -> OperationResult[ContentRecommendations]:
        """
        Recommend topics, formats, strategies, tactics and monetization.

        Args:
            creator_id: Identifier of the creator

        Returns:
            OperationResult with ContentRecommendations
        """
        try:
            creator, views = await self._creator_views(creator_id)
            return OperationResult.ok(generate_recommendations(creator, views))

        except AnalyticsException as e:
            logger.warning(f"Recommendations failed for creator {creator_id}: {e.message}")
            return OperationResult.failure(e.error_code, e.message)
        except Exception as e:
            return self._internal_failure(
                "generate_content_recommendations", e, {"creator_id": creator_id}
            )

    async def get_audience_insights(
        self,
        creator_id: str,
        start: datetime,
        end: datetime
    ) -> OperationResult[AudienceInsights]:
        """
        Describe a creator's audience over a period.

        Args:
            creator_id: Identifier of the creator
            start: Start of the period
            end: End of the period, must be after start

        Returns:
            OperationResult with AudienceInsights; fields listed in
            simulated_fields are placeholders
        """
        try:
            creator, views = await self._creator_views_between(creator_id, start, end)
            history = await self.creator_repository.get_follower_history(creator_id, start, end)
            return OperationResult.ok(build_audience_insights(creator, start, end, views, history))

        except AnalyticsException as e:
            logger.warning(f"Audience insights failed for creator {creator_id}: {e.message}")
            return OperationResult.failure(e.error_code, e.message)
        except Exception as e:
            return self._internal_failure(
                "get_audience_insights", e,
                {"creator_id": creator_id, "start": str(start), "end": str(end)}
            )

    async def compare_content_types(
        self,
        creator_id: str,
        start: datetime,
        end: datetime
    ) -> OperationResult[ContentComparison]:
        """
        Compare the performance of a creator's content types over a period.

        Args:
            creator_id: Identifier of the creator
            start: Start of the period
            end: End of the period, must be after start

        Returns:
            OperationResult with ContentComparison
        """
        try:
            _, views = await self._creator_views_between(creator_id, start, end)
            return OperationResult.ok(comparison.compare_content_types(creator_id, start, end, views))

        except AnalyticsException as e:
            logger.warning(f"Content type comparison failed for creator {creator_id}: {e.message}")
            return OperationResult.failure(e.error_code, e.message)
        except Exception as e:
            return self._internal_failure(
                "compare_content_types", e,
                {"creator_id": creator_id, "start": str(start), "end": str(end)}
            )

    async def identify_engagement_factors(
        self,
        creator_id: str
    ) -> OperationResult[List[EngagementFactor]]:
        """
        Rank the factors that influence a creator's engagement.

        Args:
            creator_id: Identifier of the creator

        Returns:
            OperationResult with the factors sorted by importance, descending
        """
        try:
            _, views = await self._creator_views(creator_id)
            return OperationResult.ok(identify_factors(views))

        except AnalyticsException as e:
            logger.warning(f"Engagement factor analysis failed for creator {creator_id}: {e.message}")
            return OperationResult.failure(e.error_code, e.message)
        except Exception as e:
            return self._internal_failure(
                "identify_engagement_factors", e, {"creator_id": creator_id}
            )

    async def predict_content_performance(
        self,
        request: ContentPredictionRequest
    ) -> OperationResult[ContentPrediction]:
        """
        Estimate how a planned piece of content will perform.

        The estimate is drawn from the creator's most similar past content,
        or from their averages when the history is small. A creator with no
        performance history gets a fixed heuristic table flagged as
        simulated.

        Args:
            request: Description of the planned content

        Returns:
            OperationResult with ContentPrediction, INVALID_ARGUMENT when the
            request or its creator is missing, NOT_FOUND when the creator
            does not exist
        """
        try:
            if request is None:
                raise ValidationError("request is required", details={"field": "request"})
            if not request.creator_id:
                raise ValidationError("creator_id is required", details={"field": "creator_id"})

            await self._require_creator(request.creator_id)

            items = await self.content_repository.get_by_creator(request.creator_id)
            views = await self._load_views(items)
            return OperationResult.ok(predict_performance(request, views))

        except AnalyticsException as e:
            logger.warning(f"Performance prediction failed: {e.message}")
            return OperationResult.failure(e.error_code, e.message)
        except Exception as e:
            return self._internal_failure(
                "predict_content_performance", e,
                {"creator_id": getattr(request, "creator_id", None)}
            )

    async def analyze_audience_sensitivity(
        self,
        creator_id: str
    ) -> OperationResult[AudienceSensitivity]:
        """Report the audience's sensitivity to content dimensions (simulated)."""
        try:
            self.logging_service.log_warning({
                "operation": "analyze_audience_sensitivity",
                "creator_id": creator_id,
                "message": "Audience sensitivity is simulated",
            })

            await self._require_creator(creator_id)
            return OperationResult.ok(simulated_sensitivity(creator_id))

        except AnalyticsException as e:
            return OperationResult.failure(e.error_code, e.message)
        except Exception as e:
            return self._internal_failure(
                "analyze_audience_sensitivity", e, {"creator_id": creator_id}
            )
