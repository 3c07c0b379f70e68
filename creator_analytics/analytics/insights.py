"""
Per-content performance analysis.

Combines the performance metrics of a single item with its viral
potential, an estimated audience response and rule-based strengths and
improvement suggestions.
"""

import logging
from typing import Dict, List, Tuple

from creator_analytics.analytics.metrics import engagement_rate, mean, safe_divide
from creator_analytics.analytics.viral import score_viral_potential
from creator_analytics.models.base import Platform
from creator_analytics.models.content import ContentItem, JoinedContentView, PerformanceSnapshot
from creator_analytics.models.insights import (
    AudienceResponse, CompetitorInsight, ContentInsights, DemographicResponse,
    PerformanceMetrics, ViralPotential
)

logger = logging.getLogger(__name__)

SUMMARY_LENGTH = 100
RETENTION_SCALE = 50
SENTIMENT_SCALE = 1.2
NEUTRAL_SENTIMENT = 0.5

OVERALL_WEIGHTS = {
    "engagement_score": 0.3,
    "reach_score": 0.00002,
    "conversion_score": 0.15,
    "retention_score": 0.15,
    "sentiment_score": 10,
}


def summarize(body: str) -> str:
    return body[:SUMMARY_LENGTH] + "..."


class PerformanceMetricsAnalyzer:
    """Aggregates a single item's snapshots into performance scores."""

    def analyze(self, snapshots: List[PerformanceSnapshot]) -> PerformanceMetrics:
        """
        Compute per-platform performance and the global scores.

        Args:
            snapshots: All snapshots of one content item

        Returns:
            PerformanceMetrics; global scores stay 0 when there are no views
        """
        if not snapshots:
            logger.warning("Performance metrics requested for an empty snapshot list")
            return PerformanceMetrics()

        platform_performance: Dict[Platform, float] = {}
        factors: Dict[str, float] = {}
        for snapshot in snapshots:
            name = snapshot.platform.value
            platform_performance[snapshot.platform] = engagement_rate(snapshot) * 100
            factors[f"Likes ({name})"] = safe_divide(snapshot.likes, snapshot.views) * 100
            factors[f"Comments ({name})"] = safe_divide(snapshot.comments, snapshot.views) * 100
            factors[f"Shares ({name})"] = safe_divide(snapshot.shares, snapshot.views) * 100

        metrics = PerformanceMetrics(platform_performance=platform_performance, performance_factors=factors)

        total_views = sum(s.views for s in snapshots)
        platform_count = len({s.platform for s in snapshots})
        if total_views <= 0:
            return metrics

        total_engagements = sum(s.total_engagements for s in snapshots)
        total_revenue = sum(s.estimated_revenue for s in snapshots)

        metrics.engagement_score = total_engagements / total_views * 100
        metrics.reach_score = total_views / platform_count
        metrics.conversion_score = total_revenue / total_views * 100 if total_revenue > 0 else 0.0
        metrics.retention_score = self._retention_score(snapshots)
        metrics.sentiment_score = self._sentiment_score(snapshots)
        metrics.overall_score = sum(
            getattr(metrics, field) * weight for field, weight in OVERALL_WEIGHTS.items()
        )
        return metrics

    def _retention_score(self, snapshots: List[PerformanceSnapshot]) -> float:
        # Likes per view stands in for watch-time retention
        return mean([s.likes / max(1, s.views) for s in snapshots]) * RETENTION_SCALE

    def _sentiment_score(self, snapshots: List[PerformanceSnapshot]) -> float:
        engagements = sum(s.total_engagements for s in snapshots)
        if engagements == 0:
            return NEUTRAL_SENTIMENT
        likes_ratio = sum(s.likes for s in snapshots) / engagements
        return min(1.0, max(0.0, likes_ratio * SENTIMENT_SCALE))


def estimate_audience_response(snapshots: List[PerformanceSnapshot]) -> AudienceResponse:
    """Sentiment split derived from like and comment ratios; demographics are placeholders."""
    views = max(1, sum(s.views for s in snapshots))
    likes_ratio = sum(s.likes for s in snapshots) / views
    comments_ratio = sum(s.comments for s in snapshots) / views

    positive = likes_ratio * 0.8
    negative = (1 - likes_ratio) * 0.3

    feedback = []
    if likes_ratio > 0.1:
        feedback.append("Content well received by most of the audience")
    if comments_ratio > 0.05:
        feedback.append("Sparked significant discussion in the comments")

    return AudienceResponse(
        positive_sentiment=positive,
        negative_sentiment=negative,
        neutral_sentiment=1 - (positive + negative),
        common_feedback=feedback,
        demographic_breakdown=[
            DemographicResponse(demographic="18-24", engagement_rate=0.12, response_type="Very positive"),
            DemographicResponse(demographic="25-34", engagement_rate=0.08, response_type="Positive"),
        ],
    )


def key_attributes(content: ContentItem, snapshots: List[PerformanceSnapshot]) -> List[str]:
    attributes = [f"Type: {content.platform.value}"]
    if content.body:
        attributes.append(f"Content length: {len(content.body)} characters")
    if snapshots:
        first_rate = engagement_rate(snapshots[0])
        if first_rate > 0.1:
            attributes.append("High engagement")
        elif first_rate < 0.01:
            attributes.append("Low engagement")
    return attributes


def competitor_insights() -> List[CompetitorInsight]:
    return [
        CompetitorInsight(
            competitor_name="Average competitor in category",
            relative_performance=1.2,
            differentiating_factors=[
                "Higher audience involvement",
                "Better production quality",
            ],
        )
    ]


def strengths_and_suggestions(
    metrics: PerformanceMetrics,
    viral: ViralPotential,
    platform: Platform
) -> Tuple[List[str], List[str]]:
    strengths = []
    if metrics.engagement_score > 0.05:
        strengths.append("High overall engagement")
    if metrics.reach_score > 1000:
        strengths.append("Good reach performance")
    if metrics.sentiment_score > 0.7:
        strengths.append("Very positive audience sentiment")
    if viral.score > 5.0:
        strengths.append("Good viral potential")

    suggestions = []
    if metrics.engagement_score < 0.02:
        suggestions.append("Add interactive elements to improve engagement")
    if metrics.reach_score < 500:
        suggestions.append("Optimize SEO and tags to increase reach")
    if metrics.retention_score < 0.4:
        suggestions.append("Improve the introduction and structure to increase retention")

    if platform == Platform.YOUTUBE and metrics.retention_score < 0.5:
        suggestions.append("Make the first 15 seconds more compelling")
    elif platform == Platform.INSTAGRAM and metrics.engagement_score < 0.03:
        suggestions.append("Use more engaging captions and calls to action")
    elif platform == Platform.TWITTER and metrics.retention_score < 0.3:
        suggestions.append("Use more relevant hashtags and concise content")

    return strengths, suggestions


def analyze_content(view: JoinedContentView) -> ContentInsights:
    """Build the full insight payload for one joined content view."""
    content = view.content
    metrics = PerformanceMetricsAnalyzer().analyze(view.snapshots)
    viral = score_viral_potential(view.snapshots)
    strengths, suggestions = strengths_and_suggestions(metrics, viral, content.platform)

    return ContentInsights(
        content_id=content.id,
        title=content.title,
        summary=summarize(content.body),
        metrics=metrics,
        viral_potential=viral,
        audience_response=estimate_audience_response(view.snapshots),
        key_attributes=key_attributes(content, view.snapshots),
        competitor_insights=competitor_insights(),
        strength_points=strengths,
        improvement_suggestions=suggestions,
    )
