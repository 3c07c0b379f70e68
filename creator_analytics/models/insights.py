"""
Result models produced by the analytics engine.

Models flagged with ``simulated`` carry placeholder values rather than
inferred ones; callers should present them as illustrative.
"""

from datetime import datetime
from typing import Dict, List, Optional
from pydantic import BaseModel, Field

from creator_analytics.models.base import ContentType, Platform, RecommendationCategory


# Per-content insights

class ViralPotential(BaseModel):
    """Composite viral score with its qualitative reading."""
    score: float = 0.0
    assessment: str
    share_rate: float = 0.0
    growth_rate: float = 0.0
    engagement_speed: float = 0.0
    key_factors: List[str] = Field(default_factory=list)
    share_probabilities: Dict[Platform, float] = Field(default_factory=dict)


class DemographicResponse(BaseModel):
    """Response of one demographic bracket."""
    demographic: str
    engagement_rate: float
    response_type: str


class AudienceResponse(BaseModel):
    """Sentiment split estimated from like and comment ratios."""
    positive_sentiment: float = 0.0
    negative_sentiment: float = 0.0
    neutral_sentiment: float = 0.0
    common_feedback: List[str] = Field(default_factory=list)
    demographic_breakdown: List[DemographicResponse] = Field(default_factory=list)
    simulated: bool = True


class CompetitorInsight(BaseModel):
    """Comparison against an average competitor in the category."""
    competitor_name: str
    relative_performance: float
    differentiating_factors: List[str] = Field(default_factory=list)
    simulated: bool = True


class PerformanceMetrics(BaseModel):
    """Aggregate scores for a single content item."""
    engagement_score: float = 0.0
    reach_score: float = 0.0
    conversion_score: float = 0.0
    retention_score: float = 0.0
    sentiment_score: float = 0.0
    overall_score: float = 0.0
    platform_performance: Dict[Platform, float] = Field(default_factory=dict)
    performance_factors: Dict[str, float] = Field(default_factory=dict)


class ContentInsights(BaseModel):
    """Full analysis of one content item."""
    content_id: str
    title: str
    summary: str
    metrics: PerformanceMetrics
    viral_potential: ViralPotential
    audience_response: AudienceResponse
    key_attributes: List[str] = Field(default_factory=list)
    competitor_insights: List[CompetitorInsight] = Field(default_factory=list)
    strength_points: List[str] = Field(default_factory=list)
    improvement_suggestions: List[str] = Field(default_factory=list)


# High performance patterns

class BestTimeSlot(BaseModel):
    """A (weekday, hour) slot that performed well on one platform."""
    day: str
    hour: int = Field(ge=0, le=23)
    engagement_score: float
    sample_size: int
    rationale: str


class TimingPattern(BaseModel):
    """Best publishing days and hours."""
    best_days: List[str] = Field(default_factory=list)
    best_hours: List[int] = Field(default_factory=list)
    platform_specific_times: Dict[Platform, List[BestTimeSlot]] = Field(default_factory=dict)
    confidence_score: float = Field(ge=0.0, le=1.0)


class TopicPattern(BaseModel):
    """A recurring topic and how it performs."""
    topic_name: str
    engagement_score: float
    item_count: int
    growth_trend: float = 0.0
    related_topics: List[str] = Field(default_factory=list)
    keywords: List[str] = Field(default_factory=list)


class FormatPattern(BaseModel):
    """Performance of a content format, using the platform as its proxy."""
    format_name: str
    platform: Platform
    engagement_score: float
    best_platforms: List[Platform] = Field(default_factory=list)
    optimal_size: str
    best_practices: List[str] = Field(default_factory=list)


class StylePattern(BaseModel):
    """A writing style detected in several items."""
    style_name: str
    description: str
    audience_reception: float
    key_characteristics: List[str] = Field(default_factory=list)
    example_content_ids: List[str] = Field(default_factory=list)


class ContentPattern(BaseModel):
    """A named content archetype found among the top items."""
    pattern_name: str
    description: str
    confidence_score: float = Field(ge=0.0, le=1.0)
    average_engagement: float
    example_content_ids: List[str] = Field(default_factory=list)
    attributes: List[str] = Field(default_factory=list)


class HighPerformancePatterns(BaseModel):
    """Patterns shared by a creator's best performing content."""
    creator_id: str
    analyzed_content_count: int
    identified_patterns: List[ContentPattern] = Field(default_factory=list)
    timing_patterns: List[TimingPattern] = Field(default_factory=list)
    topic_patterns: List[TopicPattern] = Field(default_factory=list)
    format_patterns: List[FormatPattern] = Field(default_factory=list)
    style_patterns: List[StylePattern] = Field(default_factory=list)
    attribute_correlations: Dict[str, float] = Field(default_factory=dict)
    high_performing_formats: Dict[str, float] = Field(default_factory=dict)


# Engagement factors

class EngagementFactor(BaseModel):
    """Marginal effect of one factor on engagement."""
    name: str
    description: str
    sub_factors: Dict[str, float] = Field(default_factory=dict)
    optimization_tips: List[str] = Field(default_factory=list)
    importance: float = Field(ge=0.0, le=1.0)
    confidence_score: float = Field(ge=0.0, le=1.0)


# Recommendations

class Recommendation(BaseModel):
    """A single actionable suggestion."""
    category: RecommendationCategory
    title: str
    description: str = ""
    score: float = 0.0
    example_content_ids: List[str] = Field(default_factory=list)


class TopicRecommendation(Recommendation):
    """Suggested topic with its reach estimate."""
    category: RecommendationCategory = RecommendationCategory.TOPIC
    topic: str
    potential_reach: str
    is_trending: bool = False


class FormatRecommendation(Recommendation):
    """Suggested format for a platform."""
    category: RecommendationCategory = RecommendationCategory.FORMAT
    format: str
    platform: Optional[Platform] = None
    ideal_length: str
    best_practices: List[str] = Field(default_factory=list)


class ContentRecommendations(BaseModel):
    """Everything the recommendation generator produces for a creator."""
    creator_id: str
    topics: List[TopicRecommendation] = Field(default_factory=list)
    formats: List[FormatRecommendation] = Field(default_factory=list)
    strategies: List[Recommendation] = Field(default_factory=list)
    tactics: List[Recommendation] = Field(default_factory=list)
    monetization: List[Recommendation] = Field(default_factory=list)


# Audience

class AudienceSegment(BaseModel):
    """A slice of the audience with shared traits."""
    segment_name: str
    percentage: float
    key_characteristics: List[str] = Field(default_factory=list)
    preferred_content: List[str] = Field(default_factory=list)
    engagement_rate: float
    growth_rate: float


class LoyaltyMetrics(BaseModel):
    """How often the audience comes back."""
    return_rate: float
    average_engagement_frequency: float
    content_consumption_rate: float
    advocacy_score: float
    loyalty_factors: List[str] = Field(default_factory=list)


class AudienceInsights(BaseModel):
    """Audience overview for a creator over a period."""
    creator_id: str
    period_start: datetime
    period_end: datetime
    total_audience_size: int
    growth_rate: float = 0.0
    platform_engagement: Dict[Platform, float] = Field(default_factory=dict)
    demographic_breakdown: Dict[str, float] = Field(default_factory=dict)
    key_segments: List[AudienceSegment] = Field(default_factory=list)
    interest_distribution: Dict[str, float] = Field(default_factory=dict)
    engagement_patterns: List[str] = Field(default_factory=list)
    content_preferences: Dict[str, float] = Field(default_factory=dict)
    loyalty_metrics: LoyaltyMetrics
    simulated_fields: List[str] = Field(default_factory=list)


class AudienceSensitivity(BaseModel):
    """How strongly the audience reacts to content dimensions."""
    creator_id: str
    content_type_sensitivity: Dict[str, float] = Field(default_factory=dict)
    topic_sensitivity: Dict[str, float] = Field(default_factory=dict)
    style_sensitivity: Dict[str, float] = Field(default_factory=dict)
    timing_sensitivity: Dict[str, float] = Field(default_factory=dict)
    overall_sensitivity_score: float
    simulated: bool = True


# Content type comparison

class ContentBrief(BaseModel):
    """Short description of a top performing item."""
    content_id: str
    title: str
    publish_date: datetime
    engagement_score: float
    key_metrics: Dict[str, int] = Field(default_factory=dict)


class ContentTypeComparison(BaseModel):
    """Aggregated performance of one content type."""
    content_type: str
    metrics: Dict[str, float] = Field(default_factory=dict)
    performance_score: float = Field(ge=0.0, le=1.0)
    sample_size: int
    top_performers: List[ContentBrief] = Field(default_factory=list)
    key_insights: List[str] = Field(default_factory=list)
    performance_ratio: float = 1.0


class PerformanceTrend(BaseModel):
    """Monthly series of a per-post metric."""
    trend_name: str
    trend_type: str
    data_points: Dict[str, float] = Field(default_factory=dict)


class ContentComparison(BaseModel):
    """Comparison of all content types of a creator over a period."""
    creator_id: str
    period_start: datetime
    period_end: datetime
    type_comparisons: List[ContentTypeComparison] = Field(default_factory=list)
    performance_trends: List[PerformanceTrend] = Field(default_factory=list)
    cross_platform_insights: List[str] = Field(default_factory=list)
    recommended_strategies: List[str] = Field(default_factory=list)


# Prediction

class ContentPredictionRequest(BaseModel):
    """Description of a planned piece of content."""
    creator_id: str = ""
    title: str = ""
    description: str = ""
    content_type: ContentType = ContentType.OTHER
    target_platform: Platform
    tags: List[str] = Field(default_factory=list)
    estimated_duration_seconds: int = Field(default=0, ge=0)
    includes_call_to_action: bool = False
    post_day: Optional[str] = None
    post_hour: Optional[int] = Field(default=None, ge=0, le=23)


class OptimalTime(BaseModel):
    """Suggested publishing window."""
    days_of_week: List[str] = Field(default_factory=list)
    time_of_day: str
    time_zone: str
    confidence: float = Field(ge=0.0, le=1.0)


class ContentPrediction(BaseModel):
    """
    Estimate of how a planned item will perform.

    Estimates drawn from the creator's history have ``simulated`` unset and
    list the past items they were based on in ``similar_content_ids``. A
    creator without history gets a fixed rule table with ``simulated`` set.
    """
    request: ContentPredictionRequest
    estimated_views: int
    estimated_engagement: float
    viral_potential: float = 0.0
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)
    engagement_factors: Dict[str, float] = Field(default_factory=dict)
    metric_predictions: Dict[str, float] = Field(default_factory=dict)
    optimal_publish_time: OptimalTime
    performance_percentile: int
    reach_potential: float
    conversion_potential: float
    audience_suitability: float
    optimization_suggestions: List[str] = Field(default_factory=list)
    similar_content_ids: List[str] = Field(default_factory=list)
    simulated: bool = True
