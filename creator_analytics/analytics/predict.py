"""
Performance prediction for planned content.

A request is scored against the creator's past content by platform, title
words, description words and tags. The closest past items drive the
estimate. With fewer than MIN_TRAINING_POSTS items, or no close match, the
creator's averages are used instead. A creator with no performance history
gets a fixed rule table flagged as simulated.
"""

import logging
import math
from typing import Dict, List, Optional, Tuple

from creator_analytics.analytics import tables
from creator_analytics.analytics.metrics import engagement_score, mean, safe_divide, variance
from creator_analytics.analytics.patterns import analyze_timing
from creator_analytics.models.base import ContentType
from creator_analytics.models.content import JoinedContentView
from creator_analytics.models.insights import (
    ContentPrediction, ContentPredictionRequest, OptimalTime
)

logger = logging.getLogger(__name__)

MIN_TRAINING_POSTS = 5
SIMILARITY_THRESHOLD = 0.4
MAX_SIMILAR_POSTS = 5

PLATFORM_WEIGHT = 0.3
TITLE_WEIGHT = 0.15
DESCRIPTION_WEIGHT = 0.2
TAGS_WEIGHT = 0.15
TOTAL_WEIGHT = PLATFORM_WEIGHT + TITLE_WEIGHT + DESCRIPTION_WEIGHT + TAGS_WEIGHT

CALL_TO_ACTION_BOOST = 1.15
CONTENT_TYPE_CONFIDENCE = 0.7
SIMILAR_TIME_HOURS = 2

LOW_ENGAGEMENT = 0.03
LOW_REACH = 500
MAX_SUGGESTIONS = 5

FALLBACK_REACH_FACTOR = 0.8
FALLBACK_VIRAL_POTENTIAL = 0.3
FALLBACK_CONFIDENCE = 0.4

ScoredView = Tuple[JoinedContentView, float]


# Similarity

def _word_overlap(query: str, text: str) -> float:
    """Share of the query's words that also appear in the text."""
    if not query or not text:
        return 0.0
    query_words = query.lower().split(" ")
    matching = set(query_words) & set(text.lower().split(" "))
    return len(matching) / max(len(query_words), 1)


def _tag_overlap(tags: List[str], view: JoinedContentView) -> float:
    if not tags:
        return 0.0
    title = view.content.title.lower()
    body = view.content.body.lower()
    matching = sum(1 for tag in tags if tag.lower() in title or tag.lower() in body)
    return matching / len(tags)


def similarity_score(request: ContentPredictionRequest, view: JoinedContentView) -> float:
    """Weighted similarity between a planned item and a past one, in [0, 1]."""
    score = 0.0
    if request.target_platform == view.content.platform:
        score += PLATFORM_WEIGHT
    score += TITLE_WEIGHT * _word_overlap(request.title, view.content.title)
    score += DESCRIPTION_WEIGHT * _word_overlap(request.description, view.content.body)
    score += TAGS_WEIGHT * _tag_overlap(request.tags, view)
    return score / TOTAL_WEIGHT


def find_similar(
    request: ContentPredictionRequest,
    views: List[JoinedContentView]
) -> List[ScoredView]:
    """The most similar past items above SIMILARITY_THRESHOLD, best first."""
    scored = [(view, similarity_score(request, view)) for view in views]
    scored.sort(key=lambda pair: pair[1], reverse=True)
    return [pair for pair in scored if pair[1] > SIMILARITY_THRESHOLD][:MAX_SIMILAR_POSTS]


# Multipliers

def hour_multiplier(hour: Optional[int]) -> float:
    if hour is None:
        return 1.0
    for first, last, multiplier in tables.HOUR_MULTIPLIERS:
        if first <= hour <= last:
            return multiplier
    return 1.0


def day_multiplier(day: Optional[str]) -> float:
    if not day:
        return 1.0
    return tables.DAY_MULTIPLIERS.get(day.capitalize(), 1.0)


def timing_multiplier(request: ContentPredictionRequest) -> float:
    return hour_multiplier(request.post_hour) * day_multiplier(request.post_day)


def reach_multiplier(request: ContentPredictionRequest) -> float:
    return (
        tables.PLATFORM_REACH_MULTIPLIERS.get(request.target_platform, 1.0)
        * tables.CONTENT_TYPE_REACH_MULTIPLIERS.get(request.content_type, 1.0)
    )


# Estimates from similar items

def predicted_engagement(request: ContentPredictionRequest, similar: List[ScoredView]) -> float:
    """Similarity-weighted engagement of the matches, adjusted for CTA and timing."""
    total_weight = sum(score for _, score in similar)
    weighted = sum(engagement_score(view.snapshots) * score for view, score in similar)
    base = safe_divide(weighted, total_weight)

    if request.includes_call_to_action:
        base *= CALL_TO_ACTION_BOOST
    return base * timing_multiplier(request)


def predicted_views(request: ContentPredictionRequest, similar: List[ScoredView]) -> float:
    return mean([view.total_views for view, _ in similar]) * reach_multiplier(request)


def predicted_viral_potential(request: ContentPredictionRequest, similar: List[ScoredView]) -> float:
    """Mean share rate of the matches with platform and video boosts, capped at 1."""
    rates = [
        view.total_shares / view.total_views
        for view, _ in similar if view.total_views > 0
    ]
    potential = mean(rates) * tables.PLATFORM_VIRAL_MULTIPLIERS.get(request.target_platform, 1.0)
    if request.content_type == ContentType.VIDEO:
        potential *= tables.VIDEO_VIRAL_MULTIPLIER
    return min(1.0, potential)


def predicted_metrics(request: ContentPredictionRequest, similar: List[ScoredView]) -> Dict[str, float]:
    views = [view for view, _ in similar]
    multiplier = (
        tables.PLATFORM_REACH_MULTIPLIERS.get(request.target_platform, 1.0)
        * timing_multiplier(request)
    )
    avg_views = mean([v.total_views for v in views])
    avg_likes = mean([v.total_likes for v in views])
    avg_revenue = mean([sum(s.estimated_revenue for s in v.snapshots) for v in views])

    return {
        "Views": avg_views * multiplier,
        "Likes": avg_likes * multiplier,
        "Comments": mean([v.total_comments for v in views]) * multiplier,
        "Shares": mean([v.total_shares for v in views]) * multiplier,
        "Estimated revenue": avg_revenue * multiplier,
        "Click-through rate": safe_divide(avg_likes, avg_views),
    }


def factor_confidence(request: ContentPredictionRequest, similar: List[ScoredView]) -> Dict[str, float]:
    """Share of the matches that agree with the request on each factor."""
    views = [view for view, _ in similar]
    published = [v.content.published_at for v in views if v.content.published_at is not None]
    count = max(1, len(views))

    same_platform = sum(1 for v in views if v.content.platform == request.target_platform)
    similar_time = 0
    if request.post_hour is not None:
        similar_time = sum(1 for p in published if abs(p.hour - request.post_hour) < SIMILAR_TIME_HOURS)
    same_day = 0
    if request.post_day:
        day = request.post_day.capitalize()
        same_day = sum(1 for p in published if tables.WEEKDAY_NAMES[p.weekday()] == day)

    return {
        "Platform": same_platform / count,
        "Content type": CONTENT_TYPE_CONFIDENCE,
        "Time of day": similar_time / count,
        "Day of week": same_day / count,
    }


def predicted_retention(request: ContentPredictionRequest, views: List[JoinedContentView]) -> float:
    """Retention estimated from engagement; long videos retain less."""
    retention = min(0.9, 0.4 + mean([engagement_score(v.snapshots) for v in views]) * 2)
    if request.content_type == ContentType.VIDEO:
        if request.estimated_duration_seconds > 600:
            retention *= 0.8
        elif request.estimated_duration_seconds > 300:
            retention *= 0.9
    return retention


def prediction_confidence(similar: List[ScoredView]) -> float:
    """More, closer and more consistent matches give more confidence."""
    base = min(0.9, 0.3 + len(similar) * 0.1)
    avg_similarity = mean([score for _, score in similar])
    spread = math.sqrt(variance([engagement_score(view.snapshots) for view, _ in similar]))
    return base * avg_similarity * (1.0 - min(0.5, spread))


def optimization_suggestions(
    request: ContentPredictionRequest,
    engagement: float,
    views: float
) -> List[str]:
    suggestions: List[str] = []
    if engagement < LOW_ENGAGEMENT:
        suggestions.extend(tables.LOW_ENGAGEMENT_SUGGESTIONS)
    if views < LOW_REACH:
        suggestions.extend(tables.LOW_REACH_SUGGESTIONS)
    suggestions.extend(tables.PLATFORM_PREDICTION_SUGGESTIONS.get(request.target_platform, []))
    return suggestions[:MAX_SUGGESTIONS]


# Shared pieces

def performance_percentile(engagement: float, training: List[JoinedContentView]) -> int:
    """Percentage of past items the estimate matches or beats."""
    beaten = sum(1 for v in training if engagement_score(v.snapshots) <= engagement)
    return int(round(beaten / len(training) * 100))


def reach_potential(views: float, training: List[JoinedContentView]) -> float:
    """Estimated views relative to the creator's best item, capped at 1."""
    return min(1.0, safe_divide(views, max(v.total_views for v in training)))


def optimal_publish_time(training: List[JoinedContentView]) -> OptimalTime:
    timing = analyze_timing(training)
    return OptimalTime(
        days_of_week=timing.best_days,
        time_of_day=f"{timing.best_hours[0]:02d}:00" if timing.best_hours else "",
        time_zone="UTC",
        confidence=timing.confidence_score,
    )


def click_through_rate(views: List[JoinedContentView]) -> float:
    return safe_divide(sum(v.total_likes for v in views), sum(v.total_views for v in views))


# Predictions

def similar_content_prediction(
    request: ContentPredictionRequest,
    training: List[JoinedContentView],
    similar: List[ScoredView]
) -> ContentPrediction:
    engagement = predicted_engagement(request, similar)
    views = predicted_views(request, similar)
    matches = [view for view, _ in similar]

    return ContentPrediction(
        request=request,
        estimated_views=int(round(views)),
        estimated_engagement=engagement,
        viral_potential=predicted_viral_potential(request, similar),
        confidence=prediction_confidence(similar),
        engagement_factors=factor_confidence(request, similar),
        metric_predictions=predicted_metrics(request, similar),
        optimal_publish_time=optimal_publish_time(training),
        performance_percentile=performance_percentile(engagement, training),
        reach_potential=reach_potential(views, training),
        conversion_potential=click_through_rate(matches),
        audience_suitability=predicted_retention(request, matches),
        optimization_suggestions=optimization_suggestions(request, engagement, views),
        similar_content_ids=[view.content_id for view in matches],
        simulated=False,
    )


def average_prediction(
    request: ContentPredictionRequest,
    training: List[JoinedContentView]
) -> ContentPrediction:
    """Conservative estimate from the creator's overall averages."""
    engagement = mean([engagement_score(v.snapshots) for v in training])
    views = mean([v.total_views for v in training]) * FALLBACK_REACH_FACTOR

    return ContentPrediction(
        request=request,
        estimated_views=int(round(views)),
        estimated_engagement=engagement,
        viral_potential=FALLBACK_VIRAL_POTENTIAL,
        confidence=FALLBACK_CONFIDENCE,
        optimal_publish_time=optimal_publish_time(training),
        performance_percentile=performance_percentile(engagement, training),
        reach_potential=reach_potential(views, training),
        conversion_potential=click_through_rate(training),
        audience_suitability=predicted_retention(request, training),
        optimization_suggestions=list(tables.FALLBACK_PREDICTION_SUGGESTIONS),
        simulated=False,
    )


def fixed_prediction(request: ContentPredictionRequest) -> ContentPrediction:
    """Rule-table estimate for a creator without history."""
    return ContentPrediction(
        request=request,
        estimated_views=5000,
        estimated_engagement=0.08,
        engagement_factors={
            "Content quality": 0.6,
            "Audience relevance": 0.8,
            "Publishing timing": 0.7,
        },
        optimal_publish_time=OptimalTime(
            days_of_week=["Tuesday", "Thursday"],
            time_of_day="18:30",
            time_zone="UTC-3",
            confidence=0.8,
        ),
        performance_percentile=70,
        reach_potential=0.65,
        conversion_potential=0.12,
        audience_suitability=0.75,
        optimization_suggestions=[
            "Add a clear call to action at the end",
            "Optimize the title for click-through rate",
            "Publish at the audience's peak hours",
        ],
        simulated=True,
    )


def predict_performance(
    request: ContentPredictionRequest,
    views: List[JoinedContentView]
) -> ContentPrediction:
    """
    Predict how a planned item will perform from the creator's history.

    Args:
        request: Description of the planned content
        views: The creator's past content joined with its snapshots

    Returns:
        ContentPrediction drawn from similar past items, from the creator's
        averages, or from the fixed table when there is no history
    """
    training = [view for view in views if view.has_performance]
    if not training:
        logger.info(f"No history for creator {request.creator_id}, using the fixed prediction table")
        return fixed_prediction(request)

    if len(training) < MIN_TRAINING_POSTS:
        return average_prediction(request, training)

    similar = find_similar(request, training)
    if not similar:
        return average_prediction(request, training)

    return similar_content_prediction(request, training, similar)
