"""
Recommendation generation from a creator's content history.
"""

import logging
from typing import List

from creator_analytics.analytics import tables
from creator_analytics.analytics.patterns import (
    attribute_correlations, extract_topic, group_by, mean_view_score, view_score
)
from creator_analytics.models.base import Platform, RecommendationCategory
from creator_analytics.models.content import Creator, JoinedContentView
from creator_analytics.models.insights import (
    ContentRecommendations, FormatRecommendation, Recommendation, TopicRecommendation
)

logger = logging.getLogger(__name__)

MIN_GROUP_SIZE = 2
TOP_TOPICS = 3
TOP_FORMATS = 3
TOP_PRACTICE_POSTS = 3
TOP_POSTS = 5
MAX_RELEVANCE = 0.95
LONG_TITLE_LENGTH = 50
WEEKEND_DAYS = (5, 6)
MIN_CORRELATION = 0.3

CORRELATION_TACTICS = {
    "Title length": "Longer, more descriptive titles go with higher engagement in your content",
    "Body length": "Longer posts go with higher engagement in your content",
    "Media presence": "Posts with media go with higher engagement in your content",
    "Morning publishing": "Morning posts go with higher engagement in your content",
    "Afternoon publishing": "Afternoon posts go with higher engagement in your content",
    "Evening publishing": "Evening posts go with higher engagement in your content",
}


def _capped_relevance(avg_engagement: float) -> float:
    return min(MAX_RELEVANCE, 0.5 + avg_engagement)


def _top_by_score(views: List[JoinedContentView], count: int) -> List[JoinedContentView]:
    return sorted(views, key=view_score, reverse=True)[:count]


def potential_reach(total_views: int, item_count: int) -> str:
    """Reach label from the integer average views per item."""
    avg_views = total_views // max(1, item_count)
    if avg_views > 10000:
        return "Very high (10K+ views)"
    if avg_views > 5000:
        return "High (5K-10K views)"
    if avg_views > 1000:
        return "Medium (1K-5K views)"
    return "Moderate (under 1K views)"


def recommend_topics(views: List[JoinedContentView]) -> List[TopicRecommendation]:
    titled = [v for v in views if v.content.title]
    groups = group_by(titled, lambda v: extract_topic(v.content.title))
    eligible = [(topic, members) for topic, members in groups.items() if len(members) >= MIN_GROUP_SIZE]
    ranked = sorted(eligible, key=lambda kv: mean_view_score(kv[1]), reverse=True)

    recommendations: List[TopicRecommendation] = []
    for topic, members in ranked[:TOP_TOPICS]:
        avg = mean_view_score(members)
        total_views = sum(v.total_views for v in members)
        recommendations.append(TopicRecommendation(
            title=f"Create more content about {topic}",
            topic=topic,
            description=f"High-engagement topic with average engagement of {avg:.2%} across {len(members)} previous posts",
            score=_capped_relevance(avg),
            potential_reach=potential_reach(total_views, len(members)),
            example_content_ids=[v.content_id for v in members],
        ))

    added = 0
    for trend, relevance in tables.TRENDING_TOPICS:
        if added >= tables.MAX_TRENDING_SUGGESTIONS:
            break
        if any(trend.lower() in rec.topic.lower() for rec in recommendations):
            continue
        recommendations.append(TopicRecommendation(
            title=f"Explore {trend}",
            topic=trend,
            description="Trending topic with significant reach potential",
            score=relevance,
            potential_reach=tables.TRENDING_REACH,
            is_trending=True,
        ))
        added += 1

    return recommendations


def format_best_practices(views: List[JoinedContentView]) -> List[str]:
    """Practices observed in the best three posts of a platform."""
    top = _top_by_score(views, TOP_PRACTICE_POSTS)
    practices = []

    if top and all(v.content.has_media for v in top):
        practices.append("Include visual elements or media in every post")

    avg_title_length = sum(len(v.content.title) for v in top) / max(1, len(top))
    if avg_title_length > LONG_TITLE_LENGTH:
        practices.append("Use descriptive titles longer than 50 characters")
    else:
        practices.append("Keep titles concise, under 50 characters")

    if any(
        keyword in v.content.body.lower()
        for v in top
        for keyword in tables.RECOMMENDATION_CTA_KEYWORDS
    ):
        practices.append("Include clear calls to action in the content")

    practices.append("Post during peak engagement hours (18h-21h)")
    return practices


def ideal_length(views: List[JoinedContentView]) -> str:
    groups = group_by(
        views,
        lambda v: tables.bucket_label(
            len(v.content.body), tables.IDEAL_LENGTH_BUCKETS, tables.IDEAL_LENGTH_OVERFLOW
        )
    )
    if not groups:
        return tables.DEFAULT_IDEAL_LENGTH
    return max(groups.items(), key=lambda kv: mean_view_score(kv[1]))[0]


def recommend_formats(views: List[JoinedContentView]) -> List[FormatRecommendation]:
    groups = group_by(views, lambda v: v.content.platform)
    eligible = [(p, members) for p, members in groups.items() if len(members) >= MIN_GROUP_SIZE]
    ranked = sorted(eligible, key=lambda kv: mean_view_score(kv[1]), reverse=True)

    recommendations = []
    for platform, members in ranked[:TOP_FORMATS]:
        ideal_format = tables.IDEAL_FORMATS.get(platform, tables.DEFAULT_IDEAL_FORMAT)
        recommendations.append(FormatRecommendation(
            title=f"{ideal_format} on {platform.value}",
            description=f"Best performing platform format across {len(members)} posts",
            score=_capped_relevance(mean_view_score(members)),
            format=ideal_format,
            platform=platform,
            ideal_length=ideal_length(members),
            best_practices=format_best_practices(members),
            example_content_ids=[v.content_id for v in _top_by_score(members, TOP_PRACTICE_POSTS)],
        ))
    return recommendations


def _strategy(title: str, example_ids: List[str] = None) -> Recommendation:
    return Recommendation(
        category=RecommendationCategory.STRATEGY,
        title=title,
        example_content_ids=example_ids or [],
    )


def recommend_strategies(views: List[JoinedContentView]) -> List[Recommendation]:
    top = _top_by_score(views, TOP_POSTS)
    top_ids = [v.content_id for v in top]
    strategies = []

    weekend_count = sum(1 for v in top if v.content.created_at.weekday() in WEEKEND_DAYS)
    if weekend_count > len(top) // 2:
        strategies.append(_strategy("Prioritize weekend publishing, when engagement is higher", top_ids))
    else:
        strategies.append(_strategy("Focus publishing on weekdays, when the audience is most active", top_ids))

    timeline = sorted(v.content.created_at for v in views)
    if len(timeline) >= 2:
        span_days = (timeline[-1] - timeline[0]).total_seconds() / 86400
        avg_days = span_days / max(1, len(timeline) - 1)
        if avg_days < 2:
            strategies.append(_strategy("Keep a high daily publishing frequency to maximize reach"))
        elif avg_days < 7:
            strategies.append(_strategy(f"Keep publishing every {round(avg_days)} days"))
        else:
            strategies.append(_strategy("Increase publishing frequency to at least 2x per week"))

    strategies.extend([
        _strategy("Create connected content series to increase audience retention"),
        _strategy("Diversify formats to reach different audience segments"),
        _strategy("Repurpose high-performing content across multiple platforms"),
    ])
    return strategies


def _tactic(title: str, example_ids: List[str] = None) -> Recommendation:
    return Recommendation(
        category=RecommendationCategory.TACTIC,
        title=title,
        example_content_ids=example_ids or [],
    )


def _is_story(view: JoinedContentView) -> bool:
    body = view.content.body
    if len(body) <= tables.STORYTELLING_MIN_LENGTH:
        return False
    lowered = body.lower()
    return any(keyword in lowered for keyword in tables.STORYTELLING_KEYWORDS)


def recommend_tactics(views: List[JoinedContentView]) -> List[Recommendation]:
    top = _top_by_score(views, TOP_POSTS)
    tactics = []

    questions = [v for v in top if "?" in v.content.body]
    if len(questions) > len(top) // 2:
        tactics.append(_tactic(
            "Ask the audience direct questions to encourage comments",
            [v.content_id for v in questions],
        ))

    stories = [v for v in top if _is_story(v)]
    if len(stories) > len(top) // 3:
        tactics.append(_tactic(
            "Use personal narratives and storytelling to connect with the audience",
            [v.content_id for v in stories],
        ))

    for attribute, correlation in attribute_correlations(views).items():
        if correlation > MIN_CORRELATION and attribute in CORRELATION_TACTICS:
            tactics.append(_tactic(CORRELATION_TACTICS[attribute]))

    tactics.extend([
        _tactic("Reply to every comment within the first 24 hours"),
        _tactic("Use specific calls to action at the end of the content"),
        _tactic("Create collaborative content with other creators to expand reach"),
        _tactic("Encourage shares by offering additional value"),
    ])
    return tactics


def _monetization(title: str) -> Recommendation:
    return Recommendation(category=RecommendationCategory.MONETIZATION, title=title)


def recommend_monetization(creator: Creator, views: List[JoinedContentView]) -> List[Recommendation]:
    avg_engagement = mean_view_score(views)
    total_views = sum(v.total_views for v in views)
    snapshot_platforms = {s.platform for v in views for s in v.snapshots}
    youtube_items = sum(1 for v in views if v.content.platform == Platform.YOUTUBE)

    opportunities = []
    if avg_engagement > 0.05 and total_views > 100000:
        opportunities.append(_monetization("Develop an e-book or online course on your most engaging topics"))
    if creator.total_followers > 10000 or total_views > 200000:
        opportunities.append(_monetization("Seek brand partnerships for sponsored content"))
    if Platform.YOUTUBE in snapshot_platforms and youtube_items >= 10:
        opportunities.append(_monetization("Optimize YouTube monetization with videos longer than 8 minutes"))
    if Platform.INSTAGRAM in snapshot_platforms and creator.total_followers > 5000:
        opportunities.append(_monetization("Explore Instagram Shopping for niche-related products"))

    opportunities.extend([
        _monetization("Add affiliate links to relevant content descriptions"),
        _monetization("Offer consulting or mentoring services in your niche"),
        _monetization("Create a subscription or community model for premium content"),
    ])
    return opportunities


def generate_recommendations(creator: Creator, views: List[JoinedContentView]) -> ContentRecommendations:
    """
    Build every recommendation category for a creator.

    Args:
        creator: Creator the views belong to
        views: Joined views of the creator's items

    Returns:
        ContentRecommendations with topics, formats, strategies, tactics
        and monetization opportunities
    """
    with_data = [v for v in views if v.has_performance]
    logger.info(f"Generating recommendations for creator {creator.id} from {len(with_data)} items")

    return ContentRecommendations(
        creator_id=creator.id,
        topics=recommend_topics(with_data),
        formats=recommend_formats(with_data),
        strategies=recommend_strategies(with_data),
        tactics=recommend_tactics(with_data),
        monetization=recommend_monetization(creator, with_data),
    )
