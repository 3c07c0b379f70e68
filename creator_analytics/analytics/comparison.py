"""
Content-type comparison over a date range.

Content types are derived from the platform of each item. Every type is
scored on its own snapshots and then compared against the rest.
"""

import logging
from collections import OrderedDict
from datetime import datetime
from typing import Dict, List

from creator_analytics.analytics import tables
from creator_analytics.analytics.metrics import safe_divide
from creator_analytics.analytics.patterns import group_by
from creator_analytics.models.content import JoinedContentView, PerformanceSnapshot
from creator_analytics.models.insights import (
    ContentBrief, ContentComparison, ContentTypeComparison, PerformanceTrend
)

logger = logging.getLogger(__name__)

SCORE_SCALE = 20
TOP_PERFORMERS = 3
PAIRWISE_RATIO = 1.5
WORST_TYPE_RATIO = 0.5
BALANCE_RATIO = 0.8
REWORK_RATIO = 0.4
MIN_TREND_MONTHS = 2
TOTAL_ENGAGEMENT_RATE = "total_engagement_rate"


def performance_score(snapshots: List[PerformanceSnapshot]) -> float:
    """Engagements per view scaled by 20 and capped at 1."""
    views = sum(s.views for s in snapshots)
    engagements = sum(s.total_engagements for s in snapshots)
    return min(1.0, safe_divide(engagements, views) * SCORE_SCALE)


def type_metrics(views: List[JoinedContentView]) -> Dict[str, float]:
    """Per-post averages and, when there are views, per-view rates."""
    posts = [v for v in views if v.has_performance]
    if not posts:
        return {}

    total_views = sum(v.total_views for v in posts)
    total_likes = sum(v.total_likes for v in posts)
    total_comments = sum(v.total_comments for v in posts)
    total_shares = sum(v.total_shares for v in posts)
    count = len(posts)

    metrics = {
        "average_views": total_views / count,
        "average_likes": total_likes / count,
        "average_comments": total_comments / count,
        "average_shares": total_shares / count,
    }
    if total_views > 0:
        metrics["like_rate"] = total_likes / total_views
        metrics["comment_rate"] = total_comments / total_views
        metrics["share_rate"] = total_shares / total_views
        metrics[TOTAL_ENGAGEMENT_RATE] = (total_likes + total_comments + total_shares) / total_views
    return metrics


def top_performers(views: List[JoinedContentView]) -> List[ContentBrief]:
    scored = [(v, performance_score(v.snapshots)) for v in views if v.has_performance]
    scored.sort(key=lambda pair: pair[1], reverse=True)

    return [
        ContentBrief(
            content_id=view.content_id,
            title=view.content.title,
            publish_date=view.content.published_at or view.content.created_at,
            engagement_score=score,
            key_metrics={
                "views": view.total_views,
                "likes": view.total_likes,
                "comments": view.total_comments,
                "shares": view.total_shares,
            },
        )
        for view, score in scored[:TOP_PERFORMERS]
    ]


def type_insights(content_type: str, views: List[JoinedContentView]) -> List[str]:
    snapshots = [s for v in views for s in v.snapshots]
    score = performance_score(snapshots)
    insights = []

    if score > 0.6:
        insights.append(f"{content_type} drives engagement well above average")
    elif score > 0.4:
        insights.append(f"{content_type} performs well on engagement")
    elif score < 0.2:
        insights.append(f"{content_type} performs below average on engagement")

    likes = sum(s.likes for s in snapshots)
    comments = sum(s.comments for s in snapshots)
    shares = sum(s.shares for s in snapshots)

    if likes > comments and likes > shares:
        insights.append(f"{content_type} mostly generates likes, with few comments and shares")
    elif comments > likes and comments > shares:
        insights.append(f"{content_type} sparks discussion with a high comment rate")
    elif shares > likes and shares > comments:
        insights.append(f"{content_type} has high reach potential through shares")

    return insights


def performance_ratio(type_views: List[JoinedContentView], all_views: List[JoinedContentView]) -> float:
    """Score of a type relative to every other type; 1.0 when the others score 0."""
    type_ids = {v.content_id for v in type_views}
    own = [s for v in type_views for s in v.snapshots]
    others = [s for v in all_views if v.content_id not in type_ids for s in v.snapshots]

    other_score = performance_score(others)
    if other_score <= 0:
        return 1.0
    return performance_score(own) / other_score


def monthly_trends(views: List[JoinedContentView]) -> List[PerformanceTrend]:
    """Per-post engagements and views per calendar month of the snapshots."""
    months: Dict[datetime, Dict] = {}
    for view in views:
        for snapshot in view.snapshots:
            period = datetime(snapshot.date.year, snapshot.date.month, 1)
            bucket = months.setdefault(period, {"views": 0, "engagements": 0, "posts": set()})
            bucket["views"] += snapshot.views
            bucket["engagements"] += snapshot.total_engagements
            bucket["posts"].add(snapshot.content_id)

    if len(months) < MIN_TREND_MONTHS:
        return []

    engagement_points: Dict[str, float] = OrderedDict()
    view_points: Dict[str, float] = OrderedDict()
    for period in sorted(months):
        bucket = months[period]
        label = period.strftime("%b %Y")
        post_count = len(bucket["posts"])
        engagement_points[label] = safe_divide(bucket["engagements"], post_count)
        view_points[label] = safe_divide(bucket["views"], post_count)

    return [
        PerformanceTrend(trend_name="Monthly engagement", trend_type="engagement", data_points=engagement_points),
        PerformanceTrend(trend_name="Monthly views", trend_type="views", data_points=view_points),
    ]


def cross_type_insights(comparisons: List[ContentTypeComparison]) -> List[str]:
    if len(comparisons) <= 1:
        return []

    best = max(comparisons, key=lambda c: c.performance_score)
    worst = min(comparisons, key=lambda c: c.performance_score)

    insights = [f"{best.content_type} has the best overall performance of the analyzed types"]
    if worst.performance_score < best.performance_score * WORST_TYPE_RATIO:
        insights.append(f"{worst.content_type} performs significantly below the other types")

    for first in comparisons:
        for second in comparisons:
            if first is second:
                continue
            eng1 = first.metrics.get(TOTAL_ENGAGEMENT_RATE)
            eng2 = second.metrics.get(TOTAL_ENGAGEMENT_RATE)
            if eng1 is None or eng2 is None or eng2 <= 0:
                continue
            if eng1 > eng2 * PAIRWISE_RATIO:
                percent = round((eng1 / eng2 - 1) * 100)
                insights.append(
                    f"{first.content_type} generates {percent}% more engagement than {second.content_type}"
                )

    return insights


def recommended_strategies(comparisons: List[ContentTypeComparison]) -> List[str]:
    if not comparisons:
        return []

    ordered = sorted(comparisons, key=lambda c: c.performance_score, reverse=True)
    first = ordered[0]
    last = ordered[-1]

    strategies = [f"Prioritize {first.content_type} content to maximize engagement"]
    if len(ordered) >= 2 and ordered[1].performance_score > first.performance_score * BALANCE_RATIO:
        strategies.append(f"Keep a balanced strategy between {first.content_type} and {ordered[1].content_type}")
    if last.performance_score < first.performance_score * REWORK_RATIO:
        strategies.append(f"Consider reworking your {last.content_type} strategy or publishing it less often")
    strategies.append(
        "Adapt high-performing content to multiple platforms, keeping what drives engagement"
    )
    return strategies


def compare_content_types(
    creator_id: str,
    period_start: datetime,
    period_end: datetime,
    views: List[JoinedContentView]
) -> ContentComparison:
    """
    Compare the creator's content types over a period.

    Args:
        creator_id: Creator the views belong to
        period_start: Start of the analyzed period
        period_end: End of the analyzed period
        views: Joined views of the items created in the period

    Returns:
        ContentComparison with one entry per content type that has data
    """
    comparisons = []
    for content_type, members in group_by(views, lambda v: tables.content_type_name(v.content.platform)).items():
        snapshots = [s for v in members for s in v.snapshots]
        if not snapshots:
            continue
        comparisons.append(ContentTypeComparison(
            content_type=content_type,
            metrics=type_metrics(members),
            performance_score=performance_score(snapshots),
            sample_size=len(members),
            top_performers=top_performers(members),
            key_insights=type_insights(content_type, members),
            performance_ratio=performance_ratio(members, views),
        ))

    logger.info(f"Compared {len(comparisons)} content types for creator {creator_id}")

    return ContentComparison(
        creator_id=creator_id,
        period_start=period_start,
        period_end=period_end,
        type_comparisons=comparisons,
        performance_trends=monthly_trends(views),
        cross_platform_insights=cross_type_insights(comparisons),
        recommended_strategies=recommended_strategies(comparisons),
    )
