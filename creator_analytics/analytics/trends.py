"""
Trend analysis over ordered performance snapshots.
"""

from typing import List, Sequence

from creator_analytics.analytics.metrics import engagement_score, mean
from creator_analytics.models.content import JoinedContentView, PerformanceSnapshot

MIN_SPAN_HOURS = 1.0
MIN_TREND_ITEMS = 3


def _span_hours(ordered: Sequence[PerformanceSnapshot]) -> float:
    return (ordered[-1].date - ordered[0].date).total_seconds() / 3600.0


def _publish_key(view: JoinedContentView):
    published = view.content.published_at
    return (published is not None, published)


def growth_rate(ordered: Sequence[PerformanceSnapshot]) -> float:
    """
    Views gained per hour between the first and last snapshot.

    Args:
        ordered: Snapshots sorted by date

    Returns:
        Views per hour, or 0.0 with fewer than two points or a span under an hour
    """
    if len(ordered) < 2:
        return 0.0
    hours = _span_hours(ordered)
    if hours < MIN_SPAN_HOURS:
        return 0.0
    return (ordered[-1].views - ordered[0].views) / hours


def engagement_speed(ordered: Sequence[PerformanceSnapshot]) -> float:
    """Engagements gained per hour between the first and last snapshot."""
    if len(ordered) < 2:
        return 0.0
    hours = _span_hours(ordered)
    if hours < MIN_SPAN_HOURS:
        return 0.0
    return (ordered[-1].total_engagements - ordered[0].total_engagements) / hours


def topic_growth_trend(items: List[JoinedContentView]) -> float:
    """
    Percentage change of mean engagement between the older and newer half.

    Items without a publish date sort as the oldest. The split happens at
    ``len(items) // 2``.
    """
    if len(items) < MIN_TREND_ITEMS:
        return 0.0

    ordered = sorted(items, key=_publish_key)
    middle = len(ordered) // 2
    first_half = mean([engagement_score(v.snapshots) for v in ordered[:middle]])
    second_half = mean([engagement_score(v.snapshots) for v in ordered[middle:]])

    if first_half == 0:
        return 0.0
    return (second_half - first_half) / first_half * 100
