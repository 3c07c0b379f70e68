"""
Metric primitives for Creator Analytics.

Pure numeric helpers shared by every analyzer. All divisions guard a zero
denominator and yield 0 instead of raising.
"""

import math
from typing import Iterable, List, Sequence

from creator_analytics.models.content import PerformanceSnapshot


def safe_divide(numerator: float, denominator: float) -> float:
    """Divide, returning 0.0 when the denominator is zero or negative."""
    if denominator <= 0:
        return 0.0
    return numerator / denominator


def mean(values: Sequence[float]) -> float:
    """Arithmetic mean; 0.0 for an empty sequence."""
    if not values:
        return 0.0
    return sum(values) / len(values)


def engagement_rate(snapshot: PerformanceSnapshot) -> float:
    """(likes + comments + shares) per view of a single snapshot."""
    if snapshot.views == 0:
        return 0.0
    return snapshot.total_engagements / max(1, snapshot.views)


def engagement_score(snapshots: Iterable[PerformanceSnapshot]) -> float:
    """Mean engagement rate over a set of snapshots."""
    return mean([engagement_rate(s) for s in snapshots])


def weighted_engagement(snapshot: PerformanceSnapshot) -> float:
    """Engagement per view with comments weighted x2 and shares x3."""
    if snapshot.views == 0:
        return 0.0
    weighted = snapshot.likes + 2 * snapshot.comments + 3 * snapshot.shares
    return weighted / max(1, snapshot.views)


def weighted_engagement_score(snapshots: Iterable[PerformanceSnapshot]) -> float:
    """Mean weighted engagement over a set of snapshots."""
    return mean([weighted_engagement(s) for s in snapshots])


def aggregate_engagement_rate(snapshots: Iterable[PerformanceSnapshot]) -> float:
    """Total engagements divided by total views."""
    snapshots = list(snapshots)
    views = sum(s.views for s in snapshots)
    engagements = sum(s.total_engagements for s in snapshots)
    return safe_divide(engagements, views)


def share_rate(snapshots: Iterable[PerformanceSnapshot]) -> float:
    """Shares per hundred views."""
    snapshots = list(snapshots)
    views = sum(s.views for s in snapshots)
    shares = sum(s.shares for s in snapshots)
    return safe_divide(shares, views) * 100


def variance(values: Sequence[float]) -> float:
    """Population variance; 0.0 for fewer than two values."""
    if len(values) < 2:
        return 0.0
    avg = mean(values)
    return sum((v - avg) ** 2 for v in values) / len(values)


def pearson_like_correlation(xs: Sequence[float], ys: Sequence[float]) -> float:
    """
    Pearson correlation of two paired series.

    Returns 0.0 when fewer than three pairs are available or when either
    series has no spread. Pairs beyond the shorter series are ignored.
    """
    n = min(len(xs), len(ys))
    if n < 3:
        return 0.0

    xs: List[float] = list(xs[:n])
    ys: List[float] = list(ys[:n])
    mean_x = mean(xs)
    mean_y = mean(ys)

    numerator = 0.0
    denom_x = 0.0
    denom_y = 0.0
    for x, y in zip(xs, ys):
        dx = x - mean_x
        dy = y - mean_y
        numerator += dx * dy
        denom_x += dx * dx
        denom_y += dy * dy

    if denom_x <= 0 or denom_y <= 0:
        return 0.0
    return numerator / math.sqrt(denom_x * denom_y)
