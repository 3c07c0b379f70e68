"""
Viral potential scoring.
"""

from collections import defaultdict
from typing import Dict, List, Sequence

from creator_analytics.analytics.metrics import safe_divide, share_rate
from creator_analytics.analytics.trends import engagement_speed, growth_rate
from creator_analytics.models.base import Platform
from creator_analytics.models.content import PerformanceSnapshot
from creator_analytics.models.insights import ViralPotential

SHARE_RATE_WEIGHT = 0.5
GROWTH_RATE_WEIGHT = 0.3
ENGAGEMENT_SPEED_WEIGHT = 0.2

# Strictly-greater thresholds, highest first
ASSESSMENT_LEVELS = [
    (8.0, "Extremely high viral potential"),
    (6.0, "High viral potential"),
    (4.0, "Moderate viral potential"),
    (2.0, "Low viral potential"),
]
LOWEST_ASSESSMENT = "Very low viral potential"

HIGH_SHARE_RATE = 5.0
RAPID_GROWTH_RATE = 50.0
FAST_ENGAGEMENT_SPEED = 7.0


def viral_score(share: float, growth: float, speed: float) -> float:
    """Weighted sum of share rate, growth rate and engagement speed."""
    return (
        share * SHARE_RATE_WEIGHT
        + growth * GROWTH_RATE_WEIGHT
        + speed * ENGAGEMENT_SPEED_WEIGHT
    )


def assess(score: float) -> str:
    """Qualitative label for a viral score."""
    for threshold, label in ASSESSMENT_LEVELS:
        if score > threshold:
            return label
    return LOWEST_ASSESSMENT


def key_factors(share: float, growth: float, speed: float) -> List[str]:
    factors = []
    if share > HIGH_SHARE_RATE:
        factors.append("High share rate")
    if growth > RAPID_GROWTH_RATE:
        factors.append("Rapid view growth")
    if speed > FAST_ENGAGEMENT_SPEED:
        factors.append("Fast engagement")
    return factors


def share_probabilities(snapshots: Sequence[PerformanceSnapshot]) -> Dict[Platform, float]:
    """Shares per hundred views for each platform the content appeared on."""
    views: Dict[Platform, int] = defaultdict(int)
    shares: Dict[Platform, int] = defaultdict(int)
    for snapshot in snapshots:
        views[snapshot.platform] += snapshot.views
        shares[snapshot.platform] += snapshot.shares
    return {
        platform: safe_divide(shares[platform], views[platform]) * 100
        for platform in views
    }


def score_viral_potential(ordered: Sequence[PerformanceSnapshot]) -> ViralPotential:
    """
    Score the viral potential of one content item.

    Args:
        ordered: The item's snapshots sorted by date

    Returns:
        ViralPotential with score, assessment, key factors and per-platform
        share probabilities
    """
    share = share_rate(ordered)
    growth = growth_rate(ordered)
    speed = engagement_speed(ordered)
    score = viral_score(share, growth, speed)

    return ViralPotential(
        score=score,
        assessment=assess(score),
        share_rate=share,
        growth_rate=growth,
        engagement_speed=speed,
        key_factors=key_factors(share, growth, speed),
        share_probabilities=share_probabilities(ordered),
    )
