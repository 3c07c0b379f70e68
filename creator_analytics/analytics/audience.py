"""
Audience insights for a creator.

Audience size, growth and per-platform engagement come from stored data.
Demographics, segments, interests, engagement patterns, content
preferences, loyalty and sensitivity are illustrative placeholders and
are reported as simulated.
"""

from collections import defaultdict
from datetime import datetime
from typing import Dict, List

from creator_analytics.analytics.metrics import aggregate_engagement_rate
from creator_analytics.analytics.patterns import group_by
from creator_analytics.models.base import Platform
from creator_analytics.models.content import Creator, FollowerSnapshot, JoinedContentView
from creator_analytics.models.insights import (
    AudienceInsights, AudienceSegment, AudienceSensitivity, LoyaltyMetrics
)

SIMULATED_FIELDS = [
    "demographic_breakdown",
    "key_segments",
    "interest_distribution",
    "engagement_patterns",
    "content_preferences",
    "loyalty_metrics",
]

DEMOGRAPHICS = {
    "18-24": 0.25,
    "25-34": 0.42,
    "35-44": 0.18,
    "45-54": 0.10,
    "55+": 0.05,
}

INTERESTS = {
    "Development": 0.35,
    "Design": 0.18,
    "Productivity": 0.22,
    "Business": 0.15,
    "AI": 0.10,
}

ENGAGEMENT_PATTERNS = [
    "Higher engagement on weekdays between 18h and 21h",
    "Visual content gets more shares than text",
    "Posts about development generate more comments",
    "Higher retention on videos lasting 8-12 minutes",
]

CONTENT_PREFERENCES = {
    "Video tutorials": 0.32,
    "Technical articles": 0.28,
    "Product reviews": 0.18,
    "Case studies": 0.12,
    "Infographics": 0.10,
}


def follower_growth_rate(history: List[FollowerSnapshot]) -> float:
    """
    Relative follower growth between the earliest and latest observation.

    Followers are summed across platforms per observation date. Returns 0.0
    with fewer than two dates or when the starting total is 0.
    """
    totals: Dict[datetime, int] = defaultdict(int)
    for snapshot in history:
        totals[snapshot.date] += snapshot.followers

    if len(totals) < 2:
        return 0.0

    dates = sorted(totals)
    starting = totals[dates[0]]
    ending = totals[dates[-1]]
    if starting == 0:
        return 0.0
    return (ending - starting) / starting


def platform_engagement(views: List[JoinedContentView]) -> Dict[Platform, float]:
    snapshots = [s for v in views for s in v.snapshots]
    return {
        platform: aggregate_engagement_rate(members)
        for platform, members in group_by(snapshots, lambda s: s.platform).items()
    }


def key_segments() -> List[AudienceSegment]:
    return [
        AudienceSegment(
            segment_name="Technology professionals",
            percentage=0.45,
            key_characteristics=["Interested in development", "IT professionals", "25-34 years old"],
            preferred_content=["Technical tutorials", "Technology reviews", "Industry news"],
            engagement_rate=0.12,
            growth_rate=0.08,
        ),
        AudienceSegment(
            segment_name="Productivity enthusiasts",
            percentage=0.28,
            key_characteristics=["Busy professionals", "Students", "Interested in self-development"],
            preferred_content=["Productivity tips", "Automations", "Useful tools"],
            engagement_rate=0.09,
            growth_rate=0.06,
        ),
    ]


def loyalty_metrics() -> LoyaltyMetrics:
    return LoyaltyMetrics(
        return_rate=0.65,
        average_engagement_frequency=2.3,
        content_consumption_rate=0.42,
        advocacy_score=0.18,
        loyalty_factors=[
            "Consistent content quality",
            "Active interaction in the comments",
            "Platform-exclusive content",
        ],
    )


def build_audience_insights(
    creator: Creator,
    period_start: datetime,
    period_end: datetime,
    views: List[JoinedContentView],
    follower_history: List[FollowerSnapshot]
) -> AudienceInsights:
    return AudienceInsights(
        creator_id=creator.id,
        period_start=period_start,
        period_end=period_end,
        total_audience_size=creator.total_followers,
        growth_rate=follower_growth_rate(follower_history),
        platform_engagement=platform_engagement(views),
        demographic_breakdown=dict(DEMOGRAPHICS),
        key_segments=key_segments(),
        interest_distribution=dict(INTERESTS),
        engagement_patterns=list(ENGAGEMENT_PATTERNS),
        content_preferences=dict(CONTENT_PREFERENCES),
        loyalty_metrics=loyalty_metrics(),
        simulated_fields=list(SIMULATED_FIELDS),
    )


def simulated_sensitivity(creator_id: str) -> AudienceSensitivity:
    return AudienceSensitivity(
        creator_id=creator_id,
        content_type_sensitivity={"Video": 0.8, "Image": 0.7, "Text": 0.5},
        topic_sensitivity={"Tutorial": 0.9, "News": 0.6, "Opinion": 0.5},
        style_sensitivity={"Informal": 0.8, "Technical": 0.6, "Humorous": 0.7},
        timing_sensitivity={"Morning": 0.7, "Afternoon": 0.8, "Evening": 0.6},
        overall_sensitivity_score=0.7,
    )
