"""
Engagement factor analysis.

Each analyzer buckets the creator's items along one dimension, reports
the mean engagement score per bucket and derives an importance score
from how much the buckets differ.
"""

import logging
import re
from typing import Callable, Dict, List, Optional

from creator_analytics.analytics import tables
from creator_analytics.analytics.metrics import mean, variance
from creator_analytics.analytics.patterns import group_by, mean_view_score, view_score
from creator_analytics.models.content import JoinedContentView
from creator_analytics.models.insights import EngagementFactor

logger = logging.getLogger(__name__)

DEFAULT_WEEKDAY = 0  # Monday
DEFAULT_HOUR = 12
MIN_BUCKET_SIZE = 2

_HASHTAG_RE = re.compile(tables.HASHTAG_PATTERN)


def _best_key(sub_factors: Dict[str, float]) -> Optional[str]:
    if not sub_factors:
        return None
    return max(sub_factors.items(), key=lambda kv: kv[1])[0]


def _bucket_means(
    views: List[JoinedContentView],
    key: Callable[[JoinedContentView], str],
    min_size: int = MIN_BUCKET_SIZE
) -> Dict[str, float]:
    groups = group_by(views, key)
    return {
        label: mean_view_score(members)
        for label, members in groups.items()
        if len(members) >= min_size
    }


def _positive_delta(candidates: List[Optional[float]], baseline: Optional[float]) -> float:
    """Mean improvement of the candidates that beat the baseline."""
    if baseline is None:
        return 0.0
    deltas = [c - baseline for c in candidates if c is not None and c > baseline]
    return mean(deltas)


def analyze_timing_factor(views: List[JoinedContentView]) -> EngagementFactor:
    day_scores: Dict[int, List[float]] = {day: [] for day in range(7)}
    hour_scores: Dict[int, List[float]] = {hour: [] for hour in range(24)}

    for view in views:
        published = view.content.published_at
        weekday = published.weekday() if published is not None else DEFAULT_WEEKDAY
        hour = published.hour if published is not None else DEFAULT_HOUR
        score = view_score(view)
        day_scores[weekday].append(score)
        hour_scores[hour].append(score)

    day_factors = {
        f"Day: {tables.WEEKDAY_NAMES[day]}": mean(scores)
        for day, scores in day_scores.items()
    }

    # Period value is the mean of the hourly means of the hours that have data
    period_factors = {}
    for label, hours in tables.DAY_PERIODS:
        hourly = [mean(hour_scores[h]) for h in hours if hour_scores[h]]
        period_factors[label] = mean(hourly)

    best_day = _best_key(day_factors).replace("Day: ", "")
    best_period = _best_key(period_factors)

    importance = (
        0.5
        + min(variance(list(day_factors.values())), 0.25)
        + min(variance(list(period_factors.values())), 0.25)
    )

    return EngagementFactor(
        name="Publishing time",
        description="Impact of the weekday and time of day on engagement",
        sub_factors={**day_factors, **period_factors},
        optimization_tips=[
            f"Prioritize publishing on {best_day} to maximize engagement",
            f"The {best_period} period shows the highest audience engagement",
            "Keep a consistent publishing schedule to build audience expectation",
            "Test different times periodically to follow changes in audience habits",
        ],
        importance=importance,
        confidence_score=0.8,
    )


def analyze_content_type_factor(views: List[JoinedContentView]) -> EngagementFactor:
    platform_groups = group_by(views, lambda v: v.content.platform)
    platform_means = {
        platform: mean_view_score(members)
        for platform, members in platform_groups.items()
        if len(members) >= MIN_BUCKET_SIZE
    }

    sub_factors = {f"Platform: {p.value}": score for p, score in platform_means.items()}

    with_media = [v for v in views if v.content.has_media]
    without_media = [v for v in views if not v.content.has_media]
    if with_media:
        sub_factors["With media"] = mean_view_score(with_media)
    if without_media:
        sub_factors["Without media"] = mean_view_score(without_media)

    tips = []
    if platform_means:
        best_platform = max(platform_means.items(), key=lambda kv: kv[1])[0]
        tips.append(f"Prioritize content for {best_platform.value}, where you get the most engagement")

    media_impact = 0.0
    if with_media and without_media:
        media_impact = abs(sub_factors["With media"] - sub_factors["Without media"])
        if sub_factors["With media"] > sub_factors["Without media"]:
            tips.append("Include media elements in every post to increase engagement")

    tips.append("Diversify formats to reach different audience segments")
    tips.append("Adapt content to the specifics of each platform")

    importance = (
        0.6
        + min(variance(list(platform_means.values())), 0.2)
        + min(media_impact, 0.2)
    )

    return EngagementFactor(
        name="Content type",
        description="Impact of content format and type on engagement",
        sub_factors=sub_factors,
        optimization_tips=tips,
        importance=importance,
        confidence_score=0.75,
    )


def analyze_content_length_factor(views: List[JoinedContentView]) -> EngagementFactor:
    sub_factors = _bucket_means(
        views,
        lambda v: tables.bucket_label(
            len(v.content.body), tables.LENGTH_FACTOR_BUCKETS, tables.LENGTH_FACTOR_OVERFLOW
        )
    )

    tips = []
    best = _best_key(sub_factors)
    if best is not None:
        tips.append(f"Content in the {best} category performs best")
    tips.extend([
        "Adjust content length to the platform and context",
        "Use short paragraphs and formatting to improve readability",
        "Consider the audience's attention span when choosing the length",
    ])

    return EngagementFactor(
        name="Content length",
        description="Impact of content size on engagement",
        sub_factors=sub_factors,
        optimization_tips=tips,
        importance=0.5 + min(variance(list(sub_factors.values())), 0.3),
        confidence_score=0.7,
    )


def _media_url(view: JoinedContentView) -> str:
    return (view.content.media_url or "").lower()


def analyze_visual_factor(views: List[JoinedContentView]) -> EngagementFactor:
    images = [v for v in views if _media_url(v).endswith(tables.IMAGE_EXTENSIONS)]
    videos = [v for v in views if _media_url(v).endswith(tables.VIDEO_EXTENSIONS)]
    no_visuals = [v for v in views if not v.content.has_media]

    image_score = mean_view_score(images) if images else None
    video_score = mean_view_score(videos) if videos else None
    none_score = mean_view_score(no_visuals) if no_visuals else None

    sub_factors = {}
    if image_score is not None:
        sub_factors["Images"] = image_score
    if video_score is not None:
        sub_factors["Videos"] = video_score
    if none_score is not None:
        sub_factors["No visual elements"] = none_score

    tips = []
    if image_score is not None and none_score is not None and image_score > none_score:
        tips.append("Include high-quality images in your posts to increase engagement")
    if video_score is not None and none_score is not None and video_score > none_score:
        tips.append("Videos significantly increase your audience's engagement")
    if video_score is not None and image_score is not None and video_score > image_score:
        tips.append("Prefer video content over static images when possible")
    tips.append("Use visuals that complement and reinforce your main message")
    tips.append("Keep a consistent visual identity to strengthen brand recognition")

    impact = _positive_delta([image_score, video_score], none_score)

    return EngagementFactor(
        name="Visual elements",
        description="Impact of images, videos and other visuals on engagement",
        sub_factors=sub_factors,
        optimization_tips=tips,
        importance=0.5 + min(impact, 0.4),
        confidence_score=0.75,
    )


def _has_explicit_cta(view: JoinedContentView) -> bool:
    body = view.content.body.lower()
    return any(keyword in body for keyword in tables.EXPLICIT_CTA_KEYWORDS)


def _has_question(view: JoinedContentView) -> bool:
    return "?" in view.content.body


def analyze_call_to_action_factor(views: List[JoinedContentView]) -> EngagementFactor:
    explicit = [v for v in views if _has_explicit_cta(v)]
    questions = [v for v in views if _has_question(v)]
    without = [v for v in views if not _has_explicit_cta(v) and not _has_question(v)]

    explicit_score = mean_view_score(explicit) if explicit else None
    question_score = mean_view_score(questions) if questions else None
    none_score = mean_view_score(without) if without else None

    sub_factors = {}
    if explicit_score is not None:
        sub_factors["Explicit CTA"] = explicit_score
    if question_score is not None:
        sub_factors["Questions"] = question_score
    if none_score is not None:
        sub_factors["No CTA"] = none_score

    tips = []
    if explicit_score is not None and none_score is not None and explicit_score > none_score:
        tips.append("Include explicit commands to drive specific audience actions")
    if question_score is not None and none_score is not None and question_score > none_score:
        tips.append("Ask the audience direct questions to encourage comments")
    tips.extend([
        "Vary CTA types to avoid repetition and audience fatigue",
        "Place the main CTA at the start or end of the content for visibility",
        "Create a sense of urgency in CTAs when appropriate",
    ])

    impact = _positive_delta([explicit_score, question_score], none_score)

    return EngagementFactor(
        name="Call to action",
        description="Impact of explicit calls to action on audience engagement",
        sub_factors=sub_factors,
        optimization_tips=tips,
        importance=0.4 + min(impact, 0.4),
        confidence_score=0.65,
    )


def hashtag_bucket(body: str) -> str:
    count = len(_HASHTAG_RE.findall(body))
    if count == 0:
        return "No hashtags"
    if count <= 3:
        return "1-3 hashtags"
    if count <= 7:
        return "4-7 hashtags"
    return "8+ hashtags"


def analyze_hashtag_factor(views: List[JoinedContentView]) -> EngagementFactor:
    sub_factors = _bucket_means(views, lambda v: hashtag_bucket(v.content.body))

    tips = []
    best = _best_key(sub_factors)
    if best is not None:
        tips.append(f"Use {best} to maximize engagement")
    tips.extend([
        "Use niche-specific hashtags to reach a relevant audience",
        "Mix popular and specific hashtags",
        "Adapt the hashtag strategy to each platform",
        "Monitor and regularly update the most relevant hashtags for your niche",
    ])

    return EngagementFactor(
        name="Hashtag usage",
        description="Impact of the number of hashtags on engagement",
        sub_factors=sub_factors,
        optimization_tips=tips,
        importance=0.3 + min(variance(list(sub_factors.values())), 0.3),
        confidence_score=0.6,
    )


FACTOR_ANALYZERS = [
    analyze_timing_factor,
    analyze_content_type_factor,
    analyze_content_length_factor,
    analyze_visual_factor,
    analyze_call_to_action_factor,
    analyze_hashtag_factor,
]


def identify_factors(views: List[JoinedContentView]) -> List[EngagementFactor]:
    """Run every factor analyzer and order the results by importance."""
    with_data = [v for v in views if v.has_performance]
    factors = [analyzer(with_data) for analyzer in FACTOR_ANALYZERS]
    logger.debug(f"Computed {len(factors)} engagement factors over {len(with_data)} items")
    return sorted(factors, key=lambda f: f.importance, reverse=True)
