"""
High performance pattern extraction.

Every pattern follows the same pipeline: group the top ranked items,
aggregate each group to a mean engagement, rank the groups and take the
best few.
"""

import logging
from collections import Counter, defaultdict
from typing import Callable, Dict, Hashable, List, Optional, TypeVar

from creator_analytics.analytics import tables
from creator_analytics.analytics.metrics import (
    engagement_rate, engagement_score, mean, pearson_like_correlation,
    weighted_engagement_score
)
from creator_analytics.analytics.trends import topic_growth_trend
from creator_analytics.models.base import Platform
from creator_analytics.models.content import JoinedContentView, PerformanceSnapshot
from creator_analytics.models.insights import (
    BestTimeSlot, ContentPattern, FormatPattern, HighPerformancePatterns,
    StylePattern, TimingPattern, TopicPattern
)

logger = logging.getLogger(__name__)

T = TypeVar("T")
K = TypeVar("K", bound=Hashable)

TOP_DAYS = 3
TOP_HOURS = 3
TOP_SLOTS_PER_PLATFORM = 3
TOP_TOPICS = 5
MAX_RELATED_TOPICS = 3
MAX_KEYWORDS = 5
MIN_KEYWORD_LENGTH = 3
MIN_GROUP_SIZE = 2
TOP_HIGH_PERFORMING_FORMATS = 5
PATTERN_EXAMPLES = 5
MIN_PATTERN_MATCHES = 3

CONFIDENCE_STEPS = [(5, 0.3), (10, 0.5), (20, 0.7), (50, 0.85)]
MAX_CONFIDENCE = 0.95


def group_by(items: List[T], key: Callable[[T], K]) -> Dict[K, List[T]]:
    """Group items by key, preserving first-seen order of the keys."""
    groups: Dict[K, List[T]] = defaultdict(list)
    for item in items:
        groups[key(item)].append(item)
    return dict(groups)


def view_score(view: JoinedContentView) -> float:
    return engagement_score(view.snapshots)


def mean_view_score(views: List[JoinedContentView]) -> float:
    return mean([view_score(v) for v in views])


def mean_snapshot_rate(snapshots: List[PerformanceSnapshot]) -> float:
    return mean([engagement_rate(s) for s in snapshots])


def rank_top_views(views: List[JoinedContentView], top_n: int) -> List[JoinedContentView]:
    """Best ``top_n`` views with performance data, by weighted engagement."""
    with_data = [v for v in views if v.has_performance]
    ranked = sorted(with_data, key=lambda v: weighted_engagement_score(v.snapshots), reverse=True)
    return ranked[:top_n]


def confidence_from_sample(sample_size: int) -> float:
    """Step function mapping a sample size onto a confidence score."""
    for bound, confidence in CONFIDENCE_STEPS:
        if sample_size < bound:
            return confidence
    return MAX_CONFIDENCE


# Timing

def analyze_timing(views: List[JoinedContentView]) -> TimingPattern:
    """Best weekdays, hours and per-platform slots by mean snapshot engagement."""
    snapshots = [s for v in views for s in v.snapshots]

    day_groups = group_by(snapshots, lambda s: s.date.weekday())
    ranked_days = sorted(day_groups.items(), key=lambda kv: mean_snapshot_rate(kv[1]), reverse=True)

    hour_groups = group_by(snapshots, lambda s: s.date.hour)
    ranked_hours = sorted(hour_groups.items(), key=lambda kv: mean_snapshot_rate(kv[1]), reverse=True)

    platform_times: Dict[Platform, List[BestTimeSlot]] = {}
    for platform, platform_snapshots in group_by(snapshots, lambda s: s.platform).items():
        slots = group_by(platform_snapshots, lambda s: (s.date.weekday(), s.date.hour))
        ranked_slots = sorted(slots.items(), key=lambda kv: mean_snapshot_rate(kv[1]), reverse=True)

        best = []
        for (weekday, hour), members in ranked_slots[:TOP_SLOTS_PER_PLATFORM]:
            avg = mean_snapshot_rate(members)
            best.append(BestTimeSlot(
                day=tables.WEEKDAY_NAMES[weekday],
                hour=hour,
                engagement_score=avg,
                sample_size=len(members),
                rationale=f"Based on {len(members)} posts with average engagement of {avg:.2%}",
            ))
        platform_times[platform] = best

    sample_size = sum(len(g) for g in day_groups.values()) + sum(len(g) for g in hour_groups.values())

    return TimingPattern(
        best_days=[tables.WEEKDAY_NAMES[day] for day, _ in ranked_days[:TOP_DAYS]],
        best_hours=[hour for hour, _ in ranked_hours[:TOP_HOURS]],
        platform_specific_times=platform_times,
        confidence_score=confidence_from_sample(sample_size),
    )


# Topics

def extract_topic(title: str) -> str:
    """
    Approximate the topic of a title.

    Uses the text before the first separator found (checked in a fixed
    order, and only when it is not the first character); otherwise the
    first 30 characters of the title.
    """
    for separator in tables.TOPIC_SEPARATORS:
        index = title.find(separator)
        if index > 0:
            return title[:index].strip()
    return title[:tables.TOPIC_FALLBACK_LENGTH]


def related_topics(topic: str, views: List[JoinedContentView]) -> List[str]:
    """Other topics whose titles contain, or are contained in, ``topic``."""
    lowered = topic.lower()
    related: List[str] = []
    for view in views:
        title = view.content.title
        if not title or title == topic:
            continue
        if lowered in title.lower() or title.lower() in lowered:
            candidate = extract_topic(title)
            if candidate != topic and candidate not in related:
                related.append(candidate)
        if len(related) >= MAX_RELATED_TOPICS:
            break
    return related


def extract_keywords(views: List[JoinedContentView]) -> List[str]:
    """Most frequent words longer than three characters in titles and bodies."""
    counter: Counter = Counter()
    for view in views:
        text = f"{view.content.title} {view.content.body}"
        counter.update(w.lower() for w in text.split() if len(w) > MIN_KEYWORD_LENGTH)
    return [word for word, _ in counter.most_common(MAX_KEYWORDS)]


def analyze_topics(views: List[JoinedContentView]) -> List[TopicPattern]:
    titled = [v for v in views if v.content.title]
    groups = group_by(titled, lambda v: extract_topic(v.content.title))
    eligible = [(topic, members) for topic, members in groups.items() if len(members) >= MIN_GROUP_SIZE]
    ranked = sorted(eligible, key=lambda kv: mean_view_score(kv[1]), reverse=True)

    return [
        TopicPattern(
            topic_name=topic,
            engagement_score=mean_view_score(members),
            item_count=len(members),
            growth_trend=topic_growth_trend(members),
            related_topics=related_topics(topic, views),
            keywords=extract_keywords(members),
        )
        for topic, members in ranked[:TOP_TOPICS]
    ]


# Formats

def optimal_size(views: List[JoinedContentView]) -> str:
    """Body-length bucket with the best mean engagement; ties go to the fuller bucket."""
    with_body = [v for v in views if v.content.body]
    groups = group_by(
        with_body,
        lambda v: tables.bucket_label(len(v.content.body), tables.SIZE_BUCKETS, tables.SIZE_BUCKET_OVERFLOW)
    )
    if not groups:
        return tables.UNDETERMINED_SIZE
    best = max(groups.items(), key=lambda kv: (mean_view_score(kv[1]), len(kv[1])))
    return best[0]


def best_practices_for(platform: Platform) -> List[str]:
    practices = list(tables.FORMAT_BEST_PRACTICES.get(platform, []))
    practices.append(tables.UNIVERSAL_BEST_PRACTICE)
    return practices


def analyze_formats(views: List[JoinedContentView]) -> List[FormatPattern]:
    groups = group_by(views, lambda v: v.content.platform)
    ranked = sorted(groups.items(), key=lambda kv: mean_view_score(kv[1]), reverse=True)

    patterns = []
    for platform, members in ranked:
        snapshots = [s for v in members for s in v.snapshots]
        snapshot_groups = group_by(snapshots, lambda s: s.platform)
        best_platforms = [
            p for p, _ in sorted(
                snapshot_groups.items(), key=lambda kv: mean_snapshot_rate(kv[1]), reverse=True
            )
        ]
        patterns.append(FormatPattern(
            format_name=tables.format_name(platform),
            platform=platform,
            engagement_score=mean_view_score(members),
            best_platforms=best_platforms,
            optimal_size=optimal_size(members),
            best_practices=best_practices_for(platform),
        ))
    return patterns


# Styles

def _contains_any(text: str, keywords: List[str]) -> bool:
    lowered = text.lower()
    return any(k.lower() in lowered for k in keywords)


def _style_predicates() -> Dict[str, Callable[[JoinedContentView], bool]]:
    predicates: Dict[str, Callable[[JoinedContentView], bool]] = {
        name: (lambda v, kw=keywords: _contains_any(v.content.body, kw))
        for name, keywords in tables.STYLE_KEYWORDS.items()
    }
    predicates[tables.CONCISE_STYLE] = lambda v: len(v.content.body) < tables.CONCISE_MAX_LENGTH
    return predicates


STYLE_ORDER = ["Storytelling", "Inspirational", "Concise", "Call-to-Action"]


def analyze_styles(views: List[JoinedContentView]) -> List[StylePattern]:
    predicates = _style_predicates()
    patterns = []
    for name in STYLE_ORDER:
        matching = [v for v in views if predicates[name](v)]
        if len(matching) < MIN_GROUP_SIZE:
            continue
        patterns.append(StylePattern(
            style_name=name,
            description=tables.STYLE_DESCRIPTIONS[name],
            audience_reception=mean_view_score(matching),
            key_characteristics=list(tables.STYLE_CHARACTERISTICS[name]),
            example_content_ids=[v.content_id for v in matching],
        ))
    return patterns


# Correlations

def _publish_hour(view: JoinedContentView) -> Optional[int]:
    published = view.content.published_at
    return published.hour if published is not None else None


def _flag(condition: bool) -> float:
    return 1.0 if condition else 0.0


def attribute_correlations(views: List[JoinedContentView]) -> Dict[str, float]:
    """Correlation of simple content attributes with engagement score."""
    scores = [view_score(v) for v in views]
    hours = [_publish_hour(v) for v in views]

    attributes = {
        "Title length": [float(len(v.content.title)) for v in views],
        "Body length": [float(len(v.content.body)) for v in views],
        "Media presence": [_flag(v.content.has_media) for v in views],
        "Morning publishing": [_flag(h is not None and 6 <= h < 12) for h in hours],
        "Afternoon publishing": [_flag(h is not None and 12 <= h < 18) for h in hours],
        "Evening publishing": [_flag(h is not None and (h >= 18 or h < 6)) for h in hours],
    }
    return {
        name: pearson_like_correlation(values, scores)
        for name, values in attributes.items()
    }


def high_performing_formats(views: List[JoinedContentView]) -> Dict[str, float]:
    snapshots = [s for v in views for s in v.snapshots]
    groups = group_by(snapshots, lambda s: s.platform)
    eligible = [(p, members) for p, members in groups.items() if len(members) >= MIN_GROUP_SIZE]
    ranked = sorted(eligible, key=lambda kv: mean_snapshot_rate(kv[1]), reverse=True)
    return {
        f"Content for {platform.value}": mean_snapshot_rate(members)
        for platform, members in ranked[:TOP_HIGH_PERFORMING_FORMATS]
    }


# Named archetypes

def _is_educational(view: JoinedContentView) -> bool:
    return (
        _contains_any(view.content.title, [tables.EDUCATIONAL_TITLE_KEYWORD])
        or _contains_any(view.content.body, [tables.EDUCATIONAL_BODY_KEYWORD])
    )


def content_patterns(views: List[JoinedContentView]) -> List[ContentPattern]:
    patterns = []

    high = [v for v in views if view_score(v) > tables.HIGH_ENGAGEMENT_THRESHOLD][:PATTERN_EXAMPLES]
    if len(high) >= MIN_PATTERN_MATCHES:
        patterns.append(ContentPattern(
            pattern_name="High engagement content",
            description="Posts that draw a high level of audience interaction",
            confidence_score=0.8,
            average_engagement=mean_view_score(high),
            example_content_ids=[v.content_id for v in high],
            attributes=["Interactive", "Resonant", "Impactful"],
        ))

    educational = [v for v in views if _is_educational(v)][:PATTERN_EXAMPLES]
    if len(educational) >= MIN_PATTERN_MATCHES:
        patterns.append(ContentPattern(
            pattern_name="Educational content",
            description="Tutorials and step-by-step guides with detailed explanations",
            confidence_score=0.75,
            average_engagement=mean_view_score(educational),
            example_content_ids=[v.content_id for v in educational],
            attributes=["Educational", "Informative", "Tutorial"],
        ))

    return patterns


def extract_patterns(
    creator_id: str,
    views: List[JoinedContentView],
    top_posts_count: int
) -> HighPerformancePatterns:
    """
    Run every pattern analysis over the creator's top ranked views.

    Args:
        creator_id: Creator the views belong to
        views: All joined views of the creator
        top_posts_count: Number of top items to analyze

    Returns:
        HighPerformancePatterns assembled from the top items
    """
    top = rank_top_views(views, top_posts_count)
    logger.info(f"Extracting patterns from {len(top)} of {len(views)} items for creator {creator_id}")

    return HighPerformancePatterns(
        creator_id=creator_id,
        analyzed_content_count=len(top),
        identified_patterns=content_patterns(top),
        timing_patterns=[analyze_timing(top)],
        topic_patterns=analyze_topics(top),
        format_patterns=analyze_formats(top),
        style_patterns=analyze_styles(top),
        attribute_correlations=attribute_correlations(top),
        high_performing_formats=high_performing_formats(top),
    )
