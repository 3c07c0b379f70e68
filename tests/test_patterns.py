"""
Unit tests for high performance pattern extraction.

Tests cover:
- Grouping, ranking and confidence helpers
- Timing, topic, format and style patterns
- Attribute correlations and named content patterns
"""

from datetime import datetime, timedelta

import pytest

from creator_analytics.analytics.patterns import (
    analyze_formats, analyze_styles, analyze_timing, analyze_topics,
    attribute_correlations, confidence_from_sample, content_patterns,
    extract_keywords, extract_patterns, extract_topic, group_by,
    high_performing_formats, optimal_size, rank_top_views, related_topics
)
from creator_analytics.models.base import Platform
from creator_analytics.models.content import JoinedContentView

MONDAY_NOON = datetime(2024, 1, 1, 12, 0)
TUESDAY_EVENING = datetime(2024, 1, 2, 18, 0)


class TestHelpers:
    """Tests for the shared pipeline helpers."""

    def test_group_by_preserves_key_order(self):
        """Test groups keep the order in which keys first appear."""
        groups = group_by(["b1", "a1", "b2", "c1"], lambda s: s[0])
        assert list(groups) == ["b", "a", "c"]
        assert groups["b"] == ["b1", "b2"]

    @pytest.mark.parametrize("sample_size,expected", [
        (0, 0.3),
        (4, 0.3),
        (5, 0.5),
        (9, 0.5),
        (10, 0.7),
        (19, 0.7),
        (20, 0.85),
        (49, 0.85),
        (50, 0.95),
        (500, 0.95),
    ])
    def test_confidence_steps(self, sample_size, expected):
        """Test the confidence step thresholds."""
        assert confidence_from_sample(sample_size) == expected

    def test_rank_top_views_uses_weighted_engagement(self, make_item, make_snapshot):
        """Test ranking weights shares above likes and skips items without data."""
        liked = make_item(id="liked")
        shared = make_item(id="shared")
        empty = make_item(id="empty")
        views = [
            JoinedContentView(content=liked, snapshots=[make_snapshot(content_id="liked", likes=50)]),
            JoinedContentView(content=shared, snapshots=[make_snapshot(content_id="shared", shares=20)]),
            JoinedContentView(content=empty, snapshots=[]),
        ]

        ranked = rank_top_views(views, 5)

        assert [v.content_id for v in ranked] == ["shared", "liked"]
        assert [v.content_id for v in rank_top_views(views, 1)] == ["shared"]


class TestTopicExtraction:
    """Tests for title-based topic extraction."""

    def test_text_before_separator(self):
        """Test the topic is the text before the first separator."""
        assert extract_topic("How to Cook: Pasta") == "How to Cook"
        assert extract_topic("Travel Vlog - Lisbon") == "Travel Vlog"

    def test_separator_order(self):
        """Test separators are checked in a fixed order."""
        assert extract_topic("Guide: Setup - Part 1") == "Guide: Setup"

    def test_leading_separator_is_ignored(self):
        """Test a separator at the first character does not split."""
        assert extract_topic("-Intro: Basics") == "-Intro"

    def test_fallback_to_first_thirty_characters(self):
        """Test titles without separators are cut at 30 characters."""
        title = "A very long title without any separators at al"
        assert len(title) == 46
        assert extract_topic(title) == title[:30]
        assert extract_topic("Short title") == "Short title"

    def test_related_topics_exclude_the_topic_itself(self, make_view):
        """Test related topics are other topics overlapping the title."""
        views = [
            make_view(title="Python Tips: lists"),
            make_view(title="Advanced Python Tips"),
            make_view(title="Cooking: pasta"),
        ]
        assert related_topics("Python Tips", views) == ["Advanced Python Tips"]

    def test_keywords(self, make_view):
        """Test keywords are the most frequent words longer than three characters."""
        views = [
            make_view(title="Python tips", body="python lists and dicts"),
            make_view(title="More python", body="dicts are fast"),
        ]
        keywords = extract_keywords(views)
        assert keywords[0] == "python"
        assert keywords[1] == "dicts"
        assert "and" not in keywords


class TestTimingPattern:
    """Tests for best days, hours and platform slots."""

    def test_best_days_hours_and_slots(self, make_item, make_snapshot):
        """Test slots are ranked by mean snapshot engagement."""
        item = make_item()
        view = JoinedContentView(content=item, snapshots=[
            make_snapshot(likes=50, date=MONDAY_NOON),
            make_snapshot(likes=100, date=TUESDAY_EVENING),
            make_snapshot(likes=30, date=MONDAY_NOON + timedelta(weeks=1)),
        ])

        timing = analyze_timing([view])

        assert timing.best_days == ["Tuesday", "Monday"]
        assert timing.best_hours == [18, 12]
        assert timing.confidence_score == 0.5

        slots = timing.platform_specific_times[Platform.YOUTUBE]
        assert [(s.day, s.hour) for s in slots] == [("Tuesday", 18), ("Monday", 12)]
        assert slots[1].sample_size == 2
        assert slots[1].engagement_score == pytest.approx(0.04)
        assert slots[1].rationale == "Based on 2 posts with average engagement of 4.00%"

    def test_empty_input(self):
        """Test timing over no items is empty with the lowest confidence."""
        timing = analyze_timing([])
        assert timing.best_days == []
        assert timing.platform_specific_times == {}
        assert timing.confidence_score == 0.3


class TestTopicPatterns:
    """Tests for topic grouping."""

    def test_topics_need_two_items(self, make_view):
        """Test only topics with at least two items are reported, best first."""
        views = [
            make_view(rate=0.02, title="Python Tips: lists"),
            make_view(rate=0.04, title="Python Tips: dicts"),
            make_view(rate=0.09, title="Cooking: pasta"),
            make_view(rate=0.10, title="Cooking: risotto"),
            make_view(rate=0.50, title="Single: post"),
            make_view(rate=0.50, title=""),
        ]

        topics = analyze_topics(views)

        assert [t.topic_name for t in topics] == ["Cooking", "Python Tips"]
        assert topics[0].item_count == 2
        assert topics[0].engagement_score == pytest.approx(0.095)


class TestFormatPatterns:
    """Tests for platform formats and size buckets."""

    def test_formats_ranked_by_engagement(self, make_view):
        """Test each platform becomes a format, best first."""
        views = [
            make_view(rate=0.02, platform=Platform.YOUTUBE),
            make_view(rate=0.08, platform=Platform.INSTAGRAM),
        ]

        formats = analyze_formats(views)

        assert [f.format_name for f in formats] == ["Image/Carousel", "Video"]
        assert formats[0].best_platforms == [Platform.INSTAGRAM]
        assert formats[0].best_practices[-1] == "Publishing consistently keeps the audience engaged"

    def test_platform_best_practices(self, make_view):
        """Test platform practices precede the universal one."""
        formats = analyze_formats([make_view(platform=Platform.YOUTUBE)])
        assert formats[0].best_practices == [
            "Videos with clear, descriptive titles perform better",
            "Including relevant keywords in the description increases reach",
            "Publishing consistently keeps the audience engaged",
        ]

    def test_unnamed_platform_uses_its_value(self, make_view):
        """Test platforms without a format name fall back to the platform value."""
        formats = analyze_formats([make_view(platform=Platform.PINTEREST)])
        assert formats[0].format_name == "pinterest"
        assert formats[0].best_practices == ["Publishing consistently keeps the audience engaged"]

    def test_optimal_size(self, make_view):
        """Test the size bucket with the best engagement wins."""
        views = [
            make_view(rate=0.01, body="x" * 50),
            make_view(rate=0.09, body="x" * 700),
        ]
        assert optimal_size(views) == "Medium (500-1000 characters)"
        assert optimal_size([make_view(body="")]) == "Undetermined"


class TestStylePatterns:
    """Tests for keyword and length based styles."""

    def test_styles_need_two_matches(self, make_view):
        """Test styles are reported in a fixed order when two items match."""
        views = [
            make_view(body="Quando eu comecei, tudo mudou"),
            make_view(body="Uma história sobre quando eu viajei"),
            make_view(body="Clique no link"),
        ]

        styles = analyze_styles(views)

        assert [s.style_name for s in styles] == ["Storytelling", "Concise"]
        assert len(styles[0].example_content_ids) == 2
        assert len(styles[1].example_content_ids) == 3


class TestCorrelationsAndPatterns:
    """Tests for attribute correlations and named patterns."""

    def test_media_presence_correlation(self, make_view):
        """Test media presence correlates with engagement when media posts do better."""
        views = [
            make_view(rate=0.10, media_url="https://cdn.example.com/a.jpg"),
            make_view(rate=0.12, media_url="https://cdn.example.com/b.jpg"),
            make_view(rate=0.01),
            make_view(rate=0.02),
        ]

        correlations = attribute_correlations(views)

        assert set(correlations) == {
            "Title length", "Body length", "Media presence",
            "Morning publishing", "Afternoon publishing", "Evening publishing",
        }
        assert correlations["Media presence"] > 0.9
        assert correlations["Title length"] == 0.0

    def test_high_performing_formats(self, make_item, make_snapshot):
        """Test platforms need two snapshots and are keyed by name."""
        item = make_item(platform=Platform.TIKTOK)
        view = JoinedContentView(content=item, snapshots=[
            make_snapshot(likes=60, platform=Platform.TIKTOK),
            make_snapshot(likes=40, platform=Platform.TIKTOK),
            make_snapshot(likes=90, platform=Platform.YOUTUBE),
        ])

        formats = high_performing_formats([view])

        assert formats == pytest.approx({"Content for tiktok": 0.05})

    def test_named_patterns(self, make_view):
        """Test high engagement and educational patterns need three matches."""
        views = [
            make_view(rate=0.06, title="Como editar vídeos"),
            make_view(rate=0.07, title="Como gravar áudio"),
            make_view(rate=0.08, title="Notas", body="aprenda a usar o app"),
            make_view(rate=0.01, title="Vlog"),
        ]

        patterns = content_patterns(views)

        assert [p.pattern_name for p in patterns] == ["High engagement content", "Educational content"]
        assert len(patterns[0].example_content_ids) == 3

    def test_extract_patterns_limits_to_top_items(self, make_view):
        """Test only the requested number of top items is analyzed."""
        views = [make_view(rate=r / 100) for r in range(1, 8)]

        result = extract_patterns("creator-1", views, 3)

        assert result.creator_id == "creator-1"
        assert result.analyzed_content_count == 3
        assert len(result.timing_patterns) == 1
