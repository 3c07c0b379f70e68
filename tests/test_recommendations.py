"""
Unit tests for the recommendation generator.

Tests cover:
- Topic and trending topic recommendations
- Format recommendations and best practices
- Strategies, tactics and monetization opportunities
"""

from datetime import datetime, timedelta

import pytest

from creator_analytics.analytics.recommendations import (
    format_best_practices, generate_recommendations, ideal_length, potential_reach,
    recommend_formats, recommend_monetization, recommend_strategies,
    recommend_tactics, recommend_topics
)
from creator_analytics.models.base import Platform, RecommendationCategory
from creator_analytics.models.content import Creator, JoinedContentView

MONDAY = datetime(2024, 1, 1, 12, 0)
SATURDAY = datetime(2024, 1, 6, 12, 0)


class TestTopicRecommendations:
    """Tests for topic recommendations."""

    @pytest.mark.parametrize("total_views,count,expected", [
        (25000, 2, "Very high (10K+ views)"),
        (12000, 2, "High (5K-10K views)"),
        (2002, 2, "Medium (1K-5K views)"),
        (2000, 2, "Moderate (under 1K views)"),
        (0, 0, "Moderate (under 1K views)"),
    ])
    def test_potential_reach(self, total_views, count, expected):
        """Test reach labels from the average views per item."""
        assert potential_reach(total_views, count) == expected

    def test_own_topics_then_trending(self, make_view):
        """Test best own topics come first, followed by two trending topics."""
        views = [
            make_view(rate=0.02, title="Python Tips: lists"),
            make_view(rate=0.04, title="Python Tips: dicts"),
            make_view(rate=0.09, title="Cooking: pasta"),
            make_view(rate=0.11, title="Cooking: risotto"),
            make_view(rate=0.30, title="Lonely: post"),
        ]

        topics = recommend_topics(views)

        assert [t.topic for t in topics] == [
            "Cooking", "Python Tips", "Artificial Intelligence", "Sustainability"
        ]
        assert topics[0].title == "Create more content about Cooking"
        assert topics[0].score == pytest.approx(0.6)
        assert topics[0].potential_reach == "Moderate (under 1K views)"
        assert topics[0].category == RecommendationCategory.TOPIC
        assert topics[2].is_trending
        assert topics[2].score == 0.85

    def test_trending_topic_already_covered(self, make_view):
        """Test trending topics contained in an own topic are skipped."""
        views = [
            make_view(title="Artificial Intelligence: basics"),
            make_view(title="Artificial Intelligence: agents"),
        ]

        topics = recommend_topics(views)

        assert [t.topic for t in topics] == ["Artificial Intelligence", "Sustainability", "Web3"]

    def test_relevance_is_capped(self, make_view):
        """Test relevance never exceeds 0.95."""
        views = [
            make_view(rate=0.8, title="Viral: one"),
            make_view(rate=0.9, title="Viral: two"),
        ]
        assert recommend_topics(views)[0].score == 0.95


class TestFormatRecommendations:
    """Tests for format recommendations."""

    def test_platforms_need_two_items(self, make_view):
        """Test each eligible platform gets its ideal format."""
        views = [
            make_view(rate=0.05, platform=Platform.TIKTOK, body="x" * 50),
            make_view(rate=0.07, platform=Platform.TIKTOK, body="x" * 60),
            make_view(rate=0.02, platform=Platform.YOUTUBE, body="x" * 1500),
            make_view(rate=0.03, platform=Platform.YOUTUBE, body="x" * 1200),
            make_view(rate=0.50, platform=Platform.LINKEDIN),
        ]

        formats = recommend_formats(views)

        assert [f.platform for f in formats] == [Platform.TIKTOK, Platform.YOUTUBE]
        assert formats[0].format == "Vertical short video (15-60 seconds)"
        assert formats[0].title == "Vertical short video (15-60 seconds) on tiktok"
        assert formats[0].ideal_length == "Very short"
        assert formats[1].ideal_length == "Long"

    def test_best_practices_from_top_posts(self, make_view):
        """Test practices reflect what the best posts share."""
        views = [
            make_view(
                rate=0.09,
                title="A descriptive title that is clearly longer than fifty characters",
                body="Comente o que achou",
                media_url="https://cdn.example.com/a.jpg",
            ),
            make_view(
                rate=0.08,
                title="Another descriptive title well beyond the fifty character mark",
                media_url="https://cdn.example.com/b.jpg",
            ),
        ]

        practices = format_best_practices(views)

        assert practices == [
            "Include visual elements or media in every post",
            "Use descriptive titles longer than 50 characters",
            "Include clear calls to action in the content",
            "Post during peak engagement hours (18h-21h)",
        ]

    def test_ideal_length_default(self):
        """Test the default length without items."""
        assert ideal_length([]) == "Medium"


class TestStrategies:
    """Tests for strategy recommendations."""

    def test_weekday_focus(self, make_view):
        """Test weekday focus when the top posts were created on weekdays."""
        views = [make_view(created_at=MONDAY + timedelta(days=i * 7, hours=i)) for i in range(2)]
        views += [make_view(created_at=MONDAY + timedelta(hours=12))]

        strategies = recommend_strategies(views)

        assert strategies[0].title == "Focus publishing on weekdays, when the audience is most active"
        assert all(s.category == RecommendationCategory.STRATEGY for s in strategies)

    def test_weekend_focus(self, make_view):
        """Test weekend focus when most top posts were created on a weekend."""
        views = [
            make_view(rate=0.09, created_at=SATURDAY),
            make_view(rate=0.08, created_at=SATURDAY + timedelta(days=1)),
            make_view(rate=0.01, created_at=MONDAY),
        ]

        strategies = recommend_strategies(views)

        assert strategies[0].title == "Prioritize weekend publishing, when engagement is higher"
        assert len(strategies[0].example_content_ids) == 3

    @pytest.mark.parametrize("gap_days,expected", [
        (1, "Keep a high daily publishing frequency to maximize reach"),
        (3, "Keep publishing every 3 days"),
        (10, "Increase publishing frequency to at least 2x per week"),
    ])
    def test_cadence(self, make_view, gap_days, expected):
        """Test the cadence recommendation from the mean gap between posts."""
        views = [make_view(created_at=MONDAY + timedelta(days=gap_days * i)) for i in range(3)]
        assert recommend_strategies(views)[1].title == expected


class TestTactics:
    """Tests for tactic recommendations."""

    def test_questions_and_media_correlation(self, make_view):
        """Test question and correlation driven tactics."""
        views = [
            make_view(rate=0.10, body="O que acham?", media_url="https://cdn.example.com/a.jpg"),
            make_view(rate=0.09, body="Qual o seu favorito?", media_url="https://cdn.example.com/b.jpg"),
            make_view(rate=0.02, body="Alguma dúvida?"),
            make_view(rate=0.01, body="Outro post"),
        ]

        titles = [t.title for t in recommend_tactics(views)]

        assert titles[0] == "Ask the audience direct questions to encourage comments"
        assert "Posts with media go with higher engagement in your content" in titles
        assert titles[-1] == "Encourage shares by offering additional value"

    def test_storytelling(self, make_view):
        """Test long narrative posts trigger the storytelling tactic."""
        story = "Quando eu comecei minha carreira " + "x" * 1000
        views = [make_view(rate=0.05, body=story), make_view(rate=0.01, body="curto")]

        titles = [t.title for t in recommend_tactics(views)]

        assert "Use personal narratives and storytelling to connect with the audience" in titles


class TestMonetization:
    """Tests for monetization opportunities."""

    def test_audience_driven_opportunities(self, make_view):
        """Test partnerships and YouTube monetization for large channels."""
        creator = Creator(id="creator-1", total_followers=15000)
        views = [make_view(platform=Platform.YOUTUBE) for _ in range(10)]

        titles = [o.title for o in recommend_monetization(creator, views)]

        assert "Seek brand partnerships for sponsored content" in titles
        assert "Optimize YouTube monetization with videos longer than 8 minutes" in titles
        assert titles[-3:] == [
            "Add affiliate links to relevant content descriptions",
            "Offer consulting or mentoring services in your niche",
            "Create a subscription or community model for premium content",
        ]

    def test_small_creator_gets_baseline(self, make_view):
        """Test a small creator only gets the baseline opportunities."""
        creator = Creator(id="creator-1", total_followers=100)
        opportunities = recommend_monetization(creator, [make_view()])
        assert len(opportunities) == 3
        assert all(o.category == RecommendationCategory.MONETIZATION for o in opportunities)


class TestGenerateRecommendations:
    """Tests for the combined recommendations."""

    def test_ignores_items_without_performance(self, creator, make_view, make_item):
        """Test every category is filled and items without data are ignored."""
        views = [
            make_view(title="Python Tips: lists"),
            make_view(title="Python Tips: dicts"),
            JoinedContentView(content=make_item(title="Python Tips: sets"), snapshots=[]),
        ]

        result = generate_recommendations(creator, views)

        assert result.creator_id == "creator-1"
        assert result.topics[0].topic == "Python Tips"
        assert len(result.topics[0].example_content_ids) == 2
        assert result.formats
        assert result.strategies
        assert result.tactics
        assert result.monetization
