"""
Unit tests for audience insights.
"""

from datetime import datetime

import pytest

from creator_analytics.analytics.audience import (
    SIMULATED_FIELDS, build_audience_insights, follower_growth_rate,
    platform_engagement, simulated_sensitivity
)
from creator_analytics.models.base import Platform
from creator_analytics.models.content import FollowerSnapshot, JoinedContentView

JAN = datetime(2024, 1, 1)
FEB = datetime(2024, 2, 1)
MAR = datetime(2024, 3, 1)


def follower_snapshot(date, followers, platform=Platform.YOUTUBE):
    return FollowerSnapshot(creator_id="creator-1", platform=platform, date=date, followers=followers)


class TestFollowerGrowth:
    """Tests for follower growth."""

    def test_sums_platforms_per_date(self):
        """Test growth compares the summed totals of the first and last date."""
        history = [
            follower_snapshot(MAR, 200, Platform.YOUTUBE),
            follower_snapshot(JAN, 100, Platform.YOUTUBE),
            follower_snapshot(JAN, 100, Platform.INSTAGRAM),
            follower_snapshot(MAR, 100, Platform.INSTAGRAM),
            follower_snapshot(FEB, 5000, Platform.YOUTUBE),
        ]
        assert follower_growth_rate(history) == pytest.approx(0.5)

    def test_needs_two_dates(self):
        """Test a single observation date has no growth."""
        history = [
            follower_snapshot(JAN, 100, Platform.YOUTUBE),
            follower_snapshot(JAN, 200, Platform.INSTAGRAM),
        ]
        assert follower_growth_rate(history) == 0.0
        assert follower_growth_rate([]) == 0.0

    def test_zero_starting_audience(self):
        """Test growth from zero followers is reported as zero."""
        history = [follower_snapshot(JAN, 0), follower_snapshot(FEB, 100)]
        assert follower_growth_rate(history) == 0.0


class TestAudienceInsights:
    """Tests for the combined audience insights."""

    def test_platform_engagement(self, make_item, make_snapshot):
        """Test engagement is aggregated per snapshot platform."""
        view = JoinedContentView(content=make_item(), snapshots=[
            make_snapshot(views=1000, likes=100, platform=Platform.YOUTUBE),
            make_snapshot(views=3000, likes=100, platform=Platform.YOUTUBE),
            make_snapshot(views=500, shares=10, platform=Platform.TIKTOK),
        ])

        engagement = platform_engagement([view])

        assert engagement == pytest.approx({Platform.YOUTUBE: 0.05, Platform.TIKTOK: 0.02})

    def test_real_and_simulated_fields(self, creator, make_view):
        """Test real fields come from the data and placeholders are flagged."""
        history = [follower_snapshot(JAN, 1000), follower_snapshot(FEB, 1100)]

        insights = build_audience_insights(creator, JAN, FEB, [make_view(rate=0.04)], history)

        assert insights.creator_id == "creator-1"
        assert insights.total_audience_size == 12000
        assert insights.growth_rate == pytest.approx(0.1)
        assert insights.platform_engagement == pytest.approx({Platform.YOUTUBE: 0.04})
        assert insights.simulated_fields == SIMULATED_FIELDS
        assert sum(insights.demographic_breakdown.values()) == pytest.approx(1.0)
        assert len(insights.key_segments) == 2


class TestSensitivity:
    """Tests for the simulated audience sensitivity."""

    def test_simulated_table(self):
        """Test the sensitivity table is flagged as simulated."""
        sensitivity = simulated_sensitivity("creator-1")
        assert sensitivity.simulated
        assert sensitivity.overall_sensitivity_score == 0.7
        assert set(sensitivity.timing_sensitivity) == {"Morning", "Afternoon", "Evening"}
