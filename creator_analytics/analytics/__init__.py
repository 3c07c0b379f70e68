"""
Analytics module for Creator Analytics.

This module contains the analytics engine facade and the analyzers it
runs over a creator's content and performance history.
"""

from creator_analytics.analytics.engine import ContentAnalyticsEngine

__all__ = ["ContentAnalyticsEngine"]
