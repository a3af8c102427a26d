"""
Dashboard services module
"""

from .feed_cost_analytics import FeedCostAnalyticsService
from .feed_cost_trends import TimeRange

__all__ = [
    'FeedCostAnalyticsService',
    'TimeRange',
]
