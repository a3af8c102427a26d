"""
Feed inventory services module
"""

from .feed_cost_allocation import (
    FeedBagRecord,
    FeedPeriod,
    FlockChange,
    allocate_feed_periods,
)

__all__ = [
    'FeedBagRecord',
    'FeedPeriod',
    'FlockChange',
    'allocate_feed_periods',
]
