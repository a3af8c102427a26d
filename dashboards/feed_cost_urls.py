"""
Feed Cost Analytics URL Routes

All endpoints require authentication and return data scoped to the
requesting farmer's records.
"""

from django.urls import path
from .feed_cost_views import (
    FeedCostAnalysisView,
    FeedPeriodsView,
    PopulationTimelineView,
    MonthlyFeedCostView,
)

app_name = 'feed_cost'

urlpatterns = [
    path('', FeedCostAnalysisView.as_view(), name='analysis'),
    path('periods/', FeedPeriodsView.as_view(), name='periods'),
    path('timeline/', PopulationTimelineView.as_view(), name='timeline'),
    path('monthly/', MonthlyFeedCostView.as_view(), name='monthly'),
]
