"""
Feed Cost Analytics Views

API endpoints for feed cost per bird.

Endpoints:
- GET /api/analytics/feed-cost/ - Full analysis (summary, periods, trends, timeline)
- GET /api/analytics/feed-cost/periods/ - Feed periods in the time range
- GET /api/analytics/feed-cost/timeline/ - Population timeline
- GET /api/analytics/feed-cost/monthly/ - Monthly cost per bird trends
"""

import logging
from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated

from .services.feed_cost_analytics import FeedCostAnalyticsService, default_time_range
from .services.feed_cost_trends import (
    TimeRange,
    calculate_monthly_trends,
    filter_periods_by_time_range,
)
from .feed_cost_serializers import (
    FeedCostQuerySerializer,
    FeedCostAnalysisSerializer,
    FeedPeriodSerializer,
    MonthlyFeedCostSerializer,
    PopulationSnapshotSerializer,
)

logger = logging.getLogger(__name__)


class BaseFeedCostView(APIView):
    """Base class for feed cost analytics views"""
    permission_classes = [IsAuthenticated]

    def initial(self, request, *args, **kwargs):
        super().initial(request, *args, **kwargs)
        self.query = self.get_query(request)

    def get_query(self, request):
        """Validated query parameters, or empty if they don't validate"""
        serializer = FeedCostQuerySerializer(data=request.query_params)
        if serializer.is_valid():
            return serializer.validated_data
        logger.debug(f"Ignoring invalid feed cost query parameters: {serializer.errors}")
        return {}

    def get_service(self, request):
        """Get analytics service for the authenticated user"""
        return FeedCostAnalyticsService(request.user, reference_date=self.query.get('as_of'))

    def get_time_range(self, request):
        time_range = self.query.get('time_range')
        return TimeRange(time_range) if time_range else default_time_range()

    def get_periods_in_range(self, request):
        """Feed periods in the requested time range, most recent first"""
        service = self.get_service(request)
        return filter_periods_by_time_range(
            service.get_feed_periods(), self.get_time_range(request), service.reference_date
        )


class FeedCostAnalysisView(BaseFeedCostView):
    """
    GET /api/analytics/feed-cost/

    Query Parameters:
        time_range (str): 3months, 6months, 12months or all (default: 6months)
        as_of (date): Date the time range ends on (default: today)

    Returns:
        - Summary (null when no bag was depleted in the range)
        - Feed periods, most recent first
        - Monthly trends
        - Population timeline
    """

    def get(self, request):
        service = self.get_service(request)
        analysis = service.get_analysis(self.get_time_range(request))
        return Response(FeedCostAnalysisSerializer(analysis).data)


class FeedPeriodsView(BaseFeedCostView):
    """
    GET /api/analytics/feed-cost/periods/

    Feed periods in the selected time range, most recent first.
    """

    def get(self, request):
        periods = self.get_periods_in_range(request)
        return Response(FeedPeriodSerializer(periods, many=True).data)


class PopulationTimelineView(BaseFeedCostView):
    """
    GET /api/analytics/feed-cost/timeline/

    Flock composition after each acquisition or mortality date.
    """

    def get(self, request):
        service = self.get_service(request)
        return Response(PopulationSnapshotSerializer(service.get_timeline(), many=True).data)


class MonthlyFeedCostView(BaseFeedCostView):
    """
    GET /api/analytics/feed-cost/monthly/

    Average cost per bird per month for each calendar month in the range.
    """

    def get(self, request):
        trends = calculate_monthly_trends(self.get_periods_in_range(request))
        return Response(MonthlyFeedCostSerializer(trends, many=True).data)
