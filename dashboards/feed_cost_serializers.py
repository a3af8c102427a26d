"""
Feed Cost Analytics Serializers

Query parameter validation and response rendering for the feed cost
analytics endpoints.
"""

from rest_framework import serializers

from .services.feed_cost_trends import TimeRange


class FeedCostQuerySerializer(serializers.Serializer):
    """Query parameters for feed cost analytics"""
    time_range = serializers.ChoiceField(
        choices=[choice.value for choice in TimeRange],
        required=False
    )
    as_of = serializers.DateField(required=False)


# =============================================================================
# POPULATION
# =============================================================================

class PopulationSnapshotSerializer(serializers.Serializer):
    """Flock composition on a date"""
    date = serializers.DateField()
    hens = serializers.IntegerField()
    roosters = serializers.IntegerField()
    chicks = serializers.IntegerField()
    brooding = serializers.IntegerField()
    total = serializers.IntegerField()


class FlockChangeSerializer(serializers.Serializer):
    date = serializers.DateField()
    change_type = serializers.SerializerMethodField()
    change_amount = serializers.IntegerField()
    previous_count = serializers.IntegerField()
    new_count = serializers.IntegerField()
    description = serializers.CharField()
    batch_name = serializers.CharField(allow_null=True)

    def get_change_type(self, obj):
        return obj.change_type.value


# =============================================================================
# FEED PERIODS
# =============================================================================

class FeedBagSummarySerializer(serializers.Serializer):
    """The bag a feed period was allocated from"""
    id = serializers.CharField()
    brand = serializers.CharField()
    feed_type = serializers.CharField()
    quantity = serializers.FloatField()
    unit = serializers.CharField()
    price_per_unit = serializers.FloatField()
    total_cost = serializers.FloatField(source='resolved_total_cost')
    opened_date = serializers.DateField()
    depleted_date = serializers.DateField(allow_null=True)


class SubPeriodSerializer(serializers.Serializer):
    """Constant-population slice of a feed period"""
    feed_bag = FeedBagSummarySerializer()
    start_date = serializers.DateField()
    end_date = serializers.DateField()
    duration = serializers.IntegerField()
    total_cost = serializers.FloatField()
    total_quantity = serializers.FloatField()
    flock_size = PopulationSnapshotSerializer()
    feed_per_bird_per_day = serializers.FloatField()
    cost_per_bird_per_day = serializers.FloatField()
    cost_per_bird_per_month = serializers.FloatField()


class FeedPeriodSerializer(SubPeriodSerializer):
    """Feed bag usage interval with per-bird cost figures"""
    has_population_changes = serializers.BooleanField()
    flock_changes = FlockChangeSerializer(many=True)
    sub_periods = SubPeriodSerializer(many=True)


# =============================================================================
# TRENDS AND SUMMARY
# =============================================================================

class MonthlyFeedCostSerializer(serializers.Serializer):
    month = serializers.DateField()
    month_label = serializers.CharField()
    cost_per_bird_per_month = serializers.FloatField()
    total_cost = serializers.FloatField()
    avg_flock_size = serializers.IntegerField()
    feed_periods = serializers.IntegerField()


class FeedCostSummarySerializer(serializers.Serializer):
    total_cost = serializers.FloatField()
    total_days = serializers.IntegerField()
    avg_cost_per_bird_per_day = serializers.FloatField()
    avg_cost_per_bird_per_month = serializers.FloatField()
    period_count = serializers.IntegerField()


class FeedCostAnalysisSerializer(serializers.Serializer):
    """Complete feed cost analysis"""
    time_range = serializers.SerializerMethodField()
    reference_date = serializers.DateField()
    summary = FeedCostSummarySerializer(allow_null=True)
    periods = FeedPeriodSerializer(many=True)
    monthly_trends = MonthlyFeedCostSerializer(many=True)
    timeline = PopulationSnapshotSerializer(many=True)

    def get_time_range(self, obj):
        return obj['time_range'].value
