"""
Feed Cost Analytics Service

Answers "what does it cost to feed one bird?" for a single farmer by
combining three record streams:
1. Flock batches (acquisitions) and mortality records (deaths)
2. Feed bags with an opened and depleted date
3. The flock profile, used as a baseline when no batches exist

The heavy lifting is done by the pure engine modules; this service only
loads the farmer's records, converts them and hands them over.
"""

import logging
from datetime import date
from typing import Any, Dict, List, Optional, Tuple

from django.conf import settings
from django.utils import timezone

from feed_inventory.models import FeedBag
from feed_inventory.services.feed_cost_allocation import (
    FeedBagRecord,
    FeedPeriod,
    allocate_feed_periods,
)
from flock_management.models import FlockBatch, FlockProfile, MortalityRecord
from flock_management.services.population_timeline import (
    AcquisitionRecord,
    DeathRecord,
    FlockProfileRecord,
    PopulationEvent,
    PopulationSnapshot,
    build_timeline,
    population_events,
)

from .feed_cost_trends import (
    DEFAULT_TIME_RANGE,
    TimeRange,
    calculate_feed_cost_summary,
    calculate_monthly_trends,
    filter_periods_by_time_range,
)

logger = logging.getLogger(__name__)


def default_time_range() -> TimeRange:
    """Configured default time range, ignoring unknown values."""
    configured = getattr(settings, 'FEED_COST_DEFAULT_TIME_RANGE', None)
    try:
        return TimeRange(configured)
    except ValueError:
        return DEFAULT_TIME_RANGE


class FeedCostAnalyticsService:
    """
    Feed cost per bird for one farmer.

    Usage:
        from dashboards.services.feed_cost_analytics import FeedCostAnalyticsService

        service = FeedCostAnalyticsService(user)

        # Everything the feed cost page needs
        analysis = service.get_analysis(time_range=TimeRange.SIX_MONTHS)

        # Individual pieces
        timeline = service.get_timeline()
        periods = service.get_feed_periods()
    """

    def __init__(self, user, reference_date: Optional[date] = None):
        self.user = user
        self.reference_date = reference_date or timezone.now().date()
        self._timeline = None
        self._events = None

    # =========================================================================
    # RECORD LOADING
    # =========================================================================

    def _load_acquisitions(self) -> List[AcquisitionRecord]:
        batches = FlockBatch.objects.filter(user=self.user).order_by('acquisition_date', 'created_at')
        return [
            AcquisitionRecord(
                id=str(batch.id),
                batch_name=batch.batch_name,
                acquisition_date=batch.acquisition_date,
                initial_count=batch.initial_count,
                hens_count=batch.hens_count,
                roosters_count=batch.roosters_count,
                chicks_count=batch.chicks_count,
                brooding_count=batch.brooding_count,
                is_active=batch.is_active,
            )
            for batch in batches
        ]

    def _load_deaths(self) -> List[DeathRecord]:
        records = MortalityRecord.objects.filter(user=self.user).order_by('date', 'created_at')
        return [
            DeathRecord(
                batch_id=str(record.batch_id),
                date=record.date,
                count=record.count,
                cause=record.cause,
                description=record.description,
            )
            for record in records
        ]

    def _load_profile(self) -> Optional[FlockProfileRecord]:
        profile = FlockProfile.objects.filter(user=self.user).first()
        if profile is None:
            return None
        return FlockProfileRecord(
            hens=profile.hens,
            roosters=profile.roosters,
            chicks=profile.chicks,
            brooding=profile.brooding,
            start_date=profile.flock_start_date,
        )

    def _load_feed_bags(self) -> List[FeedBagRecord]:
        bags = FeedBag.objects.filter(user=self.user)
        return [
            FeedBagRecord(
                id=str(bag.id),
                brand=bag.brand,
                feed_type=bag.feed_type,
                opened_date=bag.opened_date,
                quantity=float(bag.quantity),
                unit=bag.unit,
                price_per_unit=float(bag.price_per_unit),
                total_cost=float(bag.total_cost) if bag.total_cost else None,
                depleted_date=bag.depleted_date,
            )
            for bag in bags
        ]

    def _build(self) -> Tuple[Tuple[PopulationSnapshot, ...], Tuple[PopulationEvent, ...]]:
        if self._timeline is None:
            acquisitions = self._load_acquisitions()
            deaths = self._load_deaths()
            self._events = population_events(acquisitions, deaths)
            self._timeline = build_timeline(
                acquisitions,
                deaths,
                fallback_profile=self._load_profile(),
                reference_date=self.reference_date,
            )
        return self._timeline, self._events

    # =========================================================================
    # ANALYTICS
    # =========================================================================

    def get_timeline(self) -> Tuple[PopulationSnapshot, ...]:
        """Population history, oldest first."""
        timeline, _ = self._build()
        return timeline

    def get_feed_periods(self) -> List[FeedPeriod]:
        """Every depleted feed bag allocated against the timeline, most recent first."""
        timeline, events = self._build()
        periods = allocate_feed_periods(self._load_feed_bags(), timeline, events)
        logger.info(
            f"Allocated {len(periods)} feed period(s) for user {self.user.pk} "
            f"over {len(timeline)} population snapshot(s)"
        )
        return periods

    def get_analysis(self, time_range: Optional[TimeRange] = None) -> Dict[str, Any]:
        """
        Full feed cost analysis for the selected time range.

        Returns:
            dict with time_range, reference_date, summary (None when there
            are no periods in range), periods, monthly_trends and timeline
        """
        time_range = TimeRange(time_range) if time_range else default_time_range()

        periods = filter_periods_by_time_range(
            self.get_feed_periods(), time_range, self.reference_date
        )
        summary = calculate_feed_cost_summary(periods)

        if summary is not None:
            logger.info(
                f"Feed cost for user {self.user.pk} ({time_range.value}): "
                f"{summary.period_count} period(s), "
                f"{summary.avg_cost_per_bird_per_month:.2f} per bird per month"
            )

        return {
            'time_range': time_range,
            'reference_date': self.reference_date,
            'summary': summary,
            'periods': periods,
            'monthly_trends': calculate_monthly_trends(periods),
            'timeline': self.get_timeline(),
        }
