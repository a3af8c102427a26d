"""
Feed Cost Trends

Downstream rollups over allocated feed periods:
- Time range filtering (3/6/12 months or all)
- Summary averages for the cost cards
- Monthly trend buckets for the cost-per-bird chart

A feed period is counted in every calendar month it touches, so a bag that
runs from late January into February contributes its full figures to both
months.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from typing import Dict, List, Optional, Sequence

from dateutil.relativedelta import relativedelta

from feed_inventory.services.feed_cost_allocation import DAYS_PER_MONTH, FeedPeriod


class TimeRange(str, Enum):
    THREE_MONTHS = '3months'
    SIX_MONTHS = '6months'
    TWELVE_MONTHS = '12months'
    ALL = 'all'

    @property
    def months(self) -> Optional[int]:
        return {
            TimeRange.THREE_MONTHS: 3,
            TimeRange.SIX_MONTHS: 6,
            TimeRange.TWELVE_MONTHS: 12,
        }.get(self)


DEFAULT_TIME_RANGE = TimeRange.SIX_MONTHS


@dataclass(frozen=True)
class MonthlyFeedCostData:
    month: date
    month_label: str
    cost_per_bird_per_month: float
    total_cost: float
    avg_flock_size: int
    feed_periods: int


@dataclass(frozen=True)
class FeedCostSummary:
    total_cost: float
    total_days: int
    avg_cost_per_bird_per_day: float
    avg_cost_per_bird_per_month: float
    period_count: int


def filter_periods_by_time_range(
    periods: Sequence[FeedPeriod],
    time_range: TimeRange,
    reference_date: date,
) -> List[FeedPeriod]:
    """Periods that started within the time range ending at `reference_date`."""
    if time_range.months is None:
        return list(periods)

    cutoff = reference_date - relativedelta(months=time_range.months)
    return [period for period in periods if period.start_date >= cutoff]


def calculate_feed_cost_summary(periods: Sequence[FeedPeriod]) -> Optional[FeedCostSummary]:
    """
    Totals and averages across feed periods.

    Returns None when there are no periods to summarise.
    """
    if not periods:
        return None

    avg_cost_per_bird_per_day = sum(p.cost_per_bird_per_day for p in periods) / len(periods)

    return FeedCostSummary(
        total_cost=sum(p.total_cost for p in periods),
        total_days=sum(p.duration for p in periods),
        avg_cost_per_bird_per_day=avg_cost_per_bird_per_day,
        avg_cost_per_bird_per_month=avg_cost_per_bird_per_day * DAYS_PER_MONTH,
        period_count=len(periods),
    )


def _months_spanned(start: date, end: date) -> List[date]:
    month = start.replace(day=1)
    last = end.replace(day=1)
    months = []
    while month <= last:
        months.append(month)
        month += relativedelta(months=1)
    return months


def _mean(values: List[float]) -> float:
    return sum(values) / len(values)


def calculate_monthly_trends(periods: Sequence[FeedPeriod]) -> List[MonthlyFeedCostData]:
    """
    Average cost per bird, total cost and flock size per calendar month.

    Each period is added to every month between its start and end dates.
    """
    buckets: Dict[date, Dict[str, List[float]]] = {}

    for period in periods:
        for month in _months_spanned(period.start_date, period.end_date):
            bucket = buckets.setdefault(month, {'costs': [], 'total_costs': [], 'flock_sizes': []})
            bucket['costs'].append(period.cost_per_bird_per_month)
            bucket['total_costs'].append(period.total_cost)
            bucket['flock_sizes'].append(period.flock_size.total)

    trends = []
    for month in sorted(buckets):
        bucket = buckets[month]
        avg_flock_size = Decimal(str(_mean(bucket['flock_sizes']))).quantize(
            Decimal('1'), rounding=ROUND_HALF_UP
        )
        trends.append(MonthlyFeedCostData(
            month=month,
            month_label=month.strftime('%b %Y'),
            cost_per_bird_per_month=_mean(bucket['costs']),
            total_cost=_mean(bucket['total_costs']),
            avg_flock_size=int(avg_flock_size),
            feed_periods=len(bucket['costs']),
        ))

    return trends
