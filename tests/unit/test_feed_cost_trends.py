"""
Tests for feed cost rollups: time range filtering, summary averages and
monthly trend buckets.
"""
from datetime import date

import pytest

from dashboards.services.feed_cost_trends import (
    DEFAULT_TIME_RANGE,
    TimeRange,
    calculate_feed_cost_summary,
    calculate_monthly_trends,
    filter_periods_by_time_range,
)
from feed_inventory.services.feed_cost_allocation import FeedBagRecord, FeedPeriod
from flock_management.services.population_timeline import PopulationSnapshot


def make_period(start, end, total_cost=100.0, cost_per_bird_per_day=1.0, flock=10, duration=None):
    bag = FeedBagRecord(
        id=f'bag-{start}', brand='Agrivet', feed_type='Layer Pellets',
        opened_date=start, total_cost=total_cost, depleted_date=end,
    )
    return FeedPeriod(
        feed_bag=bag,
        start_date=start,
        end_date=end,
        duration=duration if duration is not None else (end - start).days,
        total_cost=total_cost,
        total_quantity=50.0,
        flock_size=PopulationSnapshot(start, hens=flock, total=flock),
        feed_per_bird_per_day=0.5,
        cost_per_bird_per_day=cost_per_bird_per_day,
        cost_per_bird_per_month=cost_per_bird_per_day * 30,
    )


class TestTimeRange:

    def test_months(self):
        assert TimeRange.THREE_MONTHS.months == 3
        assert TimeRange.SIX_MONTHS.months == 6
        assert TimeRange.TWELVE_MONTHS.months == 12
        assert TimeRange.ALL.months is None

    def test_parse_from_query_value(self):
        assert TimeRange('12months') is TimeRange.TWELVE_MONTHS

    def test_default_is_six_months(self):
        assert DEFAULT_TIME_RANGE is TimeRange.SIX_MONTHS


class TestFilterPeriodsByTimeRange:

    @pytest.fixture
    def periods(self):
        return [
            make_period(date(2024, 6, 1), date(2024, 6, 11)),
            make_period(date(2024, 3, 15), date(2024, 3, 25)),
            make_period(date(2023, 12, 1), date(2023, 12, 20)),
            make_period(date(2023, 1, 1), date(2023, 1, 20)),
        ]

    def test_three_months(self, periods):
        kept = filter_periods_by_time_range(periods, TimeRange.THREE_MONTHS, date(2024, 6, 15))

        assert [p.start_date for p in kept] == [date(2024, 6, 1), date(2024, 3, 15)]

    def test_cutoff_is_inclusive(self, periods):
        kept = filter_periods_by_time_range(periods, TimeRange.SIX_MONTHS, date(2024, 6, 1))

        assert date(2023, 12, 1) in [p.start_date for p in kept]

    def test_twelve_months(self, periods):
        kept = filter_periods_by_time_range(periods, TimeRange.TWELVE_MONTHS, date(2024, 6, 15))

        assert len(kept) == 3

    def test_all_keeps_everything(self, periods):
        kept = filter_periods_by_time_range(periods, TimeRange.ALL, date(2024, 6, 15))

        assert kept == periods

    def test_filters_on_start_date(self):
        straddling = make_period(date(2024, 3, 10), date(2024, 4, 5))

        kept = filter_periods_by_time_range([straddling], TimeRange.THREE_MONTHS, date(2024, 6, 15))

        assert kept == []


class TestFeedCostSummary:

    def test_no_periods(self):
        assert calculate_feed_cost_summary([]) is None

    def test_totals_and_averages(self):
        periods = [
            make_period(date(2024, 1, 1), date(2024, 1, 11), total_cost=100.0, cost_per_bird_per_day=1.0),
            make_period(date(2024, 1, 11), date(2024, 1, 31), total_cost=150.0, cost_per_bird_per_day=2.0),
        ]

        summary = calculate_feed_cost_summary(periods)

        assert summary.total_cost == 250.0
        assert summary.total_days == 30
        assert summary.avg_cost_per_bird_per_day == pytest.approx(1.5)
        assert summary.avg_cost_per_bird_per_month == pytest.approx(45.0)
        assert summary.period_count == 2

    def test_average_is_unweighted(self):
        periods = [
            make_period(date(2024, 1, 1), date(2024, 3, 1), cost_per_bird_per_day=1.0),
            make_period(date(2024, 3, 1), date(2024, 3, 2), cost_per_bird_per_day=3.0),
        ]

        summary = calculate_feed_cost_summary(periods)

        assert summary.avg_cost_per_bird_per_day == pytest.approx(2.0)


class TestMonthlyTrends:

    def test_single_month(self):
        trends = calculate_monthly_trends([make_period(date(2024, 1, 1), date(2024, 1, 11))])

        assert len(trends) == 1
        assert trends[0].month == date(2024, 1, 1)
        assert trends[0].month_label == 'Jan 2024'
        assert trends[0].cost_per_bird_per_month == pytest.approx(30.0)
        assert trends[0].total_cost == 100.0
        assert trends[0].avg_flock_size == 10
        assert trends[0].feed_periods == 1

    def test_period_counted_in_every_month_it_spans(self):
        trends = calculate_monthly_trends([make_period(date(2024, 1, 25), date(2024, 3, 2))])

        assert [t.month_label for t in trends] == ['Jan 2024', 'Feb 2024', 'Mar 2024']
        assert all(t.total_cost == 100.0 for t in trends)
        assert all(t.feed_periods == 1 for t in trends)

    def test_months_sorted_ascending(self):
        periods = [
            make_period(date(2024, 5, 1), date(2024, 5, 10)),
            make_period(date(2023, 11, 1), date(2023, 11, 10)),
        ]

        trends = calculate_monthly_trends(periods)

        assert [t.month for t in trends] == [date(2023, 11, 1), date(2024, 5, 1)]

    def test_year_boundary(self):
        trends = calculate_monthly_trends([make_period(date(2023, 12, 20), date(2024, 1, 5))])

        assert [t.month_label for t in trends] == ['Dec 2023', 'Jan 2024']

    def test_bucket_averages(self):
        periods = [
            make_period(date(2024, 2, 1), date(2024, 2, 10), total_cost=80.0, cost_per_bird_per_day=1.0, flock=10),
            make_period(date(2024, 2, 10), date(2024, 2, 20), total_cost=120.0, cost_per_bird_per_day=2.0, flock=15),
        ]

        trend = calculate_monthly_trends(periods)[0]

        assert trend.cost_per_bird_per_month == pytest.approx(45.0)
        assert trend.total_cost == pytest.approx(100.0)
        assert trend.feed_periods == 2
        # 12.5 rounds half up
        assert trend.avg_flock_size == 13

    def test_no_periods(self):
        assert calculate_monthly_trends([]) == []
