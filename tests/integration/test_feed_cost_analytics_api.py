"""
Tests for the feed cost analytics service and endpoints.
Tests permissions, user scoping, response structure and cost figures
computed from stored batches, mortality records and feed bags.
"""
from datetime import date
from decimal import Decimal
from unittest.mock import patch

import pytest
from django.urls import reverse
from rest_framework import status

from dashboards.services.feed_cost_analytics import FeedCostAnalyticsService
from dashboards.feed_cost_views import BaseFeedCostView
from dashboards.services.feed_cost_trends import TimeRange
from feed_inventory.models import FeedBag
from flock_management.models import FlockBatch, FlockProfile, MortalityRecord

pytestmark = pytest.mark.django_db


@pytest.fixture
def layers(farmer):
    return FlockBatch.objects.create(
        user=farmer,
        batch_name='Layers',
        acquisition_date=date(2024, 1, 1),
        hens_count=10,
    )


@pytest.fixture
def feed_bag(farmer):
    return FeedBag.objects.create(
        user=farmer,
        brand='Agrivet',
        feed_type='Layer Pellets',
        quantity=Decimal('50.00'),
        price_per_unit=Decimal('2.00'),
        opened_date=date(2024, 1, 1),
        depleted_date=date(2024, 1, 11),
    )


@pytest.fixture
def mid_bag_deaths(farmer, layers):
    return MortalityRecord.objects.create(
        user=farmer, batch=layers, date=date(2024, 1, 6), count=5, cause='predator'
    )


@pytest.fixture
def authenticated_client(api_client, farmer):
    api_client.force_authenticate(user=farmer)
    return api_client


class TestFeedCostAnalyticsService:

    def test_constant_flock(self, farmer, layers, feed_bag):
        service = FeedCostAnalyticsService(farmer, reference_date=date(2024, 2, 1))

        periods = service.get_feed_periods()

        assert len(periods) == 1
        assert periods[0].cost_per_bird_per_day == pytest.approx(1.0)
        assert periods[0].cost_per_bird_per_month == pytest.approx(30.0)

    def test_deaths_split_the_bag(self, farmer, layers, feed_bag, mid_bag_deaths):
        service = FeedCostAnalyticsService(farmer, reference_date=date(2024, 2, 1))

        period = service.get_feed_periods()[0]

        assert period.has_population_changes is True
        assert period.cost_per_bird_per_day == pytest.approx(100 / 75)
        assert [round(s.total_cost, 2) for s in period.sub_periods] == [66.67, 33.33]

    def test_inactive_batches_ignored(self, farmer, layers, feed_bag):
        FlockBatch.objects.create(
            user=farmer, batch_name='Sold off', acquisition_date=date(2024, 1, 1),
            hens_count=30, is_active=False,
        )
        service = FeedCostAnalyticsService(farmer, reference_date=date(2024, 2, 1))

        assert service.get_timeline()[-1].total == 10

    def test_profile_fallback(self, farmer):
        FlockProfile.objects.create(user=farmer, hens=8, flock_start_date=date(2023, 9, 1))
        service = FeedCostAnalyticsService(farmer, reference_date=date(2024, 2, 1))

        timeline = service.get_timeline()

        assert len(timeline) == 1
        assert timeline[0].total == 8
        assert timeline[0].date == date(2023, 9, 1)

    def test_analysis_filters_by_time_range(self, farmer, layers, feed_bag):
        FeedBag.objects.create(
            user=farmer, brand='Olam', feed_type='Layer Mash',
            total_cost=Decimal('60.00'), opened_date=date(2024, 6, 1),
            depleted_date=date(2024, 6, 11),
        )
        service = FeedCostAnalyticsService(farmer, reference_date=date(2024, 7, 1))

        recent = service.get_analysis(TimeRange.THREE_MONTHS)
        everything = service.get_analysis(TimeRange.ALL)

        assert recent['summary'].period_count == 1
        assert everything['summary'].period_count == 2
        assert [p.start_date for p in everything['periods']] == [date(2024, 6, 1), date(2024, 1, 1)]

    def test_analysis_without_periods(self, farmer, layers):
        analysis = FeedCostAnalyticsService(farmer).get_analysis(TimeRange.ALL)

        assert analysis['summary'] is None
        assert analysis['periods'] == []
        assert analysis['monthly_trends'] == []
        assert len(analysis['timeline']) == 1

    def test_default_time_range_from_settings(self, farmer, settings):
        settings.FEED_COST_DEFAULT_TIME_RANGE = '12months'

        analysis = FeedCostAnalyticsService(farmer).get_analysis()

        assert analysis['time_range'] is TimeRange.TWELVE_MONTHS

    def test_unknown_default_time_range_falls_back(self, farmer, settings):
        settings.FEED_COST_DEFAULT_TIME_RANGE = 'fortnight'

        analysis = FeedCostAnalyticsService(farmer).get_analysis()

        assert analysis['time_range'] is TimeRange.SIX_MONTHS


class TestFeedCostPermissions:

    @pytest.mark.parametrize('name', ['analysis', 'periods', 'timeline', 'monthly'])
    def test_unauthenticated_access_denied(self, api_client, name):
        response = api_client.get(reverse(f'feed_cost:{name}'))

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_only_own_records_used(self, api_client, another_farmer, layers, feed_bag):
        api_client.force_authenticate(user=another_farmer)

        response = api_client.get(reverse('feed_cost:analysis'), {'time_range': 'all'})

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data['periods'] == []
        assert data['timeline'] == []
        assert data['summary'] is None


class TestFeedCostAnalysisEndpoint:

    def test_response_structure(self, authenticated_client, layers, feed_bag):
        response = authenticated_client.get(
            reverse('feed_cost:analysis'), {'time_range': '6months', 'as_of': '2024-02-01'}
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data['time_range'] == '6months'
        assert data['reference_date'] == '2024-02-01'
        assert set(data['summary']) == {
            'total_cost', 'total_days', 'avg_cost_per_bird_per_day',
            'avg_cost_per_bird_per_month', 'period_count',
        }
        assert data['summary']['avg_cost_per_bird_per_month'] == pytest.approx(30.0)
        assert data['monthly_trends'][0]['month_label'] == 'Jan 2024'
        assert data['timeline'][0] == {
            'date': '2024-01-01', 'hens': 10, 'roosters': 0, 'chicks': 0, 'brooding': 0, 'total': 10,
        }

    def test_period_with_deaths(self, authenticated_client, layers, feed_bag, mid_bag_deaths):
        response = authenticated_client.get(reverse('feed_cost:analysis'), {'time_range': 'all'})

        period = response.json()['periods'][0]
        assert period['has_population_changes'] is True
        assert period['duration'] == 10
        assert period['total_cost'] == pytest.approx(100.0)
        assert period['cost_per_bird_per_day'] == pytest.approx(1.3333, abs=1e-4)
        assert [s['duration'] for s in period['sub_periods']] == [5, 5]
        assert period['feed_bag']['brand'] == 'Agrivet'

        change = period['flock_changes'][0]
        assert change['change_type'] == 'death'
        assert change['change_amount'] == -5
        assert change['description'] == 'Lost 5 birds - predator (from batch "Layers")'

    def test_open_bag_excluded(self, authenticated_client, farmer, layers, feed_bag):
        FeedBag.objects.create(
            user=farmer, brand='Agrivet', feed_type='Layer Pellets',
            total_cost=Decimal('100.00'), opened_date=date(2024, 1, 11),
        )

        response = authenticated_client.get(reverse('feed_cost:analysis'), {'time_range': 'all'})

        assert response.json()['summary']['period_count'] == 1

    def test_invalid_time_range_uses_default(self, authenticated_client, layers, feed_bag):
        response = authenticated_client.get(reverse('feed_cost:analysis'), {'time_range': 'forever'})

        assert response.status_code == status.HTTP_200_OK
        assert response.json()['time_range'] == '6months'


class TestFeedCostSubEndpoints:

    def test_periods(self, authenticated_client, layers, feed_bag):
        response = authenticated_client.get(
            reverse('feed_cost:periods'), {'time_range': '3months', 'as_of': '2024-02-01'}
        )

        assert response.status_code == status.HTTP_200_OK
        assert len(response.json()) == 1
        assert response.json()[0]['start_date'] == '2024-01-01'

    def test_timeline(self, authenticated_client, layers, mid_bag_deaths):
        response = authenticated_client.get(reverse('feed_cost:timeline'))

        assert response.status_code == status.HTTP_200_OK
        assert [s['total'] for s in response.json()] == [10, 5]

    def test_monthly(self, authenticated_client, layers, feed_bag):
        response = authenticated_client.get(reverse('feed_cost:monthly'), {'time_range': 'all'})

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert len(data) == 1
        assert data[0]['month'] == '2024-01-01'
        assert data[0]['avg_flock_size'] == 10
        assert data[0]['feed_periods'] == 1


class TestFeedCostQueryHandling:

    @pytest.fixture
    def older_bag(self, farmer):
        return FeedBag.objects.create(
            user=farmer, brand='Olam', feed_type='Layer Mash',
            total_cost=Decimal('60.00'), opened_date=date(2023, 6, 1),
            depleted_date=date(2023, 6, 11),
        )

    def test_query_parameters_validated_once(self, authenticated_client, layers, feed_bag):
        with patch.object(
            BaseFeedCostView, 'get_query', autospec=True, side_effect=BaseFeedCostView.get_query
        ) as get_query:
            response = authenticated_client.get(
                reverse('feed_cost:analysis'), {'time_range': '3months', 'as_of': '2024-02-01'}
            )

        assert response.status_code == status.HTTP_200_OK
        assert get_query.call_count == 1

    def test_periods_filtered_without_full_analysis(self, authenticated_client, layers, feed_bag, older_bag):
        with patch.object(FeedCostAnalyticsService, 'get_analysis') as get_analysis:
            response = authenticated_client.get(
                reverse('feed_cost:periods'), {'time_range': '3months', 'as_of': '2024-02-01'}
            )

        get_analysis.assert_not_called()
        assert [p['start_date'] for p in response.json()] == ['2024-01-01']

    def test_monthly_filtered_without_full_analysis(self, authenticated_client, layers, feed_bag, older_bag):
        with patch.object(FeedCostAnalyticsService, 'get_analysis') as get_analysis:
            response = authenticated_client.get(
                reverse('feed_cost:monthly'), {'time_range': '3months', 'as_of': '2024-02-01'}
            )

        get_analysis.assert_not_called()
        assert [m['month_label'] for m in response.json()] == ['Jan 2024']

    def test_monthly_all_includes_older_periods(self, authenticated_client, layers, feed_bag, older_bag):
        response = authenticated_client.get(reverse('feed_cost:monthly'), {'time_range': 'all'})

        assert [m['month_label'] for m in response.json()] == ['Jun 2023', 'Jan 2024']
