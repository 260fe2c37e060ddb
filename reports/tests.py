"""
Luggage Share Reports Tests
============================

Tests for:
1. Luggage status breakdown
2. Overview figures (slots, booked, payouts, monthly series)
3. Overview API owner gate
4. Rate table export
"""

import datetime
from decimal import Decimal
from django.test import SimpleTestCase, TestCase, override_settings
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APIClient

from core.models import User
from finance.models import Order, OrderStatus, Payout
from logistics.models import Listing
from reports.services import (
    SERIES_MONTHS, luggage_status_breakdown, overview_figures,
    monthly_order_counts, rate_table_csv, _month_keys
)

OWNER = 'owner@luggageshare.app'


class TestLuggageStatusBreakdown(SimpleTestCase):

    def test_checked_is_remainder(self):
        self.assertEqual(
            luggage_status_breakdown(10, 3, 2),
            {'checked': 5, 'in_transit': 2, 'delivered': 3}
        )

    def test_checked_floored_at_zero(self):
        self.assertEqual(luggage_status_breakdown(3, 2, 2)['checked'], 0)

    def test_empty(self):
        self.assertEqual(luggage_status_breakdown(0, 0, 0)['checked'], 0)


class TestMonthKeys(SimpleTestCase):

    def test_twelve_months_oldest_first(self):
        keys = _month_keys(datetime.date(2025, 3, 15))
        self.assertEqual(len(keys), SERIES_MONTHS)
        self.assertEqual(keys[0], '2024-04')
        self.assertEqual(keys[-1], '2025-03')


class TestOverviewFigures(TestCase):

    def setUp(self):
        provider = User.objects.create_user(email='provider@example.com')
        for capacity in (20, 15):
            Listing.objects.create(
                user=provider, from_iata='DXB', to_iata='CAI',
                date=datetime.date(2025, 8, 20), capacity_kg=capacity,
                ticket_url='t', id_url='i', passport_url='p', photo_url='f',
            )
        statuses = [OrderStatus.PAID, OrderStatus.ESCROW, OrderStatus.DELIVERED, OrderStatus.RELEASED]
        for i, order_status in enumerate(statuses):
            Order.objects.create(
                reference=f'LS-{1001 + i}', customer='C', from_iata='DXB', to_iata='CAI',
                status=order_status, price=Decimal('100.00'),
            )
        Payout.objects.create(
            order=Order.objects.get(reference='LS-1004'),
            platform_amount=Decimal('40.00'), carrier_amount=Decimal('60.00'),
        )

    def test_headline_figures(self):
        figures = overview_figures()
        self.assertEqual(figures['slots'], 35)
        self.assertEqual(figures['booked'], 4)
        self.assertEqual(figures['platform_payout'], Decimal('40.00'))
        self.assertEqual(
            figures['luggage_status'],
            {'checked': 1, 'in_transit': 1, 'delivered': 2}
        )

    def test_empty_database(self):
        Payout.objects.all().delete()
        Order.objects.all().delete()
        Listing.objects.all().delete()
        figures = overview_figures()
        self.assertEqual(figures['slots'], 0)
        self.assertEqual(figures['booked'], 0)
        self.assertEqual(figures['platform_payout'], Decimal('0'))

    def test_monthly_series(self):
        today = timezone.localdate()
        series = monthly_order_counts(today)
        self.assertEqual(len(series), SERIES_MONTHS)
        self.assertEqual(series[-1], {'month': today.strftime('%Y-%m'), 'orders': 4})

    def test_orders_outside_window_not_counted(self):
        Order.objects.filter(reference='LS-1001').update(
            created_at=timezone.now() - datetime.timedelta(days=800)
        )
        series = monthly_order_counts(timezone.localdate())
        self.assertEqual(sum(point['orders'] for point in series), 3)


@override_settings(OWNER_EMAIL=OWNER)
class TestOverviewAPI(TestCase):

    def setUp(self):
        self.client = APIClient()
        self.owner = User.objects.create_user(email=OWNER)
        self.member = User.objects.create_user(email='member@example.com')

    def test_owner_sees_platform_payout(self):
        self.client.force_authenticate(self.owner)
        response = self.client.get('/api/overview/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIn('platform_payout', response.data)

    def test_member_does_not_see_platform_payout(self):
        self.client.force_authenticate(self.member)
        response = self.client.get('/api/overview/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertNotIn('platform_payout', response.data)
        self.assertIn('slots', response.data)

    def test_requires_authentication(self):
        response = self.client.get('/api/overview/')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)


class TestRateTableExport(TestCase):

    def test_csv_has_all_pairs(self):
        lines = rate_table_csv().strip().splitlines()
        self.assertEqual(lines[0], 'origin,destination,base_rate,price_per_kg')
        self.assertEqual(len(lines), 50)
        self.assertIn('UAE,ME,60,48.0', lines)

    def test_export_endpoint(self):
        client = APIClient()
        client.force_authenticate(User.objects.create_user(email='member@example.com'))
        response = client.get('/api/reports/rates.csv')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response['Content-Type'], 'text/csv')
