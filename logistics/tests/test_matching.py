"""
Luggage Share Matching Tests
=============================

Tests for:
1. find_providers() over plain records
2. Listing.objects.matching() over the database
3. Listing list filters (django-filter)
"""

import datetime
from decimal import Decimal
from types import SimpleNamespace
from django.test import SimpleTestCase, TestCase

from core.models import User
from logistics.filters import ListingFilter
from logistics.models import Listing
from logistics.services.matching import find_providers


def _listing(origin, destination, capacity, date):
    return SimpleNamespace(from_iata=origin, to_iata=destination, capacity_kg=capacity, date=date)


class TestFindProviders(SimpleTestCase):
    """Tests for the pure matching rule."""

    def setUp(self):
        self.small = _listing('DXB', 'CAI', 5, datetime.date(2025, 8, 10))
        self.later = _listing('DXB', 'CAI', 15, datetime.date(2025, 8, 20))
        self.earlier = _listing('DXB', 'CAI', 20, datetime.date(2025, 8, 12))

    def test_route_capacity_and_date_order(self):
        """cap-20 (earlier) before cap-15 (later); cap-5 excluded."""
        result = find_providers([self.small, self.later, self.earlier], 'DXB', 'CAI', 10)
        self.assertEqual(result, [self.earlier, self.later])

    def test_capacity_boundary_is_inclusive(self):
        result = find_providers([self.later], 'DXB', 'CAI', 15)
        self.assertEqual(result, [self.later])

    def test_route_is_exact_and_directional(self):
        reverse = _listing('CAI', 'DXB', 30, datetime.date(2025, 8, 1))
        other = _listing('DXB', 'JED', 30, datetime.date(2025, 8, 1))
        self.assertEqual(find_providers([reverse, other], 'DXB', 'CAI', 1), [])

    def test_no_match_is_empty_list(self):
        self.assertEqual(find_providers([], 'DXB', 'CAI', 1), [])

    def test_same_date_keeps_input_order(self):
        first = _listing('DXB', 'CAI', 20, datetime.date(2025, 8, 12))
        second = _listing('DXB', 'CAI', 25, datetime.date(2025, 8, 12))
        self.assertEqual(find_providers([first, second], 'DXB', 'CAI', 10), [first, second])

    def test_iso_string_dates(self):
        a = _listing('DXB', 'CAI', 20, '2025-09-01')
        b = _listing('DXB', 'CAI', 20, '2025-08-01')
        self.assertEqual(find_providers([a, b], 'DXB', 'CAI', 10), [b, a])

    def test_undated_listing_sorts_last(self):
        undated = _listing('DXB', 'CAI', 20, None)
        dated = _listing('DXB', 'CAI', 20, datetime.date(2030, 1, 1))
        self.assertEqual(find_providers([undated, dated], 'DXB', 'CAI', 10), [dated, undated])


class TestListingMatchingQuerySet(TestCase):
    """Same rule through the ORM."""

    def setUp(self):
        self.provider = User.objects.create_user(email='provider@example.com', password='testpass123')
        self.small = self._create(5, datetime.date(2025, 8, 10))
        self.later = self._create(15, datetime.date(2025, 8, 20))
        self.earlier = self._create(20, datetime.date(2025, 8, 12))
        self._create(50, datetime.date(2025, 8, 1), to_iata='JED')

    def _create(self, capacity, date, to_iata='CAI'):
        return Listing.objects.create(
            user=self.provider, from_iata='DXB', to_iata=to_iata, date=date,
            capacity_kg=capacity, price_per_kg=Decimal('48.00'),
            ticket_url='t', id_url='i', passport_url='p', photo_url='f',
        )

    def test_matching_orders_by_date(self):
        result = list(Listing.objects.matching('DXB', 'CAI', 10))
        self.assertEqual(result, [self.earlier, self.later])

    def test_matching_agrees_with_find_providers(self):
        expected = find_providers(list(Listing.objects.all()), 'DXB', 'CAI', 10)
        self.assertEqual(list(Listing.objects.matching('DXB', 'CAI', 10)), expected)

    def test_matching_accepts_lowercase_codes(self):
        result = list(Listing.objects.matching('dxb', ' cai', 10))
        self.assertEqual(result, [self.earlier, self.later])

    def test_fractional_minimum_rounds_up(self):
        result = list(Listing.objects.matching('DXB', 'CAI', Decimal('15.5')))
        self.assertEqual(result, [self.earlier])
        result = list(Listing.objects.matching('DXB', 'CAI', Decimal('15')))
        self.assertEqual(result, [self.earlier, self.later])

    def test_no_match(self):
        self.assertFalse(Listing.objects.matching('CAI', 'DXB', 1).exists())

    def test_filter_normalizes_codes(self):
        qs = ListingFilter({'from_iata': 'dxb', 'to_iata': 'cai', 'min_capacity': 15},
                           queryset=Listing.objects.all()).qs
        self.assertEqual(set(qs), {self.later, self.earlier})
