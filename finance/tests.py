"""
Luggage Share Finance Tests
============================

Tests for:
1. Escrow split (40% platform, carrier = remainder)
2. Owner-only disclosure of the platform share
3. Escrow release (Payout record, status transition, messages)
4. Orders API
"""

from decimal import Decimal
from django.test import TestCase, override_settings
from rest_framework import status
from rest_framework.test import APIClient

from core.exceptions import ValidationError
from core.models import User
from finance.models import Order, OrderStatus, Payout
from finance.services import (
    PLATFORM_SHARE_RATE, settle_escrow, present_split, release_order
)

OWNER = 'owner@luggageshare.app'


class TestSettleEscrow(TestCase):
    """Tests for the escrow split."""

    def test_split_of_240(self):
        """240 splits into 96 platform / 144 carrier."""
        split = settle_escrow(240)
        self.assertEqual(split.platform_share, Decimal('96'))
        self.assertEqual(split.carrier_share, Decimal('144'))
        self.assertEqual(split.total, Decimal('240'))

    def test_zero_total(self):
        split = settle_escrow(0)
        self.assertEqual(split.platform_share, Decimal('0'))
        self.assertEqual(split.carrier_share, Decimal('0'))

    def test_parts_sum_to_total_exactly(self):
        """carrier + platform == total for awkward amounts."""
        for total in ['0.01', '0.03', '19.99', '123.45', '1000000', '333.33']:
            split = settle_escrow(Decimal(total))
            self.assertEqual(
                split.carrier_share + split.platform_share, Decimal(total),
                msg=f"total={total}"
            )

    def test_platform_share_is_forty_percent(self):
        split = settle_escrow(Decimal('360'))
        self.assertEqual(split.platform_share, Decimal('360') * PLATFORM_SHARE_RATE)

    def test_negative_total_rejected(self):
        with self.assertRaises(ValidationError):
            settle_escrow(-1)

    def test_non_finite_total_rejected(self):
        with self.assertRaises(ValidationError):
            settle_escrow(float('inf'))
        with self.assertRaises(ValidationError):
            settle_escrow(float('nan'))

    def test_garbage_total_rejected(self):
        with self.assertRaises(ValidationError):
            settle_escrow('abc')


class TestPresentSplit(TestCase):
    """Tests for owner-gated display."""

    def setUp(self):
        self.split = settle_escrow(240)

    def test_owner_sees_platform_share(self):
        data = present_split(self.split, viewer_is_owner=True)
        self.assertEqual(data['platform_share'], Decimal('96'))
        self.assertEqual(data['carrier_share'], Decimal('144'))
        self.assertTrue(data['escrow_protected'])

    def test_non_owner_never_sees_platform_share(self):
        """The key is absent, not blanked."""
        data = present_split(self.split, viewer_is_owner=False)
        self.assertNotIn('platform_share', data)
        self.assertEqual(data['carrier_share'], Decimal('144'))
        self.assertTrue(data['escrow_protected'])


@override_settings(OWNER_EMAIL=OWNER)
class TestReleaseOrder(TestCase):
    """Tests for escrow release."""

    def setUp(self):
        self.owner = User.objects.create_user(email=OWNER, password='testpass123')
        self.member = User.objects.create_user(email='member@example.com', password='testpass123')
        self.order = Order.objects.create(
            reference='LS-1002', customer='Yousef K.', from_iata='JED', to_iata='DXB',
            pieces=1, status=OrderStatus.ESCROW, price=Decimal('120.00'),
        )

    # ==========================================
    # Releasable statuses
    # ==========================================

    def test_release_records_payout_and_marks_released(self):
        release_order(self.order, self.owner)

        self.order.refresh_from_db()
        self.assertEqual(self.order.status, OrderStatus.RELEASED)

        payout = Payout.objects.get(order=self.order)
        self.assertEqual(payout.platform_amount, Decimal('48.00'))
        self.assertEqual(payout.carrier_amount, Decimal('72.00'))

    def test_delivered_order_is_releasable(self):
        self.order.status = OrderStatus.DELIVERED
        self.order.save()
        result = release_order(self.order, self.member)
        self.assertEqual(result['status'], OrderStatus.RELEASED)

    def test_paid_order_is_not_releasable(self):
        self.order.status = OrderStatus.PAID
        self.order.save()
        with self.assertRaises(ValidationError):
            release_order(self.order, self.owner)
        self.assertFalse(Payout.objects.exists())

    def test_released_order_cannot_be_released_twice(self):
        release_order(self.order, self.owner)
        with self.assertRaises(ValidationError):
            release_order(self.order, self.owner)
        self.assertEqual(Payout.objects.count(), 1)

    def test_payout_parts_sum_to_price(self):
        self.order.price = Decimal('0.03')
        self.order.save()
        release_order(self.order, self.owner)
        payout = Payout.objects.get(order=self.order)
        self.assertEqual(payout.platform_amount + payout.carrier_amount, Decimal('0.03'))

    # ==========================================
    # Messages
    # ==========================================

    def test_owner_message_discloses_split(self):
        result = release_order(self.order, self.owner)
        self.assertEqual(result['message'], 'Release for LS-1002: Carrier 72.00, Platform 48.00')
        self.assertIn('platform_share', result['split'])

    def test_member_message_hides_split(self):
        result = release_order(self.order, self.member)
        self.assertEqual(result['message'], 'Release requested for LS-1002')
        self.assertNotIn('platform_share', result['split'])


@override_settings(OWNER_EMAIL=OWNER)
class TestOrdersAPI(TestCase):
    """Tests for the orders endpoints."""

    def setUp(self):
        self.client = APIClient()
        self.owner = User.objects.create_user(email=OWNER, password='testpass123')
        self.member = User.objects.create_user(email='member@example.com', password='testpass123')
        Order.objects.create(
            reference='LS-1001', customer='Amal H.', from_iata='DXB', to_iata='CAI',
            pieces=2, status=OrderStatus.PAID, price=Decimal('220.00'),
        )
        Order.objects.create(
            reference='LS-1003', customer='Lina A.', from_iata='CAI', to_iata='KWI',
            pieces=3, status=OrderStatus.DELIVERED, price=Decimal('360.00'),
        )

    def test_list_requires_authentication(self):
        response = self.client.get('/api/orders/')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_list_orders(self):
        self.client.force_authenticate(self.member)
        response = self.client.get('/api/orders/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        references = [row['reference'] for row in response.data]
        self.assertEqual(references, ['LS-1001', 'LS-1003'])

    def test_release_as_owner(self):
        self.client.force_authenticate(self.owner)
        response = self.client.post('/api/orders/LS-1003/release/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['split']['platform_share'], Decimal('144'))
        self.assertEqual(response.data['split']['carrier_share'], Decimal('216'))

    def test_release_as_member_hides_platform_share(self):
        self.client.force_authenticate(self.member)
        response = self.client.post('/api/orders/LS-1003/release/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertNotIn('platform_share', response.data['split'])
        self.assertEqual(response.data['message'], 'Release requested for LS-1003')

    def test_release_paid_order_is_bad_request(self):
        self.client.force_authenticate(self.owner)
        response = self.client.post('/api/orders/LS-1001/release/')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('error', response.data)

    def test_payouts_owner_only(self):
        self.client.force_authenticate(self.member)
        response = self.client.get('/api/payouts/')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

        self.client.force_authenticate(self.owner)
        response = self.client.get('/api/payouts/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
