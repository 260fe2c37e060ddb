"""
Luggage Share Logistics API Tests
==================================

Tests for:
1. Regions & quote endpoints (region path, airport path, owner-gated escrow)
2. Airports list & staff import
3. Listings publish/search, requests, shipments
"""

import datetime
import io
import json
from decimal import Decimal
from unittest.mock import patch

from PIL import Image
from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import TestCase, override_settings
from rest_framework import status
from rest_framework.test import APIClient

from core.models import User
from logistics.models import Listing, ShipmentRequest, Shipment, ShipmentStatus
from logistics.services.airports import airport_registry

OWNER = 'owner@luggageshare.app'


def image_upload(name='photo.png'):
    buffer = io.BytesIO()
    Image.new('RGB', (4, 4), color=(200, 30, 30)).save(buffer, format='PNG')
    return SimpleUploadedFile(name, buffer.getvalue(), content_type='image/png')


def file_upload(name):
    return SimpleUploadedFile(name, b'%PDF-1.4 test', content_type='application/pdf')


@override_settings(OWNER_EMAIL=OWNER)
class TestQuoteAPI(TestCase):
    """Tests for /api/quote/ and /api/regions/."""

    def setUp(self):
        self.client = APIClient()
        self.owner = User.objects.create_user(email=OWNER, password='testpass123')

    def test_regions_matrix(self):
        response = self.client.get('/api/regions/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data['regions']), 7)
        self.assertEqual(response.data['price_per_kg']['UAE']['ME'], Decimal('48'))

    def test_quote_by_region(self):
        response = self.client.post('/api/quote/', {
            'origin_region': 'UAE', 'destination_region': 'ME', 'weight_kg': '5'
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['price_per_kg'], '48.00')
        self.assertEqual(response.data['subtotal'], '240.00')
        self.assertIsNone(response.data['distance_km'])

    def test_quote_by_airports(self):
        response = self.client.post('/api/quote/', {
            'from_iata': 'dxb', 'to_iata': 'cai', 'weight_kg': '5'
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['origin_region'], 'UAE')
        self.assertEqual(response.data['destination_region'], 'ME')
        self.assertEqual(response.data['subtotal'], '240.00')
        self.assertAlmostEqual(response.data['distance_km'], 2416, delta=5)

    def test_anonymous_quote_hides_platform_share(self):
        response = self.client.post('/api/quote/', {
            'origin_region': 'UAE', 'destination_region': 'ME', 'weight_kg': '5'
        }, format='json')
        escrow = response.data['escrow']
        self.assertNotIn('platform_share', escrow)
        self.assertEqual(escrow['carrier_share'], Decimal('144'))
        self.assertTrue(escrow['escrow_protected'])

    def test_owner_quote_shows_platform_share(self):
        self.client.force_authenticate(self.owner)
        response = self.client.post('/api/quote/', {
            'origin_region': 'UAE', 'destination_region': 'ME', 'weight_kg': '5'
        }, format='json')
        self.assertEqual(response.data['escrow']['platform_share'], Decimal('96'))

    def test_negative_weight_is_bad_request(self):
        response = self.client.post('/api/quote/', {
            'origin_region': 'UAE', 'destination_region': 'ME', 'weight_kg': '-2'
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('error', response.data)

    def test_oversized_weight_is_bad_request(self):
        for weight in ['1e26', '9e999999', '10000.5']:
            response = self.client.post('/api/quote/', {
                'origin_region': 'UAE', 'destination_region': 'ME', 'weight_kg': weight
            }, format='json')
            self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, msg=weight)
            self.assertIn('error', response.data)

    def test_maximum_weight_is_quoted(self):
        response = self.client.post('/api/quote/', {
            'origin_region': 'UAE', 'destination_region': 'ME', 'weight_kg': '10000'
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['subtotal'], '480000.00')

    @override_settings(DEFAULT_CURRENCY='USD')
    def test_quote_uses_configured_default_currency(self):
        response = self.client.post('/api/quote/', {
            'origin_region': 'UAE', 'destination_region': 'ME', 'weight_kg': '5'
        }, format='json')
        self.assertEqual(response.data['currency'], 'USD')

    def test_quote_within_uae_is_zero(self):
        response = self.client.post('/api/quote/', {
            'from_iata': 'DXB', 'to_iata': 'auh', 'weight_kg': '5'
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['price_per_kg'], '0.00')
        self.assertEqual(response.data['subtotal'], '0.00')
        self.assertGreater(response.data['distance_km'], 0)

    def test_missing_route_is_bad_request(self):
        response = self.client.post('/api/quote/', {'weight_kg': '5'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)


class TestAirportsAPI(TestCase):
    """Tests for the airport endpoints."""

    def setUp(self):
        self.client = APIClient()
        self.staff = User.objects.create_user(email='ops@example.com', password='testpass123', is_staff=True)
        self.member = User.objects.create_user(email='member@example.com', password='testpass123')

    def tearDown(self):
        airport_registry.reset()

    def test_list_default_set(self):
        response = self.client.get('/api/airports/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['count'], 15)

    def test_import_requires_staff(self):
        self.client.force_authenticate(self.member)
        upload = SimpleUploadedFile('a.csv', b'XXX,X,1,2\n')
        response = self.client.post('/api/airports/import/', {'file': upload}, format='multipart')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_staff_import_replaces_set(self):
        self.client.force_authenticate(self.staff)
        payload = json.dumps([
            {'iata': 'DXB', 'name': 'Dubai', 'lat': 25.2532, 'lon': 55.3657},
            {'iata': 'BAD', 'name': 'No coordinates'},
        ]).encode()
        upload = SimpleUploadedFile('airports.json', payload)
        response = self.client.post('/api/airports/import/', {'file': upload}, format='multipart')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response.data['imported'])
        self.assertEqual(response.data['codes'], ['DXB'])
        self.assertEqual(self.client.get('/api/airports/').data['count'], 1)

    def test_empty_import_keeps_set(self):
        self.client.force_authenticate(self.staff)
        upload = SimpleUploadedFile('airports.json', b'{}')
        response = self.client.post('/api/airports/import/', {'file': upload}, format='multipart')
        self.assertFalse(response.data['imported'])
        self.assertEqual(response.data['count'], 15)


class TestListingsAPI(TestCase):
    """Tests for listings publish/search."""

    def setUp(self):
        self.client = APIClient()
        self.provider = User.objects.create_user(
            email='provider@example.com', password='testpass123', full_name='Sara P.'
        )
        self.client.force_authenticate(self.provider)

    def _publish_payload(self, **overrides):
        payload = {
            'from_iata': 'dxb',
            'to_iata': 'CAI',
            'date': '2025-08-20',
            'capacity_kg': 20,
            'ticket': file_upload('ticket.pdf'),
            'id': file_upload('id.pdf'),
            'passport': file_upload('passport.pdf'),
            'photo': image_upload(),
        }
        payload.update(overrides)
        return payload

    @patch('logistics.services.kyc.default_storage')
    def test_publish(self, storage):
        storage.save.side_effect = lambda path, content: path
        storage.url.side_effect = lambda name: f"/media/{name}"

        response = self.client.post('/api/listings/', self._publish_payload(), format='multipart')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['from_iata'], 'DXB')
        self.assertEqual(response.data['price_per_kg'], '48.00')
        self.assertEqual(response.data['provider_name'], 'Sara P.')
        self.assertEqual(storage.save.call_count, 4)

    @patch('logistics.services.kyc.default_storage')
    def test_publish_missing_documents(self, storage):
        payload = self._publish_payload()
        del payload['ticket']
        response = self.client.post('/api/listings/', payload, format='multipart')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], 'Upload ticket, ID, passport, and photo.')
        storage.save.assert_not_called()

    @patch('logistics.services.kyc.default_storage')
    def test_publish_storage_failure_is_bad_gateway(self, storage):
        storage.save.side_effect = OSError('bucket down')
        response = self.client.post('/api/listings/', self._publish_payload(), format='multipart')
        self.assertEqual(response.status_code, status.HTTP_502_BAD_GATEWAY)
        self.assertEqual(response.data['error'], 'Publish failed')
        self.assertFalse(Listing.objects.exists())

    def test_search(self):
        for capacity, day in [(5, 10), (15, 20), (20, 12)]:
            Listing.objects.create(
                user=self.provider, from_iata='DXB', to_iata='CAI',
                date=datetime.date(2025, 8, day), capacity_kg=capacity,
                price_per_kg=Decimal('48.00'),
                ticket_url='t', id_url='i', passport_url='p', photo_url='f',
            )
        response = self.client.get('/api/listings/search/', {'from': 'dxb', 'to': 'cai', 'min_kg': 10})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([row['capacity_kg'] for row in response.data], [20, 15])

    def test_search_without_matches_is_empty(self):
        response = self.client.get('/api/listings/search/', {'from': 'DXB', 'to': 'LHR'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data, [])

    def test_search_requires_route(self):
        response = self.client.get('/api/listings/search/', {'from': 'DXB'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_search_accepts_fractional_min_kg(self):
        for capacity, day in [(10, 10), (11, 12)]:
            Listing.objects.create(
                user=self.provider, from_iata='DXB', to_iata='CAI',
                date=datetime.date(2025, 8, day), capacity_kg=capacity,
                price_per_kg=Decimal('48.00'),
                ticket_url='t', id_url='i', passport_url='p', photo_url='f',
            )
        response = self.client.get('/api/listings/search/', {'from': 'DXB', 'to': 'CAI', 'min_kg': '10.5'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([row['capacity_kg'] for row in response.data], [11])

    def test_search_rejects_bad_min_kg(self):
        for min_kg in ['heavy', '-1', '1e26']:
            response = self.client.get('/api/listings/search/', {'from': 'DXB', 'to': 'CAI', 'min_kg': min_kg})
            self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, msg=min_kg)

    def test_list_filter(self):
        Listing.objects.create(
            user=self.provider, from_iata='DXB', to_iata='CAI',
            date=datetime.date(2025, 8, 12), capacity_kg=20,
            ticket_url='t', id_url='i', passport_url='p', photo_url='f',
        )
        response = self.client.get('/api/listings/', {'from_iata': 'dxb', 'min_capacity': 25})
        self.assertEqual(response.data, [])


class TestRequestsAPI(TestCase):

    def setUp(self):
        self.client = APIClient()
        self.shipper = User.objects.create_user(email='shipper@example.com', password='testpass123')
        self.other = User.objects.create_user(email='other@example.com', password='testpass123')

    @patch('logistics.services.kyc.default_storage')
    def test_submit_and_list_own(self, storage):
        storage.save.side_effect = lambda path, content: path
        storage.url.side_effect = lambda name: f"/media/{name}"
        self.client.force_authenticate(self.shipper)

        response = self.client.post('/api/requests/', {
            'from_iata': 'CAI', 'to_iata': 'KWI', 'date': '2025-08-25', 'kg': 4,
            'content_type': 'BOOKS',
            'id': file_upload('id.pdf'), 'passport': file_upload('passport.pdf'),
            'photo': image_upload(),
        }, format='multipart')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        # ME -> GCC: 60 x 0.8
        self.assertEqual(response.data['price_per_kg'], '48.00')

        self.assertEqual(len(self.client.get('/api/requests/').data), 1)
        self.client.force_authenticate(self.other)
        self.assertEqual(len(self.client.get('/api/requests/').data), 0)
        self.assertEqual(ShipmentRequest.objects.count(), 1)

    def test_requires_authentication(self):
        response = self.client.get('/api/requests/')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)


class TestShipmentsAPI(TestCase):

    def setUp(self):
        self.client = APIClient()
        self.client.force_authenticate(
            User.objects.create_user(email='member@example.com', password='testpass123')
        )
        Shipment.objects.create(
            reference='SHP-3002', carrier='DHL', tracking='DHL998822',
            status=ShipmentStatus.DELIVERED, eta=datetime.date(2025, 8, 12),
        )
        Shipment.objects.create(
            reference='SHP-3001', carrier='Aramex', tracking='RM12345AE',
            status=ShipmentStatus.IN_TRANSIT, eta=datetime.date(2025, 8, 15),
        )

    def test_list_ordered_by_eta(self):
        response = self.client.get('/api/shipments/')
        self.assertEqual([row['reference'] for row in response.data], ['SHP-3002', 'SHP-3001'])

    def test_retrieve_by_reference(self):
        response = self.client.get('/api/shipments/SHP-3001/')
        self.assertEqual(response.data['tracking'], 'RM12345AE')

    def test_read_only(self):
        response = self.client.post('/api/shipments/', {'reference': 'SHP-9'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_405_METHOD_NOT_ALLOWED)
