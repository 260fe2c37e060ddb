"""
Luggage Share KYC Flow Tests
=============================

Tests for:
1. Document paths
2. Provider publish flow (price snapshot, required documents)
3. Shipper request flow
4. Collaborator failures (storage, database)
"""

import datetime
from decimal import Decimal
from unittest.mock import MagicMock, patch

from django.core.files.uploadedfile import SimpleUploadedFile
from django.contrib.auth.models import AnonymousUser
from django.db import DatabaseError
from django.test import TestCase

from core.exceptions import CollaboratorError, ValidationError
from core.models import User
from logistics.models import Listing, ShipmentRequest, PackageContents
from logistics.services.kyc import (
    document_path, publish_listing, submit_request, REQUIRED_DOCUMENTS
)


def fake_storage():
    """Storage double that records saves and serves predictable URLs."""
    storage = MagicMock()
    storage.save.side_effect = lambda path, content: path
    storage.url.side_effect = lambda name: f"https://files.example.com/{name}"
    return storage


def documents(*kinds):
    ext = {'ticket': 'pdf', 'id': 'png', 'passport': 'jpg', 'photo': 'jpg'}
    return {
        kind: SimpleUploadedFile(f"{kind}-scan.{ext[kind]}", b"data")
        for kind in kinds
    }


class TestDocumentPath(TestCase):

    def test_path_layout(self):
        path = document_path('u-1', 'provider', 1723456789000, 'ticket', 'my.ticket.pdf')
        self.assertEqual(path, 'uploads/kyc/u-1/provider/1723456789000-ticket.pdf')

    def test_missing_extension(self):
        path = document_path('u-1', 'shipper', 1, 'id', 'scan')
        self.assertTrue(path.endswith('1-id.bin'))


class TestPublishListing(TestCase):
    """Tests for the provider publish flow."""

    def setUp(self):
        self.provider = User.objects.create_user(email='provider@example.com', password='testpass123')
        self.data = {
            'from_iata': 'DXB',
            'to_iata': 'CAI',
            'date': datetime.date(2025, 8, 20),
            'capacity_kg': 20,
        }

    @patch('logistics.services.kyc.time.time', return_value=1723456789.0)
    def test_publish_uploads_documents_and_snapshots_price(self, _):
        storage = fake_storage()
        listing = publish_listing(
            self.provider, self.data, documents(*REQUIRED_DOCUMENTS['provider']), storage
        )

        self.assertEqual(storage.save.call_count, 4)
        self.assertEqual(listing.price_per_kg, Decimal('48'))
        self.assertEqual(
            listing.ticket_url,
            f"https://files.example.com/uploads/kyc/{self.provider.pk}/provider/1723456789000-ticket.pdf"
        )
        self.assertTrue(listing.photo_url.endswith('1723456789000-photo.jpg'))
        self.assertEqual(Listing.objects.count(), 1)

    def test_provider_price_override(self):
        data = dict(self.data, price_per_kg=Decimal('35.00'))
        listing = publish_listing(
            self.provider, data, documents(*REQUIRED_DOCUMENTS['provider']), fake_storage()
        )
        listing.refresh_from_db()
        self.assertEqual(listing.price_per_kg, Decimal('35.00'))

    def test_missing_ticket_rejected_before_upload(self):
        storage = fake_storage()
        with self.assertRaises(ValidationError) as ctx:
            publish_listing(self.provider, self.data, documents('id', 'passport', 'photo'), storage)
        self.assertEqual(str(ctx.exception), 'Upload ticket, ID, passport, and photo.')
        storage.save.assert_not_called()

    def test_anonymous_rejected(self):
        with self.assertRaises(ValidationError):
            publish_listing(AnonymousUser(), self.data, documents(*REQUIRED_DOCUMENTS['provider']), fake_storage())

    def test_negative_capacity_rejected(self):
        data = dict(self.data, capacity_kg=-1)
        with self.assertRaises(ValidationError):
            publish_listing(self.provider, data, documents(*REQUIRED_DOCUMENTS['provider']), fake_storage())

    # ==========================================
    # Collaborator failures
    # ==========================================

    def test_storage_failure_is_one_collaborator_error(self):
        storage = fake_storage()
        storage.save.side_effect = OSError("bucket unavailable")

        with self.assertRaises(CollaboratorError) as ctx:
            publish_listing(self.provider, self.data, documents(*REQUIRED_DOCUMENTS['provider']), storage)

        self.assertIsInstance(ctx.exception.__cause__, OSError)
        self.assertFalse(Listing.objects.exists())

    def test_insert_failure_leaves_uploaded_files(self):
        """No rollback: documents already uploaded stay in storage."""
        storage = fake_storage()
        with patch.object(Listing.objects, 'create', side_effect=DatabaseError("insert failed")):
            with self.assertRaises(CollaboratorError):
                publish_listing(self.provider, self.data, documents(*REQUIRED_DOCUMENTS['provider']), storage)

        self.assertEqual(storage.save.call_count, 4)
        storage.delete.assert_not_called()


class TestSubmitRequest(TestCase):
    """Tests for the shipper request flow."""

    def setUp(self):
        self.shipper = User.objects.create_user(email='shipper@example.com', password='testpass123')
        self.data = {
            'from_iata': 'JED',
            'to_iata': 'DXB',
            'date': datetime.date(2025, 8, 22),
            'kg': 7,
            'content_type': PackageContents.CLOTHING,
        }

    def test_submit_stores_quoted_price(self):
        storage = fake_storage()
        request = submit_request(self.shipper, self.data, documents(*REQUIRED_DOCUMENTS['shipper']), storage)

        self.assertEqual(storage.save.call_count, 3)
        # GCC -> UAE: 40 x 0.8
        self.assertEqual(request.price_per_kg, Decimal('32'))
        self.assertIn(f"/kyc/{self.shipper.pk}/shipper/", request.passport_url)
        self.assertEqual(ShipmentRequest.objects.get().content_type, PackageContents.CLOTHING)

    def test_ticket_not_required_for_shippers(self):
        self.assertNotIn('ticket', REQUIRED_DOCUMENTS['shipper'])

    def test_missing_photo_rejected(self):
        with self.assertRaises(ValidationError) as ctx:
            submit_request(self.shipper, self.data, documents('id', 'passport'), fake_storage())
        self.assertEqual(str(ctx.exception), 'Upload ID, Passport, and Photo.')

    def test_storage_failure_on_last_document(self):
        storage = fake_storage()
        storage.save.side_effect = [
            'uploads/a', 'uploads/b', OSError("timeout"),
        ]
        with self.assertRaises(CollaboratorError):
            submit_request(self.shipper, self.data, documents(*REQUIRED_DOCUMENTS['shipper']), storage)
        self.assertFalse(ShipmentRequest.objects.exists())
