"""
KYC document upload + listing/request creation flows.

Both flows upload every document first, then insert one record. A failure
part-way leaves the already-uploaded files in storage; the caller gets a
single CollaboratorError for the whole flow.
"""

import time
import logging
from django.conf import settings
from django.core.files.storage import default_storage

from core.exceptions import CollaboratorError, ValidationError
from logistics.models import Listing, ShipmentRequest
from .pricing import price_per_kg_for_route, to_weight

logger = logging.getLogger(__name__)


class KycRole:
    PROVIDER = 'provider'
    SHIPPER = 'shipper'


REQUIRED_DOCUMENTS = {
    KycRole.PROVIDER: ('ticket', 'id', 'passport', 'photo'),
    KycRole.SHIPPER: ('id', 'passport', 'photo'),
}

MISSING_DOCUMENTS_MESSAGE = {
    KycRole.PROVIDER: 'Upload ticket, ID, passport, and photo.',
    KycRole.SHIPPER: 'Upload ID, Passport, and Photo.',
}


def document_path(user_id, role: str, stamp: int, kind: str, filename: str) -> str:
    """
    Storage path namespaced by user, role and timestamp.

    Example: uploads/kyc/<uuid>/provider/1723456789000-ticket.pdf
    """
    ext = filename.rsplit('.', 1)[-1] if '.' in filename else 'bin'
    return f"{settings.UPLOADS_BUCKET}/kyc/{user_id}/{role}/{stamp}-{kind}.{ext}"


class KycUploader:
    """Uploads one set of KYC documents for a single flow."""

    def __init__(self, user, role: str, storage=None):
        self.user = user
        self.role = role
        self.storage = storage or default_storage
        self.stamp = int(time.time() * 1000)

    def upload(self, kind: str, file) -> str:
        path = document_path(self.user.pk, self.role, self.stamp, kind, file.name)
        name = self.storage.save(path, file)
        try:
            return self.storage.url(name)
        except NotImplementedError:
            return name

    def upload_all(self, documents: dict) -> dict:
        return {
            kind: self.upload(kind, documents[kind])
            for kind in REQUIRED_DOCUMENTS[self.role]
        }


def _require_signed_in(user):
    if user is None or not getattr(user, 'is_authenticated', False):
        raise ValidationError('Please sign in first.')


def _require_documents(role: str, documents: dict):
    missing = [kind for kind in REQUIRED_DOCUMENTS[role] if not documents.get(kind)]
    if missing:
        raise ValidationError(MISSING_DOCUMENTS_MESSAGE[role])


def publish_listing(user, data: dict, documents: dict, storage=None) -> Listing:
    """
    Provider "Have Space" flow.

    Args:
        user: authenticated provider
        data: from_iata, to_iata, date, capacity_kg, optional price_per_kg
        documents: ticket, id, passport, photo (uploaded files)

    Returns:
        Listing: the published listing

    Raises:
        ValidationError: not signed in, missing documents, bad capacity
        CollaboratorError: storage upload or insert failed
    """
    _require_signed_in(user)
    _require_documents(KycRole.PROVIDER, documents)
    to_weight(data['capacity_kg'])

    # Snapshot: provider override or the route quote at publish time
    price = data.get('price_per_kg')
    if price is None:
        price = price_per_kg_for_route(data['from_iata'], data['to_iata'])

    try:
        urls = KycUploader(user, KycRole.PROVIDER, storage).upload_all(documents)
        listing = Listing.objects.create(
            user=user,
            from_iata=data['from_iata'],
            to_iata=data['to_iata'],
            date=data['date'],
            capacity_kg=data['capacity_kg'],
            price_per_kg=price,
            ticket_url=urls['ticket'],
            id_url=urls['id'],
            passport_url=urls['passport'],
            photo_url=urls['photo'],
        )
    except Exception as e:
        logger.error(f"[KYC] Publish failed for {user.pk}: {e}")
        raise CollaboratorError('Publish failed') from e

    logger.info(
        f"[KYC] Listing {str(listing.id)[:8]} published | "
        f"{listing.from_iata}->{listing.to_iata} {listing.capacity_kg} kg @ {price}"
    )
    return listing


def submit_request(user, data: dict, documents: dict, storage=None) -> ShipmentRequest:
    """
    Shipper "Need Space" flow.

    The request stores the route price per kg quoted at submission time.

    Raises:
        ValidationError: not signed in, missing documents, bad weight
        CollaboratorError: storage upload or insert failed
    """
    _require_signed_in(user)
    _require_documents(KycRole.SHIPPER, documents)
    to_weight(data['kg'])

    price = price_per_kg_for_route(data['from_iata'], data['to_iata'])

    try:
        urls = KycUploader(user, KycRole.SHIPPER, storage).upload_all(documents)
        request = ShipmentRequest.objects.create(
            user=user,
            from_iata=data['from_iata'],
            to_iata=data['to_iata'],
            date=data['date'],
            kg=data['kg'],
            content_type=data['content_type'],
            id_url=urls['id'],
            passport_url=urls['passport'],
            photo_url=urls['photo'],
            price_per_kg=price,
        )
    except Exception as e:
        logger.error(f"[KYC] Request submission failed for {user.pk}: {e}")
        raise CollaboratorError('Submit failed') from e

    logger.info(
        f"[KYC] Request {str(request.id)[:8]} submitted | "
        f"{request.from_iata}->{request.to_iata} {request.kg} kg @ {price}"
    )
    return request
