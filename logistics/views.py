"""
Logistics App Views - Pricing, Airports, Listings & Requests API
"""

import logging
from rest_framework import viewsets, mixins, status, permissions
from rest_framework.decorators import action
from rest_framework.parsers import MultiPartParser, FormParser, JSONParser
from rest_framework.response import Response
from rest_framework.views import APIView

from core.exceptions import CollaboratorError
from core.identity import viewer_is_owner
from finance.services import settle_escrow, present_split
from .filters import ListingFilter
from .models import Listing, ShipmentRequest, Shipment
from .serializers import (
    ListingSerializer, ListingPublishSerializer,
    ShipmentRequestSerializer, ShipmentRequestSubmitSerializer,
    ShipmentSerializer, QuoteRequestSerializer, QuoteResponseSerializer,
    AirportSerializer, AirportImportSerializer
)
from .services.airports import airport_registry
from .services.kyc import publish_listing, submit_request
from .services.pricing import quote, quote_for_route, price_per_kg, to_weight, PRICE_FACTOR
from .services.rates import Region, RATE_TABLE

logger = logging.getLogger(__name__)

DOCUMENT_FIELDS = ('ticket', 'id', 'passport', 'photo')


def _split_documents(data: dict) -> dict:
    return {kind: data.pop(kind, None) for kind in DOCUMENT_FIELDS}


class RegionListView(APIView):
    """
    Pricing regions and the displayed per-kg price matrix.

    GET /api/regions/
    """

    permission_classes = [permissions.AllowAny]

    def get(self, request):
        regions = [{'code': r.value, 'label': r.label} for r in Region]
        matrix = {
            origin.value: {
                destination.value: price_per_kg(origin, destination)
                for destination in RATE_TABLE[origin]
            }
            for origin in RATE_TABLE
        }
        return Response({
            'regions': regions,
            'price_factor': PRICE_FACTOR,
            'price_per_kg': matrix,
        })


class QuoteAPIView(APIView):
    """
    Price estimation by region pair or airport pair.

    POST /api/quote/

    The escrow split is attached; its platform share is disclosed to the
    owner account only.
    """

    permission_classes = [permissions.AllowAny]

    def post(self, request):
        serializer = QuoteRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            if data.get('from_iata') and data.get('to_iata'):
                result = quote_for_route(
                    data['from_iata'], data['to_iata'], data['weight_kg'], data.get('currency')
                )
            else:
                result = quote(
                    data['origin_region'], data['destination_region'],
                    data['weight_kg'], data.get('currency')
                )
        except ValueError as e:
            return Response(
                {'error': str(e)},
                status=status.HTTP_400_BAD_REQUEST
            )

        response_data = QuoteResponseSerializer(result).data
        response_data['escrow'] = present_split(
            settle_escrow(result.subtotal),
            viewer_is_owner(request.user)
        )
        return Response(response_data)


class AirportListView(APIView):
    """
    Active airport set.

    GET  /api/airports/          (public)
    POST /api/airports/import/   (staff, multipart ``file``)
    """

    permission_classes = [permissions.AllowAny]

    def get(self, request):
        airports = list(airport_registry.active)
        return Response({
            'count': len(airports),
            'results': AirportSerializer(airports, many=True).data,
        })


class AirportImportView(APIView):
    """Replace the active airport set from an uploaded file (staff only)."""

    permission_classes = [permissions.IsAdminUser]
    parser_classes = [MultiPartParser, FormParser]

    def post(self, request):
        serializer = AirportImportSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        upload = serializer.validated_data['file']

        try:
            text = upload.read().decode('utf-8-sig')
        except UnicodeDecodeError:
            return Response(
                {'error': 'Airport file must be UTF-8 text.'},
                status=status.HTTP_400_BAD_REQUEST
            )

        before = airport_registry.active
        after = airport_registry.import_file(upload.name, text)

        return Response({
            'imported': after is not before,
            'count': len(after),
            'codes': after.codes(),
        })


class ListingViewSet(mixins.ListModelMixin,
                     mixins.RetrieveModelMixin,
                     viewsets.GenericViewSet):
    """
    ViewSet for capacity listings.

    - list: filterable (from_iata, to_iata, min_capacity, date_after)
    - search: exact route + minimum capacity, earliest date first
    - create: provider publish flow (multipart with KYC documents)
    """

    queryset = Listing.objects.select_related('user')
    serializer_class = ListingSerializer
    permission_classes = [permissions.IsAuthenticated]
    filterset_class = ListingFilter
    parser_classes = [MultiPartParser, FormParser, JSONParser]

    def create(self, request):
        serializer = ListingPublishSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = dict(serializer.validated_data)
        documents = _split_documents(data)

        try:
            listing = publish_listing(request.user, data, documents)
        except CollaboratorError as e:
            return Response(
                {'error': str(e)},
                status=status.HTTP_502_BAD_GATEWAY
            )
        except ValueError as e:
            return Response(
                {'error': str(e)},
                status=status.HTTP_400_BAD_REQUEST
            )

        return Response(ListingSerializer(listing).data, status=status.HTTP_201_CREATED)

    @action(detail=False, methods=['get'])
    def search(self, request):
        """GET /api/listings/search/?from=DXB&to=CAI&min_kg=12.5"""
        origin = request.query_params.get('from', '').strip().upper()
        destination = request.query_params.get('to', '').strip().upper()
        min_kg = request.query_params.get('min_kg', '0')

        if not origin or not destination:
            return Response(
                {'error': 'Both "from" and "to" airport codes are required.'},
                status=status.HTTP_400_BAD_REQUEST
            )
        try:
            min_kg = to_weight(min_kg)
        except ValueError as e:
            return Response(
                {'error': str(e)},
                status=status.HTTP_400_BAD_REQUEST
            )

        matches = Listing.objects.select_related('user').matching(origin, destination, min_kg)
        return Response(ListingSerializer(matches, many=True).data)


class ShipmentRequestViewSet(mixins.ListModelMixin,
                             mixins.RetrieveModelMixin,
                             viewsets.GenericViewSet):
    """
    ViewSet for shipper requests. Users only see their own.
    """

    serializer_class = ShipmentRequestSerializer
    permission_classes = [permissions.IsAuthenticated]
    parser_classes = [MultiPartParser, FormParser, JSONParser]

    def get_queryset(self):
        user = self.request.user
        if user.is_staff:
            return ShipmentRequest.objects.all()
        return ShipmentRequest.objects.filter(user=user)

    def create(self, request):
        serializer = ShipmentRequestSubmitSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = dict(serializer.validated_data)
        documents = _split_documents(data)

        try:
            shipment_request = submit_request(request.user, data, documents)
        except CollaboratorError as e:
            return Response(
                {'error': str(e)},
                status=status.HTTP_502_BAD_GATEWAY
            )
        except ValueError as e:
            return Response(
                {'error': str(e)},
                status=status.HTTP_400_BAD_REQUEST
            )

        return Response(
            ShipmentRequestSerializer(shipment_request).data,
            status=status.HTTP_201_CREATED
        )


class ShipmentViewSet(viewsets.ReadOnlyModelViewSet):
    """Tracked shipments (read-only)."""

    queryset = Shipment.objects.all()
    serializer_class = ShipmentSerializer
    permission_classes = [permissions.IsAuthenticated]
    lookup_field = 'reference'
    filterset_fields = ['status', 'carrier']
