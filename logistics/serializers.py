"""
Logistics App Serializers - Listings, Requests, Quotes & Airports
"""

from rest_framework import serializers

from .models import Listing, ShipmentRequest, Shipment, PackageContents
from .services.pricing import CURRENCIES
from .services.rates import Region


def _iata(value: str) -> str:
    code = value.strip().upper()
    if len(code) != 3 or not code.isalpha():
        raise serializers.ValidationError("IATA code must be three letters.")
    return code


class ListingSerializer(serializers.ModelSerializer):
    """Published listing as shown in search results."""

    provider_name = serializers.CharField(source='user.full_name', read_only=True)

    class Meta:
        model = Listing
        fields = [
            'id', 'user', 'provider_name', 'from_iata', 'to_iata', 'date',
            'capacity_kg', 'price_per_kg', 'ticket_url', 'created_at'
        ]
        read_only_fields = fields


class ListingPublishSerializer(serializers.Serializer):
    """Provider "Have Space" form (multipart, with KYC files)."""

    from_iata = serializers.CharField(max_length=3)
    to_iata = serializers.CharField(max_length=3)
    date = serializers.DateField()
    capacity_kg = serializers.IntegerField(min_value=0)
    price_per_kg = serializers.DecimalField(
        max_digits=10, decimal_places=2, min_value=0, required=False
    )

    ticket = serializers.FileField(required=False)
    id = serializers.FileField(required=False)
    passport = serializers.FileField(required=False)
    photo = serializers.ImageField(required=False)

    def validate_from_iata(self, value):
        return _iata(value)

    def validate_to_iata(self, value):
        return _iata(value)


class ShipmentRequestSerializer(serializers.ModelSerializer):
    """Submitted shipper request."""

    content_type_display = serializers.CharField(source='get_content_type_display', read_only=True)

    class Meta:
        model = ShipmentRequest
        fields = [
            'id', 'from_iata', 'to_iata', 'date', 'kg', 'content_type',
            'content_type_display', 'price_per_kg', 'created_at'
        ]
        read_only_fields = fields


class ShipmentRequestSubmitSerializer(serializers.Serializer):
    """Shipper "Need Space" form (multipart, with KYC files)."""

    from_iata = serializers.CharField(max_length=3)
    to_iata = serializers.CharField(max_length=3)
    date = serializers.DateField()
    kg = serializers.IntegerField(min_value=0)
    content_type = serializers.ChoiceField(
        choices=PackageContents.choices, default=PackageContents.DOCUMENTS
    )

    id = serializers.FileField(required=False)
    passport = serializers.FileField(required=False)
    photo = serializers.ImageField(required=False)

    def validate_from_iata(self, value):
        return _iata(value)

    def validate_to_iata(self, value):
        return _iata(value)


class ShipmentSerializer(serializers.ModelSerializer):
    status_display = serializers.CharField(source='get_status_display', read_only=True)

    class Meta:
        model = Shipment
        fields = ['reference', 'carrier', 'tracking', 'status', 'status_display', 'eta']


class QuoteRequestSerializer(serializers.Serializer):
    """
    Quote by region pair or by airport pair.

    Either (origin_region, destination_region) or (from_iata, to_iata).
    """

    origin_region = serializers.ChoiceField(choices=Region.choices, required=False)
    destination_region = serializers.ChoiceField(choices=Region.choices, required=False)
    from_iata = serializers.CharField(max_length=3, required=False)
    to_iata = serializers.CharField(max_length=3, required=False)

    # Left unbounded here; the pricing engine rejects bad weights
    weight_kg = serializers.CharField()
    # DEFAULT_CURRENCY when omitted
    currency = serializers.ChoiceField(choices=CURRENCIES, required=False)

    def validate(self, data):
        has_regions = data.get('origin_region') and data.get('destination_region')
        has_airports = data.get('from_iata') and data.get('to_iata')

        if not has_regions and not has_airports:
            raise serializers.ValidationError(
                "Provide origin_region/destination_region or from_iata/to_iata."
            )
        if has_airports:
            data['from_iata'] = data['from_iata'].strip().upper()
            data['to_iata'] = data['to_iata'].strip().upper()
        return data


class QuoteResponseSerializer(serializers.Serializer):
    """Serializer for price estimation response."""

    origin_region = serializers.CharField()
    destination_region = serializers.CharField()
    weight_kg = serializers.DecimalField(max_digits=None, decimal_places=3)
    currency = serializers.CharField()
    base_rate = serializers.DecimalField(max_digits=10, decimal_places=2)
    price_per_kg = serializers.DecimalField(max_digits=10, decimal_places=2)
    subtotal = serializers.DecimalField(max_digits=None, decimal_places=2)
    distance_km = serializers.IntegerField(allow_null=True)


class AirportSerializer(serializers.Serializer):
    iata = serializers.CharField()
    name = serializers.CharField()
    lat = serializers.FloatField()
    lon = serializers.FloatField()


class AirportImportSerializer(serializers.Serializer):
    """Uploaded airport dataset (.json list or delimited text)."""

    file = serializers.FileField()
