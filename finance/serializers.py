"""
Finance App Serializers - Orders & Payouts
"""

from rest_framework import serializers
from .models import Order, Payout


class OrderSerializer(serializers.ModelSerializer):
    """Serializer for Order model."""

    status_display = serializers.CharField(source='get_status_display', read_only=True)
    is_releasable = serializers.BooleanField(read_only=True)

    class Meta:
        model = Order
        fields = [
            'reference', 'customer', 'from_iata', 'to_iata', 'pieces',
            'status', 'status_display', 'price', 'is_releasable', 'created_at'
        ]
        read_only_fields = ['status', 'created_at']


class PayoutSerializer(serializers.ModelSerializer):
    """Owner-only view of escrow releases."""

    order = serializers.CharField(source='order.reference', read_only=True)

    class Meta:
        model = Payout
        fields = ['id', 'order', 'platform_amount', 'carrier_amount', 'created_at']
