"""
Finance App Views - Orders & Escrow API
"""

from rest_framework import viewsets, status, permissions
from rest_framework.decorators import action
from rest_framework.response import Response

from core.identity import viewer_is_owner
from .models import Order, Payout
from .serializers import OrderSerializer, PayoutSerializer
from .services import release_order


class IsOwnerAccount(permissions.BasePermission):
    """Permission for the configured owner account only."""

    def has_permission(self, request, view):
        return viewer_is_owner(request.user)


class OrderViewSet(viewsets.ReadOnlyModelViewSet):
    """
    ViewSet for Orders (read-only, plus escrow release).
    """

    queryset = Order.objects.all()
    serializer_class = OrderSerializer
    permission_classes = [permissions.IsAuthenticated]
    lookup_field = 'reference'
    filterset_fields = ['status']

    @action(detail=True, methods=['post'])
    def release(self, request, reference=None):
        """Release escrow; the response discloses the platform share to the owner only."""
        order = self.get_object()
        try:
            result = release_order(order, request.user)
        except ValueError as e:
            return Response(
                {'error': str(e)},
                status=status.HTTP_400_BAD_REQUEST
            )
        return Response(result)


class PayoutViewSet(viewsets.ReadOnlyModelViewSet):
    """
    Escrow release history. Platform amounts are owner-only data.
    """

    queryset = Payout.objects.select_related('order')
    serializer_class = PayoutSerializer
    permission_classes = [permissions.IsAuthenticated, IsOwnerAccount]
