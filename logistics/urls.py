"""
Logistics App URLs
"""

from django.urls import path, include
from rest_framework.routers import DefaultRouter

from .views import (
    RegionListView, QuoteAPIView,
    AirportListView, AirportImportView,
    ListingViewSet, ShipmentRequestViewSet, ShipmentViewSet
)

router = DefaultRouter()
router.register(r'listings', ListingViewSet, basename='listing')
router.register(r'requests', ShipmentRequestViewSet, basename='shipment-request')
router.register(r'shipments', ShipmentViewSet, basename='shipment')

urlpatterns = [
    # Pricing
    path('regions/', RegionListView.as_view(), name='regions'),
    path('quote/', QuoteAPIView.as_view(), name='quote'),

    # Airports
    path('airports/', AirportListView.as_view(), name='airports'),
    path('airports/import/', AirportImportView.as_view(), name='airports-import'),

    # Router URLs
    path('', include(router.urls)),
]
