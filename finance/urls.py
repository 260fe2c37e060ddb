"""
Finance App URLs
"""

from django.urls import path, include
from rest_framework.routers import DefaultRouter

from .views import OrderViewSet, PayoutViewSet

router = DefaultRouter()
router.register(r'orders', OrderViewSet, basename='order')
router.register(r'payouts', PayoutViewSet, basename='payout')

urlpatterns = [
    # Router URLs
    path('', include(router.urls)),
]
