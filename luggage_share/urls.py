"""
Luggage Share Main URL Configuration
"""

from django.contrib import admin
from django.urls import path, include
from django.conf import settings
from django.conf.urls.static import static
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from drf_spectacular.views import SpectacularAPIView

from core.health import health_check, readiness_check


# ===========================================
# ADMIN SITE CUSTOMIZATION
# ===========================================
admin.site.site_header = "Luggage Share Control Tower"
admin.site.site_title = "Luggage Share Admin"
admin.site.index_title = "Marketplace Operations"


@api_view(['GET'])
@permission_classes([AllowAny])
def api_root(request):
    """API Root endpoint with available routes."""
    return Response({
        'name': 'Luggage Share API',
        'version': '1.0.0',
        'endpoints': {
            'auth': {
                'token': '/api/auth/token/',
                'refresh': '/api/auth/token/refresh/',
            },
            'users': '/api/users/',
            'regions': '/api/regions/',
            'quote': '/api/quote/',
            'airports': '/api/airports/',
            'listings': '/api/listings/',
            'requests': '/api/requests/',
            'shipments': '/api/shipments/',
            'orders': '/api/orders/',
            'tickets': '/api/tickets/',
            'chat': '/api/chat/messages/',
            'overview': '/api/overview/',
        }
    })


urlpatterns = [
    # Admin
    path('admin/', admin.site.urls),

    # Monitoring
    path('health/', health_check, name='health'),
    path('health/ready/', readiness_check, name='health-ready'),

    # API Root & schema
    path('api/', api_root, name='api-root'),
    path('api/schema/', SpectacularAPIView.as_view(), name='api-schema'),

    # App URLs
    path('api/', include('core.urls')),
    path('api/', include('logistics.urls')),
    path('api/', include('finance.urls')),
    path('api/', include('support.urls')),
    path('api/', include('chat.urls')),
    path('api/', include('reports.urls')),
]

# Serve uploaded documents in development
if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
