"""
Luggage Share Monitoring & Health Check Endpoints
==================================================

Provides:
1. /health/ - Basic liveness check (for load balancers/Docker)
2. /health/ready/ - Readiness check (DB, cache, business rule sanity)
"""

import time
import logging
from django.conf import settings
from django.http import JsonResponse
from django.db import connection
from django.core.cache import cache
from django.views.decorators.http import require_GET
from django.views.decorators.csrf import csrf_exempt
from django.utils import timezone

logger = logging.getLogger('luggage_share.monitoring')


@csrf_exempt
@require_GET
def health_check(request):
    """
    Basic liveness probe.
    Returns 200 if the Django process is alive.
    """
    return JsonResponse({
        'status': 'ok',
        'service': 'luggage-share',
        'timestamp': timezone.now().isoformat(),
    })


def business_rule_checks() -> dict:
    """
    Sanity checks on the pricing configuration, the way the dashboard
    settings page used to show them.
    """
    from decimal import Decimal
    from logistics.services.rates import Region, validate_rate_table
    from logistics.services.pricing import quote
    from logistics.services.airports import haversine_km, Airport
    from core.exceptions import ConfigurationError

    results = {}

    try:
        validate_rate_table()
        results['rate_table_complete'] = {'pass': True, 'detail': '49 pairs'}
    except ConfigurationError as e:
        results['rate_table_complete'] = {'pass': False, 'detail': str(e)}

    price = quote(Region.UAE, Region.ME, 1).price_per_kg
    results['price_rule_80_uae_me'] = {
        'pass': price == Decimal('48'),
        'detail': f"computed={price}",
    }

    one_degree = round(haversine_km(Airport('A', '', 0.0, 0.0), Airport('B', '', 0.0, 1.0)))
    results['haversine_sanity'] = {
        'pass': one_degree > 0,
        'detail': f"1 deg lon @ equator = {one_degree} km",
    }

    results['owner_configured'] = {
        'pass': bool(settings.OWNER_EMAIL),
        'detail': 'set' if settings.OWNER_EMAIL else 'missing',
    }
    results['storage_bucket'] = {
        'pass': bool(settings.UPLOADS_BUCKET),
        'detail': f"bucket={settings.UPLOADS_BUCKET}",
    }
    return results


@csrf_exempt
@require_GET
def readiness_check(request):
    """
    Readiness probe - checks all critical dependencies.
    Returns 200 only if ALL dependencies are healthy.
    Returns 503 if any dependency is down.
    """
    checks = {}
    all_healthy = True

    # 1. Database Check
    try:
        start = time.time()
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")
            cursor.fetchone()
        db_time = round((time.time() - start) * 1000, 2)
        checks['database'] = {
            'status': 'healthy',
            'response_time_ms': db_time,
            'engine': connection.vendor,
        }
    except Exception as e:
        checks['database'] = {
            'status': 'unhealthy',
            'error': str(e),
        }
        all_healthy = False
        logger.error(f"Health check - Database unhealthy: {e}")

    # 2. Cache Check
    try:
        cache_key = '_healthcheck_ping'
        cache.set(cache_key, 'pong', 10)
        if cache.get(cache_key) != 'pong':
            raise RuntimeError("Cache read/write mismatch")
        checks['cache'] = {'status': 'healthy'}
    except Exception as e:
        checks['cache'] = {
            'status': 'unhealthy',
            'error': str(e),
        }
        all_healthy = False
        logger.error(f"Health check - Cache unhealthy: {e}")

    # 3. Business rules
    rules = business_rule_checks()
    checks['business_rules'] = rules
    if not all(rule['pass'] for rule in rules.values()):
        all_healthy = False
        logger.warning(f"Health check - Business rule check failed: {rules}")

    status_code = 200 if all_healthy else 503
    overall_status = 'healthy' if all_healthy else 'unhealthy'

    return JsonResponse({
        'status': overall_status,
        'service': 'luggage-share',
        'timestamp': timezone.now().isoformat(),
        'checks': checks,
    }, status=status_code)
