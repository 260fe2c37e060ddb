"""
REPORTS App - Dashboard API

Overview figures for the dashboard and a rate table export.
"""

import logging
from django.http import HttpResponse
from rest_framework import permissions
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response

from core.identity import viewer_is_owner
from .services import overview_figures, rate_table_csv

logger = logging.getLogger(__name__)


@api_view(['GET'])
@permission_classes([permissions.IsAuthenticated])
def overview_api(request):
    """
    GET /api/overview/

    Platform payout total is included for the owner account only.
    """
    figures = overview_figures()
    if not viewer_is_owner(request.user):
        figures.pop('platform_payout')
    return Response(figures)


@api_view(['GET'])
@permission_classes([permissions.IsAuthenticated])
def rate_table_export(request):
    """Export the rate table as CSV."""
    response = HttpResponse(rate_table_csv(), content_type='text/csv')
    response['Content-Disposition'] = 'attachment; filename="rate_table.csv"'
    return response
