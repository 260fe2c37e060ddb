"""
REPORTS App - Overview Dashboard Figures

Aggregates the headline numbers shown on the dashboard overview page.
"""

import csv
import io
import logging
from datetime import date
from decimal import Decimal
from typing import Optional

from django.db.models import Count, Sum
from django.db.models.functions import TruncMonth
from django.utils import timezone

logger = logging.getLogger(__name__)

# Months shown in the orders chart
SERIES_MONTHS = 12


# ===========================================
# OVERVIEW FIGURES
# ===========================================

def luggage_status_breakdown(total: int, delivered: int, in_transit: int) -> dict:
    """Checked = whatever is neither delivered nor in transit (never negative)."""
    return {
        'checked': max(0, total - delivered - in_transit),
        'in_transit': in_transit,
        'delivered': delivered,
    }


def _month_keys(today: date, months: int = SERIES_MONTHS) -> list:
    """'YYYY-MM' keys for the last ``months`` months, oldest first."""
    keys = []
    year, month = today.year, today.month
    for _ in range(months):
        keys.append(f"{year:04d}-{month:02d}")
        month -= 1
        if month == 0:
            year, month = year - 1, 12
    return list(reversed(keys))


def monthly_order_counts(today: Optional[date] = None) -> list:
    from finance.models import Order

    today = today or timezone.localdate()
    keys = _month_keys(today)

    rows = (
        Order.objects
        .annotate(month=TruncMonth('created_at'))
        .values('month')
        .order_by()
        .annotate(orders=Count('id'))
    )
    counts = {row['month'].strftime('%Y-%m'): row['orders'] for row in rows if row['month']}

    return [{'month': key, 'orders': counts.get(key, 0)} for key in keys]


def overview_figures(today: Optional[date] = None) -> dict:
    """
    Headline figures for the overview page.

    Returns:
        dict: slots, booked, luggage_status, platform_payout, monthly_orders

    platform_payout is owner-only data; callers decide whether to show it.
    """
    from finance.models import Order, OrderStatus, Payout
    from logistics.models import Listing

    slots = Listing.objects.aggregate(total=Sum('capacity_kg'))['total'] or 0

    orders = Order.objects.all()
    booked = orders.count()
    delivered = orders.filter(status__in=[OrderStatus.DELIVERED, OrderStatus.RELEASED]).count()
    in_transit = orders.filter(status=OrderStatus.ESCROW).count()

    platform_payout = Payout.objects.aggregate(
        total=Sum('platform_amount')
    )['total'] or Decimal('0')

    return {
        'slots': slots,
        'booked': booked,
        'luggage_status': luggage_status_breakdown(booked, delivered, in_transit),
        'platform_payout': platform_payout,
        'monthly_orders': monthly_order_counts(today),
    }


# ===========================================
# RATE TABLE EXPORT
# ===========================================

def rate_table_csv() -> str:
    """Rate table as CSV: origin, destination, base rate, displayed price per kg."""
    from logistics.services.rates import Region, RATE_TABLE
    from logistics.services.pricing import price_per_kg

    buffer = io.StringIO()
    writer = csv.writer(buffer)
    writer.writerow(['origin', 'destination', 'base_rate', 'price_per_kg'])
    for origin in Region:
        for destination in Region:
            writer.writerow([
                origin.value,
                destination.value,
                RATE_TABLE[origin][destination],
                price_per_kg(origin, destination),
            ])
    return buffer.getvalue()
