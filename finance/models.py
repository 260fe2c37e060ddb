"""
FINANCE App - Orders & Escrow Payouts for Luggage Share

Handles: Orders, Escrow release records (Payouts)
"""

import uuid
from decimal import Decimal
from django.db import models


class OrderStatus(models.TextChoices):
    """Order lifecycle."""
    PENDING = 'PENDING', 'Pending'
    PAID = 'PAID', 'Paid'
    ESCROW = 'ESCROW', 'Escrow'
    DELIVERED = 'DELIVERED', 'Delivered'
    RELEASED = 'RELEASED', 'Released'


class Order(models.Model):
    """A booked luggage shipment whose payment is held in escrow."""

    reference = models.CharField(max_length=20, unique=True, verbose_name="Order ID")
    customer = models.CharField(max_length=150, verbose_name="Customer")

    # Route
    from_iata = models.CharField(max_length=3, verbose_name="From (IATA)")
    to_iata = models.CharField(max_length=3, verbose_name="To (IATA)")

    pieces = models.PositiveIntegerField(default=1, verbose_name="Pieces")
    status = models.CharField(
        max_length=20,
        choices=OrderStatus.choices,
        default=OrderStatus.PENDING,
        verbose_name="Status"
    )
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal('0.00'),
        verbose_name="Price"
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = "Order"
        verbose_name_plural = "Orders"
        ordering = ['reference']
        indexes = [
            models.Index(fields=['status'], name='order_status_idx'),
        ]

    def __str__(self):
        return f"{self.reference} | {self.from_iata} → {self.to_iata} | {self.status}"

    @property
    def is_releasable(self) -> bool:
        return self.status in (OrderStatus.ESCROW, OrderStatus.DELIVERED)


class Payout(models.Model):
    """
    Escrow release record.

    platform_amount + carrier_amount always equals the order price at release.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    order = models.ForeignKey(
        Order,
        on_delete=models.PROTECT,
        related_name='payouts',
        verbose_name="Order"
    )
    platform_amount = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        verbose_name="Platform share"
    )
    carrier_amount = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        verbose_name="Carrier share"
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = "Payout"
        verbose_name_plural = "Payouts"
        ordering = ['-created_at']

    def __str__(self):
        return f"Payout {self.order.reference} | carrier {self.carrier_amount} / platform {self.platform_amount}"
