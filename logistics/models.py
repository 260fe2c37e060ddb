"""
LOGISTICS App - Capacity Listings & Shipment Requests for Luggage Share

Handles: Listings (providers), Requests (shippers), Shipments
"""

import math
import uuid
from decimal import Decimal
from django.db import models
from django.conf import settings


class PackageContents(models.TextChoices):
    """Allowed contents (banned/restricted items are excluded)."""
    DOCUMENTS = 'DOCUMENTS', 'Documents'
    BOOKS = 'BOOKS', 'Books & Printed Material'
    CLOTHING = 'CLOTHING', 'Clothing'
    SHOES_ACCESSORIES = 'SHOES_ACCESSORIES', 'Shoes & Accessories'
    PACKAGED_FOOD = 'PACKAGED_FOOD', 'Non-perishable packaged food'
    TOYS = 'TOYS', 'Toys (no batteries)'
    HOME_TEXTILES = 'HOME_TEXTILES', 'Home textiles'
    ELECTRONICS_ACCESSORIES = 'ELECTRONICS_ACCESSORIES', 'Small electronics accessories (no batteries)'
    GIFTS = 'GIFTS', 'Gifts / Souvenirs (non-hazardous)'
    OTHER = 'OTHER', 'Other (declare contents)'


class ListingQuerySet(models.QuerySet):

    def matching(self, origin_code: str, destination_code: str, min_capacity_kg):
        """Exact route, enough capacity, earliest date first (then creation order)."""
        return self.filter(
            from_iata=origin_code.strip().upper(),
            to_iata=destination_code.strip().upper(),
            # Whole-kg capacities: a fractional minimum rounds up
            capacity_kg__gte=math.ceil(min_capacity_kg),
        ).order_by('date', 'created_at')


class Listing(models.Model):
    """
    Provider's published luggage capacity on a route/date.

    price_per_kg is a snapshot taken at publish time; later rate-table
    changes never rewrite it.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name='listings',
        verbose_name="Provider"
    )

    # Route
    from_iata = models.CharField(max_length=3, verbose_name="From (IATA)")
    to_iata = models.CharField(max_length=3, verbose_name="To (IATA)")
    date = models.DateField(verbose_name="Travel date")

    # Capacity & price (frozen at creation)
    capacity_kg = models.PositiveIntegerField(verbose_name="Capacity (kg)")
    price_per_kg = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal('0.00'),
        verbose_name="Price per kg"
    )

    # KYC documents
    ticket_url = models.CharField(max_length=500, verbose_name="Flight ticket")
    id_url = models.CharField(max_length=500, verbose_name="ID document")
    passport_url = models.CharField(max_length=500, verbose_name="Passport")
    photo_url = models.CharField(max_length=500, verbose_name="Photo (selfie)")

    created_at = models.DateTimeField(auto_now_add=True)

    objects = ListingQuerySet.as_manager()

    class Meta:
        verbose_name = "Listing"
        verbose_name_plural = "Listings"
        ordering = ['date', 'created_at']
        indexes = [
            models.Index(fields=['from_iata', 'to_iata', 'date'], name='listing_route_date_idx'),
        ]

    def __str__(self):
        return f"{self.from_iata} → {self.to_iata} on {self.date} ({self.capacity_kg} kg)"


class ShipmentRequest(models.Model):
    """
    Shipper's need for luggage capacity on a route/date.

    price_per_kg is the quote at submission time.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name='shipment_requests',
        verbose_name="Shipper"
    )

    # Route
    from_iata = models.CharField(max_length=3, verbose_name="From (IATA)")
    to_iata = models.CharField(max_length=3, verbose_name="To (IATA)")
    date = models.DateField(verbose_name="Travel date")

    # Package
    kg = models.PositiveIntegerField(verbose_name="Weight needed (kg)")
    content_type = models.CharField(
        max_length=30,
        choices=PackageContents.choices,
        default=PackageContents.DOCUMENTS,
        verbose_name="Contents type"
    )

    # KYC documents
    id_url = models.CharField(max_length=500, verbose_name="ID document")
    passport_url = models.CharField(max_length=500, verbose_name="Passport")
    photo_url = models.CharField(max_length=500, verbose_name="Photo (selfie)")

    price_per_kg = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal('0.00'),
        verbose_name="Quoted price per kg"
    )

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = "Shipment request"
        verbose_name_plural = "Shipment requests"
        ordering = ['-created_at']

    def __str__(self):
        return f"Request {self.from_iata} → {self.to_iata} ({self.kg} kg)"


class ShipmentStatus(models.TextChoices):
    LABEL_CREATED = 'LABEL_CREATED', 'Label Created'
    IN_TRANSIT = 'IN_TRANSIT', 'In Transit'
    DELIVERED = 'DELIVERED', 'Delivered'


class Shipment(models.Model):
    """Tracked shipment (carrier, tracking number, ETA)."""

    reference = models.CharField(max_length=20, unique=True, verbose_name="Shipment ID")
    carrier = models.CharField(max_length=100, verbose_name="Carrier")
    tracking = models.CharField(max_length=100, verbose_name="Tracking number")
    status = models.CharField(
        max_length=20,
        choices=ShipmentStatus.choices,
        default=ShipmentStatus.LABEL_CREATED,
        verbose_name="Status"
    )
    eta = models.DateField(null=True, blank=True, verbose_name="ETA")

    class Meta:
        verbose_name = "Shipment"
        verbose_name_plural = "Shipments"
        ordering = ['eta']

    def __str__(self):
        return f"{self.reference} ({self.carrier})"
