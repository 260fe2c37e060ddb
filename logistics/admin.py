"""
Django Admin configuration for LOGISTICS app.
"""

from django.contrib import admin
from django.utils.html import format_html

from .models import Listing, ShipmentRequest, Shipment


class KycDocumentsMixin:
    """Links to the uploaded KYC documents."""

    def _link(self, url, label):
        if not url:
            return "-"
        return format_html('<a href="{}" target="_blank" rel="noreferrer">{}</a>', url, label)

    def id_link(self, obj):
        return self._link(obj.id_url, "ID")
    id_link.short_description = "ID"

    def passport_link(self, obj):
        return self._link(obj.passport_url, "Passport")
    passport_link.short_description = "Passport"

    def photo_link(self, obj):
        return self._link(obj.photo_url, "Photo")
    photo_link.short_description = "Photo"


@admin.register(Listing)
class ListingAdmin(KycDocumentsMixin, admin.ModelAdmin):
    """Admin for provider listings with KYC review links."""

    list_display = (
        'short_id', 'provider', 'route', 'date', 'capacity_kg',
        'price_per_kg', 'ticket_link', 'created_at'
    )
    list_filter = ('from_iata', 'to_iata', 'date')
    search_fields = ('user__email', 'user__full_name', 'from_iata', 'to_iata')
    ordering = ('date', 'created_at')
    date_hierarchy = 'date'
    readonly_fields = (
        'id', 'price_per_kg', 'ticket_link', 'id_link', 'passport_link',
        'photo_link', 'created_at'
    )

    fieldsets = (
        ('Route', {
            'fields': ('id', 'user', 'from_iata', 'to_iata', 'date')
        }),
        ('Capacity', {
            'fields': ('capacity_kg', 'price_per_kg')
        }),
        ('KYC', {
            'fields': ('ticket_link', 'id_link', 'passport_link', 'photo_link')
        }),
        ('History', {
            'fields': ('created_at',)
        }),
    )

    def short_id(self, obj):
        return str(obj.id)[:8]
    short_id.short_description = "ID"

    def provider(self, obj):
        return obj.user.email
    provider.short_description = "Provider"

    def route(self, obj):
        return f"{obj.from_iata} → {obj.to_iata}"
    route.short_description = "Route"

    def ticket_link(self, obj):
        return self._link(obj.ticket_url, "Ticket")
    ticket_link.short_description = "Ticket"


@admin.register(ShipmentRequest)
class ShipmentRequestAdmin(KycDocumentsMixin, admin.ModelAdmin):
    """Admin for shipper requests."""

    list_display = (
        'short_id', 'shipper', 'from_iata', 'to_iata', 'date', 'kg',
        'content_type', 'price_per_kg', 'created_at'
    )
    list_filter = ('content_type', 'from_iata', 'to_iata')
    search_fields = ('user__email', 'from_iata', 'to_iata')
    ordering = ('-created_at',)
    readonly_fields = ('id', 'price_per_kg', 'id_link', 'passport_link', 'photo_link', 'created_at')

    def short_id(self, obj):
        return str(obj.id)[:8]
    short_id.short_description = "ID"

    def shipper(self, obj):
        return obj.user.email
    shipper.short_description = "Shipper"


@admin.register(Shipment)
class ShipmentAdmin(admin.ModelAdmin):
    list_display = ('reference', 'carrier', 'tracking', 'status', 'eta')
    list_filter = ('status', 'carrier')
    search_fields = ('reference', 'tracking')
    ordering = ('eta',)
