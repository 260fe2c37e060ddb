"""
Django Admin configuration for FINANCE app.
"""

from django.contrib import admin, messages

from core.exceptions import ValidationError
from .models import Order, Payout
from .services import release_order


class PayoutInline(admin.TabularInline):
    model = Payout
    extra = 0
    can_delete = False
    readonly_fields = ('platform_amount', 'carrier_amount', 'created_at')


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    """Admin for Orders with escrow release."""

    list_display = ('reference', 'customer', 'route', 'pieces', 'status', 'price')
    list_filter = ('status',)
    search_fields = ('reference', 'customer')
    ordering = ('reference',)
    inlines = [PayoutInline]

    def route(self, obj):
        return f"{obj.from_iata} → {obj.to_iata}"
    route.short_description = "Route"

    actions = ['release_selected']

    @admin.action(description="Release escrow")
    def release_selected(self, request, queryset):
        released = 0
        for order in queryset:
            try:
                release_order(order, request.user)
                released += 1
            except ValidationError as e:
                self.message_user(request, str(e), level=messages.WARNING)
        if released:
            self.message_user(request, f"{released} order(s) released.")


@admin.register(Payout)
class PayoutAdmin(admin.ModelAdmin):
    """Admin for escrow release records (audit trail)."""

    list_display = ('short_id', 'order', 'carrier_amount', 'platform_amount', 'created_at')
    ordering = ('-created_at',)
    date_hierarchy = 'created_at'
    readonly_fields = ('id', 'order', 'platform_amount', 'carrier_amount', 'created_at')

    def short_id(self, obj):
        return str(obj.id)[:8]
    short_id.short_description = "ID"

    def has_add_permission(self, request):
        """Payouts are created by escrow release only."""
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False

    actions = ['export_payouts_csv']

    @admin.action(description="Export CSV")
    def export_payouts_csv(self, request, queryset):
        import csv
        from django.http import HttpResponse

        response = HttpResponse(content_type='text/csv')
        response['Content-Disposition'] = 'attachment; filename="payouts.csv"'

        writer = csv.writer(response)
        writer.writerow(['ID', 'Order', 'Carrier', 'Platform', 'Date'])

        for p in queryset.select_related('order'):
            writer.writerow([
                str(p.id)[:8],
                p.order.reference,
                p.carrier_amount,
                p.platform_amount,
                p.created_at.strftime('%d/%m/%Y %H:%M'),
            ])
        return response
