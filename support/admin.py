from django.contrib import admin

from .models import Ticket, TicketStatus


@admin.register(Ticket)
class TicketAdmin(admin.ModelAdmin):
    list_display = ('reference', 'subject', 'creator', 'status', 'created_at')
    list_filter = ('status', 'created_at')
    search_fields = ('reference', 'subject', 'message', 'creator__email')
    readonly_fields = ('reference', 'creator', 'created_at', 'updated_at')
    ordering = ('-created_at',)

    actions = ['mark_closed']

    @admin.action(description="Close selected tickets")
    def mark_closed(self, request, queryset):
        updated = queryset.update(status=TicketStatus.CLOSED)
        self.message_user(request, f"{updated} ticket(s) closed.")
