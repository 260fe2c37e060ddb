from rest_framework import serializers

from .models import Ticket, TicketStatus


class TicketSerializer(serializers.ModelSerializer):
    status_display = serializers.CharField(source='get_status_display', read_only=True)

    class Meta:
        model = Ticket
        fields = ['reference', 'subject', 'message', 'status', 'status_display', 'created_at']
        read_only_fields = ['reference', 'status', 'created_at']


class TicketStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=TicketStatus.choices)
