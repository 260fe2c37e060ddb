import logging
from django.db import transaction

from core.exceptions import ValidationError
from .models import Ticket, TicketStatus

logger = logging.getLogger(__name__)


class SupportService:
    """
    Service for handling support tickets.
    """

    @staticmethod
    @transaction.atomic
    def open_ticket(creator, subject, message=''):
        """
        Open a new ticket. A blank subject is rejected.
        """
        subject = (subject or '').strip()
        if not subject:
            raise ValidationError("Ticket subject is required.")

        ticket = Ticket.objects.create(
            creator=creator if getattr(creator, 'is_authenticated', False) else None,
            subject=subject,
            message=(message or '').strip(),
        )
        logger.info(f"Ticket opened: {ticket.reference} - {ticket.subject}")
        return ticket

    @staticmethod
    @transaction.atomic
    def set_status(ticket, status, staff_user):
        """
        Move a ticket to PENDING or CLOSED (staff only).
        """
        if status not in TicketStatus.values:
            raise ValidationError(f"Unknown ticket status: {status!r}")

        ticket.status = status
        ticket.save(update_fields=['status', 'updated_at'])
        logger.info(f"Ticket {ticket.reference} set to {status} by {staff_user.pk}")
        return ticket


def open_ticket(creator, subject, message=''):
    return SupportService.open_ticket(creator, subject, message)
