from django.db import models
from django.conf import settings


class TicketStatus(models.TextChoices):
    OPEN = 'OPEN', 'Open'
    PENDING = 'PENDING', 'Pending'
    CLOSED = 'CLOSED', 'Closed'


class Ticket(models.Model):
    """
    Support ticket raised from the dashboard.
    """
    reference = models.CharField(
        max_length=20,
        unique=True,
        blank=True,
        verbose_name="Ticket ID"
    )
    creator = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='tickets',
        verbose_name="Created by"
    )

    subject = models.CharField(max_length=200, verbose_name="Subject")
    message = models.TextField(blank=True, verbose_name="Message")
    status = models.CharField(
        max_length=20,
        choices=TicketStatus.choices,
        default=TicketStatus.OPEN,
        verbose_name="Status"
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Ticket"
        verbose_name_plural = "Tickets"
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.reference} - {self.subject}"

    def save(self, *args, **kwargs):
        # Human-readable reference derived from the row id (T-101, T-102, ...)
        super().save(*args, **kwargs)
        if not self.reference:
            self.reference = f"T-{100 + self.pk}"
            super().save(update_fields=['reference'])
