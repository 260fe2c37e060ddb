"""
Tests for the seed_demo management command.
"""

from io import StringIO
from decimal import Decimal
from django.core.management import call_command
from django.test import TestCase

from finance.models import Order, OrderStatus
from logistics.models import Shipment, ShipmentStatus
from support.models import Ticket, TicketStatus


class TestSeedDemo(TestCase):

    def test_seeds_dashboard_records(self):
        out = StringIO()
        call_command('seed_demo', stdout=out)

        self.assertEqual(Order.objects.count(), 3)
        escrow = Order.objects.get(reference='LS-1002')
        self.assertEqual(escrow.status, OrderStatus.ESCROW)
        self.assertEqual(escrow.price, Decimal('120'))

        self.assertEqual(
            Shipment.objects.get(reference='SHP-3001').status, ShipmentStatus.IN_TRANSIT
        )
        self.assertEqual(
            Ticket.objects.get(subject='Change pickup time').status, TicketStatus.PENDING
        )
        self.assertIn('8 records created', out.getvalue())

    def test_second_run_creates_nothing(self):
        call_command('seed_demo', stdout=StringIO())
        out = StringIO()
        call_command('seed_demo', stdout=out)

        self.assertIn('0 records created', out.getvalue())
        self.assertEqual(Order.objects.count(), 3)
        self.assertEqual(Shipment.objects.count(), 3)
        self.assertEqual(Ticket.objects.count(), 2)
