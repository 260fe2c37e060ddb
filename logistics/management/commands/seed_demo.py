"""
Django management command to seed the demo dashboard data
(orders, tracked shipments and support tickets).

Usage:
    python manage.py seed_demo
"""
import datetime
from decimal import Decimal
from django.core.management.base import BaseCommand

from finance.models import Order, OrderStatus
from logistics.models import Shipment, ShipmentStatus
from support.models import Ticket, TicketStatus


class Command(BaseCommand):
    help = 'Seed demo orders, shipments and support tickets'

    def handle(self, *args, **options):
        orders = [
            ('LS-1001', 'Amal H.', 'DXB', 'CAI', 2, OrderStatus.PAID, '220'),
            ('LS-1002', 'Yousef K.', 'JED', 'DXB', 1, OrderStatus.ESCROW, '120'),
            ('LS-1003', 'Lina A.', 'CAI', 'KWI', 3, OrderStatus.DELIVERED, '360'),
        ]

        shipments = [
            ('SHP-3001', 'Aramex', 'RM12345AE', ShipmentStatus.IN_TRANSIT, datetime.date(2025, 8, 15)),
            ('SHP-3002', 'DHL', 'DHL998822', ShipmentStatus.DELIVERED, datetime.date(2025, 8, 12)),
            ('SHP-3003', 'FedEx', 'FX112233', ShipmentStatus.LABEL_CREATED, datetime.date(2025, 8, 19)),
        ]

        tickets = [
            ('Damaged luggage claim', TicketStatus.OPEN),
            ('Change pickup time', TicketStatus.PENDING),
        ]

        created_count = 0

        for reference, customer, origin, destination, pieces, order_status, price in orders:
            _, created = Order.objects.get_or_create(
                reference=reference,
                defaults={
                    'customer': customer,
                    'from_iata': origin,
                    'to_iata': destination,
                    'pieces': pieces,
                    'status': order_status,
                    'price': Decimal(price),
                }
            )
            created_count += self._report(created, f'Order {reference}')

        for reference, carrier, tracking, shipment_status, eta in shipments:
            _, created = Shipment.objects.get_or_create(
                reference=reference,
                defaults={
                    'carrier': carrier,
                    'tracking': tracking,
                    'status': shipment_status,
                    'eta': eta,
                }
            )
            created_count += self._report(created, f'Shipment {reference}')

        for subject, ticket_status in tickets:
            ticket, created = Ticket.objects.get_or_create(
                subject=subject,
                defaults={'status': ticket_status}
            )
            created_count += self._report(created, f'Ticket {ticket.reference}')

        self.stdout.write(self.style.SUCCESS(f'\n{created_count} records created'))

    def _report(self, created, label):
        if created:
            self.stdout.write(self.style.SUCCESS(f'Created: {label}'))
            return 1
        self.stdout.write(f'Exists: {label}')
        return 0
