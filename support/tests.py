"""
Luggage Share Support Tests
============================

Tests for:
1. Opening tickets (reference, blank subject)
2. Status changes
3. Tickets API
"""

from django.contrib.auth.models import AnonymousUser
from django.test import TestCase
from rest_framework import status
from rest_framework.test import APIClient

from core.exceptions import ValidationError
from core.models import User
from support.models import Ticket, TicketStatus
from support.services import SupportService, open_ticket


class TestOpenTicket(TestCase):

    def setUp(self):
        self.user = User.objects.create_user(email='member@example.com')

    def test_ticket_is_open_with_reference(self):
        ticket = open_ticket(self.user, 'Damaged luggage claim', 'Handle broke in transit')
        self.assertEqual(ticket.status, TicketStatus.OPEN)
        self.assertEqual(ticket.reference, f"T-{100 + ticket.pk}")
        self.assertEqual(ticket.creator, self.user)

    def test_references_are_unique(self):
        first = open_ticket(self.user, 'Damaged luggage claim')
        second = open_ticket(self.user, 'Change pickup time')
        self.assertNotEqual(first.reference, second.reference)

    def test_blank_subject_rejected(self):
        for subject in ['', '   ', None]:
            with self.assertRaises(ValidationError):
                open_ticket(self.user, subject, 'details')
        self.assertFalse(Ticket.objects.exists())

    def test_anonymous_creator_stored_as_none(self):
        ticket = open_ticket(AnonymousUser(), 'Question')
        self.assertIsNone(ticket.creator)

    def test_set_status(self):
        staff = User.objects.create_user(email='ops@example.com', is_staff=True)
        ticket = open_ticket(self.user, 'Change pickup time')
        SupportService.set_status(ticket, TicketStatus.CLOSED, staff)
        ticket.refresh_from_db()
        self.assertEqual(ticket.status, TicketStatus.CLOSED)

    def test_unknown_status_rejected(self):
        staff = User.objects.create_user(email='ops@example.com', is_staff=True)
        ticket = open_ticket(self.user, 'Change pickup time')
        with self.assertRaises(ValidationError):
            SupportService.set_status(ticket, 'ARCHIVED', staff)


class TestTicketsAPI(TestCase):

    def setUp(self):
        self.client = APIClient()
        self.user = User.objects.create_user(email='member@example.com')
        self.other = User.objects.create_user(email='other@example.com')
        self.staff = User.objects.create_user(email='ops@example.com', is_staff=True)

    def test_create_and_list_own(self):
        self.client.force_authenticate(self.user)
        response = self.client.post('/api/tickets/', {
            'subject': 'Damaged luggage claim', 'message': 'Handle broke'
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['status'], 'OPEN')
        self.assertTrue(response.data['reference'].startswith('T-'))

        self.assertEqual(len(self.client.get('/api/tickets/').data), 1)
        self.client.force_authenticate(self.other)
        self.assertEqual(len(self.client.get('/api/tickets/').data), 0)

    def test_blank_subject_is_bad_request(self):
        self.client.force_authenticate(self.user)
        response = self.client.post('/api/tickets/', {'subject': '  ', 'message': 'x'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_set_status_staff_only(self):
        ticket = open_ticket(self.user, 'Change pickup time')
        url = f'/api/tickets/{ticket.reference}/set_status/'

        self.client.force_authenticate(self.user)
        response = self.client.post(url, {'status': 'CLOSED'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

        self.client.force_authenticate(self.staff)
        response = self.client.post(url, {'status': 'PENDING'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['status'], 'PENDING')
