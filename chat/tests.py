"""
Luggage Share Chat Tests
=========================

Tests for:
1. compose_message (encrypted, plaintext fallback, blank text)
2. Cache-backed conversation
3. Chat API
"""

import base64
import datetime
from django.core.cache import cache
from django.test import TestCase, SimpleTestCase
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APIClient

from core.exceptions import ValidationError
from core.models import User
from chat.services import (
    ChatCipher, Conversation, compose_message, LOCK_PREFIX, MAX_MESSAGES, SEED_MESSAGES
)


class TestComposeMessage(SimpleTestCase):

    def setUp(self):
        self.key = ChatCipher.generate_key()

    def test_encrypted_message(self):
        message = compose_message('Package is safe', self.key)
        self.assertTrue(message['encrypted'])
        self.assertEqual(message['sender'], 'You')
        self.assertTrue(message['text'].startswith(LOCK_PREFIX))

        ciphertext = base64.b64decode(message['text'][len(LOCK_PREFIX):])
        # AES-GCM: plaintext length + 16-byte tag, nonce not included
        self.assertEqual(len(ciphertext), len('Package is safe'.encode()) + 16)

    def test_fresh_nonce_per_message(self):
        a = compose_message('same text', self.key)
        b = compose_message('same text', self.key)
        self.assertNotEqual(a['text'], b['text'])

    def test_no_key_keeps_plaintext(self):
        message = compose_message('hello', None)
        self.assertFalse(message['encrypted'])
        self.assertEqual(message['text'], 'hello')

    def test_bad_key_falls_back_to_plaintext(self):
        message = compose_message('hello', b'short')
        self.assertFalse(message['encrypted'])
        self.assertEqual(message['text'], 'hello')

    def test_blank_text_rejected(self):
        for text in ['', '   ', None]:
            with self.assertRaises(ValidationError):
                compose_message(text, self.key)

    def test_timestamp_is_hours_minutes(self):
        now = timezone.make_aware(datetime.datetime(2025, 8, 15, 10, 30))
        message = compose_message('hi', self.key, now=now)
        self.assertEqual(message['timestamp'], '10:30')

    def test_key_is_256_bits(self):
        self.assertEqual(len(self.key), 32)


class TestConversation(SimpleTestCase):

    def setUp(self):
        cache.clear()
        self.conversation = Conversation('user-1')

    def test_seeded_with_demo_messages(self):
        self.assertEqual(self.conversation.messages(), SEED_MESSAGES)

    def test_key_is_stable_within_conversation(self):
        self.assertEqual(self.conversation.key(), self.conversation.key())

    def test_conversations_have_separate_keys(self):
        self.assertNotEqual(self.conversation.key(), Conversation('user-2').key())

    def test_send_appends(self):
        self.conversation.send('Landing at 18:00')
        messages = self.conversation.messages()
        self.assertEqual(len(messages), 3)
        self.assertTrue(messages[-1]['encrypted'])

    def test_history_keeps_latest_messages(self):
        for n in range(MAX_MESSAGES + 5):
            self.conversation.send(f"update {n}")
        messages = self.conversation.messages()
        self.assertEqual(len(messages), MAX_MESSAGES)
        self.assertNotIn(SEED_MESSAGES[0], messages)

    def test_reset(self):
        self.conversation.send('hello')
        self.conversation.reset()
        self.assertEqual(len(self.conversation.messages()), 2)


class TestChatAPI(TestCase):

    def setUp(self):
        cache.clear()
        self.client = APIClient()
        self.client.force_authenticate(User.objects.create_user(email='member@example.com'))

    def test_history(self):
        response = self.client.get('/api/chat/messages/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data['messages']), 2)

    def test_send(self):
        response = self.client.post('/api/chat/messages/', {'text': 'On my way'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertTrue(response.data['encrypted'])
        self.assertNotIn('On my way', response.data['text'])
        self.assertEqual(len(self.client.get('/api/chat/messages/').data['messages']), 3)

    def test_blank_is_bad_request(self):
        response = self.client.post('/api/chat/messages/', {'text': ' '}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
