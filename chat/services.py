"""
CHAT App - Encrypt-before-send demo

Each conversation gets a random AES-GCM 256-bit key, kept in the cache only.
Outgoing text is encrypted with a fresh 96-bit nonce and shown as
"🔒 <base64 ciphertext>". The nonce is not kept, so the ciphertext is for
display and cannot be decrypted later.
"""

import os
import time
import base64
import logging
from typing import Optional

from cryptography.hazmat.primitives.ciphers.aead import AESGCM
from django.conf import settings
from django.core.cache import cache
from django.utils import timezone

from core.exceptions import ValidationError

logger = logging.getLogger(__name__)

KEY_BITS = 256
NONCE_BYTES = 12
LOCK_PREFIX = '🔒 '

# Only the most recent messages are kept per conversation
MAX_MESSAGES = 50

SEED_MESSAGES = [
    {'id': 1, 'sender': 'Alice', 'text': "Hello! How's your trip going?",
     'timestamp': '10:30', 'encrypted': True},
    {'id': 2, 'sender': 'You', 'text': 'Great! Just landed in Dubai. Package is safe.',
     'timestamp': '10:32', 'encrypted': True},
]


class ChatCipher:
    """AES-GCM encryptor for one conversation key."""

    def __init__(self, key: bytes):
        self._aead = AESGCM(key)

    @staticmethod
    def generate_key() -> bytes:
        return AESGCM.generate_key(bit_length=KEY_BITS)

    def encrypt(self, text: str) -> str:
        nonce = os.urandom(NONCE_BYTES)
        ciphertext = self._aead.encrypt(nonce, text.encode('utf-8'), None)
        return base64.b64encode(ciphertext).decode('ascii')


def compose_message(text: str, key: Optional[bytes], now=None) -> dict:
    """
    Build an outgoing message.

    With a key the text is replaced by its ciphertext; without one (or with
    an unusable key) the plaintext is kept and ``encrypted`` is False.

    Raises:
        ValidationError: blank text
    """
    if not isinstance(text, str) or not text.strip():
        raise ValidationError("Message text is required.")

    body, encrypted = text, False
    if key is not None:
        try:
            body = LOCK_PREFIX + ChatCipher(key).encrypt(text)
            encrypted = True
        except ValueError as e:
            logger.warning(f"[CHAT] Encryption failed, sending plaintext: {e}")

    now = timezone.localtime(now or timezone.now())
    return {
        'id': int(time.time() * 1000),
        'sender': 'You',
        'text': body,
        'timestamp': now.strftime('%H:%M'),
        'encrypted': encrypted,
    }


class Conversation:
    """
    Cache-backed conversation for one user: key + message list.

    Nothing is written to the database.
    """

    def __init__(self, owner_id):
        self.owner_id = owner_id

    @property
    def _key_name(self):
        return f"chat:{self.owner_id}:key"

    @property
    def _messages_name(self):
        return f"chat:{self.owner_id}:messages"

    @property
    def timeout(self):
        return settings.SESSION_COOKIE_AGE

    def key(self) -> bytes:
        key = cache.get(self._key_name)
        if key is None:
            key = ChatCipher.generate_key()
            cache.set(self._key_name, key, self.timeout)
        return key

    def messages(self) -> list:
        messages = cache.get(self._messages_name)
        if messages is None:
            messages = [dict(m) for m in SEED_MESSAGES]
        return messages

    def send(self, text: str) -> dict:
        message = compose_message(text, self.key())
        messages = (self.messages() + [message])[-MAX_MESSAGES:]
        cache.set(self._messages_name, messages, self.timeout)
        return message

    def reset(self) -> None:
        cache.delete_many([self._key_name, self._messages_name])
