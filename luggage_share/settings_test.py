"""
Luggage Share test settings.

Same as the main settings, with the required business-rule values pinned
so the suite does not depend on the developer's environment.
"""

from .settings import *  # noqa: F401,F403

OWNER_EMAIL = 'owner@luggageshare.app'
UPLOADS_BUCKET = 'uploads'
DEFAULT_CURRENCY = 'AED'
AIRPORTS_FILE = ''

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']
