"""
ASGI config for Luggage Share project.
"""

import os

from django.core.asgi import get_asgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'luggage_share.settings')

application = get_asgi_application()
