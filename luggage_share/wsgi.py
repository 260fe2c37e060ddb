"""
WSGI config for Luggage Share project.
"""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'luggage_share.settings')

application = get_wsgi_application()
