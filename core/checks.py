"""
Startup checks for core configuration.
"""

from django.conf import settings
from django.core.checks import Error, register, Tags

from core.exceptions import ConfigurationError
from core.identity import validate_owner_identity


@register(Tags.security)
def check_owner_identity(app_configs, **kwargs):
    """OWNER_EMAIL must be configured; without it nobody can see platform shares."""
    errors = []
    try:
        validate_owner_identity()
    except ConfigurationError:
        errors.append(
            Error(
                'OWNER_EMAIL is not configured.',
                hint='Set OWNER_EMAIL in the environment or .env file.',
                id='core.E001',
            )
        )
    return errors


@register()
def check_uploads_bucket(app_configs, **kwargs):
    errors = []
    if not getattr(settings, 'UPLOADS_BUCKET', ''):
        errors.append(
            Error(
                'UPLOADS_BUCKET is empty.',
                hint='KYC documents need a storage prefix.',
                id='core.E002',
            )
        )
    return errors
