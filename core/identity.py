"""
Owner identity check.

The owner flag only decides whether platform-share figures are disclosed.
It never gates a write operation.
"""

from typing import Optional

from django.conf import settings

from core.exceptions import ConfigurationError


def is_owner(email: Optional[str], owner_email: Optional[str]) -> bool:
    """Case-insensitive comparison of the caller email with the owner email."""
    if not email or not owner_email:
        return False
    return email.strip().lower() == owner_email.strip().lower()


def viewer_is_owner(user) -> bool:
    """Owner flag for an authenticated request user (False for anonymous)."""
    if user is None or not getattr(user, 'is_authenticated', False):
        return False
    return is_owner(user.email, settings.OWNER_EMAIL)


def validate_owner_identity(owner_email: Optional[str] = None) -> None:
    """
    Ensure the owner email is configured.

    Raises:
        ConfigurationError: if OWNER_EMAIL is empty or not an email address
    """
    if owner_email is None:
        owner_email = getattr(settings, 'OWNER_EMAIL', '')
    owner_email = (owner_email or '').strip()
    if not owner_email or '@' not in owner_email:
        raise ConfigurationError(
            f"OWNER_EMAIL is not configured (got {owner_email!r}). "
            "Set OWNER_EMAIL in the environment or .env file."
        )
