"""
Error taxonomy for Luggage Share.

- ConfigurationError: missing rate-table entry or owner identity (startup only)
- ValidationError: bad caller input (negative weight/total, malformed record)
- CollaboratorError: storage / database failure during a multi-step flow
"""

from django.core.exceptions import ImproperlyConfigured


class ConfigurationError(ImproperlyConfigured):
    """A required business configuration value is missing or invalid."""


class ValidationError(ValueError):
    """Caller supplied an invalid value."""


class CollaboratorError(RuntimeError):
    """
    An external collaborator (storage, database) failed.

    Raised once for a whole multi-step flow; the original exception is
    chained as ``__cause__``.
    """
