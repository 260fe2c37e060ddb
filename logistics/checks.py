"""
Startup checks for the pricing configuration.
"""

from decimal import Decimal
from django.core.checks import Error, register

from core.exceptions import ConfigurationError


@register()
def check_rate_table(app_configs, **kwargs):
    from .services.rates import validate_rate_table

    try:
        validate_rate_table()
    except ConfigurationError as e:
        return [Error(str(e), id='logistics.E001')]
    return []


@register()
def check_price_rule(app_configs, **kwargs):
    """UAE -> ME must display 48 per kg (60 x 0.8)."""
    from .services.rates import Region
    from .services.pricing import price_per_kg

    computed = price_per_kg(Region.UAE, Region.ME)
    if computed != Decimal('48'):
        return [
            Error(
                f'UAE -> ME price per kg is {computed}, expected 48.',
                hint='Check PRICE_FACTOR and the UAE row of RATE_TABLE.',
                id='logistics.E002',
            )
        ]
    return []
