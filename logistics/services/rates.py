"""
Region Rate Table for Luggage Share

Base per-kilogram rates (AED/kg) between the seven pricing regions,
taken from the regional pricing sheet. Lookups are directional.
"""

import logging
from decimal import Decimal

from django.db import models

from core.exceptions import ConfigurationError, ValidationError

logger = logging.getLogger(__name__)


class Region(models.TextChoices):
    """Pricing regions."""
    UAE = 'UAE', 'الإمارات العربية المتحدة'
    GCC = 'GCC', 'دول مجلس التعاون الخليجي'
    ME = 'ME', 'الشرق الأوسط'
    AF = 'AF', 'أفريقيا'
    ISC = 'ISC', 'شبه القارة الهندية'
    SEA = 'SEA', 'جنوب شرق آسيا'
    EU = 'EU', 'أوروبا/رابطة الدول المستقلة'


def _row(**rates):
    return {Region(code): Decimal(value) for code, value in rates.items()}


# Row = origin, column = destination. Saudi Arabia uses GCC rates.
# The sheet has no UAE->UAE rate; a missing rate prices at 0.
RATE_TABLE = {
    Region.UAE: _row(UAE=0, GCC=40, ME=60, AF=40, ISC=40, SEA=60, EU=60),
    Region.GCC: _row(UAE=40, GCC=60, ME=60, AF=60, ISC=60, SEA=80, EU=80),
    Region.ME: _row(UAE=60, GCC=60, ME=60, AF=60, ISC=60, SEA=60, EU=60),
    Region.AF: _row(UAE=40, GCC=60, ME=60, AF=60, ISC=60, SEA=60, EU=60),
    Region.ISC: _row(UAE=40, GCC=60, ME=60, AF=60, ISC=60, SEA=80, EU=80),
    Region.SEA: _row(UAE=60, GCC=80, ME=60, AF=60, ISC=80, SEA=80, EU=80),
    Region.EU: _row(UAE=60, GCC=80, ME=60, AF=60, ISC=80, SEA=80, EU=80),
}


def validate_rate_table(table=None) -> None:
    """
    Ensure every ordered region pair has a non-negative rate.

    Raises:
        ConfigurationError: listing every missing or negative pair
    """
    table = RATE_TABLE if table is None else table
    problems = []

    for origin in Region:
        row = table.get(origin, {})
        for destination in Region:
            rate = row.get(destination)
            if rate is None:
                problems.append(f"{origin.value}->{destination.value} missing")
            elif rate < 0:
                problems.append(f"{origin.value}->{destination.value} negative ({rate})")

    if problems:
        raise ConfigurationError(
            "Rate table incomplete: " + ", ".join(problems)
        )


def to_region(code) -> Region:
    """Coerce a region code (str or Region) into a Region."""
    try:
        return Region(code)
    except ValueError:
        raise ValidationError(f"Unknown region: {code!r}")


def base_rate(origin, destination) -> Decimal:
    """Literal table rate for origin -> destination (AED/kg)."""
    return RATE_TABLE[to_region(origin)][to_region(destination)]
