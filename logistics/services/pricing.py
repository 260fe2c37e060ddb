"""
Pricing Engine for Luggage Share

Calculates shipment prices from the regional rate table.

Formula: PricePerKg = BaseRate(origin, destination) * 0.8
         Subtotal   = PricePerKg * WeightKg
"""

import math
import logging
from dataclasses import dataclass
from decimal import Decimal, DecimalException
from typing import Optional
from django.conf import settings

from core.exceptions import ValidationError
from .rates import Region, base_rate, to_region
from .airports import AirportSet

logger = logging.getLogger(__name__)

# Displayed user price is 80% of the table value
PRICE_FACTOR = Decimal('0.8')

# Upper bound for a single shipment or listing
MAX_WEIGHT_KG = Decimal('10000')

# ISO-4217 codes offered by the dashboard
CURRENCIES = (
    "AED", "AFN", "ALL", "AMD", "ANG", "AOA", "ARS", "AUD", "AWG", "AZN",
    "BAM", "BBD", "BDT", "BGN", "BHD", "BIF", "BMD", "BND", "BOB", "BRL",
    "BSD", "BTN", "BWP", "BYN", "BZD", "CAD", "CDF", "CHF", "CLP", "CNY",
    "COP", "CRC", "CUP", "CVE", "CZK", "DJF", "DKK", "DOP", "DZD", "EGP",
    "ERN", "ETB", "EUR", "FJD", "FKP", "GBP", "GEL", "GHS", "GIP", "GMD",
    "GNF", "GTQ", "GYD", "HKD", "HNL", "HRK", "HTG", "HUF", "IDR", "ILS",
    "INR", "IQD", "IRR", "ISK", "JMD", "JOD", "JPY", "KES", "KGS", "KHR",
    "KMF", "KRW", "KWD", "KYD", "KZT", "LAK", "LBP", "LKR", "LRD", "LSL",
    "LYD", "MAD", "MDL", "MGA", "MKD", "MMK", "MNT", "MOP", "MRU", "MUR",
    "MVR", "MWK", "MXN", "MYR", "MZN", "NAD", "NGN", "NIO", "NOK", "NPR",
    "NZD", "OMR", "PAB", "PEN", "PGK", "PHP", "PKR", "PLN", "PYG", "QAR",
    "RON", "RSD", "RUB", "RWF", "SAR", "SBD", "SCR", "SDG", "SEK", "SGD",
    "SHP", "SLL", "SOS", "SRD", "SSP", "STN", "SYP", "SZL", "THB", "TJS",
    "TMT", "TND", "TOP", "TRY", "TTD", "TWD", "TZS", "UAH", "UGX", "USD",
    "UYU", "UZS", "VES", "VND", "VUV", "WST", "XAF", "XCD", "XOF", "XPF",
    "YER", "ZAR", "ZMW", "ZWL",
)

# Simplified airport -> pricing region map
AIRPORT_REGIONS = {
    'DXB': Region.UAE, 'AUH': Region.UAE,
    'DOH': Region.GCC, 'JED': Region.GCC, 'RUH': Region.GCC,
    'KWI': Region.GCC, 'BAH': Region.GCC,
    'CAI': Region.ME,
    'ADD': Region.AF,
    'IST': Region.EU, 'LHR': Region.EU, 'CDG': Region.EU,
    'FRA': Region.EU, 'JFK': Region.EU, 'LAX': Region.EU,
}

DEFAULT_ORIGIN_REGION = Region.UAE
DEFAULT_DESTINATION_REGION = Region.ME


@dataclass(frozen=True)
class ShipmentQuote:
    origin_region: Region
    destination_region: Region
    weight_kg: Decimal
    currency: str
    base_rate: Decimal
    price_per_kg: Decimal
    subtotal: Decimal
    distance_km: Optional[int] = None


def to_weight(value) -> Decimal:
    """
    Validate a weight in kilograms.

    Raises:
        ValidationError: if negative, NaN, infinite, above MAX_WEIGHT_KG
            or not a number
    """
    if isinstance(value, bool):
        raise ValidationError(f"Invalid weight: {value!r}")
    if isinstance(value, float) and not math.isfinite(value):
        raise ValidationError(f"Weight must be finite, got {value!r}")
    try:
        weight = value if isinstance(value, Decimal) else Decimal(str(value))
    except (DecimalException, ValueError, TypeError):
        raise ValidationError(f"Invalid weight: {value!r}")
    if not weight.is_finite():
        raise ValidationError(f"Weight must be finite, got {value!r}")
    if weight < 0:
        raise ValidationError(f"Weight cannot be negative, got {value!r}")
    if weight > MAX_WEIGHT_KG:
        raise ValidationError(f"Weight cannot exceed {MAX_WEIGHT_KG} kg, got {value!r}")
    return weight


def to_currency(code: Optional[str] = None) -> str:
    """Supported ISO-4217 code, DEFAULT_CURRENCY when none is given."""
    code = code or settings.DEFAULT_CURRENCY
    if code not in CURRENCIES:
        raise ValidationError(f"Unsupported currency: {code!r}")
    return code


def price_per_kg(origin, destination) -> Decimal:
    """Displayed per-kg price: table rate with the 80% factor applied once."""
    return base_rate(origin, destination) * PRICE_FACTOR


def quote(origin, destination, weight_kg, currency: Optional[str] = None,
          distance_km: Optional[int] = None) -> ShipmentQuote:
    """
    Quote a shipment between two pricing regions.

    Args:
        origin: origin Region (or code)
        destination: destination Region (or code)
        weight_kg: non-negative finite weight
        currency: ISO-4217 code for display (DEFAULT_CURRENCY when omitted)
        distance_km: optional great-circle distance to carry along

    Returns:
        ShipmentQuote
    """
    origin = to_region(origin)
    destination = to_region(destination)
    weight = to_weight(weight_kg)
    currency = to_currency(currency)

    rate = base_rate(origin, destination)
    per_kg = rate * PRICE_FACTOR
    subtotal = per_kg * weight

    logger.debug(
        f"[PRICING] {origin.value}->{destination.value} | "
        f"{weight} kg x {per_kg} = {subtotal} {currency}"
    )

    return ShipmentQuote(
        origin_region=origin,
        destination_region=destination,
        weight_kg=weight,
        currency=currency,
        base_rate=rate,
        price_per_kg=per_kg,
        subtotal=subtotal,
        distance_km=distance_km,
    )


# ============================================
# AIRPORT PATH
# ============================================

def airport_region(iata: str, default: Region = DEFAULT_ORIGIN_REGION) -> Region:
    """Pricing region for an IATA code, ``default`` when the code is not mapped."""
    region = AIRPORT_REGIONS.get((iata or '').upper())
    if region is None:
        logger.warning(f"[PRICING] No region for airport {iata!r}, using {default.value}")
        return default
    return region


def route_regions(from_iata: str, to_iata: str) -> tuple:
    return (
        airport_region(from_iata, DEFAULT_ORIGIN_REGION),
        airport_region(to_iata, DEFAULT_DESTINATION_REGION),
    )


def price_per_kg_for_route(from_iata: str, to_iata: str) -> Decimal:
    """Per-kg price for an airport pair, through the region table."""
    origin, destination = route_regions(from_iata, to_iata)
    return price_per_kg(origin, destination)


def quote_for_route(from_iata: str, to_iata: str, weight_kg, currency: Optional[str] = None,
                    airports: Optional[AirportSet] = None) -> ShipmentQuote:
    """
    Quote an airport pair. Distance is rounded to whole km and is 0 when
    either airport is missing from the active set.
    """
    if airports is None:
        from .airports import airport_registry
        airports = airport_registry.active

    distance = airports.distance_km(from_iata, to_iata)
    distance_km = round(distance) if distance is not None else 0

    origin, destination = route_regions(from_iata, to_iata)
    return quote(origin, destination, weight_kg, currency, distance_km=distance_km)
