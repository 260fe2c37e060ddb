"""
Listing / Request matching.

A shipper searching a route sees every published listing on exactly that
route with enough capacity, earliest date first.
"""

import datetime
from typing import Iterable, List


def _date_key(listing):
    # Listings without a date sort after dated ones
    value = listing.date
    if value is None:
        return (1, datetime.date.max)
    if isinstance(value, str):
        value = datetime.date.fromisoformat(value)
    return (0, value)


def find_providers(listings: Iterable, origin_code: str, destination_code: str,
                   min_capacity_kg) -> List:
    """
    Filter listings by exact route and minimum capacity.

    Ordering is ascending by date; ties keep their original (creation)
    order. No match is an empty list, not an error.
    """
    matches = [
        listing for listing in listings
        if listing.from_iata == origin_code
        and listing.to_iata == destination_code
        and listing.capacity_kg >= min_capacity_kg
    ]
    return sorted(matches, key=_date_key)
