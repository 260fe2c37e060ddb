"""
Airports & Distance for Luggage Share

- Great-circle (haversine) distance between airports
- Replaceable in-memory airport dataset (JSON list or CSV table)
"""

import csv
import io
import json
import math
import logging
import threading
from pathlib import Path
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional

logger = logging.getLogger(__name__)

# Earth radius in km
EARTH_RADIUS_KM = 6371.0


@dataclass(frozen=True)
class Airport:
    """An airport keyed by IATA code (decimal-degree coordinates)."""
    iata: str
    name: str
    lat: float
    lon: float


def haversine_km(a: Airport, b: Airport) -> float:
    """
    Great-circle distance in kilometers between two airports.

    Symmetric, and zero for identical coordinates.
    """
    lat1, lon1 = math.radians(a.lat), math.radians(a.lon)
    lat2, lon2 = math.radians(b.lat), math.radians(b.lon)

    dlat = lat2 - lat1
    dlon = lon2 - lon1

    h = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
    c = 2 * math.asin(math.sqrt(h))

    return EARTH_RADIUS_KM * c


class AirportSet:
    """
    Immutable, insertion-ordered collection of airports keyed by IATA code.

    A later record with the same code replaces the earlier one.
    """

    def __init__(self, airports: Iterable[Airport] = ()):
        self._by_code = {}
        for airport in airports:
            self._by_code[airport.iata] = airport

    def __len__(self):
        return len(self._by_code)

    def __iter__(self) -> Iterator[Airport]:
        return iter(list(self._by_code.values()))

    def __contains__(self, code):
        if not isinstance(code, str):
            return False
        return code.strip().upper() in self._by_code

    def get(self, code: str) -> Optional[Airport]:
        return self._by_code.get((code or '').strip().upper())

    def codes(self) -> list:
        return list(self._by_code)

    def distance_km(self, from_code: str, to_code: str) -> Optional[float]:
        """Distance between two codes, or None when either is unknown."""
        a = self.get(from_code)
        b = self.get(to_code)
        if a is None or b is None:
            return None
        return haversine_km(a, b)


# Bundled mini dataset (IATA, name, lat, lon)
MINI_AIRPORTS = AirportSet([
    Airport('DXB', 'Dubai Intl', 25.2532, 55.3657),
    Airport('AUH', 'Abu Dhabi Intl', 24.4329, 54.6511),
    Airport('DOH', 'Hamad Intl (Doha)', 25.2731, 51.6081),
    Airport('JED', 'Jeddah', 21.6796, 39.1565),
    Airport('RUH', 'Riyadh', 24.9576, 46.6988),
    Airport('KWI', 'Kuwait', 29.2266, 47.9689),
    Airport('BAH', 'Bahrain', 26.2708, 50.6336),
    Airport('CAI', 'Cairo Intl', 30.1219, 31.4056),
    Airport('IST', 'Istanbul', 41.2753, 28.7519),
    Airport('ADD', 'Addis Ababa', 8.9779, 38.7993),
    Airport('LHR', 'London Heathrow', 51.47, -0.4543),
    Airport('CDG', 'Paris CDG', 49.0097, 2.5479),
    Airport('FRA', 'Frankfurt', 50.0379, 8.5622),
    Airport('JFK', 'New York JFK', 40.6413, -73.7781),
    Airport('LAX', 'Los Angeles', 33.9416, -118.4085),
])


# ============================================
# IMPORT
# ============================================

def _coordinate(value, low: float, high: float) -> Optional[float]:
    if isinstance(value, bool) or value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number) or not low <= number <= high:
        return None
    return number


def airport_from_record(record) -> Optional[Airport]:
    """
    Build an Airport from a raw record, or None if the record is malformed.

    Accepts ``iata`` or ``code`` for the key. Coordinates must be finite
    numbers within latitude -90..90 and longitude -180..180.
    """
    if not isinstance(record, dict):
        return None

    code = record.get('iata') or record.get('code')
    if not isinstance(code, str) or not code.strip():
        return None

    lat = _coordinate(record.get('lat'), -90.0, 90.0)
    lon = _coordinate(record.get('lon'), -180.0, 180.0)
    if lat is None or lon is None:
        return None

    name = record.get('name') or ''
    return Airport(code.strip().upper(), str(name).strip(), lat, lon)


def import_airports(records: Iterable, current: AirportSet) -> AirportSet:
    """
    Build a replacement airport set from raw records.

    Malformed records are dropped. If nothing survives, ``current`` is
    returned unchanged.
    """
    accepted = []
    dropped = 0

    for record in records:
        airport = airport_from_record(record)
        if airport is None:
            dropped += 1
            continue
        accepted.append(airport)

    if dropped:
        logger.warning(f"[AIRPORTS] Dropped {dropped} malformed record(s) during import")

    if not accepted:
        logger.warning("[AIRPORTS] Import produced no valid airports, keeping current set")
        return current

    new_set = AirportSet(accepted)
    logger.info(f"[AIRPORTS] Imported {len(new_set)} airports")
    return new_set


def parse_airport_json(text: str) -> list:
    """Structured list of records. Anything other than a JSON list yields no records."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        logger.warning(f"[AIRPORTS] Invalid JSON airport file: {e}")
        return []
    if not isinstance(data, list):
        return []
    return data


def parse_airport_csv(text: str) -> list:
    """Delimited table with columns code, name, latitude, longitude (fixed order)."""
    records = []
    for row in csv.reader(io.StringIO(text)):
        if not row:
            continue
        padded = row + [None] * (4 - len(row))
        records.append({
            'iata': padded[0],
            'name': padded[1],
            'lat': padded[2],
            'lon': padded[3],
        })
    return records


def load_airports(filename: str, text: str, current: AirportSet) -> AirportSet:
    """Parse an uploaded file (``.json`` or delimited text) and import it."""
    if filename.lower().endswith('.json'):
        records = parse_airport_json(text)
    else:
        records = parse_airport_csv(text)
    return import_airports(records, current)


# ============================================
# ACTIVE SET
# ============================================

class AirportRegistry:
    """
    Owner of the active airport set.

    Replacement swaps the whole set; readers never see a partial import.
    """

    def __init__(self, initial: AirportSet = MINI_AIRPORTS):
        self._lock = threading.Lock()
        self._active = initial

    @property
    def active(self) -> AirportSet:
        return self._active

    def replace(self, new_set: AirportSet) -> AirportSet:
        with self._lock:
            self._active = new_set
        return new_set

    def import_file(self, filename: str, text: str) -> AirportSet:
        with self._lock:
            self._active = load_airports(filename, text, self._active)
            return self._active

    def import_path(self, path) -> AirportSet:
        """Import a file from disk ('.json' or delimited text)."""
        path = Path(path)
        return self.import_file(path.name, path.read_text(encoding='utf-8-sig'))

    def reset(self) -> None:
        self.replace(MINI_AIRPORTS)


# Singleton instance
airport_registry = AirportRegistry()
