"""
Luggage Share Airport Tests
============================

Tests for:
1. Haversine distance
2. Record import (malformed records dropped, empty import keeps current set)
3. JSON / CSV parsing
4. Active set registry
"""

import json
import tempfile
from io import StringIO
from pathlib import Path

from django.core.management import call_command
from django.test import SimpleTestCase

from logistics.services.airports import (
    Airport, AirportSet, AirportRegistry, MINI_AIRPORTS, airport_registry,
    haversine_km, import_airports, parse_airport_json, parse_airport_csv,
    load_airports
)

DXB = Airport('DXB', 'Dubai Intl', 25.2532, 55.3657)
CAI = Airport('CAI', 'Cairo Intl', 30.1219, 31.4056)


class TestHaversine(SimpleTestCase):

    def test_dxb_to_cai(self):
        self.assertAlmostEqual(haversine_km(DXB, CAI), 2416, delta=5)

    def test_symmetric(self):
        self.assertAlmostEqual(haversine_km(DXB, CAI), haversine_km(CAI, DXB), places=9)

    def test_zero_for_identical_coordinates(self):
        self.assertEqual(haversine_km(DXB, DXB), 0.0)

    def test_one_degree_at_equator(self):
        a = Airport('A', '', 0.0, 0.0)
        b = Airport('B', '', 0.0, 1.0)
        self.assertAlmostEqual(haversine_km(a, b), 111.19, delta=0.05)

    def test_antipodal_points(self):
        a = Airport('A', '', 0.0, 0.0)
        b = Airport('B', '', 0.0, 180.0)
        self.assertAlmostEqual(haversine_km(a, b), 20015.09, delta=0.5)


class TestAirportSet(SimpleTestCase):

    def test_mini_dataset(self):
        self.assertEqual(len(MINI_AIRPORTS), 15)
        self.assertIn('DXB', MINI_AIRPORTS)
        self.assertEqual(MINI_AIRPORTS.codes()[0], 'DXB')

    def test_distance_unknown_code_is_none(self):
        self.assertIsNone(MINI_AIRPORTS.distance_km('DXB', 'ZZZ'))

    def test_lookup_ignores_case_and_whitespace(self):
        self.assertIn('dxb', MINI_AIRPORTS)
        self.assertNotIn(None, MINI_AIRPORTS)
        self.assertEqual(MINI_AIRPORTS.get(' cai ').iata, 'CAI')
        self.assertIsNone(MINI_AIRPORTS.get(None))
        self.assertAlmostEqual(
            MINI_AIRPORTS.distance_km('dxb', 'cai'),
            MINI_AIRPORTS.distance_km('DXB', 'CAI')
        )

    def test_later_duplicate_replaces_earlier(self):
        airports = AirportSet([DXB, Airport('DXB', 'Dubai (new)', 25.0, 55.0)])
        self.assertEqual(len(airports), 1)
        self.assertEqual(airports.get('DXB').name, 'Dubai (new)')


class TestImportAirports(SimpleTestCase):
    """Tests for import_airports()."""

    def test_missing_latitude_is_dropped(self):
        records = [
            {'iata': 'XXX', 'name': 'X', 'lat': 10, 'lon': 20},
            {'iata': 'YYY', 'name': 'Y', 'lon': 30},
        ]
        with self.assertLogs('logistics.services.airports', level='WARNING'):
            result = import_airports(records, MINI_AIRPORTS)
        self.assertEqual(result.codes(), ['XXX'])

    def test_code_key_accepted_and_uppercased(self):
        result = import_airports([{'code': 'dxb', 'lat': '25.25', 'lon': '55.36'}], MINI_AIRPORTS)
        self.assertEqual(result.codes(), ['DXB'])
        self.assertEqual(result.get('DXB').lat, 25.25)

    def test_out_of_range_coordinates_dropped(self):
        records = [
            {'iata': 'AAA', 'lat': 91, 'lon': 0},
            {'iata': 'BBB', 'lat': 0, 'lon': -181},
            {'iata': 'CCC', 'lat': 'nan', 'lon': 0},
            {'iata': 'DDD', 'lat': 45, 'lon': 90},
        ]
        result = import_airports(records, MINI_AIRPORTS)
        self.assertEqual(result.codes(), ['DDD'])

    def test_blank_code_and_non_dict_dropped(self):
        records = [{'iata': '  ', 'lat': 1, 'lon': 1}, 'DXB', None, {'lat': 1, 'lon': 1}]
        result = import_airports(records, MINI_AIRPORTS)
        self.assertIs(result, MINI_AIRPORTS)

    def test_empty_import_keeps_current(self):
        self.assertIs(import_airports([], MINI_AIRPORTS), MINI_AIRPORTS)


class TestParsing(SimpleTestCase):

    def test_json_list(self):
        text = json.dumps([{'iata': 'DXB', 'name': 'Dubai', 'lat': 25.25, 'lon': 55.36}])
        self.assertEqual(len(parse_airport_json(text)), 1)

    def test_invalid_json_yields_nothing(self):
        self.assertEqual(parse_airport_json('{not json'), [])

    def test_json_object_yields_nothing(self):
        self.assertEqual(parse_airport_json('{"iata": "DXB"}'), [])

    def test_csv_columns_in_fixed_order(self):
        records = parse_airport_csv('DXB,Dubai Intl,25.2532,55.3657\nCAI,Cairo,30.12,31.40\n')
        self.assertEqual(records[0], {'iata': 'DXB', 'name': 'Dubai Intl', 'lat': '25.2532', 'lon': '55.3657'})
        self.assertEqual(len(records), 2)

    def test_csv_header_row_falls_out(self):
        text = 'code,name,latitude,longitude\nDXB,Dubai Intl,25.2532,55.3657\n'
        result = load_airports('airports.csv', text, MINI_AIRPORTS)
        self.assertEqual(result.codes(), ['DXB'])

    def test_csv_short_row_dropped(self):
        result = load_airports('a.txt', 'DXB,Dubai\nCAI,Cairo,30.12,31.40\n', MINI_AIRPORTS)
        self.assertEqual(result.codes(), ['CAI'])

    def test_extension_picks_parser(self):
        text = json.dumps([{'iata': 'DXB', 'lat': 25.25, 'lon': 55.36}])
        self.assertEqual(load_airports('AIRPORTS.JSON', text, MINI_AIRPORTS).codes(), ['DXB'])
        # Same text as delimited rows is malformed
        self.assertIs(load_airports('airports.csv', text, MINI_AIRPORTS), MINI_AIRPORTS)


class TestAirportRegistry(SimpleTestCase):

    def test_import_replaces_whole_set(self):
        registry = AirportRegistry()
        result = registry.import_file('a.csv', 'XXX,X,1,2\n')
        self.assertIs(registry.active, result)
        self.assertEqual(registry.active.codes(), ['XXX'])

    def test_failed_import_keeps_active_set(self):
        registry = AirportRegistry()
        registry.import_file('a.json', '[]')
        self.assertIs(registry.active, MINI_AIRPORTS)

    def test_reset(self):
        registry = AirportRegistry(AirportSet([DXB]))
        registry.reset()
        self.assertIs(registry.active, MINI_AIRPORTS)


class TestImportAirportsCommand(SimpleTestCase):

    def tearDown(self):
        airport_registry.reset()

    def test_command_replaces_active_set(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / 'airports.json'
            path.write_text(json.dumps([
                {'iata': 'DXB', 'name': 'Dubai', 'lat': 25.25, 'lon': 55.36},
                {'iata': 'SIN', 'name': 'Singapore', 'lat': 1.36, 'lon': 103.99},
            ]))
            out = StringIO()
            call_command('import_airports', str(path), stdout=out)

        self.assertIn('Imported 2 airports', out.getvalue())
        self.assertEqual(airport_registry.active.codes(), ['DXB', 'SIN'])

    def test_command_keeps_set_when_nothing_valid(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / 'airports.csv'
            path.write_text('code,name,latitude,longitude\n')
            out = StringIO()
            call_command('import_airports', str(path), stdout=out)

        self.assertIn('No valid airports', out.getvalue())
        self.assertIs(airport_registry.active, MINI_AIRPORTS)
