"""
Django management command to import an airport dataset.

Replaces the active set of this process, so it doubles as a validator for
the file referenced by AIRPORTS_FILE.

Usage:
    python manage.py import_airports airports.json
    python manage.py import_airports airports.csv
"""
from pathlib import Path

from django.core.management.base import BaseCommand, CommandError

from logistics.services.airports import airport_registry


class Command(BaseCommand):
    help = 'Replace the active airport set from a JSON list or CSV table'

    def add_arguments(self, parser):
        parser.add_argument('path', help='JSON (.json) or delimited text file')

    def handle(self, *args, **options):
        path = Path(options['path'])
        if not path.is_file():
            raise CommandError(f"File not found: {path}")

        before = airport_registry.active
        after = airport_registry.import_path(path)

        if after is before:
            self.stdout.write(self.style.WARNING(
                f'No valid airports in {path.name}; kept {len(before)} airports'
            ))
            return

        self.stdout.write(self.style.SUCCESS(f'Imported {len(after)} airports from {path.name}'))
        for airport in after:
            self.stdout.write(f'  {airport.iata}  {airport.name} ({airport.lat}, {airport.lon})')
