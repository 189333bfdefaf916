import json

from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from core.records import EmployeeRecord, RevenueCenterRecord
from core.store import get_store


class Command(BaseCommand):
    help = 'Load employees and revenue centers from a JSON export'

    def add_arguments(self, parser):
        parser.add_argument('path', help='JSON file produced by export_labor_data')

    def handle(self, *args, **options):
        try:
            with open(options['path'], encoding='utf-8') as fh:
                data = json.load(fh)
        except OSError as e:
            raise CommandError(f"Cannot read {options['path']}: {e}")
        except json.JSONDecodeError as e:
            raise CommandError(f"Invalid JSON in {options['path']}: {e}")
        if not isinstance(data, dict):
            raise CommandError('Expected a JSON object with "employees" and/or "revenueCenters"')

        employees = [EmployeeRecord.from_dict(item) for item in data.get('employees') or []]
        skipped = [e for e in employees if not e.name or e.start_time is None]
        employees = [e for e in employees if e not in skipped]
        centers = [
            RevenueCenterRecord.from_dict(item)
            for item in data.get('revenueCenters') or []
            if item.get('name')
        ]

        with transaction.atomic():
            get_store().load_records(employees, centers)

        for record in skipped:
            self.stderr.write(f"Skipped employee without name or readable start time: {record.id or '?'}")
        self.stdout.write(self.style.SUCCESS(
            f'Imported {len(employees)} employees and {len(centers)} revenue centers'
        ))
