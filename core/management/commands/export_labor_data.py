import json

from django.core.management.base import BaseCommand

from core.store import get_store


class Command(BaseCommand):
    help = 'Write all employees and revenue centers as JSON ({"employees": [...], "revenueCenters": [...]})'

    def add_arguments(self, parser):
        parser.add_argument('--output', '-o', default='', help='File to write (default: stdout)')

    def handle(self, *args, **options):
        store = get_store()
        payload = {
            'employees': [record.to_dict() for record in store.list_employees()],
            'revenueCenters': [record.to_dict() for record in store.list_revenue_centers()],
        }
        text = json.dumps(payload, indent=2, ensure_ascii=False)
        if options['output']:
            with open(options['output'], 'w', encoding='utf-8') as fh:
                fh.write(text)
            self.stdout.write(self.style.SUCCESS(
                f"Exported {len(payload['employees'])} employees and "
                f"{len(payload['revenueCenters'])} revenue centers to {options['output']}"
            ))
        else:
            self.stdout.write(text)
