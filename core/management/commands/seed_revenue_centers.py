from django.conf import settings
from django.core.management.base import BaseCommand
from django.db import transaction

from core.store import get_store


class Command(BaseCommand):
    help = 'Creates the configured revenue centers that do not exist yet'

    def add_arguments(self, parser):
        parser.add_argument(
            '--reset', action='store_true',
            help='Also reset sales and divisor of existing centers to their defaults',
        )

    def handle(self, *args, **options):
        store = get_store()
        created = 0
        with transaction.atomic():
            for center in settings.DEFAULT_REVENUE_CENTERS:
                existing = store.find_revenue_center(center['name'])
                if existing is None:
                    store.create_revenue_center(center['name'], center.get('sales', 0), center.get('divisor'))
                    created += 1
                    self.stdout.write(f"Created revenue center: {center['name']}")
                elif options['reset']:
                    store.update_revenue_center(
                        center['name'],
                        sales=center.get('sales', 0),
                        divisor=center.get('divisor', settings.LABOR_DEFAULT_DIVISOR),
                    )
                    self.stdout.write(f"Reset revenue center: {center['name']}")
        self.stdout.write(self.style.SUCCESS(f'Seeding finished ({created} created)'))
