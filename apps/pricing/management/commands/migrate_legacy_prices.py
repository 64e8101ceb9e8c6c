"""
Management command to move the legacy flat prices into the price table.

Usage:
    python manage.py migrate_legacy_prices

Creates a single entry effective LEGACY_PRICE_EFFECTIVE_DATE when the
price table is empty and the legacy settings row exists. Safe to re-run.
"""

from django.core.management.base import BaseCommand

from apps.pricing.services import migrate_legacy_prices


class Command(BaseCommand):
    help = 'Migrate legacy single-row prices into the effective-date price table'

    def handle(self, *args, **options):
        entry = migrate_legacy_prices()
        if entry is None:
            self.stdout.write('Nothing to migrate')
            return
        self.stdout.write(self.style.SUCCESS(
            f'Created price entry effective {entry.effective_date}'
        ))
