"""
Management command to seed the initial operator accounts.

Usage:
    python manage.py seed_users

Reads passwords from configuration (environment or .env):
    SEED_ADMIN_PASSWORD   -> 'admin' user (role admin)
    SEED_ROOT_PASSWORD    -> 'root' user (role root)
    SUPER_ROOT_PASSWORD   -> SUPER_ROOT_USERNAME user (root + super-root capability)

An account whose password is not configured is skipped. Existing accounts
are left untouched, so the command is idempotent.
"""

from decouple import config
from django.conf import settings
from django.core.management.base import BaseCommand
from django.db import transaction

from apps.accounts.models import User, Role


class Command(BaseCommand):
    help = 'Seed the admin, root and super-root accounts'

    def add_arguments(self, parser):
        parser.add_argument('--admin-password', default=None, help='Password for the admin user')
        parser.add_argument('--root-password', default=None, help='Password for the root user')
        parser.add_argument('--super-root-password', default=None, help='Password for the super root')

    @transaction.atomic
    def handle(self, *args, **options):
        accounts = [
            (
                'admin',
                Role.ADMIN,
                options['admin_password'] or config('SEED_ADMIN_PASSWORD', default=''),
            ),
            (
                'root',
                Role.ROOT,
                options['root_password'] or config('SEED_ROOT_PASSWORD', default=''),
            ),
            (
                settings.SUPER_ROOT_USERNAME,
                Role.ROOT,
                options['super_root_password'] or config('SUPER_ROOT_PASSWORD', default=''),
            ),
        ]

        for username, role, password in accounts:
            if User.objects.filter(username=username).exists():
                self.stdout.write(f'  {username}: already exists')
                continue
            if not password:
                self.stdout.write(self.style.WARNING(f'  {username}: no password configured, skipped'))
                continue

            User.objects.create_user(username=username, password=password, role=role)
            self.stdout.write(self.style.SUCCESS(f'  {username}: created ({role})'))
