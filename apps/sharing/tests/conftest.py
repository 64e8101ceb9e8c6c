import pytest
from datetime import date, timedelta
from decimal import Decimal

from django.utils import timezone

from apps.bills.models import Bill
from apps.pricing.models import CaneType
from apps.sharing.models import ShareLink


@pytest.fixture
def active_link(db, admin_user):
    """A link valid for another day."""
    return ShareLink.objects.create(
        token='a' * 32,
        expires_at=timezone.now() + timedelta(days=1),
        created_by=admin_user,
    )


@pytest.fixture
def permanent_link(db, admin_user):
    """A link that never expires."""
    return ShareLink.objects.create(token='b' * 32, expires_at=None, created_by=admin_user)


@pytest.fixture
def expired_link(db, admin_user):
    """A link that expired an hour ago."""
    return ShareLink.objects.create(
        token='c' * 32,
        expires_at=timezone.now() - timedelta(hours=1),
        created_by=admin_user,
    )


@pytest.fixture
def shared_bill(db):
    """One stored bill to appear in shared listings."""
    bill = Bill(
        bill_number='S-1',
        owner_name='Somchai',
        date=date(2024, 3, 15),
        sugarcane_type=CaneType.FRESH,
        weight=Decimal('5'),
        fuel_cost=Decimal('0'),
        price_per_unit=Decimal('1000'),
    )
    bill.compute_totals()
    bill.save()
    return bill
