import pytest
from datetime import date
from decimal import Decimal

from apps.bills.models import Bill
from apps.pricing.models import CaneType


def make_bill(**overrides):
    """Create a bill directly, with totals computed the way services do."""
    values = {
        'bill_number': 'B-100',
        'owner_name': 'Somchai Jaidee',
        'quota_number': 'Q-01',
        'license_plate': '1กข-1234',
        'date': date(2024, 3, 15),
        'sugarcane_type': CaneType.FRESH,
        'weight': Decimal('10'),
        'fuel_cost': Decimal('50'),
        'price_per_unit': Decimal('1000'),
    }
    values.update(overrides)
    bill = Bill(**values)
    bill.compute_totals()
    bill.save()
    return bill


@pytest.fixture
def bill(db, root_user):
    """A fresh-cane bill priced at 1000 on 2024-03-15."""
    return make_bill(created_by=root_user)


@pytest.fixture
def sample_bills(db):
    """Bills across owners, dates and cane types."""
    return [
        make_bill(bill_number='B-1', owner_name='Somchai', quota_number='Q-01', date=date(2024, 1, 10)),
        make_bill(
            bill_number='B-2',
            owner_name='Malee',
            quota_number='Q-02',
            date=date(2024, 2, 20),
            sugarcane_type=CaneType.BURNT,
            price_per_unit=Decimal('800'),
        ),
        make_bill(
            bill_number='X-3',
            owner_name='Wichai',
            quota_number='Q-77',
            date=date(2024, 7, 5),
            sugarcane_type=CaneType.LONG_TOP,
            price_per_unit=Decimal('1050'),
        ),
    ]
