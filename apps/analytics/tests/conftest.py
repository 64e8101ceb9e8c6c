import pytest
from datetime import date
from decimal import Decimal

from apps.bills.models import Bill
from apps.pricing.models import CaneType


def record_bill(bill_number, owner_name, bill_date, cane_type, weight, fuel_cost, price):
    bill = Bill(
        bill_number=bill_number,
        owner_name=owner_name,
        quota_number='Q-01',
        date=bill_date,
        sugarcane_type=cane_type,
        weight=Decimal(weight),
        fuel_cost=Decimal(fuel_cost),
        price_per_unit=Decimal(price),
    )
    bill.compute_totals()
    bill.save()
    return bill


@pytest.fixture
def stats_bills(db):
    """
    Four bills over three months.

    Totals: 37 t, fuel 150, gross 35800, net 35650.
    """
    return [
        record_bill('S-1', 'Somchai', date(2024, 1, 10), CaneType.FRESH, '10', '50', '1000'),
        record_bill('S-2', 'Somchai', date(2024, 1, 25), CaneType.BURNT, '5', '0', '800'),
        record_bill('S-3', 'Malee', date(2024, 2, 5), CaneType.FRESH, '20', '100', '1000'),
        record_bill('S-4', 'Wichai', date(2024, 3, 1), CaneType.LONG_TOP, '2', '0', '900'),
    ]
