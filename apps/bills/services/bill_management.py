"""
Bill management service.

Enforces the bill invariants on every write:

- bill numbers are unique (pre-checked, with the unique index as backstop)
- price_per_unit is a manual override or the resolved table price
- total_amount and net_amount are always recomputed from the stored fields

Farmer directory sync and audit logging run after the bill is saved and
never undo it.
"""

import logging
from datetime import date
from decimal import Decimal
from typing import Optional
from uuid import UUID

from django.db import transaction, IntegrityError

from apps.accounts.access import Action, ensure_allowed
from apps.activity.models import ActivityAction
from apps.activity.services import log_activity
from apps.farmers.services import sync_farmer_plate
from apps.pricing.models import CaneType
from apps.pricing.services import resolve_price

from ..models import Bill
from .exceptions import BillNotFoundError, DuplicateBillNumberError, InvalidBillDataError

logger = logging.getLogger(__name__)

DUPLICATE_MESSAGE = "Bill number already exists"

UPDATABLE_FIELDS = frozenset({
    'bill_number',
    'owner_name',
    'quota_number',
    'license_plate',
    'date',
    'sugarcane_type',
    'weight',
    'fuel_cost',
})


def bill_number_exists(*, bill_number: str, exclude_id: Optional[UUID] = None) -> bool:
    """Check whether ``bill_number`` is taken, optionally ignoring one bill."""
    queryset = Bill.objects.filter(bill_number=bill_number)
    if exclude_id is not None:
        queryset = queryset.exclude(id=exclude_id)
    return queryset.exists()


def _validate_amounts(*, sugarcane_type, weight, fuel_cost, manual_price):
    if sugarcane_type not in CaneType.values:
        raise InvalidBillDataError(f"Unknown sugarcane type {sugarcane_type}")
    if weight is None or weight < 0:
        raise InvalidBillDataError("Weight must be zero or greater")
    if fuel_cost is not None and fuel_cost < 0:
        raise InvalidBillDataError("Fuel cost must be zero or greater")
    if manual_price is not None and manual_price < 0:
        raise InvalidBillDataError("Manual price must be zero or greater")


def _save_bill(bill: Bill) -> None:
    try:
        with transaction.atomic():
            bill.save()
    except IntegrityError:
        raise DuplicateBillNumberError(DUPLICATE_MESSAGE)


def _sync_farmer(bill: Bill) -> None:
    """Best-effort farmer plate sync; failures are logged, never raised."""
    if not bill.license_plate:
        return
    try:
        with transaction.atomic():
            sync_farmer_plate(owner_name=bill.owner_name, license_plate=bill.license_plate)
    except Exception:
        logger.exception("Farmer sync failed for bill %s", bill.bill_number)


def create_bill(
    *,
    actor,
    bill_number: str,
    owner_name: str,
    date: date,
    sugarcane_type: int,
    weight: Decimal,
    fuel_cost: Optional[Decimal] = None,
    quota_number: str = '',
    license_plate: str = '',
    manual_price: Optional[Decimal] = None
) -> Bill:
    """
    Record a new bill.

    Args:
        actor: User recording the bill (admin or root)
        bill_number: Unique bill identifier
        owner_name: Farmer name as written on the bill
        date: Transaction date, used for price resolution
        sugarcane_type: CaneType value
        weight: Weight in tons
        fuel_cost: Deducted from the total, defaults to 0
        quota_number: Optional quota number
        license_plate: Optional truck plate, synced to the farmer directory
        manual_price: Price per unit to use verbatim instead of the table

    Returns:
        The saved Bill

    Raises:
        AccessDeniedError: If the actor may not create bills
        InvalidBillDataError: If a value is out of range
        DuplicateBillNumberError: If the bill number already exists
    """
    ensure_allowed(actor, Action.BILL_CREATE)

    if fuel_cost is None:
        fuel_cost = Decimal('0')
    _validate_amounts(
        sugarcane_type=sugarcane_type,
        weight=weight,
        fuel_cost=fuel_cost,
        manual_price=manual_price,
    )

    if bill_number_exists(bill_number=bill_number):
        raise DuplicateBillNumberError(DUPLICATE_MESSAGE)

    if manual_price is not None:
        price_per_unit = manual_price
    else:
        price_per_unit = resolve_price(cane_type=sugarcane_type, on_date=date)

    bill = Bill(
        bill_number=bill_number,
        owner_name=owner_name,
        quota_number=quota_number or '',
        license_plate=license_plate or '',
        date=date,
        sugarcane_type=sugarcane_type,
        weight=weight,
        fuel_cost=fuel_cost,
        price_per_unit=price_per_unit,
        created_by=actor,
    )
    bill.compute_totals()
    _save_bill(bill)

    _sync_farmer(bill)
    log_activity(
        actor=actor,
        action=ActivityAction.ADD_BILL,
        details=f"Added bill {bill.bill_number} for {bill.owner_name}",
    )
    logger.info("Bill %s recorded by %s", bill.bill_number, actor.username)

    return bill


def get_bill(*, actor, bill_id: UUID) -> Bill:
    """
    Get a bill by ID.

    Raises:
        BillNotFoundError: If the bill doesn't exist
    """
    ensure_allowed(actor, Action.BILL_READ)
    try:
        return Bill.objects.get(id=bill_id)
    except Bill.DoesNotExist:
        raise BillNotFoundError(f"Bill with ID {bill_id} not found")


@transaction.atomic
def update_bill(
    *,
    actor,
    bill_id: UUID,
    manual_price: Optional[Decimal] = None,
    **changes
) -> Bill:
    """
    Edit a bill (root only).

    The price is re-resolved only when the cane type or date changes and
    no manual price is given; a manual price replaces it verbatim;
    otherwise the stored price is kept. Totals are always recomputed.

    Args:
        actor: User performing the edit
        bill_id: Bill to edit
        manual_price: Price per unit override for this edit
        **changes: Any of UPDATABLE_FIELDS

    Raises:
        AccessDeniedError: If the actor may not edit bills
        BillNotFoundError: If the bill doesn't exist
        InvalidBillDataError: If a field is unknown or a value out of range
        DuplicateBillNumberError: If the new bill number is taken
    """
    ensure_allowed(actor, Action.BILL_UPDATE)

    unknown = set(changes) - UPDATABLE_FIELDS
    if unknown:
        raise InvalidBillDataError(f"Cannot update fields: {', '.join(sorted(unknown))}")

    try:
        bill = Bill.objects.select_for_update().get(id=bill_id)
    except Bill.DoesNotExist:
        raise BillNotFoundError(f"Bill with ID {bill_id} not found")

    _validate_amounts(
        sugarcane_type=changes.get('sugarcane_type', bill.sugarcane_type),
        weight=changes.get('weight', bill.weight),
        fuel_cost=changes.get('fuel_cost', bill.fuel_cost),
        manual_price=manual_price,
    )

    new_number = changes.get('bill_number')
    if new_number is not None and new_number != bill.bill_number:
        if bill_number_exists(bill_number=new_number, exclude_id=bill.id):
            raise DuplicateBillNumberError(DUPLICATE_MESSAGE)

    pricing_changed = (
        ('sugarcane_type' in changes and changes['sugarcane_type'] != bill.sugarcane_type)
        or ('date' in changes and changes['date'] != bill.date)
    )

    for field, value in changes.items():
        if field in ('quota_number', 'license_plate') and value is None:
            value = ''
        if field == 'fuel_cost' and value is None:
            value = Decimal('0')
        setattr(bill, field, value)

    if manual_price is not None:
        bill.price_per_unit = manual_price
    elif pricing_changed:
        bill.price_per_unit = resolve_price(cane_type=bill.sugarcane_type, on_date=bill.date)

    bill.compute_totals()
    _save_bill(bill)

    log_activity(
        actor=actor,
        action=ActivityAction.UPDATE_BILL,
        details=f"Updated bill {bill.bill_number}",
    )
    return bill


@transaction.atomic
def delete_bill(*, actor, bill_id: UUID) -> None:
    """
    Delete a bill (root only).

    Raises:
        BillNotFoundError: If the bill doesn't exist
    """
    ensure_allowed(actor, Action.BILL_DELETE)

    try:
        bill = Bill.objects.get(id=bill_id)
    except Bill.DoesNotExist:
        raise BillNotFoundError(f"Bill with ID {bill_id} not found")

    bill_number = bill.bill_number
    bill.delete()

    log_activity(actor=actor, action=ActivityAction.DELETE_BILL, details=f"Deleted bill {bill_number}")
