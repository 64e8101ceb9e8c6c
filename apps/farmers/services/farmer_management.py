"""Farmer directory CRUD."""

from typing import Iterable, List, Optional
from uuid import UUID

from django.db import transaction
from django.db.models import QuerySet

from apps.accounts.access import Action, ensure_allowed
from apps.activity.models import ActivityAction
from apps.activity.services import log_activity

from ..models import Farmer
from .exceptions import FarmerNotFoundError, InvalidFarmerDataError


def clean_plates(plates: Optional[Iterable[str]]) -> List[str]:
    """Strip plates, drop blanks and duplicates, keep first-seen order."""
    cleaned = []
    for plate in plates or []:
        plate = (plate or '').strip()
        if plate and plate not in cleaned:
            cleaned.append(plate)
    return cleaned


def _clean_name(name: str) -> str:
    name = (name or '').strip()
    if not name:
        raise InvalidFarmerDataError("Farmer name is required")
    return name


def list_farmers(*, actor, search: str = '') -> QuerySet:
    """Return farmers sorted by name, optionally filtered by name."""
    ensure_allowed(actor, Action.FARMER_READ)

    queryset = Farmer.objects.order_by('name')
    if search:
        queryset = queryset.filter(name__icontains=search)
    return queryset


def get_farmer(*, actor, farmer_id: UUID) -> Farmer:
    """
    Get a farmer by ID.

    Raises:
        FarmerNotFoundError: If the farmer doesn't exist
    """
    ensure_allowed(actor, Action.FARMER_READ)
    try:
        return Farmer.objects.get(id=farmer_id)
    except Farmer.DoesNotExist:
        raise FarmerNotFoundError(f"Farmer with ID {farmer_id} not found")


def create_farmer(*, actor, name: str, license_plates: Optional[List[str]] = None) -> Farmer:
    """Create a farmer (root only)."""
    ensure_allowed(actor, Action.FARMER_MANAGE)

    farmer = Farmer.objects.create(
        name=_clean_name(name),
        license_plates=clean_plates(license_plates),
    )

    log_activity(actor=actor, action=ActivityAction.ADD_FARMER, details=f"Added farmer {farmer.name}")
    return farmer


@transaction.atomic
def update_farmer(
    *,
    actor,
    farmer_id: UUID,
    name: Optional[str] = None,
    license_plates: Optional[List[str]] = None
) -> Farmer:
    """
    Update a farmer's name and/or plate list (root only).

    Renaming does not touch bills; they keep the owner name they were
    recorded with.

    Raises:
        FarmerNotFoundError: If the farmer doesn't exist
        InvalidFarmerDataError: If the new name is blank
    """
    ensure_allowed(actor, Action.FARMER_MANAGE)

    try:
        farmer = Farmer.objects.select_for_update().get(id=farmer_id)
    except Farmer.DoesNotExist:
        raise FarmerNotFoundError(f"Farmer with ID {farmer_id} not found")

    if name is not None:
        farmer.name = _clean_name(name)
    if license_plates is not None:
        farmer.license_plates = clean_plates(license_plates)
    farmer.save()

    log_activity(actor=actor, action=ActivityAction.UPDATE_FARMER, details=f"Updated farmer {farmer.name}")
    return farmer


@transaction.atomic
def delete_farmer(*, actor, farmer_id: UUID) -> None:
    """
    Delete a farmer (root only). Bills are unaffected.

    Raises:
        FarmerNotFoundError: If the farmer doesn't exist
    """
    ensure_allowed(actor, Action.FARMER_MANAGE)

    try:
        farmer = Farmer.objects.get(id=farmer_id)
    except Farmer.DoesNotExist:
        raise FarmerNotFoundError(f"Farmer with ID {farmer_id} not found")

    name = farmer.name
    farmer.delete()

    log_activity(actor=actor, action=ActivityAction.DELETE_FARMER, details=f"Deleted farmer {name}")
