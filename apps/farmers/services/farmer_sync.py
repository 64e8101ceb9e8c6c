"""
Farmer directory sync.

Keeps each farmer's license plate list up to date from bill data. Farmers
are matched by exact name only; two spellings of one name stay two farmers.
"""

import logging
from typing import Optional

from django.db import transaction

from ..models import Farmer

logger = logging.getLogger(__name__)


@transaction.atomic
def sync_farmer_plate(*, owner_name: str, license_plate: Optional[str]) -> Optional[Farmer]:
    """
    Record ``license_plate`` on the farmer named ``owner_name``.

    Appends the plate if the farmer exists and does not have it yet;
    creates the farmer with a one-plate list otherwise.

    Args:
        owner_name: Bill owner name, matched exactly against Farmer.name
        license_plate: Plate seen on the bill

    Returns:
        The farmer, or None when there is no plate to record
    """
    plate = (license_plate or '').strip()
    if not plate or not owner_name:
        return None

    farmer = (
        Farmer.objects
        .select_for_update()
        .filter(name=owner_name)
        .order_by('created_at')
        .first()
    )

    if farmer is None:
        farmer = Farmer.objects.create(name=owner_name, license_plates=[plate])
        logger.info("Farmer %s added from bill data", owner_name)
        return farmer

    if plate not in farmer.license_plates:
        farmer.license_plates = [*farmer.license_plates, plate]
        farmer.save(update_fields=['license_plates', 'updated_at'])

    return farmer
