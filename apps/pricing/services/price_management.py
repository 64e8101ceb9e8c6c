"""
Price table and settings management.

The price table holds at most one entry per effective date; writing a
price for a date that already has one overwrites it in place.
"""

import logging
from datetime import date
from decimal import Decimal
from typing import Optional, List, Tuple
from uuid import UUID

from django.conf import settings
from django.db import transaction, IntegrityError
from django.db.models import QuerySet
from django.utils import timezone
from django.utils.dateparse import parse_date

from apps.accounts.access import Action, ensure_allowed
from apps.activity.models import ActivityAction
from apps.activity.services import log_activity

from ..models import PriceEntry, PriceSetting
from .exceptions import PriceEntryNotFoundError, InvalidPriceError
from .price_resolution import LegacySettingTier, DefaultPriceTier

logger = logging.getLogger(__name__)


def _check_prices(*prices):
    for price in prices:
        if price is None or price < 0:
            raise InvalidPriceError("Prices must be zero or greater")


def list_price_entries(*, actor) -> QuerySet:
    """Return price entries sorted by effective date, newest first."""
    ensure_allowed(actor, Action.PRICE_READ)
    return PriceEntry.objects.order_by('-effective_date')


def _upsert(effective_date: date, fresh: Decimal, burnt: Decimal, long_top: Decimal) -> Tuple[PriceEntry, bool]:
    values = {
        'fresh_price': fresh,
        'burnt_price': burnt,
        'long_top_price': long_top,
    }
    try:
        with transaction.atomic():
            return PriceEntry.objects.update_or_create(
                effective_date=effective_date,
                defaults=values,
            )
    except IntegrityError:
        # Concurrent insert for the same date won; overwrite it
        entry = PriceEntry.objects.select_for_update().get(effective_date=effective_date)
        for field, value in values.items():
            setattr(entry, field, value)
        entry.save(update_fields=[*values, 'updated_at'])
        return entry, False


@transaction.atomic
def upsert_price_entry(
    *,
    actor,
    effective_date: date,
    fresh_price: Decimal,
    burnt_price: Decimal,
    long_top_price: Decimal
) -> Tuple[PriceEntry, bool]:
    """
    Write the prices effective from ``effective_date``.

    Args:
        actor: User performing the write (admin or root)
        effective_date: Date from which the prices apply
        fresh_price: Price per unit of fresh cane
        burnt_price: Price per unit of burnt cane
        long_top_price: Price per unit of long-top cane

    Returns:
        Tuple of (entry, created)

    Raises:
        InvalidPriceError: If any price is negative
    """
    ensure_allowed(actor, Action.PRICE_UPDATE)
    _check_prices(fresh_price, burnt_price, long_top_price)

    entry, created = _upsert(effective_date, fresh_price, burnt_price, long_top_price)

    details = (
        f"Prices from {effective_date}: fresh={fresh_price} "
        f"burnt={burnt_price} long_top={long_top_price}"
    )
    log_activity(
        actor=actor,
        action=ActivityAction.ADD_PRICE_CONFIG if created else ActivityAction.UPDATE_PRICE_CONFIG,
        details=details,
    )
    logger.info("Price entry for %s %s by %s", effective_date, 'created' if created else 'updated', actor.username)
    return entry, created


@transaction.atomic
def delete_price_entry(*, actor, entry_id: UUID) -> None:
    """
    Delete a price entry (root only).

    Bills keep the price frozen into them at write time.

    Raises:
        PriceEntryNotFoundError: If the entry doesn't exist
    """
    ensure_allowed(actor, Action.PRICE_DELETE)

    try:
        entry = PriceEntry.objects.get(id=entry_id)
    except PriceEntry.DoesNotExist:
        raise PriceEntryNotFoundError(f"Price entry with ID {entry_id} not found")

    effective_date = entry.effective_date
    entry.delete()

    log_activity(
        actor=actor,
        action=ActivityAction.DELETE_PRICE_CONFIG,
        details=f"Deleted prices from {effective_date}",
    )


def get_settings(*, actor) -> dict:
    """
    Return the quota list and the prices of the latest entry.

    Falls back to the legacy setting row, then to the configured defaults,
    when the price table is empty.
    """
    ensure_allowed(actor, Action.SETTINGS_READ)

    setting = PriceSetting.load()
    latest = PriceEntry.objects.order_by('-effective_date').first()

    if latest is not None:
        prices = {
            'fresh_price': latest.fresh_price,
            'burnt_price': latest.burnt_price,
            'long_top_price': latest.long_top_price,
        }
    else:
        today = timezone.localdate()
        sheet = LegacySettingTier().lookup(today) or DefaultPriceTier().lookup(today)
        prices = {
            'fresh_price': sheet.fresh,
            'burnt_price': sheet.burnt,
            'long_top_price': sheet.long_top,
        }

    return {
        'quotas': setting.quotas if setting else [],
        'effective_date': latest.effective_date if latest else None,
        **prices,
    }


@transaction.atomic
def update_settings(
    *,
    actor,
    quotas: Optional[List[str]] = None,
    fresh_price: Optional[Decimal] = None,
    burnt_price: Optional[Decimal] = None,
    long_top_price: Optional[Decimal] = None
) -> dict:
    """
    Update the quota list and/or today's prices.

    Any provided price writes the entry effective today; categories left
    out are copied from the latest entry, or set to 0 if there is none.

    Args:
        actor: User performing the update (admin or root)
        quotas: Replacement quota number list
        fresh_price: New fresh cane price
        burnt_price: New burnt cane price
        long_top_price: New long-top cane price

    Returns:
        The settings as returned by ``get_settings``
    """
    ensure_allowed(actor, Action.SETTINGS_UPDATE)

    changed = []

    if quotas is not None:
        setting = PriceSetting.objects.select_for_update().order_by('pk').first()
        if setting is None:
            setting = PriceSetting(quotas=quotas)
            setting.save()
        else:
            setting.quotas = quotas
            setting.save(update_fields=['quotas'])
        changed.append('quotas')

    provided = {
        'fresh_price': fresh_price,
        'burnt_price': burnt_price,
        'long_top_price': long_top_price,
    }
    if any(value is not None for value in provided.values()):
        latest = PriceEntry.objects.order_by('-effective_date').first()
        for field, value in provided.items():
            if value is None:
                provided[field] = getattr(latest, field) if latest else Decimal('0')
        _check_prices(*provided.values())

        today = timezone.localdate()
        _upsert(today, provided['fresh_price'], provided['burnt_price'], provided['long_top_price'])
        changed.append(f'prices effective {today}')

    if changed:
        log_activity(
            actor=actor,
            action=ActivityAction.UPDATE_SETTINGS,
            details=f"Updated {', '.join(changed)}",
        )

    return get_settings(actor=actor)


@transaction.atomic
def migrate_legacy_prices() -> Optional[PriceEntry]:
    """
    Seed the price table from the legacy setting row.

    Runs only when the table is empty and a legacy row exists, so repeated
    calls are no-ops.

    Returns:
        The created entry, or None if nothing was migrated
    """
    if PriceEntry.objects.exists():
        return None

    effective_date = parse_date(settings.LEGACY_PRICE_EFFECTIVE_DATE)
    sheet = LegacySettingTier().lookup(effective_date)
    if sheet is None:
        return None

    entry = PriceEntry.objects.create(
        effective_date=effective_date,
        fresh_price=sheet.fresh,
        burnt_price=sheet.burnt,
        long_top_price=sheet.long_top,
    )
    logger.info("Migrated legacy prices into the price table effective %s", effective_date)
    return entry
