"""
Price resolution service.

Determines the per-unit price applicable to a bill date and cane type.
Resolution walks an ordered chain of tiers and returns the first answer:

    1. PriceTableTier     entry with the greatest effective_date <= date
    2. LegacySettingTier  the single legacy PriceSetting row, if present
    3. DefaultPriceTier   settings.DEFAULT_CANE_PRICES

The last tier always answers, so resolution never fails. A price entry
effective after the query date is never selected.

Example:
    Resolving the fresh cane price for a bill::

        from apps.pricing.services import resolve_price

        price = resolve_price(cane_type=CaneType.FRESH, on_date=date(2024, 3, 15))
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional, Sequence

from django.conf import settings

from ..models import CaneType, PriceEntry, PriceSetting


@dataclass(frozen=True)
class PriceSheet:
    """Prices for all three cane types, tagged with the tier that produced them."""

    fresh: Decimal
    burnt: Decimal
    long_top: Decimal
    source: str
    effective_date: Optional[date] = None

    def price_for(self, cane_type) -> Decimal:
        cane_type = CaneType(cane_type)
        if cane_type == CaneType.FRESH:
            return self.fresh
        if cane_type == CaneType.BURNT:
            return self.burnt
        return self.long_top


class PriceTier:
    """One step of the resolution chain."""

    name = ''

    def lookup(self, on_date: date) -> Optional[PriceSheet]:
        raise NotImplementedError


class PriceTableTier(PriceTier):
    """Latest price entry effective on or before the date."""

    name = 'price_table'

    def lookup(self, on_date: date) -> Optional[PriceSheet]:
        entry = (
            PriceEntry.objects
            .filter(effective_date__lte=on_date)
            .order_by('-effective_date')
            .first()
        )
        if entry is None:
            return None
        return PriceSheet(
            fresh=entry.fresh_price,
            burnt=entry.burnt_price,
            long_top=entry.long_top_price,
            source=self.name,
            effective_date=entry.effective_date,
        )


class LegacySettingTier(PriceTier):
    """
    Flat prices from the legacy single-row setting.

    A zero field in the row is treated as unset and takes the configured
    default for that cane type.
    """

    name = 'legacy_setting'

    def lookup(self, on_date: date) -> Optional[PriceSheet]:
        setting = PriceSetting.load()
        if setting is None:
            return None
        defaults = settings.DEFAULT_CANE_PRICES
        return PriceSheet(
            fresh=setting.fresh_price or Decimal(defaults['fresh']),
            burnt=setting.burnt_price or Decimal(defaults['burnt']),
            long_top=setting.long_top_price or Decimal(defaults['long_top']),
            source=self.name,
        )


class DefaultPriceTier(PriceTier):
    """Configured constants; always answers."""

    name = 'default'

    def lookup(self, on_date: date) -> PriceSheet:
        defaults = settings.DEFAULT_CANE_PRICES
        return PriceSheet(
            fresh=Decimal(defaults['fresh']),
            burnt=Decimal(defaults['burnt']),
            long_top=Decimal(defaults['long_top']),
            source=self.name,
        )


DEFAULT_TIERS = (PriceTableTier(), LegacySettingTier(), DefaultPriceTier())


def resolve_price_sheet(
    *,
    on_date: date,
    tiers: Sequence[PriceTier] = DEFAULT_TIERS
) -> PriceSheet:
    """
    Resolve the full price sheet applicable on ``on_date``.

    Args:
        on_date: Transaction date
        tiers: Resolution chain, first answer wins

    Returns:
        PriceSheet from the first tier that answers; the configured
        defaults if none does
    """
    for tier in tiers:
        sheet = tier.lookup(on_date)
        if sheet is not None:
            return sheet
    return DefaultPriceTier().lookup(on_date)


def resolve_price(
    *,
    cane_type,
    on_date: date,
    tiers: Sequence[PriceTier] = DEFAULT_TIERS
) -> Decimal:
    """
    Resolve the per-unit price for one cane type on ``on_date``.

    Args:
        cane_type: CaneType value (1 fresh, 2 burnt, 3 long top)
        on_date: Transaction date
        tiers: Resolution chain

    Returns:
        Price per unit
    """
    return resolve_price_sheet(on_date=on_date, tiers=tiers).price_for(cane_type)
