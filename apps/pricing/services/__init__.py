from .price_resolution import (
    PriceSheet,
    PriceTier,
    PriceTableTier,
    LegacySettingTier,
    DefaultPriceTier,
    DEFAULT_TIERS,
    resolve_price,
    resolve_price_sheet,
)
from .price_management import (
    list_price_entries,
    upsert_price_entry,
    delete_price_entry,
    get_settings,
    update_settings,
    migrate_legacy_prices,
)
from .exceptions import (
    PricingServiceError,
    PriceEntryNotFoundError,
    InvalidPriceError,
)

__all__ = [
    # Resolution
    'PriceSheet',
    'PriceTier',
    'PriceTableTier',
    'LegacySettingTier',
    'DefaultPriceTier',
    'DEFAULT_TIERS',
    'resolve_price',
    'resolve_price_sheet',
    # Management
    'list_price_entries',
    'upsert_price_entry',
    'delete_price_entry',
    'get_settings',
    'update_settings',
    'migrate_legacy_prices',
    # Exceptions
    'PricingServiceError',
    'PriceEntryNotFoundError',
    'InvalidPriceError',
]
