"""
Service layer tests for pricing.

Tests cover:
- Tiered price resolution (table, legacy setting, configured defaults)
- Upsert-by-date semantics of the price table
- Settings updates writing today's prices
- Legacy price migration
"""

import pytest
from datetime import date
from decimal import Decimal
from uuid import uuid4

from django.test import override_settings
from django.utils import timezone

from apps.activity.models import ActivityLog, ActivityAction
from apps.accounts.services.exceptions import AccessDeniedError
from apps.pricing.models import CaneType, PriceEntry, PriceSetting
from apps.pricing.services import (
    PriceTableTier,
    LegacySettingTier,
    DefaultPriceTier,
    resolve_price,
    resolve_price_sheet,
    upsert_price_entry,
    delete_price_entry,
    list_price_entries,
    get_settings,
    update_settings,
    migrate_legacy_prices,
)
from apps.pricing.services.exceptions import PriceEntryNotFoundError, InvalidPriceError


# =============================================================================
# Resolution Tier Tests
# =============================================================================

@pytest.mark.django_db
class TestPriceTiers:
    """Each tier answers on its own."""

    def test_table_tier_empty(self):
        """Price table tier has no answer for an empty table."""
        assert PriceTableTier().lookup(date(2024, 3, 15)) is None

    def test_table_tier_picks_latest_not_after_date(self, price_table):
        """Price table tier picks the latest entry effective on or before the date."""
        sheet = PriceTableTier().lookup(date(2024, 3, 15))

        assert sheet.fresh == Decimal('1000')
        assert sheet.effective_date == date(2024, 1, 1)
        assert sheet.source == 'price_table'

    def test_table_tier_effective_on_exact_date(self, price_table):
        """An entry applies on its own effective date."""
        sheet = PriceTableTier().lookup(date(2024, 6, 1))

        assert sheet.fresh == Decimal('1200')

    def test_legacy_tier_without_setting(self):
        """Legacy tier has no answer without a setting row."""
        assert LegacySettingTier().lookup(date(2024, 3, 15)) is None

    def test_legacy_tier_with_setting(self, legacy_setting):
        """Legacy tier returns the flat prices of the setting row."""
        sheet = LegacySettingTier().lookup(date(2024, 3, 15))

        assert sheet.fresh == Decimal('1111')
        assert sheet.burnt == Decimal('999')
        assert sheet.long_top == Decimal('1055')
        assert sheet.source == 'legacy_setting'

    def test_legacy_tier_zero_field_takes_default(self, legacy_setting):
        """A zero legacy price counts as unset; the other fields are kept."""
        legacy_setting.burnt_price = Decimal('0')
        legacy_setting.save()

        sheet = LegacySettingTier().lookup(date(2024, 3, 15))

        assert sheet.fresh == Decimal('1111')
        assert sheet.burnt == Decimal('1000')
        assert sheet.long_top == Decimal('1055')
        assert sheet.source == 'legacy_setting'

    def test_default_tier_always_answers(self):
        """Default tier returns the configured constants."""
        sheet = DefaultPriceTier().lookup(date(2024, 3, 15))

        assert sheet.fresh == Decimal('1200')
        assert sheet.burnt == Decimal('1000')
        assert sheet.long_top == Decimal('1100')
        assert sheet.source == 'default'

    @override_settings(DEFAULT_CANE_PRICES={'fresh': '1300', 'burnt': '1010', 'long_top': '1150'})
    def test_default_tier_reads_settings(self):
        """Default tier follows DEFAULT_CANE_PRICES."""
        sheet = DefaultPriceTier().lookup(date(2024, 3, 15))

        assert sheet.fresh == Decimal('1300')
        assert sheet.long_top == Decimal('1150')


# =============================================================================
# Price Resolution Tests
# =============================================================================

@pytest.mark.django_db
class TestResolvePrice:
    """Tests for resolve_price / resolve_price_sheet."""

    def test_before_mid_year_change(self, price_table):
        """Mid-March resolves to the January price."""
        assert resolve_price(cane_type=CaneType.FRESH, on_date=date(2024, 3, 15)) == Decimal('1000')

    def test_after_mid_year_change(self, price_table):
        """July resolves to the June price."""
        assert resolve_price(cane_type=CaneType.FRESH, on_date=date(2024, 7, 1)) == Decimal('1200')

    def test_before_first_entry_uses_default(self, price_table):
        """A date before every entry falls back to the defaults, never a future price."""
        assert resolve_price(cane_type=CaneType.FRESH, on_date=date(2023, 12, 1)) == Decimal('1200')
        assert resolve_price(cane_type=CaneType.BURNT, on_date=date(2023, 12, 1)) == Decimal('1000')

    def test_before_first_entry_uses_legacy_setting(self, price_table, legacy_setting):
        """The legacy setting answers before the defaults."""
        assert resolve_price(cane_type=CaneType.FRESH, on_date=date(2023, 12, 1)) == Decimal('1111')

    def test_zero_legacy_price_resolves_to_default(self, price_table, legacy_setting):
        """Before the table starts, a zero legacy field resolves to the configured default."""
        legacy_setting.fresh_price = Decimal('0')
        legacy_setting.save()

        assert resolve_price(cane_type=CaneType.FRESH, on_date=date(2023, 12, 1)) == Decimal('1200')
        assert resolve_price(cane_type=CaneType.BURNT, on_date=date(2023, 12, 1)) == Decimal('999')

    def test_table_wins_over_legacy_setting(self, price_table, legacy_setting):
        """An applicable table entry takes precedence over the legacy setting."""
        assert resolve_price(cane_type=CaneType.LONG_TOP, on_date=date(2024, 3, 15)) == Decimal('900')

    def test_each_cane_type(self, price_table):
        """Each cane type reads its own column."""
        on = date(2024, 7, 1)
        assert resolve_price(cane_type=CaneType.FRESH, on_date=on) == Decimal('1200')
        assert resolve_price(cane_type=CaneType.BURNT, on_date=on) == Decimal('950')
        assert resolve_price(cane_type=CaneType.LONG_TOP, on_date=on) == Decimal('1050')

    def test_accepts_plain_integer_type(self, price_table):
        """Cane type may be given as its integer code."""
        assert resolve_price(cane_type=2, on_date=date(2024, 3, 15)) == Decimal('800')

    def test_future_entry_never_selected(self, price_table):
        """An entry dated after the query date is ignored."""
        PriceEntry.objects.create(
            effective_date=date(2030, 1, 1),
            fresh_price=Decimal('9999'),
            burnt_price=Decimal('9999'),
            long_top_price=Decimal('9999'),
        )

        assert resolve_price(cane_type=CaneType.FRESH, on_date=date(2025, 1, 1)) == Decimal('1200')

    def test_custom_tier_chain(self, price_table, legacy_setting):
        """A chain without the table tier skips straight to the legacy row."""
        price = resolve_price(
            cane_type=CaneType.FRESH,
            on_date=date(2024, 7, 1),
            tiers=(LegacySettingTier(), DefaultPriceTier()),
        )

        assert price == Decimal('1111')

    def test_empty_chain_still_answers(self):
        """Resolution never fails, even with no tiers."""
        sheet = resolve_price_sheet(on_date=date(2024, 7, 1), tiers=())

        assert sheet.source == 'default'
        assert sheet.fresh == Decimal('1200')


# =============================================================================
# Price Table Management Tests
# =============================================================================

@pytest.mark.django_db
class TestUpsertPriceEntry:
    """Tests for upsert_price_entry."""

    def test_creates_entry(self, admin_user):
        """Admin can add prices for a new date."""
        entry, created = upsert_price_entry(
            actor=admin_user,
            effective_date=date(2024, 1, 1),
            fresh_price=Decimal('1000'),
            burnt_price=Decimal('800'),
            long_top_price=Decimal('900'),
        )

        assert created is True
        assert entry.fresh_price == Decimal('1000')
        assert ActivityLog.objects.filter(action=ActivityAction.ADD_PRICE_CONFIG).count() == 1

    def test_overwrites_same_date(self, admin_user, price_table):
        """Writing an existing date replaces the entry in place."""
        original_id = price_table[0].id

        entry, created = upsert_price_entry(
            actor=admin_user,
            effective_date=date(2024, 1, 1),
            fresh_price=Decimal('1050'),
            burnt_price=Decimal('850'),
            long_top_price=Decimal('950'),
        )

        assert created is False
        assert entry.id == original_id
        assert PriceEntry.objects.filter(effective_date=date(2024, 1, 1)).count() == 1
        assert PriceEntry.objects.count() == 2
        assert resolve_price(cane_type=CaneType.FRESH, on_date=date(2024, 3, 15)) == Decimal('1050')
        assert ActivityLog.objects.filter(action=ActivityAction.UPDATE_PRICE_CONFIG).count() == 1

    def test_negative_price_rejected(self, admin_user):
        """Negative prices are invalid and nothing is written."""
        with pytest.raises(InvalidPriceError):
            upsert_price_entry(
                actor=admin_user,
                effective_date=date(2024, 1, 1),
                fresh_price=Decimal('-1'),
                burnt_price=Decimal('800'),
                long_top_price=Decimal('900'),
            )

        assert PriceEntry.objects.count() == 0

    def test_list_sorted_newest_first(self, admin_user, price_table):
        """Entries are listed newest effective date first."""
        entries = list(list_price_entries(actor=admin_user))

        assert [e.effective_date for e in entries] == [date(2024, 6, 1), date(2024, 1, 1)]


@pytest.mark.django_db
class TestDeletePriceEntry:
    """Tests for delete_price_entry."""

    def test_root_deletes(self, root_user, price_table):
        """Root can delete an entry; resolution falls back to the earlier one."""
        delete_price_entry(actor=root_user, entry_id=price_table[1].id)

        assert PriceEntry.objects.count() == 1
        assert resolve_price(cane_type=CaneType.FRESH, on_date=date(2024, 7, 1)) == Decimal('1000')
        assert ActivityLog.objects.filter(action=ActivityAction.DELETE_PRICE_CONFIG).exists()

    def test_admin_denied(self, admin_user, price_table):
        """Admin cannot delete price entries."""
        with pytest.raises(AccessDeniedError):
            delete_price_entry(actor=admin_user, entry_id=price_table[0].id)

        assert PriceEntry.objects.count() == 2

    def test_unknown_entry(self, root_user):
        """Deleting an unknown entry raises PriceEntryNotFoundError."""
        with pytest.raises(PriceEntryNotFoundError):
            delete_price_entry(actor=root_user, entry_id=uuid4())


# =============================================================================
# Settings Tests
# =============================================================================

@pytest.mark.django_db
class TestSettings:
    """Tests for get_settings / update_settings."""

    def test_get_settings_defaults(self, admin_user):
        """With nothing stored the configured defaults are reported."""
        result = get_settings(actor=admin_user)

        assert result['quotas'] == []
        assert result['effective_date'] is None
        assert result['fresh_price'] == Decimal('1200')

    def test_get_settings_latest_entry(self, admin_user, price_table, legacy_setting):
        """Prices come from the latest table entry, quotas from the setting row."""
        result = get_settings(actor=admin_user)

        assert result['quotas'] == ['Q-01', 'Q-02']
        assert result['effective_date'] == date(2024, 6, 1)
        assert result['fresh_price'] == Decimal('1200')

    def test_update_quotas_creates_setting_row(self, admin_user):
        """Updating quotas creates the setting row if missing."""
        result = update_settings(actor=admin_user, quotas=['A-1'])

        assert result['quotas'] == ['A-1']
        assert PriceSetting.objects.count() == 1
        assert PriceEntry.objects.count() == 0

    def test_update_price_fills_missing_from_latest(self, admin_user, price_table):
        """A partial price update copies the other categories from the latest entry."""
        update_settings(actor=admin_user, fresh_price=Decimal('1300'))

        entry = PriceEntry.objects.get(effective_date=timezone.localdate())
        assert entry.fresh_price == Decimal('1300')
        assert entry.burnt_price == Decimal('950')
        assert entry.long_top_price == Decimal('1050')
        assert ActivityLog.objects.filter(action=ActivityAction.UPDATE_SETTINGS).exists()

    def test_update_price_without_table_fills_zero(self, admin_user):
        """Without a previous entry, omitted categories become 0."""
        update_settings(actor=admin_user, burnt_price=Decimal('900'))

        entry = PriceEntry.objects.get(effective_date=timezone.localdate())
        assert entry.burnt_price == Decimal('900')
        assert entry.fresh_price == Decimal('0')
        assert entry.long_top_price == Decimal('0')

    def test_update_price_twice_same_day_overwrites(self, admin_user):
        """Two updates on one day keep a single entry for today."""
        update_settings(actor=admin_user, fresh_price=Decimal('1300'))
        update_settings(actor=admin_user, fresh_price=Decimal('1350'))

        assert PriceEntry.objects.count() == 1
        assert PriceEntry.objects.get().fresh_price == Decimal('1350')


# =============================================================================
# Legacy Migration Tests
# =============================================================================

@pytest.mark.django_db
class TestMigrateLegacyPrices:
    """Tests for migrate_legacy_prices."""

    def test_migrates_when_table_empty(self, legacy_setting):
        """The legacy prices become an entry effective on the legacy date."""
        entry = migrate_legacy_prices()

        assert entry.effective_date == date(2020, 1, 1)
        assert entry.fresh_price == Decimal('1111')
        assert PriceEntry.objects.count() == 1

    def test_zero_legacy_price_migrates_as_default(self, legacy_setting):
        """The migrated entry carries the same prices the resolver would use."""
        legacy_setting.long_top_price = Decimal('0')
        legacy_setting.save()

        entry = migrate_legacy_prices()

        assert entry.long_top_price == Decimal('1100')
        assert entry.fresh_price == Decimal('1111')

    def test_idempotent(self, legacy_setting):
        """A second run does nothing."""
        migrate_legacy_prices()

        assert migrate_legacy_prices() is None
        assert PriceEntry.objects.count() == 1

    def test_skipped_when_table_populated(self, legacy_setting, price_table):
        """Nothing is migrated once the table has entries."""
        assert migrate_legacy_prices() is None
        assert PriceEntry.objects.count() == 2

    def test_skipped_without_legacy_setting(self):
        """Nothing is migrated without a legacy row."""
        assert migrate_legacy_prices() is None
        assert PriceEntry.objects.count() == 0
