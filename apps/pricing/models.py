from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models
import uuid


class CaneType(models.IntegerChoices):
    FRESH = 1, 'Fresh'
    BURNT = 2, 'Burnt'
    LONG_TOP = 3, 'Long top'


class PriceEntry(models.Model):
    """
    Per-unit prices effective from ``effective_date`` until superseded.

    At most one entry exists per date; writes for an existing date
    overwrite it (see services.price_management.upsert_price_entry).
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    effective_date = models.DateField(unique=True)

    fresh_price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    burnt_price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    long_top_price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))]
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'price_entries'
        ordering = ['-effective_date']

    def __str__(self):
        return f"Prices from {self.effective_date}"


class PriceSetting(models.Model):
    """
    Legacy single-row settings: flat prices plus the quota number list.

    The prices here predate the effective-date table and only serve as the
    second resolution tier.
    """

    fresh_price = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('1200'))
    burnt_price = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('1000'))
    long_top_price = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('1100'))
    quotas = models.JSONField(default=list, blank=True)

    class Meta:
        db_table = 'price_settings'

    def __str__(self):
        return "Price settings"

    @classmethod
    def load(cls):
        """Return the settings row, or None if it was never created."""
        return cls.objects.order_by('pk').first()
