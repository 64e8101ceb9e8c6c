from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models
import uuid

from apps.pricing.models import CaneType


class Bill(models.Model):
    """
    One recorded sugarcane purchase.

    ``price_per_unit`` is frozen at write time, either resolved from the
    price table for (date, sugarcane_type) or supplied manually. The
    derived amounts are stored exactly:

        total_amount = weight * price_per_unit
        net_amount = total_amount - fuel_cost
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    bill_number = models.CharField(max_length=50, unique=True)

    owner_name = models.CharField(max_length=200, db_index=True)
    quota_number = models.CharField(max_length=50, blank=True)
    license_plate = models.CharField(max_length=50, blank=True)

    date = models.DateField(db_index=True)
    sugarcane_type = models.PositiveSmallIntegerField(choices=CaneType.choices)

    # Weight in tons
    weight = models.DecimalField(
        max_digits=12,
        decimal_places=3,
        validators=[MinValueValidator(Decimal('0'))]
    )
    fuel_cost = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal('0'),
        validators=[MinValueValidator(Decimal('0'))]
    )
    price_per_unit = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0'))]
    )

    # weight (3 dp) * price (2 dp) needs 5 dp to stay exact
    total_amount = models.DecimalField(max_digits=20, decimal_places=5)
    net_amount = models.DecimalField(max_digits=20, decimal_places=5)

    created_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='bills'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'bills'
        ordering = ['-date', '-created_at']
        indexes = [
            models.Index(fields=['sugarcane_type', 'date'], name='bills_type_date_idx'),
        ]

    def __str__(self):
        return f"{self.bill_number} - {self.owner_name}"

    def compute_totals(self):
        """Recompute the derived amounts from weight, price and fuel cost."""
        fuel_cost = self.fuel_cost if self.fuel_cost is not None else Decimal('0')
        self.total_amount = Decimal(self.weight) * Decimal(self.price_per_unit)
        self.net_amount = self.total_amount - Decimal(fuel_cost)
