from decimal import Decimal

from rest_framework import serializers

from .models import CaneType, PriceEntry


def _price_field(**kwargs):
    return serializers.DecimalField(
        max_digits=12,
        decimal_places=2,
        min_value=Decimal('0'),
        **kwargs
    )


# =============================================================================
# Input Serializers
# =============================================================================

class PriceEntryInputSerializer(serializers.Serializer):
    """Prices effective from a date; an existing entry for the date is overwritten."""

    effective_date = serializers.DateField()
    fresh_price = _price_field()
    burnt_price = _price_field()
    long_top_price = _price_field()


class SettingsUpdateSerializer(serializers.Serializer):
    """
    Settings update.

    Fields:
        quotas (list[str]): Replacement quota number list
        fresh_price, burnt_price, long_top_price: Prices effective today;
            omitted categories keep the latest entry's value
    """

    quotas = serializers.ListField(
        child=serializers.CharField(max_length=50),
        required=False
    )
    fresh_price = _price_field(required=False)
    burnt_price = _price_field(required=False)
    long_top_price = _price_field(required=False)


class PriceCheckQuerySerializer(serializers.Serializer):
    """Query parameters for the price check."""

    date = serializers.DateField()
    sugarcane_type = serializers.ChoiceField(choices=CaneType.choices, required=False)


# =============================================================================
# Output Serializers
# =============================================================================

class PriceEntrySerializer(serializers.ModelSerializer):
    class Meta:
        model = PriceEntry
        fields = [
            'id',
            'effective_date',
            'fresh_price',
            'burnt_price',
            'long_top_price',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class SettingsSerializer(serializers.Serializer):
    quotas = serializers.ListField(child=serializers.CharField())
    effective_date = serializers.DateField(allow_null=True)
    fresh_price = serializers.DecimalField(max_digits=12, decimal_places=2)
    burnt_price = serializers.DecimalField(max_digits=12, decimal_places=2)
    long_top_price = serializers.DecimalField(max_digits=12, decimal_places=2)


class PriceCheckSerializer(serializers.Serializer):
    """Resolved prices for a date and the tier that supplied them."""

    date = serializers.DateField()
    source = serializers.CharField()
    effective_date = serializers.DateField(allow_null=True)
    fresh_price = serializers.DecimalField(max_digits=12, decimal_places=2)
    burnt_price = serializers.DecimalField(max_digits=12, decimal_places=2)
    long_top_price = serializers.DecimalField(max_digits=12, decimal_places=2)
    price_per_unit = serializers.DecimalField(max_digits=12, decimal_places=2, required=False)
