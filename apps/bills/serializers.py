from decimal import Decimal

from rest_framework import serializers

from apps.pricing.models import CaneType

from .models import Bill


# =============================================================================
# Input Serializers
# =============================================================================

class BillFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for bill listings.

    Query Parameters:
        search (str): Match on bill number, owner name or quota number
        date_from (date): Bills on or after this date
        date_to (date): Bills on or before this date
        sugarcane_type (int): 1 fresh, 2 burnt, 3 long top
    """

    search = serializers.CharField(required=False, allow_blank=True, max_length=200)
    date_from = serializers.DateField(required=False)
    date_to = serializers.DateField(required=False)
    sugarcane_type = serializers.ChoiceField(choices=CaneType.choices, required=False)

    def validate(self, attrs):
        """Validate date range."""
        date_from = attrs.get('date_from')
        date_to = attrs.get('date_to')

        if date_from and date_to and date_from > date_to:
            raise serializers.ValidationError({
                'date_to': 'End date must be after start date'
            })

        return attrs


class BillInputSerializer(serializers.Serializer):
    """
    Bill create / update input.

    ``manual_price`` bypasses the price table when given.
    """

    bill_number = serializers.CharField(max_length=50)
    owner_name = serializers.CharField(max_length=200)
    quota_number = serializers.CharField(max_length=50, required=False, allow_blank=True, allow_null=True)
    license_plate = serializers.CharField(max_length=50, required=False, allow_blank=True, allow_null=True)
    date = serializers.DateField()
    sugarcane_type = serializers.ChoiceField(choices=CaneType.choices)
    weight = serializers.DecimalField(max_digits=12, decimal_places=3, min_value=Decimal('0'))
    fuel_cost = serializers.DecimalField(
        max_digits=12,
        decimal_places=2,
        min_value=Decimal('0'),
        required=False,
        allow_null=True
    )
    manual_price = serializers.DecimalField(
        max_digits=12,
        decimal_places=2,
        min_value=Decimal('0'),
        required=False,
        allow_null=True
    )

    def validate_bill_number(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError('Bill number is required')
        if '/' in value:
            raise serializers.ValidationError('Bill number cannot contain "/"')
        return value

    def validate_owner_name(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError('Owner name is required')
        return value


# =============================================================================
# Output Serializers
# =============================================================================

class BillSerializer(serializers.ModelSerializer):
    """Stored bill with its frozen price and derived amounts."""

    sugarcane_type_display = serializers.CharField(source='get_sugarcane_type_display', read_only=True)
    created_by = serializers.SlugRelatedField(slug_field='username', read_only=True)

    class Meta:
        model = Bill
        fields = [
            'id',
            'bill_number',
            'owner_name',
            'quota_number',
            'license_plate',
            'date',
            'sugarcane_type',
            'sugarcane_type_display',
            'weight',
            'fuel_cost',
            'price_per_unit',
            'total_amount',
            'net_amount',
            'created_by',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class DuplicateCheckSerializer(serializers.Serializer):
    exists = serializers.BooleanField()
