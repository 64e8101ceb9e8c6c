"""
Serializers for analytics app.

This module contains:
1. Input serializers - Query parameter validation
2. Response serializers - API documentation and output formatting

Input Serializers:
    PeriodQuerySerializer - Validates period and date range parameters
    TopFarmersQuerySerializer - Period parameters plus a result limit

Response Serializers:
    BillSummarySerializer - Totals with per-type breakdown
    TimeseriesPointSerializer - One month of chart data
    TopFarmerSerializer - One ranked owner
"""

from rest_framework import serializers
from datetime import datetime, timedelta


# =============================================================================
# Input Serializers (Query Parameter Validation)
# =============================================================================

class PeriodQuerySerializer(serializers.Serializer):
    """
    Validate period and date range query parameters.

    Query Parameters:
        period (str): Month period in YYYY-MM format (e.g., '2024-03')
        start_date (date): Start of date range
        end_date (date): End of date range

    Note:
        If 'period' is provided, it takes precedence and is converted
        to start_date and end_date for the full month.
    """

    period = serializers.RegexField(
        regex=r'^\d{4}-(0[1-9]|1[0-2])$',
        required=False,
        allow_blank=True,
        help_text='Month period in YYYY-MM format'
    )
    start_date = serializers.DateField(required=False)
    end_date = serializers.DateField(required=False)

    def validate(self, attrs):
        """Parse period into date range if provided."""
        period = attrs.get('period')

        if period:
            year, month = (int(part) for part in period.split('-'))
            attrs['start_date'] = datetime(year, month, 1).date()
            # Last day of month
            if month == 12:
                attrs['end_date'] = datetime(year + 1, 1, 1).date() - timedelta(days=1)
            else:
                attrs['end_date'] = datetime(year, month + 1, 1).date() - timedelta(days=1)

        start = attrs.get('start_date')
        end = attrs.get('end_date')
        if start and end and start > end:
            raise serializers.ValidationError({
                'start_date': 'Start date must be before end date'
            })

        return attrs


class TopFarmersQuerySerializer(PeriodQuerySerializer):
    """Period parameters plus ``limit`` (1-100, default 10)."""

    limit = serializers.IntegerField(
        min_value=1,
        max_value=100,
        required=False,
        default=10,
        help_text='Number of results (1-100)'
    )


# =============================================================================
# Response Serializers
# =============================================================================

class CaneTypeBreakdownSerializer(serializers.Serializer):
    sugarcane_type = serializers.IntegerField()
    label = serializers.CharField()
    bill_count = serializers.IntegerField()
    total_weight = serializers.DecimalField(max_digits=20, decimal_places=3)


class BillSummarySerializer(serializers.Serializer):
    """Totals over bills in the requested period."""

    bill_count = serializers.IntegerField()
    total_weight = serializers.DecimalField(max_digits=20, decimal_places=3)
    total_fuel_cost = serializers.DecimalField(max_digits=20, decimal_places=2)
    total_amount = serializers.DecimalField(max_digits=28, decimal_places=5)
    net_amount = serializers.DecimalField(max_digits=28, decimal_places=5)
    fresh_count = serializers.IntegerField()
    burnt_count = serializers.IntegerField()
    long_top_count = serializers.IntegerField()
    by_type = CaneTypeBreakdownSerializer(many=True)
    period_start = serializers.DateField(allow_null=True)
    period_end = serializers.DateField(allow_null=True)


class TimeseriesPointSerializer(serializers.Serializer):
    period = serializers.CharField(help_text='YYYY-MM')
    bill_count = serializers.IntegerField()
    total_weight = serializers.DecimalField(max_digits=20, decimal_places=3)
    net_amount = serializers.DecimalField(max_digits=28, decimal_places=5)


class TopFarmerSerializer(serializers.Serializer):
    owner_name = serializers.CharField()
    bill_count = serializers.IntegerField()
    total_weight = serializers.DecimalField(max_digits=20, decimal_places=3)
    net_amount = serializers.DecimalField(max_digits=28, decimal_places=5)


class ErrorSerializer(serializers.Serializer):
    """Standard error response serializer."""
    error = serializers.CharField()
