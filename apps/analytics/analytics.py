"""
Analytics Module
=================

Read-only aggregate queries over recorded bills, powering the statistics
cards and charts.

Classes:
    BillStatistics: Static methods for bill statistics.

Key Features:
    - Totals (weight, fuel cost, amounts) with per-cane-type breakdown
    - Monthly timeseries for charts
    - Top farmers by delivered weight

Example:
    Getting statistics for one quarter::

        from apps.analytics.analytics import BillStatistics

        stats = BillStatistics.bill_summary(
            start_date=date(2024, 1, 1),
            end_date=date(2024, 3, 31),
        )
        print(f"{stats['total_weight']} t across {stats['bill_count']} bills")

Note:
    This module never modifies data. All methods are static and return
    plain dictionaries or lists suitable for serialization.
"""

from decimal import Decimal

from django.db.models import Sum, Count
from django.db.models.functions import TruncMonth, Coalesce

from apps.bills.models import Bill
from apps.pricing.models import CaneType

from .exceptions import InvalidDateRangeError

ZERO = Decimal('0')

# Key used for each cane type in the flat count fields
TYPE_KEYS = {
    CaneType.FRESH: 'fresh',
    CaneType.BURNT: 'burnt',
    CaneType.LONG_TOP: 'long_top',
}


class BillStatistics:
    """
    Aggregate queries over bills.

    Methods:
        bill_summary: Totals and per-type breakdown.
        monthly_timeseries: Per-month weight, amounts and bill counts.
        top_farmers: Owners ranked by delivered weight.
    """

    @staticmethod
    def _bills(start_date=None, end_date=None):
        if start_date and end_date and start_date > end_date:
            raise InvalidDateRangeError("Start date must be before end date")

        bills = Bill.objects.all()
        if start_date:
            bills = bills.filter(date__gte=start_date)
        if end_date:
            bills = bills.filter(date__lte=end_date)
        return bills

    @staticmethod
    def bill_summary(start_date=None, end_date=None):
        """
        Calculate totals over bills dated within the period.

        Args:
            start_date (date, optional): Inclusive start. None means no bound.
            end_date (date, optional): Inclusive end. None means no bound.

        Returns:
            dict: A dictionary containing:
                - bill_count (int)
                - total_weight (Decimal): Tons
                - total_fuel_cost (Decimal)
                - total_amount (Decimal)
                - net_amount (Decimal)
                - fresh_count, burnt_count, long_top_count (int)
                - by_type (list[dict]): sugarcane_type, label, bill_count,
                  total_weight for every cane type, zeros included
                - period_start, period_end: The parameters as given

        Raises:
            InvalidDateRangeError: If start_date is after end_date
        """
        bills = BillStatistics._bills(start_date, end_date)

        totals = bills.aggregate(
            bill_count=Count('id'),
            total_weight=Coalesce(Sum('weight'), ZERO),
            total_fuel_cost=Coalesce(Sum('fuel_cost'), ZERO),
            total_amount=Coalesce(Sum('total_amount'), ZERO),
            net_amount=Coalesce(Sum('net_amount'), ZERO),
        )

        per_type = {
            row['sugarcane_type']: row
            for row in bills.values('sugarcane_type').annotate(
                bill_count=Count('id'),
                total_weight=Coalesce(Sum('weight'), ZERO),
            )
        }

        by_type = []
        for cane_type in CaneType:
            row = per_type.get(cane_type.value, {})
            count = row.get('bill_count', 0)
            totals[f'{TYPE_KEYS[cane_type]}_count'] = count
            by_type.append({
                'sugarcane_type': cane_type.value,
                'label': cane_type.label,
                'bill_count': count,
                'total_weight': row.get('total_weight', ZERO),
            })

        totals['by_type'] = by_type
        totals['period_start'] = start_date
        totals['period_end'] = end_date
        return totals

    @staticmethod
    def monthly_timeseries(start_date=None, end_date=None):
        """
        Group bills by calendar month for charts.

        Returns:
            list[dict]: Oldest month first, each containing:
                - period (str): 'YYYY-MM'
                - bill_count (int)
                - total_weight (Decimal)
                - net_amount (Decimal)

        Raises:
            InvalidDateRangeError: If start_date is after end_date

        Note:
            Months without bills are omitted.
        """
        bills = BillStatistics._bills(start_date, end_date)

        rows = (
            bills
            .annotate(month=TruncMonth('date'))
            .values('month')
            .annotate(
                bill_count=Count('id'),
                total_weight=Coalesce(Sum('weight'), ZERO),
                net_amount=Coalesce(Sum('net_amount'), ZERO),
            )
            .order_by('month')
        )

        return [
            {
                'period': row['month'].strftime('%Y-%m'),
                'bill_count': row['bill_count'],
                'total_weight': row['total_weight'],
                'net_amount': row['net_amount'],
            }
            for row in rows
        ]

    @staticmethod
    def top_farmers(limit=10, start_date=None, end_date=None):
        """
        Rank bill owners by total delivered weight.

        Owners are grouped by exact ``owner_name``, the same soft link the
        farmer directory uses.

        Args:
            limit (int): Number of owners to return.
            start_date (date, optional): Inclusive start.
            end_date (date, optional): Inclusive end.

        Returns:
            list[dict]: owner_name, bill_count, total_weight, net_amount,
            heaviest first; ties broken by name.
        """
        bills = BillStatistics._bills(start_date, end_date)

        rows = (
            bills
            .values('owner_name')
            .annotate(
                bill_count=Count('id'),
                total_weight=Coalesce(Sum('weight'), ZERO),
                net_amount=Coalesce(Sum('net_amount'), ZERO),
            )
            .order_by('-total_weight', 'owner_name')[:limit]
        )

        return [dict(row) for row in rows]
