"""Bill search and filtering service."""

from datetime import date
from typing import Optional

from django.db.models import Q, QuerySet

from ..models import Bill


def filter_bills(
    *,
    search: Optional[str] = None,
    date_from: Optional[date] = None,
    date_to: Optional[date] = None,
    sugarcane_type: Optional[int] = None
) -> QuerySet[Bill]:
    """
    Search and filter bills.

    Shared by the authenticated listing, the export and the share-link
    listing, so access checks belong to the callers.

    Args:
        search: Case-insensitive match on bill number, owner name or quota number
        date_from: Inclusive lower bound on the bill date
        date_to: Inclusive upper bound on the bill date
        sugarcane_type: CaneType value

    Returns:
        Bills ordered by date, then creation time, newest first
    """
    queryset = Bill.objects.all()

    if search:
        queryset = queryset.filter(
            Q(bill_number__icontains=search) |
            Q(owner_name__icontains=search) |
            Q(quota_number__icontains=search)
        )

    if date_from:
        queryset = queryset.filter(date__gte=date_from)

    if date_to:
        queryset = queryset.filter(date__lte=date_to)

    if sugarcane_type is not None:
        queryset = queryset.filter(sugarcane_type=sugarcane_type)

    return queryset.order_by('-date', '-created_at')
