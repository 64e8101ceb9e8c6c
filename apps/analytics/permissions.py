"""
Permission classes for analytics app.

Permission Classes:
    CanReadStatistics - Requires the statistics-read action (admin and root)

Usage:
    from apps.analytics.permissions import CanReadStatistics

    @api_view(['GET'])
    @permission_classes([IsAuthenticated, CanReadStatistics])
    def summary(request):
        ...
"""

from rest_framework.permissions import BasePermission

from apps.accounts.access import Action, role_allows
from apps.accounts.permissions import FORBIDDEN


class CanReadStatistics(BasePermission):
    """
    Allow statistics access to roles granted the stats-read action.

    Anonymous users and unknown roles are denied with a plain "Forbidden".
    """

    message = FORBIDDEN

    def has_permission(self, request, view):
        return role_allows(request.user, Action.STATS_READ)
