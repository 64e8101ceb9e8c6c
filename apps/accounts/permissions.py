"""
DRF permission classes backed by the access control matrix.

Usage:
    class BillViewSet(viewsets.ModelViewSet):
        permission_classes = [IsAuthenticated, HasViewAction]
        required_actions = {
            'list': Action.BILL_READ,
            'create': Action.BILL_CREATE,
            ...
        }

    @api_view(['GET'])
    @permission_classes([IsAuthenticated, requires(Action.STATS_READ)])
    def summary(request):
        ...
"""

from rest_framework.permissions import BasePermission

from .access import Action, role_allows

FORBIDDEN = 'Forbidden'


class HasViewAction(BasePermission):
    """
    Permission resolving the required matrix action from ``view.required_actions``.

    A view action missing from the mapping is denied.
    """

    message = FORBIDDEN

    def has_permission(self, request, view):
        required = getattr(view, 'required_actions', {}).get(view.action)
        if required is None:
            return False
        return role_allows(request.user, required)


def requires(action: Action):
    """Build a permission class that demands a single matrix action."""

    class RequiresAction(BasePermission):
        message = FORBIDDEN

        def has_permission(self, request, view):
            return role_allows(request.user, action)

    RequiresAction.__name__ = f'Requires[{action.value}]'
    return RequiresAction
