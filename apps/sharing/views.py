from rest_framework import status
from rest_framework.decorators import api_view, permission_classes, authentication_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from apps.accounts.access import Action
from apps.accounts.permissions import requires
from apps.bills.serializers import BillFilterSerializer, BillSerializer
from apps.bills.views import BillPagination, filtered_bills

from .serializers import (
    ShareLinkCreateSerializer,
    ShareLinkSerializer,
    ShareLinkStatusSerializer,
)
from .services import (
    issue_share_link,
    validate_share_link,
    ShareLinkNotFoundError,
    ShareLinkExpiredError,
    InvalidShareDurationError,
)


@extend_schema(
    request=ShareLinkCreateSerializer,
    responses={201: ShareLinkSerializer},
    description="Issue a read-only share link for the bill listing.",
    tags=['sharing'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated, requires(Action.SHARE_CREATE)])
def share_create(request):
    """Create a share link."""
    serializer = ShareLinkCreateSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        link = issue_share_link(
            actor=request.user,
            duration_hours=serializer.validated_data['duration'],
        )
    except InvalidShareDurationError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response(ShareLinkSerializer(link).data, status=status.HTTP_201_CREATED)


def _check_token(token):
    """Return (link, None) or (None, error response)."""
    try:
        return validate_share_link(token=token), None
    except ShareLinkNotFoundError as e:
        return None, Response({'valid': False, 'message': str(e)}, status=status.HTTP_404_NOT_FOUND)
    except ShareLinkExpiredError as e:
        return None, Response({'valid': False, 'message': str(e)}, status=status.HTTP_400_BAD_REQUEST)


@extend_schema(
    responses={200: ShareLinkStatusSerializer, 400: ShareLinkStatusSerializer, 404: ShareLinkStatusSerializer},
    description="Check whether a share token is valid.",
    tags=['sharing'],
)
@api_view(['GET'])
@authentication_classes([])
@permission_classes([AllowAny])
def share_validate(request, token):
    """Validate a share token - public endpoint."""
    link, error = _check_token(token)
    if error is not None:
        return error

    return Response({'valid': True, 'expires_at': link.expires_at})


@extend_schema(
    parameters=[BillFilterSerializer],
    responses={200: BillSerializer(many=True)},
    description="Read-only bill listing for a valid share token.",
    tags=['sharing'],
)
@api_view(['GET'])
@authentication_classes([])
@permission_classes([AllowAny])
def shared_bills(request, token):
    """Bill listing behind a share link. Only GET is routed."""
    _, error = _check_token(token)
    if error is not None:
        return error

    bills = filtered_bills(request)

    paginator = BillPagination()
    page = paginator.paginate_queryset(bills, request)
    return paginator.get_paginated_response(BillSerializer(page, many=True).data)
