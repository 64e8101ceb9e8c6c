from rest_framework import status, serializers as drf_serializers
from rest_framework.decorators import api_view, permission_classes
from rest_framework.pagination import PageNumberPagination
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from apps.accounts.access import Action
from apps.accounts.permissions import requires

from .serializers import ActivityFilterSerializer, ActivityLogSerializer, PruneInputSerializer
from .services import list_activity, prune_activity


class PruneResponseSerializer(drf_serializers.Serializer):
    deleted_count = drf_serializers.IntegerField()


class ActivityPagination(PageNumberPagination):
    """Pagination for the audit trail."""
    page_size = 50
    page_size_query_param = 'page_size'
    max_page_size = 500


@extend_schema(
    parameters=[ActivityFilterSerializer],
    responses={200: ActivityLogSerializer(many=True)},
    description="List audit trail entries, newest first (root only).",
    tags=['activity'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, requires(Action.LOG_READ)])
def activity_list(request):
    """List activity logs - thin HTTP handler."""
    filter_serializer = ActivityFilterSerializer(data=request.query_params)
    filter_serializer.is_valid(raise_exception=True)
    params = filter_serializer.validated_data

    logs = list_activity(
        actor=request.user,
        search=params.get('search', ''),
        date_from=params.get('date_from'),
        date_to=params.get('date_to'),
    )

    paginator = ActivityPagination()
    page = paginator.paginate_queryset(logs, request)
    serializer = ActivityLogSerializer(page, many=True)
    return paginator.get_paginated_response(serializer.data)


@extend_schema(
    parameters=[PruneInputSerializer],
    responses={200: PruneResponseSerializer},
    description="Delete audit entries older than the retention window (root only).",
    tags=['activity'],
)
@api_view(['DELETE'])
@permission_classes([IsAuthenticated, requires(Action.LOG_PRUNE)])
def activity_prune(request):
    """Prune old activity logs."""
    input_serializer = PruneInputSerializer(data=request.query_params)
    input_serializer.is_valid(raise_exception=True)

    deleted = prune_activity(
        actor=request.user,
        older_than_days=input_serializer.validated_data.get('older_than_days'),
    )

    return Response({'deleted_count': deleted}, status=status.HTTP_200_OK)
