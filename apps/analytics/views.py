from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework import status
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes
from .analytics import BillStatistics
from .serializers import (
    # Input serializers
    PeriodQuerySerializer,
    TopFarmersQuerySerializer,
    # Response serializers
    BillSummarySerializer,
    TimeseriesPointSerializer,
    TopFarmerSerializer,
    ErrorSerializer,
)
from .permissions import CanReadStatistics
from .exceptions import AnalyticsServiceError


PERIOD_PARAMETERS = [
    OpenApiParameter('period', OpenApiTypes.STR, description='Month period (YYYY-MM)'),
    OpenApiParameter('start_date', OpenApiTypes.DATE, description='Start date (YYYY-MM-DD)'),
    OpenApiParameter('end_date', OpenApiTypes.DATE, description='End date (YYYY-MM-DD)'),
]


@extend_schema(
    parameters=PERIOD_PARAMETERS,
    responses={
        200: BillSummarySerializer,
        400: ErrorSerializer,
    },
    description="Bill totals and per-cane-type breakdown for a period.",
    tags=['analytics'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, CanReadStatistics])
def summary(request):
    """Bill statistics summary - thin HTTP handler."""
    query_serializer = PeriodQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)
    params = query_serializer.validated_data

    try:
        data = BillStatistics.bill_summary(
            start_date=params.get('start_date'),
            end_date=params.get('end_date'),
        )
    except AnalyticsServiceError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response(BillSummarySerializer(data).data)


@extend_schema(
    parameters=PERIOD_PARAMETERS,
    responses={
        200: TimeseriesPointSerializer(many=True),
        400: ErrorSerializer,
    },
    description="Per-month weight, net amount and bill count for charts.",
    tags=['analytics'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, CanReadStatistics])
def timeseries(request):
    """Monthly bill timeseries - thin HTTP handler."""
    query_serializer = PeriodQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)
    params = query_serializer.validated_data

    try:
        data = BillStatistics.monthly_timeseries(
            start_date=params.get('start_date'),
            end_date=params.get('end_date'),
        )
    except AnalyticsServiceError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response(TimeseriesPointSerializer(data, many=True).data)


@extend_schema(
    parameters=PERIOD_PARAMETERS + [
        OpenApiParameter('limit', OpenApiTypes.INT, description='Number of results (1-100)'),
    ],
    responses={
        200: TopFarmerSerializer(many=True),
        400: ErrorSerializer,
    },
    description="Bill owners ranked by delivered weight.",
    tags=['analytics'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, CanReadStatistics])
def top_farmers(request):
    """Top farmers by weight - thin HTTP handler."""
    query_serializer = TopFarmersQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)
    params = query_serializer.validated_data

    try:
        data = BillStatistics.top_farmers(
            limit=params['limit'],
            start_date=params.get('start_date'),
            end_date=params.get('end_date'),
        )
    except AnalyticsServiceError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response(TopFarmerSerializer(data, many=True).data)
