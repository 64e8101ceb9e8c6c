from django.http import HttpResponse
from django.utils import timezone
from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.pagination import PageNumberPagination
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiResponse

from apps.accounts.access import Action
from apps.accounts.permissions import HasViewAction

from .serializers import (
    BillFilterSerializer,
    BillInputSerializer,
    BillSerializer,
    DuplicateCheckSerializer,
)
from .services import (
    bill_number_exists,
    create_bill,
    get_bill,
    update_bill,
    delete_bill,
    filter_bills,
    export_bills_xlsx,
    EXPORT_CONTENT_TYPE,
    BillNotFoundError,
    DuplicateBillNumberError,
    InvalidBillDataError,
)


class BillPagination(PageNumberPagination):
    """Pagination for bill listings."""
    page_size = 50
    page_size_query_param = 'page_size'
    max_page_size = 500


def filtered_bills(request):
    """Validate listing query parameters and return the matching bills."""
    filter_serializer = BillFilterSerializer(data=request.query_params)
    filter_serializer.is_valid(raise_exception=True)
    return filter_bills(**filter_serializer.validated_data)


class BillViewSet(viewsets.ViewSet):
    """
    Sugarcane purchase bills.

    list / retrieve / create / check_duplicate / export: admin and root
    update / partial_update / destroy: root only
    """

    permission_classes = [IsAuthenticated, HasViewAction]
    lookup_value_regex = '[0-9a-fA-F-]{36}'
    required_actions = {
        'list': Action.BILL_READ,
        'retrieve': Action.BILL_READ,
        'create': Action.BILL_CREATE,
        'update': Action.BILL_UPDATE,
        'partial_update': Action.BILL_UPDATE,
        'destroy': Action.BILL_DELETE,
        'check_duplicate': Action.BILL_READ,
        'export': Action.BILL_EXPORT,
    }

    @extend_schema(
        parameters=[BillFilterSerializer],
        responses={200: BillSerializer(many=True)},
        tags=['bills'],
    )
    def list(self, request):
        bills = filtered_bills(request)

        paginator = BillPagination()
        page = paginator.paginate_queryset(bills, request, view=self)
        return paginator.get_paginated_response(BillSerializer(page, many=True).data)

    @extend_schema(responses={200: BillSerializer}, tags=['bills'])
    def retrieve(self, request, pk=None):
        try:
            bill = get_bill(actor=request.user, bill_id=pk)
        except BillNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        return Response(BillSerializer(bill).data)

    @extend_schema(
        request=BillInputSerializer,
        responses={
            201: BillSerializer,
            409: OpenApiResponse(description='Bill number already exists'),
        },
        tags=['bills'],
    )
    def create(self, request):
        serializer = BillInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            bill = create_bill(actor=request.user, **serializer.validated_data)
        except DuplicateBillNumberError as e:
            return Response({'error': str(e)}, status=status.HTTP_409_CONFLICT)
        except InvalidBillDataError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(BillSerializer(bill).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=BillInputSerializer, responses={200: BillSerializer}, tags=['bills'])
    def update(self, request, pk=None):
        return self._update(request, pk, partial=False)

    @extend_schema(request=BillInputSerializer, responses={200: BillSerializer}, tags=['bills'])
    def partial_update(self, request, pk=None):
        return self._update(request, pk, partial=True)

    def _update(self, request, pk, partial):
        serializer = BillInputSerializer(data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        try:
            bill = update_bill(actor=request.user, bill_id=pk, **serializer.validated_data)
        except BillNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except DuplicateBillNumberError as e:
            return Response({'error': str(e)}, status=status.HTTP_409_CONFLICT)
        except InvalidBillDataError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(BillSerializer(bill).data)

    @extend_schema(responses={204: None}, tags=['bills'])
    def destroy(self, request, pk=None):
        try:
            delete_bill(actor=request.user, bill_id=pk)
        except BillNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(responses={200: DuplicateCheckSerializer}, tags=['bills'])
    @action(
        detail=False,
        methods=['get'],
        url_path=r'check-duplicate/(?P<bill_number>[^/]+)',
        url_name='check-duplicate',
    )
    def check_duplicate(self, request, bill_number=None):
        """Report whether a bill number is already taken."""
        # Same normalisation as BillInputSerializer.validate_bill_number
        bill_number = bill_number.strip()
        return Response({'exists': bill_number_exists(bill_number=bill_number)})

    @extend_schema(
        parameters=[BillFilterSerializer],
        responses={(200, EXPORT_CONTENT_TYPE): OpenApiResponse(description='Spreadsheet')},
        tags=['bills'],
    )
    @action(detail=False, methods=['get'])
    def export(self, request):
        """Download the filtered listing as an .xlsx workbook."""
        content = export_bills_xlsx(filtered_bills(request))

        filename = f"bills_{timezone.localdate():%Y%m%d}.xlsx"
        response = HttpResponse(content, content_type=EXPORT_CONTENT_TYPE)
        response['Content-Disposition'] = f'attachment; filename="{filename}"'
        return response
