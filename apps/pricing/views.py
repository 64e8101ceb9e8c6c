from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from apps.accounts.access import Action, role_allows
from apps.accounts.permissions import FORBIDDEN, requires

from .serializers import (
    PriceEntryInputSerializer,
    PriceEntrySerializer,
    SettingsUpdateSerializer,
    SettingsSerializer,
    PriceCheckQuerySerializer,
    PriceCheckSerializer,
)
from .services import (
    list_price_entries,
    upsert_price_entry,
    delete_price_entry,
    get_settings,
    update_settings,
    resolve_price_sheet,
    PriceEntryNotFoundError,
    InvalidPriceError,
)


@extend_schema(
    methods=['GET'],
    responses={200: SettingsSerializer},
    description="Get the quota list and current prices.",
    tags=['pricing'],
)
@extend_schema(
    methods=['PUT'],
    request=SettingsUpdateSerializer,
    responses={200: SettingsSerializer},
    description="Update quotas and/or the prices effective today.",
    tags=['pricing'],
)
@api_view(['GET', 'PUT'])
@permission_classes([IsAuthenticated, requires(Action.SETTINGS_READ)])
def settings_detail(request):
    """Get or update settings."""
    if request.method == 'GET':
        return Response(SettingsSerializer(get_settings(actor=request.user)).data)

    if not role_allows(request.user, Action.SETTINGS_UPDATE):
        return Response({'error': FORBIDDEN}, status=status.HTTP_403_FORBIDDEN)

    serializer = SettingsUpdateSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        result = update_settings(actor=request.user, **serializer.validated_data)
    except InvalidPriceError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response(SettingsSerializer(result).data)


@extend_schema(
    methods=['GET'],
    responses={200: PriceEntrySerializer(many=True)},
    description="List price entries, newest effective date first.",
    tags=['pricing'],
)
@extend_schema(
    methods=['POST'],
    request=PriceEntryInputSerializer,
    responses={200: PriceEntrySerializer, 201: PriceEntrySerializer},
    description="Create or overwrite the price entry for a date.",
    tags=['pricing'],
)
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, requires(Action.PRICE_READ)])
def price_list(request):
    """List price entries or upsert one by effective date."""
    if request.method == 'GET':
        entries = list_price_entries(actor=request.user)
        return Response(PriceEntrySerializer(entries, many=True).data)

    if not role_allows(request.user, Action.PRICE_UPDATE):
        return Response({'error': FORBIDDEN}, status=status.HTTP_403_FORBIDDEN)

    serializer = PriceEntryInputSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        entry, created = upsert_price_entry(actor=request.user, **serializer.validated_data)
    except InvalidPriceError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response(
        PriceEntrySerializer(entry).data,
        status=status.HTTP_201_CREATED if created else status.HTTP_200_OK
    )


@extend_schema(
    responses={204: None},
    description="Delete a price entry (root only). Recorded bills are unaffected.",
    tags=['pricing'],
)
@api_view(['DELETE'])
@permission_classes([IsAuthenticated, requires(Action.PRICE_DELETE)])
def price_detail(request, entry_id):
    """Delete a price entry."""
    try:
        delete_price_entry(actor=request.user, entry_id=entry_id)
    except PriceEntryNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

    return Response(status=status.HTTP_204_NO_CONTENT)


@extend_schema(
    parameters=[PriceCheckQuerySerializer],
    responses={200: PriceCheckSerializer},
    description="Resolve the prices applicable on a date.",
    tags=['pricing'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, requires(Action.PRICE_READ)])
def price_check(request):
    """Show which prices a bill dated ``date`` would receive."""
    query = PriceCheckQuerySerializer(data=request.query_params)
    query.is_valid(raise_exception=True)
    on_date = query.validated_data['date']

    sheet = resolve_price_sheet(on_date=on_date)
    data = {
        'date': on_date,
        'source': sheet.source,
        'effective_date': sheet.effective_date,
        'fresh_price': sheet.fresh,
        'burnt_price': sheet.burnt,
        'long_top_price': sheet.long_top,
    }
    cane_type = query.validated_data.get('sugarcane_type')
    if cane_type is not None:
        data['price_per_unit'] = sheet.price_for(cane_type)

    return Response(PriceCheckSerializer(data).data)
