from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter

from apps.accounts.access import Action
from apps.accounts.permissions import HasViewAction

from .serializers import (
    FarmerInputSerializer,
    FarmerSerializer,
    SimilarFarmersQuerySerializer,
    SimilarFarmerSerializer,
    DuplicateFarmerPairSerializer,
)
from .services import (
    list_farmers,
    get_farmer,
    create_farmer,
    update_farmer,
    delete_farmer,
    find_similar_farmers,
    find_duplicate_farmers,
    FarmerNotFoundError,
    InvalidFarmerDataError,
)


class FarmerViewSet(viewsets.ViewSet):
    """
    Farmer directory.

    list / retrieve: admin and root
    create / update / partial_update / destroy: root only
    similar: fuzzy name report for spotting duplicates (root only)
    """

    permission_classes = [IsAuthenticated, HasViewAction]
    lookup_value_regex = '[0-9a-fA-F-]{36}'
    required_actions = {
        'list': Action.FARMER_READ,
        'retrieve': Action.FARMER_READ,
        'create': Action.FARMER_MANAGE,
        'update': Action.FARMER_MANAGE,
        'partial_update': Action.FARMER_MANAGE,
        'destroy': Action.FARMER_MANAGE,
        'similar': Action.FARMER_MANAGE,
    }

    @extend_schema(
        parameters=[OpenApiParameter('search', str, description='Name contains')],
        responses={200: FarmerSerializer(many=True)},
        tags=['farmers'],
    )
    def list(self, request):
        farmers = list_farmers(actor=request.user, search=request.query_params.get('search', ''))
        return Response(FarmerSerializer(farmers, many=True).data)

    @extend_schema(responses={200: FarmerSerializer}, tags=['farmers'])
    def retrieve(self, request, pk=None):
        try:
            farmer = get_farmer(actor=request.user, farmer_id=pk)
        except FarmerNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        return Response(FarmerSerializer(farmer).data)

    @extend_schema(request=FarmerInputSerializer, responses={201: FarmerSerializer}, tags=['farmers'])
    def create(self, request):
        serializer = FarmerInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            farmer = create_farmer(actor=request.user, **serializer.validated_data)
        except InvalidFarmerDataError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(FarmerSerializer(farmer).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=FarmerInputSerializer, responses={200: FarmerSerializer}, tags=['farmers'])
    def update(self, request, pk=None):
        return self._update(request, pk, partial=False)

    @extend_schema(request=FarmerInputSerializer, responses={200: FarmerSerializer}, tags=['farmers'])
    def partial_update(self, request, pk=None):
        return self._update(request, pk, partial=True)

    def _update(self, request, pk, partial):
        serializer = FarmerInputSerializer(data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        try:
            farmer = update_farmer(actor=request.user, farmer_id=pk, **serializer.validated_data)
        except FarmerNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except InvalidFarmerDataError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(FarmerSerializer(farmer).data)

    @extend_schema(responses={204: None}, tags=['farmers'])
    def destroy(self, request, pk=None):
        try:
            delete_farmer(actor=request.user, farmer_id=pk)
        except FarmerNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(
        parameters=[SimilarFarmersQuerySerializer],
        responses={200: SimilarFarmerSerializer(many=True)},
        description="Farmers with similar names (likely duplicates). Read-only.",
        tags=['farmers'],
    )
    @action(detail=False, methods=['get'])
    def similar(self, request):
        query = SimilarFarmersQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        name = query.validated_data.get('name')
        threshold = query.validated_data['threshold']

        if not name:
            pairs = find_duplicate_farmers(actor=request.user, threshold=threshold)
            return Response(DuplicateFarmerPairSerializer(pairs, many=True).data)

        matches = find_similar_farmers(actor=request.user, name=name, threshold=threshold)
        data = [{'farmer': farmer, 'similarity': score} for farmer, score in matches]
        return Response(SimilarFarmerSerializer(data, many=True).data)
