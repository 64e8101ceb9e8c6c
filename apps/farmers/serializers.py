from rest_framework import serializers

from .models import Farmer
from .services.farmer_similarity import MEDIUM_SIMILARITY_THRESHOLD


# =============================================================================
# Input Serializers
# =============================================================================

class FarmerInputSerializer(serializers.Serializer):
    """Farmer create / update input."""

    name = serializers.CharField(max_length=200)
    license_plates = serializers.ListField(
        child=serializers.CharField(max_length=50, allow_blank=True),
        required=False
    )


class SimilarFarmersQuerySerializer(serializers.Serializer):
    """
    Query parameters for the similarity report.

    Without ``name`` the whole directory is scanned for duplicate pairs.
    """

    name = serializers.CharField(required=False, max_length=200)
    threshold = serializers.IntegerField(
        required=False,
        min_value=0,
        max_value=100,
        default=MEDIUM_SIMILARITY_THRESHOLD
    )


# =============================================================================
# Output Serializers
# =============================================================================

class FarmerSerializer(serializers.ModelSerializer):
    class Meta:
        model = Farmer
        fields = ['id', 'name', 'license_plates', 'created_at', 'updated_at']
        read_only_fields = fields


class SimilarFarmerSerializer(serializers.Serializer):
    farmer = FarmerSerializer()
    similarity = serializers.IntegerField()


class DuplicateFarmerPairSerializer(serializers.Serializer):
    farmers = FarmerSerializer(many=True)
    similarity = serializers.IntegerField()
