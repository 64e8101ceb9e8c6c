from rest_framework import serializers

from .models import ActivityLog


# =============================================================================
# Input Serializers
# =============================================================================

class ActivityFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for the activity log listing.

    Query Parameters:
        search (str): Match on username, action or details
        date_from (date): Entries from this date
        date_to (date): Entries up to this date (inclusive)
    """

    search = serializers.CharField(required=False, allow_blank=True, max_length=200)
    date_from = serializers.DateField(required=False)
    date_to = serializers.DateField(required=False)

    def validate(self, attrs):
        """Validate date range."""
        date_from = attrs.get('date_from')
        date_to = attrs.get('date_to')

        if date_from and date_to and date_from > date_to:
            raise serializers.ValidationError({
                'date_to': 'End date must be after start date'
            })

        return attrs


class PruneInputSerializer(serializers.Serializer):
    """Optional override of the retention window."""

    older_than_days = serializers.IntegerField(required=False, min_value=1)


# =============================================================================
# Output Serializers
# =============================================================================

class ActivityLogSerializer(serializers.ModelSerializer):
    """Audit entry."""

    user_id = serializers.UUIDField(read_only=True, allow_null=True)

    class Meta:
        model = ActivityLog
        fields = ['id', 'user_id', 'username', 'role', 'action', 'details', 'timestamp']
        read_only_fields = fields
