from django.conf import settings
from rest_framework import serializers

from .models import ShareLink

FOREVER = 'forever'


class ShareLinkCreateSerializer(serializers.Serializer):
    """
    Share link input.

    Fields:
        duration: Lifetime in hours, or "forever"
    """

    duration = serializers.CharField(default=FOREVER)

    def validate_duration(self, value):
        """Return hours as int, or None for a permanent link."""
        if str(value).strip().lower() == FOREVER:
            return None
        try:
            hours = int(value)
        except (TypeError, ValueError):
            raise serializers.ValidationError('Duration must be a number of hours or "forever"')
        if hours <= 0:
            raise serializers.ValidationError('Duration must be a positive number of hours')
        if hours > settings.SHARE_MAX_DURATION_HOURS:
            raise serializers.ValidationError(
                f'Duration cannot exceed {settings.SHARE_MAX_DURATION_HOURS} hours'
            )
        return hours


class ShareLinkSerializer(serializers.ModelSerializer):
    class Meta:
        model = ShareLink
        fields = ['token', 'expires_at', 'created_at']
        read_only_fields = fields


class ShareLinkStatusSerializer(serializers.Serializer):
    valid = serializers.BooleanField()
    expires_at = serializers.DateTimeField(allow_null=True, required=False)
    message = serializers.CharField(required=False)
