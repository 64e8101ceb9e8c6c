from rest_framework import serializers

from .models import User, Role


class UserSerializer(serializers.ModelSerializer):
    """User profile display; never exposes the password hash."""

    class Meta:
        model = User
        fields = [
            'id',
            'username',
            'role',
            'is_super_root',
            'created_at',
            'last_login',
        ]
        read_only_fields = fields


class UserLoginSerializer(serializers.Serializer):
    """Serializer for user login."""

    username = serializers.CharField(required=True, max_length=150)
    password = serializers.CharField(
        required=True,
        write_only=True,
        style={'input_type': 'password'}
    )


class UserCreateSerializer(serializers.Serializer):
    """Input for creating a user."""

    username = serializers.CharField(required=True, max_length=150)
    password = serializers.CharField(
        required=True,
        write_only=True,
        min_length=6,
        style={'input_type': 'password'}
    )
    role = serializers.ChoiceField(choices=Role.choices, default=Role.ADMIN)


class UserUpdateSerializer(serializers.Serializer):
    """Input for editing a user; every field optional."""

    username = serializers.CharField(required=False, max_length=150)
    password = serializers.CharField(
        required=False,
        write_only=True,
        min_length=6,
        style={'input_type': 'password'}
    )
    role = serializers.ChoiceField(choices=Role.choices, required=False)
