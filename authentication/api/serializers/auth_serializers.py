from rest_framework import serializers

from authentication.domain.models import Principal
from utils.rbac import Role


class PrincipalSerializer(serializers.ModelSerializer):
    class Meta:
        model = Principal
        fields = ("id", "email", "name", "role", "is_active", "created_at", "updated_at")
        read_only_fields = fields


class RegisterSerializer(serializers.Serializer):
    """
    Self-service registration. Duplicate emails are left to the database so
    they surface as 409 rather than a validation error.
    """

    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, min_length=6, max_length=128, trim_whitespace=False)
    name = serializers.CharField(required=False, allow_blank=True, max_length=128)


class PrincipalCreateSerializer(RegisterSerializer):
    """Admin account creation; the role may be chosen."""

    role = serializers.ChoiceField(choices=Role.choices, required=False, default=Role.USER)


class PrincipalUpdateSerializer(serializers.Serializer):
    email = serializers.EmailField(required=False)
    password = serializers.CharField(
        write_only=True, required=False, min_length=6, max_length=128, trim_whitespace=False
    )
    name = serializers.CharField(required=False, allow_blank=True, max_length=128)
    role = serializers.ChoiceField(choices=Role.choices, required=False)
    is_active = serializers.BooleanField(required=False)
