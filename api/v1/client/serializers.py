"""
Serializers for Client API endpoints.
"""

from rest_framework import serializers

from api.v1.serializers import CamelCaseInputMixin, KeyStatisticsDTOSerializer


class LicenseKeyRequestSerializer(CamelCaseInputMixin, serializers.Serializer):
    """Serializer for requests naming one license key."""

    license_key = serializers.CharField(required=True, max_length=255, trim_whitespace=True)


class VerifyRequestSerializer(CamelCaseInputMixin, serializers.Serializer):
    """
    Serializer for verify request.

    No length limit: an over-long key is an unknown key, and verify
    records it like any other.
    """

    license_key = serializers.CharField(required=True, trim_whitespace=True)


class VerifyResponseSerializer(serializers.Serializer):
    """Serializer for verify response."""

    valid = serializers.BooleanField()
    message = serializers.CharField()
    owner = serializers.CharField(required=False)


class LoginRequestSerializer(CamelCaseInputMixin, serializers.Serializer):
    """Serializer for login request."""

    username = serializers.CharField(required=True, max_length=150)
    password = serializers.CharField(required=True, trim_whitespace=False)


class LoginResponseSerializer(serializers.Serializer):
    """Serializer for login response."""

    success = serializers.BooleanField(default=True)
    username = serializers.CharField()
    role = serializers.CharField()
    bound_license_key = serializers.CharField(allow_null=True)


class PublicKeyStatsDTOSerializer(serializers.Serializer):
    """Serializer for PublicKeyStatsDTO."""

    owner = serializers.CharField()
    comments_count = serializers.IntegerField()
    created_at = serializers.DateTimeField()
    is_online = serializers.BooleanField()


class PublicStatsResponseSerializer(serializers.Serializer):
    """Serializer for public stats response."""

    success = serializers.BooleanField(default=True)
    stats = PublicKeyStatsDTOSerializer(many=True)


class OperatorStatsResponseSerializer(serializers.Serializer):
    """Serializer for operator stats response."""

    success = serializers.BooleanField(default=True)
    stats = KeyStatisticsDTOSerializer()
