"""
Serializers shared by the client and admin API endpoints.
"""

import re
from collections.abc import Mapping

from rest_framework import serializers

CAMEL_HUMP = re.compile(r"(?<!^)(?=[A-Z])")


def camel_to_snake(name: str) -> str:
    """Convert ``licenseKey`` to ``license_key``."""
    return CAMEL_HUMP.sub("_", name).lower()


class CamelCaseInputMixin:
    """
    Accept camelCase request keys next to their snake_case names.

    Deployed clients send ``licenseKey``, ``newUsername`` and so on.
    When both spellings are present the snake_case value wins.
    """

    def to_internal_value(self, data):
        if isinstance(data, Mapping):
            normalized = {}
            for key, value in data.items():
                snake = camel_to_snake(key) if isinstance(key, str) else key
                if snake != key and snake in data:
                    continue
                normalized[snake] = value
            data = normalized
        return super().to_internal_value(data)


class SuccessMessageSerializer(serializers.Serializer):
    """Serializer for a plain ``{success, message}`` response."""

    success = serializers.BooleanField()
    message = serializers.CharField()


class FailureSerializer(serializers.Serializer):
    """Serializer for a failure response."""

    success = serializers.BooleanField(default=False)
    code = serializers.CharField()
    message = serializers.CharField()


class LicenseKeyDTOSerializer(serializers.Serializer):
    """Serializer for LicenseKeyDTO."""

    license_key = serializers.CharField()
    owner = serializers.CharField()
    active = serializers.BooleanField()
    created_at = serializers.DateTimeField()
    last_used_at = serializers.DateTimeField(allow_null=True)
    last_heartbeat_at = serializers.DateTimeField(allow_null=True)
    last_address = serializers.CharField(allow_null=True)
    is_online = serializers.BooleanField()


class AddressSightingDTOSerializer(serializers.Serializer):
    """Serializer for AddressSightingDTO."""

    address = serializers.CharField()
    first_seen_at = serializers.DateTimeField()
    last_seen_at = serializers.DateTimeField()


class KeyStatisticsDTOSerializer(LicenseKeyDTOSerializer):
    """Serializer for KeyStatisticsDTO."""

    comments_count = serializers.IntegerField()
    unique_addresses = serializers.IntegerField()
    addresses = AddressSightingDTOSerializer(many=True)


class AccountDTOSerializer(serializers.Serializer):
    """Serializer for AccountDTO."""

    username = serializers.CharField()
    role = serializers.CharField()
    bound_license_key = serializers.CharField(allow_null=True)
    created_at = serializers.DateTimeField()
    last_login_at = serializers.DateTimeField(allow_null=True)
