"""
Serializers for Admin API endpoints.

Admin credentials (``username``/``password``) travel in the same body and
are consumed by the authorization middleware, so they are not declared here.
"""

from rest_framework import serializers

from api.v1.serializers import (
    AccountDTOSerializer,
    CamelCaseInputMixin,
    KeyStatisticsDTOSerializer,
    LicenseKeyDTOSerializer,
)


class AdminCredentialsSerializer(CamelCaseInputMixin, serializers.Serializer):
    """Serializer documenting the admin credentials every request carries."""

    username = serializers.CharField(required=False)
    password = serializers.CharField(required=False, trim_whitespace=False)


class CreateLicenseKeySerializer(AdminCredentialsSerializer):
    """Serializer for creating a license key."""

    owner = serializers.CharField(required=True, max_length=255)


class AdminLicenseKeySerializer(AdminCredentialsSerializer):
    """Serializer for admin requests naming one license key."""

    license_key = serializers.CharField(required=True, max_length=255)


class ListLicenseKeysSerializer(AdminCredentialsSerializer):
    """Serializer for listing license keys."""

    active_only = serializers.BooleanField(required=False, default=False)


class ListAccessEventsSerializer(AdminCredentialsSerializer):
    """Serializer for listing access events."""

    limit = serializers.IntegerField(required=False, min_value=1, max_value=1000)


class CreateAccountSerializer(AdminCredentialsSerializer):
    """Serializer for creating an account."""

    new_username = serializers.CharField(required=True, max_length=150)
    new_password = serializers.CharField(required=True, trim_whitespace=False)
    role = serializers.CharField(required=True, max_length=20)
    license_key = serializers.CharField(
        required=False, allow_null=True, allow_blank=True, max_length=50
    )


class UpdateAccountRoleSerializer(AdminCredentialsSerializer):
    """Serializer for changing an account role."""

    target_username = serializers.CharField(required=True, max_length=150)
    new_role = serializers.CharField(required=True, max_length=20)
    new_license_key = serializers.CharField(
        required=False, allow_null=True, allow_blank=True, max_length=50
    )


class DeleteAccountSerializer(AdminCredentialsSerializer):
    """Serializer for deleting an account."""

    target_username = serializers.CharField(required=True, max_length=150)


class CreateLicenseKeyResponseSerializer(serializers.Serializer):
    """Serializer for create license key response."""

    success = serializers.BooleanField(default=True)
    license_key = serializers.CharField()
    message = serializers.CharField()
    key = LicenseKeyDTOSerializer()


class ToggleLicenseKeyResponseSerializer(serializers.Serializer):
    """Serializer for toggle license key response."""

    success = serializers.BooleanField(default=True)
    active = serializers.BooleanField()
    message = serializers.CharField()


class ResetCommentsResponseSerializer(serializers.Serializer):
    """Serializer for reset comments response."""

    success = serializers.BooleanField(default=True)
    license_key = serializers.CharField()
    deleted_count = serializers.IntegerField()
    message = serializers.CharField()


class LicenseKeyListResponseSerializer(serializers.Serializer):
    """Serializer for license key list response."""

    success = serializers.BooleanField(default=True)
    keys = LicenseKeyDTOSerializer(many=True)


class DetailedStatsResponseSerializer(serializers.Serializer):
    """Serializer for detailed stats response."""

    success = serializers.BooleanField(default=True)
    stats = KeyStatisticsDTOSerializer(many=True)


class AccessEventDTOSerializer(serializers.Serializer):
    """Serializer for AccessEventDTO."""

    id = serializers.IntegerField(allow_null=True)
    license_key = serializers.CharField(allow_blank=True)
    action = serializers.CharField()
    status = serializers.CharField()
    address = serializers.CharField(allow_null=True)
    timestamp = serializers.DateTimeField()


class AccessEventListResponseSerializer(serializers.Serializer):
    """Serializer for access log response."""

    success = serializers.BooleanField(default=True)
    logs = AccessEventDTOSerializer(many=True)


class AccountResponseSerializer(serializers.Serializer):
    """Serializer for a single account response."""

    success = serializers.BooleanField(default=True)
    message = serializers.CharField()
    account = AccountDTOSerializer()


class AccountListResponseSerializer(serializers.Serializer):
    """Serializer for account list response."""

    success = serializers.BooleanField(default=True)
    accounts = AccountDTOSerializer(many=True)


class KeyWithAccountsDTOSerializer(serializers.Serializer):
    """Serializer for KeyWithAccountsDTO."""

    license_key = serializers.CharField()
    owner = serializers.CharField()
    active = serializers.BooleanField()
    created_at = serializers.DateTimeField()
    comments_count = serializers.IntegerField()
    accounts = AccountDTOSerializer(many=True)


class KeysWithAccountsResponseSerializer(serializers.Serializer):
    """Serializer for keys with accounts response."""

    success = serializers.BooleanField(default=True)
    keys_with_accounts = KeyWithAccountsDTOSerializer(many=True)
    admins_without_keys = AccountDTOSerializer(many=True)
