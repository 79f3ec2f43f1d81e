"""
Unit tests for request serializers.
"""

from api.v1.admin.serializers import UpdateAccountRoleSerializer
from api.v1.client.serializers import LicenseKeyRequestSerializer, VerifyRequestSerializer
from api.v1.serializers import camel_to_snake


class TestCamelCaseInput:
    """Tests for camelCase request aliases."""

    def test_camel_to_snake(self):
        """Test field name conversion."""
        assert camel_to_snake("licenseKey") == "license_key"
        assert camel_to_snake("newLicenseKey") == "new_license_key"
        assert camel_to_snake("owner") == "owner"

    def test_accepts_camel_case(self):
        """Test a camelCase key fills the snake_case field."""
        serializer = LicenseKeyRequestSerializer(data={"licenseKey": "TW-A"})

        assert serializer.is_valid()
        assert serializer.validated_data["license_key"] == "TW-A"

    def test_snake_case_wins(self):
        """Test the snake_case spelling wins when both are sent."""
        serializer = LicenseKeyRequestSerializer(
            data={"licenseKey": "TW-CAMEL", "license_key": "TW-SNAKE"}
        )

        assert serializer.is_valid()
        assert serializer.validated_data["license_key"] == "TW-SNAKE"

    def test_admin_fields(self):
        """Test admin request fields accept camelCase too."""
        serializer = UpdateAccountRoleSerializer(
            data={"targetUsername": "op", "newRole": "operator", "newLicenseKey": "TW-A"}
        )

        assert serializer.is_valid(), serializer.errors
        assert serializer.validated_data["new_license_key"] == "TW-A"


class TestVerifyRequestSerializer:
    """Tests for VerifyRequestSerializer."""

    def test_no_length_limit(self):
        """Test an over-long key passes validation."""
        serializer = VerifyRequestSerializer(data={"license_key": "X" * 300})

        assert serializer.is_valid()

    def test_missing_key(self):
        """Test a missing key is reported as required."""
        serializer = VerifyRequestSerializer(data={})

        assert not serializer.is_valid()
        assert serializer.errors["license_key"][0].code == "required"
