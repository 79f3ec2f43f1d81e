"""
Integration tests for Admin API endpoints.
"""

import pytest
from django.test import override_settings
from django.urls import reverse

from access_logs.infrastructure.models import AccessEvent
from accounts.infrastructure.models import Account
from licenses.infrastructure.models import LicenseKey


def admin_post(api_client, credentials, name, **payload):
    """POST to an admin endpoint with credentials in the body."""
    return api_client.post(reverse(name), {**credentials, **payload}, format="json")


@pytest.mark.django_db
@pytest.mark.integration
class TestAdminAuthorization:
    """Integration tests for the admin gate."""

    def test_missing_credentials(self, api_client):
        """Test admin calls without credentials are rejected."""
        response = api_client.post(reverse("admin-create-key"), {"owner": "Alice"}, format="json")

        assert response.status_code == 401
        assert response.json() == {
            "success": False,
            "code": "UNAUTHORIZED",
            "message": "Authentication required",
        }
        assert LicenseKey.objects.count() == 0  # pylint: disable=no-member

    def test_wrong_password_leaves_no_trace(self, api_client):
        """Test a rejected call mutates nothing and logs nothing."""
        response = admin_post(
            api_client,
            {"username": "creator", "password": "wrong"},
            "admin-create-key",
            owner="Alice",
        )

        assert response.status_code == 401
        assert LicenseKey.objects.count() == 0  # pylint: disable=no-member
        assert AccessEvent.objects.count() == 0  # pylint: disable=no-member

    def test_operator_rejected(self, api_client, creator_credentials, db_license_key):
        """Test operator credentials never reach admin views."""
        admin_post(
            api_client,
            creator_credentials,
            "admin-create-account",
            new_username="op",
            new_password="op-pass",
            role="operator",
            license_key=db_license_key.key,
        )

        response = admin_post(
            api_client, {"username": "op", "password": "op-pass"}, "admin-list-keys"
        )

        assert response.status_code == 401

    def test_header_credentials(self, api_client):
        """Test credentials may travel in headers."""
        response = api_client.post(
            reverse("admin-list-keys"),
            {},
            format="json",
            HTTP_X_ADMIN_USERNAME="creator",
            HTTP_X_ADMIN_PASSWORD="creator-secret",
        )

        assert response.status_code == 200

    @override_settings(LEGACY_ADMIN_PASSWORD="legacy-pass")
    def test_legacy_secret(self, api_client):
        """Test the deprecated static secret still authorizes."""
        response = admin_post(api_client, {"password": "legacy-pass"}, "admin-list-keys")

        assert response.status_code == 200

    def test_malformed_body_carries_no_credentials(self, api_client):
        """Test a body that is not JSON is rejected like a missing login."""
        for body in ("[1, 2]", "{not json"):
            response = api_client.post(
                reverse("admin-list-keys"), body, content_type="application/json"
            )

            assert response.status_code == 401
            assert response.json()["code"] == "UNAUTHORIZED"

    def test_malformed_body_with_header_credentials(self, api_client):
        """Test header credentials still authorize, then the view rejects the body."""
        response = api_client.post(
            reverse("admin-list-keys"),
            "{not json",
            content_type="application/json",
            HTTP_X_ADMIN_USERNAME="creator",
            HTTP_X_ADMIN_PASSWORD="creator-secret",
        )

        assert response.status_code == 400
        assert response.json()["success"] is False


@pytest.mark.django_db
@pytest.mark.integration
class TestAdminKeysAPI:
    """Integration tests for key administration."""

    def test_create_toggle_delete(self, api_client, creator_credentials):
        """Test the full key lifecycle."""
        created = admin_post(api_client, creator_credentials, "admin-create-key", owner="Alice")
        assert created.status_code == 201
        key = created.json()["license_key"]
        assert key.startswith("TW-")
        assert created.json()["key"]["owner"] == "Alice"

        toggled = admin_post(api_client, creator_credentials, "admin-toggle-key", license_key=key)
        assert toggled.status_code == 200
        assert toggled.json()["active"] is False

        verify = api_client.post(
            reverse("verify-license-key"), {"license_key": key}, format="json"
        )
        assert verify.json()["valid"] is False

        deleted = admin_post(api_client, creator_credentials, "admin-delete-key", license_key=key)
        assert deleted.status_code == 200
        assert not LicenseKey.objects.filter(license_key=key).exists()  # pylint: disable=no-member

        actions = list(
            AccessEvent.objects.filter(license_key=key)  # pylint: disable=no-member
            .order_by("id")
            .values_list("action", "status")
        )
        assert actions == [
            ("create", "success"),
            ("toggle", "deactivated"),
            ("verify", "inactive"),
            ("delete", "success"),
        ]

    def test_create_requires_owner(self, api_client, creator_credentials):
        """Test owner is required."""
        response = admin_post(api_client, creator_credentials, "admin-create-key")

        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"

    def test_toggle_unknown_key(self, api_client, creator_credentials):
        """Test toggling a missing key."""
        response = admin_post(
            api_client, creator_credentials, "admin-toggle-key", license_key="TW-NOPE"
        )

        assert response.status_code == 404

    def test_reset_comments(self, api_client, creator_credentials, db_license_key):
        """Test resetting the comment counter."""
        for _ in range(3):
            api_client.post(
                reverse("log-comment"), {"license_key": db_license_key.key}, format="json"
            )

        response = admin_post(
            api_client,
            creator_credentials,
            "admin-reset-comments",
            license_key=db_license_key.key,
        )

        assert response.status_code == 200
        assert response.json()["deleted_count"] == 3

    def test_list_and_detailed_stats(self, api_client, creator_credentials, db_license_key):
        """Test listing keys and per-key statistics."""
        api_client.post(reverse("heartbeat"), {"license_key": db_license_key.key}, format="json")

        keys = admin_post(api_client, creator_credentials, "admin-list-keys")
        stats = admin_post(api_client, creator_credentials, "admin-detailed-stats")

        assert [k["license_key"] for k in keys.json()["keys"]] == [db_license_key.key]
        (entry,) = stats.json()["stats"]
        assert entry["is_online"] is True
        assert entry["unique_addresses"] == 1
        assert entry["addresses"][0]["address"] == "127.0.0.1"

    def test_access_log(self, api_client, creator_credentials, db_license_key):
        """Test the access log lists newest first."""
        api_client.post(reverse("verify-license-key"), {"license_key": "TW-NOPE"}, format="json")
        api_client.post(
            reverse("verify-license-key"), {"license_key": db_license_key.key}, format="json"
        )

        response = admin_post(api_client, creator_credentials, "admin-logs", limit=1)

        assert response.status_code == 200
        (event,) = response.json()["logs"]
        assert (event["license_key"], event["status"]) == (db_license_key.key, "success")


@pytest.mark.django_db
@pytest.mark.integration
class TestAdminAccountsAPI:
    """Integration tests for account administration."""

    def test_create_operator_without_key(self, api_client, creator_credentials):
        """Test operators need a key."""
        response = admin_post(
            api_client,
            creator_credentials,
            "admin-create-account",
            new_username="op",
            new_password="pw",
            role="operator",
        )

        assert response.status_code == 400
        assert not Account.objects.filter(username="op").exists()  # pylint: disable=no-member

    def test_account_lifecycle(self, api_client, creator_credentials, db_license_key):
        """Test creating, promoting, listing and deleting an account."""
        created = admin_post(
            api_client,
            creator_credentials,
            "admin-create-account",
            new_username="op",
            new_password="pw",
            role="operator",
            license_key=db_license_key.key,
        )
        assert created.status_code == 201
        assert created.json()["account"]["bound_license_key"] == db_license_key.key

        overview = admin_post(api_client, creator_credentials, "admin-keys-with-accounts")
        (entry,) = overview.json()["keys_with_accounts"]
        assert [a["username"] for a in entry["accounts"]] == ["op"]

        promoted = admin_post(
            api_client,
            creator_credentials,
            "admin-update-account-role",
            target_username="op",
            new_role="admin",
        )
        assert promoted.status_code == 200
        assert promoted.json()["account"]["role"] == "admin"
        assert promoted.json()["account"]["bound_license_key"] is None

        listed = admin_post(api_client, creator_credentials, "admin-list-accounts")
        assert [a["username"] for a in listed.json()["accounts"]] == ["op"]

        deleted = admin_post(
            api_client, creator_credentials, "admin-delete-account", target_username="op"
        )
        assert deleted.status_code == 200
        assert not Account.objects.filter(username="op").exists()  # pylint: disable=no-member

    def test_duplicate_username(self, api_client, creator_credentials):
        """Test a taken username is rejected."""
        payload = {"new_username": "alice", "new_password": "pw", "role": "admin"}
        admin_post(api_client, creator_credentials, "admin-create-account", **payload)

        response = admin_post(api_client, creator_credentials, "admin-create-account", **payload)

        assert response.status_code == 400
        assert response.json()["code"] == "DUPLICATE_USERNAME"

    def test_camel_case_fields(self, api_client, creator_credentials, db_license_key):
        """Test deployed clients may send camelCase field names."""
        response = admin_post(
            api_client,
            creator_credentials,
            "admin-create-account",
            newUsername="op",
            newPassword="pw",
            role="operator",
            licenseKey=db_license_key.key,
        )

        assert response.status_code == 201
        assert response.json()["account"]["bound_license_key"] == db_license_key.key

    def test_creator_is_protected(self, api_client, creator_credentials):
        """Test the creator cannot be deleted or demoted, even by itself."""
        deleted = admin_post(
            api_client, creator_credentials, "admin-delete-account", target_username="creator"
        )
        demoted = admin_post(
            api_client,
            creator_credentials,
            "admin-update-account-role",
            target_username="creator",
            new_role="admin",
        )

        assert deleted.status_code == demoted.status_code == 403
        assert Account.objects.get(username="creator").role == "creator"  # pylint: disable=no-member

    def test_admin_can_administer(self, api_client, creator_credentials):
        """Test an admin account created by the creator can use the admin API."""
        admin_post(
            api_client,
            creator_credentials,
            "admin-create-account",
            new_username="alice",
            new_password="alice-pass",
            role="admin",
        )

        response = admin_post(
            api_client,
            {"username": "alice", "password": "alice-pass"},
            "admin-create-key",
            owner="Bob",
        )

        assert response.status_code == 201
