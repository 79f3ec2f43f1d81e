"""
Pytest configuration and shared fixtures.
"""

from datetime import datetime, timezone

import pytest
from asgiref.sync import async_to_sync

from access_logs.infrastructure.repositories.django_access_event_repository import (
    DjangoAccessEventRepository,
)
from accounts.infrastructure.repositories.django_account_repository import (
    DjangoAccountRepository,
)
from licenses.domain.license_key import LicenseKey
from licenses.infrastructure.repositories.django_license_key_repository import (
    DjangoLicenseKeyRepository,
)
from presence.infrastructure.repositories.django_address_sighting_repository import (
    DjangoAddressSightingRepository,
)
from tests.fakes import FakeClock, build_services

CREATOR_USERNAME = "creator"
CREATOR_PASSWORD = "creator-secret"


@pytest.fixture
def clock():
    """Fixture for a settable clock."""
    return FakeClock(datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def services(clock):
    """Fixture for domain services over in-memory repositories."""
    return build_services(clock)


@pytest.fixture
def key_store(services):
    """Fixture for KeyStore."""
    return services["key_store"]


@pytest.fixture
def presence_tracker(services):
    """Fixture for PresenceTracker."""
    return services["presence_tracker"]


@pytest.fixture
def access_log(services):
    """Fixture for AccessLog."""
    return services["access_log"]


@pytest.fixture
def account_directory(services):
    """Fixture for AccountDirectory with the creator bootstrapped."""
    directory = services["account_directory"]
    async_to_sync(directory.bootstrap_creator)()
    return directory


@pytest.fixture
def gate(services, account_directory):
    """Fixture for AuthorizationGate."""
    return services["gate"]


@pytest.fixture
def license_key_repository():
    """Fixture for LicenseKeyRepository."""
    return DjangoLicenseKeyRepository()


@pytest.fixture
def address_sighting_repository():
    """Fixture for AddressSightingRepository."""
    return DjangoAddressSightingRepository()


@pytest.fixture
def access_event_repository():
    """Fixture for AccessEventRepository."""
    return DjangoAccessEventRepository()


@pytest.fixture
def account_repository():
    """Fixture for AccountRepository."""
    return DjangoAccountRepository()


@pytest.fixture
def db_license_key(db, license_key_repository):
    """Fixture for a LicenseKey saved in database."""
    return async_to_sync(license_key_repository.insert)(LicenseKey.create(owner="Alice"))


@pytest.fixture
def api_client():
    """Fixture for DRF API client."""
    from rest_framework.test import APIClient

    return APIClient()


@pytest.fixture
def creator_credentials():
    """Credentials of the bootstrapped creator account."""
    return {"username": CREATOR_USERNAME, "password": CREATOR_PASSWORD}
