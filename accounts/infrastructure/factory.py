"""
Account directory and authorization gate wiring from Django settings.
"""
from django.conf import settings

from access_logs.infrastructure.factory import build_access_log
from accounts.domain.authorization import AuthorizationGate
from accounts.domain.services import DEFAULT_CREATOR_USERNAME, AccountDirectory
from accounts.infrastructure.repositories.django_account_repository import (
    DjangoAccountRepository,
)
from licenses.infrastructure.repositories.django_license_key_repository import (
    DjangoLicenseKeyRepository,
)


def build_account_directory() -> AccountDirectory:
    """Build the AccountDirectory from settings."""
    return AccountDirectory(
        repository=DjangoAccountRepository(),
        license_key_repository=DjangoLicenseKeyRepository(),
        access_log=build_access_log(),
        creator_username=getattr(settings, "CREATOR_USERNAME", DEFAULT_CREATOR_USERNAME),
        creator_password=getattr(settings, "CREATOR_PASSWORD", None),
    )


def build_authorization_gate() -> AuthorizationGate:
    """Build the AuthorizationGate; the legacy secret is read once per gate."""
    return AuthorizationGate(
        account_directory=build_account_directory(),
        legacy_admin_secret=getattr(settings, "LEGACY_ADMIN_PASSWORD", None),
    )
