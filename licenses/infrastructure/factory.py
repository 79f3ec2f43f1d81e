"""
Key store wiring from Django settings.
"""
from datetime import timedelta

from django.conf import settings

from access_logs.infrastructure.factory import build_access_log
from licenses.domain.license_key import DEFAULT_ONLINE_WINDOW
from licenses.domain.services import KeyStore
from licenses.infrastructure.repositories.django_license_key_repository import (
    DjangoLicenseKeyRepository,
)
from presence.infrastructure.factory import build_presence_tracker


def online_window() -> timedelta:
    """Heartbeat window inside which a key counts as online."""
    seconds = getattr(settings, "HEARTBEAT_ONLINE_WINDOW_SECONDS", None)
    if seconds is None:
        return DEFAULT_ONLINE_WINDOW
    return timedelta(seconds=seconds)


def build_key_store() -> KeyStore:
    """Build the KeyStore with its Django-backed collaborators."""
    return KeyStore(
        repository=DjangoLicenseKeyRepository(),
        presence_tracker=build_presence_tracker(),
        access_log=build_access_log(),
        online_window=online_window(),
    )
