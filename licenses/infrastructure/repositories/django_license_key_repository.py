"""
Django implementation of LicenseKeyRepository port.

This adapter converts between domain entities and Django ORM models.
"""
from datetime import datetime
from typing import List, Optional

from asgiref.sync import sync_to_async
from django.db import IntegrityError, transaction
from django.db.models import Case, Value, When

from core.domain.exceptions import DuplicateLicenseKeyError
from core.infrastructure.database import translate_store_errors
from licenses.domain.license_key import LicenseKey
from licenses.infrastructure.models import LicenseKey as LicenseKeyModel
from licenses.ports.license_key_repository import LicenseKeyRepository


class DjangoLicenseKeyRepository(LicenseKeyRepository):
    """
    Django ORM implementation of LicenseKeyRepository.

    This adapter:
    1. Converts Django models to domain entities
    2. Expresses every state transition as one UPDATE statement
    3. Implements repository interface
    """

    def _to_domain(self, model: LicenseKeyModel) -> LicenseKey:
        """
        Convert Django model to domain entity.

        Args:
            model: Django LicenseKey model

        Returns:
            LicenseKey domain entity
        """
        return LicenseKey(
            key=model.license_key,
            owner=model.owner,
            active=model.active,
            created_at=model.created_at,
            last_used_at=model.last_used_at,
            last_heartbeat_at=model.last_heartbeat_at,
            last_address=model.last_address,
        )

    @sync_to_async
    @translate_store_errors
    def insert(self, license_key: LicenseKey) -> LicenseKey:
        """
        Insert a new license key, rejecting duplicates.

        Args:
            license_key: LicenseKey entity to insert

        Returns:
            Stored license key entity
        """
        try:
            with transaction.atomic():
                # pylint: disable=no-member
                model = LicenseKeyModel.objects.create(
                    license_key=license_key.key,
                    owner=license_key.owner,
                    active=license_key.active,
                    created_at=license_key.created_at,
                    last_used_at=license_key.last_used_at,
                    last_heartbeat_at=license_key.last_heartbeat_at,
                    last_address=license_key.last_address,
                )
        except IntegrityError as exc:
            raise DuplicateLicenseKeyError() from exc
        return self._to_domain(model)

    @sync_to_async
    @translate_store_errors
    def find_by_key(self, key: str) -> Optional[LicenseKey]:
        """
        Find a license key by key string.

        Args:
            key: License key string

        Returns:
            LicenseKey entity or None if not found
        """
        try:
            model = LicenseKeyModel.objects.get(license_key=key)  # pylint: disable=no-member
            return self._to_domain(model)
        except LicenseKeyModel.DoesNotExist:  # pylint: disable=no-member
            return None

    @sync_to_async
    @translate_store_errors
    def list_all(self, active_only: bool = False) -> List[LicenseKey]:
        """
        List license keys, newest first.

        Args:
            active_only: Restrict to active keys

        Returns:
            List of LicenseKey entities
        """
        queryset = LicenseKeyModel.objects.all()  # pylint: disable=no-member
        if active_only:
            queryset = queryset.filter(active=True)
        return [self._to_domain(model) for model in queryset.order_by("-created_at")]

    @sync_to_async
    @translate_store_errors
    def mark_used(self, key: str, used_at: datetime) -> bool:
        """
        Stamp ``last_used_at`` on an active key.

        Args:
            key: License key string
            used_at: Verification time

        Returns:
            True if an active key was updated, False otherwise
        """
        # pylint: disable=no-member
        updated = LicenseKeyModel.objects.filter(license_key=key, active=True).update(
            last_used_at=used_at
        )
        return updated > 0

    @sync_to_async
    @translate_store_errors
    def toggle_active(self, key: str) -> Optional[bool]:
        """
        Flip the active flag of a key.

        Args:
            key: License key string

        Returns:
            The new active flag, or None if the key does not exist
        """
        with transaction.atomic():
            # pylint: disable=no-member
            updated = LicenseKeyModel.objects.filter(license_key=key).update(
                active=Case(
                    When(active=True, then=Value(False)),
                    default=Value(True),
                )
            )
            if not updated:
                return None
            return (
                LicenseKeyModel.objects.filter(license_key=key)
                .values_list("active", flat=True)
                .get()
            )

    @sync_to_async
    @translate_store_errors
    def record_heartbeat(self, key: str, address: str, seen_at: datetime) -> bool:
        """
        Stamp ``last_heartbeat_at`` and ``last_address`` on a key.

        Args:
            key: License key string
            address: Reported network address
            seen_at: Heartbeat time

        Returns:
            True if the key exists and was updated, False otherwise
        """
        # pylint: disable=no-member
        updated = LicenseKeyModel.objects.filter(license_key=key).update(
            last_heartbeat_at=seen_at,
            last_address=address,
        )
        return updated > 0

    @sync_to_async
    @translate_store_errors
    def delete(self, key: str) -> bool:
        """
        Delete a license key.

        Args:
            key: License key string

        Returns:
            True if a key was deleted, False if it did not exist
        """
        # pylint: disable=no-member
        deleted, _ = LicenseKeyModel.objects.filter(license_key=key).delete()
        return deleted > 0

    @sync_to_async
    @translate_store_errors
    def exists(self, key: str) -> bool:
        """
        Check if a license key exists.

        Args:
            key: License key string

        Returns:
            True if license key exists, False otherwise
        """
        return LicenseKeyModel.objects.filter(license_key=key).exists()  # pylint: disable=no-member
