"""
Django implementation of AddressSightingRepository port.

This adapter converts between domain entities and Django ORM models.
"""
from datetime import datetime
from typing import List

from asgiref.sync import sync_to_async
from django.db import transaction

from core.domain.value_objects import NetworkAddress
from core.infrastructure.database import translate_store_errors
from presence.domain.address_sighting import AddressSighting
from presence.infrastructure.models import AddressSighting as AddressSightingModel
from presence.ports.address_sighting_repository import AddressSightingRepository


class DjangoAddressSightingRepository(AddressSightingRepository):
    """Django ORM implementation of AddressSightingRepository."""

    def _to_domain(self, model: AddressSightingModel) -> AddressSighting:
        """
        Convert Django model to domain entity.

        Args:
            model: Django AddressSighting model

        Returns:
            AddressSighting domain entity
        """
        return AddressSighting(
            license_key=model.license_key,
            address=NetworkAddress(model.address),
            first_seen_at=model.first_seen_at,
            last_seen_at=model.last_seen_at,
        )

    @sync_to_async
    @translate_store_errors
    def upsert(self, license_key: str, address: str, seen_at: datetime) -> AddressSighting:
        """
        Insert a sighting or advance ``last_seen_at`` of the existing one.

        The insert ignores unique conflicts so racing writers collapse
        onto one row; the follow-up UPDATE only moves ``last_seen_at``
        forward.

        Args:
            license_key: License key string
            address: Network address
            seen_at: Sighting time

        Returns:
            The stored sighting
        """
        # pylint: disable=no-member
        with transaction.atomic():
            AddressSightingModel.objects.bulk_create(
                [
                    AddressSightingModel(
                        license_key=license_key,
                        address=address,
                        first_seen_at=seen_at,
                        last_seen_at=seen_at,
                    )
                ],
                ignore_conflicts=True,
            )
            pair = AddressSightingModel.objects.filter(license_key=license_key, address=address)
            pair.filter(last_seen_at__lt=seen_at).update(last_seen_at=seen_at)
            return self._to_domain(pair.get())

    @sync_to_async
    @translate_store_errors
    def count_for_key(self, license_key: str) -> int:
        """
        Count distinct addresses seen for a key.

        Args:
            license_key: License key string

        Returns:
            Number of distinct addresses
        """
        # pylint: disable=no-member
        return AddressSightingModel.objects.filter(license_key=license_key).count()

    @sync_to_async
    @translate_store_errors
    def find_by_key(self, license_key: str) -> List[AddressSighting]:
        """
        Find all sightings for a key, most recently seen first.

        Args:
            license_key: License key string

        Returns:
            List of AddressSighting entities
        """
        # pylint: disable=no-member
        queryset = AddressSightingModel.objects.filter(license_key=license_key).order_by(
            "-last_seen_at", "address"
        )
        return [self._to_domain(model) for model in queryset]
