"""
Presence domain services.

Domain services contain business logic that doesn't naturally
fit within a single entity.
"""

import logging
from datetime import datetime
from typing import List

from core.domain.exceptions import ValidationError
from core.domain.value_objects import NetworkAddress
from presence.domain.address_sighting import AddressSighting
from presence.ports.address_sighting_repository import AddressSightingRepository

logger = logging.getLogger(__name__)


class PresenceTracker:
    """
    Domain service recording where each license key has been seen.

    The key's own ``last_address`` answers "where is it now";
    the sightings answer "where has it ever been" without scanning
    the access log, which is pruned.
    """

    def __init__(self, repository: AddressSightingRepository):
        """Initialize tracker with its repository."""
        self.repository = repository

    async def record(self, license_key: str, address: str, now: datetime) -> AddressSighting:
        """
        Record a sighting of ``address`` for ``license_key``.

        Idempotent for repeated (key, address) pairs apart from
        advancing ``last_seen_at``.

        Args:
            license_key: License key string
            address: Network address
            now: Sighting time

        Returns:
            The stored sighting

        Raises:
            ValidationError: If the address is empty or too long
        """
        try:
            NetworkAddress(address)
        except ValueError as exc:
            raise ValidationError(str(exc)) from exc

        sighting = await self.repository.upsert(license_key, address, now)
        logger.debug("Recorded sighting of %s for %s", address, license_key)
        return sighting

    async def unique_address_count(self, license_key: str) -> int:
        """Number of distinct addresses ever seen for a key."""
        return await self.repository.count_for_key(license_key)

    async def addresses_for(self, license_key: str) -> List[AddressSighting]:
        """Sightings for a key, most recently seen first."""
        return await self.repository.find_by_key(license_key)
