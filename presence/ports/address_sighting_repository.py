"""
AddressSighting repository port (interface).

This defines the contract for address sighting persistence operations.
Implementations are in the infrastructure layer.
"""
from abc import ABC, abstractmethod
from datetime import datetime
from typing import List

from presence.domain.address_sighting import AddressSighting


class AddressSightingRepository(ABC):
    """
    Abstract repository for AddressSighting entities.

    The pair (license_key, address) is unique.
    """

    @abstractmethod
    async def upsert(self, license_key: str, address: str, seen_at: datetime) -> AddressSighting:
        """
        Insert a sighting or advance ``last_seen_at`` of the existing one.

        Must be atomic: concurrent upserts for the same pair never lose
        an update and never create two rows.

        Args:
            license_key: License key string
            address: Network address
            seen_at: Sighting time

        Returns:
            The stored sighting
        """
        pass

    @abstractmethod
    async def count_for_key(self, license_key: str) -> int:
        """
        Count distinct addresses seen for a key.

        Args:
            license_key: License key string

        Returns:
            Number of distinct addresses
        """
        pass

    @abstractmethod
    async def find_by_key(self, license_key: str) -> List[AddressSighting]:
        """
        Find all sightings for a key, most recently seen first.

        Args:
            license_key: License key string

        Returns:
            List of AddressSighting entities
        """
        pass
