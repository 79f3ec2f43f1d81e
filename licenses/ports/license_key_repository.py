"""
LicenseKey repository port (interface).

This defines the contract for license key persistence operations.
Implementations are in the infrastructure layer.

Every mutating method is a single atomic statement at the store level
so that concurrent requests for the same key never lose an update.
"""
from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from licenses.domain.license_key import LicenseKey


class LicenseKeyRepository(ABC):
    """
    Abstract repository for LicenseKey entities.

    This is a port in hexagonal architecture - it defines
    what operations are available, not how they're implemented.
    """

    @abstractmethod
    async def insert(self, license_key: LicenseKey) -> LicenseKey:
        """
        Insert a new license key, rejecting duplicates.

        Args:
            license_key: LicenseKey entity to insert

        Returns:
            Stored license key entity

        Raises:
            DuplicateLicenseKeyError: If the key already exists
        """
        pass

    @abstractmethod
    async def find_by_key(self, key: str) -> Optional[LicenseKey]:
        """
        Find a license key by key string.

        Args:
            key: License key string

        Returns:
            LicenseKey entity or None if not found
        """
        pass

    @abstractmethod
    async def list_all(self, active_only: bool = False) -> List[LicenseKey]:
        """
        List license keys, newest first.

        Args:
            active_only: Restrict to active keys

        Returns:
            List of LicenseKey entities
        """
        pass

    @abstractmethod
    async def mark_used(self, key: str, used_at: datetime) -> bool:
        """
        Stamp ``last_used_at`` on an active key.

        Args:
            key: License key string
            used_at: Verification time

        Returns:
            True if an active key was updated, False otherwise
        """
        pass

    @abstractmethod
    async def toggle_active(self, key: str) -> Optional[bool]:
        """
        Flip the active flag of a key.

        Args:
            key: License key string

        Returns:
            The new active flag, or None if the key does not exist
        """
        pass

    @abstractmethod
    async def record_heartbeat(self, key: str, address: str, seen_at: datetime) -> bool:
        """
        Stamp ``last_heartbeat_at`` and ``last_address`` on a key.

        Args:
            key: License key string
            address: Reported network address
            seen_at: Heartbeat time

        Returns:
            True if the key exists and was updated, False otherwise
        """
        pass

    @abstractmethod
    async def delete(self, key: str) -> bool:
        """
        Delete a license key.

        Args:
            key: License key string

        Returns:
            True if a key was deleted, False if it did not exist
        """
        pass

    @abstractmethod
    async def exists(self, key: str) -> bool:
        """
        Check if a license key exists.

        Args:
            key: License key string

        Returns:
            True if license key exists, False otherwise
        """
        pass
