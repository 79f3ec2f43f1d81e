"""
AddressSighting domain entity.

One observed (license key, network address) pairing.
"""

from dataclasses import dataclass
from datetime import datetime

from core.domain.value_objects import NetworkAddress


@dataclass(frozen=True)
class AddressSighting:
    """
    AddressSighting domain entity.

    ``first_seen_at`` is fixed by the first sighting;
    ``last_seen_at`` only ever moves forward.
    """

    license_key: str
    address: NetworkAddress
    first_seen_at: datetime
    last_seen_at: datetime

    def __post_init__(self):
        """Validate sighting entity."""
        if not self.license_key:
            raise ValueError("License key is required")
        if self.last_seen_at < self.first_seen_at:
            raise ValueError("last_seen_at cannot precede first_seen_at")

    @classmethod
    def first(cls, license_key: str, address: str, seen_at: datetime) -> "AddressSighting":
        """
        Create the first sighting of an address for a key.

        Args:
            license_key: License key string
            address: Network address
            seen_at: Sighting time

        Returns:
            AddressSighting entity instance
        """
        return cls(
            license_key=license_key,
            address=NetworkAddress(address),
            first_seen_at=seen_at,
            last_seen_at=seen_at,
        )

    def seen_again(self, seen_at: datetime) -> "AddressSighting":
        """
        Return a copy updated by a repeat sighting.

        Args:
            seen_at: Repeat sighting time

        Returns:
            New AddressSighting instance
        """
        return AddressSighting(
            license_key=self.license_key,
            address=self.address,
            first_seen_at=self.first_seen_at,
            last_seen_at=max(self.last_seen_at, seen_at),
        )
