"""
License key DTOs for API responses.
"""
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import List, Optional

from licenses.domain.license_key import LicenseKey
from presence.domain.address_sighting import AddressSighting


@dataclass
class LicenseKeyDTO:
    """DTO for license key information."""

    license_key: str
    owner: str
    active: bool
    created_at: datetime
    last_used_at: Optional[datetime]
    last_heartbeat_at: Optional[datetime]
    last_address: Optional[str]
    is_online: bool

    @classmethod
    def from_entity(cls, entity: LicenseKey, now: datetime, window: timedelta) -> "LicenseKeyDTO":
        """Build DTO from a LicenseKey, computing online status at ``now``."""
        return cls(
            license_key=entity.key,
            owner=entity.owner,
            active=entity.active,
            created_at=entity.created_at,
            last_used_at=entity.last_used_at,
            last_heartbeat_at=entity.last_heartbeat_at,
            last_address=entity.last_address,
            is_online=entity.is_online(now, window),
        )


@dataclass
class AddressSightingDTO:
    """DTO for one address seen for a key."""

    address: str
    first_seen_at: datetime
    last_seen_at: datetime

    @classmethod
    def from_entity(cls, entity: AddressSighting) -> "AddressSightingDTO":
        """Build DTO from an AddressSighting."""
        return cls(
            address=str(entity.address),
            first_seen_at=entity.first_seen_at,
            last_seen_at=entity.last_seen_at,
        )


@dataclass
class KeyStatisticsDTO(LicenseKeyDTO):
    """DTO for detailed per-key statistics."""

    comments_count: int = 0
    unique_addresses: int = 0
    addresses: List[AddressSightingDTO] = field(default_factory=list)


@dataclass
class PublicKeyStatsDTO:
    """DTO for the public leaderboard. Never carries the key itself."""

    owner: str
    comments_count: int
    created_at: datetime
    is_online: bool


@dataclass
class VerificationDTO:
    """DTO for a verification outcome."""

    valid: bool
    message: str
    owner: Optional[str] = None


@dataclass
class ResetCommentsResultDTO:
    """DTO for the reset comments outcome."""

    license_key: str
    deleted_count: int
