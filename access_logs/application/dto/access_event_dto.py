"""
Access event DTOs for API responses.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from access_logs.domain.access_event import AccessEvent


@dataclass
class AccessEventDTO:
    """DTO for one access log entry."""

    id: Optional[int]
    license_key: str
    action: str
    status: str
    address: Optional[str]
    timestamp: datetime

    @classmethod
    def from_entity(cls, entity: AccessEvent) -> "AccessEventDTO":
        """Build DTO from an AccessEvent."""
        return cls(
            id=entity.id,
            license_key=entity.license_key,
            action=entity.action,
            status=entity.status,
            address=entity.address,
            timestamp=entity.timestamp,
        )
