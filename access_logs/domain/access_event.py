"""
AccessEvent domain entity.

One immutable journal entry.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Union

from core.domain.value_objects import MAX_ADDRESS_LENGTH, AccessAction

MAX_LOGGED_KEY_LENGTH = 50


@dataclass(frozen=True)
class AccessEvent:
    """
    AccessEvent domain entity.

    ``license_key`` may be empty for account events with no bound key,
    and may name a key that no longer exists.
    """

    license_key: str
    action: str
    status: str
    timestamp: datetime
    address: Optional[str] = None
    id: Optional[int] = None

    def __post_init__(self):
        """Validate event entity."""
        if not self.action:
            raise ValueError("Action is required")
        if not self.status:
            raise ValueError("Status is required")
        if self.address is not None and len(self.address) > MAX_ADDRESS_LENGTH:
            raise ValueError("Network address too long")

    @classmethod
    def record(
        cls,
        license_key: Optional[str],
        action: Union[AccessAction, str],
        status: str,
        timestamp: datetime,
        address: Optional[str] = None,
    ) -> "AccessEvent":
        """
        Build a new, not yet stored, event.

        Keys longer than a real key can be are truncated.

        Args:
            license_key: License key string, None for none
            action: AccessAction or its string value
            status: Outcome tag
            timestamp: Event time
            address: Optional network address

        Returns:
            AccessEvent entity instance
        """
        return cls(
            license_key=(license_key or "")[:MAX_LOGGED_KEY_LENGTH],
            action=str(action),
            status=status,
            timestamp=timestamp,
            address=address or None,
        )
