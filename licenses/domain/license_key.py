"""
LicenseKey domain entity.

This is the core domain entity representing an issued license key
and its mutable usage state.
It contains business logic and is independent of infrastructure.
"""

import secrets
import string
from dataclasses import dataclass, replace
from datetime import datetime, timedelta
from typing import Optional

from core.domain.events import utc_now

KEY_PREFIX = "TW-"
KEY_BODY_LENGTH = 13
KEY_ALPHABET = string.digits + string.ascii_uppercase
MAX_KEY_LENGTH = 50
MAX_OWNER_LENGTH = 255
DEFAULT_ONLINE_WINDOW = timedelta(seconds=60)


def generate_license_key() -> str:
    """
    Generate a license key in format: TW-XXXXXXXXXXXXX.

    The body is 13 uppercase base36 characters drawn from a CSPRNG.

    Returns:
        Generated license key string
    """
    body = "".join(secrets.choice(KEY_ALPHABET) for _ in range(KEY_BODY_LENGTH))
    return f"{KEY_PREFIX}{body}"


@dataclass(frozen=True)
class LicenseKey:
    """
    LicenseKey domain entity.

    The ``key`` is the identity of the entity and never changes.
    This is an immutable value object with business logic.
    """

    key: str
    owner: str
    active: bool
    created_at: datetime
    last_used_at: Optional[datetime] = None
    last_heartbeat_at: Optional[datetime] = None
    last_address: Optional[str] = None

    def __post_init__(self):
        """Validate license key entity."""
        if not self.key or len(self.key.strip()) == 0:
            raise ValueError("License key cannot be empty")
        if len(self.key) > MAX_KEY_LENGTH:
            raise ValueError("License key too long")
        if not self.owner or len(self.owner.strip()) == 0:
            raise ValueError("Owner cannot be empty")
        if len(self.owner) > MAX_OWNER_LENGTH:
            raise ValueError("Owner too long")

    @classmethod
    def create(
        cls,
        owner: str,
        key: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> "LicenseKey":
        """
        Create a new, active LicenseKey entity.

        Args:
            owner: Free-text owner label
            key: Optional key string (generated if not provided)
            now: Optional creation time

        Returns:
            LicenseKey entity instance
        """
        return cls(
            key=key or generate_license_key(),
            owner=owner.strip(),
            active=True,
            created_at=now or utc_now(),
        )

    def is_online(self, now: datetime, window: timedelta = DEFAULT_ONLINE_WINDOW) -> bool:
        """
        Check whether a heartbeat was received within ``window`` of ``now``.

        Args:
            now: Reference time
            window: Maximum heartbeat age

        Returns:
            True if the last heartbeat is recent enough
        """
        if self.last_heartbeat_at is None:
            return False
        return now - self.last_heartbeat_at <= window

    def toggled(self) -> "LicenseKey":
        """Return a copy with the active flag flipped."""
        return replace(self, active=not self.active)

    def mark_used(self, now: datetime) -> "LicenseKey":
        """Return a copy stamped with a successful verification."""
        return replace(self, last_used_at=now)

    def mark_heartbeat(self, address: str, now: datetime) -> "LicenseKey":
        """Return a copy stamped with a heartbeat from ``address``."""
        return replace(self, last_heartbeat_at=now, last_address=address)
