"""
License key domain services.

Domain services contain business logic that doesn't naturally
fit within a single entity.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, List, Optional

from access_logs.domain.services import AccessLog
from core.domain.events import utc_now
from core.domain.exceptions import (
    DuplicateLicenseKeyError,
    LicenseKeyNotFoundError,
    ValidationError,
)
from core.domain.value_objects import AccessAction, AccessStatus, NetworkAddress
from core.metrics import (
    heartbeats_total,
    license_keys_created_total,
    license_keys_toggled_total,
    license_verifications_total,
)
from licenses.domain.license_key import DEFAULT_ONLINE_WINDOW, MAX_OWNER_LENGTH, LicenseKey
from licenses.ports.license_key_repository import LicenseKeyRepository
from presence.domain.services import PresenceTracker

logger = logging.getLogger(__name__)

MAX_KEY_ATTEMPTS = 3


@dataclass(frozen=True)
class VerificationResult:
    """Outcome of a license key verification."""

    valid: bool
    reason: str
    owner: Optional[str] = None

    @property
    def message(self) -> str:
        """Human-readable outcome."""
        if self.valid:
            return "License key is valid"
        if self.reason == AccessStatus.INACTIVE:
            return "License key is inactive"
        return "Invalid license key"


class KeyStore:
    """
    Domain service owning license key state transitions.

    Every outcome that touches a key, successful or not, is appended
    to the access log; a failed append never fails the operation.
    """

    def __init__(
        self,
        repository: LicenseKeyRepository,
        presence_tracker: PresenceTracker,
        access_log: AccessLog,
        clock: Callable[[], datetime] = utc_now,
        online_window: timedelta = DEFAULT_ONLINE_WINDOW,
    ):
        """Initialize key store with its collaborators."""
        self.repository = repository
        self.presence_tracker = presence_tracker
        self.access_log = access_log
        self.clock = clock
        self.online_window = online_window

    async def create(self, owner: str, address: Optional[str] = None) -> LicenseKey:
        """
        Issue a new active license key.

        Args:
            owner: Free-text owner label
            address: Optional address of the caller, for the access log

        Returns:
            The stored LicenseKey

        Raises:
            ValidationError: If owner is empty or too long
            DuplicateLicenseKeyError: If no free key could be generated
        """
        owner = (owner or "").strip()
        if not owner:
            raise ValidationError("Owner is required")
        if len(owner) > MAX_OWNER_LENGTH:
            raise ValidationError(f"Owner must be at most {MAX_OWNER_LENGTH} characters")

        for attempt in range(1, MAX_KEY_ATTEMPTS + 1):
            candidate = LicenseKey.create(owner=owner, now=self.clock())
            try:
                stored = await self.repository.insert(candidate)
                break
            except DuplicateLicenseKeyError:
                logger.warning("Generated key collided (attempt %s)", attempt)
        else:
            raise DuplicateLicenseKeyError("Could not generate a unique license key")

        license_keys_created_total.inc()
        await self.access_log.append(
            stored.key, AccessAction.CREATE, AccessStatus.SUCCESS, address, stored.created_at
        )
        logger.info("Created license key %s for %s", stored.key, owner)
        return stored

    async def get(self, key: str) -> LicenseKey:
        """
        Get a license key.

        Raises:
            LicenseKeyNotFoundError: If the key does not exist
        """
        license_key = await self.repository.find_by_key(key) if key else None
        if license_key is None:
            raise LicenseKeyNotFoundError()
        return license_key

    async def list_keys(self, active_only: bool = False) -> List[LicenseKey]:
        """List license keys, newest first."""
        return await self.repository.list_all(active_only=active_only)

    async def verify(self, key: str, address: Optional[str] = None) -> VerificationResult:
        """
        Verify a license key.

        An unknown key is ``invalid_key``, a deactivated key ``inactive``.
        A valid key gets ``last_used_at`` stamped.

        Args:
            key: License key string
            address: Optional caller address, for the access log

        Returns:
            VerificationResult
        """
        now = self.clock()
        license_key = await self.repository.find_by_key(key) if key else None

        if license_key is None:
            result = VerificationResult(valid=False, reason=AccessStatus.INVALID_KEY)
        elif not license_key.active:
            result = VerificationResult(valid=False, reason=AccessStatus.INACTIVE)
        elif not await self.repository.mark_used(key, now):
            # Deactivated between the read and the conditional update
            result = VerificationResult(valid=False, reason=AccessStatus.INACTIVE)
        else:
            result = VerificationResult(
                valid=True, reason=AccessStatus.SUCCESS, owner=license_key.owner
            )

        license_verifications_total.labels(status=result.reason).inc()
        await self.access_log.append(key, AccessAction.VERIFY, result.reason, address, now)
        return result

    async def toggle_active(self, key: str, address: Optional[str] = None) -> bool:
        """
        Flip the active flag of a key.

        Returns:
            The new active flag

        Raises:
            LicenseKeyNotFoundError: If the key does not exist
        """
        active = await self.repository.toggle_active(key) if key else None
        if active is None:
            raise LicenseKeyNotFoundError()

        status = AccessStatus.ACTIVATED if active else AccessStatus.DEACTIVATED
        license_keys_toggled_total.labels(status=status).inc()
        await self.access_log.append(key, AccessAction.TOGGLE, status, address)
        logger.info("License key %s %s", key, status)
        return active

    async def delete(self, key: str, address: Optional[str] = None) -> None:
        """
        Delete a key. Its access history and sightings are kept.

        Raises:
            LicenseKeyNotFoundError: If the key does not exist
        """
        if not key or not await self.repository.delete(key):
            raise LicenseKeyNotFoundError()

        await self.access_log.append(key, AccessAction.DELETE, AccessStatus.SUCCESS, address)
        logger.info("Deleted license key %s", key)

    async def record_heartbeat(
        self, key: str, address: str, now: Optional[datetime] = None
    ) -> None:
        """
        Record a heartbeat from ``address``.

        Stamps the key and records the address sighting.

        Args:
            key: License key string
            address: Reported network address
            now: Heartbeat time, defaults to the clock

        Raises:
            ValidationError: If the address is empty or too long
            LicenseKeyNotFoundError: If the key does not exist
        """
        try:
            NetworkAddress(address)
        except ValueError as exc:
            raise ValidationError(str(exc)) from exc

        now = now or self.clock()
        if not key or not await self.repository.record_heartbeat(key, address, now):
            heartbeats_total.labels(status=AccessStatus.INVALID_KEY).inc()
            await self.access_log.append(
                key, AccessAction.HEARTBEAT, AccessStatus.INVALID_KEY, address, now
            )
            raise LicenseKeyNotFoundError()

        await self.presence_tracker.record(key, address, now)
        heartbeats_total.labels(status=AccessStatus.SUCCESS).inc()
        await self.access_log.append(
            key, AccessAction.HEARTBEAT, AccessStatus.SUCCESS, address, now
        )

    async def is_online(self, key: str, now: Optional[datetime] = None) -> bool:
        """
        Whether the key sent a heartbeat within the online window.

        Raises:
            LicenseKeyNotFoundError: If the key does not exist
        """
        license_key = await self.get(key)
        return license_key.is_online(now or self.clock(), self.online_window)

    async def log_comment(self, key: str, address: Optional[str] = None) -> None:
        """
        Count one posted comment against a key.

        Raises:
            LicenseKeyNotFoundError: If the key does not exist
        """
        if not key or not await self.repository.exists(key):
            raise LicenseKeyNotFoundError()
        await self.access_log.append(
            key, AccessAction.COMMENT_POSTED, AccessStatus.SUCCESS, address
        )

    async def comment_count(self, key: str) -> int:
        """Number of comments posted with a key."""
        return await self.access_log.count_by_action(key, AccessAction.COMMENT_POSTED)

    async def reset_comments(self, key: str) -> int:
        """
        Remove every ``comment_posted`` event of a key.

        Returns:
            Number of events removed
        """
        if not key:
            raise ValidationError("License key is required")
        return await self.access_log.purge(key, AccessAction.COMMENT_POSTED)
