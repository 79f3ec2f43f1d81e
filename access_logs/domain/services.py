"""
Access log domain services.

Domain services contain business logic that doesn't naturally
fit within a single entity.
"""

import logging
from datetime import datetime
from typing import Callable, List, Optional, Union

from access_logs.domain.access_event import AccessEvent
from access_logs.ports.access_event_repository import AccessEventRepository
from core.domain.events import utc_now
from core.domain.value_objects import AccessAction
from core.metrics import access_log_pruned_total, access_log_write_failures_total

logger = logging.getLogger(__name__)

DEFAULT_MAX_EVENTS = 1000
DEFAULT_RECENT_LIMIT = 100


class AccessLog:
    """
    Domain service over the append-only access journal.

    ``append`` never raises: a failed write is reported on the log
    stream and the triggering operation carries on.
    """

    def __init__(
        self,
        repository: AccessEventRepository,
        max_events: int = DEFAULT_MAX_EVENTS,
        recent_limit: int = DEFAULT_RECENT_LIMIT,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.repository = repository
        self.max_events = max_events
        self.recent_limit = recent_limit
        self.clock = clock

    async def append(
        self,
        license_key: Optional[str],
        action: Union[AccessAction, str],
        status: str,
        address: Optional[str] = None,
        timestamp: Optional[datetime] = None,
    ) -> Optional[AccessEvent]:
        """
        Append one event.

        Args:
            license_key: License key string (None or empty for none)
            action: AccessAction or its string value
            status: Outcome tag
            address: Optional network address
            timestamp: Event time, defaults to now

        Returns:
            Stored event, or None if the write failed
        """
        try:
            event = AccessEvent.record(
                license_key=license_key,
                action=action,
                status=status,
                timestamp=timestamp or self.clock(),
                address=address,
            )
            return await self.repository.insert(event)
        except Exception as e:  # pylint: disable=broad-exception-caught
            access_log_write_failures_total.inc()
            logger.error(
                "Dropped access log event %s/%s for %r: %s",
                action,
                status,
                license_key,
                e,
                exc_info=True,
            )
            return None

    async def recent(self, limit: Optional[int] = None) -> List[AccessEvent]:
        """Most recent events first, ``recent_limit`` by default."""
        return await self.repository.recent(self.recent_limit if limit is None else limit)

    async def count_by_action(self, license_key: str, action: Union[AccessAction, str]) -> int:
        """Count events for a key with the given action."""
        return await self.repository.count_by_action(license_key, str(action))

    async def purge(self, license_key: str, action: Union[AccessAction, str]) -> int:
        """
        Delete every event for ``license_key`` with ``action``.

        Args:
            license_key: License key string
            action: AccessAction or its string value

        Returns:
            Number of events removed
        """
        deleted = await self.repository.delete_by_action(license_key, str(action))
        logger.info("Purged %s %s events for %s", deleted, action, license_key)
        return deleted

    async def enforce_retention(self, keep: Optional[int] = None) -> int:
        """
        Trim the journal to the ``keep`` most recent events.

        Args:
            keep: Events to retain, ``max_events`` by default

        Returns:
            Number of events removed
        """
        deleted = await self.repository.prune(self.max_events if keep is None else keep)
        if deleted:
            access_log_pruned_total.inc(deleted)
            logger.info("Pruned %s access log events", deleted)
        return deleted

    async def size(self) -> int:
        """Number of stored events."""
        return await self.repository.count()
