"""
AccessEvent repository port (interface).

This defines the contract for access journal persistence operations.
Implementations are in the infrastructure layer.
"""
from abc import ABC, abstractmethod
from typing import List

from access_logs.domain.access_event import AccessEvent


class AccessEventRepository(ABC):
    """
    Abstract repository for AccessEvent entities.

    Events are never updated once inserted.
    """

    @abstractmethod
    async def insert(self, event: AccessEvent) -> AccessEvent:
        """
        Append an event.

        Args:
            event: AccessEvent entity to append

        Returns:
            Stored event (with its id)
        """
        pass

    @abstractmethod
    async def recent(self, limit: int) -> List[AccessEvent]:
        """
        Most recent events first.

        Args:
            limit: Maximum number of events

        Returns:
            List of AccessEvent entities
        """
        pass

    @abstractmethod
    async def count_by_action(self, license_key: str, action: str) -> int:
        """
        Count events for a key with the given action.

        Args:
            license_key: License key string
            action: Action value

        Returns:
            Number of matching events
        """
        pass

    @abstractmethod
    async def delete_by_action(self, license_key: str, action: str) -> int:
        """
        Delete all events for a key with the given action.

        Args:
            license_key: License key string
            action: Action value

        Returns:
            Number of deleted events
        """
        pass

    @abstractmethod
    async def prune(self, keep: int) -> int:
        """
        Delete all but the ``keep`` most recent events.

        Args:
            keep: Number of events to retain

        Returns:
            Number of deleted events
        """
        pass

    @abstractmethod
    async def count(self) -> int:
        """Total number of stored events."""
        pass
