"""
Django implementation of AccessEventRepository port.

This adapter converts between domain entities and Django ORM models.
"""
from typing import List

from asgiref.sync import sync_to_async
from django.db.models import Q

from access_logs.domain.access_event import AccessEvent
from access_logs.infrastructure.models import AccessEvent as AccessEventModel
from access_logs.ports.access_event_repository import AccessEventRepository
from core.infrastructure.database import translate_store_errors

NEWEST_FIRST = ("-timestamp", "-id")


class DjangoAccessEventRepository(AccessEventRepository):
    """
    Django ORM implementation of AccessEventRepository.

    Retention is not enforced on insert; ``prune`` trims the table.
    """

    def _to_domain(self, model: AccessEventModel) -> AccessEvent:
        """
        Convert Django model to domain entity.

        Args:
            model: Django AccessEvent model

        Returns:
            AccessEvent domain entity
        """
        return AccessEvent(
            id=model.id,
            license_key=model.license_key,
            action=model.action,
            status=model.status,
            address=model.address,
            timestamp=model.timestamp,
        )

    @sync_to_async
    @translate_store_errors
    def insert(self, event: AccessEvent) -> AccessEvent:
        """
        Append an event.

        Args:
            event: AccessEvent entity to append

        Returns:
            Stored event
        """
        # pylint: disable=no-member
        model = AccessEventModel.objects.create(
            license_key=event.license_key,
            action=event.action,
            status=event.status,
            address=event.address,
            timestamp=event.timestamp,
        )
        return self._to_domain(model)

    @sync_to_async
    @translate_store_errors
    def recent(self, limit: int) -> List[AccessEvent]:
        """
        Most recent events first.

        Args:
            limit: Maximum number of events

        Returns:
            List of AccessEvent entities
        """
        # pylint: disable=no-member
        queryset = AccessEventModel.objects.order_by(*NEWEST_FIRST)[: max(limit, 0)]
        return [self._to_domain(model) for model in queryset]

    @sync_to_async
    @translate_store_errors
    def count_by_action(self, license_key: str, action: str) -> int:
        """
        Count events for a key with the given action.

        Args:
            license_key: License key string
            action: Action value

        Returns:
            Number of matching events
        """
        # pylint: disable=no-member
        return AccessEventModel.objects.filter(license_key=license_key, action=action).count()

    @sync_to_async
    @translate_store_errors
    def delete_by_action(self, license_key: str, action: str) -> int:
        """
        Delete all events for a key with the given action.

        Args:
            license_key: License key string
            action: Action value

        Returns:
            Number of deleted events
        """
        # pylint: disable=no-member
        deleted, _ = AccessEventModel.objects.filter(
            license_key=license_key, action=action
        ).delete()
        return deleted

    @sync_to_async
    @translate_store_errors
    def prune(self, keep: int) -> int:
        """
        Delete all but the ``keep`` most recent events.

        The oldest retained row is located by offset and everything
        older than it is deleted in one statement.

        Args:
            keep: Number of events to retain

        Returns:
            Number of deleted events
        """
        # pylint: disable=no-member
        if keep <= 0:
            deleted, _ = AccessEventModel.objects.all().delete()
            return deleted

        oldest_kept = list(
            AccessEventModel.objects.order_by(*NEWEST_FIRST).values("timestamp", "id")[
                keep - 1 : keep
            ]
        )
        if not oldest_kept:
            return 0
        boundary = oldest_kept[0]

        deleted, _ = AccessEventModel.objects.filter(
            Q(timestamp__lt=boundary["timestamp"])
            | Q(timestamp=boundary["timestamp"], id__lt=boundary["id"])
        ).delete()
        return deleted

    @sync_to_async
    @translate_store_errors
    def count(self) -> int:
        """Total number of stored events."""
        return AccessEventModel.objects.count()  # pylint: disable=no-member
