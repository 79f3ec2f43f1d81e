"""
Event handlers for domain events.

These handlers process domain events for side effects
like audit logging.
"""

import logging

from accounts.domain.events import AccountCreated, AccountDeleted, AccountRoleUpdated
from core.domain.events import DomainEvent, EventHandler
from licenses.domain.events import (
    CommentsReset,
    LicenseKeyCreated,
    LicenseKeyDeleted,
    LicenseKeyToggled,
)

logger = logging.getLogger(__name__)

AUDITED_EVENTS = (
    LicenseKeyCreated,
    LicenseKeyToggled,
    LicenseKeyDeleted,
    CommentsReset,
    AccountCreated,
    AccountRoleUpdated,
    AccountDeleted,
)


class AuditLogEventHandler(EventHandler):
    """
    Event handler for audit logging.

    Writes every administrative domain event to the structured log.
    """

    async def handle(self, event: DomainEvent) -> None:
        """
        Handle domain event for audit logging.

        Args:
            event: Domain event to log
        """
        logger.info(
            "Audit log: %s - %s",
            event.event_type,
            event.aggregate_id,
            extra={
                "event_id": str(event.event_id),
                "event_type": event.event_type,
                "aggregate_id": event.aggregate_id,
                "occurred_at": event.occurred_at.isoformat(),
                "actor": getattr(event, "actor", None),
            },
        )


def register_event_handlers():
    """Register all event handlers with the event bus."""
    from core.infrastructure.events import event_bus

    audit_handler = AuditLogEventHandler()
    for event_type in AUDITED_EVENTS:
        event_bus.subscribe(event_type, audit_handler)

    logger.info("Event handlers registered")
