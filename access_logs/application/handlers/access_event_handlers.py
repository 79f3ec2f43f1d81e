"""
Access log query handlers.
"""
from typing import List

from access_logs.application.dto.access_event_dto import AccessEventDTO
from access_logs.application.queries.list_access_events import ListAccessEventsQuery
from access_logs.domain.services import AccessLog


class ListAccessEventsHandler:
    """Handler for ListAccessEventsQuery."""

    def __init__(self, access_log: AccessLog):
        """Initialize handler with the access log."""
        self.access_log = access_log

    async def handle(self, query: ListAccessEventsQuery) -> List[AccessEventDTO]:
        """
        Handle list access events query.

        Returns:
            List of AccessEventDTO, newest first
        """
        events = await self.access_log.recent(query.limit)
        return [AccessEventDTO.from_entity(event) for event in events]
