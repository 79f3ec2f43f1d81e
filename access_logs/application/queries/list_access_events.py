"""
ListAccessEventsQuery.

Query for the most recent access log entries.
"""
from dataclasses import dataclass
from typing import Optional


@dataclass
class ListAccessEventsQuery:
    """Query to list recent access events, newest first."""

    limit: Optional[int] = None
