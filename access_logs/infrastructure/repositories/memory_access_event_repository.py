"""
Bounded in-memory implementation of AccessEventRepository port.

Retention is enforced at insert time: once ``max_events`` events are
held, each append evicts the oldest one.
"""
import itertools
import threading
from collections import deque
from dataclasses import replace
from typing import List

from access_logs.domain.access_event import AccessEvent
from access_logs.ports.access_event_repository import AccessEventRepository


class BoundedMemoryAccessEventRepository(AccessEventRepository):
    """
    Process-local ring buffer of access events.

    Events are kept in insertion order, oldest at the left.
    """

    def __init__(self, max_events: int = 1000):
        if max_events < 1:
            raise ValueError("max_events must be positive")
        self.max_events = max_events
        self._events = deque(maxlen=max_events)
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    async def insert(self, event: AccessEvent) -> AccessEvent:
        with self._lock:
            stored = replace(event, id=next(self._ids))
            self._events.append(stored)
        return stored

    async def recent(self, limit: int) -> List[AccessEvent]:
        with self._lock:
            newest_first = list(reversed(self._events))
        return newest_first[: max(limit, 0)]

    async def count_by_action(self, license_key: str, action: str) -> int:
        with self._lock:
            return sum(
                1
                for event in self._events
                if event.license_key == license_key and event.action == action
            )

    async def delete_by_action(self, license_key: str, action: str) -> int:
        with self._lock:
            kept = [
                event
                for event in self._events
                if not (event.license_key == license_key and event.action == action)
            ]
            deleted = len(self._events) - len(kept)
            self._events = deque(kept, maxlen=self.max_events)
        return deleted

    async def prune(self, keep: int) -> int:
        deleted = 0
        with self._lock:
            while len(self._events) > max(keep, 0):
                self._events.popleft()
                deleted += 1
        return deleted

    async def count(self) -> int:
        with self._lock:
            return len(self._events)
