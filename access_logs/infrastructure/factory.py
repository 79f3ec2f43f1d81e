"""
Access journal wiring from Django settings.
"""
import functools
import logging

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

from access_logs.domain.services import DEFAULT_MAX_EVENTS, DEFAULT_RECENT_LIMIT, AccessLog
from access_logs.infrastructure.repositories.django_access_event_repository import (
    DjangoAccessEventRepository,
)
from access_logs.infrastructure.repositories.memory_access_event_repository import (
    BoundedMemoryAccessEventRepository,
)
from access_logs.ports.access_event_repository import AccessEventRepository

logger = logging.getLogger(__name__)

DATABASE_BACKEND = "database"
MEMORY_BACKEND = "memory"


@functools.lru_cache(maxsize=None)
def _memory_repository(max_events: int) -> BoundedMemoryAccessEventRepository:
    logger.info("Using bounded in-memory access log (max %s events)", max_events)
    return BoundedMemoryAccessEventRepository(max_events=max_events)


def build_access_event_repository() -> AccessEventRepository:
    """
    Build the repository named by ``settings.ACCESS_LOG_BACKEND``.

    The memory backend is one buffer per process.

    Returns:
        AccessEventRepository implementation

    Raises:
        ImproperlyConfigured: If the backend name is unknown
    """
    backend = getattr(settings, "ACCESS_LOG_BACKEND", DATABASE_BACKEND)
    if backend == DATABASE_BACKEND:
        return DjangoAccessEventRepository()
    if backend == MEMORY_BACKEND:
        return _memory_repository(getattr(settings, "ACCESS_LOG_MAX_EVENTS", DEFAULT_MAX_EVENTS))
    raise ImproperlyConfigured(f"Unknown ACCESS_LOG_BACKEND: {backend!r}")


def build_access_log() -> AccessLog:
    """Build the AccessLog service from settings."""
    return AccessLog(
        repository=build_access_event_repository(),
        max_events=getattr(settings, "ACCESS_LOG_MAX_EVENTS", DEFAULT_MAX_EVENTS),
        recent_limit=getattr(settings, "ACCESS_LOG_RECENT_LIMIT", DEFAULT_RECENT_LIMIT),
    )
