"""
Database utilities and transaction management.
"""

import functools
import logging
from typing import Callable, TypeVar

from django.db import InterfaceError, OperationalError

from core.domain.exceptions import StoreUnavailableError

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable)


def translate_store_errors(func: F) -> F:
    """
    Translate connectivity and timeout failures into StoreUnavailableError.

    Integrity errors and other programming errors are left untouched so
    that adapters can map them to their own domain exceptions.

    Usage:
        @sync_to_async
        @translate_store_errors
        def find_by_key(self, key):
            ...
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except (OperationalError, InterfaceError) as exc:
            logger.error("Store operation %s failed: %s", func.__qualname__, exc, exc_info=True)
            raise StoreUnavailableError() from exc

    return wrapper  # type: ignore[return-value]
