"""
Celery tasks for background processing.

Tasks for access log retention.
"""
import logging

from asgiref.sync import async_to_sync

from LicenseTrackerService.celery import app

logger = logging.getLogger(__name__)


@app.task(bind=True, max_retries=3)
def prune_access_log_task(self, keep=None):
    """
    Celery task enforcing the access log retention cap.

    Args:
        keep: Events to retain, ACCESS_LOG_MAX_EVENTS by default

    Returns:
        Number of deleted events
    """
    from access_logs.infrastructure.factory import build_access_log
    from core.domain.exceptions import StoreUnavailableError

    try:
        deleted = async_to_sync(build_access_log().enforce_retention)(keep)
    except StoreUnavailableError as exc:
        logger.warning("Access log pruning deferred: %s", exc.message)
        raise self.retry(exc=exc, countdown=2**self.request.retries * 30)

    logger.info("Access log pruning removed %s event(s)", deleted)
    return deleted
