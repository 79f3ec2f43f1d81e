"""
App configuration for License Tracker Service.
"""

import logging
import os
import sys

from django.apps import AppConfig
from django.conf import settings

logger = logging.getLogger(__name__)

SKIP_SETUP_COMMANDS = {
    "migrate",
    "makemigrations",
    "collectstatic",
    "shell",
    "test",
    "check",
    "bootstrap_creator",
    "prune_access_log",
}


class LicenseTrackerServiceConfig(AppConfig):
    """App configuration for LicenseTrackerService."""

    name = "LicenseTrackerService"
    verbose_name = "License Tracker Service"

    def ready(self):
        """Register event handlers and, when serving, set up tracing."""
        from core.infrastructure.event_handlers import register_event_handlers

        register_event_handlers()

        if not getattr(settings, "OBSERVABILITY_ENABLED", True):
            return
        if len(sys.argv) > 1 and sys.argv[1] in SKIP_SETUP_COMMANDS:
            return
        # Django's reloader runs code twice; RUN_MAIN="false" is the watcher
        if os.environ.get("RUN_MAIN") == "false":
            return
        if getattr(self, "_initialized", False):
            return

        from core.instrumentation import setup_opentelemetry

        logger.info("Setting up observability...")
        setup_opentelemetry()
        self._initialized = True
        logger.info("Observability setup complete")
