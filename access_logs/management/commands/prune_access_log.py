"""
Django management command to enforce access log retention.

This command should be run periodically (e.g., via cron or Celery beat).
"""

from asgiref.sync import async_to_sync
from django.core.management.base import BaseCommand, CommandError

from access_logs.infrastructure.factory import build_access_log


class Command(BaseCommand):
    """Command to delete all but the most recent access log events."""

    help = "Delete all but the most recent access log events"

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument(
            "--keep",
            type=int,
            default=None,
            help="Number of most recent events to keep (default: ACCESS_LOG_MAX_EVENTS)",
        )
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Dry run mode - report what would be deleted",
        )

    def handle(self, *args, **options):
        """Execute the command."""
        access_log = build_access_log()
        keep = options["keep"] if options["keep"] is not None else access_log.max_events
        if keep < 0:
            raise CommandError("--keep must not be negative")

        total = async_to_sync(access_log.size)()
        excess = max(total - keep, 0)
        self.stdout.write(f"Found {total} event(s), keeping {keep}")

        if options["dry_run"]:
            # pylint: disable=no-member
            self.stdout.write(self.style.WARNING("DRY RUN - No changes will be made"))
            self.stdout.write(f"Would delete {excess} event(s)")
            return

        deleted = async_to_sync(access_log.enforce_retention)(keep)
        # pylint: disable=no-member
        self.stdout.write(self.style.SUCCESS(f"Deleted {deleted} event(s)"))
