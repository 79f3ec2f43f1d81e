"""
Django management command to insert the creator account.

Safe to run repeatedly: an existing creator is never overwritten.
"""

from asgiref.sync import async_to_sync
from django.core.management.base import BaseCommand

from accounts.infrastructure.factory import build_account_directory


class Command(BaseCommand):
    """Command to bootstrap the creator account."""

    help = "Create the creator account if it does not exist"

    def handle(self, *args, **options):
        """Execute the command."""
        directory = build_account_directory()
        account, created = async_to_sync(directory.bootstrap_creator)()

        if created:
            # pylint: disable=no-member
            self.stdout.write(self.style.SUCCESS(f"Created creator account {account.username}"))
        elif account is not None:
            self.stdout.write(f"Creator account {account.username} already exists")
        else:
            # pylint: disable=no-member
            self.stdout.write(
                self.style.WARNING("CREATOR_PASSWORD is not set - no creator account created")
            )
