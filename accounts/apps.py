"""
App configuration for accounts.
"""

import logging

from django.apps import AppConfig
from django.db.models.signals import post_migrate

logger = logging.getLogger(__name__)


def bootstrap_creator_account(sender, **kwargs):
    """Insert the creator account after migrations, if absent."""
    from asgiref.sync import async_to_sync

    from accounts.infrastructure.factory import build_account_directory

    async_to_sync(build_account_directory().bootstrap_creator)()


class AccountsConfig(AppConfig):
    """App configuration for accounts."""

    name = "accounts"
    verbose_name = "Accounts"

    def ready(self):
        """Connect the creator bootstrap to post_migrate."""
        post_migrate.connect(
            bootstrap_creator_account,
            sender=self,
            dispatch_uid="accounts.bootstrap_creator",
        )
