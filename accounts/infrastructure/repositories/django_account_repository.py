"""
Django implementation of AccountRepository port.

This adapter converts between domain entities and Django ORM models.
"""
from datetime import datetime
from typing import List, Optional, Tuple

from asgiref.sync import sync_to_async
from django.db import IntegrityError, transaction

from accounts.domain.account import Account
from accounts.infrastructure.models import Account as AccountModel
from accounts.ports.account_repository import AccountRepository
from core.domain.exceptions import DuplicateUsernameError
from core.domain.value_objects import Role
from core.infrastructure.database import translate_store_errors


class DjangoAccountRepository(AccountRepository):
    """Django ORM implementation of AccountRepository."""

    def _to_domain(self, model: AccountModel) -> Account:
        """
        Convert Django model to domain entity.

        Args:
            model: Django Account model

        Returns:
            Account domain entity
        """
        return Account(
            username=model.username,
            password_hash=model.password,
            role=Role.parse(model.role),
            bound_license_key=model.bound_license_key,
            created_at=model.created_at,
            last_login_at=model.last_login_at,
        )

    def _to_fields(self, account: Account) -> dict:
        return {
            "password": account.password_hash,
            "role": account.role.value,
            "bound_license_key": account.bound_license_key,
            "created_at": account.created_at,
            "last_login_at": account.last_login_at,
        }

    @sync_to_async
    @translate_store_errors
    def insert(self, account: Account) -> Account:
        """
        Insert a new account, rejecting duplicate usernames.

        Args:
            account: Account entity to insert

        Returns:
            Stored account
        """
        try:
            with transaction.atomic():
                # pylint: disable=no-member
                model = AccountModel.objects.create(
                    username=account.username, **self._to_fields(account)
                )
        except IntegrityError as exc:
            raise DuplicateUsernameError() from exc
        return self._to_domain(model)

    @sync_to_async
    @translate_store_errors
    def insert_if_absent(self, account: Account) -> Tuple[Account, bool]:
        """
        Insert an account unless its username exists.

        Args:
            account: Account entity to insert

        Returns:
            Tuple of (stored or existing account, created flag)
        """
        # pylint: disable=no-member
        model, created = AccountModel.objects.get_or_create(
            username=account.username,
            defaults=self._to_fields(account),
        )
        return self._to_domain(model), created

    @sync_to_async
    @translate_store_errors
    def find_by_username(self, username: str) -> Optional[Account]:
        """
        Find an account by username.

        Args:
            username: Username

        Returns:
            Account entity or None if not found
        """
        try:
            model = AccountModel.objects.get(username=username)  # pylint: disable=no-member
            return self._to_domain(model)
        except AccountModel.DoesNotExist:  # pylint: disable=no-member
            return None

    @sync_to_async
    @translate_store_errors
    def update_role(
        self, username: str, role: Role, bound_license_key: Optional[str]
    ) -> bool:
        """
        Set role and bound key of an account.

        Args:
            username: Username
            role: New role
            bound_license_key: New bound key (None to clear)

        Returns:
            True if the account exists and was updated
        """
        # pylint: disable=no-member
        updated = AccountModel.objects.filter(username=username).update(
            role=role.value,
            bound_license_key=bound_license_key or None,
        )
        return updated > 0

    @sync_to_async
    @translate_store_errors
    def touch_last_login(self, username: str, logged_in_at: datetime) -> bool:
        """
        Stamp ``last_login_at``.

        Args:
            username: Username
            logged_in_at: Login time

        Returns:
            True if the account exists and was updated
        """
        # pylint: disable=no-member
        updated = AccountModel.objects.filter(username=username).update(
            last_login_at=logged_in_at
        )
        return updated > 0

    @sync_to_async
    @translate_store_errors
    def delete(self, username: str) -> bool:
        """
        Delete an account.

        Args:
            username: Username

        Returns:
            True if an account was deleted
        """
        # pylint: disable=no-member
        deleted, _ = AccountModel.objects.filter(username=username).delete()
        return deleted > 0

    @sync_to_async
    @translate_store_errors
    def list_all(self, include_creator: bool = False) -> List[Account]:
        """
        List accounts, newest first.

        Args:
            include_creator: Include creator accounts

        Returns:
            List of Account entities
        """
        queryset = AccountModel.objects.all()  # pylint: disable=no-member
        if not include_creator:
            queryset = queryset.exclude(role=Role.CREATOR.value)
        return [self._to_domain(model) for model in queryset.order_by("-created_at", "username")]
