"""
Account repository port (interface).

This defines the contract for account persistence operations.
Implementations are in the infrastructure layer.
"""
from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional, Tuple

from accounts.domain.account import Account
from core.domain.value_objects import Role


class AccountRepository(ABC):
    """
    Abstract repository for Account entities.

    Usernames are unique.
    """

    @abstractmethod
    async def insert(self, account: Account) -> Account:
        """
        Insert a new account.

        Args:
            account: Account entity to insert

        Returns:
            Stored account

        Raises:
            DuplicateUsernameError: If the username is taken
        """
        pass

    @abstractmethod
    async def insert_if_absent(self, account: Account) -> Tuple[Account, bool]:
        """
        Insert an account unless its username exists. Never overwrites.

        Args:
            account: Account entity to insert

        Returns:
            Tuple of (stored or existing account, created flag)
        """
        pass

    @abstractmethod
    async def find_by_username(self, username: str) -> Optional[Account]:
        """
        Find an account by username.

        Args:
            username: Username

        Returns:
            Account entity or None if not found
        """
        pass

    @abstractmethod
    async def update_role(
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
        pass

    @abstractmethod
    async def touch_last_login(self, username: str, logged_in_at: datetime) -> bool:
        """
        Stamp ``last_login_at``.

        Returns:
            True if the account exists and was updated
        """
        pass

    @abstractmethod
    async def delete(self, username: str) -> bool:
        """
        Delete an account.

        Returns:
            True if an account was deleted
        """
        pass

    @abstractmethod
    async def list_all(self, include_creator: bool = False) -> List[Account]:
        """
        List accounts, newest first.

        Args:
            include_creator: Include creator accounts

        Returns:
            List of Account entities
        """
        pass
