"""
Account domain services.

Domain services contain business logic that doesn't naturally
fit within a single entity.
"""

import logging
from datetime import datetime
from typing import Callable, List, Optional, Tuple

from django.contrib.auth.hashers import make_password

from access_logs.domain.services import AccessLog
from accounts.domain.account import MAX_USERNAME_LENGTH, Account
from accounts.ports.account_repository import AccountRepository
from core.domain.events import utc_now
from core.domain.exceptions import (
    AccountNotFoundError,
    ForbiddenError,
    InvalidCredentialsError,
    ValidationError,
)
from core.domain.value_objects import AccessAction, AccessStatus, Role
from licenses.ports.license_key_repository import LicenseKeyRepository

logger = logging.getLogger(__name__)

DEFAULT_CREATOR_USERNAME = "creator"


class AccountDirectory:
    """
    Domain service over role-tagged accounts.

    Exactly one creator account exists. It is inserted by
    ``bootstrap_creator`` and can never be deleted, demoted or re-created.
    """

    def __init__(
        self,
        repository: AccountRepository,
        license_key_repository: LicenseKeyRepository,
        access_log: AccessLog,
        creator_username: str = DEFAULT_CREATOR_USERNAME,
        creator_password: Optional[str] = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        """Initialize directory with its collaborators."""
        self.repository = repository
        self.license_key_repository = license_key_repository
        self.access_log = access_log
        self.creator_username = creator_username
        self.creator_password = creator_password
        self.clock = clock

    async def authenticate(
        self, username: str, password: str, record_login: bool = True
    ) -> Account:
        """
        Authenticate a username/password pair.

        Args:
            username: Username
            password: Raw password
            record_login: Stamp ``last_login_at`` on success

        Returns:
            The authenticated Account

        Raises:
            InvalidCredentialsError: If the pair does not match an account
        """
        account = await self.repository.find_by_username(username) if username else None
        if account is None:
            # Hash anyway so unknown usernames cost as much as wrong passwords
            make_password(password)
            raise InvalidCredentialsError()
        if not account.check_password(password):
            raise InvalidCredentialsError()

        if record_login:
            now = self.clock()
            await self.repository.touch_last_login(account.username, now)
            account = account.logged_in(now)
        return account

    async def create(
        self,
        username: str,
        password: str,
        role: str,
        bound_license_key: Optional[str] = None,
    ) -> Account:
        """
        Create an admin or operator account.

        Args:
            username: Unique username
            password: Raw password
            role: Role name (``admin``, ``operator`` or legacy ``va``)
            bound_license_key: Existing key, required for operators only

        Returns:
            The stored Account

        Raises:
            ValidationError: If input or the role/key combination is invalid
            DuplicateUsernameError: If the username is taken
        """
        username = (username or "").strip()
        if not username:
            raise ValidationError("Username is required")
        if len(username) > MAX_USERNAME_LENGTH:
            raise ValidationError(f"Username must be at most {MAX_USERNAME_LENGTH} characters")
        if not password:
            raise ValidationError("Password is required")

        parsed_role = self._parse_role(role)
        if parsed_role == Role.CREATOR:
            raise ValidationError("The creator account cannot be created")
        bound_license_key = await self._validate_binding(parsed_role, bound_license_key)

        account = await self.repository.insert(
            Account.create(
                username=username,
                password=password,
                role=parsed_role,
                bound_license_key=bound_license_key,
                now=self.clock(),
            )
        )
        await self.access_log.append(
            bound_license_key, AccessAction.ACCOUNT_CREATED, AccessStatus.SUCCESS
        )
        logger.info("Created %s account %s", parsed_role, username)
        return account

    async def update_role(
        self,
        username: str,
        new_role: str,
        new_license_key: Optional[str] = None,
    ) -> Account:
        """
        Change the role (and bound key) of an account.

        Raises:
            ForbiddenError: If the target is the creator or the new role is creator
            ValidationError: If the role/key combination is invalid
            AccountNotFoundError: If the account does not exist
        """
        self._guard_creator(username)
        parsed_role = self._parse_role(new_role)
        if parsed_role == Role.CREATOR:
            raise ForbiddenError("Cannot grant the creator role")
        new_license_key = await self._validate_binding(parsed_role, new_license_key)

        account = await self.repository.find_by_username(username) if username else None
        if account is None:
            raise AccountNotFoundError()
        if account.is_creator:
            raise ForbiddenError("Cannot modify the creator account")

        if not await self.repository.update_role(username, parsed_role, new_license_key):
            raise AccountNotFoundError()

        await self.access_log.append(
            new_license_key, AccessAction.ACCOUNT_ROLE_UPDATED, AccessStatus.SUCCESS
        )
        logger.info("Account %s is now %s", username, parsed_role)
        return account.with_role(parsed_role, new_license_key)

    async def delete(self, username: str) -> None:
        """
        Delete an account.

        Raises:
            ForbiddenError: If the target is the creator
            AccountNotFoundError: If the account does not exist
        """
        self._guard_creator(username)
        account = await self.repository.find_by_username(username) if username else None
        if account is None:
            raise AccountNotFoundError()
        if account.is_creator:
            raise ForbiddenError("Cannot delete the creator account")

        if not await self.repository.delete(username):
            raise AccountNotFoundError()

        await self.access_log.append(
            account.bound_license_key, AccessAction.ACCOUNT_DELETED, AccessStatus.SUCCESS
        )
        logger.info("Deleted account %s", username)

    async def bootstrap_creator(self) -> Tuple[Optional[Account], bool]:
        """
        Insert the creator account if it is absent.

        An existing creator is never overwritten.

        Returns:
            Tuple of (creator account or None, created flag)
        """
        if not self.creator_password:
            existing = await self.repository.find_by_username(self.creator_username)
            if existing is None:
                logger.warning("No creator password configured; creator account not created")
            return existing, False

        account, created = await self.repository.insert_if_absent(
            Account.create(
                username=self.creator_username,
                password=self.creator_password,
                role=Role.CREATOR,
                now=self.clock(),
            )
        )
        if created:
            logger.info("Bootstrapped creator account %s", self.creator_username)
        return account, created

    async def get(self, username: str) -> Account:
        """
        Get an account.

        Raises:
            AccountNotFoundError: If the account does not exist
        """
        account = await self.repository.find_by_username(username) if username else None
        if account is None:
            raise AccountNotFoundError()
        return account

    async def list_accounts(self, include_creator: bool = False) -> List[Account]:
        """List accounts newest first, without the creator by default."""
        return await self.repository.list_all(include_creator=include_creator)

    def _guard_creator(self, username: str) -> None:
        if username and username.strip() == self.creator_username:
            raise ForbiddenError("Cannot modify the creator account")

    @staticmethod
    def _parse_role(role: str) -> Role:
        try:
            return Role.parse(role)
        except ValueError as exc:
            raise ValidationError(f"Invalid role: {role}") from exc

    async def _validate_binding(self, role: Role, license_key: Optional[str]) -> Optional[str]:
        license_key = (license_key or "").strip() or None
        if role == Role.OPERATOR:
            if not license_key:
                raise ValidationError("Operator accounts require a license key")
            if not await self.license_key_repository.exists(license_key):
                raise ValidationError("License key does not exist")
        elif license_key:
            raise ValidationError("Only operator accounts can be bound to a license key")
        return license_key
