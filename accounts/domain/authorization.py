"""
Authorization for the administrative surface.
"""

import logging
import secrets
from dataclasses import dataclass
from typing import Optional

from accounts.domain.services import AccountDirectory
from core.domain.exceptions import InvalidCredentialsError, UnauthorizedError
from core.domain.value_objects import Role

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AdminPrincipal:
    """Role granted to an administrative caller."""

    role: Role
    username: Optional[str] = None
    legacy: bool = False

    @property
    def actor(self) -> str:
        """Name recorded on audit events."""
        if self.legacy:
            return "legacy-admin"
        return self.username or str(self.role)


class AuthorizationGate:
    """
    Resolves an administrative role from caller credentials.

    Tried in order:
    1. the deprecated static secret, granting ``admin``
    2. account credentials whose role is ``admin`` or ``creator``

    Anything else is rejected with the same UnauthorizedError,
    whatever the reason.
    """

    def __init__(
        self,
        account_directory: AccountDirectory,
        legacy_admin_secret: Optional[str] = None,
    ):
        self.account_directory = account_directory
        self.legacy_admin_secret = legacy_admin_secret or None

    def _matches_legacy_secret(self, password: Optional[str]) -> bool:
        if not self.legacy_admin_secret or not password:
            return False
        return secrets.compare_digest(
            password.encode("utf-8"), self.legacy_admin_secret.encode("utf-8")
        )

    async def authorize(self, username: Optional[str], password: Optional[str]) -> AdminPrincipal:
        """
        Grant an administrative role or refuse.

        Args:
            username: Caller username (unused by the legacy secret)
            password: Caller password or legacy secret

        Returns:
            AdminPrincipal

        Raises:
            UnauthorizedError: If no administrative role can be granted
        """
        if self._matches_legacy_secret(password):
            logger.warning("Admin request authorized by deprecated static secret")
            return AdminPrincipal(role=Role.ADMIN, username=username or None, legacy=True)

        if not username or not password:
            raise UnauthorizedError()

        try:
            account = await self.account_directory.authenticate(
                username, password, record_login=False
            )
        except InvalidCredentialsError as exc:
            raise UnauthorizedError() from exc

        if not account.role.is_administrative:
            raise UnauthorizedError()
        return AdminPrincipal(role=account.role, username=account.username)
