"""
Account domain entity.

This is the core domain entity representing a role-tagged account,
optionally bound to one license key.
"""

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional

from django.contrib.auth.hashers import check_password, make_password

from core.domain.events import utc_now
from core.domain.value_objects import Role

MAX_USERNAME_LENGTH = 150


@dataclass(frozen=True)
class Account:
    """
    Account domain entity.

    ``bound_license_key`` is present exactly when the role is OPERATOR.
    The password is held only as a Django password hash.
    """

    username: str
    password_hash: str
    role: Role
    created_at: datetime
    bound_license_key: Optional[str] = None
    last_login_at: Optional[datetime] = None

    def __post_init__(self):
        """Validate account entity."""
        if not self.username or len(self.username.strip()) == 0:
            raise ValueError("Username cannot be empty")
        if len(self.username) > MAX_USERNAME_LENGTH:
            raise ValueError("Username too long")
        if not self.password_hash:
            raise ValueError("Password hash is required")
        if self.role == Role.OPERATOR and not self.bound_license_key:
            raise ValueError("Operator accounts must be bound to a license key")
        if self.role != Role.OPERATOR and self.bound_license_key:
            raise ValueError("Only operator accounts can be bound to a license key")

    @classmethod
    def create(
        cls,
        username: str,
        password: str,
        role: Role,
        bound_license_key: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> "Account":
        """
        Create a new Account entity, hashing the raw password.

        Args:
            username: Unique username
            password: Raw password
            role: Account role
            bound_license_key: License key for operator accounts
            now: Optional creation time

        Returns:
            Account entity instance
        """
        if not password:
            raise ValueError("Password cannot be empty")
        return cls(
            username=username.strip(),
            password_hash=make_password(password),
            role=role,
            bound_license_key=bound_license_key or None,
            created_at=now or utc_now(),
        )

    def check_password(self, password: str) -> bool:
        """Check a raw password against the stored hash."""
        if not password:
            return False
        return check_password(password, self.password_hash)

    @property
    def is_creator(self) -> bool:
        """Whether this is the protected creator account."""
        return self.role == Role.CREATOR

    def with_role(self, role: Role, bound_license_key: Optional[str] = None) -> "Account":
        """Return a copy with a new role and binding."""
        return replace(self, role=role, bound_license_key=bound_license_key or None)

    def logged_in(self, now: datetime) -> "Account":
        """Return a copy stamped with a successful login."""
        return replace(self, last_login_at=now)
