"""
Account DTOs for API responses.
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from accounts.domain.account import Account


@dataclass
class AccountDTO:
    """DTO for account information. Never carries the password hash."""

    username: str
    role: str
    bound_license_key: Optional[str]
    created_at: datetime
    last_login_at: Optional[datetime]

    @classmethod
    def from_entity(cls, entity: Account) -> "AccountDTO":
        """Build DTO from an Account."""
        return cls(
            username=entity.username,
            role=entity.role.value,
            bound_license_key=entity.bound_license_key,
            created_at=entity.created_at,
            last_login_at=entity.last_login_at,
        )


@dataclass
class LoginResultDTO:
    """DTO for a successful login."""

    username: str
    role: str
    bound_license_key: Optional[str] = None


@dataclass
class KeyWithAccountsDTO:
    """DTO for a license key and the operator accounts bound to it."""

    license_key: str
    owner: str
    active: bool
    created_at: datetime
    comments_count: int
    accounts: List[AccountDTO] = field(default_factory=list)


@dataclass
class KeysWithAccountsDTO:
    """DTO for the keys-with-accounts overview."""

    keys_with_accounts: List[KeyWithAccountsDTO]
    admins_without_keys: List[AccountDTO]
