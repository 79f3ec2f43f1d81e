"""
Account domain events.

Domain events represent something that happened to an account.
"""

from dataclasses import dataclass
from typing import Optional

from core.domain.events import DomainEvent


@dataclass(frozen=True)
class AccountCreated(DomainEvent):
    """Event raised when an account is created."""

    role: str
    actor: Optional[str] = None


@dataclass(frozen=True)
class AccountRoleUpdated(DomainEvent):
    """Event raised when an account's role or bound key changes."""

    role: str
    actor: Optional[str] = None


@dataclass(frozen=True)
class AccountDeleted(DomainEvent):
    """Event raised when an account is deleted."""

    actor: Optional[str] = None
