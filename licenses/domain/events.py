"""
License key domain events.

Domain events represent something that happened to a license key.
"""

from dataclasses import dataclass
from typing import Optional

from core.domain.events import DomainEvent


@dataclass(frozen=True)
class LicenseKeyCreated(DomainEvent):
    """Event raised when a license key is issued."""

    owner: str
    actor: Optional[str] = None


@dataclass(frozen=True)
class LicenseKeyToggled(DomainEvent):
    """Event raised when a license key is activated or deactivated."""

    active: bool
    actor: Optional[str] = None


@dataclass(frozen=True)
class LicenseKeyDeleted(DomainEvent):
    """Event raised when a license key is deleted."""

    actor: Optional[str] = None


@dataclass(frozen=True)
class CommentsReset(DomainEvent):
    """Event raised when the comment counter of a key is reset."""

    deleted_count: int
    actor: Optional[str] = None
