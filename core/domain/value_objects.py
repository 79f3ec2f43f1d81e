"""
Value objects for the domain.

Value objects are immutable objects that are defined by their attributes
rather than their identity. They have no identity and are compared by value.
"""
from abc import ABC
from dataclasses import dataclass
from enum import Enum

MAX_ADDRESS_LENGTH = 45
LEGACY_OPERATOR_ROLE = "va"


@dataclass(frozen=True)
class ValueObject(ABC):
    """
    Base class for value objects.

    Value objects are immutable and compared by value.
    """

    def __eq__(self, other):
        """Compare value objects by their attributes."""
        if not isinstance(other, self.__class__):
            return False
        return self.__dict__ == other.__dict__

    def __hash__(self):
        """Make value objects hashable."""
        return hash(tuple(sorted(self.__dict__.items())))


@dataclass(frozen=True)
class NetworkAddress(ValueObject):
    """Network address reported by (or observed for) a client."""

    value: str

    def __post_init__(self):
        """Validate address."""
        if not self.value or len(self.value.strip()) == 0:
            raise ValueError("Network address cannot be empty")
        if len(self.value) > MAX_ADDRESS_LENGTH:
            raise ValueError("Network address too long")

    def __str__(self) -> str:
        """Return address as string."""
        return self.value


class Role(Enum):
    """Account role value object."""

    CREATOR = "creator"
    ADMIN = "admin"
    OPERATOR = "operator"

    def __str__(self) -> str:
        """Return role as string."""
        return self.value

    @classmethod
    def parse(cls, value: str) -> "Role":
        """
        Parse a role string.

        The legacy ``va`` value written by older deployments is read
        back as OPERATOR.

        Args:
            value: Role string

        Returns:
            Role member

        Raises:
            ValueError: If the value names no role
        """
        normalized = (value or "").strip().lower()
        if normalized == LEGACY_OPERATOR_ROLE:
            return cls.OPERATOR
        return cls(normalized)

    @property
    def is_administrative(self) -> bool:
        """Whether the role may use the admin surface."""
        return self in (Role.CREATOR, Role.ADMIN)


class AccessAction(Enum):
    """Kinds of events recorded in the access log."""

    VERIFY = "verify"
    HEARTBEAT = "heartbeat"
    CREATE = "create"
    TOGGLE = "toggle"
    DELETE = "delete"
    COMMENT_POSTED = "comment_posted"
    ACCOUNT_CREATED = "account_created"
    ACCOUNT_ROLE_UPDATED = "account_role_updated"
    ACCOUNT_DELETED = "account_deleted"

    def __str__(self) -> str:
        """Return action as string."""
        return self.value


class AccessStatus:
    """Common outcome tags for access events."""

    SUCCESS = "success"
    INVALID_KEY = "invalid_key"
    INACTIVE = "inactive"
    ACTIVATED = "activated"
    DEACTIVATED = "deactivated"
